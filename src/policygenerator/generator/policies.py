# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Construction of Policy documents wrapping a ConfigurationPolicy."""

from __future__ import annotations

import logging
from typing import Any

from .config import NamespaceSelector, PolicyConfig
from .constants import ANNOTATION_PREFIX, CONFIG_POLICY_KIND, POLICY_API_VERSION, POLICY_KIND
from .errors import ConfigError
from .manifests import expand_manifest_path, load_manifest_file
from .utils import join_values

logger = logging.getLogger(__name__)


def _object_template(document: dict[str, Any], compliance_type: str) -> dict[str, Any]:
    # Documents that are already object-templates keep their own complianceType.
    if isinstance(document.get("objectDefinition"), dict):
        template = dict(document)
        if not template.get("complianceType"):
            template["complianceType"] = compliance_type
        return template
    return {"complianceType": compliance_type, "objectDefinition": document}


def build_object_templates(policy: PolicyConfig) -> list[dict[str, Any]]:
    """Load every manifest referenced by ``policy`` and wrap each document."""
    templates: list[dict[str, Any]] = []
    for manifest in policy.manifests:
        for manifest_path in expand_manifest_path(manifest.path):
            documents = load_manifest_file(manifest_path)
            if not documents:
                logger.debug("Skipping empty manifest file %s", manifest_path)
                continue
            templates.extend(_object_template(doc, policy.compliance_type) for doc in documents)

    if not templates:
        raise ConfigError(f"the policy {policy.name} must specify at least one non-empty manifest file")
    return templates


def _namespace_selector(selector: NamespaceSelector) -> dict[str, list[str]]:
    rendered: dict[str, list[str]] = {}
    if selector.exclude:
        rendered["exclude"] = list(selector.exclude)
    if selector.include:
        rendered["include"] = list(selector.include)
    return rendered


def build_policy_document(policy: PolicyConfig, namespace: str) -> dict[str, Any]:
    """
    Build the Policy manifest for one defaulted policy.

    Args:
        policy: Policy whose fields have been through apply_defaults.
        namespace: Namespace of every generated object.

    Returns:
        The Policy document as a plain mapping.

    Raises:
        ConfigError: If the manifests yield no documents at all.
        ReadError, FormatError: If a manifest cannot be loaded.
    """
    config_policy_spec: dict[str, Any] = {
        "object-templates": build_object_templates(policy),
        "remediationAction": policy.remediation_action,
        "severity": policy.severity,
    }
    namespace_selector = _namespace_selector(policy.namespace_selector)
    if namespace_selector:
        config_policy_spec["namespaceSelector"] = namespace_selector

    policy_template = {
        "objectDefinition": {
            "apiVersion": POLICY_API_VERSION,
            "kind": CONFIG_POLICY_KIND,
            "metadata": {"name": policy.name},
            "spec": config_policy_spec,
        }
    }

    return {
        "apiVersion": POLICY_API_VERSION,
        "kind": POLICY_KIND,
        "metadata": {
            "annotations": {
                ANNOTATION_PREFIX + "categories": join_values(policy.categories),
                ANNOTATION_PREFIX + "controls": join_values(policy.controls),
                ANNOTATION_PREFIX + "standards": join_values(policy.standards),
            },
            "name": policy.name,
            "namespace": namespace,
        },
        "spec": {
            "disabled": policy.disabled,
            "policy-templates": [policy_template],
            "remediationAction": policy.remediation_action,
        },
    }
