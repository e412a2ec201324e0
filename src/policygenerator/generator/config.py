# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Typed model of the generator configuration.

List fields use ``None`` for "not set" so the defaulting step can tell an
omitted value apart from an explicitly empty list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

import yaml

from .errors import FormatError
from .utils import coerce_bool, load_yaml, scalar_text


@dataclass
class Manifest:
    path: str = ""


@dataclass
class NamespaceSelector:
    include: Optional[list[str]] = None
    exclude: Optional[list[str]] = None

    def is_unset(self) -> bool:
        return self.include is None and self.exclude is None


@dataclass
class Placement:
    cluster_selectors: dict[str, str] = field(default_factory=dict)
    placement_rule_path: str = ""


@dataclass
class PolicyDefaults:
    categories: Optional[list[str]] = None
    compliance_type: str = ""
    controls: Optional[list[str]] = None
    namespace: str = ""
    namespace_selector: NamespaceSelector = field(default_factory=NamespaceSelector)
    placement: Placement = field(default_factory=Placement)
    remediation_action: str = ""
    severity: str = ""
    standards: Optional[list[str]] = None


@dataclass
class PolicyConfig:
    name: str = ""
    manifests: list[Manifest] = field(default_factory=list)
    categories: Optional[list[str]] = None
    compliance_type: str = ""
    controls: Optional[list[str]] = None
    disabled: bool = False
    namespace_selector: NamespaceSelector = field(default_factory=NamespaceSelector)
    placement: Placement = field(default_factory=Placement)
    remediation_action: str = ""
    severity: str = ""
    standards: Optional[list[str]] = None


@dataclass
class GeneratorConfig:
    """
    Generator configuration.
    """

    name: str = ""  # metadata.name of the generator manifest
    binding_default_name: str = ""
    policy_defaults: PolicyDefaults = field(default_factory=PolicyDefaults)
    policies: list[PolicyConfig] = field(default_factory=list)


def _mapping(value: Any, key: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise FormatError(f"{key} must be a YAML mapping")
    return value


def _string(value: Any, key: str) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise FormatError(f"{key} must be a string")
    return scalar_text(value)


def _string_list(value: Any, key: str) -> Optional[list[str]]:
    if value is None:
        return None
    if not isinstance(value, list):
        raise FormatError(f"{key} must be a list of strings")
    items: list[str] = []
    for item in value:
        if isinstance(item, (dict, list)) or item is None:
            raise FormatError(f"{key} must be a list of strings")
        items.append(scalar_text(item))
    return items


def _bool(value: Any, key: str) -> bool:
    if value is None:
        return False
    coerced = coerce_bool(value)
    if coerced is None:
        raise FormatError(f"{key} must be a boolean")
    return coerced


def _namespace_selector(value: Any, key: str) -> NamespaceSelector:
    raw = _mapping(value, key)
    return NamespaceSelector(
        include=_string_list(raw.get("include"), f"{key}.include"),
        exclude=_string_list(raw.get("exclude"), f"{key}.exclude"),
    )


def _placement(value: Any, key: str) -> Placement:
    raw = _mapping(value, key)
    selectors = _mapping(raw.get("clusterSelectors"), f"{key}.clusterSelectors")
    return Placement(
        cluster_selectors={
            scalar_text(label): _string(selector, f"{key}.clusterSelectors.{label}")
            for label, selector in selectors.items()
        },
        placement_rule_path=_string(raw.get("placementRulePath"), f"{key}.placementRulePath"),
    )


def _manifests(value: Any, key: str) -> list[Manifest]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise FormatError(f"{key} must be a list")
    manifests = []
    for idx, entry in enumerate(value):
        raw = _mapping(entry, f"{key}[{idx}]")
        manifests.append(Manifest(path=_string(raw.get("path"), f"{key}[{idx}].path")))
    return manifests


def _policy_defaults(value: Any) -> PolicyDefaults:
    raw = _mapping(value, "policyDefaults")
    return PolicyDefaults(
        categories=_string_list(raw.get("categories"), "policyDefaults.categories"),
        compliance_type=_string(raw.get("complianceType"), "policyDefaults.complianceType"),
        controls=_string_list(raw.get("controls"), "policyDefaults.controls"),
        namespace=_string(raw.get("namespace"), "policyDefaults.namespace"),
        namespace_selector=_namespace_selector(raw.get("namespaceSelector"), "policyDefaults.namespaceSelector"),
        placement=_placement(raw.get("placement"), "policyDefaults.placement"),
        remediation_action=_string(raw.get("remediationAction"), "policyDefaults.remediationAction"),
        severity=_string(raw.get("severity"), "policyDefaults.severity"),
        standards=_string_list(raw.get("standards"), "policyDefaults.standards"),
    )


def _policy(value: Any, idx: int) -> PolicyConfig:
    key = f"policies[{idx}]"
    raw = _mapping(value, key)
    return PolicyConfig(
        name=_string(raw.get("name"), f"{key}.name"),
        manifests=_manifests(raw.get("manifests"), f"{key}.manifests"),
        categories=_string_list(raw.get("categories"), f"{key}.categories"),
        compliance_type=_string(raw.get("complianceType"), f"{key}.complianceType"),
        controls=_string_list(raw.get("controls"), f"{key}.controls"),
        disabled=_bool(raw.get("disabled"), f"{key}.disabled"),
        namespace_selector=_namespace_selector(raw.get("namespaceSelector"), f"{key}.namespaceSelector"),
        placement=_placement(raw.get("placement"), f"{key}.placement"),
        remediation_action=_string(raw.get("remediationAction"), f"{key}.remediationAction"),
        severity=_string(raw.get("severity"), f"{key}.severity"),
        standards=_string_list(raw.get("standards"), f"{key}.standards"),
    )


def config_from_dict(payload: dict[str, Any]) -> GeneratorConfig:
    """Build a GeneratorConfig from an already decoded YAML mapping."""
    metadata = _mapping(payload.get("metadata"), "metadata")
    binding_defaults = _mapping(payload.get("placementBindingDefaults"), "placementBindingDefaults")
    raw_policies = payload.get("policies")
    if raw_policies is None:
        raw_policies = []
    if not isinstance(raw_policies, list):
        raise FormatError("policies must be a list")
    return GeneratorConfig(
        name=_string(metadata.get("name"), "metadata.name"),
        binding_default_name=_string(binding_defaults.get("name"), "placementBindingDefaults.name"),
        policy_defaults=_policy_defaults(payload.get("policyDefaults")),
        policies=[_policy(entry, idx) for idx, entry in enumerate(raw_policies)],
    )


def parse_config(data: bytes | str) -> GeneratorConfig:
    """
    Decode generator config bytes into a GeneratorConfig.

    Raises:
        FormatError: If the input is not YAML or not shaped like a generator config.
    """
    try:
        payload = load_yaml(data)
    except yaml.YAMLError as exc:
        raise FormatError(f"failed to decode the generator config: {exc}") from exc
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise FormatError("the generator config must be a YAML mapping")
    return config_from_dict(payload)
