# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Placement rule resolution.

A policy either points at a PlacementRule stored in a file, which is reused as
is and emitted once no matter how many policies share it, or gets a
PlacementRule synthesized from its cluster selectors.
"""

from __future__ import annotations

import logging
from collections.abc import Container
from typing import Any, Optional

from .config import PolicyConfig
from .constants import CLUSTER_CONDITIONS, PLACEMENT_NAME_PREFIX, PLACEMENT_RULE_API_VERSION, PLACEMENT_RULE_KIND
from .errors import ConfigError
from .manifests import load_manifest_file
from .utils import nested_string

logger = logging.getLogger(__name__)


def build_placement_rule(name: str, namespace: str, cluster_selectors: dict[str, str]) -> dict[str, Any]:
    """Synthesize a PlacementRule matching every label in ``cluster_selectors``."""
    match_expressions = [
        {"key": label, "operator": "In", "values": [cluster_selectors[label]]} for label in sorted(cluster_selectors)
    ]
    return {
        "apiVersion": PLACEMENT_RULE_API_VERSION,
        "kind": PLACEMENT_RULE_KIND,
        "metadata": {"name": name, "namespace": namespace},
        "spec": {
            "clusterConditions": [dict(condition) for condition in CLUSTER_CONDITIONS],
            "clusterSelector": {"matchExpressions": match_expressions},
        },
    }


def load_placement_rule(path: str, namespace: str) -> tuple[str, dict[str, Any]]:
    """
    Find the first PlacementRule in ``path`` and return its name and document.

    Raises:
        ConfigError: If the file has no PlacementRule, or the rule lacks a name
            or namespace, or lives in a namespace other than ``namespace``.
    """
    for manifest in load_manifest_file(path):
        if manifest.get("kind") != PLACEMENT_RULE_KIND:
            continue

        name = nested_string(manifest, "metadata", "name")
        if not name:
            raise ConfigError(f"the placement {path} must have a name set")

        rule_namespace = nested_string(manifest, "metadata", "namespace")
        if rule_namespace is None:
            raise ConfigError(f"the placement {path} must have a namespace set")

        if rule_namespace != namespace:
            raise ConfigError(f"the placement {path} must have the same namespace as the policy ({namespace})")

        return name, manifest

    raise ConfigError(f"the placement manifest {path} did not have a placement rule")


def resolve_placement(
    policy: PolicyConfig, namespace: str, emitted: Container[str]
) -> tuple[str, Optional[dict[str, Any]]]:
    """
    Resolve the PlacementRule a policy is bound to.

    Args:
        policy: Defaulted policy.
        namespace: Namespace of the generated objects.
        emitted: Names of placement rules already written to the output.

    Returns:
        The placement rule name and the document to emit, or None when a rule
        loaded from a file was already emitted for an earlier policy.
    """
    rule_path = policy.placement.placement_rule_path
    if rule_path:
        name, rule = load_placement_rule(rule_path, namespace)
        if name in emitted:
            logger.debug("Placement rule %s already emitted, reusing it for %s", name, policy.name)
            return name, None
        return name, rule

    name = PLACEMENT_NAME_PREFIX + policy.name
    return name, build_placement_rule(name, namespace, policy.placement.cluster_selectors)
