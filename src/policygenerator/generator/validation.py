# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Validation of a defaulted generator configuration."""

from __future__ import annotations

import os

from .config import GeneratorConfig, PolicyConfig
from .errors import ConfigError


def _validate_policy(policy: PolicyConfig, seen: set[str]) -> None:
    placement = policy.placement
    if placement.cluster_selectors and placement.placement_rule_path:
        raise ConfigError(
            "a policy may not specify placement.clusterSelectors and placement.placementRulePath together"
        )

    if not policy.manifests:
        raise ConfigError("each policy must have at least one manifest")

    for manifest in policy.manifests:
        if not manifest.path:
            raise ConfigError("each policy manifest entry must have path set")
        if not os.path.exists(manifest.path):
            raise ConfigError(f"could not read the manifest path {manifest.path}")

    if not policy.name:
        raise ConfigError("each policy must have a name set")

    if policy.name in seen:
        raise ConfigError(f"each policy must have a unique name set: {policy.name}")

    if placement.placement_rule_path and not os.path.exists(placement.placement_rule_path):
        raise ConfigError(f"could not read the placement rule path {placement.placement_rule_path}")


def validate_config(config: GeneratorConfig) -> None:
    """
    Check that ``config`` holds every required field.

    Must run after apply_defaults. The first violated rule is raised.

    Raises:
        ConfigError: On the first rule the configuration breaks.
    """
    if not config.binding_default_name and len(config.policies) > 1:
        raise ConfigError("placementBindingDefaults.name must be set when there are multiple policies")

    if not config.policy_defaults.namespace:
        raise ConfigError("policyDefaults.namespace is empty but it must be set")

    if not config.policies:
        raise ConfigError("policies is empty but it must be set")

    seen: set[str] = set()
    for policy in config.policies:
        _validate_policy(policy, seen)
        seen.add(policy.name)
