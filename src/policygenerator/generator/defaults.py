# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Default cascade: built-in values -> policyDefaults -> per-policy settings."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Optional

from .config import GeneratorConfig, Placement, PolicyConfig, PolicyDefaults
from .constants import (
    BINDING_NAME_PREFIX,
    DEFAULT_CATEGORIES,
    DEFAULT_COMPLIANCE_TYPE,
    DEFAULT_CONTROLS,
    DEFAULT_REMEDIATION_ACTION,
    DEFAULT_SEVERITY,
    DEFAULT_STANDARDS,
)

# Fields shared by PolicyDefaults and PolicyConfig that fall back one level up.
# List fields are unset only when None; string fields when empty.
_LIST_FIELDS = ("categories", "controls", "standards")
_STRING_FIELDS = ("compliance_type", "remediation_action", "severity")

BUILTIN_DEFAULTS: dict[str, Any] = {
    "categories": DEFAULT_CATEGORIES,
    "compliance_type": DEFAULT_COMPLIANCE_TYPE,
    "controls": DEFAULT_CONTROLS,
    "remediation_action": DEFAULT_REMEDIATION_ACTION,
    "severity": DEFAULT_SEVERITY,
    "standards": DEFAULT_STANDARDS,
}


def _is_unset(name: str, value: Any) -> bool:
    if name in _LIST_FIELDS:
        return value is None
    return not value


def _fill(target: Any, fallback: dict[str, Any]) -> dict[str, Any]:
    changes: dict[str, Any] = {}
    for name in _LIST_FIELDS + _STRING_FIELDS:
        if _is_unset(name, getattr(target, name)):
            value = fallback[name]
            changes[name] = list(value) if isinstance(value, list) else value
    return changes


def _default_placement(placement: Placement, defaults: Placement) -> Optional[Placement]:
    if placement.cluster_selectors or placement.placement_rule_path:
        return None
    if defaults.placement_rule_path:
        return Placement(placement_rule_path=defaults.placement_rule_path)
    if defaults.cluster_selectors:
        return Placement(cluster_selectors=dict(defaults.cluster_selectors))
    return None


def apply_policy_defaults(defaults: PolicyDefaults) -> PolicyDefaults:
    """Return ``defaults`` with every unset field set to its built-in value."""
    return replace(defaults, **_fill(defaults, BUILTIN_DEFAULTS))


def default_policy(policy: PolicyConfig, defaults: PolicyDefaults) -> PolicyConfig:
    """
    Return ``policy`` with unset fields taken from already-defaulted ``defaults``.

    Placement is inherited only when the policy sets neither cluster selectors
    nor a placement rule path, preferring the default placement rule path. The
    namespace selector is inherited only when both include and exclude are unset.
    """
    fallback = {name: getattr(defaults, name) for name in _LIST_FIELDS + _STRING_FIELDS}
    changes = _fill(policy, fallback)

    placement = _default_placement(policy.placement, defaults.placement)
    if placement is not None:
        changes["placement"] = placement

    if policy.namespace_selector.is_unset():
        changes["namespace_selector"] = replace(defaults.namespace_selector)

    return replace(policy, **changes)


def apply_defaults(config: GeneratorConfig) -> GeneratorConfig:
    """
    Produce a fully defaulted copy of ``config``; the input is left untouched.

    Missing required values are not reported here; validate_config catches them.
    """
    binding_name = config.binding_default_name
    if not binding_name and len(config.policies) == 1:
        binding_name = BINDING_NAME_PREFIX + config.policies[0].name

    defaults = apply_policy_defaults(config.policy_defaults)
    return replace(
        config,
        binding_default_name=binding_name,
        policy_defaults=defaults,
        policies=[default_policy(policy, defaults) for policy in config.policies],
    )
