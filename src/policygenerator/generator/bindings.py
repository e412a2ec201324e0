# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Any

from .config import PolicyConfig
from .constants import (
    PLACEMENT_BINDING_API_VERSION,
    PLACEMENT_BINDING_KIND,
    PLACEMENT_RULE_API_VERSION,
    PLACEMENT_RULE_KIND,
    POLICY_API_VERSION,
    POLICY_KIND,
)


def group_policies_by_placement(placement_names: list[str]) -> dict[str, list[int]]:
    """Map each placement name to the policy indices bound to it, in first-seen order."""
    groups: dict[str, list[int]] = {}
    for idx, name in enumerate(placement_names):
        groups.setdefault(name, []).append(idx)
    return groups


def binding_name(base: str, position: int) -> str:
    """Name of the binding at 1-based ``position``: ``base``, ``base2``, ``base3``..."""
    if position == 1:
        return base
    return f"{base}{position}"


def build_binding_document(
    name: str, namespace: str, placement_name: str, policies: list[PolicyConfig]
) -> dict[str, Any]:
    subjects = [{"apiGroup": POLICY_API_VERSION, "kind": POLICY_KIND, "name": policy.name} for policy in policies]
    return {
        "apiVersion": PLACEMENT_BINDING_API_VERSION,
        "kind": PLACEMENT_BINDING_KIND,
        "metadata": {"name": name, "namespace": namespace},
        "placementRef": {
            "apiGroup": PLACEMENT_RULE_API_VERSION,
            "kind": PLACEMENT_RULE_KIND,
            "name": placement_name,
        },
        "subjects": subjects,
    }
