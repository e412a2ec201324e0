# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Global pytest configuration and fixtures.

Fixtures here write manifests and generator configs into ``tmp_path`` so tests
exercise the real filesystem code paths.
"""

import copy
from pathlib import Path
from typing import Any

import pytest
import yaml

_CONFIGMAP = {
    "apiVersion": "v1",
    "kind": "ConfigMap",
    "metadata": {"name": "my-configmap"},
    "data": {"game.properties": "enemies=potato"},
}


def _write_yaml(path: Path, *documents: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump_all(documents, sort_keys=False), encoding="utf-8")
    return path


@pytest.fixture
def write_yaml():
    """Write documents as a multi-document YAML file and return its path."""
    return _write_yaml


@pytest.fixture
def configmap() -> dict[str, Any]:
    return copy.deepcopy(_CONFIGMAP)


@pytest.fixture
def configmap_path(tmp_path: Path) -> Path:
    return _write_yaml(tmp_path / "configmap.yaml", _CONFIGMAP)


@pytest.fixture
def placement_rule():
    """Factory for PlacementRule manifests."""

    def _factory(name: str | None = "my-plr", namespace: str | None = "my-policies") -> dict[str, Any]:
        metadata = {}
        if name is not None:
            metadata["name"] = name
        if namespace is not None:
            metadata["namespace"] = namespace
        return {
            "apiVersion": "apps.open-cluster-management.io/v1",
            "kind": "PlacementRule",
            "metadata": metadata,
            "spec": {
                "clusterConditions": [{"status": "True", "type": "ManagedClusterConditionAvailable"}],
                "clusterSelector": {"matchExpressions": [{"key": "game", "operator": "In", "values": ["pacman"]}]},
            },
        }

    return _factory


@pytest.fixture
def config_factory(configmap_path: Path):
    """Factory building a raw generator config mapping with one policy per name."""

    def _factory(*names: str, namespace: str = "my-policies", **top_level: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "policyDefaults": {"namespace": namespace},
            "policies": [{"name": name, "manifests": [{"path": str(configmap_path)}]} for name in names],
        }
        payload.update(top_level)
        return payload

    return _factory
