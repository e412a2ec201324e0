# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Shared helpers for generator modules."""

from __future__ import annotations

import re
from typing import Any, Optional

import yaml

DOCUMENT_SEPARATOR = "---\n"

_BOOL_TAG = "tag:yaml.org,2002:bool"


class YAML12BoolLoader(yaml.SafeLoader):
    """SafeLoader that only reads true/false as booleans; yes/no/on/off stay strings."""


YAML12BoolLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _BOOL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
YAML12BoolLoader.add_implicit_resolver(
    _BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


def load_yaml(content: Any) -> Any:
    return yaml.load(content, Loader=YAML12BoolLoader)


def load_yaml_all(content: Any) -> list[Any]:
    return list(yaml.load_all(content, Loader=YAML12BoolLoader))


def scalar_text(value: Any) -> str:
    """Render a decoded YAML scalar the way it was written (``true``, not ``True``)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def dump_document(document: dict[str, Any]) -> str:
    """Serialize one manifest as block-style YAML with sorted keys."""
    return yaml.safe_dump(
        document,
        sort_keys=True,
        default_flow_style=False,
        allow_unicode=True,
        width=4096,
    )


def render_document(document: dict[str, Any]) -> str:
    """Serialize a manifest prefixed with the document separator."""
    return DOCUMENT_SEPARATOR + dump_document(document)


def join_values(values: Optional[list[str]]) -> str:
    """Comma-join annotation values, treating an unset list as empty."""
    return ",".join(values or [])


def coerce_bool(value: Optional[Any]) -> Optional[bool]:
    """Convert user input into booleans; None when the value is not recognized."""
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "1", "yes"}:
            return True
        if lowered in {"false", "0", "no", ""}:
            return False
        return None
    if isinstance(value, int):
        return bool(value)
    return None


def nested_string(obj: dict[str, Any], *keys: str) -> Optional[str]:
    """Walk nested mappings and return the string at ``keys`` or None."""
    node: Any = obj
    for key in keys:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    if isinstance(node, str):
        return node
    return None
