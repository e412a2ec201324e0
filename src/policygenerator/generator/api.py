# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
API layer around the policy generator.

This module provides file-level entry points (single config files, or
directories of them) on top of the bytes-in/bytes-out generator, plus the
reference tables printed by the ``help`` command.
"""

import logging
import os
import sys
from typing import Any, Optional

import yaml
from prettytable import PrettyTable

from .constants import (
    DEFAULT_CATEGORIES,
    DEFAULT_COMPLIANCE_TYPE,
    DEFAULT_CONTROLS,
    DEFAULT_REMEDIATION_ACTION,
    DEFAULT_SEVERITY,
    DEFAULT_STANDARDS,
)
from .errors import GeneratorError, ReadError
from .plugin import PolicyGenerator

logger = logging.getLogger(__name__)

_VALID_HELP_FORMATS = {"table", "yaml"}

# Config keys in wire order: (key, required, built-in default, description).
CONFIG_REFERENCE: list[tuple[str, str, Any, str]] = [
    ("metadata.name", "", None, "Name of the generator manifest"),
    (
        "placementBindingDefaults.name",
        "multiple policies",
        "binding-<policy name>",
        "Base name of generated PlacementBindings",
    ),
    ("policyDefaults.categories", "", DEFAULT_CATEGORIES, "Policy categories annotation"),
    ("policyDefaults.complianceType", "", DEFAULT_COMPLIANCE_TYPE, "Compliance type of object-templates"),
    ("policyDefaults.controls", "", DEFAULT_CONTROLS, "Policy controls annotation"),
    ("policyDefaults.namespace", "yes", None, "Namespace of every generated object"),
    ("policyDefaults.namespaceSelector.include", "", None, "Namespaces the ConfigurationPolicy applies to"),
    ("policyDefaults.namespaceSelector.exclude", "", None, "Namespaces the ConfigurationPolicy skips"),
    ("policyDefaults.placement.clusterSelectors", "", None, "Label selectors for a synthesized PlacementRule"),
    ("policyDefaults.placement.placementRulePath", "", None, "File holding an existing PlacementRule"),
    ("policyDefaults.remediationAction", "", DEFAULT_REMEDIATION_ACTION, "inform or enforce"),
    ("policyDefaults.severity", "", DEFAULT_SEVERITY, "Policy severity"),
    ("policyDefaults.standards", "", DEFAULT_STANDARDS, "Policy standards annotation"),
    ("policies[].name", "yes", None, "Unique policy name"),
    ("policies[].manifests[].path", "yes", None, "Manifest file or directory of .yaml/.yml files"),
    ("policies[].disabled", "", False, "Create the policy disabled"),
]


def _format_default_value(value: Any) -> str:
    if value is None or value == "":
        return "-"
    if isinstance(value, (int, float, bool, str)):
        return str(value)
    return yaml.safe_dump(value, default_flow_style=True).strip()


def _build_reference_table() -> PrettyTable:
    table = PrettyTable()
    table.field_names = ["Key", "Required", "Default", "Description"]
    table.align["Key"] = "l"
    table.align["Description"] = "l"
    for key, required, default, description in CONFIG_REFERENCE:
        table.add_row([key, required, _format_default_value(default), description])
    return table


def print_generator_help(fmt: str = "table", stream=None) -> None:
    """
    Print the generator config keys and their built-in defaults.

    Args:
        fmt: one of {"table", "yaml"}.
        stream: destination stream (defaults to sys.stdout).
    """
    fmt_lower = (fmt or "table").lower()
    if fmt_lower not in _VALID_HELP_FORMATS:
        raise ValueError(f"Unsupported help format: {fmt}")
    stream = stream or sys.stdout
    if fmt_lower == "yaml":
        payload = [
            {"key": key, "required": bool(required), "default": default, "description": description}
            for key, required, default, description in CONFIG_REFERENCE
        ]
        stream.write(yaml.safe_dump(payload, sort_keys=False, allow_unicode=True))
        return
    stream.write(f"Policy generator configuration:\n{_build_reference_table()}\n")


def discover_config_files(path: str) -> list[str]:
    """
    Resolve a command-line path into generator config files.

    Files are returned as is; directories are walked recursively, visiting
    entries in name order.
    """
    if not os.path.isdir(path):
        return [path]
    found: list[str] = []
    for entry in sorted(os.listdir(path)):
        found.extend(discover_config_files(os.path.join(path, entry)))
    return found


def read_generator_config(config_path: str) -> bytes:
    try:
        with open(config_path, "rb") as f:
            return f.read()
    except OSError as exc:
        raise ReadError(f"failed to read file '{config_path}': {exc}") from exc


def generate_from_file(config_path: str) -> bytes:
    """
    Generate policies from a single generator config file.

    Raises:
        GeneratorError: If the file cannot be read or generation fails.
    """
    logger.debug("Generating policies from %s", config_path)
    data = read_generator_config(config_path)
    generator = PolicyGenerator()
    try:
        generator.configure(data)
    except GeneratorError as exc:
        raise type(exc)(f"error parsing config file '{config_path}': {exc}") from exc
    try:
        return generator.generate()
    except GeneratorError as exc:
        raise type(exc)(f"error generating policies from config file '{config_path}': {exc}") from exc


def generate_from_paths(paths: list[str], base_dir: Optional[str] = None) -> bytes:
    """
    Generate policies for every config file found under ``paths``.

    Relative paths are resolved against ``base_dir`` when given. Outputs are
    concatenated in discovery order.
    """
    output = bytearray()
    for path in paths:
        if base_dir and not os.path.isabs(path):
            path = os.path.join(base_dir, path)
        for config_path in discover_config_files(path):
            output += generate_from_file(config_path)
    return bytes(output)


__all__ = [
    "CONFIG_REFERENCE",
    "discover_config_files",
    "generate_from_file",
    "generate_from_paths",
    "print_generator_help",
    "read_generator_config",
]
