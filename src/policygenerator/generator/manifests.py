# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Loading of object manifests referenced by a generator config.

A manifest file may hold several YAML documents. Every non-empty document must
be a mapping, since it ends up as an ``objectDefinition`` in a policy.
"""

from __future__ import annotations

import logging
import os
from typing import Any

import yaml

from .constants import MANIFEST_EXTENSIONS
from .errors import FormatError, ReadError
from .utils import load_yaml_all

logger = logging.getLogger(__name__)


def load_manifest_file(path: str) -> list[dict[str, Any]]:
    """
    Load every YAML document stored in ``path``.

    Args:
        path: Manifest file path.

    Returns:
        The decoded documents in file order. Empty files and empty documents
        contribute nothing, so the list may be empty.
        Only true/false decode as booleans, so values such as ``yes`` or
        ``on`` are kept as strings.

    Raises:
        ReadError: If the file cannot be read.
        FormatError: If the file is not UTF-8 YAML or a document is not a mapping.
    """
    try:
        with open(path, encoding="utf-8") as fh:
            content = fh.read()
    except UnicodeDecodeError as exc:
        raise FormatError(f"the manifest file {path} is not valid UTF-8") from exc
    except OSError as exc:
        raise ReadError(f"failed to read the manifest file {path}") from exc

    try:
        decoded = load_yaml_all(content)
    except yaml.YAMLError as exc:
        raise FormatError(f"failed to decode the manifest file {path}: {exc}") from exc

    documents: list[dict[str, Any]] = []
    for doc in decoded:
        if doc is None:
            continue
        if not isinstance(doc, dict):
            raise FormatError("the input manifests must be in the format of YAML objects")
        documents.append(doc)
    logger.debug("Loaded %d document(s) from %s", len(documents), path)
    return documents


def expand_manifest_path(path: str) -> list[str]:
    """
    Resolve a manifest entry into the files it stands for.

    A directory expands (non-recursively) to its ``.yaml``/``.yml`` files sorted
    by name; anything else is returned as a single-element list.
    """
    if not os.path.exists(path):
        raise ReadError(f"failed to read the manifest path {path}")
    if not os.path.isdir(path):
        return [path]

    try:
        entries = sorted(os.listdir(path))
    except OSError as exc:
        raise ReadError(f"failed to read the manifest directory {path}") from exc

    files: list[str] = []
    for entry in entries:
        candidate = os.path.join(path, entry)
        if os.path.isdir(candidate):
            continue
        if os.path.splitext(entry)[1] not in MANIFEST_EXTENSIONS:
            continue
        files.append(candidate)
    return files
