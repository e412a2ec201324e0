# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Policy generator package.

This module exposes a single import surface so callers do not need to know
where the config model, defaulting, validation, or rendering live internally.
"""

from .config import GeneratorConfig, PolicyConfig, PolicyDefaults, parse_config
from .defaults import apply_defaults
from .errors import ConfigError, FormatError, GeneratorError, ReadError
from .plugin import PolicyGenerator, generate_policies
from .validation import validate_config

__all__ = [
    "ConfigError",
    "FormatError",
    "GeneratorConfig",
    "GeneratorError",
    "PolicyConfig",
    "PolicyDefaults",
    "PolicyGenerator",
    "ReadError",
    "apply_defaults",
    "generate_policies",
    "parse_config",
    "validate_config",
]
