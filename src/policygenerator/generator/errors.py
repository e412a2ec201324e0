# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Exceptions raised while configuring or running the policy generator."""


class GeneratorError(Exception):
    """Base class for every failure that aborts a generation run."""


class ReadError(GeneratorError):
    """A referenced file or directory could not be read."""


class FormatError(GeneratorError):
    """Input is not valid YAML or does not have the expected shape."""


class ConfigError(GeneratorError):
    """The generator configuration violates a semantic rule."""
