# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Policy generator plugin.

The generator is configured once from raw config bytes and then renders a YAML
stream of Policy, PlacementRule and PlacementBinding documents, in that order.
"""

from __future__ import annotations

import io
import logging
from typing import Any, Optional

from .bindings import binding_name, build_binding_document, group_policies_by_placement
from .config import GeneratorConfig, parse_config
from .defaults import apply_defaults
from .placement import resolve_placement
from .policies import build_policy_document
from .utils import render_document
from .validation import validate_config

logger = logging.getLogger(__name__)


class PolicyGenerator:
    """
    Render policies for one generator config.

    Usage::

        generator = PolicyGenerator()
        generator.configure(config_bytes)
        output = generator.generate()

    On error the partially written output must be discarded; ``generate`` only
    returns once every document rendered successfully.
    """

    def __init__(self, config: Optional[GeneratorConfig] = None):
        self.config = config
        self._output = io.StringIO()

    def configure(self, data: bytes | str) -> GeneratorConfig:
        """Decode, default and validate the generator config."""
        config = apply_defaults(parse_config(data))
        validate_config(config)
        self.config = config
        logger.debug("Configured generator %r with %d policies", config.name, len(config.policies))
        return config

    def _write(self, document: dict[str, Any]) -> None:
        self._output.write(render_document(document))

    def generate(self) -> bytes:
        """
        Render every document for the configured policies.

        Raises:
            GeneratorError: If a manifest or placement rule cannot be used.
        """
        if self.config is None:
            raise RuntimeError("configure() must be called before generate()")
        config = self.config
        namespace = config.policy_defaults.namespace
        self._output = io.StringIO()

        for policy in config.policies:
            self._write(build_policy_document(policy, namespace))

        placement_names: list[str] = []
        emitted: set[str] = set()
        for policy in config.policies:
            name, rule = resolve_placement(policy, namespace, emitted)
            if rule is not None:
                self._write(rule)
                emitted.add(name)
            placement_names.append(name)

        groups = group_policies_by_placement(placement_names)
        for position, (placement_name, indices) in enumerate(groups.items(), start=1):
            name = binding_name(config.binding_default_name, position)
            policies = [config.policies[idx] for idx in indices]
            self._write(build_binding_document(name, namespace, placement_name, policies))

        logger.debug(
            "Generated %d policies, %d placement rules and %d bindings",
            len(config.policies),
            len(emitted),
            len(groups),
        )
        return self._output.getvalue().encode("utf-8")


def generate_policies(data: bytes | str) -> bytes:
    """Configure a fresh generator from ``data`` and return its output."""
    generator = PolicyGenerator()
    generator.configure(data)
    return generator.generate()
