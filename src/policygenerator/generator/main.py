# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Policy generator - exec plugin entry point.

Kustomize runs exec generator plugins with the cached generator manifest as the
first argument (``PolicyGenerator <cached-manifest> <args>``); pass
``--standalone`` when invoking the binary directly so every positional path is
treated as a generator config.
"""

import argparse
import logging
import sys
from typing import Optional

from .api import generate_from_paths
from .artifacts import OutputWriter
from .errors import GeneratorError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s %(asctime)s %(filename)s:%(lineno)d] %(message)s"


def configure_parser(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--debug", action="store_true", help="Print the stack trace with error messages")
    parser.add_argument(
        "--standalone",
        action="store_true",
        help="Run the generator binary outside of Kustomize",
    )
    parser.add_argument("-o", "--output", help="Path to write the generated manifests to; defaults to stdout")
    parser.add_argument("paths", nargs="*", help="Generator config files or directories of them")


def config_paths_from_args(args: argparse.Namespace) -> list[str]:
    if args.standalone:
        return list(args.paths)
    # The first argument is the manifest Kustomize cached for this plugin.
    return list(args.paths[1:])


def run(args: argparse.Namespace) -> int:
    """Generate policies for the parsed arguments and return the exit status."""
    paths = config_paths_from_args(args)
    try:
        output = generate_from_paths(paths)
    except GeneratorError as exc:
        if args.debug:
            logger.exception("Policy generation failed")
        else:
            logger.error("%s", exc)
        return 1

    try:
        OutputWriter(output_path=args.output).write(output)
    except OSError:
        logger.exception("Failed to write generated manifests")
        return 1
    if args.output:
        logger.info("Wrote generated manifests to %s", args.output)
    return 0


def main(argv: Optional[list[str]] = None) -> None:
    """
    Main entry point for the PolicyGenerator command.
    """
    parser = argparse.ArgumentParser(
        prog="PolicyGenerator",
        description="Generate Policy, PlacementRule and PlacementBinding manifests from generator configs",
    )
    configure_parser(parser)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format=LOG_FORMAT,
    )
    sys.exit(run(args))


if __name__ == "__main__":
    main()
