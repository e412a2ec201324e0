# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import argparse
import logging
import sys

from policygenerator import __version__
from policygenerator.generator.api import print_generator_help
from policygenerator.generator.main import LOG_FORMAT
from policygenerator.generator.main import configure_parser as configure_generate_parser
from policygenerator.generator.main import run as generate_run


def _run_generate(extra_args: list[str]) -> None:
    generate_parser = argparse.ArgumentParser(
        prog="policygenerator generate",
        description="Generate Policy, PlacementRule and PlacementBinding manifests from generator configs",
    )
    configure_generate_parser(generate_parser)
    generate_args = generate_parser.parse_args(extra_args)
    logging.basicConfig(
        level=logging.DEBUG if generate_args.debug else logging.INFO,
        format=LOG_FORMAT,
    )
    sys.exit(generate_run(generate_args))


def _run_help(extra_args: list[str]) -> None:
    help_parser = argparse.ArgumentParser(
        prog="policygenerator help", description="Show generator configuration keys and defaults"
    )
    help_parser.add_argument("--format", choices=["table", "yaml"], default="table", help="Output format")
    help_args = help_parser.parse_args(extra_args)
    print_generator_help(help_args.format)


def _show_version(extra_args: list[str]) -> None:
    print(f"policygenerator {__version__}")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Policy generator for Open Cluster Management policies.")
    subparsers = parser.add_subparsers(dest="command", help="Command to run", required=True)

    generate_parser = subparsers.add_parser("generate", help="Generate policy manifests", add_help=False)
    generate_parser.set_defaults(handler=_run_generate)

    help_parser = subparsers.add_parser("help", help="Show generator configuration reference", add_help=False)
    help_parser.set_defaults(handler=_run_help)

    # Version subcommand
    version_parser = subparsers.add_parser("version", help="Show version information", add_help=False)
    version_parser.set_defaults(handler=_show_version)

    args, extras = parser.parse_known_args(argv)

    # extras contains the arguments for the selected sub-command
    handler = getattr(args, "handler", None)
    if handler is None:
        parser.error("No sub-command handler registered.")
    handler(extras)


if __name__ == "__main__":
    main(sys.argv[1:])
