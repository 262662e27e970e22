"""Command-line entry point for ``epenv``.

This module is the thin I/O wrapper around the shell: it parses
arguments, resolves settings, loads every mapping, runs one command and
turns the outcome into printed text plus an exit status.

``main()`` is pure enough to test (it takes argv and an environment
mapping and returns the status); ``run()`` is the console script.
"""

import argparse
import os
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path

from portage_env.atom import AtomParseError
from portage_env.config import Settings
from portage_env.logging import Logger
from portage_env.mapping import MappingLoadError
from portage_env.registry import AtomConflictError, MappingRegistry
from portage_env.shell import CommandError, Shell

EXIT_OK = 0
EXIT_FAILURE = 1


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="epenv",
        description="Inspect per-package environment mappings in package.env.",
    )
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=None,
        help="directory holding one file per environment profile",
    )
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="skip malformed atoms instead of aborting",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="print the load log to stderr",
    )
    parser.add_argument("command", nargs="?", help="'list' or 'set'")
    parser.add_argument("args", nargs="*", help="command arguments")
    return parser


def main(
    argv: Sequence[str] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Run one ``epenv`` invocation.

    Args:
        argv: Arguments without the program name (``sys.argv[1:]`` if None).
        environ: Environment used for settings (``os.environ`` if None).

    Returns:
        The process exit status.

    """
    namespace = build_parser().parse_args(argv)
    settings = Settings.from_environ(os.environ if environ is None else environ).override(
        config_dir=namespace.config_dir
    )
    logger = Logger()
    command = [namespace.command, *namespace.args] if namespace.command else []

    try:
        registry = MappingRegistry.load(
            settings.config_dir, strict=not namespace.lenient, logger=logger
        )
        output = Shell(registry=registry).execute(command)
    except (AtomParseError, AtomConflictError, CommandError, MappingLoadError) as e:
        print(f"Error: {e}", file=sys.stderr)  # noqa: T201
        return EXIT_FAILURE
    finally:
        if namespace.verbose:
            for entry in logger.entries:
                print(entry, file=sys.stderr)  # noqa: T201

    if output:
        print(output)  # noqa: T201
    return EXIT_OK


def run() -> None:
    """Console script entry point."""
    sys.exit(main())
