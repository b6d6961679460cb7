"""Argument parser construction for dotnetreports CLI.

This module builds the argument parser with subcommands:
- dotnetreports collect  - Run sensors and print collected report paths
- dotnetreports keys     - Show the property keys of a language
- dotnetreports validate - Validate a configuration file
"""

from __future__ import annotations

import argparse
from pathlib import Path

SCOPE_CHOICES = ["unit", "integration", "all"]


def _add_global_options(parser: argparse.ArgumentParser) -> None:
    """Add global options available to all commands."""
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show dotnetreports version and exit.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (info-level) logging.",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Reduce logging output to errors only.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Also write log records to this file.",
    )


def _build_collect_parser(subparsers: argparse._SubParsersAction) -> None:
    collect_parser = subparsers.add_parser(
        "collect",
        help="Collect report paths for an analysis run.",
        description=(
            "Run the properties and coverage sensors over every configured "
            "module and print the collected report paths."
        ),
    )
    collect_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project directory (default: current directory).",
    )
    collect_parser.add_argument(
        "--config",
        type=Path,
        help="Path to a configuration file (default: .dotnetreports.yml in the project).",
    )
    collect_parser.add_argument(
        "-D", "--define",
        action="append",
        dest="define",
        metavar="KEY=VALUE",
        help="Set an analysis property, e.g. -D sonar.vbnet.opencover.reportsPaths=report.xml",
    )
    collect_parser.add_argument(
        "--language", "-l",
        action="append",
        dest="languages",
        metavar="LANGUAGE",
        help="Language key to collect for (repeatable, default: all registered).",
    )
    collect_parser.add_argument(
        "--scope",
        choices=SCOPE_CHOICES,
        help="Test scope to collect (default: from config, else all).",
    )
    collect_parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when a language/scope yields no coverage report.",
    )
    collect_parser.add_argument(
        "--sequential",
        action="store_true",
        help="Run sensors one at a time (for debugging).",
    )
    collect_parser.add_argument(
        "--max-workers",
        type=int,
        help="Maximum number of concurrent sensors.",
    )
    collect_parser.add_argument(
        "--format",
        choices=["json", "table"],
        default="table",
        help="Output format (default: table).",
    )


def _build_keys_parser(subparsers: argparse._SubParsersAction) -> None:
    keys_parser = subparsers.add_parser(
        "keys",
        help="Show report property keys.",
        description="Print the report property keys a language accepts.",
    )
    keys_parser.add_argument(
        "--language", "-l",
        action="append",
        dest="languages",
        metavar="LANGUAGE",
        help="Language key (repeatable, default: all registered).",
    )
    keys_parser.add_argument(
        "--scope",
        choices=SCOPE_CHOICES,
        default="all",
        help="Test scope (default: all).",
    )


def _build_validate_parser(subparsers: argparse._SubParsersAction) -> None:
    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate a configuration file.",
        description="Check a dotnetreports configuration file for errors and typos.",
    )
    validate_parser.add_argument(
        "--config",
        type=Path,
        help="Configuration file (default: search the current directory).",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dotnetreports",
        description="dotnetreports - collect .NET coverage and analysis report paths.",
    )
    _add_global_options(parser)

    subparsers = parser.add_subparsers(dest="command", title="commands")
    _build_collect_parser(subparsers)
    _build_keys_parser(subparsers)
    _build_validate_parser(subparsers)
    return parser
