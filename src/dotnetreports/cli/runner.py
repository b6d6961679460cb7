"""CLI runner orchestration.

This module handles command dispatch and execution for the dotnetreports CLI.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version
from typing import Iterable, Optional

from dotnetreports.cli.arguments import build_parser
from dotnetreports.cli.commands import CollectCommand, KeysCommand, ValidateCommand
from dotnetreports.cli.exit_codes import EXIT_SUCCESS
from dotnetreports.core.logging import configure_logging, get_logger

LOGGER = get_logger(__name__)


def get_version() -> str:
    """Get dotnetreports version from package metadata or fallback."""
    try:
        return version("dotnetreports")
    except PackageNotFoundError:
        # Fallback for editable installs that have not yet built metadata.
        from dotnetreports import __version__
        return __version__


class CLIRunner:
    """Orchestrates CLI execution with subcommand dispatch."""

    def __init__(self) -> None:
        self.parser = build_parser()
        self._version = get_version()
        self._commands = {
            command.name: command
            for command in (CollectCommand(), KeysCommand(), ValidateCommand())
        }

    def run(self, argv: Optional[Iterable[str]] = None) -> int:
        """Run the CLI.

        Args:
            argv: Command-line arguments (defaults to sys.argv).

        Returns:
            Exit code.
        """
        # Handle top-level --help specially to return 0
        argv_list = list(argv) if argv is not None else None
        if argv_list is not None and argv_list[:1] in (["--help"], ["-h"]):
            self.parser.print_help()
            return EXIT_SUCCESS

        args = self.parser.parse_args(argv_list)

        configure_logging(
            debug=args.debug,
            verbose=args.verbose,
            quiet=args.quiet,
            log_file=args.log_file,
        )

        if args.version:
            print(self._version)
            return EXIT_SUCCESS

        command = self._commands.get(getattr(args, "command", None) or "")
        if command is None:
            self.parser.print_help()
            return EXIT_SUCCESS

        LOGGER.debug(f"Running command '{command.name}'")
        return command.execute(args)
