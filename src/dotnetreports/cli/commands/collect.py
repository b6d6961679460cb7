"""Collect command implementation."""

from __future__ import annotations

import sys
from argparse import Namespace
from pathlib import Path

from dotnetreports.cli.commands import Command
from dotnetreports.cli.config_bridge import ConfigBridge
from dotnetreports.cli.exit_codes import (
    EXIT_INVALID_USAGE,
    EXIT_ISSUES_FOUND,
    EXIT_RUN_ERROR,
    EXIT_SUCCESS,
)
from dotnetreports.config.coverage import KindRegistry, UnknownLanguageError
from dotnetreports.config.loader import ConfigError, load_config
from dotnetreports.core.logging import get_logger
from dotnetreports.pipeline.executor import AnalysisRun
from dotnetreports.plugins.reporters import get_reporter_plugin
from dotnetreports.registry.aggregator import EmptyReportSetError
from dotnetreports.registry.collector import RegistrySealedError

LOGGER = get_logger(__name__)


class CollectCommand(Command):
    """Runs one analysis and prints the collected report paths."""

    @property
    def name(self) -> str:
        return "collect"

    def execute(self, args: Namespace) -> int:
        """Execute the collect command.

        Returns:
            Exit code: 0 = collected, 1 = strict mode found no reports,
            2 = a sensor broke the run, 3 = configuration error.
        """
        project_root = Path(getattr(args, "path", ".")).resolve()

        try:
            config = load_config(
                project_root=project_root,
                cli_config_path=getattr(args, "config", None),
                cli_overrides=ConfigBridge.args_to_overrides(args),
            )
            run = AnalysisRun(config, KindRegistry.from_plugins())
        except (ConfigError, UnknownLanguageError) as e:
            LOGGER.error(str(e))
            return EXIT_INVALID_USAGE

        try:
            result = run.execute()
        except EmptyReportSetError as e:
            LOGGER.error(str(e))
            return EXIT_ISSUES_FOUND
        except RegistrySealedError as e:
            LOGGER.error(f"Analysis run aborted: {e}")
            return EXIT_RUN_ERROR

        reporter = get_reporter_plugin(getattr(args, "format", "table"))
        if reporter is None:
            LOGGER.error(f"Unknown output format: {args.format}")
            return EXIT_INVALID_USAGE
        reporter.report(result, sys.stdout)

        return EXIT_SUCCESS
