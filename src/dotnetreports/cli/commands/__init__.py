"""CLI commands package.

This module provides the base Command class and exports all command implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from argparse import Namespace


class Command(ABC):
    """Base class for CLI commands."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Command identifier."""

    @abstractmethod
    def execute(self, args: Namespace) -> int:
        """Execute the command.

        Args:
            args: Parsed command-line arguments.

        Returns:
            Exit code (0 for success, non-zero for error).
        """


# ruff: noqa: E402
from dotnetreports.cli.commands.collect import CollectCommand
from dotnetreports.cli.commands.keys import KeysCommand
from dotnetreports.cli.commands.validate import ValidateCommand

__all__ = [
    "Command",
    "CollectCommand",
    "KeysCommand",
    "ValidateCommand",
]
