"""Base class for reporter plugins."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import IO

from dotnetreports.pipeline.executor import AnalysisResult


class ReporterPlugin(ABC):
    """Base class for all reporter plugins.

    Reporter plugins format and output analysis results in various formats.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Reporter identifier (e.g., 'json', 'table')."""

    @abstractmethod
    def report(self, result: AnalysisResult, output: IO[str]) -> None:
        """Format and write the analysis result.

        Args:
            result: The analysis result to format.
            output: Output stream to write the formatted result.
        """
