"""Base class for .NET language plugins."""

from __future__ import annotations

from abc import ABC, abstractmethod


class LanguagePlugin(ABC):
    """Metadata describing one .NET language.

    The language key drives every property key the language owns, e.g.
    ``sonar.<language_key>.opencover.reportsPaths``.
    """

    @property
    @abstractmethod
    def language_key(self) -> str:
        """Short key used in property names (e.g., 'cs', 'vbnet')."""

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Human readable language name (e.g., 'C#', 'VB.NET')."""

    @property
    def short_language_name(self) -> str:
        """Name used in sensor titles."""
        return self.language_name

    @property
    def plugin_key(self) -> str:
        return self.language_key

    @property
    def analyzer_work_dir(self) -> str:
        """Directory under each project output path holding protobuf reports."""
        return f"output-{self.language_key}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(language_key={self.language_key!r})"
