"""Reporter plugins for dotnetreports output formatting.

Plugins are discovered via Python entry points (dotnetreports.reporters group).
"""

from typing import Dict, List, Type

from dotnetreports.plugins.discovery import (
    REPORTER_ENTRY_POINT_GROUP,
    discover_plugins,
    get_plugin,
    list_available_plugins,
)
from dotnetreports.plugins.reporters.base import ReporterPlugin
from dotnetreports.plugins.reporters.json_reporter import JSONReporter
from dotnetreports.plugins.reporters.table_reporter import TableReporter

BUILTIN_REPORTERS: Dict[str, Type[ReporterPlugin]] = {
    "json": JSONReporter,
    "table": TableReporter,
}


def discover_reporter_plugins() -> Dict[str, Type[ReporterPlugin]]:
    """Discover all installed reporter plugins via entry points."""
    return discover_plugins(REPORTER_ENTRY_POINT_GROUP, ReporterPlugin, BUILTIN_REPORTERS)


def get_reporter_plugin(name: str) -> ReporterPlugin | None:
    """Get an instantiated reporter plugin by name."""
    return get_plugin(REPORTER_ENTRY_POINT_GROUP, name, ReporterPlugin, BUILTIN_REPORTERS)


def list_available_reporters() -> List[str]:
    """List names of all available reporter plugins."""
    return list_available_plugins(REPORTER_ENTRY_POINT_GROUP, BUILTIN_REPORTERS)


__all__ = [
    "ReporterPlugin",
    "JSONReporter",
    "TableReporter",
    "BUILTIN_REPORTERS",
    "discover_reporter_plugins",
    "get_reporter_plugin",
    "list_available_reporters",
]
