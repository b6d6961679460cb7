"""Plugin infrastructure for dotnetreports.

- Language plugins (dotnetreports.languages) - .NET language metadata
- Reporter plugins (dotnetreports.reporters) - Output formatting

Plugins are discovered via Python entry points.
"""

from dotnetreports.plugins.discovery import (
    discover_plugins,
    get_plugin,
    list_available_plugins,
    LANGUAGE_ENTRY_POINT_GROUP,
    REPORTER_ENTRY_POINT_GROUP,
)

__all__ = [
    "discover_plugins",
    "get_plugin",
    "list_available_plugins",
    "LANGUAGE_ENTRY_POINT_GROUP",
    "REPORTER_ENTRY_POINT_GROUP",
]
