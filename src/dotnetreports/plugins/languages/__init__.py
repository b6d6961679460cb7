"""Language plugins for dotnetreports.

Language plugins are discovered via the dotnetreports.languages entry point
group, on top of the built-in C# and VB.NET plugins.
"""

from typing import Dict, List, Type

from dotnetreports.plugins.discovery import LANGUAGE_ENTRY_POINT_GROUP, discover_plugins
from dotnetreports.plugins.languages.base import LanguagePlugin
from dotnetreports.plugins.languages.builtin import CSharpPlugin, VbNetPlugin

BUILTIN_LANGUAGES: Dict[str, Type[LanguagePlugin]] = {
    "cs": CSharpPlugin,
    "vbnet": VbNetPlugin,
}


def discover_language_plugins() -> Dict[str, Type[LanguagePlugin]]:
    """Discover all installed language plugins, keyed by plugin name."""
    return discover_plugins(LANGUAGE_ENTRY_POINT_GROUP, LanguagePlugin, BUILTIN_LANGUAGES)


def load_language_plugins() -> List[LanguagePlugin]:
    """Instantiate every available language plugin."""
    return [plugin_class() for plugin_class in discover_language_plugins().values()]


__all__ = [
    "LanguagePlugin",
    "CSharpPlugin",
    "VbNetPlugin",
    "BUILTIN_LANGUAGES",
    "discover_language_plugins",
    "load_language_plugins",
]
