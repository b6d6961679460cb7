"""Plugin discovery via Python entry points.

Supports discovering different plugin types:
- Language plugins: dotnetreports.languages
- Reporter plugins: dotnetreports.reporters
"""

from __future__ import annotations

from importlib.metadata import entry_points
from typing import Dict, List, Mapping, Optional, Type, TypeVar

from dotnetreports.core.logging import get_logger

LOGGER = get_logger(__name__)

LANGUAGE_ENTRY_POINT_GROUP = "dotnetreports.languages"
REPORTER_ENTRY_POINT_GROUP = "dotnetreports.reporters"

T = TypeVar("T")


def discover_plugins(
    group: str,
    base_class: Type[T] | None = None,
    builtins: Optional[Mapping[str, Type[T]]] = None,
) -> Dict[str, Type[T]]:
    """Discover all installed plugins for a given entry point group.

    Plugins register themselves in their pyproject.toml:

        [project.entry-points."dotnetreports.languages"]
        fsharp = "dotnetreports_fsharp:FSharpPlugin"

    Built-in plugins are always available, even when the package metadata
    has not been installed; an installed entry point of the same name wins.

    Args:
        group: Entry point group name (e.g., 'dotnetreports.languages').
        base_class: Optional base class to validate plugins against.
        builtins: Plugins shipped with dotnetreports itself.

    Returns:
        Dictionary mapping plugin names to plugin classes.
    """
    plugins: Dict[str, Type[T]] = dict(builtins or {})

    for ep in entry_points(group=group):
        try:
            plugin_class = ep.load()
        except Exception as e:
            LOGGER.warning(f"Failed to load plugin '{ep.name}': {e}")
            continue
        if base_class is not None and not (
            isinstance(plugin_class, type) and issubclass(plugin_class, base_class)
        ):
            LOGGER.warning(
                f"Plugin '{ep.name}' does not inherit from {base_class.__name__}, skipping"
            )
            continue
        plugins[ep.name] = plugin_class
        LOGGER.debug(f"Discovered plugin: {ep.name} (group: {group})")

    return plugins


def get_plugin(
    group: str,
    name: str,
    base_class: Type[T] | None = None,
    builtins: Optional[Mapping[str, Type[T]]] = None,
    **kwargs,
) -> T | None:
    """Get an instantiated plugin by name.

    Returns:
        Instantiated plugin or None if not found.
    """
    plugin_class = discover_plugins(group, base_class, builtins).get(name)
    if plugin_class:
        return plugin_class(**kwargs)
    return None


def list_available_plugins(
    group: str,
    builtins: Optional[Mapping[str, Type[T]]] = None,
) -> List[str]:
    """List names of all available plugins in a group, sorted."""
    return sorted(discover_plugins(group, builtins=builtins).keys())
