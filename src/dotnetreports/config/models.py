"""Typed configuration for an analysis run."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from dotnetreports.core.models import ModuleIdentity, TestScope
from dotnetreports.core.paths import split_path_list

DEFAULT_MAX_WORKERS = 4


class PropertySource:
    """Read-only view of multi-valued analysis properties.

    Values are either comma-separated strings or lists of strings; blank
    values count as unset.
    """

    def __init__(self, properties: Optional[Mapping[str, Any]] = None) -> None:
        self._properties: Dict[str, Any] = dict(properties or {})

    def get_string_array(self, key: str) -> List[str]:
        return split_path_list(self._properties.get(key))

    def has_key(self, key: str) -> bool:
        return bool(self.get_string_array(key))

    def keys(self) -> List[str]:
        return sorted(self._properties)

    def overlay(self, properties: Optional[Mapping[str, Any]]) -> "PropertySource":
        """Return a new source with ``properties`` taking precedence."""
        merged = dict(self._properties)
        merged.update(properties or {})
        return PropertySource(merged)

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._properties)


@dataclass
class ProjectConfig:
    """Project-level settings."""

    name: str = ""
    base_dir: Path = field(default_factory=lambda: Path("."))


@dataclass
class ModuleConfig:
    """One analysed module, with properties overriding the project's."""

    key: str
    name: str = ""
    base_dir: Path = field(default_factory=lambda: Path("."))
    languages: List[str] = field(default_factory=list)
    properties: Dict[str, Any] = field(default_factory=dict)

    def identity(self) -> ModuleIdentity:
        return ModuleIdentity(key=self.key, name=self.name, base_dir=self.base_dir)


@dataclass
class AnalysisConfig:
    """Execution settings for the sensor pipeline."""

    max_workers: int = DEFAULT_MAX_WORKERS
    sequential: bool = False
    strict: bool = False


@dataclass
class ReportsConfig:
    """Complete, merged configuration for one analysis run."""

    project: ProjectConfig = field(default_factory=ProjectConfig)
    languages: List[str] = field(default_factory=list)
    scopes: List[TestScope] = field(default_factory=lambda: list(TestScope))
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    properties: Dict[str, Any] = field(default_factory=dict)
    modules: List[ModuleConfig] = field(default_factory=list)

    _config_sources: List[str] = field(default_factory=list, repr=False)

    def property_source(self, module: Optional[ModuleConfig] = None) -> PropertySource:
        """Properties visible to a module (project values overlaid by module values)."""
        source = PropertySource(self.properties)
        if module is not None:
            source = source.overlay(module.properties)
        return source

    def effective_modules(self) -> List[ModuleConfig]:
        """Configured modules, or a single module for the whole project."""
        if self.modules:
            return list(self.modules)
        return [
            ModuleConfig(
                key=self.project.name or self.project.base_dir.name or "project",
                name=self.project.name,
                base_dir=self.project.base_dir,
            )
        ]
