"""Core value types shared by the collector, the aggregator and the sensors."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple


class TestScope(str, Enum):
    """Distinguishes reports produced by unit tests from integration tests."""

    __test__ = False

    UNIT = "unit"
    INTEGRATION = "integration"

    @property
    def key_infix(self) -> str:
        """Segment inserted into coverage property keys for this scope."""
        return ".it" if self is TestScope.INTEGRATION else ""


class ReportKind(str, Enum):
    """Tool or format that produced a report."""

    NCOVER3 = "ncover3"
    OPENCOVER = "opencover"
    DOTCOVER = "dotcover"
    VS_XML = "vscoveragexml"
    PROTOBUF = "protobuf"
    ROSLYN = "roslyn"

    @classmethod
    def coverage_kinds(cls) -> Tuple["ReportKind", ...]:
        """Coverage tool kinds, in property declaration order."""
        return (cls.NCOVER3, cls.OPENCOVER, cls.DOTCOVER, cls.VS_XML)

    @property
    def is_coverage(self) -> bool:
        return self in ReportKind.coverage_kinds()

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES: Dict[ReportKind, str] = {
    ReportKind.NCOVER3: "NCover3",
    ReportKind.OPENCOVER: "OpenCover",
    ReportKind.DOTCOVER: "dotCover (HTML)",
    ReportKind.VS_XML: "Visual Studio (XML)",
    ReportKind.PROTOBUF: "Protobuf",
    ReportKind.ROSLYN: "Roslyn",
}


@dataclass(frozen=True)
class ModuleIdentity:
    """The module or project a contributed path belongs to."""

    key: str
    name: str = ""
    base_dir: Path = Path(".")

    @property
    def display_name(self) -> str:
        return self.name or self.key


@dataclass(frozen=True)
class ReportPath:
    """A collected report path and where it came from."""

    path: Path
    kind: ReportKind
    scope: Optional[TestScope] = None
    module: Optional[ModuleIdentity] = None
    language: Optional[str] = None


@dataclass(frozen=True)
class RoslynReport:
    """A Roslyn SARIF report file contributed by one module."""

    module: ModuleIdentity
    path: Path


@dataclass(frozen=True)
class CoverageConfiguration:
    """Binds a language and test scope to the four coverage property keys."""

    language: str
    ncover3_key: str
    opencover_key: str
    dotcover_key: str
    vs_xml_key: str
    scope: TestScope = TestScope.UNIT

    def key_for(self, kind: ReportKind) -> str:
        """Return the property key for a coverage kind.

        Raises:
            ValueError: If ``kind`` is not a coverage kind.
        """
        keys = {
            ReportKind.NCOVER3: self.ncover3_key,
            ReportKind.OPENCOVER: self.opencover_key,
            ReportKind.DOTCOVER: self.dotcover_key,
            ReportKind.VS_XML: self.vs_xml_key,
        }
        if kind not in keys:
            raise ValueError(f"{kind.value} is not a coverage report kind")
        return keys[kind]

    def keys(self) -> Dict[ReportKind, str]:
        return {kind: self.key_for(kind) for kind in ReportKind.coverage_kinds()}


@dataclass(frozen=True)
class CoverageReportSet:
    """Collected coverage report paths for one language and test scope."""

    configuration: CoverageConfiguration
    reports: Mapping[ReportKind, Tuple[Path, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        frozen = {kind: tuple(paths) for kind, paths in self.reports.items()}
        object.__setattr__(self, "reports", MappingProxyType(frozen))

    @property
    def language(self) -> str:
        return self.configuration.language

    @property
    def scope(self) -> TestScope:
        return self.configuration.scope

    def paths(self, kind: ReportKind) -> Tuple[Path, ...]:
        return self.reports.get(kind, ())

    def all_paths(self) -> List[Path]:
        """All report paths across kinds, deduplicated in kind order."""
        seen = set()
        result: List[Path] = []
        for kind in ReportKind.coverage_kinds():
            for path in self.paths(kind):
                if path not in seen:
                    seen.add(path)
                    result.append(path)
        return result

    @property
    def is_empty(self) -> bool:
        return not any(self.reports.values())
