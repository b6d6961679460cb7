"""Report kind registry: which property keys feed which report kind.

The table is built once at start-up from the language plugins and is
read-only afterwards. Coverage keys follow
``sonar.<language>.<tool>[.it].reportsPaths``.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Set, Tuple

from dotnetreports.core.logging import get_logger
from dotnetreports.core.models import CoverageConfiguration, ReportKind, TestScope
from dotnetreports.plugins.languages import LanguagePlugin, load_language_plugins

LOGGER = get_logger(__name__)

COVERAGE_KEY_TEMPLATE = "sonar.{language}.{tool}{infix}.reportsPaths"
PROTOBUF_KEY_TEMPLATE = "sonar.{language}.analyzer.projectOutPaths"
ROSLYN_KEY_TEMPLATE = "sonar.{language}.roslyn.reportFilePaths"


class UnknownLanguageError(LookupError):
    """No coverage configuration is registered for a language."""

    def __init__(self, language: str, known: Iterable[str] = ()) -> None:
        known_list = ", ".join(sorted(known)) or "none"
        super().__init__(f"Unknown language '{language}' (registered: {known_list})")
        self.language = language


def coverage_key(language: str, kind: ReportKind, scope: TestScope) -> str:
    """Build the property key for a coverage kind in a scope."""
    if not kind.is_coverage:
        raise ValueError(f"{kind.value} is not a coverage report kind")
    return COVERAGE_KEY_TEMPLATE.format(language=language, tool=kind.value, infix=scope.key_infix)


def build_coverage_configuration(language: str, scope: TestScope) -> CoverageConfiguration:
    return CoverageConfiguration(
        language=language,
        ncover3_key=coverage_key(language, ReportKind.NCOVER3, scope),
        opencover_key=coverage_key(language, ReportKind.OPENCOVER, scope),
        dotcover_key=coverage_key(language, ReportKind.DOTCOVER, scope),
        vs_xml_key=coverage_key(language, ReportKind.VS_XML, scope),
        scope=scope,
    )


class KindRegistry:
    """Maps (language, scope) to the property keys of each report kind."""

    def __init__(self, languages: Iterable[LanguagePlugin]) -> None:
        plugins: Dict[str, LanguagePlugin] = {}
        table: Dict[Tuple[str, TestScope], CoverageConfiguration] = {}

        for plugin in languages:
            key = plugin.language_key
            if key in plugins:
                LOGGER.warning(f"Language '{key}' registered twice, keeping the first")
                continue
            plugins[key] = plugin
            for scope in TestScope:
                table[(key, scope)] = build_coverage_configuration(key, scope)

        self._plugins: Mapping[str, LanguagePlugin] = MappingProxyType(plugins)
        self._table: Mapping[Tuple[str, TestScope], CoverageConfiguration] = MappingProxyType(table)

    @classmethod
    def from_plugins(cls) -> "KindRegistry":
        """Build the registry from every installed language plugin."""
        return cls(load_language_plugins())

    def languages(self) -> List[str]:
        return sorted(self._plugins)

    def metadata(self, language: str) -> LanguagePlugin:
        try:
            return self._plugins[language]
        except KeyError:
            raise UnknownLanguageError(language, self._plugins) from None

    def resolve_keys(self, language: str, scope: TestScope) -> CoverageConfiguration:
        """Return the coverage configuration for a language and scope.

        Raises:
            UnknownLanguageError: If the language was never registered.
        """
        configuration = self._table.get((language, scope))
        if configuration is None:
            raise UnknownLanguageError(language, self._plugins)
        return configuration

    def protobuf_key(self, language: str) -> str:
        self.metadata(language)
        return PROTOBUF_KEY_TEMPLATE.format(language=language)

    def roslyn_key(self, language: str) -> str:
        self.metadata(language)
        return ROSLYN_KEY_TEMPLATE.format(language=language)

    def key_for(self, language: str, kind: ReportKind, scope: Optional[TestScope] = None) -> str:
        """Return the single property key feeding a (kind, scope) pair."""
        if kind is ReportKind.PROTOBUF:
            return self.protobuf_key(language)
        if kind is ReportKind.ROSLYN:
            return self.roslyn_key(language)
        if scope is None:
            raise ValueError(f"Coverage kind {kind.value} requires a test scope")
        return self.resolve_keys(language, scope).key_for(kind)

    def known_keys(self) -> Set[str]:
        keys: Set[str] = set()
        for configuration in self._table.values():
            keys.update(configuration.keys().values())
        for language in self._plugins:
            keys.add(self.protobuf_key(language))
            keys.add(self.roslyn_key(language))
        return keys
