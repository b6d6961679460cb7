"""Read side of the report path registry."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Tuple

from dotnetreports.config.coverage import KindRegistry
from dotnetreports.core.logging import get_logger
from dotnetreports.core.models import CoverageConfiguration, CoverageReportSet, ReportKind, TestScope
from dotnetreports.registry.collector import ReportPathCollector

LOGGER = get_logger(__name__)


class EmptyReportSetError(LookupError):
    """Strict mode was requested and no coverage report path was collected."""

    def __init__(self, configuration: CoverageConfiguration) -> None:
        keys = ", ".join(configuration.keys().values())
        super().__init__(
            f"No {configuration.scope.value} test coverage reports collected for "
            f"'{configuration.language}' (checked: {keys})"
        )
        self.configuration = configuration


class CoverageAggregator:
    """Builds read-only coverage report sets from a collector.

    The first report set built seals the collector, so every sensor must
    have contributed before any aggregator reads.
    """

    def __init__(
        self,
        collector: ReportPathCollector,
        kind_registry: KindRegistry,
        strict: bool = False,
    ) -> None:
        """Initialize the aggregator.

        Args:
            collector: Collector the sensors contribute to.
            kind_registry: Source of per-language coverage configurations.
            strict: Default policy for empty report sets.
        """
        self._collector = collector
        self._kind_registry = kind_registry
        self._strict = strict

    @property
    def strict(self) -> bool:
        return self._strict

    def build_report_set(
        self,
        language: str,
        scope: TestScope,
        strict: Optional[bool] = None,
    ) -> CoverageReportSet:
        """Combine each coverage kind's snapshot with its configuration.

        Args:
            language: Language key (e.g., 'vbnet').
            scope: Unit or integration tests.
            strict: Overrides the aggregator's default empty-set policy.

        Returns:
            CoverageReportSet, possibly with every kind empty.

        Raises:
            UnknownLanguageError: If the language is not registered.
            EmptyReportSetError: In strict mode, if no kind yielded paths.
        """
        configuration = self._kind_registry.resolve_keys(language, scope)
        self._collector.seal()

        reports: Dict[ReportKind, Tuple[Path, ...]] = {
            kind: tuple(self._collector.snapshot(kind, scope, language=language))
            for kind in ReportKind.coverage_kinds()
        }
        report_set = CoverageReportSet(configuration=configuration, reports=reports)

        is_strict = self._strict if strict is None else strict
        if report_set.is_empty:
            if is_strict:
                raise EmptyReportSetError(configuration)
            LOGGER.debug(f"No {scope.value} coverage reports for '{language}'")
        else:
            LOGGER.info(
                f"{language} {scope.value} coverage: "
                + ", ".join(f"{kind.value}={len(paths)}" for kind, paths in reports.items() if paths)
            )
        return report_set

    def has_coverage_property(self, properties, language: str, scope: TestScope) -> bool:
        """Whether any coverage key of (language, scope) is set in ``properties``.

        Args:
            properties: Object exposing ``has_key(key)`` (a PropertySource).
        """
        configuration = self._kind_registry.resolve_keys(language, scope)
        return any(properties.has_key(key) for key in configuration.keys().values())
