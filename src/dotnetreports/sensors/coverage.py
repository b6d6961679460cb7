"""Sensor importing coverage report paths for one language and test scope."""

from __future__ import annotations

from dotnetreports.core.logging import get_logger
from dotnetreports.core.models import CoverageConfiguration, ReportKind, TestScope
from dotnetreports.core.paths import normalize_all
from dotnetreports.plugins.languages import LanguagePlugin
from dotnetreports.registry.aggregator import CoverageAggregator
from dotnetreports.sensors.base import Sensor, SensorContext, SensorDescriptor, SensorOutcome

LOGGER = get_logger(__name__)


class CoverageReportImportSensor(Sensor):
    """Reads every coverage key of a configuration and contributes the paths.

    One instance per (language, scope): the configuration value, not a
    subclass, decides which keys are read.
    """

    def __init__(
        self,
        configuration: CoverageConfiguration,
        aggregator: CoverageAggregator,
        metadata: LanguagePlugin,
    ) -> None:
        if configuration.language != metadata.language_key:
            raise ValueError(
                f"Coverage configuration for '{configuration.language}' "
                f"cannot be imported by the {metadata.language_key} plugin"
            )
        self._configuration = configuration
        self._aggregator = aggregator
        self._metadata = metadata

    @property
    def configuration(self) -> CoverageConfiguration:
        return self._configuration

    @property
    def is_integration_test(self) -> bool:
        return self._configuration.scope is TestScope.INTEGRATION

    def describe(self) -> SensorDescriptor:
        label = "Integration Tests Coverage" if self.is_integration_test else "Tests Coverage"
        return SensorDescriptor(
            name=f"{self._metadata.language_name} {label}",
            only_on_language=self._metadata.language_key,
        )

    def should_execute(self, context: SensorContext) -> bool:
        if not super().should_execute(context):
            return False
        return self._aggregator.has_coverage_property(
            context.properties, self._configuration.language, self._configuration.scope
        )

    def execute(self, context: SensorContext) -> SensorOutcome:
        outcome = SensorOutcome()
        scope = self._configuration.scope

        for kind in ReportKind.coverage_kinds():
            key = self._configuration.key_for(kind)
            raw = context.properties.get_string_array(key)
            if not raw:
                continue

            paths, rejected = normalize_all(raw, context.module.base_dir)
            outcome.rejected.extend(rejected)
            if not paths:
                continue

            context.collector.add_paths(
                kind,
                scope,
                paths,
                module=context.module,
                language=self._configuration.language,
            )
            outcome.contributed += len(paths)
            LOGGER.debug(f"{context.module.display_name}: {len(paths)} path(s) from '{key}'")

        return outcome
