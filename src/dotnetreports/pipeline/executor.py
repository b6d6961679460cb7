"""Analysis run orchestration.

Run phases:
1. Sensor execution (parallel by default), registry COLLECTING
2. Report set building, first read seals the registry
3. Registry discarded
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from dotnetreports.config.coverage import KindRegistry
from dotnetreports.config.models import ReportsConfig
from dotnetreports.core.logging import get_logger
from dotnetreports.core.models import CoverageReportSet, RoslynReport, TestScope
from dotnetreports.core.paths import InvalidPathError
from dotnetreports.pipeline.parallel import ParallelSensorExecutor, SensorResult, SensorTask
from dotnetreports.registry.aggregator import CoverageAggregator
from dotnetreports.registry.collector import ReportPathCollector
from dotnetreports.sensors.base import Sensor, SensorContext
from dotnetreports.sensors.coverage import CoverageReportImportSensor
from dotnetreports.sensors.properties import PropertiesSensor

LOGGER = get_logger(__name__)


@dataclass
class AnalysisResult:
    """Everything an analysis run collected."""

    report_sets: List[CoverageReportSet] = field(default_factory=list)
    protobuf_dirs: List[Path] = field(default_factory=list)
    roslyn_reports: List[RoslynReport] = field(default_factory=list)
    sensor_results: List[SensorResult] = field(default_factory=list)

    @property
    def rejected_paths(self) -> List[InvalidPathError]:
        return [error for result in self.sensor_results for error in result.rejected]

    @property
    def failed_sensors(self) -> List[SensorResult]:
        return [result for result in self.sensor_results if not result.success]

    def report_set(self, language: str, scope: TestScope) -> Optional[CoverageReportSet]:
        for report_set in self.report_sets:
            if report_set.language == language and report_set.scope is scope:
                return report_set
        return None


class AnalysisRun:
    """One analysis run: a fresh registry, its sensors and its aggregator."""

    def __init__(
        self,
        config: ReportsConfig,
        kind_registry: Optional[KindRegistry] = None,
        strict: Optional[bool] = None,
    ) -> None:
        """Initialize the run.

        Args:
            config: Merged configuration.
            kind_registry: Registry to resolve keys with; built from the
                installed language plugins when omitted.
            strict: Overrides ``config.analysis.strict``.

        Raises:
            UnknownLanguageError: If a configured language is not registered.
        """
        self._config = config
        self._kind_registry = kind_registry or KindRegistry.from_plugins()
        self._languages = list(config.languages) or self._kind_registry.languages()
        for language in self._languages:
            self._kind_registry.metadata(language)

        self.collector = ReportPathCollector()
        self.aggregator = CoverageAggregator(
            self.collector,
            self._kind_registry,
            strict=config.analysis.strict if strict is None else strict,
        )

    @property
    def languages(self) -> List[str]:
        return list(self._languages)

    def build_sensors(self) -> List[Sensor]:
        """One properties sensor per language, one coverage sensor per scope."""
        sensors: List[Sensor] = []
        for language in self._languages:
            metadata = self._kind_registry.metadata(language)
            sensors.append(PropertiesSensor(metadata, self._kind_registry))
            for scope in self._config.scopes:
                sensors.append(
                    CoverageReportImportSensor(
                        self._kind_registry.resolve_keys(language, scope),
                        self.aggregator,
                        metadata,
                    )
                )
        return sensors

    def build_tasks(self) -> List[SensorTask]:
        sensors = self.build_sensors()
        tasks: List[SensorTask] = []
        for module in self._config.effective_modules():
            context = SensorContext(
                module=module.identity(),
                properties=self._config.property_source(module),
                collector=self.collector,
                languages=list(module.languages),
            )
            tasks.extend(SensorTask(sensor=sensor, context=context) for sensor in sensors)
        return tasks

    def execute(self) -> AnalysisResult:
        """Run every sensor, then build one report set per language and scope.

        Raises:
            EmptyReportSetError: In strict mode, for the first empty report set.
            RegistrySealedError: If a sensor wrote after sealing.
        """
        executor = ParallelSensorExecutor(
            max_workers=self._config.analysis.max_workers,
            sequential=self._config.analysis.sequential,
        )
        try:
            sensor_results = executor.execute(self.build_tasks())

            pairs: List[Tuple[str, TestScope]] = [
                (language, scope) for language in self._languages for scope in self._config.scopes
            ]
            report_sets = [self.aggregator.build_report_set(language, scope) for language, scope in pairs]
            # Sealed by the first report set; also covers runs without any pair.
            self.collector.seal()

            result = AnalysisResult(
                report_sets=report_sets,
                protobuf_dirs=self.collector.protobuf_dirs(),
                roslyn_reports=self.collector.roslyn_reports(),
                sensor_results=sensor_results,
            )
        finally:
            self.collector.discard()

        LOGGER.info(
            f"Analysis finished: {len(report_sets)} report set(s), "
            f"{len(result.rejected_paths)} rejected path(s), "
            f"{len(result.failed_sensors)} failed sensor(s)"
        )
        return result


def summarize(result: AnalysisResult) -> Dict[str, int]:
    """Counts used by reporters."""
    return {
        "report_sets": len(result.report_sets),
        "coverage_reports": sum(len(report_set.all_paths()) for report_set in result.report_sets),
        "protobuf_dirs": len(result.protobuf_dirs),
        "roslyn_reports": len(result.roslyn_reports),
        "rejected_paths": len(result.rejected_paths),
        "failed_sensors": len(result.failed_sensors),
    }
