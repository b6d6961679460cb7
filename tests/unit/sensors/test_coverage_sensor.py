"""Tests for CoverageReportImportSensor."""

from __future__ import annotations

from pathlib import Path

import pytest

from dotnetreports.config.coverage import KindRegistry
from dotnetreports.config.models import PropertySource
from dotnetreports.core.models import ModuleIdentity, ReportKind, TestScope
from dotnetreports.plugins.languages import CSharpPlugin, VbNetPlugin
from dotnetreports.registry.aggregator import CoverageAggregator
from dotnetreports.registry.collector import RegistrySealedError, ReportPathCollector
from dotnetreports.sensors.base import SensorContext
from dotnetreports.sensors.coverage import CoverageReportImportSensor


@pytest.fixture
def aggregator(collector: ReportPathCollector, kind_registry: KindRegistry) -> CoverageAggregator:
    return CoverageAggregator(collector, kind_registry)


def make_sensor(
    kind_registry: KindRegistry,
    aggregator: CoverageAggregator,
    scope: TestScope = TestScope.UNIT,
) -> CoverageReportImportSensor:
    return CoverageReportImportSensor(
        kind_registry.resolve_keys("vbnet", scope), aggregator, VbNetPlugin()
    )


def make_context(
    module: ModuleIdentity,
    collector: ReportPathCollector,
    properties: dict,
    languages: list | None = None,
) -> SensorContext:
    return SensorContext(
        module=module,
        properties=PropertySource(properties),
        collector=collector,
        languages=languages or [],
    )


class TestDescribe:
    def test_unit_sensor_name(self, kind_registry: KindRegistry, aggregator: CoverageAggregator) -> None:
        descriptor = make_sensor(kind_registry, aggregator).describe()
        assert descriptor.name == "VB.NET Tests Coverage"
        assert descriptor.only_on_language == "vbnet"

    def test_integration_sensor_name(self, kind_registry: KindRegistry, aggregator: CoverageAggregator) -> None:
        sensor = make_sensor(kind_registry, aggregator, TestScope.INTEGRATION)
        assert sensor.is_integration_test
        assert sensor.name == "VB.NET Integration Tests Coverage"

    def test_configuration_must_match_language(
        self, kind_registry: KindRegistry, aggregator: CoverageAggregator
    ) -> None:
        with pytest.raises(ValueError):
            CoverageReportImportSensor(
                kind_registry.resolve_keys("vbnet", TestScope.UNIT), aggregator, CSharpPlugin()
            )


class TestShouldExecute:
    def test_skips_without_coverage_property(
        self,
        kind_registry: KindRegistry,
        aggregator: CoverageAggregator,
        collector: ReportPathCollector,
        module: ModuleIdentity,
    ) -> None:
        sensor = make_sensor(kind_registry, aggregator)
        context = make_context(module, collector, {"sonar.vbnet.opencover.it.reportsPaths": "a.xml"})
        assert not sensor.should_execute(context)

    def test_skips_modules_of_other_languages(
        self,
        kind_registry: KindRegistry,
        aggregator: CoverageAggregator,
        collector: ReportPathCollector,
        module: ModuleIdentity,
    ) -> None:
        sensor = make_sensor(kind_registry, aggregator)
        context = make_context(
            module, collector, {"sonar.vbnet.opencover.reportsPaths": "a.xml"}, languages=["cs"]
        )
        assert not sensor.should_execute(context)

    def test_runs_when_configured(
        self,
        kind_registry: KindRegistry,
        aggregator: CoverageAggregator,
        collector: ReportPathCollector,
        module: ModuleIdentity,
    ) -> None:
        sensor = make_sensor(kind_registry, aggregator)
        context = make_context(
            module, collector, {"sonar.vbnet.opencover.reportsPaths": "a.xml"}, languages=["vbnet"]
        )
        assert sensor.should_execute(context)


class TestExecute:
    """Tests for contributing coverage paths."""

    def test_contributes_every_kind(
        self,
        kind_registry: KindRegistry,
        aggregator: CoverageAggregator,
        collector: ReportPathCollector,
        module: ModuleIdentity,
    ) -> None:
        base = module.base_dir
        context = make_context(
            module,
            collector,
            {
                "sonar.vbnet.ncover3.reportsPaths": "report.nccov",
                "sonar.vbnet.opencover.reportsPaths": "report1.xml,report2.xml",
                "sonar.vbnet.dotcover.reportsPaths": ["out/report.html"],
                "sonar.vbnet.vscoveragexml.reportsPaths": "/abs/report.coveragexml",
                "sonar.vbnet.opencover.it.reportsPaths": "it.xml",
            },
        )

        outcome = make_sensor(kind_registry, aggregator).execute(context)

        assert outcome.contributed == 5
        assert outcome.rejected == []
        assert collector.snapshot(ReportKind.NCOVER3, TestScope.UNIT) == [base / "report.nccov"]
        assert collector.snapshot(ReportKind.OPENCOVER, TestScope.UNIT) == [
            base / "report1.xml",
            base / "report2.xml",
        ]
        assert collector.snapshot(ReportKind.DOTCOVER, TestScope.UNIT) == [base / "out" / "report.html"]
        assert collector.snapshot(ReportKind.VS_XML, TestScope.UNIT) == [Path("/abs/report.coveragexml")]
        assert collector.snapshot(ReportKind.OPENCOVER, TestScope.INTEGRATION) == []

    def test_tags_module_and_language(
        self,
        kind_registry: KindRegistry,
        aggregator: CoverageAggregator,
        collector: ReportPathCollector,
        module: ModuleIdentity,
    ) -> None:
        context = make_context(module, collector, {"sonar.vbnet.opencover.reportsPaths": "a.xml"})
        make_sensor(kind_registry, aggregator).execute(context)
        (entry,) = collector.entries(ReportKind.OPENCOVER, TestScope.UNIT)
        assert entry.module == module
        assert entry.language == "vbnet"

    def test_invalid_path_skipped_rest_kept(
        self,
        kind_registry: KindRegistry,
        aggregator: CoverageAggregator,
        collector: ReportPathCollector,
    ) -> None:
        module = ModuleIdentity(key="M", base_dir=Path("/work/m"))
        context = make_context(
            module, collector, {"sonar.vbnet.opencover.reportsPaths": "../../../x.xml,ok.xml"}
        )
        outcome = make_sensor(kind_registry, aggregator).execute(context)

        assert outcome.contributed == 1
        assert len(outcome.rejected) == 1
        assert collector.snapshot(ReportKind.OPENCOVER, TestScope.UNIT) == [Path("/work/m/ok.xml")]

    def test_nothing_configured_contributes_nothing(
        self,
        kind_registry: KindRegistry,
        aggregator: CoverageAggregator,
        collector: ReportPathCollector,
        module: ModuleIdentity,
    ) -> None:
        outcome = make_sensor(kind_registry, aggregator).execute(make_context(module, collector, {}))
        assert outcome.contributed == 0
        assert collector.snapshot(ReportKind.OPENCOVER, TestScope.UNIT) == []

    def test_execute_after_seal_raises(
        self,
        kind_registry: KindRegistry,
        aggregator: CoverageAggregator,
        collector: ReportPathCollector,
        module: ModuleIdentity,
    ) -> None:
        aggregator.build_report_set("vbnet", TestScope.UNIT)
        context = make_context(module, collector, {"sonar.vbnet.opencover.reportsPaths": "a.xml"})
        with pytest.raises(RegistrySealedError):
            make_sensor(kind_registry, aggregator).execute(context)
