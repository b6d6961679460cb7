"""Tests for ReportPathCollector."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from dotnetreports.core.models import ModuleIdentity, ReportKind, RoslynReport, TestScope
from dotnetreports.registry.collector import (
    RegistrySealedError,
    RegistryState,
    ReportPathCollector,
)


class TestAddPaths:
    """Tests for add_paths and snapshot."""

    def test_snapshot_preserves_order(self, collector: ReportPathCollector) -> None:
        paths = [Path("c.xml"), Path("a.xml"), Path("b.xml")]
        collector.add_paths(ReportKind.OPENCOVER, TestScope.UNIT, paths)
        assert collector.snapshot(ReportKind.OPENCOVER, TestScope.UNIT) == paths

    def test_duplicates_within_one_contribution(self, collector: ReportPathCollector) -> None:
        collector.add_paths(
            ReportKind.OPENCOVER,
            TestScope.UNIT,
            ["a/report.xml", "a/report.xml", "b/report.xml"],
        )
        assert collector.snapshot(ReportKind.OPENCOVER, TestScope.UNIT) == [
            Path("a/report.xml"),
            Path("b/report.xml"),
        ]

    def test_overlapping_contributions_keep_first_seen_order(self, collector: ReportPathCollector) -> None:
        collector.add_paths(ReportKind.DOTCOVER, TestScope.UNIT, ["a.html", "b.html"])
        collector.add_paths(ReportKind.DOTCOVER, TestScope.UNIT, ["c.html", "a.html", "b.html"])
        assert collector.snapshot(ReportKind.DOTCOVER, TestScope.UNIT) == [
            Path("a.html"),
            Path("b.html"),
            Path("c.html"),
        ]

    def test_duplicates_detected_on_normalized_path(self, collector: ReportPathCollector) -> None:
        collector.add_paths(ReportKind.VS_XML, TestScope.UNIT, ["out/a.coveragexml", "out/./a.coveragexml"])
        assert collector.snapshot(ReportKind.VS_XML, TestScope.UNIT) == [Path("out/a.coveragexml")]

    def test_empty_contribution_is_noop(self, collector: ReportPathCollector) -> None:
        collector.add_paths(ReportKind.OPENCOVER, TestScope.UNIT, ["a.xml"])
        collector.add_paths(ReportKind.OPENCOVER, TestScope.UNIT, [])
        assert collector.snapshot(ReportKind.OPENCOVER, TestScope.UNIT) == [Path("a.xml")]

    def test_empty_contribution_keeps_init_state(self, collector: ReportPathCollector) -> None:
        collector.add_paths(ReportKind.OPENCOVER, TestScope.UNIT, [])
        assert collector.state is RegistryState.INIT

    def test_first_contribution_starts_collecting(self, collector: ReportPathCollector) -> None:
        collector.add_paths(ReportKind.OPENCOVER, TestScope.UNIT, ["a.xml"])
        assert collector.state is RegistryState.COLLECTING

    def test_scopes_are_separate(self, collector: ReportPathCollector) -> None:
        collector.add_paths(ReportKind.OPENCOVER, TestScope.UNIT, ["unit.xml"])
        collector.add_paths(ReportKind.OPENCOVER, TestScope.INTEGRATION, ["it.xml"])
        assert collector.snapshot(ReportKind.OPENCOVER, TestScope.UNIT) == [Path("unit.xml")]
        assert collector.snapshot(ReportKind.OPENCOVER, TestScope.INTEGRATION) == [Path("it.xml")]

    def test_snapshot_without_contributions(self, collector: ReportPathCollector) -> None:
        assert collector.snapshot(ReportKind.NCOVER3, TestScope.INTEGRATION) == []

    def test_snapshot_is_a_copy(self, collector: ReportPathCollector) -> None:
        collector.add_paths(ReportKind.OPENCOVER, TestScope.UNIT, ["a.xml"])
        collector.snapshot(ReportKind.OPENCOVER, TestScope.UNIT).append(Path("x.xml"))
        assert collector.snapshot(ReportKind.OPENCOVER, TestScope.UNIT) == [Path("a.xml")]

    def test_entries_carry_module_and_language(
        self, collector: ReportPathCollector, module: ModuleIdentity
    ) -> None:
        collector.add_paths(ReportKind.OPENCOVER, TestScope.UNIT, ["a.xml"], module=module, language="vbnet")
        (entry,) = collector.entries(ReportKind.OPENCOVER, TestScope.UNIT)
        assert entry.module == module
        assert entry.language == "vbnet"
        assert entry.kind is ReportKind.OPENCOVER
        assert entry.scope is TestScope.UNIT


class TestLanguageViews:
    """Snapshots filtered by contributing language."""

    def test_same_report_shared_by_two_languages(self, collector: ReportPathCollector) -> None:
        collector.add_paths(ReportKind.OPENCOVER, TestScope.UNIT, ["shared.xml"], language="cs")
        collector.add_paths(ReportKind.OPENCOVER, TestScope.UNIT, ["shared.xml", "vb.xml"], language="vbnet")

        assert collector.snapshot(ReportKind.OPENCOVER, TestScope.UNIT, language="cs") == [Path("shared.xml")]
        assert collector.snapshot(ReportKind.OPENCOVER, TestScope.UNIT, language="vbnet") == [
            Path("shared.xml"),
            Path("vb.xml"),
        ]
        assert collector.snapshot(ReportKind.OPENCOVER, TestScope.UNIT) == [
            Path("shared.xml"),
            Path("vb.xml"),
        ]

    def test_untagged_paths_visible_to_every_language(self, collector: ReportPathCollector) -> None:
        collector.add_paths(ReportKind.OPENCOVER, TestScope.UNIT, ["any.xml"])
        assert collector.snapshot(ReportKind.OPENCOVER, TestScope.UNIT, language="cs") == [Path("any.xml")]


class TestStaticAnalysisReports:
    def test_protobuf_dirs(self, collector: ReportPathCollector) -> None:
        collector.add_protobuf_dirs([Path("/out/output-vbnet"), Path("/out/output-vbnet")])
        assert collector.protobuf_dirs() == [Path("/out/output-vbnet")]

    def test_empty_protobuf_dirs_noop(self, collector: ReportPathCollector) -> None:
        collector.add_protobuf_dirs([])
        assert collector.protobuf_dirs() == []
        assert collector.state is RegistryState.INIT

    def test_roslyn_reports_keep_module(self, collector: ReportPathCollector, module: ModuleIdentity) -> None:
        report = RoslynReport(module=module, path=Path("/out/roslyn.json"))
        collector.add_roslyn_dirs([report, report])
        assert collector.roslyn_reports() == [report]
        assert collector.snapshot(ReportKind.ROSLYN, None) == [Path("/out/roslyn.json")]

    def test_empty_roslyn_reports_noop(self, collector: ReportPathCollector) -> None:
        collector.add_roslyn_dirs([])
        assert collector.roslyn_reports() == []


class TestLifecycle:
    """Tests for sealing and discarding."""

    def test_add_after_seal_raises(self, collector: ReportPathCollector) -> None:
        collector.add_paths(ReportKind.OPENCOVER, TestScope.UNIT, ["a.xml"])
        collector.seal()

        with pytest.raises(RegistrySealedError):
            collector.add_paths(ReportKind.OPENCOVER, TestScope.UNIT, ["b.xml"])
        assert collector.snapshot(ReportKind.OPENCOVER, TestScope.UNIT) == [Path("a.xml")]

    def test_empty_add_after_seal_raises(self, collector: ReportPathCollector) -> None:
        collector.seal()
        with pytest.raises(RegistrySealedError):
            collector.add_paths(ReportKind.OPENCOVER, TestScope.UNIT, [])

    def test_static_analysis_adds_after_seal_raise(
        self, collector: ReportPathCollector, module: ModuleIdentity
    ) -> None:
        collector.seal()
        with pytest.raises(RegistrySealedError):
            collector.add_protobuf_dirs([Path("/out")])
        with pytest.raises(RegistrySealedError):
            collector.add_roslyn_dirs([RoslynReport(module=module, path=Path("r.json"))])

    def test_seal_happens_once(self, collector: ReportPathCollector) -> None:
        assert collector.seal() is True
        assert collector.seal() is False
        assert collector.state is RegistryState.SEALED
        assert collector.sealed

    def test_discard_drops_everything(self, collector: ReportPathCollector) -> None:
        collector.add_paths(ReportKind.OPENCOVER, TestScope.UNIT, ["a.xml"])
        collector.seal()
        collector.discard()

        assert collector.state is RegistryState.DISCARDED
        assert collector.snapshot(ReportKind.OPENCOVER, TestScope.UNIT) == []
        assert collector.seal() is False
        with pytest.raises(RegistrySealedError):
            collector.add_paths(ReportKind.OPENCOVER, TestScope.UNIT, ["a.xml"])


class TestConcurrency:
    """Contributions from many threads against one collector."""

    def test_concurrent_contributions_are_not_lost(self, collector: ReportPathCollector) -> None:
        workers = 8
        per_worker = 50
        barrier = threading.Barrier(workers)

        def contribute(worker: int) -> None:
            barrier.wait()
            for i in range(per_worker):
                # Every worker also re-contributes a shared path
                collector.add_paths(
                    ReportKind.OPENCOVER,
                    TestScope.UNIT,
                    [f"w{worker}/r{i}.xml", "shared.xml"],
                )

        with ThreadPoolExecutor(max_workers=workers) as executor:
            list(executor.map(contribute, range(workers)))

        snapshot = collector.snapshot(ReportKind.OPENCOVER, TestScope.UNIT)
        assert len(snapshot) == workers * per_worker + 1
        assert len(set(snapshot)) == len(snapshot)
        assert snapshot.count(Path("shared.xml")) == 1

    def test_per_worker_order_preserved(self, collector: ReportPathCollector) -> None:
        def contribute(worker: int) -> None:
            for i in range(20):
                collector.add_paths(ReportKind.DOTCOVER, TestScope.INTEGRATION, [f"w{worker}/{i}.html"])

        with ThreadPoolExecutor(max_workers=4) as executor:
            list(executor.map(contribute, range(4)))

        snapshot = collector.snapshot(ReportKind.DOTCOVER, TestScope.INTEGRATION)
        for worker in range(4):
            mine = [p for p in snapshot if p.parts[0] == f"w{worker}"]
            assert mine == [Path(f"w{worker}/{i}.html") for i in range(20)]
