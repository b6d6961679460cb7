"""JSON reporter plugin for dotnetreports."""

from __future__ import annotations

import json
from typing import Any, Dict, IO

from dotnetreports.core.models import CoverageReportSet
from dotnetreports.pipeline.executor import AnalysisResult, summarize
from dotnetreports.plugins.reporters.base import ReporterPlugin

SCHEMA_VERSION = "1.0"


class JSONReporter(ReporterPlugin):
    """Reporter plugin that outputs analysis results as JSON.

    Produces machine-readable JSON output containing:
    - Coverage report sets with the property key behind each kind
    - Protobuf directories and Roslyn reports
    - Rejected paths, failed sensors and summary counts
    """

    @property
    def name(self) -> str:
        return "json"

    def report(self, result: AnalysisResult, output: IO[str]) -> None:
        json.dump(self._format_result(result), output, indent=2)
        output.write("\n")

    def _format_result(self, result: AnalysisResult) -> Dict[str, Any]:
        return {
            "schema_version": SCHEMA_VERSION,
            "coverage": [self._report_set_to_dict(report_set) for report_set in result.report_sets],
            "protobuf_dirs": [str(path) for path in result.protobuf_dirs],
            "roslyn_reports": [
                {"module": report.module.key, "path": str(report.path)}
                for report in result.roslyn_reports
            ],
            "rejected_paths": [
                {"path": str(error.raw_path), "reason": error.reason}
                for error in result.rejected_paths
            ],
            "failed_sensors": [
                {"sensor": failed.sensor_name, "module": failed.module_key, "error": failed.error}
                for failed in result.failed_sensors
            ],
            "summary": summarize(result),
        }

    def _report_set_to_dict(self, report_set: CoverageReportSet) -> Dict[str, Any]:
        configuration = report_set.configuration
        return {
            "language": report_set.language,
            "scope": report_set.scope.value,
            "reports": {
                kind.value: {
                    "property": key,
                    "paths": [str(path) for path in report_set.paths(kind)],
                }
                for kind, key in configuration.keys().items()
            },
        }
