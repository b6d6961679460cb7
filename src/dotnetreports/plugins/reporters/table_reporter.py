"""Table reporter plugin for dotnetreports."""

from __future__ import annotations

from typing import IO, List

from dotnetreports.pipeline.executor import AnalysisResult, summarize
from dotnetreports.plugins.reporters.base import ReporterPlugin


class TableReporter(ReporterPlugin):
    """Reporter plugin that outputs collected report paths as a table."""

    @property
    def name(self) -> str:
        return "table"

    def report(self, result: AnalysisResult, output: IO[str]) -> None:
        lines = self._format_table(result)
        output.write("\n".join(lines))
        output.write("\n")

    def _format_table(self, result: AnalysisResult) -> List[str]:
        lines: List[str] = []
        rows = [
            (report_set.language, report_set.scope.value, kind.display_name, str(path))
            for report_set in result.report_sets
            for kind in report_set.reports
            for path in report_set.paths(kind)
        ]

        if not rows:
            lines.append("No coverage reports collected.")
        else:
            lines.append(f"{'LANGUAGE':<10} {'SCOPE':<12} {'TOOL':<22} {'PATH'}")
            lines.append("-" * 100)
            for language, scope, tool, path in rows:
                lines.append(f"{language:<10} {scope:<12} {tool:<22} {path}")

        if result.protobuf_dirs:
            lines.append("")
            lines.append("Protobuf directories:")
            lines.extend(f"  {path}" for path in result.protobuf_dirs)

        if result.roslyn_reports:
            lines.append("")
            lines.append("Roslyn reports:")
            lines.extend(f"  {report.path} ({report.module.key})" for report in result.roslyn_reports)

        if result.rejected_paths:
            lines.append("")
            lines.append("Rejected paths:")
            lines.extend(f"  {error.raw_path!s}: {error.reason}" for error in result.rejected_paths)

        counts = summarize(result)
        lines.append("")
        lines.append(
            f"Summary: {counts['coverage_reports']} coverage report(s), "
            f"{counts['protobuf_dirs']} protobuf dir(s), "
            f"{counts['roslyn_reports']} Roslyn report(s), "
            f"{counts['rejected_paths']} rejected, "
            f"{counts['failed_sensors']} failed sensor(s)"
        )
        return lines
