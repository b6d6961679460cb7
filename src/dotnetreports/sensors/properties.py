"""Sensor contributing static-analysis report locations."""

from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

from dotnetreports.config.coverage import KindRegistry
from dotnetreports.core.logging import get_logger
from dotnetreports.core.models import RoslynReport
from dotnetreports.core.paths import InvalidPathError, normalize_all
from dotnetreports.plugins.languages import LanguagePlugin
from dotnetreports.sensors.base import Sensor, SensorContext, SensorDescriptor, SensorOutcome

LOGGER = get_logger(__name__)


class PropertiesSensor(Sensor):
    """Collects protobuf output directories and Roslyn report files.

    Protobuf reports live in ``<project out path>/output-<language>``; only
    directories that exist are contributed. Roslyn report paths are
    contributed as given, tagged with the module that declared them.
    """

    def __init__(self, metadata: LanguagePlugin, kind_registry: KindRegistry) -> None:
        self._metadata = metadata
        self._kind_registry = kind_registry

    def describe(self) -> SensorDescriptor:
        return SensorDescriptor(
            name=f"{self._metadata.short_language_name} Properties",
            only_on_language=self._metadata.language_key,
        )

    def protobuf_report_paths(self, context: SensorContext) -> Tuple[List[Path], List[InvalidPathError]]:
        language = self._metadata.language_key
        raw = context.properties.get_string_array(self._kind_registry.protobuf_key(language))
        out_paths, rejected = normalize_all(raw, context.module.base_dir)

        report_dirs: List[Path] = []
        for out_path in out_paths:
            report_dir = out_path / self._metadata.analyzer_work_dir
            if report_dir.is_dir():
                report_dirs.append(report_dir)
            else:
                LOGGER.debug(f"Analyzer working directory does not exist: '{report_dir}'")
        return report_dirs, rejected

    def execute(self, context: SensorContext) -> SensorOutcome:
        language = self._metadata.language_key
        outcome = SensorOutcome()

        protobuf_dirs, rejected = self.protobuf_report_paths(context)
        outcome.rejected.extend(rejected)
        if protobuf_dirs:
            context.collector.add_protobuf_dirs(protobuf_dirs, module=context.module, language=language)
            outcome.contributed += len(protobuf_dirs)

        raw_roslyn = context.properties.get_string_array(self._kind_registry.roslyn_key(language))
        roslyn_paths, rejected = normalize_all(raw_roslyn, context.module.base_dir)
        outcome.rejected.extend(rejected)
        if roslyn_paths:
            context.collector.add_roslyn_dirs(
                [RoslynReport(module=context.module, path=path) for path in roslyn_paths],
                language=language,
            )
            outcome.contributed += len(roslyn_paths)

        return outcome
