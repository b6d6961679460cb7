"""Thread-safe collection of report paths for one analysis run.

Sensors contribute paths concurrently while the run is collecting. The first
aggregator read seals the collector; from then on contributions are a
sensor ordering bug and raise RegistrySealedError.
"""

from __future__ import annotations

import os
import threading
from enum import Enum
from pathlib import Path, PurePath
from typing import Dict, List, Optional, Sequence, Set, Tuple, Union

from dotnetreports.core.logging import get_logger
from dotnetreports.core.models import ModuleIdentity, ReportKind, ReportPath, RoslynReport, TestScope

LOGGER = get_logger(__name__)

BucketKey = Tuple[ReportKind, Optional[TestScope]]


class RegistryState(Enum):
    INIT = "init"
    COLLECTING = "collecting"
    SEALED = "sealed"
    DISCARDED = "discarded"


class RegistrySealedError(RuntimeError):
    """A contribution arrived after the collector stopped accepting writes."""


class _Bucket:
    """Ordered, deduplicated entries for one (kind, scope)."""

    def __init__(self) -> None:
        self.entries: List[ReportPath] = []
        self.seen: Set[Tuple[Optional[str], str]] = set()

    def add(self, entry: ReportPath) -> bool:
        key = (entry.language, os.path.normpath(str(entry.path)))
        if key in self.seen:
            return False
        self.seen.add(key)
        self.entries.append(entry)
        return True


class ReportPathCollector:
    """Accumulates contributed report paths per report kind and test scope."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._buckets: Dict[BucketKey, _Bucket] = {}
        self._roslyn_reports: List[RoslynReport] = []
        self._state = RegistryState.INIT

    @property
    def state(self) -> RegistryState:
        with self._lock:
            return self._state

    @property
    def sealed(self) -> bool:
        return self.state in (RegistryState.SEALED, RegistryState.DISCARDED)

    def add_paths(
        self,
        kind: ReportKind,
        scope: Optional[TestScope],
        paths: Sequence[Union[str, PurePath]],
        module: Optional[ModuleIdentity] = None,
        language: Optional[str] = None,
    ) -> None:
        """Append unseen paths to the (kind, scope) collection.

        Raises:
            RegistrySealedError: If the collector is sealed or discarded.
        """
        with self._lock:
            self._check_writable(kind, scope)
            if not paths:
                return
            self._state = RegistryState.COLLECTING
            added = self._add_locked(kind, scope, paths, module, language)

        LOGGER.debug(
            f"Collected {added} new {kind.value} path(s)"
            f"{f' ({scope.value})' if scope else ''} of {len(paths)} contributed"
        )

    def add_protobuf_dirs(
        self,
        paths: Sequence[Union[str, PurePath]],
        module: Optional[ModuleIdentity] = None,
        language: Optional[str] = None,
    ) -> None:
        self.add_paths(ReportKind.PROTOBUF, None, paths, module=module, language=language)

    def add_roslyn_dirs(self, reports: Sequence[RoslynReport], language: Optional[str] = None) -> None:
        """Register Roslyn report files, each tagged with its module."""
        with self._lock:
            self._check_writable(ReportKind.ROSLYN, None)
            if not reports:
                return
            self._state = RegistryState.COLLECTING
            for report in reports:
                if self._add_locked(ReportKind.ROSLYN, None, [report.path], report.module, language):
                    self._roslyn_reports.append(report)

    def snapshot(
        self,
        kind: ReportKind,
        scope: Optional[TestScope],
        language: Optional[str] = None,
    ) -> List[Path]:
        """Return the collected paths for (kind, scope) in first-seen order.

        With a language, only paths contributed for that language (or without
        a language) are returned. Never raises.
        """
        result: List[Path] = []
        seen: Set[str] = set()
        for entry in self.entries(kind, scope):
            if language is not None and entry.language not in (None, language):
                continue
            key = os.path.normpath(str(entry.path))
            if key not in seen:
                seen.add(key)
                result.append(entry.path)
        return result

    def entries(self, kind: ReportKind, scope: Optional[TestScope]) -> List[ReportPath]:
        with self._lock:
            bucket = self._buckets.get((kind, scope))
            return list(bucket.entries) if bucket else []

    def protobuf_dirs(self) -> List[Path]:
        return self.snapshot(ReportKind.PROTOBUF, None)

    def roslyn_reports(self) -> List[RoslynReport]:
        with self._lock:
            return list(self._roslyn_reports)

    def seal(self) -> bool:
        """Stop accepting contributions.

        Returns:
            True if this call sealed the collector, False if it already was.
        """
        with self._lock:
            if self._state in (RegistryState.SEALED, RegistryState.DISCARDED):
                return False
            self._state = RegistryState.SEALED
            total = sum(len(b.entries) for b in self._buckets.values())
        LOGGER.debug(f"Report path collector sealed with {total} path(s)")
        return True

    def discard(self) -> None:
        """Drop every collected path at the end of the run."""
        with self._lock:
            self._buckets.clear()
            self._roslyn_reports.clear()
            self._state = RegistryState.DISCARDED

    def _check_writable(self, kind: ReportKind, scope: Optional[TestScope]) -> None:
        if self._state in (RegistryState.SEALED, RegistryState.DISCARDED):
            target = kind.value + (f"/{scope.value}" if scope else "")
            raise RegistrySealedError(
                f"Cannot add {target} report paths: collector is {self._state.value}"
            )

    def _add_locked(
        self,
        kind: ReportKind,
        scope: Optional[TestScope],
        paths: Sequence[Union[str, PurePath]],
        module: Optional[ModuleIdentity],
        language: Optional[str],
    ) -> int:
        bucket = self._buckets.setdefault((kind, scope), _Bucket())
        added = 0
        for path in paths:
            entry = ReportPath(
                path=Path(path),
                kind=kind,
                scope=scope,
                module=module,
                language=language,
            )
            if bucket.add(entry):
                added += 1
        return added
