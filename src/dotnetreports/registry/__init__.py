"""Report path registry: collection during a run, read-only views after."""

from dotnetreports.registry.aggregator import CoverageAggregator, EmptyReportSetError
from dotnetreports.registry.collector import (
    RegistrySealedError,
    RegistryState,
    ReportPathCollector,
)

__all__ = [
    "CoverageAggregator",
    "EmptyReportSetError",
    "RegistrySealedError",
    "RegistryState",
    "ReportPathCollector",
]
