"""Base class for sensors.

A sensor reads the properties of one module and contributes report paths
to the run's collector. Sensors of the same run may execute concurrently.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

from dotnetreports.config.models import PropertySource
from dotnetreports.core.models import ModuleIdentity
from dotnetreports.core.paths import InvalidPathError
from dotnetreports.registry.collector import ReportPathCollector


@dataclass(frozen=True)
class SensorDescriptor:
    """Name and applicability of a sensor."""

    name: str
    only_on_language: Optional[str] = None


@dataclass
class SensorContext:
    """Everything a sensor may read or write while analysing one module."""

    module: ModuleIdentity
    properties: PropertySource
    collector: ReportPathCollector
    languages: List[str] = field(default_factory=list)

    def applies_to(self, descriptor: SensorDescriptor) -> bool:
        """Whether a sensor restricted to a language runs on this module.

        A module that declares no languages accepts every sensor.
        """
        if descriptor.only_on_language is None or not self.languages:
            return True
        return descriptor.only_on_language in self.languages


@dataclass
class SensorOutcome:
    """What one sensor execution contributed."""

    contributed: int = 0
    rejected: List[InvalidPathError] = field(default_factory=list)
    skipped: bool = False


class Sensor(ABC):
    """Abstract base class for sensors."""

    @abstractmethod
    def describe(self) -> SensorDescriptor:
        """Describe the sensor."""

    @abstractmethod
    def execute(self, context: SensorContext) -> SensorOutcome:
        """Read the module's properties and contribute report paths.

        Raises:
            RegistrySealedError: If the collector no longer accepts writes.
        """

    @property
    def name(self) -> str:
        return self.describe().name

    def should_execute(self, context: SensorContext) -> bool:
        return context.applies_to(self.describe())
