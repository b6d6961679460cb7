"""Sensors contributing report paths during an analysis run."""

from dotnetreports.sensors.base import Sensor, SensorContext, SensorDescriptor, SensorOutcome
from dotnetreports.sensors.coverage import CoverageReportImportSensor
from dotnetreports.sensors.properties import PropertiesSensor

__all__ = [
    "CoverageReportImportSensor",
    "PropertiesSensor",
    "Sensor",
    "SensorContext",
    "SensorDescriptor",
    "SensorOutcome",
]
