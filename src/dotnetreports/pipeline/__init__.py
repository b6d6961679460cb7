"""Sensor pipeline for one analysis run."""

from dotnetreports.pipeline.executor import AnalysisResult, AnalysisRun
from dotnetreports.pipeline.parallel import ParallelSensorExecutor, SensorResult, SensorTask

__all__ = [
    "AnalysisResult",
    "AnalysisRun",
    "ParallelSensorExecutor",
    "SensorResult",
    "SensorTask",
]
