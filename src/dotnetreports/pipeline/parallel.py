"""Parallel sensor execution using ThreadPoolExecutor."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from dotnetreports.config.models import DEFAULT_MAX_WORKERS
from dotnetreports.core.logging import get_logger
from dotnetreports.core.paths import InvalidPathError
from dotnetreports.registry.collector import RegistrySealedError
from dotnetreports.sensors.base import Sensor, SensorContext

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class SensorTask:
    """One sensor bound to the module it analyses."""

    sensor: Sensor
    context: SensorContext

    @property
    def label(self) -> str:
        return f"{self.sensor.name} [{self.context.module.display_name}]"


@dataclass
class SensorResult:
    """Result from a single sensor execution."""

    sensor_name: str
    module_key: str
    contributed: int = 0
    rejected: List[InvalidPathError] = field(default_factory=list)
    skipped: bool = False
    error: Optional[str] = None
    success: bool = True


class ParallelSensorExecutor:
    """Executes sensors in parallel using ThreadPoolExecutor.

    Thread-safe aggregation of results using a lock. A failing sensor does
    not stop the others, except for RegistrySealedError, which means the
    run's phase ordering is broken and is re-raised.
    """

    def __init__(
        self,
        max_workers: int = DEFAULT_MAX_WORKERS,
        sequential: bool = False,
    ) -> None:
        """Initialize the executor.

        Args:
            max_workers: Maximum number of concurrent sensor threads.
            sequential: If True, run sensors sequentially (for debugging).
        """
        self._max_workers = max_workers
        self._sequential = sequential
        self._results_lock = threading.Lock()

    def execute(self, tasks: Sequence[SensorTask]) -> List[SensorResult]:
        """Execute sensor tasks and return their results in task order."""
        if not tasks:
            return []

        if self._sequential:
            return [self._run_sensor(task) for task in tasks]
        return self._execute_parallel(tasks)

    def _execute_parallel(self, tasks: Sequence[SensorTask]) -> List[SensorResult]:
        results: List[Optional[SensorResult]] = [None] * len(tasks)
        sealed_error: Optional[RegistrySealedError] = None

        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            future_to_index = {
                executor.submit(self._run_sensor, task): index
                for index, task in enumerate(tasks)
            }

            for future in as_completed(future_to_index):
                index = future_to_index[future]
                try:
                    result = future.result()
                except RegistrySealedError as e:
                    LOGGER.error(f"Sensor {tasks[index].label} ran after the registry was sealed: {e}")
                    sealed_error = sealed_error or e
                    continue
                except Exception as e:
                    LOGGER.error(f"Sensor {tasks[index].label} raised exception: {e}")
                    result = SensorResult(
                        sensor_name=tasks[index].sensor.name,
                        module_key=tasks[index].context.module.key,
                        error=str(e),
                        success=False,
                    )
                with self._results_lock:
                    results[index] = result

        if sealed_error is not None:
            raise sealed_error
        return [result for result in results if result is not None]

    def _run_sensor(self, task: SensorTask) -> SensorResult:
        """Run a single sensor and return its result.

        Catches every exception except RegistrySealedError.
        """
        sensor_name = task.sensor.name
        module_key = task.context.module.key

        try:
            if not task.sensor.should_execute(task.context):
                LOGGER.debug(f"Skipping {task.label}")
                return SensorResult(sensor_name=sensor_name, module_key=module_key, skipped=True)

            LOGGER.info(f"Running {task.label}...")
            outcome = task.sensor.execute(task.context)
        except RegistrySealedError:
            raise
        except Exception as e:
            LOGGER.error(f"Sensor {task.label} failed: {e}")
            return SensorResult(
                sensor_name=sensor_name,
                module_key=module_key,
                error=str(e),
                success=False,
            )

        return SensorResult(
            sensor_name=sensor_name,
            module_key=module_key,
            contributed=outcome.contributed,
            rejected=list(outcome.rejected),
            skipped=outcome.skipped,
        )
