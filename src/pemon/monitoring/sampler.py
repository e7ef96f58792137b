"""
The periodic sampling loop.

SamplingLoop drives one collection session through four states:

    INITIALIZING -> RUNNING -> DRAINING -> TERMINATED

- INITIALIZING: check the collaborators, enumerate cores, take the seed
  counter snapshot of every core.
- RUNNING: once per interval, re-read the kernel sources, compute per-core
  utilization, query the sensor and storage collaborators and append one
  TelemetrySample to the session log.
- DRAINING: no more samples are taken; the log is ready for aggregation.
- TERMINATED: the caller has finished reporting.

Cancellation is requested through a threading.Event owned by the caller
(typically set from a signal handler). It is checked once at the top of
every tick, so a tick that has started always completes.
"""

import logging
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from ..collectors.base import AbstractSensorReader, AbstractStorageTempReader
from ..errors import PemonError
from ..models.samples import SessionLog, TelemetrySample
from ..system.procfs import enumerate_cores, parse_all_snapshots, read_text
from ..validation import describe_error
from .utilization import UtilizationTracker

logger = logging.getLogger(__name__)


class LoopState(Enum):
    INITIALIZING = "initializing"
    RUNNING = "running"
    DRAINING = "draining"
    TERMINATED = "terminated"


@dataclass
class SamplingOutcome:
    """
    Result of a finished sampling session.

    Attributes:
        log: Every sample collected before the loop stopped.
        error: The error that ended the run, or None for a clean stop.
        cancelled: True when the loop stopped on a cancellation request.
    """

    log: SessionLog
    error: Optional[BaseException] = None
    cancelled: bool = False

    @property
    def errored(self) -> bool:
        return self.error is not None


class SamplingLoop:
    """
    Collects one TelemetrySample per interval until cancelled, until
    ``max_ticks`` samples exist, or until any step fails.
    """

    def __init__(
        self,
        interval_seconds: float,
        sensor_reader: AbstractSensorReader,
        storage_reader: AbstractStorageTempReader,
        cancel_event: threading.Event,
        stat_path: str = "/proc/stat",
        cpuinfo_path: str = "/proc/cpuinfo",
        max_ticks: Optional[int] = None,
        read_source: Callable[[str], str] = read_text,
        clock: Callable[[], float] = time.time,
    ):
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")
        if max_ticks is not None and max_ticks < 1:
            raise ValueError(f"max_ticks must be >= 1, got {max_ticks}")

        self.interval_seconds = interval_seconds
        self.sensor_reader = sensor_reader
        self.storage_reader = storage_reader
        self.cancel_event = cancel_event
        self.stat_path = stat_path
        self.cpuinfo_path = cpuinfo_path
        self.max_ticks = max_ticks
        self._read_source = read_source
        self._clock = clock

        self.state = LoopState.INITIALIZING
        self.tracker: Optional[UtilizationTracker] = None
        self.log = SessionLog()

    def _transition(self, new_state: LoopState) -> None:
        logger.info(f"Sampling loop: {self.state.value} -> {new_state.value}")
        self.state = new_state

    def setup(self) -> None:
        """
        Prepare the session: verify collaborators and seed the counter snapshots.

        Raises:
            PemonError: If a collaborator is unavailable or a kernel source
                cannot be parsed. The run must not continue.
        """
        if self.state is not LoopState.INITIALIZING or self.tracker is not None:
            raise RuntimeError(f"setup() called twice or in state {self.state.value}")

        self.sensor_reader.check_available()
        self.storage_reader.check_available()

        inventory = enumerate_cores(self._read_source(self.cpuinfo_path))
        seed = parse_all_snapshots(self._read_source(self.stat_path), inventory.core_count)
        self.tracker = UtilizationTracker(seed)
        logger.info(f"Found {inventory.core_count} CPU cores, sampling every {self.interval_seconds}s")

    def tick(self) -> TelemetrySample:
        """Collect a single sample. Any failure propagates to the caller."""
        inventory = enumerate_cores(self._read_source(self.cpuinfo_path))
        snapshots = parse_all_snapshots(self._read_source(self.stat_path), self.tracker.core_count)
        cores = self.tracker.sample_cores(inventory.frequencies_mhz, snapshots)

        sensors = self.sensor_reader.read()
        storage_temp = self.storage_reader.read()

        return TelemetrySample(
            timestamp=self._clock(),
            cores=cores,
            sensors=sensors,
            storage_temp=storage_temp,
        )

    def run(self) -> SamplingOutcome:
        """
        Run the session and return the collected log.

        Setup errors are raised to the caller, since there is nothing to
        report yet. Errors after setup end the run but keep the samples
        collected so far in the returned outcome.
        """
        if self.state is not LoopState.INITIALIZING:
            raise RuntimeError(f"run() called in state {self.state.value}")
        if self.tracker is None:
            self.setup()
        self._transition(LoopState.RUNNING)

        outcome = SamplingOutcome(log=self.log)

        # The first interval only establishes the baseline for the deltas.
        self.cancel_event.wait(self.interval_seconds)

        while True:
            if self.cancel_event.is_set():
                logger.info("Cancellation requested, stopping sampling")
                outcome.cancelled = True
                break

            try:
                sample = self.tick()
            except PemonError as e:
                logger.error(f"Collecting telemetry failed: {describe_error(e)}")
                outcome.error = e
                break
            except Exception as e:
                logger.error(
                    f"Unexpected error while collecting telemetry: {type(e).__name__}: {e}",
                    exc_info=True,
                )
                outcome.error = e
                break

            self.log.append(sample)
            logger.debug(
                f"Sample {len(self.log)}: cpu_temp={sample.sensors.cpu_temp} "
                f"storage_temp={sample.storage_temp} "
                f"mean_util={sample.mean_utilization:.1f}%"
            )

            if self.max_ticks is not None and len(self.log) >= self.max_ticks:
                logger.info(f"Collected {self.max_ticks} samples, stopping sampling")
                break

            self.cancel_event.wait(self.interval_seconds)

        self._transition(LoopState.DRAINING)
        return outcome

    def terminate(self) -> None:
        """Mark the session as fully handled once the report is out."""
        if self.state is not LoopState.DRAINING:
            raise RuntimeError(f"terminate() called in state {self.state.value}")
        self._transition(LoopState.TERMINATED)
