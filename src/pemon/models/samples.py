"""
Sample data models.

This module defines the records produced while a sampling session runs:

- CoreCounterSnapshot: cumulative per-core time counters from the kernel
- CoreInfoSample: frequency and utilization of one core for one tick
- SensorReading / TelemetrySample: everything collected in one tick
- SessionLog: the ordered, append-only sequence of ticks of one run
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

# Order of the per-core counters on a `cpu<N>` line of /proc/stat.
COUNTER_FIELDS: Tuple[str, ...] = (
    "user",
    "nice",
    "system",
    "idle",
    "iowait",
    "irq",
    "softirq",
    "steal",
    "guest",
    "guest_nice",
)

# Kernels before 2.6.33 do not report guest_nice.
MIN_COUNTER_FIELDS = len(COUNTER_FIELDS) - 1


@dataclass(frozen=True)
class CoreCounterSnapshot:
    """
    Cumulative time counters of one logical core, in clock ticks.

    Every counter is non-decreasing on a live system, so two snapshots of
    the same core taken in order give the time spent in each state during
    the interval between them.
    """

    user: int
    nice: int
    system: int
    idle: int
    iowait: int
    irq: int
    softirq: int
    steal: int
    guest: int
    guest_nice: int = 0
    # Number of counters the kernel actually reported (9 or 10).
    field_count: int = field(default=len(COUNTER_FIELDS), compare=False, repr=False)

    @property
    def total(self) -> int:
        """Sum of all counters."""
        return self.total_over(len(COUNTER_FIELDS))

    def total_over(self, field_count: int) -> int:
        """Sum of the first ``field_count`` counters."""
        return sum(getattr(self, name) for name in COUNTER_FIELDS[:field_count])


@dataclass(frozen=True)
class CoreInfoSample:
    """
    Frequency and utilization of one core during one tick.

    Attributes:
        core_id: 1-based core identifier, stable for the whole run.
        frequency_mhz: Current clock frequency reported by the kernel.
        utilization: Busy share of the last interval, in percent [0, 100].
    """

    core_id: int
    frequency_mhz: float
    utilization: float


@dataclass(frozen=True)
class SensorReading:
    """Hardware monitor values for one tick (degrees Celsius and RPM)."""

    cpu_temp: int
    motherboard_temp: int
    chipset_temp: int
    cpu_fan_rpm: int
    chassis_fan_rpm: int


@dataclass(frozen=True)
class TelemetrySample:
    """
    Everything collected during one tick.

    ``cores`` is ordered by ascending core_id and holds one entry per core.
    """

    timestamp: float
    cores: Tuple[CoreInfoSample, ...]
    sensors: SensorReading
    storage_temp: int

    @property
    def mean_utilization(self) -> float:
        return sum(c.utilization for c in self.cores) / len(self.cores)

    @property
    def mean_frequency_mhz(self) -> float:
        return sum(c.frequency_mhz for c in self.cores) / len(self.cores)


class SessionLog:
    """
    Ordered, append-only sequence of the samples collected in one run.

    The sampling loop is the only writer. Once the loop has stopped the log
    is handed to the aggregator, which only reads it.
    """

    def __init__(self) -> None:
        self._samples: List[TelemetrySample] = []

    def append(self, sample: TelemetrySample) -> None:
        self._samples.append(sample)

    @property
    def samples(self) -> Tuple[TelemetrySample, ...]:
        return tuple(self._samples)

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[TelemetrySample]:
        return iter(tuple(self._samples))

    def __bool__(self) -> bool:
        return bool(self._samples)
