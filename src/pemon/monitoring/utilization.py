"""
Per-core utilization from successive counter snapshots.

The kernel exposes cumulative time counters per core. Utilization over an
interval is the share of elapsed ticks that were not spent idle:

    total_delta = sum(current) - sum(previous)
    idle_delta  = current.idle - previous.idle
    utilization = 100 * (total_delta - idle_delta) / total_delta

UtilizationTracker owns the "previous" snapshot of every core and replaces
the whole set after each tick, so at most one previous value per core exists
at any time.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from ..errors import CoreCountMismatch, CounterRegression, ZeroIntervalCounters
from ..models.samples import CoreCounterSnapshot, CoreInfoSample

logger = logging.getLogger(__name__)


def compute_utilization(
    previous: CoreCounterSnapshot,
    current: CoreCounterSnapshot,
    core_index: Optional[int] = None,
) -> float:
    """
    Compute the busy percentage of one core between two snapshots.

    When the snapshots were parsed from lines with a different number of
    counters, both totals are taken over the shorter schema.

    Out-of-range deltas are raised, never clamped into range: a backwards
    idle counter or an idle delta larger than the total delta means the
    two snapshots do not describe one interval of the same core.

    Args:
        previous: Earlier snapshot of the core.
        current: Later snapshot of the same core.
        core_index: Kernel core index, only used in error messages.

    Returns:
        Utilization in percent, within [0, 100].

    Raises:
        ZeroIntervalCounters: If no ticks elapsed between the snapshots (or
            the counters went backwards).
        CounterRegression: If the idle delta is negative or exceeds the total
            delta.
    """
    field_count = min(previous.field_count, current.field_count)
    total_delta = current.total_over(field_count) - previous.total_over(field_count)
    idle_delta = current.idle - previous.idle

    if total_delta <= 0:
        raise ZeroIntervalCounters(
            f"No elapsed ticks for cpu{core_index} (total delta {total_delta})",
            core_index=core_index,
        )
    if not 0 <= idle_delta <= total_delta:
        raise CounterRegression(
            f"Idle delta {idle_delta} outside [0, {total_delta}] for cpu{core_index}",
            core_index=core_index,
        )

    return 100.0 * (total_delta - idle_delta) / total_delta


class UtilizationTracker:
    """
    Holds the last counter snapshot of every core and turns each new set of
    snapshots into per-core samples.

    Snapshot ``i`` belongs to kernel core ``cpu<i>`` and to core id ``i + 1``.
    """

    def __init__(self, seed: Sequence[CoreCounterSnapshot]):
        if not seed:
            raise CoreCountMismatch("Cannot track utilization of zero cores")
        self._snapshots: Tuple[CoreCounterSnapshot, ...] = tuple(seed)

    @property
    def core_count(self) -> int:
        return len(self._snapshots)

    @property
    def snapshots(self) -> Tuple[CoreCounterSnapshot, ...]:
        return self._snapshots

    def advance(self, current: Sequence[CoreCounterSnapshot]) -> List[float]:
        """
        Compute the utilization of every core against the retained snapshots,
        then retain ``current`` in their place.

        The retained set is only replaced when every core succeeded.

        Raises:
            CoreCountMismatch: If ``current`` does not cover the same cores.
            ZeroIntervalCounters, CounterRegression: see compute_utilization.
        """
        if len(current) != len(self._snapshots):
            raise CoreCountMismatch(
                f"Expected {len(self._snapshots)} core snapshots, got {len(current)}"
            )

        utilizations = [
            compute_utilization(prev, cur, core_index=i)
            for i, (prev, cur) in enumerate(zip(self._snapshots, current))
        ]
        self._snapshots = tuple(current)
        return utilizations

    def sample_cores(
        self,
        frequencies_mhz: Sequence[float],
        current: Sequence[CoreCounterSnapshot],
    ) -> Tuple[CoreInfoSample, ...]:
        """
        Pair core frequencies with fresh utilization values.

        Returns:
            One CoreInfoSample per core, ordered by ascending core id.
        """
        if len(frequencies_mhz) != len(current):
            raise CoreCountMismatch(
                f"{len(frequencies_mhz)} frequency entries for {len(current)} cores"
            )

        utilizations = self.advance(current)
        samples = tuple(
            CoreInfoSample(core_id=i + 1, frequency_mhz=freq, utilization=usage)
            for i, (freq, usage) in enumerate(zip(frequencies_mhz, utilizations))
        )
        logger.debug(
            "Core utilization: "
            + ", ".join(f"cpu{s.core_id}={s.utilization:.1f}%" for s in samples)
        )
        return samples
