"""
Parsers for the kernel CPU text sources.

This module reads and parses the two procfs files the sampler depends on:

- /proc/stat: one line of cumulative time counters per logical core
  (``cpu<N> user nice system idle iowait irq softirq steal guest [guest_nice]``)
  plus an aggregate ``cpu`` line that is ignored here.
- /proc/cpuinfo: one record per logical processor, each starting with a
  ``processor`` line and carrying a ``cpu MHz : <freq>`` line.

All parse functions are pure and operate on text, so they can be exercised
with fixture strings instead of a live system.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Tuple

from ..errors import (
    CoreCountMismatch,
    CounterLineNotFound,
    CounterParseError,
    FrequencyLineMalformed,
    SourceUnavailable,
)
from ..models.samples import COUNTER_FIELDS, MIN_COUNTER_FIELDS, CoreCounterSnapshot

logger = logging.getLogger(__name__)

PROCESSOR_PREFIX = "processor"
FREQUENCY_PREFIX = "cpu MHz"


@dataclass(frozen=True)
class CoreInventory:
    """
    Logical cores discovered in /proc/cpuinfo.

    ``frequencies_mhz[i]`` belongs to the core with id ``i + 1``, which in
    turn pairs with the ``cpu<i>`` line of /proc/stat.
    """

    core_count: int
    frequencies_mhz: Tuple[float, ...]

    @property
    def core_ids(self) -> List[int]:
        return list(range(1, self.core_count + 1))


def read_text(path: str) -> str:
    """Read a whole procfs file, wrapping I/O failures in SourceUnavailable."""
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return f.read()
    except OSError as e:
        raise SourceUnavailable(path, f"{type(e).__name__}: {e}") from e


# --- Counter Snapshot Parser ---


def _parse_counter_fields(label: str, values: List[str], index: int) -> CoreCounterSnapshot:
    if len(values) < MIN_COUNTER_FIELDS:
        raise CounterParseError(
            f"'{label}' has {len(values)} counter fields, expected at least {MIN_COUNTER_FIELDS}",
            core_index=index,
        )

    counters = []
    for name, raw in zip(COUNTER_FIELDS, values):
        # isdigit() rejects signs, so only non-negative integers get through
        if not raw.isdigit():
            raise CounterParseError(
                f"'{label}' field '{name}' is not a non-negative integer: {raw!r}",
                core_index=index,
            )
        counters.append(int(raw))

    return CoreCounterSnapshot(*counters, field_count=len(counters))


def parse_counter_snapshot(stat_text: str, index: int) -> CoreCounterSnapshot:
    """
    Parse the cumulative counters of core ``index`` from /proc/stat text.

    The line is selected by an exact match of its first token against
    ``cpu<index>``, so ``cpu1`` never matches ``cpu10`` and the aggregate
    ``cpu`` line is never selected.

    Args:
        stat_text: Full /proc/stat contents.
        index: 0-based kernel core index.

    Returns:
        The parsed snapshot. ``guest_nice`` is 0 when the line has only nine
        counters.

    Raises:
        CounterLineNotFound: If no line is labeled ``cpu<index>``.
        CounterParseError: If a required counter is missing or not numeric.
    """
    label = f"cpu{index}"
    for line in stat_text.splitlines():
        tokens = line.split()
        if tokens and tokens[0] == label:
            return _parse_counter_fields(label, tokens[1:], index)

    raise CounterLineNotFound(f"No '{label}' line in counter table", core_index=index)


def parse_all_snapshots(stat_text: str, core_count: int) -> List[CoreCounterSnapshot]:
    """Parse one snapshot per core, ordered by kernel core index."""
    return [parse_counter_snapshot(stat_text, i) for i in range(core_count)]


# --- Core Enumerator ---


def count_processors(cpuinfo_text: str) -> int:
    """Count the logical processor records in /proc/cpuinfo text."""
    return sum(
        1 for line in cpuinfo_text.splitlines()
        if line.strip().startswith(PROCESSOR_PREFIX)
    )


def parse_frequency_line(line: str) -> float:
    """
    Parse the MHz value of a single ``cpu MHz : <value>`` line.

    Raises:
        FrequencyLineMalformed: If there is no separator, or the value after it
            is not a positive finite number.
    """
    _, sep, raw = line.partition(":")
    if not sep:
        raise FrequencyLineMalformed(f"Missing ':' separator in cpuinfo line: {line.strip()!r}")

    try:
        freq = float(raw.strip())
    except ValueError:
        raise FrequencyLineMalformed(f"Illegal cpuinfo frequency line: {line.strip()!r}")

    if not math.isfinite(freq) or freq <= 0:
        raise FrequencyLineMalformed(f"Frequency out of range in cpuinfo line: {line.strip()!r}")
    return freq


def parse_core_frequencies(cpuinfo_text: str) -> List[float]:
    """Return the clock frequency of every core, in file order."""
    frequencies = []
    for line in cpuinfo_text.splitlines():
        stripped = line.strip()
        if stripped.startswith(FREQUENCY_PREFIX):
            frequencies.append(parse_frequency_line(stripped))
    return frequencies


def enumerate_cores(cpuinfo_text: str) -> CoreInventory:
    """
    Discover the logical cores and their current frequencies.

    Raises:
        FrequencyLineMalformed: If a frequency line cannot be parsed.
        CoreCountMismatch: If there are no processors, or the number of
            frequency entries differs from the number of processor records.
    """
    core_count = count_processors(cpuinfo_text)
    frequencies = parse_core_frequencies(cpuinfo_text)

    if core_count == 0:
        raise CoreCountMismatch("No processor records found in cpuinfo")
    if len(frequencies) != core_count:
        raise CoreCountMismatch(
            f"cpuinfo lists {core_count} processors but {len(frequencies)} frequency entries"
        )

    logger.debug(f"Enumerated {core_count} cores: {frequencies}")
    return CoreInventory(core_count=core_count, frequencies_mhz=tuple(frequencies))
