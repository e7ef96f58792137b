"""
System interaction utilities.

This module provides the sampler's view of the host:

- procfs parsing of per-core time counters (/proc/stat)
- logical core discovery and clock frequencies (/proc/cpuinfo)
- execution of the external hardware utilities
"""

from .commands import check_tool_installed, run_command

from .procfs import (
    CoreInventory,
    count_processors,
    enumerate_cores,
    parse_all_snapshots,
    parse_core_frequencies,
    parse_counter_snapshot,
    parse_frequency_line,
    read_text,
)

__all__ = [
    # Commands
    "check_tool_installed",
    "run_command",
    # procfs
    "CoreInventory",
    "count_processors",
    "enumerate_cores",
    "parse_all_snapshots",
    "parse_core_frequencies",
    "parse_counter_snapshot",
    "parse_frequency_line",
    "read_text",
]
