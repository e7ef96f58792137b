"""
Sampling coordination.

- utilization: per-core utilization from successive counter snapshots
- sampler: the periodic collection loop and its state machine
"""

from .sampler import LoopState, SamplingLoop, SamplingOutcome
from .utilization import UtilizationTracker, compute_utilization

__all__ = [
    "LoopState",
    "SamplingLoop",
    "SamplingOutcome",
    "UtilizationTracker",
    "compute_utilization",
]
