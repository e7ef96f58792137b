"""
Report data models.

The aggregator turns a finished SessionLog into a Report: one MetricSummary
per scalar metric, each with mean, extremes and a bucketed distribution.
"""

import math
from dataclasses import dataclass
from typing import Dict, Tuple, Union

Number = Union[int, float]


@dataclass(frozen=True)
class BucketShare:
    """
    Share of samples that fell into the half-open bucket [lower, upper).

    ``lower`` is ``-inf`` for the first bucket and ``upper`` is ``+inf`` for
    the last one.
    """

    lower: float
    upper: float
    count: int
    percentage: float

    @property
    def label(self) -> str:
        if math.isinf(self.lower):
            return f"<{_fmt_edge(self.upper)}"
        if math.isinf(self.upper):
            return f">={_fmt_edge(self.lower)}"
        return f"{_fmt_edge(self.lower)}-{_fmt_edge(self.upper)}"


@dataclass(frozen=True)
class MetricSummary:
    """Distribution statistics of a single metric over a whole session."""

    metric: str
    title: str
    unit: str
    sample_count: int
    mean: float
    minimum: Number
    maximum: Number
    buckets: Tuple[BucketShare, ...]


@dataclass(frozen=True)
class Report:
    """End-of-run summary, keyed by metric name in report order."""

    sample_count: int
    core_count: int
    first_timestamp: float
    last_timestamp: float
    summaries: Dict[str, MetricSummary]

    @property
    def duration_seconds(self) -> float:
        return self.last_timestamp - self.first_timestamp


def _fmt_edge(edge: float) -> str:
    return str(int(edge)) if float(edge).is_integer() else f"{edge:g}"
