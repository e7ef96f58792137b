"""
End-of-run aggregation of a sampling session.

The session log is converted into a Polars DataFrame with one column per
scalar metric. Each metric is then summarized independently: arithmetic
mean, minimum, maximum, and the share of samples in each of a fixed set of
half-open buckets.
"""

import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

import polars as pl

from ..errors import EmptySessionLog
from ..models.config import DEFAULT_BUCKET_EDGES
from ..models.results import BucketShare, MetricSummary, Report
from ..models.samples import SessionLog, TelemetrySample

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MetricDefinition:
    """A scalar metric of the report and how to extract it from a sample."""

    name: str
    title: str
    unit: str
    dtype: type
    extract: Callable[[TelemetrySample], float]


# Report order.
METRICS: Tuple[MetricDefinition, ...] = (
    MetricDefinition("cpu_temp", "CPU temperature", "°C", pl.Int64,
                     lambda s: s.sensors.cpu_temp),
    MetricDefinition("motherboard_temp", "Motherboard temperature", "°C", pl.Int64,
                     lambda s: s.sensors.motherboard_temp),
    MetricDefinition("chipset_temp", "Chipset temperature", "°C", pl.Int64,
                     lambda s: s.sensors.chipset_temp),
    MetricDefinition("cpu_fan_rpm", "CPU fan", "RPM", pl.Int64,
                     lambda s: s.sensors.cpu_fan_rpm),
    MetricDefinition("chassis_fan_rpm", "Chassis fan", "RPM", pl.Int64,
                     lambda s: s.sensors.chassis_fan_rpm),
    MetricDefinition("storage_temp", "Storage temperature", "°C", pl.Int64,
                     lambda s: s.storage_temp),
    MetricDefinition("cpu_utilization", "CPU utilization (core mean)", "%", pl.Float64,
                     lambda s: s.mean_utilization),
    MetricDefinition("cpu_frequency", "CPU frequency (core mean)", "MHz", pl.Float64,
                     lambda s: s.mean_frequency_mhz),
)


def session_to_frame(log: SessionLog) -> pl.DataFrame:
    """
    Flatten a session log into a DataFrame, one row per sample.

    Columns are ``timestamp`` followed by every metric in METRICS.
    """
    samples = log.samples
    data = {"timestamp": [s.timestamp for s in samples]}
    schema = {"timestamp": pl.Float64}
    for metric in METRICS:
        data[metric.name] = [metric.extract(s) for s in samples]
        schema[metric.name] = metric.dtype
    return pl.DataFrame(data, schema=schema)


def _bucket_bounds(edges: Sequence[float]) -> List[Tuple[float, float]]:
    """Turn n ascending edges into n + 1 (lower, upper) pairs covering the real line."""
    bounds = [-math.inf, *edges, math.inf]
    return list(zip(bounds[:-1], bounds[1:]))


def _bucket_expr(column: str, lower: float, upper: float) -> pl.Expr:
    col = pl.col(column)
    if math.isinf(lower):
        condition = col < upper
    elif math.isinf(upper):
        condition = col >= lower
    else:
        condition = (col >= lower) & (col < upper)
    return condition.sum()


def summarize_metric(
    df: pl.DataFrame, metric: MetricDefinition, edges: Sequence[float]
) -> MetricSummary:
    """Compute the statistics of a single metric column."""
    sample_count = df.height
    column = metric.name

    mean, minimum, maximum = df.select(
        pl.col(column).mean().alias("mean"),
        pl.col(column).min().alias("min"),
        pl.col(column).max().alias("max"),
    ).row(0)

    bounds = _bucket_bounds(edges)
    counts = df.select(
        [_bucket_expr(column, lo, hi).alias(f"bucket_{i}") for i, (lo, hi) in enumerate(bounds)]
    ).row(0)

    buckets = tuple(
        BucketShare(
            lower=lo,
            upper=hi,
            count=int(count),
            percentage=100.0 * int(count) / sample_count,
        )
        for (lo, hi), count in zip(bounds, counts)
    )

    return MetricSummary(
        metric=metric.name,
        title=metric.title,
        unit=metric.unit,
        sample_count=sample_count,
        mean=float(mean),
        minimum=minimum,
        maximum=maximum,
        buckets=buckets,
    )


def summarize(
    log: SessionLog, bucket_edges: Optional[Mapping[str, Sequence[float]]] = None
) -> Report:
    """
    Summarize a finished session.

    Args:
        log: Samples of the session, in collection order.
        bucket_edges: Per-metric bucket edges; metrics not listed use
            DEFAULT_BUCKET_EDGES.

    Returns:
        A Report with one MetricSummary per entry of METRICS.

    Raises:
        EmptySessionLog: If the log holds no samples.
    """
    if len(log) == 0:
        raise EmptySessionLog("Cannot summarize a session without samples")

    edges: Dict[str, Sequence[float]] = dict(DEFAULT_BUCKET_EDGES)
    if bucket_edges:
        edges.update(bucket_edges)

    df = session_to_frame(log)
    summaries = {
        metric.name: summarize_metric(df, metric, edges[metric.name]) for metric in METRICS
    }

    samples = log.samples
    report = Report(
        sample_count=df.height,
        core_count=len(samples[0].cores),
        first_timestamp=samples[0].timestamp,
        last_timestamp=samples[-1].timestamp,
        summaries=summaries,
    )
    logger.info(f"Summarized {report.sample_count} samples over {report.duration_seconds:.0f}s")
    return report


def _fmt_value(value: float) -> str:
    return str(value) if isinstance(value, int) else f"{value:.2f}"


def format_report(report: Report) -> str:
    """Render a report as plain text for standard output."""
    lines = [
        f"pemon summary: {report.sample_count} samples over "
        f"{report.duration_seconds:.0f}s on {report.core_count} cores",
    ]
    for summary in report.summaries.values():
        lines.append("")
        lines.append(
            f"{summary.title} ({summary.unit}): mean {summary.mean:.2f}, "
            f"min {_fmt_value(summary.minimum)}, max {_fmt_value(summary.maximum)}"
        )
        lines.append(
            "    " + "  ".join(f"{b.label}: {b.percentage:.1f}%" for b in summary.buckets)
        )
    return "\n".join(lines)
