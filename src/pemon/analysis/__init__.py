"""
Session aggregation and reporting.
"""

from .aggregator import (
    METRICS,
    MetricDefinition,
    format_report,
    session_to_frame,
    summarize,
    summarize_metric,
)

__all__ = [
    "METRICS",
    "MetricDefinition",
    "format_report",
    "session_to_frame",
    "summarize",
    "summarize_metric",
]
