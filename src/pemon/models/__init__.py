"""
Data models and structures for the sampler.

Configuration Models:
- Sampling, sensor, storage, aggregation and logging settings

Sample Models:
- Per-core counter snapshots and per-tick core samples
- Sensor readings and complete telemetry samples
- The session log of a run

Result Models:
- Per-metric summaries and the final report

All models are dataclasses with type hints.
"""

from .config import (
    AggregationConfig,
    AppConfig,
    LoggingConfig,
    SamplingConfig,
    SensorConfig,
    StorageConfig,
)

from .samples import (
    COUNTER_FIELDS,
    CoreCounterSnapshot,
    CoreInfoSample,
    SensorReading,
    SessionLog,
    TelemetrySample,
)

from .results import BucketShare, MetricSummary, Report

__all__ = [
    # Configuration
    "AggregationConfig",
    "AppConfig",
    "LoggingConfig",
    "SamplingConfig",
    "SensorConfig",
    "StorageConfig",
    # Samples
    "COUNTER_FIELDS",
    "CoreCounterSnapshot",
    "CoreInfoSample",
    "SensorReading",
    "SessionLog",
    "TelemetrySample",
    # Results
    "BucketShare",
    "MetricSummary",
    "Report",
]
