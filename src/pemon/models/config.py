"""
Configuration data models.

This module contains the configuration data structures loaded from
`conf/config.toml`. Every field has a default so the sampler also runs
without a configuration file.
"""

from dataclasses import dataclass, field
from typing import Dict, List

DEFAULT_INTERVAL_SECONDS = 3

# Bucket edges per aggregated metric. n edges describe n + 1 buckets:
# (-inf, e0), [e0, e1), ..., [e(n-1), +inf).
DEFAULT_BUCKET_EDGES: Dict[str, List[float]] = {
    "cpu_temp": [40, 60, 70, 80],
    "motherboard_temp": [40, 60, 70, 80],
    "chipset_temp": [40, 60, 70, 80],
    "cpu_fan_rpm": [800, 1200, 1600, 2000],
    "chassis_fan_rpm": [500, 800, 1100],
    "storage_temp": [30, 50, 70],
    "cpu_utilization": [25, 50, 75],
    "cpu_frequency": [1000, 2000, 3000, 4000],
}

DEFAULT_SENSOR_LABELS: Dict[str, str] = {
    "cpu_temp": "CPU Temperature",
    "motherboard_temp": "Motherboard Temperature",
    "chipset_temp": "Chipset Temperature",
    "cpu_fan": "CPU Fan",
    "chassis_fan": "Chassis Fan 1",
}


@dataclass
class SamplingConfig:
    """
    [sampling] - how often and from where kernel counters are read.
    """

    interval_seconds: int = DEFAULT_INTERVAL_SECONDS
    stat_path: str = "/proc/stat"
    cpuinfo_path: str = "/proc/cpuinfo"


@dataclass
class SensorConfig:
    """
    [sensors] - hardware monitor collaborator.

    ``labels`` maps each SensorReading field (fans without the ``_rpm``
    suffix) to the label the hardware monitor prints for it.
    """

    backend: str = "lm_sensors"
    command: str = "sensors"
    labels: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_SENSOR_LABELS))


@dataclass
class StorageConfig:
    """
    [storage] - NVMe temperature collaborator.
    """

    command: str = "nvme"
    device: str = "/dev/nvme0n1"


@dataclass
class AggregationConfig:
    """
    [aggregation] - histogram buckets of the end-of-run report.
    """

    buckets: Dict[str, List[float]] = field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_BUCKET_EDGES.items()}
    )


@dataclass
class LoggingConfig:
    level: str = "INFO"


@dataclass
class AppConfig:
    """
    The root configuration object that aggregates all loaded settings.
    """

    sampling: SamplingConfig = field(default_factory=SamplingConfig)
    sensors: SensorConfig = field(default_factory=SensorConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    aggregation: AggregationConfig = field(default_factory=AggregationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
