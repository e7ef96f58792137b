"""
Configuration validation utilities.

This module turns raw TOML data into validated configuration dataclasses.
Missing sections and keys fall back to the dataclass defaults.
"""

import logging
from typing import Any, Dict

from ..collectors.factory import SENSOR_BACKENDS
from ..models.config import (
    DEFAULT_BUCKET_EDGES,
    DEFAULT_INTERVAL_SECONDS,
    DEFAULT_SENSOR_LABELS,
    AggregationConfig,
    AppConfig,
    LoggingConfig,
    SamplingConfig,
    SensorConfig,
    StorageConfig,
)
from ..validation import (
    ValidationError,
    validate_bucket_edges,
    validate_enum_choice,
    validate_non_empty_string,
    validate_positive_integer,
)

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def validate_interval(value: Any, field_name: str = "sampling.interval_seconds") -> int:
    """
    Validate a sampling interval.

    A zero interval would leave no elapsed ticks between two counter
    snapshots, so the minimum is one second.
    """
    return validate_positive_integer(value, min_value=1, field_name=field_name)


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ValidationError(f"[{name}] must be a table", field_name=name, value=section)
    return section


def validate_sampling_config(sampling_data: Dict[str, Any]) -> SamplingConfig:
    interval_seconds = validate_interval(
        sampling_data.get("interval_seconds", DEFAULT_INTERVAL_SECONDS)
    )
    stat_path = validate_non_empty_string(
        sampling_data.get("stat_path", "/proc/stat"), field_name="sampling.stat_path"
    )
    cpuinfo_path = validate_non_empty_string(
        sampling_data.get("cpuinfo_path", "/proc/cpuinfo"), field_name="sampling.cpuinfo_path"
    )
    return SamplingConfig(
        interval_seconds=interval_seconds,
        stat_path=stat_path,
        cpuinfo_path=cpuinfo_path,
    )


def validate_sensor_config(sensor_data: Dict[str, Any]) -> SensorConfig:
    backend = validate_enum_choice(
        sensor_data.get("backend", "lm_sensors"),
        choices=SENSOR_BACKENDS,
        field_name="sensors.backend",
    )
    command = validate_non_empty_string(
        sensor_data.get("command", "sensors"), field_name="sensors.command"
    )

    label_data = _section(sensor_data, "labels")
    unknown = sorted(set(label_data) - set(DEFAULT_SENSOR_LABELS))
    if unknown:
        raise ValidationError(
            f"sensors.labels has unknown keys: {unknown}",
            field_name="sensors.labels",
            value=unknown,
        )

    labels = {}
    for key, default in DEFAULT_SENSOR_LABELS.items():
        labels[key] = validate_non_empty_string(
            label_data.get(key, default), field_name=f"sensors.labels.{key}"
        ).strip()

    return SensorConfig(backend=backend, command=command, labels=labels)


def validate_storage_config(storage_data: Dict[str, Any]) -> StorageConfig:
    return StorageConfig(
        command=validate_non_empty_string(
            storage_data.get("command", "nvme"), field_name="storage.command"
        ),
        device=validate_non_empty_string(
            storage_data.get("device", "/dev/nvme0n1"), field_name="storage.device"
        ),
    )


def validate_aggregation_config(aggregation_data: Dict[str, Any]) -> AggregationConfig:
    bucket_data = _section(aggregation_data, "buckets")
    unknown = sorted(set(bucket_data) - set(DEFAULT_BUCKET_EDGES))
    if unknown:
        raise ValidationError(
            f"aggregation.buckets has unknown metrics: {unknown}",
            field_name="aggregation.buckets",
            value=unknown,
        )

    buckets = {}
    for metric, default in DEFAULT_BUCKET_EDGES.items():
        buckets[metric] = validate_bucket_edges(
            bucket_data.get(metric, list(default)),
            field_name=f"aggregation.buckets.{metric}",
        )
    return AggregationConfig(buckets=buckets)


def validate_logging_config(logging_data: Dict[str, Any]) -> LoggingConfig:
    level = validate_enum_choice(
        logging_data.get("level", "INFO"),
        choices=LOG_LEVELS,
        field_name="logging.level",
        case_sensitive=False,
    )
    return LoggingConfig(level=level)


def validate_app_config(config_data: Dict[str, Any]) -> AppConfig:
    """
    Validate the whole configuration file.

    Args:
        config_data: Parsed TOML data (may be empty)

    Returns:
        Validated AppConfig instance

    Raises:
        ValidationError: If any value is invalid
    """
    config = AppConfig(
        sampling=validate_sampling_config(_section(config_data, "sampling")),
        sensors=validate_sensor_config(_section(config_data, "sensors")),
        storage=validate_storage_config(_section(config_data, "storage")),
        aggregation=validate_aggregation_config(_section(config_data, "aggregation")),
        logging=validate_logging_config(_section(config_data, "logging")),
    )
    logger.debug(f"Validated configuration: {config}")
    return config
