"""
Hardware monitor reader backed by psutil.

psutil reads the same hwmon sysfs data that lm-sensors formats, so this
backend needs no external utility. Sensor entries are matched by their
``label`` attribute using the same label configuration as LmSensorsReader.
"""

import logging
from typing import Dict, Iterable, Mapping

import psutil

from ..errors import SensorReadError
from ..models.samples import SensorReading
from .base import AbstractSensorReader
from .lm_sensors import FAN_FIELDS, TEMPERATURE_FIELDS

logger = logging.getLogger(__name__)


def _index_by_label(groups: Mapping[str, Iterable]) -> Dict[str, float]:
    """Map entry labels to current values, keeping the first chip that reports each."""
    values: Dict[str, float] = {}
    for _chip, entries in groups.items():
        for entry in entries:
            if entry.label and entry.current is not None:
                values.setdefault(entry.label, entry.current)
    return values


class PsutilSensorReader(AbstractSensorReader):
    """
    Reads temperatures and fan speeds through psutil.sensors_temperatures()
    and psutil.sensors_fans().
    """

    def __init__(self, labels: Mapping[str, str]):
        super().__init__(labels=dict(labels))
        self.labels = dict(labels)

    def check_available(self) -> None:
        if not hasattr(psutil, "sensors_temperatures") or not hasattr(psutil, "sensors_fans"):
            raise SensorReadError("psutil does not support hardware sensors on this platform")

    def read(self) -> SensorReading:
        try:
            temperatures = _index_by_label(psutil.sensors_temperatures())
            fans = _index_by_label(psutil.sensors_fans())
        except (OSError, RuntimeError) as e:
            raise SensorReadError(f"psutil sensor query failed: {type(e).__name__}: {e}") from e

        missing = [self.labels[f] for f in TEMPERATURE_FIELDS if self.labels[f] not in temperatures]
        missing += [self.labels[f] for f in FAN_FIELDS if self.labels[f] not in fans]
        if missing:
            raise SensorReadError(f"psutil reports no sensor labeled: {', '.join(missing)}")

        values: Dict[str, int] = {}
        for name in TEMPERATURE_FIELDS:
            degrees = int(temperatures[self.labels[name]])
            if degrees < 0:
                raise SensorReadError(f"Negative temperature for '{self.labels[name]}': {degrees}")
            values[name] = degrees
        for name in FAN_FIELDS:
            values[f"{name}_rpm"] = int(fans[self.labels[name]])

        return SensorReading(**values)
