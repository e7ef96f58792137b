"""
External collaborators of the sampling loop.

Readers for hardware monitor values (lm-sensors or psutil) and for the NVMe
drive temperature, plus the factory that picks them from configuration.
"""

from .base import AbstractSensorReader, AbstractStorageTempReader
from .factory import SENSOR_BACKENDS, CollectorFactory
from .lm_sensors import LmSensorsReader, parse_sensors_output
from .nvme import NvmeTemperatureReader, parse_nvme_temperature
from .psutil_sensors import PsutilSensorReader

__all__ = [
    "AbstractSensorReader",
    "AbstractStorageTempReader",
    "SENSOR_BACKENDS",
    "CollectorFactory",
    "LmSensorsReader",
    "parse_sensors_output",
    "NvmeTemperatureReader",
    "parse_nvme_temperature",
    "PsutilSensorReader",
]
