"""
Collaborator factory.

Creates the sensor and storage readers selected by the configuration.
"""

import logging

from ..models.config import SensorConfig, StorageConfig
from .base import AbstractSensorReader, AbstractStorageTempReader

logger = logging.getLogger(__name__)

SENSOR_BACKENDS = ["lm_sensors", "psutil"]


class CollectorFactory:
    """
    Builds reader instances from the [sensors] and [storage] settings.
    """

    def __init__(self, sensor_config: SensorConfig, storage_config: StorageConfig):
        self.sensor_config = sensor_config
        self.storage_config = storage_config

        logger.info(
            f"CollectorFactory initialized: sensor_backend={sensor_config.backend}, "
            f"storage_device={storage_config.device}"
        )

    def create_sensor_reader(self) -> AbstractSensorReader:
        """
        Create the hardware monitor reader.

        Raises:
            ValueError: If the backend is unknown
        """
        backend = self.sensor_config.backend
        if backend == "lm_sensors":
            from .lm_sensors import LmSensorsReader

            return LmSensorsReader(
                labels=self.sensor_config.labels, command=self.sensor_config.command
            )
        elif backend == "psutil":
            from .psutil_sensors import PsutilSensorReader

            return PsutilSensorReader(labels=self.sensor_config.labels)
        else:
            raise ValueError(f"Unknown sensor backend: {backend}")

    def create_storage_reader(self) -> AbstractStorageTempReader:
        from .nvme import NvmeTemperatureReader

        return NvmeTemperatureReader(
            device=self.storage_config.device, command=self.storage_config.command
        )
