"""
Defines the abstract interfaces of the external collaborators.

The sampling loop only depends on these interfaces:

- AbstractSensorReader: returns one SensorReading per call
- AbstractStorageTempReader: returns one storage temperature per call

Implementations wrap an external utility or library and translate every
failure into a CollaboratorError subclass.
"""

import logging
from abc import ABC, abstractmethod

from ..models.samples import SensorReading

logger = logging.getLogger(__name__)


class AbstractSensorReader(ABC):
    """
    Abstract base class for hardware monitor readers.
    """

    def __init__(self, **kwargs):
        self.reader_kwargs = kwargs
        logger.info(f"Initializing {self.__class__.__name__} with {kwargs}")

    def check_available(self) -> None:
        """
        Verify that the reader can work on this host.

        Called once during setup. Raises SensorReadError when the backing
        utility or library is missing.
        """

    @abstractmethod
    def read(self) -> SensorReading:
        """
        Take one reading.

        Raises:
            SensorReadError: If the hardware monitor fails or one of the
                configured labels is missing from its output.
        """


class AbstractStorageTempReader(ABC):
    """
    Abstract base class for storage temperature readers.
    """

    def __init__(self, **kwargs):
        self.reader_kwargs = kwargs
        logger.info(f"Initializing {self.__class__.__name__} with {kwargs}")

    def check_available(self) -> None:
        """Verify that the reader can work on this host."""

    @abstractmethod
    def read(self) -> int:
        """
        Return the current drive temperature in degrees Celsius.

        Raises:
            StorageReadError: If the utility fails or prints no temperature.
        """
