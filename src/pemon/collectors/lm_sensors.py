"""
Hardware monitor reader using the 'sensors' command-line utility.

This module provides LmSensorsReader, which runs `sensors` (part of the
lm-sensors package) and extracts the five values of a SensorReading from
its labeled output, for example::

    CPU Temperature:          +45.0°C
    Motherboard Temperature:  +32.5°C  (high = +80.0°C)
    CPU Fan:                 1180 RPM
"""

import logging
import re
from typing import Dict, Mapping

from ..errors import SensorReadError
from ..models.samples import SensorReading
from ..system.commands import check_tool_installed, run_command
from .base import AbstractSensorReader

logger = logging.getLogger(__name__)

# Leading sign, digits, optional fraction: "+45.0°C" -> "+45.0"
_TEMPERATURE_RE = re.compile(r"^([+-]?\d+(?:\.\d+)?)")
# Integer followed by a unit token: "1180 RPM" -> "1180"
_RPM_RE = re.compile(r"^(\d+)\s+\S+")

TEMPERATURE_FIELDS = ("cpu_temp", "motherboard_temp", "chipset_temp")
FAN_FIELDS = ("cpu_fan", "chassis_fan")


def parse_temperature(value: str) -> int:
    """
    Parse a signed decimal temperature and truncate it to whole degrees.

    Raises:
        ValueError: If the value does not start with a number, or is negative.
    """
    match = _TEMPERATURE_RE.match(value.strip())
    if not match:
        raise ValueError(f"illegal temperature value: {value.strip()!r}")
    degrees = int(float(match.group(1)))
    if degrees < 0:
        raise ValueError(f"negative temperature: {value.strip()!r}")
    return degrees


def parse_rpm(value: str) -> int:
    """
    Parse an ``<integer> <unit>`` fan speed.

    Raises:
        ValueError: If the value is not an integer followed by a unit token.
    """
    match = _RPM_RE.match(value.strip())
    if not match:
        raise ValueError(f"illegal fan speed value: {value.strip()!r}")
    return int(match.group(1))


def _collect_labeled_values(output: str) -> Dict[str, str]:
    """Map each label to the raw value of its first occurrence."""
    values: Dict[str, str] = {}
    for line in output.splitlines():
        label, sep, value = line.partition(":")
        label = label.strip()
        if not sep or not label:
            continue
        values.setdefault(label, value)
    return values


def parse_sensors_output(output: str, labels: Mapping[str, str]) -> SensorReading:
    """
    Build a SensorReading from `sensors` output.

    Args:
        output: Captured stdout of `sensors`.
        labels: Maps reading fields (cpu_temp, motherboard_temp, chipset_temp,
            cpu_fan, chassis_fan) to the labels printed by the chip driver.

    Raises:
        SensorReadError: If a label is missing or its value cannot be parsed.
    """
    raw = _collect_labeled_values(output)

    missing = [labels[f] for f in TEMPERATURE_FIELDS + FAN_FIELDS if labels[f] not in raw]
    if missing:
        raise SensorReadError(f"sensors output has no line for: {', '.join(missing)}")

    values: Dict[str, int] = {}
    try:
        for name in TEMPERATURE_FIELDS:
            values[name] = parse_temperature(raw[labels[name]])
        for name in FAN_FIELDS:
            values[f"{name}_rpm"] = parse_rpm(raw[labels[name]])
    except ValueError as e:
        logger.warning(f"Parsing sensors output failed: {e}")
        raise SensorReadError(f"Parsing sensors output failed: {e}") from e

    return SensorReading(**values)


class LmSensorsReader(AbstractSensorReader):
    """
    Reads temperatures and fan speeds by running `sensors`.
    """

    def __init__(self, labels: Mapping[str, str], command: str = "sensors"):
        super().__init__(labels=dict(labels), command=command)
        self.labels = dict(labels)
        self.command = command

    def check_available(self) -> None:
        if not check_tool_installed(self.command):
            raise SensorReadError(
                f"'{self.command}' is not installed. "
                "Please install lm-sensors (e.g., 'sudo apt-get install lm-sensors')."
            )

    def read(self) -> SensorReading:
        returncode, stdout, stderr = run_command([self.command])
        if returncode != 0:
            raise SensorReadError(
                f"Running {self.command} failed (exit code {returncode}): {stderr.strip()}"
            )
        return parse_sensors_output(stdout, self.labels)
