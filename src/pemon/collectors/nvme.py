"""
Storage temperature reader using the 'nvme' command-line utility.

Runs ``nvme smart-log <device>`` and extracts the composite temperature from
its ``temperature : 38 C`` line.
"""

import logging
import re

from ..errors import StorageReadError
from ..system.commands import check_tool_installed, run_command
from .base import AbstractStorageTempReader

logger = logging.getLogger(__name__)

# Integer followed by a unit token: "38 C", "38°C (311 K)"
_TEMPERATURE_RE = re.compile(r"^(\d+)\s*[^\d\s]")


def parse_nvme_temperature(output: str) -> int:
    """
    Extract the drive temperature from `nvme smart-log` output.

    Only lines whose label starts with lower-case ``temperature`` are
    considered; per-sensor lines (``Temperature Sensor 1``) are skipped.

    Raises:
        StorageReadError: If no temperature line with a parseable value exists.
    """
    for line in output.splitlines():
        stripped = line.strip()
        if not stripped.startswith("temperature"):
            continue

        _, sep, value = stripped.partition(":")
        match = _TEMPERATURE_RE.match(value.strip()) if sep else None
        if match:
            return int(match.group(1))
        logger.warning(f"Parsing nvme output failed, illegal temperature line: {stripped}")

    raise StorageReadError("Getting NVMe drive temperature failed: no temperature line")


class NvmeTemperatureReader(AbstractStorageTempReader):
    """
    Reads the temperature of one NVMe drive via `nvme smart-log`.
    """

    def __init__(self, device: str = "/dev/nvme0n1", command: str = "nvme"):
        super().__init__(device=device, command=command)
        self.device = device
        self.command = command

    def check_available(self) -> None:
        if not check_tool_installed(self.command):
            raise StorageReadError(
                f"'{self.command}' is not installed. "
                "Please install nvme-cli (e.g., 'sudo apt-get install nvme-cli')."
            )

    def read(self) -> int:
        returncode, stdout, stderr = run_command([self.command, "smart-log", self.device])
        if returncode != 0:
            raise StorageReadError(
                f"Running {self.command} failed (exit code {returncode}). "
                f"Storage temperature is unavailable: {stderr.strip()}"
            )
        return parse_nvme_temperature(stdout)
