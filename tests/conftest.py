"""
Pytest configuration and shared fixtures for the pemon test suite.

This module provides kernel-source fixture text, fake collaborators and
sample builders shared by all test modules. No test reads the real /proc
or runs `sensors` / `nvme`.
"""

import shutil
import sys
import tempfile
import threading
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pemon.collectors.base import AbstractSensorReader, AbstractStorageTempReader  # noqa: E402
from pemon.models.samples import (  # noqa: E402
    CoreInfoSample,
    SensorReading,
    SessionLog,
    TelemetrySample,
)


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")


# ============================================================================
# Kernel Source Fixtures
# ============================================================================


CPUINFO_TWO_CORES = """\
processor\t: 0
vendor_id\t: GenuineIntel
model name\t: Intel(R) Core(TM) i7-8650U CPU @ 1.90GHz
cpu MHz\t\t: 2400.125
cache size\t: 8192 KB

processor\t: 1
vendor_id\t: GenuineIntel
model name\t: Intel(R) Core(TM) i7-8650U CPU @ 1.90GHz
cpu MHz\t\t: 1800.000
cache size\t: 8192 KB
"""


def make_stat_text(rows: Dict[int, List[int]], aggregate: Optional[List[int]] = None) -> str:
    """Render a /proc/stat table from per-core counter rows."""
    aggregate = aggregate or [sum(col) for col in zip(*rows.values())]
    lines = ["cpu  " + " ".join(str(v) for v in aggregate)]
    for index, counters in rows.items():
        lines.append(f"cpu{index} " + " ".join(str(v) for v in counters))
    lines.extend([
        "intr 123456 0 0 0",
        "ctxt 987654",
        "btime 1700000000",
        "processes 4242",
    ])
    return "\n".join(lines) + "\n"


# Three successive readings of a two-core host.
STAT_SEQUENCE = [
    make_stat_text({
        0: [100, 0, 50, 800, 10, 0, 0, 0, 0, 0],
        1: [200, 0, 100, 700, 0, 0, 0, 0, 0, 0],
    }),
    make_stat_text({
        0: [120, 0, 60, 820, 10, 0, 0, 0, 0, 0],
        1: [250, 0, 100, 750, 0, 0, 0, 0, 0, 0],
    }),
    make_stat_text({
        0: [150, 0, 70, 840, 10, 0, 0, 0, 0, 0],
        1: [250, 0, 100, 850, 0, 0, 0, 0, 0, 0],
    }),
]


@pytest.fixture
def cpuinfo_text() -> str:
    return CPUINFO_TWO_CORES


@pytest.fixture
def stat_sequence() -> List[str]:
    return list(STAT_SEQUENCE)


class FakeProcfs:
    """
    Stand-in for read_text: cpuinfo is constant, every read of the stat path
    returns the next table of the sequence (the last one repeats).
    """

    def __init__(self, cpuinfo: str, stat_texts: Iterable[str],
                 stat_path: str = "/proc/stat", cpuinfo_path: str = "/proc/cpuinfo"):
        self.cpuinfo = cpuinfo
        self.stat_texts = list(stat_texts)
        self.stat_path = stat_path
        self.cpuinfo_path = cpuinfo_path
        self.stat_reads = 0

    def __call__(self, path: str) -> str:
        if path == self.cpuinfo_path:
            return self.cpuinfo
        if path == self.stat_path:
            text = self.stat_texts[min(self.stat_reads, len(self.stat_texts) - 1)]
            self.stat_reads += 1
            return text
        raise AssertionError(f"unexpected read of {path}")


@pytest.fixture
def fake_procfs(cpuinfo_text, stat_sequence) -> FakeProcfs:
    return FakeProcfs(cpuinfo_text, stat_sequence)


# ============================================================================
# Fake Collaborators
# ============================================================================


class FakeSensorReader(AbstractSensorReader):
    """Returns canned readings; ``on_read`` is called with the call number first."""

    def __init__(self, readings: Optional[List[SensorReading]] = None,
                 on_read: Optional[Callable[[int], None]] = None):
        super().__init__()
        self.readings = readings or [SensorReading(45, 32, 50, 1200, 800)]
        self.on_read = on_read
        self.calls = 0

    def read(self) -> SensorReading:
        self.calls += 1
        if self.on_read is not None:
            self.on_read(self.calls)
        return self.readings[min(self.calls, len(self.readings)) - 1]


class FakeStorageReader(AbstractStorageTempReader):
    def __init__(self, temperatures: Optional[List[int]] = None):
        super().__init__()
        self.temperatures = temperatures or [38]
        self.calls = 0

    def read(self) -> int:
        self.calls += 1
        return self.temperatures[min(self.calls, len(self.temperatures)) - 1]


@pytest.fixture
def sensor_reader() -> FakeSensorReader:
    return FakeSensorReader()


@pytest.fixture
def storage_reader() -> FakeStorageReader:
    return FakeStorageReader()


@pytest.fixture
def cancel_event() -> threading.Event:
    return threading.Event()


# ============================================================================
# Sample Builders
# ============================================================================


def make_sample(
    timestamp: float = 0.0,
    cpu_temp: int = 45,
    motherboard_temp: int = 32,
    chipset_temp: int = 50,
    cpu_fan_rpm: int = 1200,
    chassis_fan_rpm: int = 800,
    storage_temp: int = 38,
    utilizations: Iterable[float] = (50.0, 50.0),
    frequency_mhz: float = 2400.0,
) -> TelemetrySample:
    cores = tuple(
        CoreInfoSample(core_id=i + 1, frequency_mhz=frequency_mhz, utilization=u)
        for i, u in enumerate(utilizations)
    )
    return TelemetrySample(
        timestamp=timestamp,
        cores=cores,
        sensors=SensorReading(
            cpu_temp=cpu_temp,
            motherboard_temp=motherboard_temp,
            chipset_temp=chipset_temp,
            cpu_fan_rpm=cpu_fan_rpm,
            chassis_fan_rpm=chassis_fan_rpm,
        ),
        storage_temp=storage_temp,
    )


def make_log(samples: Iterable[TelemetrySample]) -> SessionLog:
    log = SessionLog()
    for sample in samples:
        log.append(sample)
    return log


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture(autouse=True)
def clear_config_after_test():
    """Automatically clear configuration cache after each test."""
    yield

    from pemon.config import clear_config_cache

    clear_config_cache()
