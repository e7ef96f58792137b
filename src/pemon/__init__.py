"""
pemon: periodic host telemetry sampler.

pemon samples per-core CPU frequency and utilization, hardware monitor
temperatures and fan speeds, and the NVMe drive temperature at a fixed
interval, then prints min/max/mean and bucketed distributions of every
metric when the run ends.

The package is organized into specialized modules:
- config: Configuration loading and validation
- models: Data structures and type definitions
- validation: Input validation and error handling helpers
- errors: Run-time error taxonomy
- system: procfs parsing and external command execution
- collectors: Sensor and storage temperature readers
- monitoring: Utilization computation and the sampling loop
- analysis: End-of-run aggregation and report formatting
- orchestration: Signal-driven cancellation
- cli: Command-line interface

Usage:
    From command line:
        pemon [-i SECONDS]

    Programmatically:
        from pemon import SamplingLoop, summarize
"""

from .config import clear_config_cache, get_config, set_config_path
from .cli import main_cli

from .models import (
    AppConfig,
    CoreCounterSnapshot,
    CoreInfoSample,
    Report,
    SensorReading,
    SessionLog,
    TelemetrySample,
)

from .errors import ErrorKind, PemonError
from .validation import ValidationError

from .monitoring import SamplingLoop, UtilizationTracker, compute_utilization
from .analysis import format_report, summarize

__version__ = "0.2.0"

__all__ = [
    # Main interfaces
    "get_config",
    "clear_config_cache",
    "set_config_path",
    "main_cli",
    # Models
    "AppConfig",
    "CoreCounterSnapshot",
    "CoreInfoSample",
    "Report",
    "SensorReading",
    "SessionLog",
    "TelemetrySample",
    # Errors
    "ErrorKind",
    "PemonError",
    "ValidationError",
    # Sampling and aggregation
    "SamplingLoop",
    "UtilizationTracker",
    "compute_utilization",
    "format_report",
    "summarize",
]
