"""
Run-time error taxonomy for the sampler.

Every failure that can end a sampling run is a PemonError carrying an
ErrorKind tag, so callers can log and report by category without matching
on concrete classes:

- PARSE: a kernel text source is missing, unreadable or malformed
- ARITHMETIC: two counter snapshots cannot produce a utilization value
- COLLABORATOR: an external utility failed or printed unparseable output
- AGGREGATION: the session cannot be summarized

Configuration problems are reported separately through
pemon.validation.ValidationError.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Failure categories of a sampling run."""
    PARSE = "parse"
    ARITHMETIC = "arithmetic"
    COLLABORATOR = "collaborator"
    AGGREGATION = "aggregation"


class PemonError(Exception):
    """Base class for all run-ending errors."""

    kind: ErrorKind = ErrorKind.PARSE

    def __init__(self, message: str, core_index: Optional[int] = None):
        super().__init__(message)
        self.core_index = core_index


# --- Parse errors ---


class SourceUnavailable(PemonError):
    """A kernel text source could not be read."""

    kind = ErrorKind.PARSE

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot read {path}: {reason}")
        self.path = path


class CounterLineNotFound(PemonError):
    """No `cpu<N>` line exists for the requested core."""

    kind = ErrorKind.PARSE


class CounterParseError(PemonError):
    """A `cpu<N>` line has missing or non-numeric counter fields."""

    kind = ErrorKind.PARSE


class FrequencyLineMalformed(PemonError):
    """A `cpu MHz` line has no parseable value after its separator."""

    kind = ErrorKind.PARSE


class CoreCountMismatch(PemonError):
    """The processor count and the number of frequency entries disagree."""

    kind = ErrorKind.PARSE


# --- Arithmetic errors ---


class ZeroIntervalCounters(PemonError):
    """No ticks elapsed between two snapshots of the same core."""

    kind = ErrorKind.ARITHMETIC


class CounterRegression(PemonError):
    """The idle counter moved outside the range allowed by the total delta."""

    kind = ErrorKind.ARITHMETIC


# --- External collaborator errors ---


class CollaboratorError(PemonError):
    """An external utility failed or produced output we cannot use."""

    kind = ErrorKind.COLLABORATOR


class SensorReadError(CollaboratorError):
    pass


class StorageReadError(CollaboratorError):
    pass


# --- Aggregation errors ---


class EmptySessionLog(PemonError):
    """Summary statistics were requested for a session with no samples."""

    kind = ErrorKind.AGGREGATION
