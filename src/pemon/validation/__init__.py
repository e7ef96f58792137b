"""
Validation and error handling for the pemon package.

This module provides input validation and error handling
with consistent error reporting across the application.
"""

from .exceptions import (
    ErrorSeverity,
    ValidationError,
    describe_error,
    handle_error,
    handle_config_error,
    handle_cli_error,
)

from .validators import (
    validate_bucket_edges,
    validate_enum_choice,
    validate_non_empty_string,
    validate_positive_float,
    validate_positive_integer,
)

__all__ = [
    "ErrorSeverity",
    "ValidationError",
    "describe_error",
    "handle_error",
    "handle_config_error",
    "handle_cli_error",
    "validate_bucket_edges",
    "validate_enum_choice",
    "validate_non_empty_string",
    "validate_positive_float",
    "validate_positive_integer",
]
