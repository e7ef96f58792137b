"""
Process-level orchestration: signal-driven cancellation of a sampling run.
"""

from .signal_handler import SignalHandler

__all__ = ["SignalHandler"]
