"""
Command-line interface for pemon.
"""

from .main import main, main_cli

__all__ = ["main", "main_cli"]
