"""
Command execution utilities.

This module runs the external hardware utilities (``sensors``, ``nvme``)
and checks whether they are installed.
"""

import logging
import os
import shutil
import subprocess
from typing import List, Tuple

logger = logging.getLogger(__name__)


def run_command(argv: List[str]) -> Tuple[int, str, str]:
    """Execute a command and capture its output.

    The command runs with ``LC_ALL=C`` so that number formatting and unit
    tokens in its output do not depend on the user's locale. It is started
    in a new session, so a Ctrl-C delivered to the terminal's foreground
    process group reaches pemon but not the utility, and a tick that has
    begun still gets its reading.

    Args:
        argv: Program name followed by its arguments.

    Returns:
        Tuple of (return_code, stdout_string, stderr_string).
        return_code is -1 when the program could not be started.

    Note:
        No timeout is applied: a hung utility blocks the caller until it
        exits.
    """
    logger.debug(f"Executing command: {' '.join(argv)}")

    env = os.environ.copy()
    env["LC_ALL"] = "C"

    try:
        process = subprocess.run(
            argv,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            env=env,
            check=False,
            start_new_session=True,  # Own process group, out of reach of terminal SIGINT
        )
        return process.returncode, process.stdout, process.stderr
    except FileNotFoundError as e:
        logger.error(f"Command not found: {argv[0]}: {type(e).__name__}: {e}")
        return -1, "", f"Error: Command not found '{argv[0]}'"
    except OSError as e:
        logger.error(f"Failed to start '{argv[0]}': {type(e).__name__}: {e}")
        return -1, "", f"Error: {e}"


def check_tool_installed(name: str) -> bool:
    """Check if a command is available on the system PATH."""
    return shutil.which(name) is not None
