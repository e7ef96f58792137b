"""
Unit tests for external command execution.
"""

import os
import subprocess
from unittest.mock import patch

import pytest

from pemon.system.commands import check_tool_installed, run_command


@pytest.mark.unit
class TestRunCommand:
    def test_success(self):
        completed = subprocess.CompletedProcess(["sensors"], 0, stdout="ok\n", stderr="")

        with patch("pemon.system.commands.subprocess.run", return_value=completed) as mock_run:
            assert run_command(["sensors"]) == (0, "ok\n", "")

        env = mock_run.call_args.kwargs["env"]
        assert env["LC_ALL"] == "C"

    def test_child_runs_in_new_session(self):
        completed = subprocess.CompletedProcess(["sensors"], 0, stdout="", stderr="")

        with patch("pemon.system.commands.subprocess.run", return_value=completed) as mock_run:
            run_command(["sensors"])

        assert mock_run.call_args.kwargs["start_new_session"] is True

    @pytest.mark.skipif(not os.path.exists("/proc/self/stat"), reason="needs /proc")
    def test_child_process_group_differs_from_caller(self):
        # Field 5 of /proc/<pid>/stat is the process group id.
        returncode, stdout, _ = run_command(["sh", "-c", "cut -d' ' -f5 /proc/$$/stat"])

        assert returncode == 0
        assert int(stdout.strip()) != os.getpgrp()

    def test_command_not_found(self):
        with patch("pemon.system.commands.subprocess.run", side_effect=FileNotFoundError("sensors")):
            returncode, stdout, stderr = run_command(["sensors"])

        assert returncode == -1
        assert stdout == ""
        assert "not found" in stderr

    def test_os_error(self):
        with patch("pemon.system.commands.subprocess.run", side_effect=PermissionError("denied")):
            returncode, _, stderr = run_command(["nvme", "smart-log", "/dev/nvme0n1"])

        assert returncode == -1
        assert "denied" in stderr


@pytest.mark.unit
class TestCheckToolInstalled:
    def test_installed(self):
        with patch("pemon.system.commands.shutil.which", return_value="/usr/bin/sensors"):
            assert check_tool_installed("sensors") is True

    def test_missing(self):
        with patch("pemon.system.commands.shutil.which", return_value=None):
            assert check_tool_installed("nvme") is False
