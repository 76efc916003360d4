"""Subprocess execution service for pgaudit-setup."""

import shlex
import subprocess
from typing import Dict, List, Optional

from pgauditsetup.errors import SetupError


class CommandRunner:
    """Runs external commands with consistent error handling and run logging."""

    def __init__(self, logger, run_log=None, subprocess_module=subprocess):
        self.logger = logger
        self.run_log = run_log
        self.subprocess = subprocess_module

    @staticmethod
    def format_command(cmd: List[str]) -> str:
        return shlex.join(cmd)

    def _record(self, message: str):
        if self.run_log is not None and message:
            self.run_log.record(message)

    def run(
        self,
        cmd: List[str],
        env: Optional[Dict[str, str]] = None,
        log_output: bool = True,
    ) -> subprocess.CompletedProcess:
        cmd_str = self.format_command(cmd)
        self.logger.info("Running: %s", cmd_str)
        self._record(f"Running: {cmd_str}")

        try:
            result = self.subprocess.run(
                cmd,
                text=True,
                capture_output=True,
                env=env,
            )
        except FileNotFoundError as exc:
            self._record("Error running command:")
            self._record(str(exc))
            raise SetupError(
                f"Required command not found: {cmd[0]}. Please install it and try again."
            ) from exc
        except OSError as exc:
            self._record("Error running command:")
            self._record(str(exc))
            raise SetupError(f"Failed to execute command: {cmd_str}. {exc}") from exc

        stdout = (result.stdout or "").strip()
        stderr = (result.stderr or "").strip()

        if result.returncode == 0:
            if stdout:
                self.logger.debug("Command output: %s", stdout)
            if log_output:
                self._record(stdout)
            return result

        self._record("Error running command:")
        self._record(stdout)
        self._record(stderr or f"Exit status {result.returncode}")

        message = f"Command failed ({result.returncode}): {cmd_str}"
        if stderr:
            message = f"{message}\n{stderr}"
        raise SetupError(message)
