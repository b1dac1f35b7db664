"""
Shell command runner.

Runs diagnostic commands through the host shell with asyncio
subprocesses and captures their output.
"""

import asyncio
import os
import signal
import time

from sigterm_capture.domain.errors import CommandExecutionError
from sigterm_capture.domain.ports import ICommandRunnerPort
from sigterm_capture.domain.value_objects import CommandOutput
from sigterm_capture.infrastructure.logging import get_logger


logger = get_logger(__name__)


class ShellCommandRunner(ICommandRunnerPort):
    """
    Executes command lines with `<shell> -c`.
    """

    def __init__(self, shell: str = "/bin/bash"):
        """
        Initialize the command runner.

        Args:
            shell: Shell binary used to interpret command lines
        """
        self.shell = shell

    async def run(self, command: str, timeout: float) -> CommandOutput:
        """
        Run a command and capture its output.

        Implementation of ICommandRunnerPort.run().

        Args:
            command: Shell command line
            timeout: Maximum run time in seconds

        Returns:
            CommandOutput with exit code, stdout, stderr and duration

        Raises:
            CommandExecutionError: Spawn failure or timeout
        """
        start_time = time.perf_counter()

        try:
            process = await asyncio.create_subprocess_exec(
                self.shell,
                "-c",
                command,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                start_new_session=True,
            )
        except OSError as e:
            raise CommandExecutionError(f"Failed to spawn '{command}': {e}", original_error=e) from e

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
        except asyncio.TimeoutError as e:
            self._kill_process_group(process)
            await process.wait()
            raise CommandExecutionError(
                f"Command '{command}' timed out after {timeout}s", original_error=e
            ) from e

        duration_ms = (time.perf_counter() - start_time) * 1000

        logger.debug(
            "Command finished",
            command=command,
            exit_code=process.returncode,
            duration_ms=round(duration_ms, 1),
        )

        return CommandOutput(
            command=command,
            exit_code=process.returncode,
            stdout=stdout,
            stderr=stderr,
            duration_ms=duration_ms,
        )

    @staticmethod
    def _kill_process_group(process: asyncio.subprocess.Process) -> None:
        """Kill the shell and every process it started (pipelines, background jobs)."""
        try:
            os.killpg(process.pid, signal.SIGKILL)
        except ProcessLookupError:
            pass
