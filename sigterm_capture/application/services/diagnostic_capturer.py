"""
Diagnostic Capturer

Runs the configured diagnostic commands and wraps their output as
artifacts.
"""

from typing import List, Sequence

from sigterm_capture.domain.errors import CommandExecutionError
from sigterm_capture.domain.ports import ICommandRunnerPort
from sigterm_capture.domain.value_objects import Artifact, DiagnosticCommand
from sigterm_capture.infrastructure.logging import get_logger


logger = get_logger(__name__)

DEFAULT_DIAGNOSTIC_COMMANDS = (
    DiagnosticCommand(name="process", command="ps aux"),
    DiagnosticCommand(name="env", command="env"),
)


class DiagnosticCapturer:
    """
    Captures a diagnostic snapshot of the container.

    Commands run sequentially in configured order. Each command is
    independent: a failure is logged and the next command still runs.
    """

    def __init__(
        self,
        command_runner: ICommandRunnerPort,
        commands: Sequence[DiagnosticCommand] = DEFAULT_DIAGNOSTIC_COMMANDS,
        timeout: float = 5.0,
    ):
        """
        Initialize diagnostic capturer.

        Args:
            command_runner: Port for running shell commands
            commands: Ordered diagnostic commands
            timeout: Per-command timeout in seconds
        """
        self._command_runner = command_runner
        self._commands = list(commands)
        self._timeout = timeout

    @property
    def commands(self) -> List[DiagnosticCommand]:
        return list(self._commands)

    async def capture(self) -> List[Artifact]:
        """
        Run every diagnostic command.

        Returns:
            One artifact per command that could be run
        """
        artifacts = []

        for diagnostic in self._commands:
            logger.info("Gathering diagnostic", artifact=diagnostic.name, command=diagnostic.command)

            try:
                output = await self._command_runner.run(diagnostic.command, timeout=self._timeout)
            except CommandExecutionError as e:
                logger.warning(
                    "Diagnostic command failed",
                    artifact=diagnostic.name,
                    command=diagnostic.command,
                    error=e.message,
                )
                continue

            if not output.succeeded:
                logger.warning(
                    "Diagnostic command exited with non-zero status",
                    artifact=diagnostic.name,
                    command=diagnostic.command,
                    exit_code=output.exit_code,
                    stderr=output.stderr.decode("utf-8", errors="replace")[:500],
                )

            try:
                artifact = Artifact(name=diagnostic.name, content=output.stdout)
            except ValueError as e:
                logger.warning(
                    "Invalid diagnostic artifact name",
                    artifact=diagnostic.name,
                    command=diagnostic.command,
                    error=str(e),
                )
                continue

            artifacts.append(artifact)

        return artifacts
