"""
Command Runner Port Interface

Defines the contract for running diagnostic shell commands.
This is an output port - implemented by infrastructure layer.
"""

from abc import ABC, abstractmethod

from sigterm_capture.domain.value_objects import CommandOutput


class ICommandRunnerPort(ABC):
    """
    Port interface for running shell commands and capturing their output.
    """

    @abstractmethod
    async def run(self, command: str, timeout: float) -> CommandOutput:
        """
        Run a command through the host shell.

        A non-zero exit code is reported in the output, not raised.

        Args:
            command: Shell command line
            timeout: Maximum run time in seconds

        Returns:
            Captured command output

        Raises:
            CommandExecutionError: Command could not be spawned or timed out
        """
        pass
