"""
Shell Infrastructure

Command execution adapters.
"""

from .command_runner import ShellCommandRunner

__all__ = ["ShellCommandRunner"]
