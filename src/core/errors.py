"""
Errors that abort a bootstrap run.
"""

from typing import Optional, Sequence


class BootstrapError(Exception):
    """Base error for the bootstrapper."""


class CommandFailedError(BootstrapError):
    """An external command exited non-zero where failure is fatal."""

    def __init__(self, cmd: Sequence[str], returncode: Optional[int], reason: Optional[str] = None):
        self.cmd = list(cmd)
        self.returncode = returncode
        self.reason = reason
        message = f"Command failed ({returncode}): {' '.join(self.cmd)}"
        if reason:
            message += f" - {reason}"
        super().__init__(message)


class PrerequisiteMissingError(BootstrapError):
    """A tool required by a standalone command is not installed."""

    def __init__(self, tool: str, hint: str = ""):
        self.tool = tool
        message = f"{tool} not found"
        if hint:
            message += f"; {hint}"
        super().__init__(message)
