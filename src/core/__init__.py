"""
Core modules for the project bootstrapper.
"""

from .orchestrator import BootstrapOrchestrator
from .context import BootstrapContext
from .runner import CommandRunner
from .installer import ToolInstaller
from .errors import BootstrapError, CommandFailedError, PrerequisiteMissingError

__all__ = [
    "BootstrapOrchestrator",
    "BootstrapContext",
    "CommandRunner",
    "ToolInstaller",
    "BootstrapError",
    "CommandFailedError",
    "PrerequisiteMissingError"
]
