"""
Best-effort installation of missing base tools through the host package manager.
"""

import logging
import os
from typing import List, Mapping, Optional

from ..models.stage import OSKind, StageResult
from .detection import command_exists
from .runner import CommandRunner


class ToolInstaller:
    """Installs command-line tools with apt-get, dnf or Homebrew.

    Failures never raise: they come back as a warned StageResult so the
    bootstrap can carry on and leave the tool for manual installation.
    """

    STAGE = "tool_install"

    # Preference order per OS family
    MANAGERS = {
        OSKind.LINUX: ["apt-get", "dnf"],
        OSKind.MACOS: ["brew"],
        OSKind.OTHER: [],
    }
    PRIVILEGED = {"apt-get", "dnf"}

    def __init__(self, runner: CommandRunner, use_sudo: bool = True):
        self.logger = logging.getLogger(__name__)
        self.runner = runner
        self.use_sudo = use_sudo

    def select_package_manager(self, os_kind: OSKind, path: Optional[str] = None) -> Optional[str]:
        """Return the first available package manager for the OS family."""
        for manager in self.MANAGERS.get(os_kind, []):
            if command_exists(manager, path=path):
                return manager
        return None

    def _sudo_prefix(self, manager: str, path: Optional[str] = None) -> List[str]:
        if not self.use_sudo or manager not in self.PRIVILEGED:
            return []
        if hasattr(os, "geteuid") and os.geteuid() == 0:
            return []
        if command_exists("sudo", path=path):
            return ["sudo"]
        return []

    def install_commands(self, manager: str, tool: str, path: Optional[str] = None) -> List[List[str]]:
        """Build the command sequence that installs a tool with a manager."""
        sudo = self._sudo_prefix(manager, path=path)
        if manager == "apt-get":
            return [
                sudo + ["apt-get", "update"],
                sudo + ["apt-get", "install", "-y", tool],
            ]
        if manager == "dnf":
            return [sudo + ["dnf", "install", "-y", tool]]
        if manager == "brew":
            return [["brew", "install", tool]]
        raise ValueError(f"Unsupported package manager: {manager}")

    def try_install(self, tool: str, os_kind: OSKind,
                    env: Optional[Mapping[str, str]] = None) -> StageResult:
        """
        Attempt to install a tool.

        Args:
            tool: Tool (and package) name
            os_kind: Host OS family
            env: Environment for the package manager

        Returns:
            INSTALLED on success, WARNED when no manager is available or the
            install exits non-zero
        """
        path = env.get("PATH") if env else None
        manager = self.select_package_manager(os_kind, path=path)
        if manager is None:
            return StageResult.warned(
                self.STAGE,
                f"No supported package manager found for {os_kind.value}",
                tool=tool
            )

        self.logger.info(f"Installing {tool} with {manager}")
        for cmd in self.install_commands(manager, tool, path=path):
            result = self.runner.run(cmd, env=env, check=False)
            if result.returncode != 0:
                return StageResult.warned(
                    self.STAGE,
                    f"{' '.join(cmd)} exited with {result.returncode}",
                    tool=tool,
                    manager=manager
                )

        return StageResult.installed(self.STAGE, f"Installed {tool}", tool=tool, manager=manager)
