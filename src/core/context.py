"""
Run context threaded through every bootstrap stage.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from config.settings import ProjectLayout
from ..models.stage import OSKind
from .detection import command_exists


@dataclass
class BootstrapContext:
    """
    Ambient state of a bootstrap run made explicit.

    `env` is the environment handed to every child process. Activating the
    virtual environment edits this mapping, never os.environ.
    """
    project_dir: Path
    layout: ProjectLayout = field(default_factory=ProjectLayout)
    os_kind: OSKind = OSKind.OTHER
    env: Dict[str, str] = field(default_factory=lambda: dict(os.environ))
    python: Optional[str] = None

    def path(self, relative: Path) -> Path:
        return self.project_dir / relative

    @property
    def venv_dir(self) -> Path:
        return self.path(self.layout.venv_dir)

    @property
    def requirements_file(self) -> Path:
        return self.path(self.layout.requirements_file)

    @property
    def package_manifest(self) -> Path:
        return self.path(self.layout.package_manifest)

    @property
    def env_template(self) -> Path:
        return self.path(self.layout.env_template)

    @property
    def env_file(self) -> Path:
        return self.path(self.layout.env_file)

    @property
    def scripts_dir(self) -> Path:
        return self.path(self.layout.scripts_dir)

    @property
    def venv_bin_dir(self) -> Path:
        if os.name == "nt":
            return self.venv_dir / "Scripts"
        return self.venv_dir / "bin"

    @property
    def venv_python(self) -> Path:
        if os.name == "nt":
            return self.venv_bin_dir / "python.exe"
        return self.venv_bin_dir / "python"

    def venv_tool(self, name: str) -> Path:
        if os.name == "nt":
            return self.venv_bin_dir / f"{name}.exe"
        return self.venv_bin_dir / name

    @property
    def activate_script(self) -> Path:
        return self.venv_bin_dir / "activate"

    def has_tool(self, name: str) -> bool:
        """Resolve a tool against the run's PATH rather than the parent's."""
        return command_exists(name, path=self.env.get("PATH"))
