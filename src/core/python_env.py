"""
Python virtual environment provisioning.
"""

import logging
import os
from typing import List, Optional, Sequence

from ..models.stage import StageResult, StageStatus
from ..utils.logging import log_success
from .context import BootstrapContext
from .errors import PrerequisiteMissingError
from .runner import CommandRunner


class PythonEnvProvisioner:
    """Creates the project virtual environment and installs requirements into it."""

    STAGE = "python_env"

    def __init__(self, runner: CommandRunner, candidates: Sequence[str] = ("python3", "python")):
        """
        Initialize the provisioner.

        Args:
            runner: Command runner
            candidates: Interpreter names, in preference order
        """
        self.logger = logging.getLogger(__name__)
        self.runner = runner
        self.candidates = list(candidates)

    def find_interpreter(self, ctx: BootstrapContext) -> Optional[str]:
        """Return the first interpreter name available on PATH."""
        for name in self.candidates:
            if ctx.has_tool(name):
                return name
        return None

    def venv_ready(self, ctx: BootstrapContext) -> bool:
        """A venv counts as present only once its interpreter exists."""
        return ctx.venv_python.exists()

    def ensure_venv(self, ctx: BootstrapContext, required: bool = False) -> StageResult:
        """
        Create the virtual environment unless a usable one already exists.

        A directory left behind by an interrupted run is rebuilt in place
        (no --clear), so whatever it already holds is kept.

        Args:
            ctx: Run context
            required: Raise instead of warning when a venv has to be created
                and no interpreter is found

        Returns:
            INSTALLED when created or repaired, SKIPPED when reused, WARNED
            when no interpreter is available
        """
        venv_name = ctx.layout.venv_dir
        if self.venv_ready(ctx):
            self.logger.info(f"{venv_name} already exists; reusing it")
            return StageResult.skipped(self.STAGE, f"Reused {venv_name}")

        ctx.python = self.find_interpreter(ctx)
        if ctx.python is None:
            if required:
                raise PrerequisiteMissingError(
                    " / ".join(self.candidates),
                    "please install Python 3"
                )
            self.logger.warning("Python is not installed. Skipping Python virtualenv setup.")
            return StageResult.warned(self.STAGE, "Python interpreter not found")

        if ctx.venv_dir.exists():
            self.logger.info(f"{venv_name} is incomplete; rebuilding it with {ctx.python}")
        else:
            self.logger.info(f"Creating virtual environment at {venv_name} using {ctx.python}")
        self.runner.run([ctx.python, "-m", "venv", str(ctx.venv_dir)], env=ctx.env, cwd=ctx.project_dir)
        log_success(self.logger, f"Created {venv_name}")
        return StageResult.installed(self.STAGE, f"Created {venv_name}", interpreter=ctx.python)

    def activate(self, ctx: BootstrapContext) -> None:
        """Point the child-process environment at the virtual environment."""
        bin_dir = str(ctx.venv_bin_dir)
        ctx.env["VIRTUAL_ENV"] = str(ctx.venv_dir)
        current = ctx.env.get("PATH", "")
        ctx.env["PATH"] = bin_dir + os.pathsep + current if current else bin_dir
        ctx.env.pop("PYTHONHOME", None)
        log_success(self.logger, f"Activated {ctx.layout.venv_dir}")

    def install_requirements(self, ctx: BootstrapContext) -> StageResult:
        """
        Install the requirements manifest into the virtual environment.

        Raises:
            CommandFailedError: if pip fails on a present requirements file
        """
        manifest = ctx.layout.requirements_file
        if not ctx.requirements_file.is_file():
            self.logger.info(f"No {manifest} found; skipping pip install")
            return StageResult.skipped("python_requirements", f"No {manifest}")

        python = str(ctx.venv_python)
        self.logger.info(f"Installing Python requirements from {manifest}")
        self.runner.run([python, "-m", "pip", "install", "--upgrade", "pip"], env=ctx.env, cwd=ctx.project_dir)
        self.runner.run([python, "-m", "pip", "install", "-r", str(ctx.requirements_file)],
                        env=ctx.env, cwd=ctx.project_dir)
        log_success(self.logger, "Python dependencies installed")
        return StageResult.installed("python_requirements", f"Installed {manifest}")

    def provision(self, ctx: BootstrapContext) -> List[StageResult]:
        """Run the full Python stage: venv, activation, requirements."""
        venv_result = self.ensure_venv(ctx)
        if venv_result.status == StageStatus.WARNED:
            return [venv_result]

        self.activate(ctx)
        return [venv_result, self.install_requirements(ctx)]
