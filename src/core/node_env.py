"""
Node dependency provisioning.
"""

import logging

from ..models.stage import StageResult
from ..utils.logging import log_success
from .context import BootstrapContext
from .errors import PrerequisiteMissingError
from .runner import CommandRunner


class NodeEnvProvisioner:
    """Runs a clean `npm ci` when the project declares a package manifest."""

    STAGE = "node_env"

    def __init__(self, runner: CommandRunner, npm: str = "npm"):
        self.logger = logging.getLogger(__name__)
        self.runner = runner
        self.npm = npm

    def provision(self, ctx: BootstrapContext, required: bool = False) -> StageResult:
        """
        Install Node dependencies.

        Args:
            ctx: Run context
            required: Raise instead of warning when npm is missing

        Returns:
            SKIPPED without a manifest, WARNED without npm, INSTALLED otherwise

        Raises:
            CommandFailedError: if `npm ci` fails on a present manifest
        """
        manifest = ctx.layout.package_manifest
        if not ctx.package_manifest.is_file():
            return StageResult.skipped(self.STAGE, f"No {manifest}")

        if not ctx.has_tool(self.npm):
            if required:
                raise PrerequisiteMissingError(self.npm, "please install Node.js / npm")
            self.logger.warning("npm not found; please install Node.js / npm to install Node dependencies")
            return StageResult.warned(self.STAGE, "npm not found")

        self.logger.info(f"Installing Node dependencies ({self.npm} ci)")
        self.runner.run([self.npm, "ci"], env=ctx.env, cwd=ctx.project_dir)
        log_success(self.logger, "Node dependencies installed")
        return StageResult.installed(self.STAGE, "Node dependencies installed")
