"""
Bootstrap orchestrator - runs the setup pipeline and the standalone commands.
"""

import logging
import shutil
from contextlib import contextmanager
from typing import List, Optional, TextIO

from config.settings import Settings
from ..models.report import BootstrapReport
from ..models.stage import StageResult, StageStatus
from ..utils.logging import log_success
from .context import BootstrapContext
from .detection import detect_os, find_missing_tools
from .errors import CommandFailedError
from .installer import ToolInstaller
from .node_env import NodeEnvProvisioner
from .project_files import materialize_env_file, normalize_script_permissions
from .python_env import PythonEnvProvisioner
from .reporter import CompletionReporter
from .runner import CommandRunner


class BootstrapOrchestrator:
    """Runs the bootstrap stages in a fixed order against one project directory."""

    def __init__(self,
                 settings: Settings,
                 runner: Optional[CommandRunner] = None,
                 stream: Optional[TextIO] = None):
        """
        Initialize the orchestrator.

        Args:
            settings: Application settings
            runner: Command runner (built from settings when omitted)
            stream: Where the completion summary is printed
        """
        self.logger = logging.getLogger(__name__)
        self.settings = settings
        self.dry_run = settings.dry_run
        self.runner = runner or CommandRunner(
            dry_run=settings.dry_run,
            timeout=settings.tooling.command_timeout
        )

        self.installer = ToolInstaller(self.runner, use_sudo=settings.tooling.use_sudo)
        self.python_env = PythonEnvProvisioner(self.runner, settings.tooling.python_candidates)
        self.node_env = NodeEnvProvisioner(self.runner)
        self.project_name = settings.project_name or settings.project_dir.name
        self.reporter = CompletionReporter(self.project_name, stream=stream)
        self.report: Optional[BootstrapReport] = None

    def make_context(self) -> BootstrapContext:
        return BootstrapContext(
            project_dir=self.settings.project_dir,
            layout=self.settings.layout,
            os_kind=detect_os()
        )

    def run(self) -> BootstrapReport:
        """
        Full setup: tools, Python env, Node env, env file, scripts, summary.

        Returns:
            Report of every stage

        Raises:
            CommandFailedError: if a declared manifest fails to install
        """
        self.logger.info(f"Running {self.project_name} setup...")
        ctx = self.make_context()
        report = self.report = BootstrapReport(os_kind=ctx.os_kind)
        self.logger.info(f"Detected OS: {ctx.os_kind.value}")

        for result in self.check_tools(ctx, report):
            report.add(result)

        with self._fatal_stage(report, PythonEnvProvisioner.STAGE):
            for result in self.python_env.provision(ctx):
                report.add(result)

        with self._fatal_stage(report, NodeEnvProvisioner.STAGE):
            report.add(self.node_env.provision(ctx))

        report.add(materialize_env_file(ctx, dry_run=self.dry_run))
        report.add(normalize_script_permissions(ctx, dry_run=self.dry_run))

        report.complete()
        self.reporter.render(ctx, report)
        return report

    @contextmanager
    def _fatal_stage(self, report: BootstrapReport, stage: str):
        """Record a failed stage before letting the error end the run."""
        try:
            yield
        except CommandFailedError as e:
            report.add(StageResult.failed(stage, "Dependency installation failed", error=str(e)))
            report.complete()
            raise

    def check_tools(self, ctx: BootstrapContext, report: BootstrapReport) -> List[StageResult]:
        """Find missing base tools and try to install each of them."""
        report.missing_tools = find_missing_tools(
            self.settings.tooling.base_tools,
            path=ctx.env.get("PATH")
        )
        if not report.missing_tools:
            return []

        self.logger.warning(f"Missing tools: {' '.join(report.missing_tools)}")
        if not self.settings.tooling.auto_install_tools:
            return [
                StageResult.warned(ToolInstaller.STAGE, "Automatic install disabled", tool=tool)
                for tool in report.missing_tools
            ]

        results = []
        for tool in report.missing_tools:
            result = self.installer.try_install(tool, ctx.os_kind, env=ctx.env)
            if result.status == StageStatus.INSTALLED:
                log_success(self.logger, f"Installed {tool}")
            else:
                self.logger.debug(result.message)
                self.logger.warning(f"Could not install {tool} automatically. Please install it manually.")
            results.append(result)
        return results

    def create_venv(self) -> StageResult:
        """Create the virtual environment only; fails without an interpreter."""
        ctx = self.make_context()
        return self.python_env.ensure_venv(ctx, required=True)

    def install_python(self) -> List[StageResult]:
        """Ensure the virtual environment, then install requirements."""
        ctx = self.make_context()
        results = [self.python_env.ensure_venv(ctx, required=True)]
        self.python_env.activate(ctx)
        results.append(self.python_env.install_requirements(ctx))
        return results

    def install_node(self) -> StageResult:
        """Install Node dependencies; fails when the manifest exists but npm does not."""
        ctx = self.make_context()
        result = self.node_env.provision(ctx, required=True)
        if result.status == StageStatus.SKIPPED:
            self.logger.info(f"No {ctx.layout.package_manifest} found, skipping npm install")
        return result

    def run_tests(self) -> List[StageResult]:
        """Run npm test and pytest when available; failures only warn."""
        ctx = self.make_context()
        results = []

        if ctx.package_manifest.is_file() and ctx.has_tool("npm"):
            self.logger.info("Running npm test")
            proc = self.runner.run(["npm", "test"], env=ctx.env, cwd=ctx.project_dir, check=False)
            results.append(self._test_result("npm_test", proc.returncode))

        pytest = ctx.venv_tool("pytest")
        if ctx.venv_dir.is_dir() and pytest.is_file():
            self.python_env.activate(ctx)
            self.logger.info("Running pytest")
            proc = self.runner.run([str(pytest)], env=ctx.env, cwd=ctx.project_dir, check=False)
            results.append(self._test_result("pytest", proc.returncode))
        else:
            self.logger.info(f"No pytest found or no {ctx.layout.venv_dir}; skipping Python tests")
            results.append(StageResult.skipped("pytest", "pytest not available"))

        return results

    def _test_result(self, stage: str, returncode: int) -> StageResult:
        if returncode == 0:
            log_success(self.logger, f"{stage} passed")
            return StageResult.installed(stage, "passed")
        self.logger.warning(f"{stage} exited with {returncode}")
        return StageResult.warned(stage, f"exited with {returncode}", returncode=returncode)

    def clean(self) -> StageResult:
        """Remove the virtual environment directory."""
        ctx = self.make_context()
        venv_name = ctx.layout.venv_dir
        if not ctx.venv_dir.exists():
            self.logger.info(f"No {venv_name} to remove")
            return StageResult.skipped("clean", f"No {venv_name}")

        if self.dry_run:
            self.logger.info(f"[dry-run] remove {ctx.venv_dir}")
        else:
            shutil.rmtree(ctx.venv_dir)
        log_success(self.logger, f"Removed {venv_name}")
        return StageResult.installed("clean", f"Removed {venv_name}")
