"""
Completion summary and next-step hints.
"""

import logging
import sys
from typing import List, TextIO, Optional

from ..models.report import BootstrapReport
from ..utils.logging import log_success
from .context import BootstrapContext


class CompletionReporter:
    """Prints the end-of-run summary."""

    def __init__(self, project_name: str = "project", stream: Optional[TextIO] = None):
        self.logger = logging.getLogger(__name__)
        self.project_name = project_name
        self.stream = stream or sys.stdout

    def next_steps(self, ctx: BootstrapContext) -> List[str]:
        """Build the hint lines for what is on disk after the run."""
        steps = []
        if ctx.activate_script.is_file():
            activate = ctx.layout.venv_dir / ctx.activate_script.relative_to(ctx.venv_dir)
            steps.append(f"  - Activate Python virtualenv:  source {activate.as_posix()}")
        if ctx.package_manifest.is_file():
            steps.append("  - Run npm scripts:               npm run <script>")
        steps.append("  - Run tests/build:               make test | make build")
        return steps

    def render(self, ctx: BootstrapContext, report: BootstrapReport) -> None:
        self.logger.info("Setup complete.")

        warnings = report.warnings()
        if warnings:
            self.logger.warning(f"Completed with {len(warnings)} warning(s):")
            for result in warnings:
                self.logger.warning(f"  {result.stage}: {result.message}")

        self.stream.write("\nNext steps:\n")
        for line in self.next_steps(ctx):
            self.stream.write(line + "\n")
        self.stream.write("\n")
        self.stream.flush()

        log_success(self.logger, f"{self.project_name} setup finished")
