"""
Blocking execution of external commands.
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from .errors import CommandFailedError


class CommandRunner:
    """Runs external commands one at a time with an explicit environment."""

    def __init__(self, dry_run: bool = False, timeout: Optional[int] = None):
        """
        Initialize the runner.

        Args:
            dry_run: If True, log commands instead of executing them
            timeout: Optional per-command timeout in seconds
        """
        self.logger = logging.getLogger(__name__)
        self.dry_run = dry_run
        self.timeout = timeout

    def run(self,
            cmd: Sequence[str],
            env: Optional[Mapping[str, str]] = None,
            cwd: Optional[Path] = None,
            check: bool = True) -> subprocess.CompletedProcess:
        """
        Run a command and wait for it to finish.

        Args:
            cmd: Command and arguments
            env: Environment for the child process (inherits when None)
            cwd: Working directory
            check: Raise CommandFailedError on a non-zero exit

        Returns:
            The completed process

        Raises:
            CommandFailedError: if check is set and the command fails
        """
        args: List[str] = [str(part) for part in cmd]

        if self.dry_run:
            self.logger.info(f"[dry-run] {' '.join(args)}")
            return subprocess.CompletedProcess(args, 0, stdout="", stderr="")

        self.logger.debug(f"Running: {' '.join(args)}")
        try:
            result = subprocess.run(
                args,
                env=dict(env) if env is not None else None,
                cwd=str(cwd) if cwd else None,
                text=True,
                timeout=self.timeout
            )
        except FileNotFoundError as e:
            if check:
                raise CommandFailedError(args, 127, str(e)) from e
            self.logger.debug(f"Could not start {args[0]}: {e}")
            return subprocess.CompletedProcess(args, 127, stdout="", stderr=str(e))
        except subprocess.TimeoutExpired as e:
            if check:
                raise CommandFailedError(args, None, f"timed out after {self.timeout} seconds") from e
            self.logger.debug(f"Command timed out: {' '.join(args)}")
            return subprocess.CompletedProcess(args, -1, stdout="", stderr="timeout")

        if check and result.returncode != 0:
            raise CommandFailedError(args, result.returncode)
        return result
