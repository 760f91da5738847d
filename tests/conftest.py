import io
import logging
import shutil
import subprocess
from pathlib import Path

import pytest

from config.settings import Settings
from src.core.errors import CommandFailedError
from src.core.orchestrator import BootstrapOrchestrator
from src.core.runner import CommandRunner


class RecordingRunner(CommandRunner):
    """Records commands instead of running them.

    `failures` maps a substring of the joined command to the exit code it
    should report. A successful `-m venv <dir>` lays down a minimal venv.
    """

    def __init__(self, failures=None):
        super().__init__()
        self.calls = []
        self.envs = []
        self.failures = failures or {}

    def run(self, cmd, env=None, cwd=None, check=True):
        args = [str(part) for part in cmd]
        self.calls.append(args)
        self.envs.append(dict(env) if env is not None else None)

        joined = " ".join(args)
        code = 0
        for pattern, returncode in self.failures.items():
            if pattern in joined:
                code = returncode

        if code == 0 and args[1:3] == ["-m", "venv"]:
            bin_dir = Path(args[3]) / "bin"
            bin_dir.mkdir(parents=True, exist_ok=True)
            (bin_dir / "python").touch()
            (bin_dir / "activate").touch()

        if check and code != 0:
            raise CommandFailedError(args, code)
        return subprocess.CompletedProcess(args, code, stdout="", stderr="")

    def commands(self):
        return [" ".join(call) for call in self.calls]


@pytest.fixture
def runner():
    return RecordingRunner()


@pytest.fixture
def available_tools(monkeypatch):
    """Tools that shutil.which reports as installed; starts empty."""
    tools = set()

    def fake_which(name, mode=None, path=None):
        return f"/usr/bin/{name}" if name in tools else None

    monkeypatch.setattr(shutil, "which", fake_which)
    return tools


@pytest.fixture
def project_dir(tmp_path_factory):
    path = tmp_path_factory.mktemp("project") / "demo"
    path.mkdir()
    return path


@pytest.fixture
def make_orchestrator(project_dir):
    def _make(runner, **overrides):
        settings = Settings(project_dir=project_dir, project_name="demo", _env_file=None, **overrides)
        stream = io.StringIO()
        orchestrator = BootstrapOrchestrator(settings, runner=runner, stream=stream)
        return orchestrator, stream
    return _make


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
