import sys

import pytest

from src.core.errors import CommandFailedError
from src.core.runner import CommandRunner


def test_returns_exit_code_without_check():
    result = CommandRunner().run([sys.executable, "-c", "import sys; sys.exit(3)"], check=False)
    assert result.returncode == 3


def test_raises_on_failure_with_check():
    with pytest.raises(CommandFailedError) as excinfo:
        CommandRunner().run([sys.executable, "-c", "import sys; sys.exit(2)"])
    assert excinfo.value.returncode == 2


def test_passes_explicit_environment(tmp_path):
    CommandRunner().run(
        [sys.executable, "-c", "import os; open('marker.txt', 'w').write(os.environ['BOOTSTRAP_MARK'])"],
        env={"BOOTSTRAP_MARK": "venv-on", "SYSTEMROOT": "C:\\Windows"},
        cwd=tmp_path
    )
    assert (tmp_path / "marker.txt").read_text() == "venv-on"


def test_missing_executable():
    runner = CommandRunner()
    assert runner.run(["definitely-not-a-real-tool-xyz"], check=False).returncode == 127
    with pytest.raises(CommandFailedError):
        runner.run(["definitely-not-a-real-tool-xyz"])


def test_dry_run_executes_nothing(tmp_path):
    marker = tmp_path / "marker"
    result = CommandRunner(dry_run=True).run(
        [sys.executable, "-c", f"open({str(marker)!r}, 'w').close()"]
    )
    assert result.returncode == 0
    assert not marker.exists()
