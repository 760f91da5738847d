import logging
import os

import pytest

from conftest import RecordingRunner
from src.core.context import BootstrapContext
from src.core.errors import CommandFailedError, PrerequisiteMissingError
from src.core.python_env import PythonEnvProvisioner
from src.models.stage import StageStatus


@pytest.fixture
def ctx(project_dir):
    return BootstrapContext(project_dir=project_dir, env={"PATH": "/usr/bin"})


def test_missing_interpreter_warns_and_skips(available_tools, runner, ctx, caplog):
    caplog.set_level(logging.WARNING)
    results = PythonEnvProvisioner(runner).provision(ctx)

    assert [r.status for r in results] == [StageStatus.WARNED]
    assert runner.calls == []
    assert not ctx.venv_dir.exists()
    assert "Python is not installed" in caplog.text


def test_missing_interpreter_raises_when_required(available_tools, runner, ctx):
    with pytest.raises(PrerequisiteMissingError):
        PythonEnvProvisioner(runner).ensure_venv(ctx, required=True)


def test_prefers_python3(available_tools, runner, ctx):
    available_tools.update({"python3", "python"})
    assert PythonEnvProvisioner(runner).find_interpreter(ctx) == "python3"


def test_falls_back_to_python(available_tools, runner, ctx):
    available_tools.add("python")
    result = PythonEnvProvisioner(runner).ensure_venv(ctx)

    assert result.status == StageStatus.INSTALLED
    assert runner.calls == [["python", "-m", "venv", str(ctx.venv_dir)]]
    assert ctx.venv_dir.is_dir()


def test_existing_venv_is_reused(available_tools, runner, ctx):
    available_tools.add("python3")
    ctx.venv_python.parent.mkdir(parents=True)
    ctx.venv_python.touch()
    marker = ctx.venv_dir / "keep"
    marker.write_text("x")

    result = PythonEnvProvisioner(runner).ensure_venv(ctx)

    assert result.status == StageStatus.SKIPPED
    assert runner.calls == []
    assert marker.exists()


def test_activate_sets_child_environment(runner, ctx):
    before = dict(os.environ)
    ctx.env["PYTHONHOME"] = "/opt/python"
    PythonEnvProvisioner(runner).activate(ctx)

    assert ctx.env["VIRTUAL_ENV"] == str(ctx.venv_dir)
    assert ctx.env["PATH"] == str(ctx.venv_dir / "bin") + os.pathsep + "/usr/bin"
    assert "PYTHONHOME" not in ctx.env
    assert dict(os.environ) == before


def test_no_requirements_skips_pip(available_tools, runner, ctx, caplog):
    available_tools.add("python3")
    caplog.set_level(logging.INFO)

    results = PythonEnvProvisioner(runner).provision(ctx)

    assert [r.status for r in results] == [StageStatus.INSTALLED, StageStatus.SKIPPED]
    assert not any("pip" in c for c in runner.commands())
    assert "No requirements.txt found; skipping pip install" in caplog.text


def test_requirements_installed_with_venv_python(available_tools, runner, ctx):
    available_tools.add("python3")
    ctx.requirements_file.write_text("requests\n")

    PythonEnvProvisioner(runner).provision(ctx)

    venv_python = str(ctx.venv_dir / "bin" / "python")
    assert runner.calls[1:] == [
        [venv_python, "-m", "pip", "install", "--upgrade", "pip"],
        [venv_python, "-m", "pip", "install", "-r", str(ctx.requirements_file)],
    ]
    assert runner.envs[-1]["VIRTUAL_ENV"] == str(ctx.venv_dir)


def test_requirements_failure_is_fatal(available_tools, ctx):
    available_tools.add("python3")
    ctx.requirements_file.write_text("not a valid package name!!\n")
    runner = RecordingRunner(failures={"install -r": 1})

    with pytest.raises(CommandFailedError) as excinfo:
        PythonEnvProvisioner(runner).provision(ctx)

    assert excinfo.value.returncode == 1
    assert ctx.venv_dir.is_dir()


def test_empty_venv_dir_is_rebuilt_in_place(available_tools, runner, ctx):
    available_tools.add("python3")
    ctx.venv_dir.mkdir()
    leftover = ctx.venv_dir / "leftover"
    leftover.write_text("x")
    ctx.requirements_file.write_text("")

    results = PythonEnvProvisioner(runner).provision(ctx)

    assert results[0].status == StageStatus.INSTALLED
    assert runner.calls[0] == ["python3", "-m", "venv", str(ctx.venv_dir)]
    assert "--clear" not in runner.calls[0]
    assert leftover.exists()
    assert ctx.venv_python.exists()
    assert runner.calls[1][0] == str(ctx.venv_python)


def test_existing_venv_needs_no_interpreter(available_tools, runner, ctx):
    ctx.venv_python.parent.mkdir(parents=True)
    ctx.venv_python.touch()
    ctx.requirements_file.write_text("requests\n")

    provisioner = PythonEnvProvisioner(runner)
    assert provisioner.ensure_venv(ctx, required=True).status == StageStatus.SKIPPED

    results = provisioner.provision(ctx)

    assert [r.status for r in results] == [StageStatus.SKIPPED, StageStatus.INSTALLED]
    assert runner.calls[-1][:4] == [str(ctx.venv_python), "-m", "pip", "install"]


def test_incomplete_venv_without_interpreter_raises_when_required(available_tools, runner, ctx):
    ctx.venv_dir.mkdir()
    with pytest.raises(PrerequisiteMissingError):
        PythonEnvProvisioner(runner).ensure_venv(ctx, required=True)
