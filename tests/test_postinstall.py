from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from xreact.postinstall import HookEnvironment, run_postinstall, should_auto_run


@pytest.mark.parametrize("tty", [True, False])
def test_ci_never_auto_runs(tty: bool):
    env = HookEnvironment.from_environ({"CI": "true"}, stdin_is_tty=tty)
    assert env.ci is True
    assert should_auto_run(env) is False


def test_non_interactive_environment_does_not_auto_run():
    env = HookEnvironment.from_environ({}, stdin_is_tty=False)
    assert should_auto_run(env) is False


def test_interactive_terminal_auto_runs():
    env = HookEnvironment.from_environ({}, stdin_is_tty=True)
    assert should_auto_run(env) is True


def test_foreground_scripts_count_as_interactive():
    env = HookEnvironment.from_environ({"npm_config_foreground_scripts": "true"}, stdin_is_tty=False)
    assert should_auto_run(env) is True


@pytest.mark.parametrize(
    "environ",
    [
        {"XREACT_AUTO_RUN": "false"},
        {"npm_config_global": "true"},
    ],
)
def test_opt_out_and_global_install_do_not_auto_run(environ: dict):
    assert should_auto_run(HookEnvironment.from_environ(environ, stdin_is_tty=True)) is False


@pytest.mark.parametrize("value", ["", "0", "false"])
def test_falsy_ci_values_are_ignored(value: str):
    env = HookEnvironment.from_environ({"CI": value}, stdin_is_tty=True)
    assert env.ci is False


@patch("xreact.postinstall.subprocess.run")
def test_run_postinstall_launches_in_init_cwd(mock_run: Mock, tmp_path: Path):
    mock_run.return_value = Mock(returncode=0)
    env = HookEnvironment.from_environ({"INIT_CWD": str(tmp_path)}, stdin_is_tty=True)

    assert run_postinstall(env) is True

    args, kwargs = mock_run.call_args
    assert args[0][1:] == ["-m", "xreact", "create"]
    assert kwargs["cwd"] == tmp_path


@patch("xreact.postinstall.subprocess.run")
def test_run_postinstall_failed_generator_is_only_a_warning(mock_run: Mock, tmp_path: Path):
    mock_run.return_value = Mock(returncode=1)
    env = HookEnvironment(interactive=True, init_cwd=tmp_path)

    assert run_postinstall(env) is True


@patch("xreact.postinstall.subprocess.run")
def test_run_postinstall_skips_launch_in_ci(mock_run: Mock):
    assert run_postinstall(HookEnvironment(ci=True, interactive=True)) is False
    mock_run.assert_not_called()


@patch("xreact.postinstall.subprocess.run", side_effect=OSError("no python"))
def test_run_postinstall_swallows_errors(mock_run: Mock, tmp_path: Path):
    assert run_postinstall(HookEnvironment(interactive=True, init_cwd=tmp_path)) is False


def test_package_under_global_npm_prefix_is_global(tmp_path: Path):
    package_dir = tmp_path / "lib" / "node_modules" / "xreact"
    package_dir.mkdir(parents=True)

    env = HookEnvironment.from_environ(
        {"npm_config_prefix": str(tmp_path)}, stdin_is_tty=True, package_dir=package_dir
    )

    assert env.global_install is True
    assert should_auto_run(env) is False


def test_package_outside_global_npm_prefix_is_local(tmp_path: Path):
    env = HookEnvironment.from_environ(
        {"npm_config_prefix": str(tmp_path / "global")},
        stdin_is_tty=True,
        package_dir=tmp_path / "project" / "node_modules" / "xreact",
    )

    assert env.global_install is False
