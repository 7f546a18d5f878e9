"""CLI behaviour coverage for the click entry point."""

from __future__ import annotations

import sys
from typing import Callable

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner

from evtsyslog import __init__conf__, runtime, summary_info
from evtsyslog import cli as cli_mod
from evtsyslog.application.use_cases.load_config import ConfigLoadResult
from evtsyslog.domain.destination import Destination
from evtsyslog.domain.errors import EnumerationError
from evtsyslog.runtime import RuntimeSettings
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


def run_cli(args: list[str] | None = None) -> tuple[int, str, BaseException | None]:
    """Invoke the click group with ``CliRunner`` and capture output."""

    runner = CliRunner()
    original_argv = sys.argv
    sys.argv = [__init__conf__.shell_command]
    try:
        result = runner.invoke(
            cli_mod.cli,
            args or [],
            prog_name=__init__conf__.shell_command,
        )
    finally:
        sys.argv = original_argv
    return result.exit_code, result.output, result.exception


def test_cli_without_subcommand_prints_summary() -> None:
    exit_code, stdout, _ = run_cli()

    assert exit_code == 0
    assert stdout == summary_info()


def test_cli_info_command_matches_summary() -> None:
    exit_code, stdout, _ = run_cli(["info"])

    assert exit_code == 0
    assert stdout == summary_info()
    assert stdout.startswith("Info for evtsyslog:")


def test_cli_version_option() -> None:
    exit_code, stdout, _ = run_cli(["--version"])

    assert exit_code == 0
    assert stdout.strip() == f"evtsyslog version {__init__conf__.version}"


def test_cli_no_traceback_option(monkeypatch: pytest.MonkeyPatch) -> None:
    """`--no-traceback` should disable verbose tracebacks for subsequent commands."""

    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", True, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", True, raising=False)

    exit_code, _stdout, _exception = run_cli(["--no-traceback", "info"])

    assert exit_code == 0
    assert lib_cli_exit_tools.config.traceback is False
    assert lib_cli_exit_tools.config.traceback_force_color is False


def test_run_passes_overrides_to_the_foreground_runner(monkeypatch: pytest.MonkeyPatch) -> None:
    recorded: list[RuntimeSettings] = []

    def fake_run_foreground(settings: RuntimeSettings) -> int:
        recorded.append(settings)
        return 0

    monkeypatch.setattr(runtime, "run_foreground", fake_run_foreground)

    exit_code, _stdout, _ = run_cli(["run", "--host", "collector", "--port", "5140", "--no-queue", "--log-level", "debug"])

    assert exit_code == 0
    settings = recorded[0]
    assert (settings.host, settings.port) == ("collector", "5140")
    assert settings.queue_enabled is False
    assert settings.log_level == "DEBUG"


def test_run_propagates_startup_failure_exit_code(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(runtime, "run_foreground", lambda settings: 1)

    exit_code, _stdout, _ = run_cli(["run"])

    assert exit_code == 1


def test_run_rejects_invalid_environment_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EVTSYSLOG_QUEUE_WORKERS", "plenty")
    monkeypatch.setattr(runtime, "run_foreground", lambda settings: pytest.fail("must not run"))

    exit_code, stdout, _ = run_cli(["run"])

    assert exit_code == 2
    assert "EVTSYSLOG_QUEUE_WORKERS" in stdout


def test_service_forwards_raw_arguments(monkeypatch: pytest.MonkeyPatch) -> None:
    recorded: list[list[str]] = []

    def fake_run_service(argv: list[str]) -> int:
        recorded.append(argv)
        return 0

    monkeypatch.setattr(runtime, "run_service", fake_run_service)

    exit_code, _stdout, _ = run_cli(["service", "--startup", "auto", "install"])

    assert exit_code == 0
    assert recorded == [["--startup", "auto", "install"]]


def test_channels_lists_every_channel(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(runtime, "list_channels", lambda: ["Application", "System"])

    exit_code, stdout, _ = run_cli(["channels"])

    assert exit_code == 0
    assert "Application" in stdout and "System" in stdout


def test_channels_reports_enumeration_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def fail() -> list[str]:
        raise EnumerationError("access denied")

    monkeypatch.setattr(runtime, "list_channels", fail)

    exit_code, stdout, _ = run_cli(["channels"])

    assert exit_code == 1
    assert "access denied" in stdout


def test_config_shows_resolved_destination(monkeypatch: pytest.MonkeyPatch) -> None:
    result = ConfigLoadResult(Destination("10.0.0.5", 514), False, ("SyslogPort is not set; using 514",))
    monkeypatch.setattr(runtime, "load_destination", lambda settings: result)

    exit_code, stdout, _ = run_cli(["config"])

    assert exit_code == 0
    assert "10.0.0.5:514" in stdout
    assert "SyslogPort is not set" in stdout


def test_config_fails_without_destination(monkeypatch: pytest.MonkeyPatch) -> None:
    result = ConfigLoadResult(None, False, ("SyslogHost is not set",))
    monkeypatch.setattr(runtime, "load_destination", lambda settings: result)

    exit_code, stdout, _ = run_cli(["config"])

    assert exit_code == 1
    assert "SyslogHost is not set" in stdout


def test_main_restores_traceback_preferences(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", True, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", True, raising=False)

    recorded: dict[str, bool] = {}

    def fake_run_cli(command: Callable[..., int], argv: list[str] | None = None, *, prog_name: str | None = None, **_: object) -> int:
        runner = CliRunner()
        result = runner.invoke(command, ["info"] if argv is None else argv)
        if result.exception is not None:
            raise result.exception
        recorded["traceback"] = lib_cli_exit_tools.config.traceback
        recorded["traceback_force_color"] = lib_cli_exit_tools.config.traceback_force_color
        return result.exit_code

    monkeypatch.setattr(lib_cli_exit_tools, "run_cli", fake_run_cli)

    exit_code = cli_mod.main(["--no-traceback", "info"])

    assert exit_code == 0
    assert recorded == {"traceback": False, "traceback_force_color": False}
    assert lib_cli_exit_tools.config.traceback is True
    assert lib_cli_exit_tools.config.traceback_force_color is True


def test_main_consumes_sys_argv(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", False, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", False, raising=False)
    monkeypatch.setattr(sys, "argv", [__init__conf__.shell_command, "info"], raising=False)

    exit_code = cli_mod.main()
    captured = capsys.readouterr()

    assert exit_code == 0
    assert "Info for evtsyslog" in captured.out
