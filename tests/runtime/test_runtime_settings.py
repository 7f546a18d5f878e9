from __future__ import annotations

import pytest

from evtsyslog.adapters.settings import DEFAULT_REGISTRY_KEY
from evtsyslog.runtime import RuntimeSettings, build_runtime_settings
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]

_ENV_VARS = (
    "EVTSYSLOG_LOG_LEVEL",
    "EVTSYSLOG_REGISTRY_KEY",
    "EVTSYSLOG_QUEUE_ENABLED",
    "EVTSYSLOG_QUEUE_WORKERS",
    "EVTSYSLOG_QUEUE_MAXSIZE",
    "EVTSYSLOG_POLL_INTERVAL",
    "EVTSYSLOG_STOP_TIMEOUT",
)


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_environment() -> None:
    assert build_runtime_settings() == RuntimeSettings(registry_key=DEFAULT_REGISTRY_KEY)


def test_environment_overrides_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EVTSYSLOG_LOG_LEVEL", "debug")
    monkeypatch.setenv("EVTSYSLOG_REGISTRY_KEY", r"SOFTWARE\Acme\Forwarder")
    monkeypatch.setenv("EVTSYSLOG_QUEUE_ENABLED", "no")
    monkeypatch.setenv("EVTSYSLOG_QUEUE_WORKERS", "8")
    monkeypatch.setenv("EVTSYSLOG_POLL_INTERVAL", "0.25")

    settings = build_runtime_settings()

    assert settings.log_level == "DEBUG"
    assert settings.registry_key == r"SOFTWARE\Acme\Forwarder"
    assert settings.queue_enabled is False
    assert settings.queue_workers == 8
    assert settings.poll_interval == 0.25


def test_explicit_arguments_win_over_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EVTSYSLOG_QUEUE_WORKERS", "8")
    monkeypatch.setenv("EVTSYSLOG_QUEUE_ENABLED", "1")

    settings = build_runtime_settings(queue_workers=2, queue_enabled=False, host="collector", port=5140)

    assert (settings.queue_workers, settings.queue_enabled) == (2, False)
    assert (settings.host, settings.port) == ("collector", "5140")


@pytest.mark.parametrize(
    "name, env_value, error_match",
    [
        ("EVTSYSLOG_QUEUE_WORKERS", "many", "EVTSYSLOG_QUEUE_WORKERS must be an integer"),
        ("EVTSYSLOG_QUEUE_WORKERS", "0", "must be positive"),
        ("EVTSYSLOG_QUEUE_MAXSIZE", "-1", "must be positive"),
        ("EVTSYSLOG_POLL_INTERVAL", "soon", "must be a number"),
        ("EVTSYSLOG_STOP_TIMEOUT", "-2", "must not be negative"),
        ("EVTSYSLOG_LOG_LEVEL", "LOUD", "unknown log level"),
    ],
)
def test_invalid_environment_values(monkeypatch: pytest.MonkeyPatch, name: str, env_value: str, error_match: str) -> None:
    monkeypatch.setenv(name, env_value)

    with pytest.raises(ValueError, match=error_match):
        build_runtime_settings()
