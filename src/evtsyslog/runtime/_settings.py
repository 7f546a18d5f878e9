"""Runtime settings resolved from keyword arguments and ``EVTSYSLOG_*`` variables.

Purpose
-------
Collect the tunables of the composition root (log level, registry location,
queue sizing, timers) in one immutable value so wiring stays declarative.

Contents
--------
* :class:`RuntimeSettings` - resolved configuration consumed by ``_composition``.
* :func:`build_runtime_settings` - merge explicit arguments with environment overrides.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from evtsyslog.adapters.settings import DEFAULT_REGISTRY_KEY

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_QUEUE_WORKERS = 4
DEFAULT_QUEUE_MAXSIZE = 4096
DEFAULT_POLL_INTERVAL = 1.0
DEFAULT_STOP_TIMEOUT = 2.0


@dataclass(slots=True, frozen=True)
class RuntimeSettings:
    """Resolved runtime configuration.

    ``host`` / ``port`` are explicit overrides that take precedence over the
    environment and the registry when the destination is loaded.
    """

    log_level: str = DEFAULT_LOG_LEVEL
    registry_key: str = DEFAULT_REGISTRY_KEY
    host: str | None = None
    port: str | None = None
    queue_enabled: bool = True
    queue_workers: int = DEFAULT_QUEUE_WORKERS
    queue_maxsize: int = DEFAULT_QUEUE_MAXSIZE
    poll_interval: float = DEFAULT_POLL_INTERVAL
    stop_timeout: float = DEFAULT_STOP_TIMEOUT


def build_runtime_settings(
    *,
    log_level: str | None = None,
    registry_key: str | None = None,
    host: str | None = None,
    port: str | int | None = None,
    queue_enabled: bool | None = None,
    queue_workers: int | None = None,
    queue_maxsize: int | None = None,
    poll_interval: float | None = None,
    stop_timeout: float | None = None,
) -> RuntimeSettings:
    """Return :class:`RuntimeSettings` with environment fallbacks applied.

    Explicit arguments win; ``None`` means "consult ``EVTSYSLOG_*`` and then
    the default".

    Examples
    --------
    >>> _ = os.environ.pop('EVTSYSLOG_QUEUE_WORKERS', None)
    >>> build_runtime_settings(queue_workers=2, port=5140).queue_workers
    2
    >>> build_runtime_settings(port=5140).port
    '5140'
    """
    level = (log_level or os.getenv("EVTSYSLOG_LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"EVTSYSLOG_LOG_LEVEL: unknown log level {level!r}")

    workers = queue_workers if queue_workers is not None else _env_int("EVTSYSLOG_QUEUE_WORKERS", DEFAULT_QUEUE_WORKERS)
    maxsize = queue_maxsize if queue_maxsize is not None else _env_int("EVTSYSLOG_QUEUE_MAXSIZE", DEFAULT_QUEUE_MAXSIZE)
    if workers <= 0:
        raise ValueError("EVTSYSLOG_QUEUE_WORKERS must be positive")
    if maxsize <= 0:
        raise ValueError("EVTSYSLOG_QUEUE_MAXSIZE must be positive")

    interval = poll_interval if poll_interval is not None else _env_float("EVTSYSLOG_POLL_INTERVAL", DEFAULT_POLL_INTERVAL)
    timeout = stop_timeout if stop_timeout is not None else _env_float("EVTSYSLOG_STOP_TIMEOUT", DEFAULT_STOP_TIMEOUT)
    if interval <= 0:
        raise ValueError("EVTSYSLOG_POLL_INTERVAL must be positive")
    if timeout < 0:
        raise ValueError("EVTSYSLOG_STOP_TIMEOUT must not be negative")

    return RuntimeSettings(
        log_level=level,
        registry_key=registry_key or os.getenv("EVTSYSLOG_REGISTRY_KEY") or DEFAULT_REGISTRY_KEY,
        host=host,
        port=None if port is None else str(port),
        queue_enabled=queue_enabled if queue_enabled is not None else _env_bool("EVTSYSLOG_QUEUE_ENABLED", True),
        queue_workers=workers,
        queue_maxsize=maxsize,
        poll_interval=interval,
        stop_timeout=timeout,
    )


def _env_bool(name: str, default: bool) -> bool:
    """Return the boolean value of an environment variable with fallback.

    Examples
    --------
    >>> _ = os.environ.pop('EVTSYSLOG_EXAMPLE_BOOL', None)
    >>> _env_bool('EVTSYSLOG_EXAMPLE_BOOL', default=True)
    True
    >>> os.environ['EVTSYSLOG_EXAMPLE_BOOL'] = 'off'
    >>> _env_bool('EVTSYSLOG_EXAMPLE_BOOL', default=True)
    False
    >>> del os.environ['EVTSYSLOG_EXAMPLE_BOOL']
    """
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc


__all__ = ["RuntimeSettings", "build_runtime_settings"]
