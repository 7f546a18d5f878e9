"""Runtime façade wiring the forwarder for its two run modes.

Purpose
-------
Expose a small, stable surface (``run_foreground``, ``run_service``,
``list_channels``, ``load_destination``) to the CLI so it never imports the
inner layers directly.

Contents
--------
* ``run_foreground`` - compose the pipeline and block until stopped.
* ``run_service`` - dispatcher / ``HandleCommandLine`` entry point.
* ``build_service_controller`` - controller factory used by the service class.
* ``list_channels`` / ``load_destination`` - diagnostics for the CLI.

System Role
-----------
Composition root: the only place that picks concrete adapters.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from evtsyslog.adapters.console import RichStatusConsole
from evtsyslog.adapters.eventlog import WindowsEventSource
from evtsyslog.adapters.service.windows_service import run_service_dispatcher
from evtsyslog.application.ports import EventSourcePort, StatusReporterPort
from evtsyslog.application.use_cases.enumerate_channels import enumerate_channels
from evtsyslog.application.use_cases.lifecycle import LifecycleController
from evtsyslog.application.use_cases.load_config import ConfigLoadResult

from ._composition import build_config_loader, build_controller, build_settings_store
from ._foreground import ForegroundRunner
from ._logging import configure_logging, reset_logging
from ._settings import RuntimeSettings, build_runtime_settings


def run_foreground(
    settings: RuntimeSettings | None = None,
    *,
    reporter: StatusReporterPort | None = None,
    install_signals: bool = True,
    **components: Any,
) -> int:
    """Run the forwarder on the console until interrupted; return its exit code.

    ``components`` are forwarded to :func:`build_controller` so callers can
    swap adapters (``source``, ``transport``, ``store``, ...).
    """

    active = settings or build_runtime_settings()
    configure_logging(active.log_level, mode="foreground")
    controller = build_controller(active, reporter=reporter or RichStatusConsole(), **components)
    return ForegroundRunner(controller).run_until_stopped(install_signals=install_signals)


def build_service_controller(reporter: StatusReporterPort) -> LifecycleController:
    """Compose a controller for the Windows service from environment settings."""

    settings = build_runtime_settings()
    configure_logging(settings.log_level, mode="service")
    return build_controller(settings, reporter=reporter)


def run_service(argv: Sequence[str] | None = None) -> int:
    """Hand control to the SCM dispatcher, or manage the installed service."""

    return run_service_dispatcher(argv, factory=build_service_controller)


def list_channels(source: EventSourcePort | None = None) -> list[str]:
    """Return every channel name exposed by ``source`` (the Windows Event Log by default)."""

    return enumerate_channels(source or WindowsEventSource())


def load_destination(settings: RuntimeSettings | None = None, **components: Any) -> ConfigLoadResult:
    """Load and resolve the configured destination once."""

    return build_config_loader(settings or build_runtime_settings(), **components)()


__all__ = [
    "ForegroundRunner",
    "RuntimeSettings",
    "build_config_loader",
    "build_controller",
    "build_runtime_settings",
    "build_service_controller",
    "build_settings_store",
    "configure_logging",
    "list_channels",
    "load_destination",
    "reset_logging",
    "run_foreground",
    "run_service",
]
