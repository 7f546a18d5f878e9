"""Managed-mode lifecycle driver backed by the Windows Service Control Manager.

Purpose
-------
Host the :class:`~evtsyslog.application.use_cases.lifecycle.LifecycleController`
inside a pywin32 ``ServiceFramework`` so the SCM can start, stop, and
interrogate the forwarder.

Contents
--------
* :class:`ServiceStatusReporter` - translates :class:`ServiceState` into ``ReportServiceStatus`` calls.
* :class:`WindowsServiceHost` - :class:`LifecyclePort` wrapper shared by the service class and tests.
* :func:`run_service_dispatcher` - entry point for ``evtsyslog service [ARGS]``.
* ``EvtSyslogService`` - the ``ServiceFramework`` subclass, built on first attribute access.

System Role
-----------
pywin32 is only importable on Windows. Everything that touches
``win32service`` is resolved lazily so the module imports cleanly elsewhere.
"""

from __future__ import annotations

import logging
import sys
import threading
from collections.abc import Callable, Sequence
from typing import Any

from evtsyslog.application.ports.lifecycle import LifecyclePort, StatusReporterPort
from evtsyslog.application.use_cases.lifecycle import EXIT_OK, LifecycleController
from evtsyslog.domain.lifecycle import ControlRequest, ServiceState

logger = logging.getLogger(__name__)

SERVICE_NAME = "EvtSyslog"
SERVICE_DISPLAY_NAME = "Event Log to Syslog Forwarder"
SERVICE_DESCRIPTION = "Forwards every Windows event-log channel to a remote syslog collector over UDP."

ERROR_SERVICE_SPECIFIC_ERROR = 1066

ControllerFactory = Callable[[StatusReporterPort], LifecycleController]

_STATUS_NAMES: dict[ServiceState, str] = {
    ServiceState.STOPPED: "SERVICE_STOPPED",
    ServiceState.START_PENDING: "SERVICE_START_PENDING",
    ServiceState.RUNNING: "SERVICE_RUNNING",
    ServiceState.STOP_PENDING: "SERVICE_STOP_PENDING",
}

_controller_factory: ControllerFactory | None = None


class ServiceStatusReporter(StatusReporterPort):
    """Forward lifecycle transitions to the SCM.

    ``STOPPED`` with exit code ``0`` is not forwarded: pywin32 reports it
    itself once ``SvcRun`` returns. A non-zero exit code is reported as a
    service-specific error so ``sc query`` shows why startup failed.
    """

    def __init__(self, report_status: Callable[..., Any], *, service_api: Any | None = None) -> None:
        """Store the ``ReportServiceStatus`` callable and the ``win32service`` module."""
        self._report_status = report_status
        self._service_api = service_api

    def _api(self) -> Any:
        if self._service_api is None:
            import win32service

            self._service_api = win32service
        return self._service_api

    def report(self, state: ServiceState, *, wait_hint_ms: int = 0, exit_code: int = 0) -> None:
        if state is ServiceState.STOPPED and exit_code == EXIT_OK:
            return
        status = getattr(self._api(), _STATUS_NAMES[state])
        if exit_code:
            self._report_status(
                status,
                waitHint=wait_hint_ms,
                win32ExitCode=ERROR_SERVICE_SPECIFIC_ERROR,
                svcExitCode=exit_code,
            )
        else:
            self._report_status(status, waitHint=wait_hint_ms)


class WindowsServiceHost(LifecyclePort):
    """Run one controller on behalf of the service framework.

    Examples
    --------
    >>> from types import SimpleNamespace
    >>> session = SimpleNamespace(close=lambda: None)
    >>> host = WindowsServiceHost(LifecycleController(start_pipeline=lambda: session, poll_interval=0.01))
    >>> host.start()
    >>> host.handle_control(ControlRequest.STOP)
    >>> host.await_stopped(5.0), host.exit_code
    (True, 0)
    """

    def __init__(self, controller: LifecycleController) -> None:
        self._controller = controller
        self._thread: threading.Thread | None = None
        self._done = threading.Event()
        self._done.set()
        self._exit_code = EXIT_OK

    @property
    def controller(self) -> LifecycleController:
        return self._controller

    @property
    def exit_code(self) -> int:
        return self._exit_code

    def run(self) -> int:
        """Execute the controller on the calling thread (the SCM service thread)."""
        self._done.clear()
        try:
            self._exit_code = self._controller.run()
        finally:
            self._done.set()
        return self._exit_code

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            raise RuntimeError("Service host already started")
        self._done.clear()
        self._thread = threading.Thread(target=self._run_guarded, name="evtsyslog-service", daemon=True)
        self._thread.start()

    def request_stop(self) -> None:
        self.handle_control(ControlRequest.STOP)

    def handle_control(self, request: ControlRequest) -> None:
        self._controller.handle_control(request)

    def await_stopped(self, timeout: float | None = None) -> bool:
        return self._done.wait(timeout)

    def _run_guarded(self) -> None:
        try:
            self.run()
        except Exception as exc:  # noqa: BLE001
            logger.critical("Service host crashed", exc_info=exc)


def configure_service(factory: ControllerFactory) -> None:
    """Register the factory used by ``EvtSyslogService`` to build its controller."""
    global _controller_factory
    _controller_factory = factory


def _resolve_factory() -> ControllerFactory:
    if _controller_factory is not None:
        return _controller_factory
    # pythonservice.exe imports this module directly; fall back to the default wiring.
    from evtsyslog.runtime import build_service_controller

    configure_service(build_service_controller)
    return build_service_controller


def _build_service_class() -> type:
    import win32service
    import win32serviceutil

    class EvtSyslogService(win32serviceutil.ServiceFramework):
        _svc_name_ = SERVICE_NAME
        _svc_display_name_ = SERVICE_DISPLAY_NAME
        _svc_description_ = SERVICE_DESCRIPTION
        _exe_name_ = sys.executable
        _exe_args_ = "-m evtsyslog service"

        def __init__(self, args: Sequence[str]) -> None:
            super().__init__(args)
            reporter = ServiceStatusReporter(self.ReportServiceStatus, service_api=win32service)
            self.host = WindowsServiceHost(_resolve_factory()(reporter))

        def SvcRun(self) -> None:  # noqa: N802 - pywin32 naming
            # The controller reports every state itself, including RUNNING.
            self.host.run()

        def SvcStop(self) -> None:  # noqa: N802
            self.host.handle_control(ControlRequest.STOP)

        def SvcInterrogate(self) -> None:  # noqa: N802
            self.host.handle_control(ControlRequest.INTERROGATE)

    return EvtSyslogService


def __getattr__(name: str) -> Any:
    if name == "EvtSyslogService":
        cls = _build_service_class()
        globals()[name] = cls
        return cls
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def run_service_dispatcher(argv: Sequence[str] | None = None, *, factory: ControllerFactory | None = None) -> int:
    """Start the SCM dispatcher, or forward ``argv`` to ``HandleCommandLine``.

    With no arguments the process was launched by the SCM and hands control to
    ``StartServiceCtrlDispatcher``. Any arguments (``install``, ``remove``,
    ``start``, ``stop``, ...) are passed to pywin32's command-line handler.
    """
    import servicemanager
    import win32serviceutil

    if factory is not None:
        configure_service(factory)
    service_class = __getattr__("EvtSyslogService")
    args = list(argv or [])
    if not args:
        servicemanager.Initialize()
        servicemanager.PrepareToHostSingle(service_class)
        servicemanager.StartServiceCtrlDispatcher()
        return EXIT_OK
    result = win32serviceutil.HandleCommandLine(service_class, argv=[sys.argv[0], *args])
    return int(result or 0)


__all__ = [
    "ERROR_SERVICE_SPECIFIC_ERROR",
    "SERVICE_DISPLAY_NAME",
    "SERVICE_NAME",
    "ServiceStatusReporter",
    "WindowsServiceHost",
    "configure_service",
    "run_service_dispatcher",
]
