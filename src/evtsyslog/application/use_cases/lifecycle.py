"""Lifecycle controller driving the forwarder state machine.

Purpose
-------
Walk ``STOPPED → START_PENDING → RUNNING → STOP_PENDING → STOPPED`` around
the startup sequence, report every transition to the active run mode, and
unwind all subscriptions on shutdown.

Contents
--------
* :data:`EXIT_OK` / :data:`EXIT_STARTUP_FAILED` – exit codes of :meth:`LifecycleController.run`.
* :class:`LifecycleController` – run-mode independent state machine.

System Role
-----------
The foreground runner and the Windows service host both wrap one controller;
only the :class:`StatusReporterPort` differs between them.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from evtsyslog.application.ports.lifecycle import StatusReporterPort
from evtsyslog.domain.errors import ConfigError, EnumerationError
from evtsyslog.domain.lifecycle import ControlRequest, ServiceState

from .startup import ForwarderSession

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_STARTUP_FAILED = 1

DEFAULT_WAIT_HINT_MS = 3000


class _NullReporter:
    def report(self, state: ServiceState, *, wait_hint_ms: int = 0, exit_code: int = 0) -> None:
        return None


class LifecycleController:
    """Start, run, and stop the forwarding pipeline.

    Parameters
    ----------
    start_pipeline:
        Startup sequence returning a live :class:`ForwarderSession`; may raise
        :class:`ConfigError` or :class:`EnumerationError`.
    reporter:
        Receives every state transition (``None`` disables reporting).
    poll_interval:
        Seconds between wake-ups of the blocking wait loop.
    wait_hint_ms:
        Wait hint attached to the pending states.

    Examples
    --------
    >>> from types import SimpleNamespace
    >>> session = SimpleNamespace(close=lambda: print("closed"))
    >>> controller = LifecycleController(start_pipeline=lambda: session, poll_interval=0.01)
    >>> controller.request_stop()
    >>> controller.run()
    closed
    0
    >>> controller.state
    <ServiceState.STOPPED: 'stopped'>
    """

    def __init__(
        self,
        *,
        start_pipeline: Callable[[], ForwarderSession],
        reporter: StatusReporterPort | None = None,
        poll_interval: float = 1.0,
        wait_hint_ms: int = DEFAULT_WAIT_HINT_MS,
    ) -> None:
        self._start_pipeline = start_pipeline
        self._reporter: StatusReporterPort = reporter or _NullReporter()
        self._poll_interval = poll_interval
        self._wait_hint_ms = wait_hint_ms
        self._lock = threading.RLock()
        self._state = ServiceState.STOPPED
        self._exit_code = EXIT_OK
        self._stop_requested = threading.Event()
        self._stopped = threading.Event()
        self._stopped.set()

    @property
    def state(self) -> ServiceState:
        """Current lifecycle state."""

        with self._lock:
            return self._state

    @property
    def stop_requested(self) -> bool:
        """Return ``True`` once a stop has been requested."""

        return self._stop_requested.is_set()

    def run(self) -> int:
        """Execute the full lifecycle on the calling thread and return an exit code."""

        self._stopped.clear()
        self._transition(ServiceState.START_PENDING)
        try:
            session = self._start_pipeline()
        except (ConfigError, EnumerationError) as exc:
            logger.critical("Startup failed: %s", exc)
            self._finish(EXIT_STARTUP_FAILED)
            return EXIT_STARTUP_FAILED
        except BaseException:
            self._finish(EXIT_STARTUP_FAILED)
            raise

        with self._lock:
            if not self._stop_requested.is_set():
                self._transition(ServiceState.RUNNING)

        try:
            while not self._stop_requested.wait(self._poll_interval):
                pass
        finally:
            with self._lock:
                if self._state is not ServiceState.STOP_PENDING:
                    self._transition(ServiceState.STOP_PENDING, wait_hint_ms=self._wait_hint_ms)
            session.close()
            self._finish(EXIT_OK)
        return EXIT_OK

    def request_stop(self) -> None:
        """Report ``STOP_PENDING`` at once and wake the wait loop."""

        with self._lock:
            self._stop_requested.set()
            if self._state in (ServiceState.START_PENDING, ServiceState.RUNNING):
                self._transition(ServiceState.STOP_PENDING, wait_hint_ms=self._wait_hint_ms)

    def handle_control(self, request: ControlRequest) -> None:
        """Dispatch a request from an external service-control driver."""

        if request is ControlRequest.STOP:
            logger.info("Stop requested")
            self.request_stop()
        elif request is ControlRequest.INTERROGATE:
            with self._lock:
                wait_hint = self._wait_hint_ms if self._state.is_pending else 0
                self._reporter.report(self._state, wait_hint_ms=wait_hint, exit_code=self._exit_code)

    def await_stopped(self, timeout: float | None = None) -> bool:
        """Block until the controller is ``STOPPED``; ``False`` on timeout."""

        return self._stopped.wait(timeout)

    def _finish(self, exit_code: int) -> None:
        # The next run starts without a pending stop request.
        with self._lock:
            self._stop_requested.clear()
            self._transition(ServiceState.STOPPED, exit_code=exit_code)

    def _transition(self, target: ServiceState, *, wait_hint_ms: int | None = None, exit_code: int = EXIT_OK) -> None:
        with self._lock:
            if not self._state.can_transition_to(target):
                raise ValueError(f"illegal lifecycle transition {self._state.name} -> {target.name}")
            self._state = target
            self._exit_code = exit_code
            if wait_hint_ms is None:
                wait_hint_ms = self._wait_hint_ms if target.is_pending else 0
            logger.debug("Lifecycle state -> %s", target.name)
            try:
                self._reporter.report(target, wait_hint_ms=wait_hint_ms, exit_code=exit_code)
            except Exception as exc:  # noqa: BLE001
                logger.error("Status reporter failed for %s", target.name, exc_info=exc)
            if target is ServiceState.STOPPED:
                self._stopped.set()


__all__ = ["DEFAULT_WAIT_HINT_MS", "EXIT_OK", "EXIT_STARTUP_FAILED", "LifecycleController"]
