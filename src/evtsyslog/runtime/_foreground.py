"""Foreground run mode: the controller on a worker thread, signals on the main thread."""

from __future__ import annotations

import logging
import signal
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from types import FrameType

from evtsyslog.application.ports.lifecycle import LifecyclePort
from evtsyslog.application.use_cases.lifecycle import EXIT_OK, LifecycleController

logger = logging.getLogger(__name__)

TICK_SECONDS = 1.0


class ForegroundRunner(LifecyclePort):
    """Drive a :class:`LifecycleController` until SIGINT, SIGTERM or SIGBREAK arrives.

    Examples
    --------
    >>> from types import SimpleNamespace
    >>> session = SimpleNamespace(close=lambda: None)
    >>> runner = ForegroundRunner(LifecycleController(start_pipeline=lambda: session, poll_interval=0.01))
    >>> runner.start()
    >>> runner.request_stop()
    >>> runner.await_stopped(5.0), runner.exit_code
    (True, 0)
    """

    def __init__(self, controller: LifecycleController, *, tick: float = TICK_SECONDS) -> None:
        self._controller = controller
        self._tick = tick
        self._thread: threading.Thread | None = None
        self._done = threading.Event()
        self._done.set()
        self._exit_code = EXIT_OK
        self._error: BaseException | None = None

    @property
    def exit_code(self) -> int:
        return self._exit_code

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            raise RuntimeError("Foreground runner already started")
        self._done.clear()
        self._error = None
        self._thread = threading.Thread(target=self._run, name="evtsyslog-foreground", daemon=True)
        self._thread.start()

    def request_stop(self) -> None:
        self._controller.request_stop()

    def await_stopped(self, timeout: float | None = None) -> bool:
        return self._done.wait(timeout)

    def run_until_stopped(self, *, install_signals: bool = True) -> int:
        """Start the controller and block on a timer loop until it stops.

        Returns the controller's exit code. Exceptions raised by the startup
        sequence are re-raised on the calling thread.
        """
        with self._signal_handlers(install_signals):
            self.start()
            while True:
                try:
                    if self.await_stopped(self._tick):
                        break
                except KeyboardInterrupt:
                    logger.info("Interrupted; stopping")
                    self.request_stop()
        if self._thread is not None:
            self._thread.join()
        if self._error is not None:
            raise self._error
        return self._exit_code

    def _run(self) -> None:
        try:
            self._exit_code = self._controller.run()
        except BaseException as exc:  # noqa: BLE001 - re-raised on the waiting thread
            self._error = exc
        finally:
            self._done.set()

    def _on_signal(self, signum: int, frame: FrameType | None) -> None:
        logger.info("Received signal %s; stopping", signum)
        self.request_stop()

    @contextmanager
    def _signal_handlers(self, enabled: bool) -> Iterator[None]:
        if not enabled or threading.current_thread() is not threading.main_thread():
            yield
            return
        previous: dict[int, object] = {}
        for name in ("SIGINT", "SIGTERM", "SIGBREAK"):
            signum = getattr(signal, name, None)
            if signum is not None:
                previous[signum] = signal.signal(signum, self._on_signal)
        try:
            yield
        finally:
            for signum, handler in previous.items():
                signal.signal(signum, handler)  # type: ignore[arg-type]


__all__ = ["ForegroundRunner", "TICK_SECONDS"]
