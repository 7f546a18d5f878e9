"""Thread-based delivery queue between subscription callbacks and senders.

Purpose
-------
Decouple the host's delivery threads from datagram sends: callbacks render
the event and enqueue the immutable record; a small pool of workers formats
and sends.

Contents
--------
* :class:`DeliveryQueue` - worker-pool implementation of :class:`QueuePort`.

System Role
-----------
Bounded and lossy by design: when the queue is full the record is dropped
(at-most-once delivery, no backpressure into the event-log subsystem).
Stopping without draining abandons whatever is still queued.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from collections.abc import Callable
from typing import Any

from evtsyslog.application.ports.queue import QueuePort
from evtsyslog.domain.records import EventRecord


LOGGER = logging.getLogger(__name__)


class DeliveryQueue(QueuePort):
    """Process event records on background worker threads.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> processed = []
    >>> adapter = DeliveryQueue(worker=lambda record: processed.append(record.event_id), workers=1)
    >>> adapter.start()
    >>> record = EventRecord(datetime(2024, 3, 1, tzinfo=timezone.utc), 'prov', 'HOST1', 4, 16, 'msg')
    >>> adapter.put(record)
    True
    >>> adapter.stop(drain=True)
    >>> processed
    [16]
    """

    def __init__(
        self,
        *,
        worker: Callable[[EventRecord], Any] | None = None,
        workers: int = 4,
        maxsize: int = 4096,
        on_drop: Callable[[EventRecord], None] | None = None,
        stop_timeout: float | None = 2.0,
        diagnostic: Callable[[str, dict[str, Any]], None] | None = None,
    ) -> None:
        """Create the queue with an optional worker callable and capacity.

        Parameters
        ----------
        worker:
            Callable invoked for each record; usually the send use case.
        workers:
            Number of worker threads draining the queue.
        maxsize:
            Maximum number of queued records before new ones are dropped.
        on_drop:
            Optional callback invoked for each dropped record.
        stop_timeout:
            Default deadline (seconds) applied by :meth:`stop`; ``None`` waits
            indefinitely.
        diagnostic:
            Optional hook receiving ``(name, payload)`` for drop and failure
            notifications.
        """
        if workers < 1:
            raise ValueError("workers must be at least 1")
        self._worker = worker
        self._worker_count = workers
        self._queue: queue.Queue[EventRecord | None] = queue.Queue(maxsize=maxsize)
        self._threads: list[threading.Thread] = []
        self._stop_event = threading.Event()
        self._on_drop = on_drop
        self._stop_timeout = stop_timeout
        self._diagnostic = diagnostic
        self._dropped = 0
        self._dropped_lock = threading.Lock()

    @property
    def dropped(self) -> int:
        """Number of records dropped since the queue was created."""

        return self._dropped

    @property
    def running(self) -> bool:
        """Return ``True`` while at least one worker thread is alive."""

        return any(thread.is_alive() for thread in self._threads)

    def start(self) -> None:
        """Start the worker threads if they are not already running."""
        if self.running:
            return
        self._stop_event.clear()
        self._threads = [
            threading.Thread(target=self._run, name=f"evtsyslog-sender-{index}", daemon=True)
            for index in range(self._worker_count)
        ]
        for thread in self._threads:
            thread.start()

    def stop(self, *, drain: bool = True, timeout: float | None = None) -> None:
        """Stop the workers, optionally processing records still queued.

        Parameters
        ----------
        drain:
            When ``True`` queued records are sent before the workers exit.
            When ``False`` they are discarded through the drop handler.
        timeout:
            Per-call override for the stop deadline.

        Raises
        ------
        RuntimeError
            When a worker is still busy after the deadline.
        """
        threads = self._threads
        if not threads:
            return

        effective_timeout = timeout if timeout is not None else self._stop_timeout
        deadline = time.monotonic() + effective_timeout if effective_timeout is not None else None

        if not drain:
            self._drain_pending_items()
        self._stop_event.set()
        for _ in threads:
            self._enqueue_stop_signal()

        for thread in threads:
            if deadline is None:
                thread.join()
            else:
                thread.join(max(0.0, deadline - time.monotonic()))

        still_running = [thread for thread in threads if thread.is_alive()]
        self._threads = still_running
        if still_running:
            self._emit_diagnostic("queue_shutdown_timeout", {"timeout": effective_timeout, "busy_workers": len(still_running)})
            raise RuntimeError("Delivery workers failed to stop within the allotted timeout")
        self._stop_event.clear()

    def put(self, record: EventRecord) -> bool:
        """Enqueue ``record``; return ``False`` when it was dropped because the queue is full."""
        if self._stop_event.is_set():
            self._handle_drop(record)
            return False
        try:
            self._queue.put(record, block=False)
        except queue.Full:
            self._handle_drop(record)
            return False
        return True

    def set_worker(self, worker: Callable[[EventRecord], Any]) -> None:
        """Swap the worker callable used to process records."""
        self._worker = worker

    def wait_until_idle(self, timeout: float | None = None) -> bool:
        """Block until every queued record was processed or ``timeout`` elapses."""

        deadline = time.monotonic() + timeout if timeout is not None else None
        while self._queue.unfinished_tasks:
            if deadline is not None and time.monotonic() >= deadline:
                return False
            time.sleep(0.005)
        return True

    def _run(self) -> None:
        """Internal worker loop draining the queue until stopped."""
        while True:
            item = self._queue.get()
            try:
                if item is None:
                    break
                if self._worker is not None:
                    try:
                        self._worker(item)
                    except Exception as exc:  # noqa: BLE001
                        self._report_worker_exception(item, exc)
            finally:
                self._queue.task_done()

    def _handle_drop(self, record: EventRecord) -> None:
        """Count the drop and invoke the drop callback."""
        with self._dropped_lock:
            self._dropped += 1
        if self._on_drop is None:
            return
        try:
            self._on_drop(record)
        except Exception as exc:  # noqa: BLE001
            LOGGER.debug("Queue drop handler raised an exception; continuing", exc_info=exc)

    def _report_worker_exception(self, record: EventRecord, exc: Exception) -> None:
        """Log worker failures without tearing down the thread."""

        LOGGER.debug("Delivery worker raised an exception; continuing", exc_info=exc)
        self._emit_diagnostic(
            "queue_worker_error",
            {"provider": record.provider_name, "event_id": record.event_id, "exception": repr(exc)},
        )

    def _emit_diagnostic(self, name: str, payload: dict[str, Any]) -> None:
        """Invoke the diagnostic hook while guarding against callback failures."""

        if self._diagnostic is None:
            return
        try:
            self._diagnostic(name, payload)
        except Exception as diagnostic_exc:  # noqa: BLE001
            LOGGER.debug("Queue diagnostic hook raised while reporting %s", name, exc_info=diagnostic_exc)

    def _drain_pending_items(self) -> None:
        """Remove queued records ahead of a non-draining stop."""

        while True:
            try:
                dropped = self._queue.get_nowait()
            except queue.Empty:
                break
            else:
                if dropped is not None:
                    self._handle_drop(dropped)
                self._queue.task_done()

    def _enqueue_stop_signal(self) -> None:
        """Wake one worker so it observes the stop request, evicting a record if full."""

        while True:
            try:
                self._queue.put(None, block=False)
                return
            except queue.Full:
                try:
                    dropped = self._queue.get_nowait()
                except queue.Empty:
                    continue
                else:
                    if dropped is not None:
                        self._handle_drop(dropped)
                    self._queue.task_done()


__all__ = ["DeliveryQueue"]
