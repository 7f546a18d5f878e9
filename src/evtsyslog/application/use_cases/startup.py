"""Startup sequence assembling the live forwarding pipeline.

Purpose
-------
Run the ordered startup steps (load config, enumerate channels, subscribe)
and hand back a :class:`ForwarderSession` that knows how to tear everything
down again.

System Role
-----------
Invoked by :class:`~evtsyslog.application.use_cases.lifecycle.LifecycleController`
inside the ``START_PENDING`` state. Only :class:`ConfigError` and
:class:`EnumerationError` escape; partial subscription failures are reported
on the session.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from evtsyslog.application.ports.event_source import EventSourcePort
from evtsyslog.application.ports.queue import QueuePort
from evtsyslog.application.subscriptions import SubscribeReport, SubscriptionManager
from evtsyslog.domain.destination import Destination

from .enumerate_channels import enumerate_channels
from .forward_event import DeliverCallable
from .load_config import ConfigLoadResult
from .shutdown import create_shutdown

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ForwarderSession:
    """Live pipeline produced by a successful startup."""

    destination: Destination
    report: SubscribeReport
    config_complete: bool
    shutdown: Callable[[], None]

    def close(self) -> None:
        """Close subscriptions and stop the delivery queue."""

        self.shutdown()


def create_startup(
    *,
    load_config: Callable[[], ConfigLoadResult],
    source: EventSourcePort,
    build_deliver: Callable[[Destination], DeliverCallable],
    queue: QueuePort | None = None,
    stop_timeout: float | None = 2.0,
) -> Callable[[], ForwarderSession]:
    """Return a callable executing the startup sequence.

    Parameters
    ----------
    load_config:
        Zero-argument loader returning the configuration result.
    source:
        Event source used for enumeration and subscriptions.
    build_deliver:
        Factory creating the per-event callback for a resolved destination.
    queue:
        Optional delivery queue started before the first subscription exists.
    stop_timeout:
        Seconds granted to queue workers during teardown.
    """

    def start() -> ForwarderSession:
        result = load_config()
        destination = result.require_destination()
        logger.info("Forwarding events to %s", destination)

        channels = enumerate_channels(source)

        manager = SubscriptionManager(source)
        shutdown = create_shutdown(subscriptions=manager, queue=queue, stop_timeout=stop_timeout)
        if queue is not None:
            queue.start()
        try:
            report = manager.subscribe_all(channels, build_deliver(destination))
        except BaseException:
            shutdown()
            raise
        if not report.ok:
            logger.warning("Some channels could not be subscribed: %s", ", ".join(name for name, _ in report.failed))
        return ForwarderSession(
            destination=destination,
            report=report,
            config_complete=result.complete,
            shutdown=shutdown,
        )

    return start


__all__ = ["ForwarderSession", "create_startup"]
