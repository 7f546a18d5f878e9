"""Composition helpers wiring domain, application, and adapters.

Purpose
-------
Translate :class:`RuntimeSettings` into a ready-to-run
:class:`LifecycleController`. The helpers keep wiring small, declarative,
and testable: every adapter can be replaced through keyword arguments.

Contents
--------
* :func:`build_settings_store` - CLI overrides, then ``EVTSYSLOG_*``, then the registry.
* :func:`build_config_loader` - zero-argument destination loader.
* :func:`build_controller` - full pipeline plus lifecycle controller.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from evtsyslog.adapters.eventlog import WindowsEventSource
from evtsyslog.adapters.queue import DeliveryQueue
from evtsyslog.adapters.resolver import SystemResolver
from evtsyslog.adapters.settings import (
    ChainedSettingsStore,
    EnvironmentSettingsStore,
    MappingSettingsStore,
    RegistrySettingsStore,
)
from evtsyslog.adapters.syslog_format import SyslogFormatter
from evtsyslog.adapters.transport import UdpTransport
from evtsyslog.application.ports import (
    EventSourcePort,
    FormatterPort,
    ResolverPort,
    SettingsStorePort,
    StatusReporterPort,
    TransportPort,
)
from evtsyslog.application.use_cases.forward_event import DeliverCallable, create_deliver_event, create_send_record
from evtsyslog.application.use_cases.lifecycle import LifecycleController
from evtsyslog.application.use_cases.load_config import HOST_KEY, PORT_KEY, ConfigLoadResult, load_config
from evtsyslog.application.use_cases.render_event import create_render_event
from evtsyslog.application.use_cases.startup import create_startup
from evtsyslog.domain.destination import Destination
from evtsyslog.domain.records import EventRecord

from ._settings import RuntimeSettings

logger = logging.getLogger(__name__)


def build_settings_store(settings: RuntimeSettings) -> SettingsStorePort:
    """Return the store chain consulted for ``SyslogHost`` / ``SyslogPort``."""

    overrides = MappingSettingsStore({HOST_KEY: settings.host, PORT_KEY: settings.port})
    return ChainedSettingsStore(overrides, EnvironmentSettingsStore(), RegistrySettingsStore(settings.registry_key))


def build_config_loader(
    settings: RuntimeSettings,
    *,
    store: SettingsStorePort | None = None,
    resolver: ResolverPort | None = None,
) -> Callable[[], ConfigLoadResult]:
    """Return a loader reading the destination once per call."""

    active_store = store or build_settings_store(settings)
    active_resolver = resolver or SystemResolver()

    def load() -> ConfigLoadResult:
        return load_config(active_store, active_resolver)

    return load


def _log_queue_drop(record: EventRecord) -> None:
    logger.debug("Delivery queue full; dropped %s/%s", record.provider_name, record.event_id)


def _log_queue_diagnostic(name: str, payload: dict[str, Any]) -> None:
    logger.debug("Delivery queue %s: %s", name, payload)


def build_controller(
    settings: RuntimeSettings,
    *,
    reporter: StatusReporterPort | None = None,
    source: EventSourcePort | None = None,
    store: SettingsStorePort | None = None,
    resolver: ResolverPort | None = None,
    formatter: FormatterPort | None = None,
    transport: TransportPort | None = None,
) -> LifecycleController:
    """Assemble the forwarding pipeline and wrap it in a lifecycle controller."""

    active_source = source or WindowsEventSource()
    active_formatter = formatter or SyslogFormatter()
    active_transport = transport or UdpTransport()
    render = create_render_event(active_source)

    queue: DeliveryQueue | None = None
    if settings.queue_enabled:
        queue = DeliveryQueue(
            workers=settings.queue_workers,
            maxsize=settings.queue_maxsize,
            on_drop=_log_queue_drop,
            diagnostic=_log_queue_diagnostic,
            stop_timeout=settings.stop_timeout,
        )

    def build_deliver(destination: Destination) -> DeliverCallable:
        send_record = create_send_record(formatter=active_formatter, transport=active_transport, destination=destination)
        if queue is None:
            return create_deliver_event(render=render, dispatch=send_record)
        queue.set_worker(send_record)
        return create_deliver_event(render=render, dispatch=queue.put)

    start_pipeline = create_startup(
        load_config=build_config_loader(settings, store=store, resolver=resolver),
        source=active_source,
        build_deliver=build_deliver,
        queue=queue,
        stop_timeout=settings.stop_timeout,
    )
    return LifecycleController(
        start_pipeline=start_pipeline,
        reporter=reporter,
        poll_interval=settings.poll_interval,
    )


__all__ = ["build_config_loader", "build_controller", "build_settings_store"]
