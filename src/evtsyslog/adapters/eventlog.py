"""Windows Event Log adapter implementing :class:`EventSourcePort`.

Purpose
-------
Wrap the ``win32evtlog`` bindings from pywin32: channel enumeration, live
subscriptions to future events, system-value rendering, and message
formatting through publisher metadata.

Contents
--------
* :data:`ERROR_NOT_SUPPORTED` – Win32 error code for channels that refuse subscriptions.
* :class:`WindowsEventSource` – concrete adapter.

System Role
-----------
pywin32 performs the size-probe/allocate dance of ``EvtRender`` and
``EvtFormatMessage`` internally and raises ``pywintypes.error`` for every
other outcome; this adapter translates those errors into domain errors.
"""

from __future__ import annotations

import logging
from typing import Any

from evtsyslog.application.ports.event_source import DeliveryCallback, EventHandle, EventSourcePort, RenderedValue
from evtsyslog.domain.errors import ChannelNotSupportedError, EnumerationError, EventSourceError, SubscriptionError

logger = logging.getLogger(__name__)

ERROR_NOT_SUPPORTED = 50
ALL_EVENTS_QUERY = "*"


def _winerror(exc: BaseException) -> int | None:
    code = getattr(exc, "winerror", None)
    if code is None and exc.args and isinstance(exc.args[0], int):
        code = exc.args[0]
    return code


class WindowsEventSource(EventSourcePort):
    """Event source backed by the Windows Event Log (``wevtapi``)."""

    def __init__(self, *, api: Any | None = None, api_error: type[BaseException] | None = None) -> None:
        """Initialise the adapter.

        Parameters
        ----------
        api:
            Module exposing the ``win32evtlog`` surface; defaults to the real module.
        api_error:
            Exception type raised by ``api``; defaults to ``pywintypes.error``.
        """
        self._api = api
        self._api_error = api_error

    def _bindings(self) -> tuple[Any, type[BaseException]]:
        if self._api is None:
            try:
                import win32evtlog
            except ImportError as exc:  # pragma: no cover - executed only when pywin32 missing
                raise RuntimeError("win32evtlog (pywin32) is not available on this platform") from exc
            self._api = win32evtlog
        if self._api_error is None:
            import pywintypes

            self._api_error = pywintypes.error
        return self._api, self._api_error

    def list_channels(self) -> list[str]:
        """Return every channel path, opening a fresh enumerator per call."""
        api, api_error = self._bindings()
        try:
            enumerator = api.EvtOpenChannelEnum()
        except api_error as exc:
            raise EnumerationError(f"EvtOpenChannelEnum failed: {exc}") from exc

        channels: list[str] = []
        try:
            while True:
                try:
                    name = api.EvtNextChannelPath(enumerator)
                except api_error as exc:
                    logger.debug("Channel enumeration stopped early: %s", exc)
                    break
                if name is None:
                    break
                channels.append(name)
        finally:
            self._close_quietly(enumerator)
        return channels

    def subscribe(self, channel: str, callback: DeliveryCallback) -> Any:
        """Subscribe ``callback`` to future events on ``channel``."""
        api, api_error = self._bindings()
        deliver_action = api.EvtSubscribeActionDeliver

        def on_notify(action: int, context: Any, event: Any) -> int:
            if action != deliver_action:
                logger.debug("Subscription notification %s on %s: %s", action, context, event)
                return 0
            callback(event)
            return 0

        try:
            return api.EvtSubscribe(
                channel,
                api.EvtSubscribeToFutureEvents,
                Callback=on_notify,
                Context=channel,
                Query=ALL_EVENTS_QUERY,
            )
        except api_error as exc:
            if _winerror(exc) == ERROR_NOT_SUPPORTED:
                raise ChannelNotSupportedError(channel, "subscriptions not supported") from exc
            raise SubscriptionError(channel, str(exc)) from exc

    def close(self, handle: Any) -> None:
        """Release a subscription handle."""
        closer = getattr(handle, "Close", None)
        if closer is not None:
            closer()

    def render_system_values(self, event: EventHandle) -> list[RenderedValue]:
        """Render the system properties of ``event`` as ``(value, type)`` pairs."""
        api, api_error = self._bindings()
        try:
            context = api.EvtCreateRenderContext(api.EvtRenderContextSystem)
            values = api.EvtRender(event, api.EvtRenderEventValues, Context=context)
        except api_error as exc:
            raise EventSourceError(f"EvtRender failed: {exc}") from exc
        return list(values)

    def format_message(self, provider_name: str, event: EventHandle) -> str:
        """Format the message of ``event`` using the metadata of ``provider_name``.

        When the provider is not installed locally the message is formatted from
        the rendering info carried by the event itself (forwarded events).
        """
        api, api_error = self._bindings()
        try:
            metadata = api.EvtOpenPublisherMetadata(provider_name)
        except api_error as exc:
            logger.debug("No local metadata for provider %r: %s", provider_name, exc)
            metadata = None
        try:
            message = api.EvtFormatMessage(metadata, event, api.EvtFormatMessageEvent)
        except api_error as exc:
            raise EventSourceError(f"EvtFormatMessage failed for provider {provider_name!r}: {exc}") from exc
        finally:
            if metadata is not None:
                self._close_quietly(metadata)
        if not isinstance(message, str):
            raise EventSourceError(f"EvtFormatMessage returned {type(message).__name__}")
        return message

    def _close_quietly(self, handle: Any) -> None:
        try:
            self.close(handle)
        except Exception as exc:  # noqa: BLE001
            logger.debug("Closing handle failed", exc_info=exc)


__all__ = ["ALL_EVENTS_QUERY", "ERROR_NOT_SUPPORTED", "WindowsEventSource"]
