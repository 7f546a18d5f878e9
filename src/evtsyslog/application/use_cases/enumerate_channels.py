"""Use case listing every channel exposed by the event source."""

from __future__ import annotations

import logging

from evtsyslog.application.ports.event_source import EventSourcePort
from evtsyslog.domain.errors import EnumerationError

logger = logging.getLogger(__name__)


def enumerate_channels(source: EventSourcePort) -> list[str]:
    """Return the channel names currently registered on the host.

    Each call starts a fresh enumeration, so consecutive calls yield the same
    set while the host configuration is unchanged. Failures to open the
    enumerator surface as :class:`EnumerationError`.
    """

    try:
        channels = [name for name in source.list_channels() if name]
    except EnumerationError:
        raise
    except OSError as exc:
        raise EnumerationError(f"cannot enumerate channels: {exc}") from exc
    logger.info("Discovered %d event-log channels", len(channels))
    return channels


__all__ = ["enumerate_channels"]
