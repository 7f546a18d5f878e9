"""Use case loading the syslog destination from the configuration store.

Purpose
-------
Read ``SyslogHost`` / ``SyslogPort`` once at startup, resolve the host to its
first IPv4 address, and apply the default-port fallback policy.

System Role
-----------
First step of the startup sequence driven by the lifecycle controller. The
returned :class:`ConfigLoadResult` separates "no destination" (fatal) from a
degraded-but-usable configuration (logged, startup continues).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from evtsyslog.application.ports.settings import ResolverPort, SettingsStorePort
from evtsyslog.domain.destination import Destination, parse_port
from evtsyslog.domain.errors import ConfigError

logger = logging.getLogger(__name__)

HOST_KEY = "SyslogHost"
PORT_KEY = "SyslogPort"


@dataclass(slots=True, frozen=True)
class ConfigLoadResult:
    """Outcome of :func:`load_config`.

    Attributes
    ----------
    destination:
        Resolved destination, or ``None`` when no IPv4 address is available.
    complete:
        ``False`` when any value was missing or had to fall back to a default.
    problems:
        Human-readable descriptions of every degradation encountered.
    """

    destination: Destination | None
    complete: bool
    problems: tuple[str, ...] = ()

    def require_destination(self) -> Destination:
        """Return the destination or raise :class:`ConfigError` when absent."""

        if self.destination is None:
            detail = "; ".join(self.problems) or "no destination"
            raise ConfigError(f"no syslog destination configured ({detail})")
        return self.destination


def _first_ipv4(host: str, resolve: ResolverPort) -> str | None:
    try:
        addresses = resolve(host)
    except (OSError, UnicodeError) as exc:
        logger.debug("Resolving %s failed: %s", host, exc)
        return None
    return next(iter(addresses), None)


def load_config(store: SettingsStorePort, resolve: ResolverPort) -> ConfigLoadResult:
    """Read and validate the destination settings from ``store``.

    Parameters
    ----------
    store:
        Configuration store consulted for :data:`HOST_KEY` and :data:`PORT_KEY`.
    resolve:
        Resolver returning IPv4 addresses for a host name in resolver order.

    Returns
    -------
    ConfigLoadResult
        Destination plus completeness flag; never raises for bad values.
    """

    problems: list[str] = []

    raw_port = store.read(PORT_KEY)
    port, port_valid = parse_port(raw_port)
    if raw_port is None:
        problems.append(f"{PORT_KEY} is not set; using {port}")
    elif not port_valid:
        problems.append(f"{PORT_KEY} {raw_port!r} is invalid; using {port}")

    host = (store.read(HOST_KEY) or "").strip()
    destination: Destination | None = None
    if not host:
        problems.append(f"{HOST_KEY} is not set")
    else:
        address = _first_ipv4(host, resolve)
        if address is None:
            problems.append(f"{HOST_KEY} {host!r} has no IPv4 address")
        else:
            destination = Destination(address, port)

    for problem in problems:
        logger.warning("Configuration: %s", problem)
    return ConfigLoadResult(destination=destination, complete=not problems, problems=tuple(problems))


__all__ = ["ConfigLoadResult", "HOST_KEY", "PORT_KEY", "load_config"]
