"""Process lifecycle states and control requests.

Purpose
-------
Model the service-style state machine that every run mode (foreground or
managed) walks through, independent of any service-control API.
"""

from __future__ import annotations

from enum import Enum


class ServiceState(Enum):
    """States reported while the forwarder starts, runs, and stops."""

    STOPPED = "stopped"
    START_PENDING = "start_pending"
    RUNNING = "running"
    STOP_PENDING = "stop_pending"

    @property
    def is_pending(self) -> bool:
        """Return ``True`` for the transitional states that carry a wait hint."""

        return self in (ServiceState.START_PENDING, ServiceState.STOP_PENDING)

    def can_transition_to(self, target: "ServiceState") -> bool:
        """Return ``True`` when moving from ``self`` to ``target`` is legal.

        Examples
        --------
        >>> ServiceState.STOPPED.can_transition_to(ServiceState.START_PENDING)
        True
        >>> ServiceState.RUNNING.can_transition_to(ServiceState.STOPPED)
        False
        """

        return target in _TRANSITIONS[self]


_TRANSITIONS: dict[ServiceState, frozenset[ServiceState]] = {
    ServiceState.STOPPED: frozenset({ServiceState.START_PENDING}),
    ServiceState.START_PENDING: frozenset({ServiceState.RUNNING, ServiceState.STOP_PENDING, ServiceState.STOPPED}),
    ServiceState.RUNNING: frozenset({ServiceState.STOP_PENDING}),
    ServiceState.STOP_PENDING: frozenset({ServiceState.STOPPED}),
}


class ControlRequest(Enum):
    """Requests an external service-control driver may deliver."""

    STOP = "stop"
    INTERROGATE = "interrogate"


__all__ = ["ControlRequest", "ServiceState"]
