"""Ports for lifecycle drivers and state reporting.

Purpose
-------
Both run modes (foreground loop and managed service) expose the same
``start`` / ``request_stop`` / ``await_stopped`` surface, while state changes
flow back out through :class:`StatusReporterPort`.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from evtsyslog.domain.lifecycle import ServiceState


@runtime_checkable
class StatusReporterPort(Protocol):
    """Receive lifecycle transitions (e.g. forward them to a service manager)."""

    def report(self, state: ServiceState, *, wait_hint_ms: int = 0, exit_code: int = 0) -> None:
        """Publish ``state`` with an optional wait hint and exit code."""


@runtime_checkable
class LifecyclePort(Protocol):
    """Run-mode independent control surface of the forwarder."""

    def start(self) -> None:
        """Begin running the pipeline; returns once startup has been scheduled."""

    def request_stop(self) -> None:
        """Ask the pipeline to stop; must return promptly."""

    def await_stopped(self, timeout: float | None = None) -> bool:
        """Block until stopped; return ``False`` when ``timeout`` elapsed first."""


__all__ = ["LifecyclePort", "StatusReporterPort"]
