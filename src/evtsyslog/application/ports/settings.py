"""Ports for the configuration store and host name resolution."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class SettingsStorePort(Protocol):
    """Key-value store read once at startup."""

    def read(self, name: str) -> str | None:
        """Return the string stored under ``name`` or ``None`` when absent."""


@runtime_checkable
class ResolverPort(Protocol):
    """Resolve a host name to IPv4 addresses in resolver order."""

    def __call__(self, host: str) -> Sequence[str]: ...


__all__ = ["ResolverPort", "SettingsStorePort"]
