"""Adapters implementing the application ports.

Windows-only adapters (event log, registry, service) import pywin32 and
``winreg`` lazily, so this package imports on every platform.
"""

from __future__ import annotations

from .console import RichStatusConsole
from .eventlog import WindowsEventSource
from .queue import DeliveryQueue
from .resolver import SystemResolver
from .settings import ChainedSettingsStore, EnvironmentSettingsStore, MappingSettingsStore, RegistrySettingsStore
from .syslog_format import SyslogFormatter
from .transport import UdpTransport

__all__ = [
    "ChainedSettingsStore",
    "DeliveryQueue",
    "EnvironmentSettingsStore",
    "MappingSettingsStore",
    "RegistrySettingsStore",
    "RichStatusConsole",
    "SyslogFormatter",
    "SystemResolver",
    "UdpTransport",
    "WindowsEventSource",
]
