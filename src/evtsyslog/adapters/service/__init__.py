"""Windows service integration."""

from __future__ import annotations

from .windows_service import (
    SERVICE_NAME,
    ServiceStatusReporter,
    WindowsServiceHost,
    configure_service,
    run_service_dispatcher,
)

__all__ = [
    "SERVICE_NAME",
    "ServiceStatusReporter",
    "WindowsServiceHost",
    "configure_service",
    "run_service_dispatcher",
]
