"""Use cases composing the forwarding pipeline and its lifecycle."""

from __future__ import annotations

from .enumerate_channels import enumerate_channels
from .forward_event import create_deliver_event, create_send_record
from .lifecycle import EXIT_OK, EXIT_STARTUP_FAILED, LifecycleController
from .load_config import ConfigLoadResult, load_config
from .render_event import create_render_event, extract_record_fields
from .shutdown import create_shutdown
from .startup import ForwarderSession, create_startup

__all__ = [
    "ConfigLoadResult",
    "EXIT_OK",
    "EXIT_STARTUP_FAILED",
    "ForwarderSession",
    "LifecycleController",
    "create_deliver_event",
    "create_render_event",
    "create_send_record",
    "create_shutdown",
    "create_startup",
    "enumerate_channels",
    "extract_record_fields",
    "load_config",
]
