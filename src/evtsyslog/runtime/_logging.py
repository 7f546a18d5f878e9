"""Root logger configuration for the two run modes.

Foreground runs log through :class:`rich.logging.RichHandler` on stderr. The
service has no console, so WARNING and above go to the Windows Application
log via :class:`logging.handlers.NTEventLogHandler`; stderr is kept for
``pythonservice -debug`` sessions.
"""

from __future__ import annotations

import logging
import logging.handlers
from typing import Literal

from rich.console import Console
from rich.logging import RichHandler

from evtsyslog.adapters.service.windows_service import SERVICE_NAME

RunMode = Literal["foreground", "service"]

_HANDLER_MARK = "_evtsyslog_handler"


def configure_logging(level: str | int = "INFO", *, mode: RunMode = "foreground", console: Console | None = None) -> list[logging.Handler]:
    """Install the handlers for ``mode`` on the root logger and return them.

    Handlers installed by a previous call are removed first, so the function
    can be called again when the CLI learns the final log level.

    Examples
    --------
    >>> from io import StringIO
    >>> handlers = configure_logging("DEBUG", console=Console(file=StringIO()))
    >>> [type(handler).__name__ for handler in handlers]
    ['RichHandler']
    >>> reset_logging()
    >>> logging.getLogger().setLevel(logging.WARNING)
    """
    reset_logging()
    root = logging.getLogger()
    handlers: list[logging.Handler] = []
    if mode == "service":
        eventlog = logging.handlers.NTEventLogHandler(SERVICE_NAME)
        eventlog.setLevel(logging.WARNING)
        eventlog.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        handlers.append(eventlog)
        stream = logging.StreamHandler()
        stream.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        handlers.append(stream)
    else:
        rich_handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
            markup=False,
        )
        rich_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        handlers.append(rich_handler)

    for handler in handlers:
        setattr(handler, _HANDLER_MARK, True)
        root.addHandler(handler)
    root.setLevel(level if isinstance(level, int) else level.upper())
    return handlers


def reset_logging() -> None:
    """Remove and close the handlers installed by :func:`configure_logging`."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            root.removeHandler(handler)
            handler.close()


__all__ = ["RunMode", "configure_logging", "reset_logging"]
