"""Public package surface of the event-log to syslog forwarder.

``import evtsyslog`` exposes the run-mode entry points and the metadata
banner; ``python -m evtsyslog`` runs the CLI.
"""

from __future__ import annotations

from .runtime import list_channels, load_destination, run_foreground, run_service


def summary_info() -> str:
    """Return the metadata banner used by the CLI.

    Examples
    --------
    >>> "version" in summary_info()
    True
    """
    from . import __init__conf__

    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


__all__ = ["list_channels", "load_destination", "run_foreground", "run_service", "summary_info"]
