"""Static package metadata surfaced by the CLI banner."""

from __future__ import annotations

from collections.abc import Callable

name = "evtsyslog"
title = "Forward Windows event-log channels to a remote syslog collector over UDP"
version = "1.0.0"
homepage = "https://pypi.org/project/evtsyslog/"
author = "evtsyslog maintainers"
author_email = "maintainers@evtsyslog.invalid"
shell_command = "evtsyslog"


def print_info(writer: Callable[[str], object] | None = None) -> None:
    """Write the metadata banner through ``writer`` (``print`` without newline by default).

    Examples
    --------
    >>> lines = []
    >>> print_info(writer=lines.append)
    >>> lines[0]
    'Info for evtsyslog:\\n\\n'
    """

    emit = writer or (lambda text: print(text, end=""))
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    emit(f"Info for {name}:\n\n")
    for label, value in fields:
        emit(f"    {label:<{pad}} = {value}\n")


__all__ = ["author", "author_email", "homepage", "name", "print_info", "shell_command", "title", "version"]
