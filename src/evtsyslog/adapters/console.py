"""Rich-powered console output for foreground runs and CLI listings.

Purpose
-------
Show lifecycle transitions to an operator watching a foreground run and
render channel listings / configuration summaries for the CLI.

Contents
--------
* :data:`_STYLE_MAP` - default state-to-style mapping.
* :class:`RichStatusConsole` - :class:`StatusReporterPort` for the foreground runner.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, MutableMapping

from rich.console import Console
from rich.table import Table

from evtsyslog.application.ports.lifecycle import StatusReporterPort
from evtsyslog.domain.lifecycle import ServiceState


#: Default Rich styles keyed by :class:`ServiceState`.
_STYLE_MAP: Mapping[ServiceState, str] = {
    ServiceState.START_PENDING: "yellow",
    ServiceState.RUNNING: "bold green",
    ServiceState.STOP_PENDING: "yellow",
    ServiceState.STOPPED: "dim",
}


class RichStatusConsole(StatusReporterPort):
    """Render lifecycle transitions and listings using Rich."""

    def __init__(
        self,
        *,
        console: Console | None = None,
        force_color: bool = False,
        no_color: bool = False,
        styles: MutableMapping[ServiceState | str, str] | None = None,
    ) -> None:
        """Configure the console with colour and style overrides."""
        if console is not None:
            self._console = console
        else:
            self._console = Console(stderr=True, force_terminal=force_color or None, no_color=no_color)
        self._no_color = no_color
        merged = dict(_STYLE_MAP)
        for key, value in (styles or {}).items():
            state = ServiceState[key.strip().upper()] if isinstance(key, str) else key
            merged[state] = value
        self._style_map = merged

    @property
    def console(self) -> Console:
        return self._console

    def report(self, state: ServiceState, *, wait_hint_ms: int = 0, exit_code: int = 0) -> None:
        """Print ``state`` with optional wait hint and exit code.

        Examples
        --------
        >>> from io import StringIO
        >>> console = Console(file=StringIO(), record=True, width=80)
        >>> RichStatusConsole(console=console).report(ServiceState.STOPPED, exit_code=1)
        >>> text = console.export_text()
        >>> 'STOPPED' in text and 'exit code 1' in text
        True
        """
        style = "" if self._no_color else self._style_map.get(state, "")
        self._console.print(self._format_line(state, wait_hint_ms, exit_code), style=style, highlight=False)

    def show_channels(self, channels: Iterable[str]) -> int:
        """Print ``channels`` as a numbered table and return how many were shown."""
        table = Table(title="Event-log channels", show_lines=False)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Channel")
        count = 0
        for count, name in enumerate(channels, start=1):
            table.add_row(str(count), name)
        self._console.print(table)
        return count

    def show_mapping(self, title: str, rows: Iterable[tuple[str, str]]) -> None:
        """Print a two-column key/value table."""
        table = Table(title=title, show_header=False)
        table.add_column("Key", style="bold")
        table.add_column("Value")
        for key, value in rows:
            table.add_row(key, value)
        self._console.print(table)

    @staticmethod
    def _format_line(state: ServiceState, wait_hint_ms: int, exit_code: int) -> str:
        """Return a human-friendly status line.

        Examples
        --------
        >>> RichStatusConsole._format_line(ServiceState.STOP_PENDING, 3000, 0)
        'evtsyslog: STOP_PENDING (wait hint 3000 ms)'
        """
        parts = [f"evtsyslog: {state.name}"]
        if state.is_pending and wait_hint_ms:
            parts.append(f"(wait hint {wait_hint_ms} ms)")
        if exit_code:
            parts.append(f"(exit code {exit_code})")
        return " ".join(parts)


__all__ = ["RichStatusConsole"]
