"""Click-based command line interface for the forwarder.

Purpose
-------
Give operators one entry point for both run modes plus two diagnostics:
``run`` (foreground), ``service`` (SCM dispatcher / install helpers),
``channels`` and ``config``.

Contents
--------
* :func:`cli` - root group with traceback and ``.env`` toggles.
* :func:`main` - ``lib_cli_exit_tools`` wrapper used by ``python -m evtsyslog``
  and the ``evtsyslog`` console script.

System Role
-----------
Presentation layer only: every command delegates to :mod:`evtsyslog.runtime`.
"""

from __future__ import annotations

from collections.abc import Sequence

import click
import lib_cli_exit_tools
from rich.console import Console

from . import __init__conf__
from . import config as config_module
from . import runtime, summary_info
from .adapters.console import RichStatusConsole
from .domain.errors import ForwarderError

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
TRACEBACK_SUMMARY_LIMIT = 500
TRACEBACK_VERBOSE_LIMIT = 10_000

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(version=__init__conf__.version, prog_name=__init__conf__.shell_command, message="%(prog)s version %(version)s")
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python tracebacks on errors.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help=f"Load the nearest .env before reading EVTSYSLOG_* settings (default: ${config_module.DOTENV_ENV_VAR}).",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool | None) -> None:
    """Forward Windows event-log channels to a syslog collector over UDP."""

    if config_module.should_use_dotenv(explicit=use_dotenv):
        config_module.enable_dotenv()
    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback
    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print package metadata."""

    click.echo(summary_info(), nl=False)


@cli.command("run", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--host", default=None, help="Syslog host; overrides EVTSYSLOG_SYSLOG_HOST and the registry.")
@click.option("--port", default=None, help="Syslog UDP port; invalid values fall back to 514.")
@click.option("--registry-key", default=None, help="HKLM sub key holding SyslogHost/SyslogPort.")
@click.option("--log-level", type=click.Choice(_LOG_LEVELS, case_sensitive=False), default=None, help="Console log level.")
@click.option("--no-queue", is_flag=True, default=False, help="Send inline on the event-log thread instead of worker threads.")
def cli_run(host: str | None, port: str | None, registry_key: str | None, log_level: str | None, no_queue: bool) -> None:
    """Run the forwarder in the foreground until Ctrl+C."""

    try:
        settings = runtime.build_runtime_settings(
            host=host,
            port=port,
            registry_key=registry_key,
            log_level=log_level,
            queue_enabled=False if no_queue else None,
        )
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc
    exit_code = runtime.run_foreground(settings)
    if exit_code:
        raise SystemExit(exit_code)


@cli.command(
    "service",
    context_settings={**CLICK_CONTEXT_SETTINGS, "ignore_unknown_options": True, "help_option_names": []},
)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def cli_service(args: tuple[str, ...]) -> None:
    """Run under the Service Control Manager, or pass ARGS to the pywin32 service handler."""

    exit_code = runtime.run_service(list(args))
    if exit_code:
        raise SystemExit(exit_code)


@cli.command("channels", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_channels() -> None:
    """List every event-log channel on this host."""

    try:
        channels = runtime.list_channels()
    except ForwarderError as exc:
        raise click.ClickException(str(exc)) from exc
    RichStatusConsole(console=Console()).show_channels(channels)


@cli.command("config", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--registry-key", default=None, help="HKLM sub key holding SyslogHost/SyslogPort.")
def cli_config(registry_key: str | None) -> None:
    """Show the resolved syslog destination."""

    settings = runtime.build_runtime_settings(registry_key=registry_key)
    result = runtime.load_destination(settings)
    rows = [
        ("destination", str(result.destination) if result.destination is not None else "-"),
        ("complete", "yes" if result.complete else "no"),
        ("registry key", settings.registry_key),
    ]
    rows.extend(("problem", problem) for problem in result.problems)
    RichStatusConsole(console=Console()).show_mapping("evtsyslog configuration", rows)
    if result.destination is None:
        raise SystemExit(1)


def main(argv: Sequence[str] | None = None, *, restore_traceback: bool = True) -> int:
    """Run the CLI through ``lib_cli_exit_tools`` and return the exit code.

    Traceback preferences changed by ``--traceback`` are restored afterwards so
    embedding callers keep their own settings.
    """

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name=__init__conf__.shell_command,
            )
        except BaseException as exc:  # noqa: BLE001 - converted to an exit code
            verbose = bool(getattr(lib_cli_exit_tools.config, "traceback", False))
            lib_cli_exit_tools.print_exception_message(
                trace_back=verbose,
                length_limit=TRACEBACK_VERBOSE_LIMIT if verbose else TRACEBACK_SUMMARY_LIMIT,
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main"]
