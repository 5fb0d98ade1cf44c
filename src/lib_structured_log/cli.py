"""CLI adapter for ``lib_structured_log`` built on ``lib_cli_exit_tools``.

Purpose
-------
Expose the dispatch engine on the command line so operators can check how an
entry renders, which default fields the environment contributes, and how a
trace duration looks, without writing Python code.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command that wires global traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata for quick diagnostics.
* :func:`cli_levels` – lists the routing levels.
* :func:`cli_emit` – dispatches one entry to a JSON-lines handler on stdout.
* :func:`cli_trace` – times a sleep and emits the trace entry.
* :func:`cli_fail` – deterministic failure for traceback handling.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
Each command builds its own :class:`HandlerRegistry` so the process-wide default
registry stays untouched. PANIC and FATAL entries use the registry's default
terminal action, so the command exits with status ``1`` after the entry is
written.
"""

from __future__ import annotations

import sys
import time
from importlib import metadata
from typing import Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .adapters.env import EnvFieldsLoader, coerce_scalar
from .adapters.stream import JSONLinesHandler
from .application.entry import Entry
from .application.registry import HandlerRegistry
from .domain.levels import ALL_LEVELS, Level, parse_level
from .testing import i_should_fail

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

LEVEL_CHOICES: Final[tuple[str, ...]] = tuple(str(level) for level in ALL_LEVELS)


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` when metadata is missing."""

    try:
        return metadata.version("lib_structured_log")
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Leveled structured logging core",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_structured_log",
    message="lib_structured_log version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command configuring traceback handling for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata("lib_structured_log")
    except metadata.PackageNotFoundError:
        click.echo("lib_structured_log (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', 'lib_structured_log')}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("levels", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_levels() -> None:
    """List the routing levels in ascending order.

    Examples
    --------
    >>> from click.testing import CliRunner
    >>> CliRunner().invoke(cli, ["levels"]).output.split()
    ['debug', 'info', 'warn', 'error', 'panic', 'fatal']
    """

    for level in ALL_LEVELS:
        click.echo(str(level))


@cli.command("emit", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--level",
    "level_name",
    type=click.Choice(LEVEL_CHOICES, case_sensitive=False),
    default="info",
    show_default=True,
    help="Severity the entry is finalised at",
)
@click.option("--message", "-m", required=True, help="Entry message")
@click.option(
    "--field",
    "-f",
    "field_pairs",
    multiple=True,
    help="Field as KEY=VALUE; values are coerced like environment fields (repeatable)",
)
@click.option(
    "--env-prefix",
    default=None,
    help="Read <PREFIX>_FIELD__<NAME> environment variables as default fields",
)
def cli_emit(level_name: str, message: str, field_pairs: Sequence[str], env_prefix: Optional[str]) -> None:
    """Dispatch one entry and print it as a JSON line on stdout."""

    registry = _stdout_registry(env_prefix)
    entry = registry.new_entry().with_fields(_parse_fields(field_pairs))
    _finalize(entry, parse_level(level_name), message)


@cli.command("trace", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--message", "-m", default="trace", show_default=True, help="Trace message")
@click.option(
    "--sleep",
    "seconds",
    type=click.FloatRange(min=0.0),
    default=0.0,
    show_default=True,
    help="Seconds to wait between trace start and stop",
)
@click.option("--env-prefix", default=None, help="Read default fields from the environment")
def cli_trace(message: str, seconds: float, env_prefix: Optional[str]) -> None:
    """Start a trace, wait, and emit the INFO entry carrying its duration."""

    registry = _stdout_registry(env_prefix)
    with registry.new_entry().trace(message):
        time.sleep(seconds)


@cli.command("fail", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_fail() -> None:
    """Trigger a deterministic error for testing traceback handling."""

    i_should_fail()


def _stdout_registry(env_prefix: Optional[str]) -> HandlerRegistry:
    """Return a registry writing every level to stdout with optional env defaults."""

    registry = HandlerRegistry()
    registry.register_handler(JSONLinesHandler(sys.stdout), *ALL_LEVELS)
    if env_prefix:
        registry.with_default_fields(EnvFieldsLoader().load(env_prefix))
    return registry


def _parse_fields(pairs: Sequence[str]) -> dict[str, object]:
    """Split ``KEY=VALUE`` pairs, coercing values to primitives."""

    fields: dict[str, object] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"Expected KEY=VALUE, got {pair!r}", param_hint="--field")
        fields[key] = coerce_scalar(value)
    return fields


def _finalize(entry: Entry, level: Level, message: str) -> None:
    """Call the severity method matching *level*."""

    finalizers = {
        Level.DEBUG: entry.debug,
        Level.INFO: entry.info,
        Level.WARN: entry.warn,
        Level.ERROR: entry.error,
        Level.PANIC: entry.panic,
        Level.FATAL: entry.fatal,
    }
    finalizers[level](message)


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="lib_structured_log",
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
