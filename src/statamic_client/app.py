"""Typer application and CLI entry point for statamic_client.

This module wires together the top-level Typer application: the root
callback (output flags and connection settings), the resource commands
(``entries``, ``entry``, ``collection-tree``, ``nav-tree``, ``terms``,
``term``, ``globals``, ``global``, ``forms``, ``form``, ``users``, ``user``,
``assets``, ``asset``) and the ``profile`` and ``config`` groups.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. Unhandled exceptions are written to a crash log under
the data directory.

See Also:
    :mod:`statamic_client.config`: Profile and global configuration resolution.
    :mod:`statamic_client.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from statamic_client import __version__
from statamic_client.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="statamic-client",
    help="Query a Statamic site's REST API.",
    no_args_is_help=True,
    add_completion=True,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"statamic-client {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    profile: Optional[str] = typer.Option(
        None, "--profile", "-p", help="Profile name to use."
    ),
    api_url: Optional[str] = typer.Option(
        None, "--api-url", help="Statamic API URL (overrides the profile)."
    ),
    site: Optional[str] = typer.Option(
        None, "--default-site", help="Default multi-site handle (overrides the profile)."
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Print the request URL without sending it."
    ),
    output_file: Optional[str] = typer.Option(
        None, "-o", "--output", help="Output file path."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~statamic_client.output.OutputManager`
    from CLI flags and stores the connection settings in ``ctx.obj`` for
    :func:`~statamic_client.commands.resources.client_from_context`. Keys
    already present in ``ctx.obj`` (such as an ``httpx`` ``transport``
    injected by a caller) are kept.
    """
    from statamic_client.config import load_global_config
    from statamic_client.exceptions import ConfigError
    from statamic_client.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN
    else:
        try:
            fmt = OutputFormat(load_global_config().output.format)
        except (ConfigError, ValueError):
            fmt = OutputFormat.AUTO

    set_output(
        OutputManager(
            format=fmt,
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
            output_file=output_file,
        )
    )

    ctx.ensure_object(dict)
    ctx.obj["profile"] = profile
    ctx.obj["api_url"] = api_url
    ctx.obj["site"] = site
    ctx.obj["dry_run"] = dry_run


# ------------------------------------------------------------------ #
# Commands
# ------------------------------------------------------------------ #

from statamic_client.commands.config import config_app  # noqa: E402
from statamic_client.commands.profile import profile_app  # noqa: E402
from statamic_client.commands.resources import RESOURCE_COMMANDS  # noqa: E402

for _name, _command in RESOURCE_COMMANDS.items():
    app.command(_name)(_command)

app.add_typer(profile_app, name="profile", help="Manage connection profiles.")
app.add_typer(config_app, name="config", help="Configuration management.")


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from statamic_client.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``statamic-client`` console script.

    :class:`~statamic_client.exceptions.StatamicError` instances that
    escape a command cause a clean exit with the error's ``exit_code``.
    All other exceptions produce a crash log and a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from statamic_client.exceptions import StatamicError
        from statamic_client.output import error

        if isinstance(exc, StatamicError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
