"""Typer application and CLI entry point for specdoc.

This module builds the top-level Typer application and registers the
built-in sub-commands (``generate``, ``inspect``, ``analyze``, ``config``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs a SIGINT handler and invokes the Typer app.
:class:`~specdoc.exceptions.SpecdocError` instances exit with their own
code; any other exception is written to a crash log under the data
directory.

See Also:
    :mod:`specdoc.config`: Global and project configuration resolution.
    :mod:`specdoc.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from typing import Any

import typer
from rich.console import Console
from rich.logging import RichHandler

from specdoc import __version__
from specdoc.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="specdoc",
    help="Synthesize API and model documentation from OpenAPI/Swagger specs.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"specdoc {__version__}")
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
) -> None:
    """Root callback executed before every sub-command.

    Resolves the effective configuration, installs the global
    :class:`~specdoc.output.OutputManager` and the log handler, and stores
    the configuration in ``ctx.obj`` for the sub-commands.

    Args:
        ctx: Typer invocation context.
        version: If ``True``, print the version string and exit.
        json_output: Force JSON output format.
        plain_output: Force plain-text output format.
        no_color: Disable all colour and Rich markup.
        quiet: Suppress non-essential diagnostic output.
        verbose: Enable debug-level diagnostic output and logging.
    """
    from specdoc.commands._source import reported_errors
    from specdoc.config import resolve_config
    from specdoc.output import OutputFormat, OutputManager, set_output

    cli_format = None
    if json_output:
        cli_format = OutputFormat.JSON.value
    elif plain_output:
        cli_format = OutputFormat.PLAIN.value

    _configure_logging(verbose=verbose, quiet=quiet, no_color=no_color)

    with reported_errors():
        config = resolve_config(cli_format=cli_format)

    try:
        fmt = OutputFormat(config.output.format)
    except ValueError:
        logging.getLogger(__name__).warning(
            "Unknown output format '%s', using auto", config.output.format
        )
        fmt = OutputFormat.AUTO

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["verbose"] = verbose


def _configure_logging(verbose: bool, quiet: bool, no_color: bool) -> None:
    """Send ``specdoc.*`` log records to stderr through a single RichHandler."""
    package_logger = logging.getLogger("specdoc")
    for handler in list(package_logger.handlers):
        if isinstance(handler, RichHandler):
            package_logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True, no_color=no_color),
        show_time=False,
        show_path=False,
        markup=False,
    )
    package_logger.addHandler(handler)

    if verbose:
        package_logger.setLevel(logging.DEBUG)
    elif quiet:
        package_logger.setLevel(logging.ERROR)
    else:
        package_logger.setLevel(logging.WARNING)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log() -> str:
    """Write the current traceback to the data directory and return its path."""
    from specdoc.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc(), encoding="utf-8")
    return str(log_path)


# ------------------------------------------------------------------ #
# Built-in commands
# ------------------------------------------------------------------ #

from specdoc.commands.analyze import analyze_command  # noqa: E402
from specdoc.commands.config import config_app  # noqa: E402
from specdoc.commands.generate import generate_command  # noqa: E402
from specdoc.commands.inspect import inspect_app  # noqa: E402

app.command("generate")(generate_command)
app.add_typer(inspect_app, name="inspect", help="Print synthesized records.")
app.command("analyze")(analyze_command)
app.add_typer(config_app, name="config", help="Show and change the global configuration.")


def main() -> None:
    """CLI entry point invoked by the ``specdoc`` console script.

    Unhandled :class:`~specdoc.exceptions.SpecdocError` instances cause a
    clean exit with the error's ``exit_code``. All other exceptions produce a
    crash log and a generic failure exit.

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
        from specdoc.exceptions import SpecdocError
        from specdoc.output import error

        if isinstance(exc, SpecdocError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log()
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)
