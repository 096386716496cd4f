"""Typer application and console-script entry point.

The root :data:`app` carries the output flags shared by every command and
registers the three commands:

* ``plan`` -- list the files a run would write, with their skip status.
* ``tags`` -- show the per-tag GET/mutation summary behind the skip set.
* ``generate`` -- render the plan through a template directory.

:func:`main` is what the ``ngapigen`` console script runs. Library errors
(:class:`~ngapigen.exceptions.NgApiGenError`) end the process with their own
exit code; anything else is treated as a bug, and its traceback is saved to
a crash log in the system temp directory.
"""

from __future__ import annotations

import signal
import sys
import tempfile
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any

import typer

from ngapigen import __version__
from ngapigen.commands.generate import generate_command
from ngapigen.commands.inspect import plan_command, tags_command
from ngapigen.exit_codes import EXIT_GENERIC_FAILURE
from ngapigen.output import OutputFormat, OutputManager, configure_logging, set_output


EXIT_INTERRUPTED = 130

app = typer.Typer(
    name="ngapigen",
    help="Plan and generate signal-based Angular API clients from OpenAPI 3.x documents.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("plan")(plan_command)
app.command("tags")(tags_command)
app.command("generate")(generate_command)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(f"ngapigen {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False, "--version", callback=_show_version, is_eager=True,
        help="Print the version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="Print results as JSON."),
    plain_output: bool = typer.Option(
        False, "--plain", help="Print results as tab-separated text."
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colour."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Only print results, warnings and errors."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print debug details."),
) -> None:
    """Set up output and logging before the command runs.

    ``--json`` wins over ``--plain``; with neither, the format follows the
    terminal.
    """
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN
    else:
        fmt = OutputFormat.AUTO

    output = OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose)
    set_output(output)
    configure_logging(output)


def _on_sigint(signum: int, frame: Any) -> None:  # noqa: ANN401
    sys.stderr.write("\nCancelled.\n")
    sys.exit(EXIT_INTERRUPTED)


def _write_crash_log() -> Path:
    """Save the traceback being handled and return the log path."""
    stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    path = Path(tempfile.gettempdir()) / f"ngapigen-crash-{stamp}.log"
    path.write_text(traceback.format_exc(), encoding="utf-8")
    return path


def main() -> None:
    """Run the CLI and translate uncaught exceptions into exit codes.

    Raises:
        SystemExit: Always, either from Typer or from the handlers below.
    """
    signal.signal(signal.SIGINT, _on_sigint)
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as exc:
        from ngapigen.exceptions import NgApiGenError
        from ngapigen.output import error

        if isinstance(exc, NgApiGenError):
            error(str(exc))
            sys.exit(exc.exit_code)
        error(f"Unexpected error. Traceback saved to {_write_crash_log()}")
        sys.exit(EXIT_GENERIC_FAILURE)
