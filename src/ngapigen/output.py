"""Terminal output for the CLI.

Two streams, two jobs (see `clig.dev <https://clig.dev/>`_):

* **stdout** carries the result of a command -- the plan table, the tag
  table, or a JSON document -- and nothing else, so it can be piped.
* **stderr** carries everything a human reads while the command runs:
  progress, warnings, errors, and records from the :mod:`logging` tree
  rooted at ``ngapigen``.

The layout of stdout depends on :class:`OutputFormat`. ``AUTO`` becomes
``RICH`` on an interactive colour terminal and ``PLAIN`` (tab-separated)
otherwise. Colour is off when ``--no-color`` is passed, ``NO_COLOR`` is set,
or ``TERM=dumb``.

The CLI builds one :class:`OutputManager` per invocation in
:func:`~ngapigen.app.main_callback` and installs it with :func:`set_output`;
commands reach it through :func:`get_output` or the module-level shortcuts.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table


class OutputFormat(str, Enum):
    """How command results are laid out on stdout."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


# Diagnostic level -> (plain prefix, Rich markup template).
_DIAGNOSTICS = {
    "info": ("", "{}"),
    "success": ("", "[green]{}[/green]"),
    "warning": ("Warning: ", "[yellow]Warning:[/yellow] {}"),
    "error": ("Error: ", "[bold red]Error:[/bold red] {}"),
    "debug": ("[debug] ", "[dim]\\[debug] {}[/dim]"),
}


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """Return True when ``NO_COLOR`` is set (any value) or ``TERM=dumb``."""
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


def _resolve_format(requested: OutputFormat, no_color: bool) -> OutputFormat:
    if requested != OutputFormat.AUTO:
        return requested
    if _is_tty() and not no_color:
        return OutputFormat.RICH
    return OutputFormat.PLAIN


class OutputManager:
    """Write command results to stdout and diagnostics to stderr.

    Args:
        format: Requested layout for results.
        no_color: Turn off colour and markup on both streams.
        quiet: Drop info and success messages (warnings and errors stay).
        verbose: Show debug messages.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._format = _resolve_format(format, self._no_color)
        self._quiet = quiet
        self._verbose = verbose
        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=self._format == OutputFormat.RICH,
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def is_quiet(self) -> bool:
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    @property
    def stderr_console(self) -> Console:
        return self._stderr

    # ------------------------------------------------------------------ #
    # Results (stdout)
    # ------------------------------------------------------------------ #

    def print_data(self, text: str) -> None:
        print(text, file=sys.stdout, flush=True)

    def print_json(self, data: Any) -> None:
        self.print_data(json.dumps(data, indent=2, ensure_ascii=False, default=str))

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Print *rows* in the active format.

        JSON prints an array with one object per row, keyed by *headers*.
        PLAIN prints a header line and one tab-separated line per row. RICH
        prints a table with *title* above it.
        """
        if self._format == OutputFormat.JSON:
            self.print_json([dict(zip(headers, row)) for row in rows])
            return
        if self._format == OutputFormat.PLAIN:
            for line in [headers, *rows]:
                self.print_data("\t".join(line))
            return

        table = Table(*headers, title=title, header_style="bold cyan")
        for row in rows:
            table.add_row(*row)
        self._stdout.print(table)

    # ------------------------------------------------------------------ #
    # Diagnostics (stderr)
    # ------------------------------------------------------------------ #

    def info(self, message: str) -> None:
        if not self._quiet:
            self._diagnostic("info", message)

    def success(self, message: str) -> None:
        if not self._quiet:
            self._diagnostic("success", message)

    def warning(self, message: str) -> None:
        """Print a warning, even in quiet mode."""
        self._diagnostic("warning", message)

    def error(self, message: str) -> None:
        """Print an error, even in quiet mode."""
        self._diagnostic("error", message)

    def debug(self, message: str) -> None:
        if self._verbose:
            self._diagnostic("debug", message)

    def _diagnostic(self, level: str, message: str) -> None:
        prefix, template = _DIAGNOSTICS[level]
        if self._no_color:
            print(prefix + message, file=sys.stderr, flush=True)
        else:
            self._stderr.print(template.format(escape(message)))


# ------------------------------------------------------------------ #
# Logging
# ------------------------------------------------------------------ #


def configure_logging(output: OutputManager) -> None:
    """Route ``ngapigen`` log records to *output*'s stderr console.

    The level follows the CLI flags: DEBUG with ``--verbose``, ERROR with
    ``--quiet``, WARNING otherwise. Calling it again replaces the handler.
    """
    if output.is_verbose:
        level = logging.DEBUG
    elif output.is_quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=output.stderr_console,
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("ngapigen")
    logger.handlers[:] = [handler]
    logger.setLevel(level)
    logger.propagate = False


# ------------------------------------------------------------------ #
# Installed instance and shortcuts
# ------------------------------------------------------------------ #

_current: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed manager, creating a default one on first use."""
    global _current
    if _current is None:
        _current = OutputManager()
    return _current


def set_output(output: OutputManager) -> None:
    global _current
    _current = output


def reset_output() -> None:
    """Forget the installed manager. The test suite calls this between tests."""
    global _current
    _current = None


def print_table(headers: list[str], rows: list[list[str]], title: Optional[str] = None) -> None:
    get_output().print_table(headers, rows, title)


def print_json(data: Any) -> None:
    get_output().print_json(data)


def success(message: str) -> None:
    get_output().success(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)
