"""Typer application and CLI entry point for todo-or-die.

Every check is exposed as a sub-command that exits with
:data:`~todo_or_die.exit_codes.EXIT_TODO_DUE` once its fact no longer holds,
which makes it easy to wire into CI::

    todo-or-die issue-closed rust-lang/rust#1563
    todo-or-die crates-io tokio ">=2.0"
    todo-or-die after 2027-01-01

The ``cache`` group inspects and empties the HTTP response cache.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``.
"""

from __future__ import annotations

import logging
import signal
import sys
from typing import Any, Callable, Optional

import typer
from rich.logging import RichHandler

from todo_or_die import __version__
from todo_or_die.exit_codes import EXIT_GENERIC_FAILURE, EXIT_TODO_DUE


app = typer.Typer(
    name="todo-or-die",
    help="Fail loudly once the fact behind a TODO stops holding.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

cache_app = typer.Typer(no_args_is_help=True)
app.add_typer(cache_app, name="cache", help="Inspect or clear the HTTP response cache.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"todo-or-die {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
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

    Installs the global :class:`~todo_or_die.output.OutputManager` and, with
    ``--verbose``, routes library logging (cache hits and misses, network
    requests) to stderr through Rich.
    """
    from todo_or_die.output import OutputFormat, OutputManager, set_output

    output = OutputManager(
        format=OutputFormat.JSON if json_output else OutputFormat.AUTO,
        no_color=no_color,
        quiet=quiet,
        verbose=verbose,
    )
    set_output(output)

    if verbose:
        package_logger = logging.getLogger("todo_or_die")
        for existing in list(package_logger.handlers):
            if isinstance(existing, RichHandler):
                package_logger.removeHandler(existing)
        package_logger.addHandler(RichHandler(console=output.stderr_console, show_path=False))
        package_logger.setLevel(logging.DEBUG)


def _run_check(check: Callable[..., Optional[str]], *args: str) -> None:
    """Run *check* at the CLI boundary and turn its outcome into an exit code."""
    from todo_or_die.checks import perform_check
    from todo_or_die.exceptions import TodoOrDieError
    from todo_or_die.output import error

    try:
        message = perform_check(check, *args)
    except TodoOrDieError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code)

    if message is not None:
        error(message)
        raise typer.Exit(code=EXIT_TODO_DUE)


# ------------------------------------------------------------------ #
# Checks
# ------------------------------------------------------------------ #


@app.command("issue-closed")
def issue_closed_command(
    reference: str = typer.Argument(help="GitHub issue as org/repo#number."),
) -> None:
    """Fail once a GitHub issue has been closed."""
    from todo_or_die.checks import github

    _run_check(github.issue_closed, reference)


@app.command("pr-closed")
def pr_closed_command(
    reference: str = typer.Argument(help="GitHub pull request as org/repo#number."),
) -> None:
    """Fail once a GitHub pull request has been closed or merged."""
    from todo_or_die.checks import github

    _run_check(github.pr_closed, reference)


@app.command("crates-io")
def crates_io_command(
    crate: str = typer.Argument(help="Crate name on crates.io."),
    requirement: str = typer.Argument(help="Version requirement, e.g. '>=1.0'."),
) -> None:
    """Fail once the latest version of a crate satisfies a requirement."""
    from todo_or_die.checks import crates

    _run_check(crates.crates_io, crate, requirement)


@app.command("rust-version")
def rust_version_command(
    requirement: str = typer.Argument(help="Version requirement, e.g. '>1.50'."),
) -> None:
    """Fail once the active Rust toolchain satisfies a requirement."""
    from todo_or_die.checks import rust

    _run_check(rust.rust_version, requirement)


@app.command("after")
def after_command(
    when: str = typer.Argument(help="Date as YYYY-MM-DD."),
) -> None:
    """Fail once a date is today or in the past."""
    from todo_or_die.checks import time as time_checks

    _run_check(time_checks.after, when)


# ------------------------------------------------------------------ #
# Cache
# ------------------------------------------------------------------ #


@cache_app.command("path")
def cache_path() -> None:
    """Print the cache directory."""
    from todo_or_die.config import get_cache_dir
    from todo_or_die.output import print_data

    print_data(str(get_cache_dir()))


@cache_app.command("stats")
def cache_stats() -> None:
    """Show the number and total size of cached responses."""
    from todo_or_die.cache import DiskCacheStore
    from todo_or_die.output import format_response

    format_response(DiskCacheStore().stats())


@cache_app.command("clear")
def cache_clear() -> None:
    """Remove every cached response."""
    from todo_or_die.cache import DiskCacheStore
    from todo_or_die.output import success

    removed = DiskCacheStore().clear()
    success(f"Removed {removed} cached response(s).")


# ------------------------------------------------------------------ #
# Entry point
# ------------------------------------------------------------------ #


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``todo-or-die`` console script.

    :class:`~todo_or_die.exceptions.TodoOrDieError` instances escaping a
    command (malformed input, an unreadable cache directory) cause a clean
    exit with the error's ``exit_code``.

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
        from todo_or_die.exceptions import TodoOrDieError
        from todo_or_die.output import error

        if isinstance(exc, TodoOrDieError):
            error(str(exc))
            sys.exit(exc.exit_code)
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
