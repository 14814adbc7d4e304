"""Fact checks and their Python API.

Each function below raises :class:`~todo_or_die.exceptions.TodoDue` once its
fact stops holding and returns ``None`` otherwise. Call them at module level
so a due TODO fails the import::

    import todo_or_die

    todo_or_die.after("2027-01-01")
    todo_or_die.crates_io("hyper", ">=2.0")

Errors that are not the caller's fault (network failures, API errors, a
missing rustc) print a warning and let the check pass; see
:func:`~todo_or_die.checks.base.perform_check`.
"""

from __future__ import annotations

from todo_or_die.checks import crates, github, rust
from todo_or_die.checks import time as time_checks
from todo_or_die.checks.base import enforce, perform_check


def issue_closed(reference: str) -> None:
    """Raise once the GitHub issue ``org/repo#number`` has been closed."""
    enforce(github.issue_closed, reference)


def pr_closed(reference: str) -> None:
    """Raise once the GitHub pull request ``org/repo#number`` has been closed or merged."""
    enforce(github.pr_closed, reference)


def crates_io(crate: str, requirement: str) -> None:
    """Raise once the latest published version of *crate* satisfies *requirement*."""
    enforce(crates.crates_io, crate, requirement)


def rust_version(requirement: str) -> None:
    """Raise once the active Rust toolchain satisfies *requirement*."""
    enforce(rust.rust_version, requirement)


def after(when: str) -> None:
    """Raise once the date ``YYYY-MM-DD`` is today or in the past."""
    enforce(time_checks.after, when)


__all__ = [
    "after",
    "crates_io",
    "enforce",
    "issue_closed",
    "perform_check",
    "pr_closed",
    "rust_version",
]
