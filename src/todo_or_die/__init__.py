"""todo-or-die -- TODOs that fail loudly once the fact they depend on stops holding.

A caller declares a fact that must still be true -- an issue is still open,
a crate is still below some version, a date has not passed yet -- and this
package raises (or exits non-zero from the CLI) as soon as it is false::

    import todo_or_die

    # Remove the workaround below once upstream ships the fix.
    todo_or_die.issue_closed("tokio-rs/axum#1563")

Network lookups go through a synchronous request layer that caches
successful JSON responses on disk with a TTL, so repeated runs (builds,
test suites) do not hammer remote APIs.

Set ``TODO_OR_DIE_SKIP`` to any value to turn every check into a no-op.

Modules:
    models: Pydantic models for requests and (cached) responses.
    cache: Fingerprints, the response codec, and the disk cache store.
    client: The process-wide transport and the synchronous fetch facade.
    checks: The individual fact checkers and their Python API.
    config: Environment-driven configuration.
    exceptions: Exception hierarchy with exit-code mapping.
    app: Typer CLI entry point.
"""

__version__ = "0.1.0"

from todo_or_die.checks import (  # noqa: E402
    after,
    crates_io,
    issue_closed,
    pr_closed,
    rust_version,
)
from todo_or_die.exceptions import TodoDue, TodoOrDieError  # noqa: E402

__all__ = [
    "__version__",
    "after",
    "crates_io",
    "issue_closed",
    "pr_closed",
    "rust_version",
    "TodoDue",
    "TodoOrDieError",
]
