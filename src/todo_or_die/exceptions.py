"""Exception hierarchy for todo-or-die.

All exceptions inherit from :class:`TodoOrDieError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`todo_or_die.exit_codes`.
The CLI entry point in :func:`todo_or_die.app.main` catches
``TodoOrDieError`` and exits with the appropriate code.

Subclass hierarchy::

    TodoOrDieError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- TodoDue             (exit 3)
    +-- TransportError      (exit 4)
    +-- HTTPStatusError     (exit 5)
    +-- DecodeError         (exit 6)
    +-- CacheError          (exit 7)
    +-- ToolchainError      (exit 8)
"""

from todo_or_die.exit_codes import (
    EXIT_CACHE_ERROR,
    EXIT_DECODE_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_HTTP_STATUS_ERROR,
    EXIT_INVALID_USAGE,
    EXIT_TODO_DUE,
    EXIT_TOOLCHAIN_ERROR,
    EXIT_TRANSPORT_ERROR,
)


class TodoOrDieError(Exception):
    """Base exception for all todo-or-die errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`todo_or_die.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(TodoOrDieError):
    """Raised when a check is given malformed input (e.g. ``org/repo`` without ``#issue``)."""

    exit_code = EXIT_INVALID_USAGE


class TodoDue(TodoOrDieError):
    """Raised by the Python API when a declared fact no longer holds."""

    exit_code = EXIT_TODO_DUE


class TransportError(TodoOrDieError):
    """Raised on network-level failures (DNS, TLS, connection refused, read errors, timeouts).

    The underlying :mod:`httpx` exception is chained as ``__cause__``.
    """

    exit_code = EXIT_TRANSPORT_ERROR


class HTTPStatusError(TodoOrDieError):
    """Raised when a response carries a status outside the 200-299 range.

    Args:
        status_code: The HTTP status of the response.
        body: The response body decoded as text (lossy).
    """

    exit_code = EXIT_HTTP_STATUS_ERROR

    def __init__(self, status_code: int, body: str):
        super().__init__(
            f"Received non-success response. status={status_code}, body={body!r}"
        )
        self.status_code = status_code
        self.body = body


class DecodeError(TodoOrDieError):
    """Raised when a successful response body does not match the expected shape."""

    exit_code = EXIT_DECODE_ERROR


class CacheError(TodoOrDieError):
    """Raised when the cache directory cannot be created or an entry cannot be read.

    A corrupt entry is *not* an error; it is treated as a cache miss.
    """

    exit_code = EXIT_CACHE_ERROR


class ToolchainError(TodoOrDieError):
    """Raised when the local toolchain is missing or reports an unparseable version."""

    exit_code = EXIT_TOOLCHAIN_ERROR
