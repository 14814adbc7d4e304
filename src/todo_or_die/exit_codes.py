"""Numeric process exit codes for the ``todo-or-die`` command line.

Each constant maps to a specific failure category and is referenced by the
corresponding :class:`~todo_or_die.exceptions.TodoOrDieError` subclass.
CI scripts can inspect the exit code to tell a due TODO apart from a
network hiccup without parsing stderr.

Example::

    $ todo-or-die after 1990-01-01
    Error: 1990-01-01 is now in the past. Time to act on this!
    $ echo $?
    3   # EXIT_TODO_DUE
"""

EXIT_SUCCESS = 0
"""The fact still holds (or checking was skipped)."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The check input was malformed (bad reference, date, or version requirement)."""

EXIT_TODO_DUE = 3
"""The declared fact no longer holds. Time to act on the TODO."""

EXIT_TRANSPORT_ERROR = 4
"""A network-level error occurred (timeout, DNS failure, TLS failure, connection refused)."""

EXIT_HTTP_STATUS_ERROR = 5
"""The remote API answered with a status outside 200-299."""

EXIT_DECODE_ERROR = 6
"""The response body did not match the expected JSON shape."""

EXIT_CACHE_ERROR = 7
"""The response cache directory or one of its entries could not be accessed."""

EXIT_TOOLCHAIN_ERROR = 8
"""The local toolchain could not be found or its version could not be read."""
