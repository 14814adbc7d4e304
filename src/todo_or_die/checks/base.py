"""The boundary between callers and the individual fact checkers.

A *check* is a plain function returning ``None`` while its fact still holds
and a message once the TODO is due. :func:`perform_check` wraps every check
and is the only place that:

* honours the ``TODO_OR_DIE_SKIP`` kill switch,
* decides which failures are fatal. Malformed input
  (:class:`~todo_or_die.exceptions.InvalidUsageError`) propagates; any other
  :class:`~todo_or_die.exceptions.TodoOrDieError` (network down, GitHub rate
  limit, missing rustc, ...) is reported as a warning and the check passes,
  so flaky infrastructure does not break builds.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from todo_or_die.config import skip_enabled
from todo_or_die.exceptions import InvalidUsageError, TodoDue, TodoOrDieError
from todo_or_die.output import warning

logger = logging.getLogger(__name__)

Check = Callable[..., Optional[str]]


def perform_check(check: Check, *args: object) -> Optional[str]:
    """Run *check* with *args* and return its message, if any.

    Returns:
        ``None`` when the fact holds, checking is skipped, or the check could
        not be evaluated; otherwise the "time to act" message.

    Raises:
        InvalidUsageError: If the check input is malformed.
    """
    if skip_enabled():
        logger.debug("TODO_OR_DIE_SKIP is set, skipping %s", getattr(check, "__name__", check))
        return None

    try:
        return check(*args)
    except InvalidUsageError:
        raise
    except TodoOrDieError as exc:
        logger.debug("Check %s failed", getattr(check, "__name__", check), exc_info=True)
        warning(f"something went wrong\n\n{exc}")
        return None


def enforce(check: Check, *args: object) -> None:
    """Run *check* through :func:`perform_check` and raise if the TODO is due.

    Raises:
        TodoDue: With the check's message.
        InvalidUsageError: If the check input is malformed.
    """
    message = perform_check(check, *args)
    if message is not None:
        raise TodoDue(message)
