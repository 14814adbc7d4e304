"""Date check."""

from __future__ import annotations

from datetime import date
from typing import Optional

from todo_or_die.exceptions import InvalidUsageError


def parse_date(text: str) -> date:
    """Parse ``YYYY-MM-DD``.

    Raises:
        InvalidUsageError: If *text* is not an ISO calendar date.
    """
    try:
        return date.fromisoformat(text.strip())
    except ValueError as exc:
        raise InvalidUsageError(f"Invalid date {text!r}, expected YYYY-MM-DD") from exc


def after(when: str, today: Optional[date] = None) -> Optional[str]:
    """Due once *when* is today or earlier (local time)."""
    deadline = parse_date(when)
    if today is None:
        today = date.today()
    if deadline <= today:
        return f"{deadline.isoformat()} is now in the past. Time to act on this!"
    return None
