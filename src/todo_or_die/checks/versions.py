"""Version requirement parsing for the crates.io and toolchain checks.

Requirements are comma-separated clauses matched with :mod:`packaging`.
Both PEP 440 operators (``>=1.0``, ``<2``, ``~=1.4``, ``!=1.3.0``) and the
Cargo forms used across the Rust ecosystem are accepted; Cargo clauses are
translated to PEP 440 before parsing:

=============  =====================
Cargo          PEP 440
=============  =====================
``1.2``        ``>=1.2,<2``
``^1.2.3``     ``>=1.2.3,<2``
``^0.2.3``     ``>=0.2.3,<0.3``
``^0.0.3``     ``>=0.0.3,<0.0.4``
``~1.2``       ``>=1.2,<1.3``
``~1``         ``>=1,<2``
``=2.0.0``     ``==2.0.0``
``1.*``        ``==1.*``
``*``          ``>=0``
=============  =====================

Cargo pre-release requirements (``^1.0.0-alpha``) are not supported.
"""

from __future__ import annotations

import re
from typing import Optional

from packaging.specifiers import InvalidSpecifier, SpecifierSet
from packaging.version import InvalidVersion, Version

from todo_or_die.exceptions import InvalidUsageError, TodoOrDieError

_PARTIAL_VERSION = re.compile(r"^(\d+)(?:\.(\d+))?(?:\.(\d+))?$")
_WILDCARD = re.compile(r"^\d+(?:\.\d+)?\.\*$")


def _split_partial(text: str, requirement: str) -> tuple[int, Optional[int], Optional[int]]:
    match = _PARTIAL_VERSION.match(text)
    if match is None:
        raise InvalidUsageError(f"Invalid version requirement {requirement!r}")
    major, minor, patch = match.groups()
    return (
        int(major),
        int(minor) if minor is not None else None,
        int(patch) if patch is not None else None,
    )


def _caret(text: str, requirement: str) -> str:
    major, minor, patch = _split_partial(text, requirement)
    if major > 0 or minor is None:
        upper = f"{major + 1}"
    elif minor > 0 or patch is None:
        upper = f"0.{minor + 1}"
    else:
        upper = f"0.0.{patch + 1}"
    return f">={text},<{upper}"


def _tilde(text: str, requirement: str) -> str:
    major, minor, _ = _split_partial(text, requirement)
    upper = f"{major + 1}" if minor is None else f"{major}.{minor + 1}"
    return f">={text},<{upper}"


def _translate(clause: str, requirement: str) -> str:
    """Rewrite one Cargo clause as PEP 440; PEP 440 clauses pass through."""
    if clause == "*":
        return ">=0"
    if clause.startswith("^"):
        return _caret(clause[1:].strip(), requirement)
    if clause.startswith("~") and not clause.startswith("~="):
        return _tilde(clause[1:].strip(), requirement)
    if clause.startswith("=") and not clause.startswith("=="):
        return "==" + clause[1:].strip()
    if clause[:1].isdigit():
        if _WILDCARD.match(clause):
            return "==" + clause
        return _caret(clause, requirement)
    return clause


def parse_requirement(text: str) -> SpecifierSet:
    """Parse a comma-separated version requirement.

    Example::

        parse_requirement("^1.4")          # >=1.4,<2
        parse_requirement(">=1.4, <2")     # unchanged

    Raises:
        InvalidUsageError: If *text* is empty or not a valid requirement.
    """
    clauses = [clause.strip() for clause in text.split(",")]
    if not any(clauses):
        raise InvalidUsageError("Version requirement must not be empty")
    if not all(clauses):
        raise InvalidUsageError(f"Invalid version requirement {text!r}: empty clause")

    normalized = ",".join(_translate(clause, text) for clause in clauses)
    try:
        return SpecifierSet(normalized)
    except InvalidSpecifier as exc:
        raise InvalidUsageError(f"Invalid version requirement {text!r}: {exc}") from exc


def parse_version(text: str) -> Version:
    """Parse a version reported by a registry or a toolchain.

    Raises:
        TodoOrDieError: If *text* is not a valid version.
    """
    try:
        return Version(text)
    except InvalidVersion as exc:
        raise TodoOrDieError(f"Couldn't parse version {text!r}") from exc


def matches(requirement: SpecifierSet, version: Version) -> bool:
    """Whether *version* satisfies *requirement*.

    Pre-releases only match when the requirement itself names one, so
    ``">=1.0"`` is not triggered by ``2.0.0a1``.
    """
    return requirement.contains(version)
