"""Local Rust toolchain version check.

The active version is read from ``$RUSTC --version`` (``rustc`` by
default), whose output looks like ``rustc 1.75.0 (82e1608df 2023-12-21)``.
Channel suffixes such as ``-nightly`` are dropped.
"""

from __future__ import annotations

import re
import subprocess
from typing import Optional

from packaging.version import Version

from todo_or_die.checks.versions import matches, parse_requirement, parse_version
from todo_or_die.config import rustc_command
from todo_or_die.exceptions import ToolchainError

_RUSTC_VERSION = re.compile(r"^rustc (\d+\.\d+\.\d+)")


def current_rust_version() -> Version:
    """Return the version of the active rustc.

    Raises:
        ToolchainError: If rustc cannot be run or its output is unexpected.
    """
    command = rustc_command()
    try:
        result = subprocess.run(
            [command, "--version"],
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as exc:
        raise ToolchainError(f"Unable to get current rust version from {command}: {exc}") from exc

    match = _RUSTC_VERSION.match(result.stdout.strip())
    if match is None:
        raise ToolchainError(f"Couldn't parse rust version from {result.stdout.strip()!r}")
    return parse_version(match.group(1))


def rust_version(requirement: str) -> Optional[str]:
    """Due once the active Rust version satisfies *requirement*."""
    version_req = parse_requirement(requirement)
    current = current_rust_version()
    if matches(version_req, current):
        return f"Your active version of rust is {current}. Time to act on this!"
    return None
