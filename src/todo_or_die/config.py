"""Environment-driven configuration.

todo-or-die is usually invoked from builds, test suites and CI jobs, so all
configuration comes from environment variables that are read at call time
(never cached at import), which keeps ``monkeypatch.setenv`` effective in
tests:

* ``TODO_OR_DIE_HTTP_CACHE_TTL_SECONDS`` -- see :func:`cache_ttl_seconds`.
* ``TODO_OR_DIE_GITHUB_TOKEN`` / ``GITHUB_TOKEN`` -- see :func:`github_token`.
* ``TODO_OR_DIE_SKIP`` -- see :func:`skip_enabled`.
* ``RUSTC`` -- see :func:`rustc_command`.

The HTTP cache lives under the platform temp directory and is namespaced by
the package version, see :func:`get_cache_dir`.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Optional

from todo_or_die import __version__

_APP_NAME = "todo_or_die"

CACHE_TTL_ENV = "TODO_OR_DIE_HTTP_CACHE_TTL_SECONDS"
SKIP_ENV = "TODO_OR_DIE_SKIP"
GITHUB_TOKEN_ENVS = ("TODO_OR_DIE_GITHUB_TOKEN", "GITHUB_TOKEN")
RUSTC_ENV = "RUSTC"

DEFAULT_CACHE_TTL_SECONDS = 3600


def get_cache_dir() -> Path:
    """Return the versioned HTTP cache directory.

    ``<tempdir>/todo_or_die_<version>_cache``. Embedding the version means
    an entry written by one release is never read by another, so the
    on-disk format may change between releases. The directory is *not*
    created here; :class:`~todo_or_die.cache.store.DiskCacheStore` does
    that on first write.
    """
    return Path(tempfile.gettempdir()) / f"{_APP_NAME}_{__version__}_cache"


def cache_ttl_seconds() -> int:
    """Return the cache TTL in seconds.

    Reads ``TODO_OR_DIE_HTTP_CACHE_TTL_SECONDS``. Values that are missing,
    not integers, or negative fall back to one hour.
    """
    raw = os.environ.get(CACHE_TTL_ENV)
    if raw is None:
        return DEFAULT_CACHE_TTL_SECONDS
    try:
        seconds = int(raw.strip())
    except ValueError:
        return DEFAULT_CACHE_TTL_SECONDS
    if seconds < 0:
        return DEFAULT_CACHE_TTL_SECONDS
    return seconds


def github_token() -> Optional[str]:
    """Return the GitHub token, preferring ``TODO_OR_DIE_GITHUB_TOKEN`` over ``GITHUB_TOKEN``."""
    for var in GITHUB_TOKEN_ENVS:
        value = os.environ.get(var)
        if value:
            return value
    return None


def skip_enabled() -> bool:
    """Whether ``TODO_OR_DIE_SKIP`` is set (to any value, even empty)."""
    return SKIP_ENV in os.environ


def rustc_command() -> str:
    """The rustc binary to query, ``$RUSTC`` or plain ``rustc``."""
    return os.environ.get(RUSTC_ENV) or "rustc"
