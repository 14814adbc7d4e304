"""File-per-fingerprint response cache on local disk.

:class:`DiskCacheStore` owns the versioned cache directory returned by
:func:`~todo_or_die.config.get_cache_dir`. Each entry is a single file named
after the request fingerprint and containing a blob from
:mod:`todo_or_die.cache.codec`.

Writes go to a temp file in the same directory followed by ``os.replace``,
so a reader sees either the old entry or the new one, never a mix. There is
no locking between processes: concurrent writers of the same fingerprint
write equivalent bytes and the last one wins.
"""

from __future__ import annotations

import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from todo_or_die.cache.codec import CacheMiss, decode
from todo_or_die.config import get_cache_dir
from todo_or_die.exceptions import CacheError
from todo_or_die.models import CachedResponse

logger = logging.getLogger(__name__)


class DiskCacheStore:
    """Byte-blob storage keyed by request fingerprint.

    Args:
        directory: Cache directory. Defaults to
            :func:`~todo_or_die.config.get_cache_dir`. Created lazily on the
            first :meth:`put`.

    Example::

        store = DiskCacheStore(tmp_path)
        store.put("0123456789abcdef", blob)
        assert store.get("0123456789abcdef") == blob
    """

    def __init__(self, directory: str | Path | None = None) -> None:
        self._directory = Path(directory) if directory is not None else get_cache_dir()

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: str) -> Path:
        """Path of the file holding the entry for *key*."""
        return self._directory / key

    # ------------------------------------------------------------------ #
    # Raw blobs
    # ------------------------------------------------------------------ #

    def get(self, key: str) -> Optional[bytes]:
        """Return the stored blob, or ``None`` if there is no entry.

        Raises:
            CacheError: If the file exists but cannot be read (permissions,
                I/O failure, the path is a directory, ...).
        """
        path = self.path_for(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise CacheError(f"Cannot read cache entry {path}: {exc}") from exc

    def put(self, key: str, data: bytes) -> None:
        """Store *data* as the entry for *key*, replacing any previous entry.

        Raises:
            CacheError: If the cache directory cannot be created or the entry
                cannot be written.
        """
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CacheError(
                f"Failed to create dir to store HTTP caches at {self._directory}: {exc}"
            ) from exc

        path = self.path_for(key)
        tmp_path: Optional[str] = None
        try:
            fd, tmp_path = tempfile.mkstemp(dir=self._directory, prefix=f".{key}.", suffix=".tmp")
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_path, path)
            tmp_path = None
        except OSError as exc:
            raise CacheError(f"Failed to cache response at {path}: {exc}") from exc
        finally:
            if tmp_path is not None:
                try:
                    os.unlink(tmp_path)
                except OSError:
                    pass

    def delete(self, key: str) -> None:
        """Remove the entry for *key*. Missing entries are ignored."""
        path = self.path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise CacheError(f"Cannot remove cache entry {path}: {exc}") from exc

    # ------------------------------------------------------------------ #
    # Decoded responses
    # ------------------------------------------------------------------ #

    def load(self, key: str, now: Optional[datetime] = None) -> Optional[CachedResponse]:
        """Return the usable cached response for *key*, or ``None``.

        Expired and corrupt entries are removed and reported as a miss, so a
        broken file costs one network request rather than an error.
        """
        data = self.get(key)
        if data is None:
            return None

        result = decode(data, now=now)
        if result is CacheMiss.EXPIRED:
            logger.debug("Cache entry %s expired", key)
            self.delete(key)
            return None
        if result is CacheMiss.CORRUPT:
            logger.debug("Cache entry %s is corrupt, ignoring it", key)
            self.delete(key)
            return None
        return result

    # ------------------------------------------------------------------ #
    # Maintenance
    # ------------------------------------------------------------------ #

    def _entries(self) -> list[Path]:
        if not self._directory.is_dir():
            return []
        return [p for p in self._directory.iterdir() if p.is_file() and not p.name.startswith(".")]

    def clear(self) -> int:
        """Remove every entry and return how many were removed."""
        removed = 0
        for path in self._entries():
            path.unlink(missing_ok=True)
            removed += 1
        return removed

    def stats(self) -> dict[str, Any]:
        """Return cache statistics.

        Returns:
            A ``dict`` with ``directory`` (str path), ``entries`` (number of
            files) and ``size_bytes`` (their total size).
        """
        entries = self._entries()
        return {
            "directory": str(self._directory),
            "entries": len(entries),
            "size_bytes": sum(p.stat().st_size for p in entries),
        }
