"""Disk-based response caching for todo-or-die.

Three small pieces, each usable on its own:

* :func:`fingerprint` -- deterministic cache key for an
  :class:`~todo_or_die.models.OutboundRequest`.
* :func:`encode` / :func:`decode` -- response <-> blob, with expiry.
* :class:`DiskCacheStore` -- one file per fingerprint under the versioned
  cache directory.

They are composed by :class:`~todo_or_die.client.sync_client.SyncClient`.
Only successful responses are ever written.
"""

from todo_or_die.cache.codec import CacheMiss, decode, encode
from todo_or_die.cache.fingerprint import fingerprint
from todo_or_die.cache.store import DiskCacheStore

__all__ = ["CacheMiss", "DiskCacheStore", "decode", "encode", "fingerprint"]
