"""Synchronous, cache-first JSON fetching.

This module provides :class:`SyncClient`, the single entry point the fact
checkers use to ask a remote API something. It layers on:

- **Fingerprinting** -- the request is keyed once with
  :func:`~todo_or_die.cache.fingerprint.fingerprint`; the same key is used
  for the lookup and for the store on a miss.
- **Disk cache** -- a fresh entry in
  :class:`~todo_or_die.cache.store.DiskCacheStore` answers the request with
  no network traffic. Expired and corrupt entries count as misses.
- **Transport** -- on a miss exactly one request goes out through
  :class:`~todo_or_die.client.transport.HttpTransport`. Successful (2xx)
  responses are written to the cache before the call returns; anything
  else is never cached, so a transient server error is retried next run.
- **Typed decoding** -- the body is validated against a caller-supplied
  shape with :class:`pydantic.TypeAdapter` once the status check passed.

The call blocks until the body has been read or the request definitively
failed. There are no retries and no background work.

The module-level :func:`fetch_json` delegates to a process-wide default
client managed with :func:`get_default_client`, :func:`set_default_client`
and :func:`reset_default_client`.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Optional, TypeVar

from pydantic import TypeAdapter, ValidationError

from todo_or_die.cache.codec import encode, utcnow
from todo_or_die.cache.fingerprint import fingerprint
from todo_or_die.cache.store import DiskCacheStore
from todo_or_die.client.transport import HttpTransport
from todo_or_die.config import cache_ttl_seconds
from todo_or_die.exceptions import DecodeError, HTTPStatusError
from todo_or_die.models import HttpResponse, OutboundRequest

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SyncClient:
    """Cache-first JSON client.

    Args:
        store: Cache store. Defaults to a :class:`DiskCacheStore` on the
            versioned temp directory.
        transport: Network transport. Defaults to an :class:`HttpTransport`
            on the shared process-wide :class:`httpx.Client`.
        ttl: Cache TTL in seconds. When ``None`` the value of
            ``TODO_OR_DIE_HTTP_CACHE_TTL_SECONDS`` (default 3600) is read on
            every call.
        clock: Returns the current aware datetime. Defaults to UTC now.

    Example::

        client = SyncClient()
        issue = client.fetch_json(
            OutboundRequest(uri="https://api.github.com/repos/tokio-rs/axum/issues/1"),
            dict[str, Any],
        )
    """

    def __init__(
        self,
        store: Optional[DiskCacheStore] = None,
        transport: Optional[HttpTransport] = None,
        ttl: Optional[int] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._store = store if store is not None else DiskCacheStore()
        self._transport = transport if transport is not None else HttpTransport()
        self._ttl = ttl
        self._clock = clock or utcnow

    @property
    def store(self) -> DiskCacheStore:
        return self._store

    def fetch_json(self, request: OutboundRequest, shape: Any = Any) -> Any:
        """Return the JSON body of *request* decoded as *shape*.

        Args:
            request: The GET to answer.
            shape: Anything :class:`pydantic.TypeAdapter` accepts -- a
                ``BaseModel`` subclass, ``dict[str, Any]``, ``list[int]``,
                ``Any`` (the default) and so on.

        Returns:
            The validated value.

        Raises:
            TransportError: The network request failed.
            HTTPStatusError: The response status is outside 200-299.
            DecodeError: The body is not JSON or does not match *shape*.
            CacheError: The cache directory cannot be read or created.
        """
        key = fingerprint(request)
        response = self._resolve(key, request)

        if not response.is_success:
            raise HTTPStatusError(response.status_code, response.text)

        try:
            return TypeAdapter(shape).validate_json(response.body)
        except ValidationError as exc:
            raise DecodeError(f"Failed to parse response from {request.uri}: {exc}") from exc

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _resolve(self, key: str, request: OutboundRequest) -> HttpResponse:
        """Answer *request* from the cache, falling back to one network call."""
        now = self._clock()
        cached = self._store.load(key, now=now)
        if cached is not None:
            logger.debug("Cache hit: %s %s (%s)", request.method, request.uri, key)
            return cached

        logger.debug("Cache miss: %s %s (%s)", request.method, request.uri, key)
        response = self._transport.send(request)
        if response.is_success:
            ttl = self._ttl if self._ttl is not None else cache_ttl_seconds()
            self._store.put(key, encode(response, ttl, now=self._clock()))
        return response


# ------------------------------------------------------------------ #
# Process-wide default client
# ------------------------------------------------------------------ #

_default_client: Optional[SyncClient] = None


def get_default_client() -> SyncClient:
    """Return the process-wide :class:`SyncClient`, creating it lazily."""
    global _default_client
    if _default_client is None:
        _default_client = SyncClient()
    return _default_client


def set_default_client(client: SyncClient) -> None:
    """Install *client* as the process-wide default (used by tests)."""
    global _default_client
    _default_client = client


def reset_default_client() -> None:
    """Drop the process-wide default so the next call builds a fresh one."""
    global _default_client
    _default_client = None


def fetch_json(request: OutboundRequest, shape: Any = Any) -> Any:
    """Fetch *request* through the default client. See :meth:`SyncClient.fetch_json`."""
    return get_default_client().fetch_json(request, shape)
