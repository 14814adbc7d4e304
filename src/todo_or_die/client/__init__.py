"""HTTP client module for todo-or-die.

Classes:
    :class:`HttpTransport` -- sends one request over the shared
    :class:`httpx.Client` (HTTP/2 with HTTP/1.1 fallback).
    :class:`SyncClient` -- the blocking, cache-first JSON facade built on
    top of the transport and :mod:`todo_or_die.cache`.

Example::

    from todo_or_die.client import fetch_json
    from todo_or_die.models import OutboundRequest

    crate = fetch_json(OutboundRequest(uri="https://crates.io/api/v1/crates/serde"))
"""

from todo_or_die.client.sync_client import (
    SyncClient,
    fetch_json,
    get_default_client,
    reset_default_client,
    set_default_client,
)
from todo_or_die.client.transport import HttpTransport, close_http_client, get_http_client

__all__ = [
    "HttpTransport",
    "SyncClient",
    "close_http_client",
    "fetch_json",
    "get_default_client",
    "get_http_client",
    "reset_default_client",
    "set_default_client",
]
