"""Process-wide HTTP transport.

One :class:`httpx.Client` is built on first use and shared for the rest of
the process:

- **HTTP/2 with HTTP/1.1 fallback** -- ``http2=True`` offers ``h2`` and
  ``http/1.1`` via ALPN and uses whichever the server picks.
- **TLS** -- httpx's default verification against the :mod:`certifi` root
  bundle.
- **Identification** -- every request carries ``User-Agent: todo-or-die``
  (required by crates.io and the GitHub API).

Timeouts are httpx's defaults and redirects are not followed. The client is
closed at interpreter exit so pooled connections are not leaked.
"""

from __future__ import annotations

import atexit
import logging
import threading
from typing import Optional

import httpx

from todo_or_die.exceptions import TransportError
from todo_or_die.models import HttpResponse, OutboundRequest

logger = logging.getLogger(__name__)

USER_AGENT = "todo-or-die"

_client: Optional[httpx.Client] = None
_client_lock = threading.Lock()


def _build_client() -> httpx.Client:
    return httpx.Client(
        http2=True,
        headers={"User-Agent": USER_AGENT},
    )


def get_http_client() -> httpx.Client:
    """Return the shared :class:`httpx.Client`, building it on first call."""
    global _client
    if _client is None:
        with _client_lock:
            if _client is None:
                _client = _build_client()
                atexit.register(close_http_client)
    return _client


def close_http_client() -> None:
    """Close the shared client. The next :func:`get_http_client` builds a new one."""
    global _client
    with _client_lock:
        if _client is not None:
            _client.close()
            _client = None


def _collect_headers(response: httpx.Response) -> dict[str, bytes]:
    """Raw header values keyed by lower-case name; repeated headers are comma-joined."""
    headers: dict[str, bytes] = {}
    for raw_name, raw_value in response.headers.raw:
        name = raw_name.decode("latin-1").lower()
        if name in headers:
            headers[name] = headers[name] + b", " + raw_value
        else:
            headers[name] = raw_value
    return headers


class HttpTransport:
    """Executes exactly one :class:`~todo_or_die.models.OutboundRequest` per call.

    Args:
        client: The :class:`httpx.Client` to send through. Defaults to the
            shared client from :func:`get_http_client`, resolved on each
            call. Tests pass a client backed by :class:`httpx.MockTransport`.
    """

    def __init__(self, client: Optional[httpx.Client] = None) -> None:
        self._client = client

    def send(self, request: OutboundRequest) -> HttpResponse:
        """Send *request* and return the fully buffered response.

        Raises:
            TransportError: On DNS, TLS, connection, read, timeout or
                content-decoding failures.
        """
        client = self._client if self._client is not None else get_http_client()
        logger.debug("%s %s", request.method, request.uri)
        try:
            response = client.request(request.method, request.uri, headers=request.headers)
        except httpx.RequestError as exc:
            raise TransportError(f"HTTP request to {request.uri} failed: {exc}") from exc

        return HttpResponse(
            status_code=response.status_code,
            headers=_collect_headers(response),
            body=response.content,
        )
