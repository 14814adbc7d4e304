"""Canonical Pydantic models shared across the request and cache layers.

**Request side**:
    :class:`OutboundRequest` -- the read-only GET that a fact checker wants
    answered. It deliberately has no body: the cache fingerprint covers
    method, URI and headers only, which is only sound while bodies are empty.

**Response side**:
    :class:`HttpResponse` -- a fully buffered response as returned by the
    transport.
    :class:`CachedResponse` -- the same response plus the absolute expiry
    time it was stamped with when written to the disk cache.

Header values and bodies are kept as raw ``bytes``; they are not assumed to
be valid text.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal
from urllib.parse import urlsplit

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, field_validator


class OutboundRequest(BaseModel):
    """A read-only HTTP request to be answered by the cache or the network.

    Headers are an ordered mapping; their order is part of the request's
    fingerprint (see :func:`~todo_or_die.cache.fingerprint.fingerprint`).

    Example::

        OutboundRequest(
            uri="https://api.github.com/repos/tokio-rs/axum/issues/1",
            headers={"Accept": "application/vnd.github.v3+json"},
        )

    Raises:
        pydantic.ValidationError: If the method is not ``GET`` or the URI is
            not an absolute ``http``/``https`` URL.
    """

    model_config = ConfigDict(frozen=True)

    method: Literal["GET"] = "GET"
    uri: str
    headers: dict[str, str] = Field(default_factory=dict)

    @field_validator("uri")
    @classmethod
    def _check_uri(cls, value: str) -> str:
        parts = urlsplit(value)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"expected an absolute http(s) URL, got {value!r}")
        return value

    def with_header(self, name: str, value: str) -> OutboundRequest:
        """Return a copy with *name* set to *value* (appended if new)."""
        headers = dict(self.headers)
        headers[name] = value
        return self.model_copy(update={"headers": headers})


class HttpResponse(BaseModel):
    """A complete HTTP response with its body fully read into memory."""

    status_code: int = Field(ge=100, le=599)
    headers: dict[str, bytes] = Field(default_factory=dict)
    body: bytes = b""

    @property
    def is_success(self) -> bool:
        """Whether the status is in the 200-299 range."""
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        """The body decoded as UTF-8, replacing invalid sequences."""
        return self.body.decode("utf-8", errors="replace")


class CachedResponse(HttpResponse):
    """A response read back from the disk cache, valid until ``expires_at``."""

    expires_at: AwareDatetime

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at
