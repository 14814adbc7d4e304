"""Serialisation of HTTP responses to and from cache blobs.

A blob is the JSON rendering of :class:`CacheRecord`: status, headers,
body and an absolute expiry timestamp. Header values and the body are raw
bytes and are base64-encoded inside the JSON so that arbitrary bytes survive
the round trip.

:func:`decode` never raises. Anything that does not validate -- truncated
writes, foreign files, garbage -- comes back as :attr:`CacheMiss.CORRUPT`,
and a valid record whose expiry has passed comes back as
:attr:`CacheMiss.EXPIRED`. Callers treat both as a miss.
"""

from __future__ import annotations

import enum
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, ValidationError

from todo_or_die.models import CachedResponse, HttpResponse


class CacheMiss(str, enum.Enum):
    """Why a blob could not be used to answer a request."""

    EXPIRED = "expired"
    CORRUPT = "corrupt"


class CacheRecord(BaseModel):
    """On-disk layout of a cached response."""

    model_config = ConfigDict(
        extra="forbid",
        ser_json_bytes="base64",
        val_json_bytes="base64",
    )

    status: int = Field(ge=100, le=599)
    headers: dict[str, bytes]
    body: bytes
    expires_at: AwareDatetime


MAX_EXPIRY = datetime.max.replace(tzinfo=timezone.utc)


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def encode(
    response: HttpResponse,
    ttl: Union[int, float, timedelta],
    now: Optional[datetime] = None,
) -> bytes:
    """Serialise *response*, stamping it to expire ``ttl`` after *now*.

    Args:
        response: The response to store.
        ttl: Time-to-live in seconds or as a :class:`~datetime.timedelta`.
            An expiry beyond the largest representable datetime is clamped
            to :data:`MAX_EXPIRY`.
        now: Reference time; defaults to :func:`utcnow`.

    Returns:
        The blob to hand to :meth:`~todo_or_die.cache.store.DiskCacheStore.put`.
    """
    if now is None:
        now = utcnow()
    try:
        if not isinstance(ttl, timedelta):
            ttl = timedelta(seconds=ttl)
        expires_at = now + ttl
    except OverflowError:
        expires_at = MAX_EXPIRY
    record = CacheRecord(
        status=response.status_code,
        headers=dict(response.headers),
        body=response.body,
        expires_at=expires_at,
    )
    return record.model_dump_json().encode("utf-8")


def decode(
    data: bytes,
    now: Optional[datetime] = None,
) -> Union[CachedResponse, CacheMiss]:
    """Parse a blob produced by :func:`encode`.

    Args:
        data: Raw file contents.
        now: Reference time for the expiry check; defaults to :func:`utcnow`.

    Returns:
        The :class:`~todo_or_die.models.CachedResponse` when the blob is
        valid and ``now`` is not past its expiry, otherwise
        :attr:`CacheMiss.CORRUPT` or :attr:`CacheMiss.EXPIRED`.
    """
    try:
        record = CacheRecord.model_validate_json(data)
    except ValidationError:
        return CacheMiss.CORRUPT

    if now is None:
        now = utcnow()
    cached = CachedResponse(
        status_code=record.status,
        headers=record.headers,
        body=record.body,
        expires_at=record.expires_at,
    )
    if cached.is_expired(now):
        return CacheMiss.EXPIRED
    return cached
