"""Deterministic cache keys for outbound requests.

A fingerprint is the xxh64 digest of a canonical text rendering of the
request's method, URI and headers (in request order), as a 16-character hex
string that doubles as the cache file name. xxh64 is stable across
processes and platforms, unlike the builtin :func:`hash`, which is salted
per process.

Headers are part of the input, including ``Authorization``: two requests
that differ only in their token get separate cache entries, so one
principal's cached data is never served to another.
"""

from __future__ import annotations

import xxhash

from todo_or_die.models import OutboundRequest


def canonical_text(request: OutboundRequest) -> str:
    """Render *request* as the text that gets hashed."""
    lines = [f"{request.method} {request.uri}"]
    lines.extend(f"{name}: {value}" for name, value in request.headers.items())
    return "\n".join(lines) + "\n"


def fingerprint(request: OutboundRequest) -> str:
    """Return the cache key for *request*.

    Example::

        key = fingerprint(OutboundRequest(uri="https://api.example.com/widget/7"))
        len(key)  # 16, lowercase hex
    """
    return xxhash.xxh64(canonical_text(request).encode("utf-8")).hexdigest()
