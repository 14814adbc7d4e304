"""Shared test fixtures for todo-or-die.

Provides an isolated environment (no real env vars, no real temp cache),
a scriptable fake backend built on :class:`httpx.MockTransport`, a default
:class:`SyncClient` wired to both, and a CLI runner. These fixtures are
discovered by pytest automatically.
"""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable, Optional

import httpx
import pytest

from todo_or_die.cache import DiskCacheStore
from todo_or_die.client import HttpTransport, SyncClient, reset_default_client, set_default_client
from todo_or_die.output import OutputManager, reset_output, set_output


T0 = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Global state isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _isolate(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep every test away from the real environment and temp directory.

    Clears all todo-or-die environment variables, points ``tempfile`` at a
    per-test directory so the default cache directory is private, and resets
    the global output manager and default client afterwards.
    """
    for var in [
        "TODO_OR_DIE_HTTP_CACHE_TTL_SECONDS",
        "TODO_OR_DIE_GITHUB_TOKEN",
        "GITHUB_TOKEN",
        "TODO_OR_DIE_SKIP",
        "RUSTC",
        "NO_COLOR",
    ]:
        monkeypatch.delenv(var, raising=False)

    temp_root = tmp_path / "tmp"
    temp_root.mkdir()
    monkeypatch.setattr("tempfile.tempdir", str(temp_root))

    set_output(OutputManager(no_color=True))
    yield
    reset_output()
    reset_default_client()


# ---------------------------------------------------------------------------
# Fake backend
# ---------------------------------------------------------------------------


class FakeBackend:
    """Scriptable HTTP backend that records every request it receives.

    Routes map a URL to either a ``(status, json_body)`` tuple or a callable
    taking the :class:`httpx.Request` and returning an :class:`httpx.Response`.
    Unknown URLs answer 404.
    """

    def __init__(self) -> None:
        self.routes: dict[str, Any] = {}
        self.requests: list[httpx.Request] = []

    def route(self, url: str, status: int = 200, body: Any = None) -> None:
        self.routes[url] = (status, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        target = self.routes.get(str(request.url))
        if target is None:
            return httpx.Response(404, json={"message": "Not Found"})
        if callable(target):
            return target(request)
        status, body = target
        if isinstance(body, (bytes, str)):
            return httpx.Response(status, content=body)
        return httpx.Response(
            status,
            content=json.dumps(body).encode(),
            headers={"content-type": "application/json"},
        )

    @property
    def calls(self) -> int:
        return len(self.requests)

    def http_client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


class Clock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: datetime = T0) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


@pytest.fixture
def clock() -> Clock:
    return Clock()


@pytest.fixture
def store(tmp_path: Path) -> DiskCacheStore:
    """A store on a fresh directory that does not exist yet."""
    return DiskCacheStore(tmp_path / "cache")


@pytest.fixture
def make_client(
    backend: FakeBackend, store: DiskCacheStore, clock: Clock
) -> Callable[..., SyncClient]:
    """Factory for a :class:`SyncClient` on the fake backend, store and clock."""

    def _make(ttl: Optional[int] = 60) -> SyncClient:
        return SyncClient(
            store=store,
            transport=HttpTransport(backend.http_client()),
            ttl=ttl,
            clock=clock,
        )

    return _make


@pytest.fixture
def default_client(make_client: Callable[..., SyncClient]) -> SyncClient:
    """Install a fake-backed client as the process-wide default used by the checks."""
    client = make_client(ttl=None)
    set_default_client(client)
    return client


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
