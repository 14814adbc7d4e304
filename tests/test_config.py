"""Tests for todo_or_die.config -- environment lookups and the cache directory."""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from todo_or_die import __version__
from todo_or_die.config import (
    DEFAULT_CACHE_TTL_SECONDS,
    cache_ttl_seconds,
    get_cache_dir,
    github_token,
    rustc_command,
    skip_enabled,
)


# ---------------------------------------------------------------------------
# Cache directory
# ---------------------------------------------------------------------------


class TestCacheDir:
    def test_under_tempdir_and_versioned(self) -> None:
        expected = Path(tempfile.gettempdir()) / f"todo_or_die_{__version__}_cache"
        assert get_cache_dir() == expected

    def test_not_created(self) -> None:
        assert not get_cache_dir().exists()


# ---------------------------------------------------------------------------
# TTL
# ---------------------------------------------------------------------------


class TestCacheTtl:
    def test_default_is_one_hour(self) -> None:
        assert cache_ttl_seconds() == DEFAULT_CACHE_TTL_SECONDS == 3600

    @pytest.mark.parametrize("raw, expected", [("60", 60), (" 120 ", 120), ("0", 0)])
    def test_from_env(self, monkeypatch: pytest.MonkeyPatch, raw: str, expected: int) -> None:
        monkeypatch.setenv("TODO_OR_DIE_HTTP_CACHE_TTL_SECONDS", raw)
        assert cache_ttl_seconds() == expected

    @pytest.mark.parametrize("raw", ["", "soon", "1.5", "-10"])
    def test_invalid_falls_back(self, monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
        monkeypatch.setenv("TODO_OR_DIE_HTTP_CACHE_TTL_SECONDS", raw)
        assert cache_ttl_seconds() == DEFAULT_CACHE_TTL_SECONDS


# ---------------------------------------------------------------------------
# Tokens, skip switch, rustc
# ---------------------------------------------------------------------------


class TestGithubToken:
    def test_none_by_default(self) -> None:
        assert github_token() is None

    def test_generic_token(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GITHUB_TOKEN", "ghp_generic")
        assert github_token() == "ghp_generic"

    def test_specific_token_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GITHUB_TOKEN", "ghp_generic")
        monkeypatch.setenv("TODO_OR_DIE_GITHUB_TOKEN", "ghp_specific")
        assert github_token() == "ghp_specific"

    def test_empty_specific_token_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GITHUB_TOKEN", "ghp_generic")
        monkeypatch.setenv("TODO_OR_DIE_GITHUB_TOKEN", "")
        assert github_token() == "ghp_generic"


class TestSkip:
    def test_unset(self) -> None:
        assert skip_enabled() is False

    def test_any_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TODO_OR_DIE_SKIP", "")
        assert skip_enabled() is True


class TestRustc:
    def test_default(self) -> None:
        assert rustc_command() == "rustc"

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RUSTC", "/opt/rust/bin/rustc")
        assert rustc_command() == "/opt/rust/bin/rustc"
