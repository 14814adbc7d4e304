"""Tests for the check boundary and the Python API."""

from __future__ import annotations

from typing import Optional

import pytest

import todo_or_die
from todo_or_die.checks.base import enforce, perform_check
from todo_or_die.exceptions import (
    HTTPStatusError,
    InvalidUsageError,
    TodoDue,
    TransportError,
)

ISSUE_URL = "https://api.github.com/repos/tokio-rs/axum/issues/1"


def _due(*args: object) -> Optional[str]:
    return "time to act"


def _holds(*args: object) -> Optional[str]:
    return None


def _explodes(*args: object) -> Optional[str]:
    raise TransportError("dns failure")


def _bad_input(*args: object) -> Optional[str]:
    raise InvalidUsageError("bad input")


class TestPerformCheck:
    def test_passes_arguments(self) -> None:
        seen: list[tuple] = []

        def check(*args: object) -> Optional[str]:
            seen.append(args)
            return None

        perform_check(check, "a", "b")
        assert seen == [("a", "b")]

    def test_returns_message(self) -> None:
        assert perform_check(_due) == "time to act"
        assert perform_check(_holds) is None

    @pytest.mark.parametrize("value", ["1", "", "yes"])
    def test_skip_switch(self, monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        monkeypatch.setenv("TODO_OR_DIE_SKIP", value)
        assert perform_check(_due) is None
        assert perform_check(_bad_input) is None

    def test_runtime_errors_warn_and_pass(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert perform_check(_explodes) is None
        err = capsys.readouterr().err
        assert "something went wrong" in err
        assert "dns failure" in err

    def test_invalid_usage_propagates(self) -> None:
        with pytest.raises(InvalidUsageError):
            perform_check(_bad_input)

    def test_unexpected_exceptions_propagate(self) -> None:
        def broken(*args: object) -> Optional[str]:
            raise RuntimeError("bug")

        with pytest.raises(RuntimeError):
            perform_check(broken)


class TestEnforce:
    def test_raises_when_due(self) -> None:
        with pytest.raises(TodoDue, match="time to act"):
            enforce(_due)

    def test_silent_when_fact_holds(self) -> None:
        enforce(_holds)


class TestPublicApi:
    def test_after_past(self) -> None:
        with pytest.raises(TodoDue, match="1990-01-01 is now in the past"):
            todo_or_die.after("1990-01-01")

    def test_after_future(self) -> None:
        todo_or_die.after("3000-01-01")

    def test_skip_switch(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TODO_OR_DIE_SKIP", "1")
        todo_or_die.after("1990-01-01")

    def test_issue_closed(self, backend, default_client) -> None:
        backend.route(ISSUE_URL, body={"closed_at": "2021-01-01T00:00:00Z"})
        with pytest.raises(TodoDue, match="tokio-rs/axum#1 is closed"):
            todo_or_die.issue_closed("tokio-rs/axum#1")

    def test_api_errors_do_not_fail(self, backend, default_client, capsys) -> None:
        backend.route(ISSUE_URL, status=403, body=b"rate limited")
        todo_or_die.issue_closed("tokio-rs/axum#1")
        assert "rate limited" in capsys.readouterr().err

    def test_skip_means_no_network(self, backend, default_client, monkeypatch) -> None:
        monkeypatch.setenv("TODO_OR_DIE_SKIP", "1")
        todo_or_die.issue_closed("tokio-rs/axum#1")
        assert backend.calls == 0

    def test_exception_types(self) -> None:
        assert issubclass(TodoDue, todo_or_die.TodoOrDieError)
        assert issubclass(HTTPStatusError, todo_or_die.TodoOrDieError)

    def test_undecodable_body_warns(self, backend, default_client, capsys) -> None:
        import httpx

        def broken_gzip(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                stream=httpx.ByteStream(b"junk"),
                headers={"content-encoding": "gzip"},
            )

        backend.routes[ISSUE_URL] = broken_gzip
        todo_or_die.issue_closed("tokio-rs/axum#1")
        assert "something went wrong" in capsys.readouterr().err
