"""Tests for the GitHub issue and pull-request checks."""

from __future__ import annotations

import pytest

from todo_or_die.checks import github
from todo_or_die.checks.github import OrgRepoIssue, parse_reference
from todo_or_die.exceptions import HTTPStatusError, InvalidUsageError

ISSUE_URL = "https://api.github.com/repos/tokio-rs/axum/issues/1"
PR_URL = "https://api.github.com/repos/tokio-rs/axum/pulls/266"


class TestParseReference:
    def test_valid(self) -> None:
        assert parse_reference("tokio-rs/axum#1") == OrgRepoIssue("tokio-rs", "axum", 1)

    def test_str_round_trips(self) -> None:
        assert str(parse_reference("rust-lang/rust#1563")) == "rust-lang/rust#1563"

    @pytest.mark.parametrize(
        "reference",
        ["", "tokio-rs", "tokio-rs/axum", "tokio-rs/axum#", "tokio-rs/axum#abc", "axum#1", "a/b/c#1"],
    )
    def test_invalid(self, reference: str) -> None:
        with pytest.raises(InvalidUsageError, match="org/repo#issue"):
            parse_reference(reference)


class TestIssueClosed:
    def test_open_issue(self, backend, default_client) -> None:
        backend.route(ISSUE_URL, body={"number": 1, "closed_at": None})
        assert github.issue_closed("tokio-rs/axum#1") is None

    def test_closed_issue(self, backend, default_client) -> None:
        backend.route(ISSUE_URL, body={"number": 1, "closed_at": "2021-07-30T12:00:00Z"})
        assert github.issue_closed("tokio-rs/axum#1") == (
            "tokio-rs/axum#1 is closed. Time to act on this!"
        )

    def test_missing_closed_at_means_open(self, backend, default_client) -> None:
        backend.route(ISSUE_URL, body={"number": 1})
        assert github.issue_closed("tokio-rs/axum#1") is None

    def test_sends_github_accept_header(self, backend, default_client) -> None:
        backend.route(ISSUE_URL, body={"closed_at": None})
        github.issue_closed("tokio-rs/axum#1")
        assert backend.requests[0].headers["accept"] == "application/vnd.github.v3+json"
        assert "authorization" not in backend.requests[0].headers

    def test_sends_token(self, backend, default_client, monkeypatch) -> None:
        monkeypatch.setenv("GITHUB_TOKEN", "fallback")
        monkeypatch.setenv("TODO_OR_DIE_GITHUB_TOKEN", "preferred")
        backend.route(ISSUE_URL, body={"closed_at": None})

        github.issue_closed("tokio-rs/axum#1")
        assert backend.requests[0].headers["authorization"] == "Bearer preferred"

    def test_result_is_cached(self, backend, default_client) -> None:
        backend.route(ISSUE_URL, body={"closed_at": None})
        github.issue_closed("tokio-rs/axum#1")
        github.issue_closed("tokio-rs/axum#1")
        assert backend.calls == 1

    def test_not_found_raises(self, backend, default_client) -> None:
        with pytest.raises(HTTPStatusError) as info:
            github.issue_closed("tokio-rs/axum#1")
        assert info.value.status_code == 404


class TestPrClosed:
    def test_open_pr(self, backend, default_client) -> None:
        backend.route(PR_URL, body={"state": "open"})
        assert github.pr_closed("tokio-rs/axum#266") is None

    def test_closed_pr(self, backend, default_client) -> None:
        backend.route(PR_URL, body={"state": "closed", "merged": True})
        assert github.pr_closed("tokio-rs/axum#266") == (
            "tokio-rs/axum#266 is closed. Time to act on this!"
        )

    def test_invalid_reference_makes_no_request(self, backend, default_client) -> None:
        with pytest.raises(InvalidUsageError):
            github.pr_closed("tokio-rs/axum")
        assert backend.calls == 0
