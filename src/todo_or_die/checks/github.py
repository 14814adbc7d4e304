"""GitHub issue and pull-request checks.

References have the form ``org/repo#number``. Requests go through the
cache-first :func:`~todo_or_die.client.sync_client.fetch_json`, with
``TODO_OR_DIE_GITHUB_TOKEN`` (or ``GITHUB_TOKEN``) sent as a bearer token
when set, which gives access to private repos and more generous rate limits.
"""

from __future__ import annotations

import re
from typing import NamedTuple, Optional

from pydantic import BaseModel

from todo_or_die.client.sync_client import fetch_json
from todo_or_die.config import github_token
from todo_or_die.exceptions import InvalidUsageError
from todo_or_die.models import OutboundRequest

API_ROOT = "https://api.github.com"
ACCEPT = "application/vnd.github.v3+json"

_REFERENCE = re.compile(r"^(?P<org>[^/#\s]+)/(?P<repo>[^/#\s]+)#(?P<number>\d+)$")


class OrgRepoIssue(NamedTuple):
    org: str
    repo: str
    number: int

    def __str__(self) -> str:
        return f"{self.org}/{self.repo}#{self.number}"


class Issue(BaseModel):
    closed_at: Optional[str] = None


class PullRequest(BaseModel):
    state: str


def parse_reference(reference: str) -> OrgRepoIssue:
    """Split ``org/repo#number``.

    Raises:
        InvalidUsageError: If *reference* is not of that form.
    """
    match = _REFERENCE.match(reference.strip())
    if match is None:
        raise InvalidUsageError("Parse error. Input must be of the form `org/repo#issue`")
    return OrgRepoIssue(match["org"], match["repo"], int(match["number"]))


def _request(path: str) -> OutboundRequest:
    request = OutboundRequest(uri=f"{API_ROOT}{path}", headers={"Accept": ACCEPT})
    token = github_token()
    if token:
        request = request.with_header("Authorization", f"Bearer {token}")
    return request


def issue_closed(reference: str) -> Optional[str]:
    """Due once the issue has been closed."""
    ref = parse_reference(reference)
    issue = fetch_json(_request(f"/repos/{ref.org}/{ref.repo}/issues/{ref.number}"), Issue)
    if issue.closed_at is not None:
        return f"{ref} is closed. Time to act on this!"
    return None


def pr_closed(reference: str) -> Optional[str]:
    """Due once the pull request has been closed or merged."""
    ref = parse_reference(reference)
    pr = fetch_json(_request(f"/repos/{ref.org}/{ref.repo}/pulls/{ref.number}"), PullRequest)
    if pr.state == "closed":
        return f"{ref} is closed. Time to act on this!"
    return None
