"""crates.io latest-version check."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from todo_or_die.checks.versions import matches, parse_requirement, parse_version
from todo_or_die.client.sync_client import fetch_json
from todo_or_die.exceptions import InvalidUsageError, TodoOrDieError
from todo_or_die.models import OutboundRequest

API_ROOT = "https://crates.io/api/v1/crates"


class CrateVersion(BaseModel):
    num: str


class CrateResponse(BaseModel):
    versions: list[CrateVersion]


def crates_io(crate: str, requirement: str) -> Optional[str]:
    """Due once the most recently published version of *crate* satisfies *requirement*.

    Example::

        crates_io("tokio", ">=10.0")  # None until tokio 10 ships
    """
    crate = crate.strip()
    if not crate:
        raise InvalidUsageError("Crate name must not be empty")
    version_req = parse_requirement(requirement)

    data = fetch_json(OutboundRequest(uri=f"{API_ROOT}/{crate}"), CrateResponse)
    if not data.versions:
        raise TodoOrDieError(f"No versions found for crate {crate}")

    latest = parse_version(data.versions[0].num)
    if matches(version_req, latest):
        return f"Latest version of {crate} is {data.versions[0].num}. Time to act on this!"
    return None
