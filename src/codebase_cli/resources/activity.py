from __future__ import annotations

from typing import List, Optional, Tuple
from urllib.parse import urlencode

from codebase_cli.client import CodebaseClient
from codebase_cli.mapper import decode_list
from codebase_cli.models import Event


def build_activity_path(
    base: str,
    *,
    raw: bool = False,
    since: Optional[str] = None,
    page: Optional[int] = None,
) -> str:
    """Append the feed's own filters (raw, since, page), in that order."""
    params: List[Tuple[str, str]] = []
    if raw:
        params.append(("raw", "true"))
    if since:
        params.append(("since", since))
    if page is not None:
        params.append(("page", str(page)))
    return f"{base}?{urlencode(params)}" if params else base


async def account_activity(
    client: CodebaseClient,
    *,
    raw: bool = False,
    since: Optional[str] = None,
    page: Optional[int] = None,
) -> List[Event]:
    path = build_activity_path("/activity", raw=raw, since=since, page=page)
    return decode_list(Event, await client.get(path))


async def project_activity(
    client: CodebaseClient,
    project: str,
    *,
    raw: bool = False,
    since: Optional[str] = None,
    page: Optional[int] = None,
) -> List[Event]:
    path = build_activity_path(f"/{project}/activity", raw=raw, since=since, page=page)
    return decode_list(Event, await client.get(path))
