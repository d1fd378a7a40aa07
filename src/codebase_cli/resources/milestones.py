from __future__ import annotations

from typing import List, Optional

from codebase_cli.bodies import XMLBody
from codebase_cli.client import CodebaseClient
from codebase_cli.mapper import decode, decode_list
from codebase_cli.models import Milestone


def _milestone_body(
    *,
    name: Optional[str],
    description: Optional[str],
    start_at: Optional[str],
    deadline: Optional[str],
    responsible_user_id: Optional[int],
    parent_id: Optional[int],
    status: Optional[str],
) -> XMLBody:
    return XMLBody("ticketing-milestone").add_all(
        [
            ("name", name),
            ("description", description),
            ("start-at", start_at),
            ("deadline", deadline),
            ("responsible-user-id", responsible_user_id),
            ("parent-id", parent_id),
            ("status", status),
        ]
    )


async def list_milestones(client: CodebaseClient, project: str) -> List[Milestone]:
    xml = await client.get(f"/{project}/milestones")
    return decode_list(Milestone, xml)


async def create_milestone(
    client: CodebaseClient,
    project: str,
    *,
    name: str,
    description: Optional[str] = None,
    start_at: Optional[str] = None,
    deadline: Optional[str] = None,
    responsible_user_id: Optional[int] = None,
    parent_id: Optional[int] = None,
    status: Optional[str] = None,
) -> Milestone:
    """Dates are YYYY-MM-DD; status is "active", "completed" or "cancelled"."""
    body = _milestone_body(
        name=name,
        description=description,
        start_at=start_at,
        deadline=deadline,
        responsible_user_id=responsible_user_id,
        parent_id=parent_id,
        status=status,
    )
    xml = await client.post(f"/{project}/milestones", body.render())
    return decode(Milestone, xml)


async def update_milestone(
    client: CodebaseClient,
    project: str,
    milestone_id: int,
    *,
    name: Optional[str] = None,
    description: Optional[str] = None,
    start_at: Optional[str] = None,
    deadline: Optional[str] = None,
    responsible_user_id: Optional[int] = None,
    parent_id: Optional[int] = None,
    status: Optional[str] = None,
) -> Milestone:
    body = _milestone_body(
        name=name,
        description=description,
        start_at=start_at,
        deadline=deadline,
        responsible_user_id=responsible_user_id,
        parent_id=parent_id,
        status=status,
    )
    xml = await client.put(f"/{project}/milestones/{milestone_id}", body.render())
    return decode(Milestone, xml)
