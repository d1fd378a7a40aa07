from __future__ import annotations

from typing import Iterable, List, Optional

from codebase_cli.bodies import XMLBody
from codebase_cli.client import CodebaseClient
from codebase_cli.mapper import decode, decode_list
from codebase_cli.models import Project, ProjectGroup, ProjectUser


async def list_projects(client: CodebaseClient) -> List[Project]:
    xml = await client.get("/projects")
    return decode_list(Project, xml)


async def show_project(client: CodebaseClient, permalink: str) -> Project:
    xml = await client.get(f"/{permalink}")
    return decode(Project, xml)


async def create_project(client: CodebaseClient, name: str) -> Project:
    body = XMLBody("project").add("name", name)
    xml = await client.post("/create_project", body.render())
    return decode(Project, xml)


async def update_project(
    client: CodebaseClient,
    project_id: int | str,
    *,
    name: Optional[str] = None,
    status: Optional[str] = None,
) -> Project:
    """Send only the supplied fields; status is e.g. "active" or "archived"."""
    body = XMLBody("project").add("name", name).add("status", status)
    xml = await client.put(f"/project/{project_id}", body.render())
    return decode(Project, xml)


async def delete_project(client: CodebaseClient, permalink: str) -> None:
    await client.delete(f"/{permalink}")


async def list_project_groups(client: CodebaseClient) -> List[ProjectGroup]:
    xml = await client.get("/project_groups")
    return decode_list(ProjectGroup, xml)


async def list_project_users(
    client: CodebaseClient, project: str
) -> List[ProjectUser]:
    xml = await client.get(f"/{project}/assignments")
    return decode_list(ProjectUser, xml)


async def assign_project_users(
    client: CodebaseClient, project: str, user_ids: Iterable[int]
) -> None:
    body = XMLBody("users")
    for user_id in user_ids:
        body.add_body(XMLBody("user").add("id", user_id))
    await client.post(f"/{project}/assignments", body.render())
