from __future__ import annotations

from typing import List, Optional

import typer

from codebase_cli import resources
from codebase_cli.client import CodebaseClient
from codebase_cli.output import (
    bold,
    colorize_status,
    dim,
    print_fields,
    print_json,
    print_message,
    print_table,
)

from ._common import get_state, run

app = typer.Typer(no_args_is_help=True, help="Manage projects.")


@app.command("list")
def list_cmd(ctx: typer.Context) -> None:
    """List all projects."""
    state = get_state(ctx)

    async def action(client: CodebaseClient) -> None:
        projects = await resources.list_projects(client)
        if state.json:
            print_json(projects)
            return
        print_table(
            "Projects",
            ["Permalink", "Name", "Status", "Open", "Closed"],
            [
                (
                    p.permalink,
                    p.name,
                    colorize_status(p.status),
                    p.open_tickets or 0,
                    p.closed_tickets or 0,
                )
                for p in projects
            ],
            empty="No projects found.",
        )

    run(action)


@app.command("show")
def show_cmd(
    ctx: typer.Context,
    permalink: str = typer.Argument(..., help="Project permalink"),
) -> None:
    """Show a specific project."""
    state = get_state(ctx)

    async def action(client: CodebaseClient) -> None:
        p = await resources.show_project(client, permalink)
        if state.json:
            print_json(p)
            return
        print_fields(
            [
                ("Name", bold(p.name)),
                ("Permalink", p.permalink),
                ("Status", colorize_status(p.status)),
                ("Overview", p.overview),
                (
                    "Tickets",
                    f"{p.open_tickets or 0} open / {p.closed_tickets or 0} closed"
                    f" / {p.total_tickets or 0} total",
                ),
            ]
        )

    run(action)


@app.command("create")
def create_cmd(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Project name"),
) -> None:
    """Create a new project."""
    state = get_state(ctx)

    async def action(client: CodebaseClient) -> None:
        p = await resources.create_project(client, name)
        if state.json:
            print_json(p)
            return
        print_message("Created project: ", bold(p.name), " ", dim(f"({p.permalink})"))

    run(action)


@app.command("update")
def update_cmd(
    ctx: typer.Context,
    permalink: str = typer.Argument(..., help="Project permalink or ID"),
    name: Optional[str] = typer.Option(None, "--name", help="New name"),
    status: Optional[str] = typer.Option(
        None, "--status", help="New status (active, on_hold, archived)"
    ),
) -> None:
    """Update a project's name and/or status."""
    state = get_state(ctx)

    async def action(client: CodebaseClient) -> None:
        p = await resources.update_project(client, permalink, name=name, status=status)
        if state.json:
            print_json(p)
            return
        print_message("Updated project: ", bold(p.name))

    run(action)


@app.command("delete")
def delete_cmd(
    permalink: str = typer.Argument(..., help="Project permalink"),
) -> None:
    """Delete a project."""

    async def action(client: CodebaseClient) -> None:
        await resources.delete_project(client, permalink)
        print_message(f"Deleted project: {permalink}")

    run(action)


@app.command("groups")
def groups_cmd(ctx: typer.Context) -> None:
    """List project groups."""
    state = get_state(ctx)

    async def action(client: CodebaseClient) -> None:
        groups = await resources.list_project_groups(client)
        if state.json:
            print_json(groups)
            return
        print_table(
            "Project groups",
            ["ID", "Label"],
            [(g.id, g.label) for g in groups],
            empty="No project groups found.",
        )

    run(action)


@app.command("users")
def users_cmd(
    ctx: typer.Context,
    project: str = typer.Argument(..., help="Project permalink"),
) -> None:
    """List users assigned to a project."""
    state = get_state(ctx)

    async def action(client: CodebaseClient) -> None:
        users = await resources.list_project_users(client, project)
        if state.json:
            print_json(users)
            return
        print_table(
            f"Users on {project}",
            ["ID", "Name", "Username", "Email"],
            [
                (
                    u.id,
                    " ".join(n for n in (u.first_name, u.last_name) if n),
                    u.username,
                    u.email_address,
                )
                for u in users
            ],
            empty="No users assigned.",
        )

    run(action)


@app.command("assign-users")
def assign_users_cmd(
    project: str = typer.Argument(..., help="Project permalink"),
    user_ids: List[int] = typer.Argument(..., help="User IDs to assign"),
) -> None:
    """Assign users to a project (overwrites existing assignments)."""

    async def action(client: CodebaseClient) -> None:
        await resources.assign_project_users(client, project, user_ids)
        print_message(f"Assigned {len(user_ids)} users to {project}")

    run(action)
