from __future__ import annotations

from typing import Optional

import typer

from codebase_cli import resources
from codebase_cli.client import CodebaseClient
from codebase_cli.git_context import resolve_project
from codebase_cli.output import bold, colorize_status, print_json, print_message, print_table

from ._common import get_state, project_option, run

app = typer.Typer(no_args_is_help=True, help="Manage milestones.")


@app.command("list")
def list_cmd(ctx: typer.Context, project: Optional[str] = project_option()) -> None:
    """List milestones for a project."""
    state = get_state(ctx)

    async def action(client: CodebaseClient) -> None:
        milestones = await resources.list_milestones(client, resolve_project(project))
        if state.json:
            print_json(milestones)
            return
        print_table(
            "Milestones",
            ["ID", "Name", "Status", "Start", "Deadline"],
            [
                (m.id, m.name, colorize_status(m.status), m.start_at, m.deadline)
                for m in milestones
            ],
            empty="No milestones found.",
        )

    run(action)


@app.command("create")
def create_cmd(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Milestone name"),
    project: Optional[str] = project_option(),
    description: Optional[str] = typer.Option(None, "--description"),
    start_at: Optional[str] = typer.Option(
        None, "--start-at", help="Start date (YYYY-MM-DD)"
    ),
    deadline: Optional[str] = typer.Option(
        None, "--deadline", help="Deadline (YYYY-MM-DD)"
    ),
    responsible_user_id: Optional[int] = typer.Option(None, "--responsible-user-id"),
    parent_id: Optional[int] = typer.Option(
        None, "--parent-id", help="Parent milestone ID"
    ),
    status: Optional[str] = typer.Option(
        None, "--status", help="active, completed or cancelled"
    ),
) -> None:
    """Create a new milestone."""
    state = get_state(ctx)

    async def action(client: CodebaseClient) -> None:
        m = await resources.create_milestone(
            client,
            resolve_project(project),
            name=name,
            description=description,
            start_at=start_at,
            deadline=deadline,
            responsible_user_id=responsible_user_id,
            parent_id=parent_id,
            status=status,
        )
        if state.json:
            print_json(m)
            return
        print_message(f"Created milestone #{m.id or 0}: ", bold(m.name))

    run(action)


@app.command("update")
def update_cmd(
    ctx: typer.Context,
    milestone_id: int = typer.Argument(..., help="Milestone ID"),
    project: Optional[str] = project_option(),
    name: Optional[str] = typer.Option(None, "--name"),
    description: Optional[str] = typer.Option(None, "--description"),
    start_at: Optional[str] = typer.Option(None, "--start-at"),
    deadline: Optional[str] = typer.Option(None, "--deadline"),
    responsible_user_id: Optional[int] = typer.Option(None, "--responsible-user-id"),
    parent_id: Optional[int] = typer.Option(None, "--parent-id"),
    status: Optional[str] = typer.Option(None, "--status"),
) -> None:
    """Update a milestone; only the given fields are sent."""
    state = get_state(ctx)

    async def action(client: CodebaseClient) -> None:
        m = await resources.update_milestone(
            client,
            resolve_project(project),
            milestone_id,
            name=name,
            description=description,
            start_at=start_at,
            deadline=deadline,
            responsible_user_id=responsible_user_id,
            parent_id=parent_id,
            status=status,
        )
        if state.json:
            print_json(m)
            return
        print_message(f"Updated milestone #{m.id or milestone_id}: ", bold(m.name))

    run(action)
