from __future__ import annotations

from typing import Optional

import typer

from codebase_cli import resources
from codebase_cli.client import CodebaseClient
from codebase_cli.git_context import current_branch, resolve_project_repo
from codebase_cli.output import (
    bold,
    colorize_bool,
    colorize_mr_status,
    print_fields,
    print_json,
    print_message,
    print_table,
)

from ._common import get_state, project_option, repo_option, run

app = typer.Typer(no_args_is_help=True, help="Work with merge requests.")


@app.command("list")
def list_cmd(
    ctx: typer.Context,
    project: Optional[str] = project_option(),
    repo: Optional[str] = repo_option(),
) -> None:
    """List merge requests."""
    state = get_state(ctx)

    async def action(client: CodebaseClient) -> None:
        mrs = await resources.list_merge_requests(
            client, *resolve_project_repo(project, repo)
        )
        if state.json:
            print_json(mrs)
            return
        print_table(
            "Merge requests",
            ["ID", "Status", "Source", "Target", "Subject"],
            [
                (
                    m.id,
                    colorize_mr_status(m.status),
                    m.source_ref,
                    m.target_ref,
                    m.subject,
                )
                for m in mrs
            ],
            empty="No merge requests.",
        )

    run(action)


@app.command("show")
def show_cmd(
    ctx: typer.Context,
    mr_id: int = typer.Argument(..., help="Merge request ID"),
    project: Optional[str] = project_option(),
    repo: Optional[str] = repo_option(),
) -> None:
    """Show a merge request."""
    state = get_state(ctx)

    async def action(client: CodebaseClient) -> None:
        p, r = resolve_project_repo(project, repo)
        m = await resources.show_merge_request(client, p, r, mr_id)
        if state.json:
            print_json(m)
            return
        print_fields(
            [
                ("Subject", bold(m.subject)),
                ("Status", colorize_mr_status(m.status)),
                ("Branches", f"{m.source_ref or ''} -> {m.target_ref or ''}"),
                ("Mergeable", colorize_bool(m.can_merge, "yes", "no")),
                ("Created", m.created_at),
                ("Updated", m.updated_at),
            ]
        )

    run(action)


@app.command("create")
def create_cmd(
    ctx: typer.Context,
    subject: str = typer.Argument(..., help="Merge request subject"),
    source_ref: Optional[str] = typer.Option(
        None, "--source", help="Branch to merge from (default: current branch)"
    ),
    target_ref: str = typer.Option("master", "--target", help="Branch to merge into"),
    project: Optional[str] = project_option(),
    repo: Optional[str] = repo_option(),
) -> None:
    """Open a merge request."""
    state = get_state(ctx)

    async def action(client: CodebaseClient) -> None:
        p, r = resolve_project_repo(project, repo)
        source = source_ref or current_branch()
        if not source:
            raise typer.BadParameter(
                "could not detect the current branch", param_hint="--source"
            )
        m = await resources.create_merge_request(
            client, p, r, source_ref=source, target_ref=target_ref, subject=subject
        )
        if state.json:
            print_json(m)
            return
        print_message(f"Created merge request #{m.id or 0}: ", bold(m.subject))

    run(action)


@app.command("comment")
def comment_cmd(
    mr_id: int = typer.Argument(..., help="Merge request ID"),
    content: str = typer.Argument(..., help="Comment text"),
    project: Optional[str] = project_option(),
    repo: Optional[str] = repo_option(),
) -> None:
    """Comment on a merge request."""

    async def action(client: CodebaseClient) -> None:
        p, r = resolve_project_repo(project, repo)
        await resources.comment_merge_request(client, p, r, mr_id, content)
        print_message(f"Commented on merge request #{mr_id}")

    run(action)


@app.command("merge")
def merge_cmd(
    mr_id: int = typer.Argument(..., help="Merge request ID"),
    project: Optional[str] = project_option(),
    repo: Optional[str] = repo_option(),
) -> None:
    """Merge a merge request."""

    async def action(client: CodebaseClient) -> None:
        p, r = resolve_project_repo(project, repo)
        await resources.merge_merge_request(client, p, r, mr_id)
        print_message(f"Merged merge request #{mr_id}")

    run(action)


@app.command("close")
def close_cmd(
    mr_id: int = typer.Argument(..., help="Merge request ID"),
    project: Optional[str] = project_option(),
    repo: Optional[str] = repo_option(),
) -> None:
    """Close a merge request."""

    async def action(client: CodebaseClient) -> None:
        p, r = resolve_project_repo(project, repo)
        await resources.close_merge_request(client, p, r, mr_id)
        print_message(f"Closed merge request #{mr_id}")

    run(action)


@app.command("reopen")
def reopen_cmd(
    mr_id: int = typer.Argument(..., help="Merge request ID"),
    project: Optional[str] = project_option(),
    repo: Optional[str] = repo_option(),
) -> None:
    """Reopen a closed merge request."""

    async def action(client: CodebaseClient) -> None:
        p, r = resolve_project_repo(project, repo)
        await resources.reopen_merge_request(client, p, r, mr_id)
        print_message(f"Reopened merge request #{mr_id}")

    run(action)


@app.command("reassign")
def reassign_cmd(
    mr_id: int = typer.Argument(..., help="Merge request ID"),
    user_id: int = typer.Argument(..., help="User ID of the new assignee"),
    project: Optional[str] = project_option(),
    repo: Optional[str] = repo_option(),
) -> None:
    """Reassign a merge request to another user."""

    async def action(client: CodebaseClient) -> None:
        p, r = resolve_project_repo(project, repo)
        await resources.reassign_merge_request(client, p, r, mr_id, user_id)
        print_message(f"Reassigned merge request #{mr_id} to user {user_id}")

    run(action)
