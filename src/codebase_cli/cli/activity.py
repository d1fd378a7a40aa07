from __future__ import annotations

from typing import List, Optional

import typer

from codebase_cli import resources
from codebase_cli.client import CodebaseClient
from codebase_cli.git_context import resolve_project
from codebase_cli.models import Event
from codebase_cli.output import dim, print_json, print_table

from ._common import get_state, project_option, run

app = typer.Typer(no_args_is_help=True, help="View activity feeds.")

RAW_HELP = "Return raw event data"
SINCE_HELP = 'Only events since this time, e.g. "2026-01-15 00:00:00 +0000"'


def _print_events(events: List[Event]) -> None:
    print_table(
        None,
        ["Type", "When", "Title"],
        [(e.event_type, dim(e.timestamp), e.title) for e in events],
        empty="No activity.",
    )


@app.command("account")
def account_cmd(
    ctx: typer.Context,
    raw: bool = typer.Option(False, "--raw", help=RAW_HELP),
    since: Optional[str] = typer.Option(None, "--since", help=SINCE_HELP),
    page: Optional[int] = typer.Option(None, "--page", min=1),
) -> None:
    """Show the account-wide activity feed."""
    state = get_state(ctx)

    async def action(client: CodebaseClient) -> None:
        events = await resources.account_activity(
            client, raw=raw, since=since, page=page
        )
        if state.json:
            print_json(events)
            return
        _print_events(events)

    run(action)


@app.command("project")
def project_cmd(
    ctx: typer.Context,
    project: Optional[str] = project_option(),
    raw: bool = typer.Option(False, "--raw", help=RAW_HELP),
    since: Optional[str] = typer.Option(None, "--since", help=SINCE_HELP),
    page: Optional[int] = typer.Option(None, "--page", min=1),
) -> None:
    """Show a project's activity feed."""
    state = get_state(ctx)

    async def action(client: CodebaseClient) -> None:
        events = await resources.project_activity(
            client, resolve_project(project), raw=raw, since=since, page=page
        )
        if state.json:
            print_json(events)
            return
        _print_events(events)

    run(action)
