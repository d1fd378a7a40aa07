"""Entry point for the `cb` command."""

from __future__ import annotations

import logging
import re
import webbrowser
from typing import Any, Dict, List, Optional

import typer

from codebase_cli import __version__, resources
from codebase_cli.client import CodebaseClient
from codebase_cli.core.config import Credentials, load_credentials, save_credentials
from codebase_cli.core.logging import setup_logging
from codebase_cli.git_context import resolve_project
from codebase_cli.models import Event, Project
from codebase_cli.output import (
    bold,
    colorize_status,
    dim,
    print_json,
    print_message,
    print_table,
)

from . import activity, milestones, projects, prs, repos, tickets
from ._common import State, get_state, handle_errors, run

app = typer.Typer(
    name="cb",
    no_args_is_help=True,
    help="A command-line client for the CodebaseHQ API.",
)

app.add_typer(projects.app, name="project")
app.add_typer(repos.app, name="repo")
app.add_typer(prs.app, name="pr")
app.add_typer(tickets.app, name="ticket")
app.add_typer(milestones.app, name="milestone")
app.add_typer(activity.app, name="activity")

log = logging.getLogger("codebase_cli.cli")

RECENT_ACTIVITY_LIMIT = 10

_TICKET_NUMBER = re.compile(r"[+-]?\d+")


@app.callback()
def main_callback(
    ctx: typer.Context,
    json_output: bool = typer.Option(
        False, "--json", help="Print machine-readable JSON instead of tables."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log every request to stderr."
    ),
) -> None:
    setup_logging("DEBUG" if verbose else "WARNING")
    log.debug("command.start", extra={"command": ctx.invoked_subcommand})
    ctx.obj = State(json=json_output, verbose=verbose)


@app.command()
def login(
    api_username: str = typer.Argument(..., help="API username (account/username)"),
    api_key: str = typer.Argument(..., help="API key"),
) -> None:
    """Store API credentials."""
    with handle_errors():
        path = save_credentials(Credentials(api_username=api_username, api_key=api_key))
    print_message(f"Credentials saved for {api_username} at {path}")


@app.command()
def version() -> None:
    """Display version information."""
    typer.echo(f"cb {__version__}")


def project_summary(p: Project) -> Dict[str, Any]:
    return {
        "name": p.name or "",
        "permalink": p.permalink or "",
        "status": p.status or "",
        "open_tickets": p.open_tickets or 0,
        "closed_tickets": p.closed_tickets or 0,
        "total_tickets": p.total_tickets or 0,
    }


def activity_item(e: Event) -> Dict[str, Any]:
    return {
        "event_type": e.event_type or "",
        "timestamp": e.timestamp or "",
        "title": e.title or "",
    }


def build_dashboard(
    project_list: List[Project], events: List[Event]
) -> Dict[str, List[Dict[str, Any]]]:
    return {
        "projects": [project_summary(p) for p in project_list],
        "recent_activity": [
            activity_item(e) for e in events[:RECENT_ACTIVITY_LIMIT]
        ],
    }


@app.command()
def status(ctx: typer.Context) -> None:
    """Dashboard: every project with ticket counts, plus recent activity."""
    state = get_state(ctx)

    async def action(client: CodebaseClient) -> None:
        project_list = await resources.list_projects(client)
        events = await resources.account_activity(client)
        dashboard = build_dashboard(project_list, events)
        if state.json:
            print_json(dashboard)
            return

        print_table(
            "Projects",
            ["Permalink", "Name", "Status", "Open", "Closed"],
            [
                (
                    dim(p["permalink"]),
                    bold(p["name"]),
                    colorize_status(p["status"]),
                    p["open_tickets"],
                    p["closed_tickets"],
                )
                for p in dashboard["projects"]
            ],
            empty="No projects found.",
        )
        print_table(
            "Recent activity",
            ["Type", "When", "Title"],
            [
                (a["event_type"], dim(a["timestamp"]), a["title"])
                for a in dashboard["recent_activity"]
            ],
            empty="No recent activity.",
        )

    run(action)


def build_browse_url(account: str, project: str, target: Optional[str] = None) -> str:
    """A numeric target is a ticket; anything else is a repository permalink."""
    url = f"https://{account}.codebasehq.com/projects/{project}"
    if target is None:
        return url
    if _TICKET_NUMBER.fullmatch(target):
        return f"{url}/tickets/{target}"
    return f"{url}/repositories/{target}"


@app.command()
def browse(
    project: Optional[str] = typer.Argument(
        None, help="Project permalink (detected from the git remote if omitted)"
    ),
    target: Optional[str] = typer.Argument(
        None, help="Ticket number or repository permalink"
    ),
) -> None:
    """Open a project, ticket or repository in the web browser."""
    with handle_errors():
        creds = load_credentials()
        url = build_browse_url(creds.account, resolve_project(project), target)
    print_message(f"Opening {url}")
    webbrowser.open(url)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
