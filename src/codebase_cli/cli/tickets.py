from __future__ import annotations

from typing import List, Optional

import typer

from codebase_cli import resources
from codebase_cli.client import CodebaseClient
from codebase_cli.git_context import resolve_project
from codebase_cli.models import NoteChanges, Ticket
from codebase_cli.output import (
    bold,
    colorize_bool,
    colorize_ticket_type,
    print_json,
    print_message,
    print_table,
)

from ._common import get_state, project_option, run

app = typer.Typer(no_args_is_help=True, help="Manage tickets.")


def _print_tickets(tickets: List[Ticket], title: str) -> None:
    print_table(
        title,
        ["#", "Type", "Summary", "Assignee"],
        [
            (t.ticket_id, colorize_ticket_type(t.ticket_type), t.summary, t.assignee)
            for t in tickets
        ],
        empty="No tickets found.",
    )


@app.command("list")
def list_cmd(ctx: typer.Context, project: Optional[str] = project_option()) -> None:
    """List all tickets for a project."""
    state = get_state(ctx)

    async def action(client: CodebaseClient) -> None:
        permalink = resolve_project(project)
        tickets = await resources.list_tickets(client, permalink)
        if state.json:
            print_json(tickets)
            return
        _print_tickets(tickets, f"Tickets in {permalink}")

    run(action)


@app.command("search")
def search_cmd(
    ctx: typer.Context,
    query: str = typer.Argument(..., help='Search query, e.g. "status:open"'),
    project: Optional[str] = project_option(),
) -> None:
    """Search tickets with the service's query syntax."""
    state = get_state(ctx)

    async def action(client: CodebaseClient) -> None:
        permalink = resolve_project(project)
        tickets = await resources.search_tickets(client, permalink, query)
        if state.json:
            print_json(tickets)
            return
        _print_tickets(tickets, f"Tickets matching {query!r}")

    run(action)


@app.command("create")
def create_cmd(
    ctx: typer.Context,
    summary: str = typer.Argument(..., help="Ticket summary"),
    project: Optional[str] = project_option(),
    ticket_type: str = typer.Option(
        "task", "--type", help="Ticket type: bug, enhancement or task"
    ),
    priority_id: Optional[int] = typer.Option(None, "--priority-id"),
    status_id: Optional[int] = typer.Option(None, "--status-id"),
    description: Optional[str] = typer.Option(None, "--description"),
    assignee_id: Optional[int] = typer.Option(None, "--assignee-id"),
    category_id: Optional[int] = typer.Option(None, "--category-id"),
    milestone_id: Optional[int] = typer.Option(None, "--milestone-id"),
    tags: Optional[str] = typer.Option(None, "--tags", help="Space-separated tags"),
) -> None:
    """Create a new ticket."""
    state = get_state(ctx)

    async def action(client: CodebaseClient) -> None:
        t = await resources.create_ticket(
            client,
            resolve_project(project),
            summary=summary,
            ticket_type=ticket_type,
            priority_id=priority_id,
            status_id=status_id,
            description=description,
            assignee_id=assignee_id,
            category_id=category_id,
            milestone_id=milestone_id,
            tags=tags,
        )
        if state.json:
            print_json(t)
            return
        print_message(f"Created ticket #{t.ticket_id or 0}: ", bold(t.summary))

    run(action)


@app.command("notes")
def notes_cmd(
    ctx: typer.Context,
    ticket_id: int = typer.Argument(..., help="Ticket number"),
    project: Optional[str] = project_option(),
) -> None:
    """List notes for a ticket."""
    state = get_state(ctx)

    async def action(client: CodebaseClient) -> None:
        notes = await resources.list_ticket_notes(
            client, resolve_project(project), ticket_id
        )
        if state.json:
            print_json(notes)
            return
        print_table(
            f"Notes on #{ticket_id}",
            ["ID", "Added", "Content"],
            [(n.id, n.time_added, n.content) for n in notes],
            empty="No notes.",
        )

    run(action)


@app.command("add-note")
def add_note_cmd(
    ctx: typer.Context,
    ticket_id: int = typer.Argument(..., help="Ticket number"),
    project: Optional[str] = project_option(),
    content: Optional[str] = typer.Option(None, "--content", help="Note content"),
    private: bool = typer.Option(
        False, "--private", help="Only visible to your company"
    ),
    status_id: Optional[int] = typer.Option(None, "--status-id"),
    priority_id: Optional[int] = typer.Option(None, "--priority-id"),
    assignee_id: Optional[int] = typer.Option(None, "--assignee-id"),
    category_id: Optional[int] = typer.Option(None, "--category-id"),
    milestone_id: Optional[int] = typer.Option(None, "--milestone-id"),
    subject: Optional[str] = typer.Option(None, "--subject", help="New summary"),
) -> None:
    """Add a note to a ticket, optionally changing its fields."""
    state = get_state(ctx)
    changed = {
        "status_id": status_id,
        "priority_id": priority_id,
        "assignee_id": assignee_id,
        "category_id": category_id,
        "milestone_id": milestone_id,
        "subject": subject,
    }
    # Blank text options validate to None and do not count as a change.
    changes: Optional[NoteChanges] = NoteChanges(**changed)
    if not changes.model_dump(exclude_none=True):
        changes = None

    async def action(client: CodebaseClient) -> None:
        note = await resources.create_ticket_note(
            client,
            resolve_project(project),
            ticket_id,
            content=content,
            changes=changes,
            private=private,
        )
        if state.json:
            print_json(note)
            return
        print_message(f"Added note #{note.id or 0} to ticket #{ticket_id}")

    run(action)


@app.command("watchers")
def watchers_cmd(
    ctx: typer.Context,
    ticket_id: int = typer.Argument(..., help="Ticket number"),
    project: Optional[str] = project_option(),
) -> None:
    """List watchers for a ticket."""
    state = get_state(ctx)

    async def action(client: CodebaseClient) -> None:
        watchers = await resources.list_watchers(
            client, resolve_project(project), ticket_id
        )
        if state.json:
            print_json(watchers)
            return
        print_table(
            f"Watchers on #{ticket_id}",
            ["User ID"],
            [(w.watcher,) for w in watchers],
            empty="No watchers.",
        )

    run(action)


@app.command("set-watchers")
def set_watchers_cmd(
    ticket_id: int = typer.Argument(..., help="Ticket number"),
    user_ids: List[int] = typer.Argument(..., help="User IDs to watch the ticket"),
    project: Optional[str] = project_option(),
) -> None:
    """Set watchers for a ticket (overwrites existing)."""

    async def action(client: CodebaseClient) -> None:
        await resources.set_watchers(
            client, resolve_project(project), ticket_id, user_ids
        )
        print_message(f"Set {len(user_ids)} watchers on ticket #{ticket_id}")

    run(action)


@app.command("statuses")
def statuses_cmd(ctx: typer.Context, project: Optional[str] = project_option()) -> None:
    """List ticket statuses."""
    state = get_state(ctx)

    async def action(client: CodebaseClient) -> None:
        statuses = await resources.list_statuses(client, resolve_project(project))
        if state.json:
            print_json(statuses)
            return
        print_table(
            "Statuses",
            ["ID", "Name", "Closed"],
            [
                (s.id, s.name, colorize_bool(s.treat_as_closed, "yes", "no"))
                for s in statuses
            ],
        )

    run(action)


@app.command("priorities")
def priorities_cmd(
    ctx: typer.Context, project: Optional[str] = project_option()
) -> None:
    """List ticket priorities."""
    state = get_state(ctx)

    async def action(client: CodebaseClient) -> None:
        priorities = await resources.list_priorities(client, resolve_project(project))
        if state.json:
            print_json(priorities)
            return
        print_table(
            "Priorities",
            ["ID", "Name", "Default"],
            [
                (p.id, p.name, colorize_bool(p.default, "yes", "no"))
                for p in priorities
            ],
        )

    run(action)


@app.command("categories")
def categories_cmd(
    ctx: typer.Context, project: Optional[str] = project_option()
) -> None:
    """List ticket categories."""
    state = get_state(ctx)

    async def action(client: CodebaseClient) -> None:
        categories = await resources.list_categories(client, resolve_project(project))
        if state.json:
            print_json(categories)
            return
        print_table("Categories", ["ID", "Name"], [(c.id, c.name) for c in categories])

    run(action)


@app.command("types")
def types_cmd(ctx: typer.Context, project: Optional[str] = project_option()) -> None:
    """List ticket types."""
    state = get_state(ctx)

    async def action(client: CodebaseClient) -> None:
        types = await resources.list_types(client, resolve_project(project))
        if state.json:
            print_json(types)
            return
        print_table(
            "Types",
            ["ID", "Name"],
            [(t.id, colorize_ticket_type(t.name)) for t in types],
        )

    run(action)
