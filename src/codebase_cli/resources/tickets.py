from __future__ import annotations

from typing import Iterable, List, Optional
from urllib.parse import quote

from codebase_cli.bodies import XMLBody
from codebase_cli.client import CodebaseClient
from codebase_cli.mapper import decode, decode_list
from codebase_cli.models import (
    NoteChanges,
    Ticket,
    TicketCategory,
    TicketNote,
    TicketPriority,
    TicketStatus,
    TicketType,
    Watcher,
)


async def list_tickets(client: CodebaseClient, project: str) -> List[Ticket]:
    xml = await client.get(f"/{project}/tickets")
    return decode_list(Ticket, xml)


async def search_tickets(
    client: CodebaseClient, project: str, query: str
) -> List[Ticket]:
    """Search with the service's query syntax, e.g. "status:open assignee:me"."""
    xml = await client.get(f"/{project}/tickets?query={quote(query, safe='')}")
    return decode_list(Ticket, xml)


async def create_ticket(
    client: CodebaseClient,
    project: str,
    *,
    summary: str,
    ticket_type: str,
    priority_id: Optional[int] = None,
    status_id: Optional[int] = None,
    description: Optional[str] = None,
    assignee_id: Optional[int] = None,
    category_id: Optional[int] = None,
    milestone_id: Optional[int] = None,
    tags: Optional[str] = None,
) -> Ticket:
    body = (
        XMLBody("ticket")
        .add("summary", summary)
        .add("ticket-type", ticket_type)
        .add("priority-id", priority_id)
        .add("status-id", status_id)
        .add_text("description", description)
        .add("assignee-id", assignee_id)
        .add("category-id", category_id)
        .add("milestone-id", milestone_id)
        .add("tags", tags)
    )
    xml = await client.post(f"/{project}/tickets", body.render())
    return decode(Ticket, xml)


async def list_ticket_notes(
    client: CodebaseClient, project: str, ticket_id: int
) -> List[TicketNote]:
    xml = await client.get(f"/{project}/tickets/{ticket_id}/notes")
    return decode_list(TicketNote, xml)


def _changes_body(changes: NoteChanges) -> XMLBody:
    return XMLBody("changes").add_all(
        [
            ("status-id", changes.status_id),
            ("priority-id", changes.priority_id),
            ("category-id", changes.category_id),
            ("assignee-id", changes.assignee_id),
            ("milestone-id", changes.milestone_id),
            ("subject", changes.subject),
        ]
    )


async def create_ticket_note(
    client: CodebaseClient,
    project: str,
    ticket_id: int,
    *,
    content: Optional[str] = None,
    changes: Optional[NoteChanges] = None,
    private: bool = False,
) -> TicketNote:
    """
    Add a note to a ticket. A note can carry content, field changes
    (status, priority, assignee...), or both.
    """
    body = (
        XMLBody("ticket-note")
        .add_text("content", content)
        .add_flag("private", private)
        .add_body(_changes_body(changes) if changes is not None else None)
    )
    xml = await client.post(f"/{project}/tickets/{ticket_id}/notes", body.render())
    return decode(TicketNote, xml)


async def list_watchers(
    client: CodebaseClient, project: str, ticket_id: int
) -> List[Watcher]:
    xml = await client.get(f"/{project}/tickets/{ticket_id}/watchers")
    return decode_list(Watcher, xml)


async def set_watchers(
    client: CodebaseClient, project: str, ticket_id: int, user_ids: Iterable[int]
) -> None:
    body = XMLBody("watchers").add_each("watcher", user_ids)
    await client.post(f"/{project}/tickets/{ticket_id}/watchers", body.render())


async def list_statuses(client: CodebaseClient, project: str) -> List[TicketStatus]:
    xml = await client.get(f"/{project}/tickets/statuses")
    return decode_list(TicketStatus, xml)


async def list_priorities(
    client: CodebaseClient, project: str
) -> List[TicketPriority]:
    xml = await client.get(f"/{project}/tickets/priorities")
    return decode_list(TicketPriority, xml)


async def list_categories(
    client: CodebaseClient, project: str
) -> List[TicketCategory]:
    xml = await client.get(f"/{project}/tickets/categories")
    return decode_list(TicketCategory, xml)


async def list_types(client: CodebaseClient, project: str) -> List[TicketType]:
    xml = await client.get(f"/{project}/tickets/types")
    return decode_list(TicketType, xml)
