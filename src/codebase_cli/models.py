from __future__ import annotations

from typing import Annotated, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field

from .codec import (
    OptionalBool,
    OptionalFloat,
    OptionalInt,
    OptionalStr,
    RequiredStr,
    blank_record_to_none,
)


def to_kebab(name: str) -> str:
    """ticket_id -> ticket-id (the service's element naming)."""
    return name.replace("_", "-")


class XMLRecord(BaseModel):
    """
    Base model for one XML response shape.
    - Field names are snake_case; XML element names are their kebab-case
      aliases, with explicit Field(alias=...) where the names differ
    - Unknown elements are ignored so service additions don't break decoding
    - Every scalar is optional; absent and empty elements both become None
    """

    xml_root: ClassVar[str] = ""
    xml_wrapper: ClassVar[str] = ""

    model_config = ConfigDict(
        alias_generator=to_kebab, populate_by_name=True, extra="ignore"
    )

    def to_wire_dict(self) -> dict:
        """JSON-ready mapping keyed by the service's element names."""
        return self.model_dump(mode="json", by_alias=True)


# --- Projects ---


class Project(XMLRecord):
    xml_root: ClassVar[str] = "project"
    xml_wrapper: ClassVar[str] = "projects"

    name: OptionalStr = None
    account_name: OptionalStr = None
    permalink: OptionalStr = None
    project_id: OptionalInt = None
    # The service emits <group-id></group-id> for ungrouped projects.
    group_id: OptionalInt = None
    overview: OptionalStr = None
    start_page: OptionalStr = None
    status: OptionalStr = None
    icon: OptionalInt = None
    disk_usage: OptionalInt = None
    total_tickets: OptionalInt = None
    open_tickets: OptionalInt = None
    closed_tickets: OptionalInt = None


class ProjectGroup(XMLRecord):
    xml_root: ClassVar[str] = "project-group"
    xml_wrapper: ClassVar[str] = "project-groups"

    id: OptionalInt = None
    label: OptionalStr = None


class ProjectUser(XMLRecord):
    xml_root: ClassVar[str] = "user"
    xml_wrapper: ClassVar[str] = "users"

    id: OptionalInt = None
    first_name: OptionalStr = None
    last_name: OptionalStr = None
    username: OptionalStr = None
    email_address: OptionalStr = None
    company: OptionalStr = None


# --- Repositories ---


class Repository(XMLRecord):
    xml_root: ClassVar[str] = "repository"
    xml_wrapper: ClassVar[str] = "repositories"

    name: OptionalStr = None
    permalink: OptionalStr = None
    disk_usage: OptionalInt = None
    last_commit_ref: OptionalStr = None
    clone_url: OptionalStr = None
    source: OptionalStr = None
    sync: OptionalBool = None
    last_sync_at: OptionalStr = None


class Commit(XMLRecord):
    xml_root: ClassVar[str] = "commit"
    xml_wrapper: ClassVar[str] = "commits"

    commit_ref: OptionalStr = Field(default=None, alias="ref")
    message: OptionalStr = None
    author_name: OptionalStr = None
    author_email: OptionalStr = None
    authored_at: OptionalStr = None
    committer_name: OptionalStr = None
    committer_email: OptionalStr = None
    committed_at: OptionalStr = None
    parent_refs: OptionalStr = None
    tree_ref: OptionalStr = None
    author_user: OptionalStr = None
    committer_user: OptionalStr = None

    @property
    def headline(self) -> str:
        return self.message.splitlines()[0] if self.message else ""


class Deployment(XMLRecord):
    xml_root: ClassVar[str] = "deployment"

    branch: OptionalStr = None
    revision: OptionalStr = None
    environment: OptionalStr = None
    servers: OptionalStr = None


class Hook(XMLRecord):
    xml_root: ClassVar[str] = "repository-hook"
    xml_wrapper: ClassVar[str] = "repository-hooks"

    id: OptionalInt = None
    url: OptionalStr = None
    username: OptionalStr = None
    password: OptionalStr = None


class Branch(XMLRecord):
    xml_root: ClassVar[str] = "branch"
    xml_wrapper: ClassVar[str] = "branches"

    name: RequiredStr = ""


class MergeRequest(XMLRecord):
    xml_root: ClassVar[str] = "merge-request"
    xml_wrapper: ClassVar[str] = "merge-requests"

    id: OptionalInt = None
    source_ref: OptionalStr = None
    target_ref: OptionalStr = None
    subject: OptionalStr = None
    status: OptionalStr = None
    user_id: OptionalInt = None
    created_at: OptionalStr = None
    updated_at: OptionalStr = None
    can_merge: OptionalBool = None


class MergeRequestComment(XMLRecord):
    xml_root: ClassVar[str] = "merge-request-comment"

    content: OptionalStr = None
    user_id: OptionalInt = None
    action: OptionalStr = None
    created_at: OptionalStr = None


# --- Tickets ---


class Ticket(XMLRecord):
    xml_root: ClassVar[str] = "ticket"
    xml_wrapper: ClassVar[str] = "tickets"

    ticket_id: OptionalInt = None
    summary: OptionalStr = None
    ticket_type: OptionalStr = None
    description: OptionalStr = None
    priority_id: OptionalInt = None
    status_id: OptionalInt = None
    category_id: OptionalInt = None
    milestone_id: OptionalInt = None
    assignee_id: OptionalInt = None
    reporter_id: OptionalInt = None
    assignee: OptionalStr = None
    reporter: OptionalStr = None
    tags: OptionalStr = None


class NoteChanges(XMLRecord):
    xml_root: ClassVar[str] = "changes"

    status_id: OptionalInt = None
    priority_id: OptionalInt = None
    category_id: OptionalInt = None
    assignee_id: OptionalInt = None
    milestone_id: OptionalInt = None
    subject: OptionalStr = None


class TicketNote(XMLRecord):
    xml_root: ClassVar[str] = "ticket-note"
    xml_wrapper: ClassVar[str] = "ticket-notes"

    id: OptionalInt = None
    content: OptionalStr = None
    time_added: OptionalStr = None
    changes: Annotated[Optional[NoteChanges], blank_record_to_none] = None
    private: OptionalBool = None


class TicketStatus(XMLRecord):
    xml_root: ClassVar[str] = "ticketing-status"
    xml_wrapper: ClassVar[str] = "ticketing-statuses"

    id: OptionalInt = None
    name: OptionalStr = None
    background_colour: OptionalStr = None
    order: OptionalInt = None
    treat_as_closed: OptionalBool = None


class TicketPriority(XMLRecord):
    xml_root: ClassVar[str] = "ticketing-priority"
    xml_wrapper: ClassVar[str] = "ticketing-priorities"

    id: OptionalInt = None
    name: OptionalStr = None
    colour: OptionalStr = None
    default: OptionalBool = None
    position: OptionalInt = None


class TicketCategory(XMLRecord):
    xml_root: ClassVar[str] = "ticketing-category"
    xml_wrapper: ClassVar[str] = "ticketing-categories"

    id: OptionalInt = None
    name: OptionalStr = None


class TicketType(XMLRecord):
    xml_root: ClassVar[str] = "ticketing-type"
    xml_wrapper: ClassVar[str] = "ticketing-types"

    id: OptionalInt = None
    name: OptionalStr = None
    icon: OptionalStr = None


class Watcher(XMLRecord):
    xml_root: ClassVar[str] = "watcher"
    xml_wrapper: ClassVar[str] = "watchers"

    watcher: OptionalInt = None


# --- Milestones ---


class Milestone(XMLRecord):
    xml_root: ClassVar[str] = "ticketing-milestone"
    xml_wrapper: ClassVar[str] = "ticketing-milestones"

    id: OptionalInt = None
    name: OptionalStr = None
    description: OptionalStr = None
    start_at: OptionalStr = None
    deadline: OptionalStr = None
    parent_id: OptionalInt = None
    estimated_time: OptionalFloat = None
    responsible_user_id: OptionalInt = None
    status: OptionalStr = None


# --- Activity feed ---


class Event(XMLRecord):
    xml_root: ClassVar[str] = "event"
    xml_wrapper: ClassVar[str] = "events"

    title: OptionalStr = None
    event_type: OptionalStr = Field(default=None, alias="type")
    timestamp: OptionalStr = None
    html_title: OptionalStr = None
    html_text: OptionalStr = None
    # Common extra properties across event types
    content: OptionalStr = None
    project_permalink: OptionalStr = None
    project_name: OptionalStr = None
    subject: OptionalStr = None
    number: OptionalInt = None
    name: OptionalStr = None


__all__ = [
    "XMLRecord",
    "to_kebab",
    "Project",
    "ProjectGroup",
    "ProjectUser",
    "Repository",
    "Commit",
    "Deployment",
    "Hook",
    "Branch",
    "MergeRequest",
    "MergeRequestComment",
    "Ticket",
    "NoteChanges",
    "TicketNote",
    "TicketStatus",
    "TicketPriority",
    "TicketCategory",
    "TicketType",
    "Watcher",
    "Milestone",
    "Event",
]
