"""
Resource operations for the Codebase API, one module per resource family.

Each operation builds a path (and XML body for writes), sends it through
CodebaseClient and decodes the response with the mapper.
"""

from .activity import account_activity, build_activity_path, project_activity
from .milestones import create_milestone, list_milestones, update_milestone
from .projects import (
    assign_project_users,
    create_project,
    delete_project,
    list_project_groups,
    list_project_users,
    list_projects,
    show_project,
    update_project,
)
from .repositories import (
    close_merge_request,
    comment_merge_request,
    create_deployment,
    create_hook,
    create_merge_request,
    create_repository,
    delete_repository,
    get_file,
    list_branches,
    list_commits,
    list_hooks,
    list_merge_requests,
    list_repositories,
    merge_merge_request,
    reassign_merge_request,
    reopen_merge_request,
    show_merge_request,
    show_repository,
)
from .tickets import (
    create_ticket,
    create_ticket_note,
    list_categories,
    list_priorities,
    list_statuses,
    list_ticket_notes,
    list_tickets,
    list_types,
    list_watchers,
    search_tickets,
    set_watchers,
)

__all__ = [
    "account_activity",
    "project_activity",
    "build_activity_path",
    "list_milestones",
    "create_milestone",
    "update_milestone",
    "list_projects",
    "show_project",
    "create_project",
    "update_project",
    "delete_project",
    "list_project_groups",
    "list_project_users",
    "assign_project_users",
    "list_repositories",
    "show_repository",
    "create_repository",
    "delete_repository",
    "list_commits",
    "create_deployment",
    "get_file",
    "list_hooks",
    "create_hook",
    "list_branches",
    "list_merge_requests",
    "show_merge_request",
    "create_merge_request",
    "comment_merge_request",
    "close_merge_request",
    "reopen_merge_request",
    "merge_merge_request",
    "reassign_merge_request",
    "list_tickets",
    "search_tickets",
    "create_ticket",
    "list_ticket_notes",
    "create_ticket_note",
    "list_watchers",
    "set_watchers",
    "list_statuses",
    "list_priorities",
    "list_categories",
    "list_types",
]
