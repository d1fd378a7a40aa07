from __future__ import annotations

from typing import Optional

import typer

from codebase_cli import resources
from codebase_cli.client import CodebaseClient
from codebase_cli.git_context import resolve_project, resolve_project_repo
from codebase_cli.output import (
    bold,
    dim,
    print_fields,
    print_json,
    print_message,
    print_table,
)

from . import prs
from ._common import get_state, project_option, repo_option, run

app = typer.Typer(no_args_is_help=True, help="Manage repositories.")


@app.command("list")
def list_cmd(ctx: typer.Context, project: Optional[str] = project_option()) -> None:
    """List repositories for a project."""
    state = get_state(ctx)

    async def action(client: CodebaseClient) -> None:
        repos = await resources.list_repositories(client, resolve_project(project))
        if state.json:
            print_json(repos)
            return
        print_table(
            "Repositories",
            ["Permalink", "Name", "Clone URL"],
            [(r.permalink, r.name, r.clone_url) for r in repos],
            empty="No repositories found.",
        )

    run(action)


@app.command("show")
def show_cmd(
    ctx: typer.Context,
    project: Optional[str] = project_option(),
    repo: Optional[str] = repo_option(),
) -> None:
    """Show a specific repository."""
    state = get_state(ctx)

    async def action(client: CodebaseClient) -> None:
        r = await resources.show_repository(client, *resolve_project_repo(project, repo))
        if state.json:
            print_json(r)
            return
        print_fields(
            [
                ("Name", bold(r.name)),
                ("Permalink", r.permalink),
                ("Clone URL", r.clone_url),
                ("Last commit", r.last_commit_ref),
                ("Disk usage", r.disk_usage),
            ]
        )

    run(action)


@app.command("create")
def create_cmd(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Repository name"),
    project: Optional[str] = project_option(),
    scm: str = typer.Option("git", "--scm", help="SCM type"),
) -> None:
    """Create a new repository."""
    state = get_state(ctx)

    async def action(client: CodebaseClient) -> None:
        r = await resources.create_repository(
            client, resolve_project(project), name, scm=scm
        )
        if state.json:
            print_json(r)
            return
        print_message("Created repository: ", bold(r.name), " ", dim(f"({r.permalink})"))

    run(action)


@app.command("delete")
def delete_cmd(
    repo: str = typer.Argument(..., help="Repository permalink"),
    project: Optional[str] = project_option(),
) -> None:
    """Delete a repository."""

    async def action(client: CodebaseClient) -> None:
        await resources.delete_repository(client, resolve_project(project), repo)
        print_message(f"Deleted repository: {repo}")

    run(action)


@app.command("commits")
def commits_cmd(
    ctx: typer.Context,
    git_ref: str = typer.Argument(..., help="Branch, tag or commit SHA"),
    path: Optional[str] = typer.Option(
        None, "--path", help="Only commits touching this file or folder"
    ),
    project: Optional[str] = project_option(),
    repo: Optional[str] = repo_option(),
) -> None:
    """List commits for a ref."""
    state = get_state(ctx)

    async def action(client: CodebaseClient) -> None:
        p, r = resolve_project_repo(project, repo)
        commits = await resources.list_commits(client, p, r, git_ref, path)
        if state.json:
            print_json(commits)
            return
        print_table(
            f"Commits on {git_ref}",
            ["Ref", "Author", "Date", "Message"],
            [
                (
                    (c.commit_ref or "")[:10],
                    c.author_name,
                    dim(c.committed_at),
                    c.headline,
                )
                for c in commits
            ],
            empty="No commits found.",
        )

    run(action)


@app.command("deploy")
def deploy_cmd(
    branch: str = typer.Argument(..., help="Branch being deployed"),
    revision: str = typer.Argument(..., help="Commit SHA being deployed"),
    servers: str = typer.Argument(..., help="Comma-separated server names"),
    environment: Optional[str] = typer.Option(
        None, "--environment", help="e.g. production, staging"
    ),
    project: Optional[str] = project_option(),
    repo: Optional[str] = repo_option(),
) -> None:
    """Record a deployment."""

    async def action(client: CodebaseClient) -> None:
        p, r = resolve_project_repo(project, repo)
        await resources.create_deployment(
            client,
            p,
            r,
            branch=branch,
            revision=revision,
            servers=servers,
            environment=environment,
        )
        print_message(f"Deployment recorded: {branch}@{revision[:10]} to {servers}")

    run(action)


@app.command("file")
def file_cmd(
    git_ref: str = typer.Argument(..., help="Branch, tag or commit SHA"),
    path: str = typer.Argument(..., help="Path to the file"),
    project: Optional[str] = project_option(),
    repo: Optional[str] = repo_option(),
) -> None:
    """Print a file's contents at a ref."""

    async def action(client: CodebaseClient) -> None:
        p, r = resolve_project_repo(project, repo)
        content = await resources.get_file(client, p, r, git_ref, path)
        typer.echo(content, nl=not content.endswith("\n"))

    run(action)


@app.command("hooks")
def hooks_cmd(
    ctx: typer.Context,
    project: Optional[str] = project_option(),
    repo: Optional[str] = repo_option(),
) -> None:
    """List hooks for a repository."""
    state = get_state(ctx)

    async def action(client: CodebaseClient) -> None:
        hooks = await resources.list_hooks(client, *resolve_project_repo(project, repo))
        if state.json:
            print_json(hooks)
            return
        print_table(
            "Hooks",
            ["ID", "URL", "Username"],
            [(h.id, h.url, h.username) for h in hooks],
            empty="No hooks.",
        )

    run(action)


@app.command("create-hook")
def create_hook_cmd(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="URL to receive the hook"),
    username: Optional[str] = typer.Option(None, "--username"),
    password: Optional[str] = typer.Option(None, "--password"),
    project: Optional[str] = project_option(),
    repo: Optional[str] = repo_option(),
) -> None:
    """Create a hook for a repository."""
    state = get_state(ctx)

    async def action(client: CodebaseClient) -> None:
        p, r = resolve_project_repo(project, repo)
        hook = await resources.create_hook(
            client, p, r, url, username=username, password=password
        )
        if state.json:
            print_json(hook)
            return
        print_message(f"Created hook #{hook.id or 0}: {hook.url or url}")

    run(action)


@app.command("branches")
def branches_cmd(
    ctx: typer.Context,
    project: Optional[str] = project_option(),
    repo: Optional[str] = repo_option(),
) -> None:
    """List branches for a repository."""
    state = get_state(ctx)

    async def action(client: CodebaseClient) -> None:
        branches = await resources.list_branches(
            client, *resolve_project_repo(project, repo)
        )
        if state.json:
            print_json(branches)
            return
        print_table("Branches", ["Name"], [(b.name,) for b in branches])

    run(action)


# `cb repo` aliases for the merge-request commands of `cb pr`.
for _name, _command in (
    ("merge-requests", prs.list_cmd),
    ("show-mr", prs.show_cmd),
    ("create-mr", prs.create_cmd),
    ("comment-mr", prs.comment_cmd),
    ("close-mr", prs.close_cmd),
    ("reopen-mr", prs.reopen_cmd),
    ("merge", prs.merge_cmd),
    ("reassign-mr", prs.reassign_cmd),
):
    app.command(_name)(_command)
