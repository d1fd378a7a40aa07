from __future__ import annotations

from typing import List, Optional
from urllib.parse import quote

from codebase_cli.bodies import XMLBody
from codebase_cli.client import CodebaseClient
from codebase_cli.mapper import decode, decode_list
from codebase_cli.models import Branch, Commit, Hook, MergeRequest, Repository


def _repo_path(project: str, repo: str) -> str:
    return f"/{project}/{repo}"


def _ref_path(value: str) -> str:
    # Refs and file paths keep their slashes (feature/x, src/main.py).
    return quote(value, safe="/")


# --- Repositories ---


async def list_repositories(client: CodebaseClient, project: str) -> List[Repository]:
    xml = await client.get(f"/{project}/repositories")
    return decode_list(Repository, xml)


async def show_repository(
    client: CodebaseClient, project: str, repo: str
) -> Repository:
    xml = await client.get(_repo_path(project, repo))
    return decode(Repository, xml)


async def create_repository(
    client: CodebaseClient, project: str, name: str, scm: str = "git"
) -> Repository:
    body = XMLBody("repository").add("name", name).add("scm", scm)
    xml = await client.post(f"/{project}/repositories", body.render())
    return decode(Repository, xml)


async def delete_repository(client: CodebaseClient, project: str, repo: str) -> None:
    await client.delete(_repo_path(project, repo))


# --- Commits, deployments, files ---


async def list_commits(
    client: CodebaseClient,
    project: str,
    repo: str,
    git_ref: str,
    path: Optional[str] = None,
) -> List[Commit]:
    """Commits reachable from `git_ref`, optionally limited to one file/folder."""
    url = f"{_repo_path(project, repo)}/commits/{_ref_path(git_ref)}"
    if path:
        url = f"{url}/{_ref_path(path.lstrip('/'))}"
    xml = await client.get(url)
    return decode_list(Commit, xml)


async def create_deployment(
    client: CodebaseClient,
    project: str,
    repo: str,
    *,
    branch: str,
    revision: str,
    servers: str,
    environment: Optional[str] = None,
) -> None:
    """Record a deployment; `servers` is a comma-separated list."""
    body = (
        XMLBody("deployment")
        .add("branch", branch)
        .add("revision", revision)
        .add("servers", servers)
        .add("environment", environment)
    )
    await client.post(f"{_repo_path(project, repo)}/deployments", body.render())


async def get_file(
    client: CodebaseClient, project: str, repo: str, git_ref: str, path: str
) -> str:
    """Raw file contents at `git_ref`; returned as-is, not parsed."""
    return await client.get(
        f"{_repo_path(project, repo)}/blob/{_ref_path(git_ref)}/"
        f"{_ref_path(path.lstrip('/'))}"
    )


# --- Hooks and branches ---


async def list_hooks(client: CodebaseClient, project: str, repo: str) -> List[Hook]:
    xml = await client.get(f"{_repo_path(project, repo)}/hooks")
    return decode_list(Hook, xml)


async def create_hook(
    client: CodebaseClient,
    project: str,
    repo: str,
    url: str,
    *,
    username: Optional[str] = None,
    password: Optional[str] = None,
) -> Hook:
    body = (
        XMLBody("repository-hook")
        .add("url", url)
        .add("username", username)
        .add("password", password)
    )
    xml = await client.post(f"{_repo_path(project, repo)}/hooks", body.render())
    return decode(Hook, xml)


async def list_branches(
    client: CodebaseClient, project: str, repo: str
) -> List[Branch]:
    xml = await client.get(f"{_repo_path(project, repo)}/branches")
    return decode_list(Branch, xml)


# --- Merge requests ---


def _mr_path(project: str, repo: str, mr_id: Optional[int] = None) -> str:
    base = f"{_repo_path(project, repo)}/merge_requests"
    return base if mr_id is None else f"{base}/{mr_id}"


async def list_merge_requests(
    client: CodebaseClient, project: str, repo: str
) -> List[MergeRequest]:
    xml = await client.get(_mr_path(project, repo))
    return decode_list(MergeRequest, xml)


async def show_merge_request(
    client: CodebaseClient, project: str, repo: str, mr_id: int
) -> MergeRequest:
    xml = await client.get(_mr_path(project, repo, mr_id))
    return decode(MergeRequest, xml)


async def create_merge_request(
    client: CodebaseClient,
    project: str,
    repo: str,
    *,
    source_ref: str,
    target_ref: str,
    subject: str,
) -> MergeRequest:
    body = (
        XMLBody("merge-request")
        .add("source-ref", source_ref)
        .add("target-ref", target_ref)
        .add("subject", subject)
    )
    xml = await client.post(_mr_path(project, repo), body.render())
    return decode(MergeRequest, xml)


async def comment_merge_request(
    client: CodebaseClient, project: str, repo: str, mr_id: int, content: str
) -> None:
    body = XMLBody("merge-request-comment").add("content", content)
    await client.post(f"{_mr_path(project, repo, mr_id)}/comment", body.render())


async def _mr_action(
    client: CodebaseClient, project: str, repo: str, mr_id: int, action: str
) -> None:
    # Action endpoints take no payload; an empty body keeps Content-Length set.
    await client.post(f"{_mr_path(project, repo, mr_id)}/{action}", "")


async def close_merge_request(
    client: CodebaseClient, project: str, repo: str, mr_id: int
) -> None:
    await _mr_action(client, project, repo, mr_id, "close")


async def reopen_merge_request(
    client: CodebaseClient, project: str, repo: str, mr_id: int
) -> None:
    await _mr_action(client, project, repo, mr_id, "reopen")


async def merge_merge_request(
    client: CodebaseClient, project: str, repo: str, mr_id: int
) -> None:
    """Ask the service to perform an automatic merge."""
    await _mr_action(client, project, repo, mr_id, "merge")


async def reassign_merge_request(
    client: CodebaseClient, project: str, repo: str, mr_id: int, user_id: int
) -> None:
    body = XMLBody("merge-request").add("user-id", user_id)
    await client.post(f"{_mr_path(project, repo, mr_id)}/reassign", body.render())
