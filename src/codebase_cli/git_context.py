"""Infer the Codebase project/repository from the local git checkout."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from typing import List, Optional, Tuple

HOST = "codebasehq.com"


class ContextError(ValueError):
    """Raised when a project/repository is neither given nor detectable."""


@dataclass(frozen=True)
class GitContext:
    project: str
    repo: Optional[str] = None


def _git(*args: str) -> Optional[str]:
    try:
        proc = subprocess.run(
            ["git", *args], capture_output=True, text=True, check=False
        )
    except OSError:
        # git is not installed
        return None
    if proc.returncode != 0:
        return None
    out = proc.stdout.strip()
    return out or None


def _split(path: str) -> List[str]:
    if path.endswith(".git"):
        path = path[: -len(".git")]
    return path.split("/")


def parse_codebase_remote(url: str) -> Optional[GitContext]:
    """
    SSH:   git@codebasehq.com:account/project/repo.git
    HTTPS: https://account.codebasehq.com/project/repo.git
    """
    if f"{HOST}:" in url:
        parts = _split(url.rsplit(":", 1)[-1])
        if len(parts) == 3:
            return GitContext(project=parts[1], repo=parts[2])
        if len(parts) == 2:
            return GitContext(project=parts[1])
        return None

    if f"{HOST}/" in url:
        parts = _split(url.split(f"{HOST}/", 1)[1])
        if len(parts) == 2:
            return GitContext(project=parts[0], repo=parts[1])
        if len(parts) == 1 and parts[0]:
            return GitContext(project=parts[0])
        return None

    return None


def detect(remote: str = "origin") -> Optional[GitContext]:
    url = _git("config", "--get", f"remote.{remote}.url")
    return parse_codebase_remote(url) if url else None


def current_branch() -> Optional[str]:
    branch = _git("rev-parse", "--abbrev-ref", "HEAD")
    return None if branch == "HEAD" else branch


def resolve_project(project: Optional[str]) -> str:
    if project:
        return project
    ctx = detect()
    if ctx is None:
        raise ContextError(
            "No project specified and could not detect one from the git remote."
        )
    return ctx.project


def resolve_project_repo(
    project: Optional[str], repo: Optional[str]
) -> Tuple[str, str]:
    """Fill in whichever of project/repo was omitted from the origin remote."""
    if project and repo:
        return project, repo
    ctx = detect()
    project = project or (ctx.project if ctx else None)
    repo = repo or (ctx.repo if ctx else None)
    if not project or not repo:
        raise ContextError(
            "No project/repository specified and could not detect them from "
            "the git remote. Pass --project and --repo."
        )
    return project, repo


__all__ = [
    "ContextError",
    "GitContext",
    "parse_codebase_remote",
    "detect",
    "current_branch",
    "resolve_project",
    "resolve_project_repo",
]
