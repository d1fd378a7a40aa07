"""Shared plumbing for `cb` commands: global state, client lifecycle, errors."""

from __future__ import annotations

import asyncio
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterator

import typer

from codebase_cli.client import CodebaseClient
from codebase_cli.core.config import ConfigError, create_client_from_config
from codebase_cli.errors import CodebaseClientError
from codebase_cli.git_context import ContextError
from codebase_cli.output import print_error

log = logging.getLogger("codebase_cli.cli")

Action = Callable[[CodebaseClient], Awaitable[None]]

PROJECT_HELP = "Project permalink (detected from the git remote if omitted)"
REPO_HELP = "Repository permalink (detected from the git remote if omitted)"


@dataclass
class State:
    json: bool = False
    verbose: bool = False


def get_state(ctx: typer.Context) -> State:
    obj = ctx.find_object(State)
    return obj if obj is not None else State()


def project_option() -> Any:
    return typer.Option(None, "--project", "-p", help=PROJECT_HELP)


def repo_option() -> Any:
    return typer.Option(None, "--repo", "-r", help=REPO_HELP)


@contextmanager
def handle_errors() -> Iterator[None]:
    """Print `Error: ...` on stderr and exit 1 for any expected failure."""
    try:
        yield
    except (ConfigError, ContextError, CodebaseClientError) as exc:
        log.debug("command.failed", exc_info=exc)
        print_error(str(exc))
        raise typer.Exit(code=1) from exc


async def _with_client(action: Action) -> None:
    async with create_client_from_config() as client:
        await action(client)


def run(action: Action) -> None:
    """Run one command body against a configured client."""
    with handle_errors():
        asyncio.run(_with_client(action))


__all__ = [
    "State",
    "get_state",
    "project_option",
    "repo_option",
    "handle_errors",
    "run",
]
