"""Terminal rendering for the `cb` CLI (rich tables, JSON, colour helpers)."""

from __future__ import annotations

import json
from typing import Any, Iterable, Optional, Sequence, Tuple, Union

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .models import XMLRecord

console = Console()
err_console = Console(stderr=True)

# Plain strings are never parsed as rich markup, so service data like
# "[bug] crash" renders verbatim.
Cell = Union[str, int, float, Text, None]

_STATUS_STYLES = {
    "active": "green",
    "open": "green",
    "new": "green",
    "on_hold": "yellow",
    "on hold": "yellow",
    "in_progress": "yellow",
    "in progress": "yellow",
    "archived": "red",
    "closed": "red",
    "completed": "red",
    "resolved": "red",
    "cancelled": "dim red",
    "rejected": "dim red",
}

_PRIORITY_STYLES = {
    "critical": "bold red",
    "high": "red",
    "normal": "yellow",
    "medium": "yellow",
    "low": "green",
}

_TICKET_TYPE_STYLES = {
    "bug": "red",
    "enhancement": "cyan",
    "feature": "cyan",
    "task": "blue",
}

_MR_STATUS_STYLES = {
    "new": "green",
    "open": "green",
    "merged": "magenta",
    "closed": "red",
    "rejected": "red",
}


def _lookup(value: Optional[str], styles: dict) -> Text:
    value = value or ""
    return Text(value, style=styles.get(value.lower(), ""))


def colorize_status(status: Optional[str]) -> Text:
    return _lookup(status, _STATUS_STYLES)


def colorize_priority(priority: Optional[str]) -> Text:
    return _lookup(priority, _PRIORITY_STYLES)


def colorize_ticket_type(ticket_type: Optional[str]) -> Text:
    return _lookup(ticket_type, _TICKET_TYPE_STYLES)


def colorize_mr_status(status: Optional[str]) -> Text:
    return _lookup(status, _MR_STATUS_STYLES)


def colorize_bool(value: Optional[bool], true_label: str, false_label: str) -> Text:
    return Text(true_label, style="green") if value else Text(false_label, style="red")


def dim(text: Optional[str]) -> Text:
    return Text(text or "", style="dim")


def bold(text: Optional[str]) -> Text:
    return Text(text or "", style="bold")


def to_text(cell: Cell) -> Text:
    if isinstance(cell, Text):
        return cell
    return Text("" if cell is None else str(cell))


# --- JSON --------------------------------------------------------------------


def to_jsonable(data: Any) -> Any:
    """Records become dicts keyed by their XML element names."""
    if isinstance(data, XMLRecord):
        return data.to_wire_dict()
    if isinstance(data, dict):
        return {k: to_jsonable(v) for k, v in data.items()}
    if isinstance(data, (list, tuple)):
        return [to_jsonable(item) for item in data]
    return data


def render_json(data: Any) -> str:
    return json.dumps(to_jsonable(data), indent=2, ensure_ascii=False)


def print_json(data: Any) -> None:
    # Plain echo: rich would wrap long lines inside the document.
    typer.echo(render_json(data))


# --- Human output ------------------------------------------------------------


def build_table(title: Optional[str], columns: Sequence[str]) -> Table:
    table = Table(title=title)
    for i, col in enumerate(columns):
        if i == 0:
            table.add_column(col, style="cyan", no_wrap=True)
        else:
            table.add_column(col)
    return table


def print_table(
    title: Optional[str],
    columns: Sequence[str],
    rows: Iterable[Sequence[Cell]],
    *,
    empty: str = "Nothing found.",
) -> None:
    rows = list(rows)
    if not rows:
        console.print(dim(empty))
        return
    table = build_table(title, columns)
    for row in rows:
        table.add_row(*(to_text(cell) for cell in row))
    console.print(table)


def print_fields(pairs: Iterable[Tuple[str, Cell]]) -> None:
    """Aligned `Label: value` lines for a single record."""
    pairs = list(pairs)
    width = max((len(label) for label, _ in pairs), default=0) + 1
    for label, value in pairs:
        console.print(
            Text.assemble(bold(f"{label}:".ljust(width)), " ", to_text(value)),
            soft_wrap=True,
        )


def print_message(*parts: Cell) -> None:
    console.print(Text.assemble(*(to_text(p) for p in parts)), soft_wrap=True)


def print_error(message: str) -> None:
    err_console.print(
        Text.assemble(Text("Error:", style="red"), " ", message), soft_wrap=True
    )


__all__ = [
    "console",
    "err_console",
    "colorize_status",
    "colorize_priority",
    "colorize_ticket_type",
    "colorize_mr_status",
    "colorize_bool",
    "dim",
    "bold",
    "to_text",
    "to_jsonable",
    "render_json",
    "print_json",
    "build_table",
    "print_table",
    "print_fields",
    "print_message",
    "print_error",
]
