"""Human-readable and JSON output for validation failures."""

from __future__ import annotations

import json
from typing import Any, Iterable

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .message import Message, leaf_count
from .result import Failure, ValidationResult


def _rows(messages: Iterable[Message], depth: int = 0) -> Iterable[tuple[int, Message]]:
    for m in messages:
        yield depth, m
        yield from _rows(m.descendants, depth + 1)


def render_messages(messages: Iterable[Message], title: str | None = None) -> Table:
    """Build a table with one row per message; descendants are indented."""
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Path", style="cyan")
    table.add_column("Constraint", style="dim")
    table.add_column("Message")
    table.add_column("Input", style="dim", overflow="fold")

    for depth, m in _rows(messages):
        indent = "  " * depth
        path = m.path.full_name or "<root>"
        # message texts and inputs contain brackets that are not markup
        table.add_row(
            escape(f"{indent}{path}"),
            escape(m.constraint_id),
            escape(f"{indent}{m.text}"),
            escape(repr(m.input)),
        )
    return table


def print_failure(result: ValidationResult[Any], console: Console | None = None) -> None:
    """Print the outcome of a run."""
    console = console or Console(stderr=True)
    if not isinstance(result, Failure):
        console.print("✓ valid", style="green")
        return

    root = result.messages[0].root if result.messages else ""
    count = leaf_count(result.messages)
    console.print(f"✗ {escape(root or 'value')}: {count} constraint violation(s)", style="bold red")
    console.print(render_messages(result.messages))


def messages_to_json(messages: Iterable[Message], indent: int | None = 2) -> str:
    return json.dumps([m.to_dict() for m in messages], indent=indent, ensure_ascii=False)
