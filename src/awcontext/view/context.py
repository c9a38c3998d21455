# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from awcontext.model.context_entry import ContextEntry
from awcontext.time import (
    datetime_to_display_local_datetime_str,
    datetime_to_iso_str,
)
from awcontext.view.util import format_tags, line_console


def context_line(entry: ContextEntry) -> str:
    """One entry as `ID: <id> | Time: <ts> | Context: <text> | Tags: <a, b>`."""
    return (
        f"ID: {entry['id']} | Time: {datetime_to_iso_str(entry['timestamp'])} | "
        f"Context: {entry['context']} | Tags: {format_tags(entry['tags'])}"
    )


def contexts_view(entries: list[ContextEntry], title: str) -> None:
    console = line_console()
    console.print(f"Found {len(entries)} context(s){title}:")
    console.print()
    for entry in entries:
        console.print(context_line(entry))


def contexts_table_view(
    entries: list[ContextEntry], title: str, no_wrap: bool = False
) -> None:
    contexts_table = Table(box=box.SIMPLE, title=f"{len(entries)} context(s){title}")
    for column in ("id", "time", "context", "tags"):
        if no_wrap and column != "id":
            contexts_table.add_column(column, no_wrap=True, overflow="ellipsis")
        else:
            contexts_table.add_column(column)

    for entry in entries:
        contexts_table.add_row(
            entry["id"],
            datetime_to_display_local_datetime_str(entry["timestamp"]),
            entry["context"],
            format_tags(entry["tags"]),
        )

    console = Console()
    console.print(contexts_table)


def added_context_view(entry: ContextEntry) -> None:
    console = line_console()
    console.print(f"✓ Context added at {datetime_to_iso_str(entry['timestamp'])}")
    console.print(f"  ID: {entry['id']}")
    if entry["tags"]:
        console.print(f"  Tags: {format_tags(entry['tags'])}")
