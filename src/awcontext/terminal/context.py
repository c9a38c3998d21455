# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from awcontext.parse import parse_tags
from awcontext.repository.context import ContextStore
from awcontext.terminal.util import exit_on_error, resolve_date_or_range
from awcontext.view.context import (
    added_context_view,
    contexts_table_view,
    contexts_view,
)
from awcontext.view.util import line_console


def add(
    context: Annotated[str, typer.Argument(help="The context description")],
    tags: Annotated[
        Optional[str],
        typer.Option("--tags", "-t", help="Comma-separated tags, e.g. work,doc"),
    ] = None,
) -> None:
    """
    Add a new context annotation.
    """
    with exit_on_error():
        store = ContextStore()
        entry = store.add(context, parse_tags(tags))

    added_context_view(entry)


def query(
    date: Annotated[
        Optional[str],
        typer.Argument(
            help="valid inputs: YYYY-MM-DD, today, yesterday (default: today); not combined with --start"
        ),
    ] = None,
    start: Annotated[
        Optional[str],
        typer.Option(
            "--start",
            "-s",
            help="valid inputs: YYYY-MM-DD, YYYY-MM-DD HH:MM, (H)H:MM, today, yesterday, now, 3 days ago",
        ),
    ] = None,
    end: Annotated[
        Optional[str],
        typer.Option(
            "--end",
            "-e",
            help="same inputs as --start; defaults to now after a time, else end of day",
        ),
    ] = None,
    table: Annotated[
        bool, typer.Option("--table", help="Render results as a table")
    ] = False,
    no_wrap: Annotated[
        bool,
        typer.Option("--no-wrap", help="Disable text wrapping in table columns"),
    ] = False,
) -> None:
    """
    Query contexts for a day or a date/time range.
    """
    with exit_on_error():
        range_start, range_end = resolve_date_or_range(date, start, end)

        store = ContextStore()
        entries = store.query_by_range(range_start, range_end)

    if not entries:
        line_console().print("No contexts found in the specified date range.")
        return

    if table:
        contexts_table_view(entries, "", no_wrap=no_wrap)
    else:
        contexts_view(entries, "")


def search(
    tag: Annotated[str, typer.Argument(help="Tag to search for (exact match)")],
    table: Annotated[
        bool, typer.Option("--table", help="Render results as a table")
    ] = False,
    no_wrap: Annotated[
        bool,
        typer.Option("--no-wrap", help="Disable text wrapping in table columns"),
    ] = False,
) -> None:
    """
    Search contexts by tag.
    """
    with exit_on_error():
        store = ContextStore()
        entries = store.search_by_tag(tag)

    if not entries:
        line_console().print(f"No contexts found with tag '{tag}'.")
        return

    if table:
        contexts_table_view(entries, f" with tag '{tag}'", no_wrap=no_wrap)
    else:
        contexts_view(entries, f" with tag '{tag}'")
