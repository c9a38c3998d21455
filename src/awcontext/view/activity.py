# SPDX-License-Identifier: MIT

import pendulum
from rich import box
from rich.console import Console
from rich.table import Table

from awcontext.model.activity import AppSummary, EnrichedEvent
from awcontext.model.context_entry import ContextEntry
from awcontext.time import (
    DAY_FORMAT,
    datetime_to_display_local_time_str,
    duration_to_minutes,
)
from awcontext.view.util import format_tags, line_console

TOP_APPLICATIONS = 10


def enriched_event_line(event: EnrichedEvent) -> str:
    """One event as `HH:MM:SS | App - Title | Context: <text>`."""
    line = (
        f"{datetime_to_display_local_time_str(event['timestamp'])} | "
        f"{event['data']['app']} - {event['data']['title']}"
    )
    if event["context"] is not None:
        line += f" | Context: {event['context']}"
    return line


def enriched_events_view(events: list[EnrichedEvent]) -> None:
    console = line_console()
    for event in events:
        console.print(enriched_event_line(event))


def summary_header_view(day: pendulum.DateTime) -> None:
    console = line_console()
    console.print(f"=== Summary for {day.in_tz('local').format(DAY_FORMAT)} ===")
    console.print()


def summary_contexts_view(entries: list[ContextEntry]) -> None:
    console = line_console()
    if not entries:
        console.print("No contexts recorded for this day.")
        return

    console.print(f"Contexts ({len(entries)}):")
    for entry in entries:
        time_string = datetime_to_display_local_time_str(entry["timestamp"])
        console.print(f"  {time_string} - {entry['context']}")
        if entry["tags"]:
            console.print(f"         Tags: {format_tags(entry['tags'])}")


def summary_applications_view(summaries: list[AppSummary]) -> None:
    console = line_console()
    console.print()
    console.print("Top Applications:")
    for summary in summaries[:TOP_APPLICATIONS]:
        console.print()
        console.print(
            f"{summary['app']}: {duration_to_minutes(summary['duration'])} minutes"
        )
        if summary["contexts"]:
            console.print(f"  Contexts: {', '.join(summary['contexts'])}")


def summary_applications_table_view(summaries: list[AppSummary]) -> None:
    applications_table = Table(box=box.SIMPLE, title="Top Applications")
    applications_table.add_column("application")
    applications_table.add_column("minutes", justify="right")
    applications_table.add_column("contexts")

    for summary in summaries[:TOP_APPLICATIONS]:
        applications_table.add_row(
            summary["app"],
            str(duration_to_minutes(summary["duration"])),
            ", ".join(summary["contexts"]),
        )

    console = Console()
    console.print()
    console.print(applications_table)
