# SPDX-License-Identifier: MIT

import logging
from typing import Annotated, Optional

import typer

from awcontext.errors import NotFoundError, RemoteError
from awcontext.parse import parse_date_only
from awcontext.repository.configuration import CONFIGURATION_REPO
from awcontext.repository.context import ContextStore
from awcontext.service.correlate import enrich_events
from awcontext.service.summary import (
    get_aggregated_daily_summary,
    get_daily_summary,
)
from awcontext.terminal.util import (
    activitywatch_client,
    exit_on_error,
    resolve_date_or_range,
)
from awcontext.time import end_of_local_day
from awcontext.view.activity import (
    enriched_events_view,
    summary_applications_table_view,
    summary_applications_view,
    summary_contexts_view,
    summary_header_view,
)
from awcontext.view.util import line_console

logger = logging.getLogger(__name__)


def summary(
    date: Annotated[
        str,
        typer.Option(
            "--date",
            "-d",
            help="Date to summarize: YYYY-MM-DD, today, yesterday",
        ),
    ] = "today",
    window: Annotated[
        Optional[int],
        typer.Option("--window", "-w", min=0, help="Context window in minutes"),
    ] = None,
    aggregate: Annotated[
        bool,
        typer.Option(
            "--aggregate",
            help="Let ActivityWatch total the durations (no context matching)",
        ),
    ] = False,
    table: Annotated[
        bool, typer.Option("--table", help="Render applications as a table")
    ] = False,
) -> None:
    """
    Daily summary of contexts and top applications.
    """
    config = CONFIGURATION_REPO.get_config()
    window_minutes = window if window is not None else config["default_window"]

    with exit_on_error():
        day = parse_date_only(date)
        store = ContextStore()
        contexts = store.query_by_range(day, end_of_local_day(day))

    summary_header_view(day)
    summary_contexts_view(contexts)

    # ActivityWatch being unavailable does not fail the summary
    try:
        with activitywatch_client() as client:
            if aggregate:
                applications = get_aggregated_daily_summary(client, day)
            else:
                applications = get_daily_summary(
                    client, store, day, window_minutes, limit=config["event_limit"]
                )
    except (RemoteError, NotFoundError) as e:
        logger.debug("Activity summary failed", exc_info=True)
        console = line_console()
        console.print()
        console.print(f"Error fetching activity data: {e}")
        return

    if table:
        summary_applications_table_view(applications)
    else:
        summary_applications_view(applications)


def enrich(
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
    window: Annotated[
        Optional[int],
        typer.Option("--window", "-w", min=0, help="Context window in minutes"),
    ] = None,
) -> None:
    """
    Show ActivityWatch events with their nearest context.
    """
    config = CONFIGURATION_REPO.get_config()
    window_minutes = window if window is not None else config["default_window"]

    with exit_on_error():
        range_start, range_end = resolve_date_or_range(date, start, end)

        store = ContextStore()
        with activitywatch_client() as client:
            bucket_id = client.require_window_watcher_bucket()
            events = client.get_events(
                bucket_id, range_start, range_end, limit=config["event_limit"]
            )
        # ActivityWatch returns the newest events first
        events.sort(key=lambda event: event["timestamp"])
        enriched_events = enrich_events(store, events, window_minutes)

    if not enriched_events:
        line_console().print("No activities found for the specified time range.")
        return

    enriched_events_view(enriched_events)
