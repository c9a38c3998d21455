# SPDX-License-Identifier: MIT

import logging

import pendulum

from awcontext import time
from awcontext.client.activitywatch import DEFAULT_EVENT_LIMIT, ActivityWatchClient
from awcontext.model.activity import AppSummary
from awcontext.repository.context import DEFAULT_WINDOW_MINUTES, ContextStore
from awcontext.service.correlate import sort_summary, summarize_by_app

logger = logging.getLogger(__name__)


def get_daily_summary(
    client: ActivityWatchClient,
    store: ContextStore,
    day: pendulum.DateTime,
    window_minutes: int = DEFAULT_WINDOW_MINUTES,
    limit: int = DEFAULT_EVENT_LIMIT,
) -> list[AppSummary]:
    """
    Per-application totals for the local day containing ``day``, with the
    contexts recorded near each application's events.
    """
    start = day.in_tz("local").start_of("day")
    end = time.end_of_local_day(start)
    bucket_id = client.require_window_watcher_bucket()
    events = client.get_events(bucket_id, start, end, limit=limit)
    logger.debug("Summarizing %d events from %s", len(events), bucket_id)
    return summarize_by_app(store, events, window_minutes)


def build_app_totals_query(bucket_id: str) -> list[str]:
    """An ActivityWatch query program merging a bucket's events by app."""
    return [
        f'events = flood(query_bucket("{bucket_id}"));',
        'events = merge_events_by_keys(events, ["app"]);',
        "RETURN = sort_by_duration(events);",
    ]


def timeperiod(start: pendulum.DateTime, end: pendulum.DateTime) -> str:
    return f"{time.datetime_to_iso_str(start)}/{time.datetime_to_iso_str(end)}"


def get_aggregated_daily_summary(
    client: ActivityWatchClient, day: pendulum.DateTime
) -> list[AppSummary]:
    """
    Per-application totals computed by the ActivityWatch server.

    The server merges events before returning them, so no contexts are
    attached.
    """
    start = day.in_tz("local").start_of("day")
    end = time.end_of_local_day(start)
    bucket_id = client.require_window_watcher_bucket()
    results = client.query([timeperiod(start, end)], build_app_totals_query(bucket_id))

    summaries: dict[str, AppSummary] = {}
    for period_events in results:
        for event in period_events:
            app = event["data"]["app"]
            summary = summaries.setdefault(
                app, {"app": app, "duration": 0.0, "contexts": []}
            )
            summary["duration"] += event["duration"]
    return sort_summary(list(summaries.values()))
