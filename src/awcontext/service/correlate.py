# SPDX-License-Identifier: MIT

from typing import Iterable

from awcontext.model.activity import ActivityEvent, AppSummary, EnrichedEvent
from awcontext.repository.context import DEFAULT_WINDOW_MINUTES, ContextStore


def enrich_events(
    store: ContextStore,
    events: Iterable[ActivityEvent],
    window_minutes: int = DEFAULT_WINDOW_MINUTES,
) -> list[EnrichedEvent]:
    """
    Attach the nearest context entry within the window to each event.

    Events with no entry in their window get None for context and tags.
    """
    enriched_events: list[EnrichedEvent] = []
    for event in events:
        nearest = store.find_nearest(event["timestamp"], window_minutes)
        enriched_events.append(
            {
                "id": event["id"],
                "timestamp": event["timestamp"],
                "duration": event["duration"],
                "data": event["data"],
                "context": nearest["context"] if nearest is not None else None,
                "tags": list(nearest["tags"]) if nearest is not None else None,
            }
        )
    return enriched_events


def summarize_by_app(
    store: ContextStore,
    events: Iterable[ActivityEvent],
    window_minutes: int = DEFAULT_WINDOW_MINUTES,
) -> list[AppSummary]:
    """
    Group events by application, summing durations and collecting the
    distinct context texts matched to each application's events.

    Contexts keep the order in which they were first matched. Applications
    are returned by descending total duration; equal totals keep the order
    in which the applications first appeared.
    """
    summaries: dict[str, AppSummary] = {}
    for event in enrich_events(store, events, window_minutes):
        app = event["data"]["app"]
        summary = summaries.setdefault(
            app, {"app": app, "duration": 0.0, "contexts": []}
        )
        summary["duration"] += event["duration"]
        context = event["context"]
        if context is not None and context not in summary["contexts"]:
            summary["contexts"].append(context)

    return sort_summary(list(summaries.values()))


def sort_summary(summaries: list[AppSummary]) -> list[AppSummary]:
    return sorted(summaries, key=lambda summary: summary["duration"], reverse=True)
