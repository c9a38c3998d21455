# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

WINDOW_WATCHER_BUCKET_TYPE = "currentwindow"


class EventData(TypedDict):
    app: str
    title: str


class ActivityEvent(TypedDict):
    id: Optional[int]
    timestamp: pendulum.DateTime
    duration: float
    data: EventData


class Bucket(TypedDict):
    id: str
    name: str
    type: str
    client: str
    hostname: str
    created: pendulum.DateTime


class EnrichedEvent(ActivityEvent):
    context: Optional[str]
    tags: Optional[list[str]]


class AppSummary(TypedDict):
    app: str
    duration: float
    contexts: list[str]
