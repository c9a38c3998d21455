# SPDX-License-Identifier: MIT

"""
HTTP client for the ActivityWatch REST API.

Only the read endpoints aw-context needs are covered: bucket listing, event
listing for one bucket, and the batch query endpoint.
"""

import logging
from typing import Any, Optional

import httpx
import pendulum

from awcontext import time
from awcontext.configuration import DEFAULT_ACTIVITYWATCH_URL
from awcontext.errors import NotFoundError, RemoteError, RemoteTimeoutError
from awcontext.model.activity import (
    WINDOW_WATCHER_BUCKET_TYPE,
    ActivityEvent,
    Bucket,
)

logger = logging.getLogger(__name__)

API_PREFIX = "/api/0"

DEFAULT_TIMEOUT = 30.0
QUERY_TIMEOUT = 60.0
DEFAULT_EVENT_LIMIT = 1000


class ActivityWatchClient:
    """HTTP client for a local ActivityWatch server."""

    def __init__(
        self,
        base_url: str = DEFAULT_ACTIVITYWATCH_URL,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        query_timeout: float = QUERY_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._query_timeout = query_timeout
        self._client = httpx.Client(
            base_url=self._base_url + API_PREFIX,
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "ActivityWatchClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def get_buckets(self) -> list[Bucket]:
        """GET /buckets -> every bucket, in server order."""
        raw_buckets = self.__request("GET", "/buckets")
        if not isinstance(raw_buckets, dict):
            raise RemoteError("Unexpected bucket listing from ActivityWatch")
        return [self.__convert_bucket(raw) for raw in raw_buckets.values()]

    def get_events(
        self,
        bucket_id: str,
        start: pendulum.DateTime,
        end: pendulum.DateTime,
        limit: int = DEFAULT_EVENT_LIMIT,
    ) -> list[ActivityEvent]:
        """GET /buckets/{id}/events for the [start, end] range."""
        params = {
            "start": time.datetime_to_iso_str(start),
            "end": time.datetime_to_iso_str(end),
            "limit": str(limit),
        }
        raw_events = self.__request(
            "GET", f"/buckets/{bucket_id}/events", params=params
        )
        if not isinstance(raw_events, list):
            raise RemoteError(f"Unexpected event listing for bucket {bucket_id}")
        return [self.__convert_event(raw) for raw in raw_events]

    def query(
        self, timeperiods: list[str], query: list[str]
    ) -> list[list[ActivityEvent]]:
        """POST /query -> one list of events per time period."""
        payload = {"timeperiods": timeperiods, "query": query}
        raw_results = self.__request(
            "POST", "/query/", json=payload, timeout=self._query_timeout
        )
        if not isinstance(raw_results, list):
            raise RemoteError("Unexpected query result from ActivityWatch")
        return [
            [self.__convert_event(raw) for raw in period] for period in raw_results
        ]

    def find_window_watcher_bucket(self) -> Optional[str]:
        for bucket in self.get_buckets():
            if bucket["type"] == WINDOW_WATCHER_BUCKET_TYPE:
                return bucket["id"]
        return None

    def require_window_watcher_bucket(self) -> str:
        bucket_id = self.find_window_watcher_bucket()
        if bucket_id is None:
            raise NotFoundError("No window watcher bucket found")
        return bucket_id

    def __request(self, method: str, path: str, **kwargs: Any) -> Any:
        logger.debug("%s %s%s", method, self._base_url, path)
        try:
            response = self._client.request(method, path, **kwargs)
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as e:
            raise RemoteTimeoutError(
                f"Request to ActivityWatch timed out: {method} {path}"
            ) from e
        except httpx.HTTPStatusError as e:
            raise RemoteError(
                f"HTTP error with status code: {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise RemoteError(
                f"Could not reach ActivityWatch at {self._base_url}: {e}"
            ) from e
        except ValueError as e:
            raise RemoteError(f"Invalid JSON from ActivityWatch: {e}") from e

    def __convert_bucket(self, raw: dict[str, Any]) -> Bucket:
        try:
            return {
                "id": str(raw["id"]),
                "name": str(raw.get("name") or raw["id"]),
                "type": str(raw.get("type", "")),
                "client": str(raw.get("client", "")),
                "hostname": str(raw.get("hostname", "")),
                "created": time.datetime_from_str(raw["created"]),
            }
        except (KeyError, TypeError, ValueError) as e:
            raise RemoteError(f"Malformed bucket from ActivityWatch: {e}") from e

    def __convert_event(self, raw: dict[str, Any]) -> ActivityEvent:
        try:
            data = raw.get("data") or {}
            return {
                "id": raw.get("id"),
                "timestamp": time.datetime_from_str(raw["timestamp"]),
                "duration": float(raw.get("duration", 0.0)),
                "data": {
                    "app": str(data.get("app", "")),
                    "title": str(data.get("title", "")),
                },
            }
        except (KeyError, TypeError, ValueError) as e:
            raise RemoteError(f"Malformed event from ActivityWatch: {e}") from e
