# SPDX-License-Identifier: MIT

from typing import cast

import pendulum

ISO_FORMAT = "YYYY-MM-DD[T]HH:mm:ss.SSSSSSZ"
DAY_FORMAT = "YYYY-MM-DD"
TIME_FORMAT = "HH:mm:ss"


def now_local() -> pendulum.DateTime:
    return pendulum.now("local")


def today_local() -> pendulum.DateTime:
    return now_local().start_of("day")


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    """
    Encode an instant as ISO-8601 in UTC with microseconds and an explicit
    offset, e.g. 2024-12-06T14:30:00.000000+00:00.
    """
    return datetime.in_tz("UTC").format(ISO_FORMAT)


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    """
    Decode an ISO-8601 timestamp. Accepts Z, +00:00 and zoned offsets, with
    or without fractional seconds.
    """
    parsed = pendulum.parse(datetime)
    if not isinstance(parsed, pendulum.DateTime):
        raise ValueError(f"Not a timestamp: {datetime!r}")
    return parsed


def datetime_to_display_local_time_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format(TIME_FORMAT)


def datetime_to_display_local_datetime_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("MMM-DD ddd HH:mm")


def local_date(datetime: pendulum.DateTime) -> pendulum.Date:
    return datetime.in_tz("local").date()


def end_of_local_day(datetime: pendulum.DateTime) -> pendulum.DateTime:
    return cast(pendulum.DateTime, datetime.in_tz("local").end_of("day"))


def duration_to_minutes(seconds: float) -> int:
    return int(seconds // 60)
