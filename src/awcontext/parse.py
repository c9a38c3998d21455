# SPDX-License-Identifier: MIT

"""
Resolution of human-entered date and time expressions.

Every expression resolves to a timezone-aware pendulum.DateTime in local
time. Each grammar is an ordered list of (pattern, resolver) pairs and the
first matching pattern wins, so the order of the lists is the precedence of
the grammar: keyword, strict date, date with time, time only, then natural
language.
"""

import re
from typing import Callable, Optional, TypeAlias

import pendulum

from awcontext import time
from awcontext.errors import ValidationError

Resolver: TypeAlias = Callable[[re.Match[str]], pendulum.DateTime]
Grammar: TypeAlias = list[tuple[re.Pattern[str], Resolver]]

TODAY_PATTERN = re.compile(r"^today$", re.IGNORECASE)
YESTERDAY_PATTERN = re.compile(r"^yesterday$", re.IGNORECASE)
NOW_PATTERN = re.compile(r"^now$", re.IGNORECASE)
DATE_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
DATETIME_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})[ T](\d{1,2}):(\d{2})$")
TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")

UNITS = "minute|hour|day|week|month|year"
AMOUNT = r"\d+|an?|one"
AGO_PATTERN = re.compile(rf"^({AMOUNT})\s+({UNITS})s?\s+ago$", re.IGNORECASE)
IN_PATTERN = re.compile(rf"^in\s+({AMOUNT})\s+({UNITS})s?$", re.IGNORECASE)
SHIFT_PATTERN = re.compile(rf"^(last|next|this)\s+({UNITS})$", re.IGNORECASE)
TOMORROW_PATTERN = re.compile(r"^tomorrow$", re.IGNORECASE)
WEEKDAY_PATTERN = re.compile(
    r"^(last\s+)?(monday|tuesday|wednesday|thursday|friday|saturday|sunday)$",
    re.IGNORECASE,
)
DAY_OFFSET_PATTERN = re.compile(r"^[+-]\d{1,3}$")
TIME_OF_DAY_UNITS_PATTERN = re.compile(
    r"(minute|hour)s?(\s+ago)?$", re.IGNORECASE
)

DATE_ONLY_HELP = "Use YYYY-MM-DD, 'today', or 'yesterday'"
DATETIME_HELP = (
    "Use 'today', 'yesterday', 'now', 'YYYY-MM-DD', 'HH:MM', "
    "'YYYY-MM-DD HH:MM', or an expression like '3 days ago'"
)


def _local_datetime(
    year: int, month: int, day: int, hour: int = 0, minute: int = 0
) -> pendulum.DateTime:
    if hour < 0 or hour > 23:
        raise ValidationError(f"Hour must be between 0 and 23, got {hour}")
    if minute < 0 or minute > 59:
        raise ValidationError(f"Minute must be between 0 and 59, got {minute}")
    try:
        return pendulum.datetime(year, month, day, hour, minute, 0, tz="local")
    except ValueError as e:
        raise ValidationError(
            f"Invalid date {year:04d}-{month:02d}-{day:02d}: {e}"
        ) from e


def _resolve_today(match: re.Match[str]) -> pendulum.DateTime:
    return time.today_local()


def _resolve_yesterday(match: re.Match[str]) -> pendulum.DateTime:
    return time.today_local().subtract(days=1)


def _resolve_now(match: re.Match[str]) -> pendulum.DateTime:
    return time.now_local()


def _resolve_date(match: re.Match[str]) -> pendulum.DateTime:
    year, month, day = (int(group) for group in match.groups())
    return _local_datetime(year, month, day)


def _resolve_datetime(match: re.Match[str]) -> pendulum.DateTime:
    year, month, day, hour, minute = (int(group) for group in match.groups())
    return _local_datetime(year, month, day, hour, minute)


def _resolve_time(match: re.Match[str]) -> pendulum.DateTime:
    hour, minute = int(match.group(1)), int(match.group(2))
    today = time.today_local()
    return _local_datetime(today.year, today.month, today.day, hour, minute)


DATE_ONLY_GRAMMAR: Grammar = [
    (TODAY_PATTERN, _resolve_today),
    (YESTERDAY_PATTERN, _resolve_yesterday),
    (DATE_PATTERN, _resolve_date),
]

DATETIME_GRAMMAR: Grammar = [
    (TODAY_PATTERN, _resolve_today),
    (YESTERDAY_PATTERN, _resolve_yesterday),
    (NOW_PATTERN, _resolve_now),
    (DATE_PATTERN, _resolve_date),
    (DATETIME_PATTERN, _resolve_datetime),
    (TIME_PATTERN, _resolve_time),
]


def _match_grammar(grammar: Grammar, value: str) -> Optional[pendulum.DateTime]:
    for pattern, resolver in grammar:
        match = pattern.match(value)
        if match:
            return resolver(match)
    return None


def parse_date_only(value: str) -> pendulum.DateTime:
    """
    Resolve a date expression to local midnight of that date.

    Accepts 'today' and 'yesterday' (case-insensitive) or a strict
    YYYY-MM-DD date.

    Raises:
        ValidationError: If the value is not one of the accepted forms
    """
    resolved = _match_grammar(DATE_ONLY_GRAMMAR, value.strip())
    if resolved is None:
        raise ValidationError(f"Invalid date format '{value}'. {DATE_ONLY_HELP}")
    return resolved


def parse_datetime_or_natural(value: str) -> pendulum.DateTime:
    """
    Resolve a date or date-time expression.

    Tried in order: the keywords today/yesterday (local midnight) and now
    (current instant), YYYY-MM-DD (local midnight), YYYY-MM-DD HH:MM, bare
    (H)H:MM on today's date, then the natural-language forms understood by
    parse_natural(). Seconds are always zeroed for explicit times.

    Raises:
        ValidationError: If no form matches or the date/time is out of range
    """
    stripped = value.strip()
    resolved = _match_grammar(DATETIME_GRAMMAR, stripped)
    if resolved is None:
        resolved = parse_natural(stripped)
    if resolved is None:
        raise ValidationError(f"Invalid date/time format '{value}'. {DATETIME_HELP}")
    return resolved


def _amount(value: str) -> int:
    if value.lower() in ("a", "an", "one"):
        return 1
    return int(value)


def _shift(
    now: pendulum.DateTime, unit: str, amount: int
) -> pendulum.DateTime:
    unit = unit.lower()
    shifted = now.add(**{f"{unit}s": amount})
    # Whole-day units resolve to midnight, like 'today' and 'yesterday'
    if unit in ("minute", "hour"):
        return shifted
    return shifted.start_of("day")


def parse_natural(value: str) -> Optional[pendulum.DateTime]:
    """
    Resolve a small natural-language grammar, or return None.

    Understands 'today', 'yesterday', 'tomorrow', 'N <unit>s ago',
    'in N <unit>s', 'last/next/this <unit>', '<weekday>', 'last <weekday>'
    and signed day offsets like '-1' or '+2'. Minute and hour expressions
    keep the time of day; every coarser expression resolves to local
    midnight.
    """
    stripped = value.strip()
    now = time.now_local()

    if TODAY_PATTERN.match(stripped):
        return time.today_local()
    if YESTERDAY_PATTERN.match(stripped):
        return time.today_local().subtract(days=1)
    if TOMORROW_PATTERN.match(stripped):
        return time.today_local().add(days=1)

    ago_match = AGO_PATTERN.match(stripped)
    if ago_match:
        return _shift(now, ago_match.group(2), -_amount(ago_match.group(1)))

    in_match = IN_PATTERN.match(stripped)
    if in_match:
        return _shift(now, in_match.group(2), _amount(in_match.group(1)))

    shift_match = SHIFT_PATTERN.match(stripped)
    if shift_match:
        direction = {"last": -1, "next": 1, "this": 0}[shift_match.group(1).lower()]
        return _shift(now, shift_match.group(2), direction)

    weekday_match = WEEKDAY_PATTERN.match(stripped)
    if weekday_match:
        weekday = getattr(pendulum, weekday_match.group(2).upper())
        today = time.today_local()
        if weekday_match.group(1) is None and today.day_of_week == weekday:
            return today
        return today.previous(weekday)

    if DAY_OFFSET_PATTERN.match(stripped):
        return time.today_local().add(days=int(stripped))

    return None


def is_time_of_day(value: str) -> bool:
    """
    Whether an expression names an instant rather than a whole day.

    Anything containing a colon is a time-of-day candidate, as are 'now'
    and minute/hour relative expressions.
    """
    stripped = value.strip()
    if ":" in stripped or NOW_PATTERN.match(stripped):
        return True
    return bool(
        (
            AGO_PATTERN.match(stripped)
            or IN_PATTERN.match(stripped)
            or SHIFT_PATTERN.match(stripped)
        )
        and TIME_OF_DAY_UNITS_PATTERN.search(stripped)
    )


def default_end(start_value: str, start: pendulum.DateTime) -> pendulum.DateTime:
    """
    The end of a range whose end was not given: now for a time-of-day start,
    otherwise the last instant of the start's day.
    """
    if is_time_of_day(start_value):
        return time.now_local()
    return time.end_of_local_day(start)


def resolve_range(
    start_value: str, end_value: Optional[str] = None
) -> tuple[pendulum.DateTime, pendulum.DateTime]:
    """
    Resolve a --start/--end pair. A whole-day end expression covers that
    entire day.
    """
    start = parse_datetime_or_natural(start_value)
    if end_value is None:
        return start, default_end(start_value, start)
    return start, resolve_end(end_value)


def resolve_end(value: str) -> pendulum.DateTime:
    end = parse_datetime_or_natural(value)
    if not is_time_of_day(value):
        return time.end_of_local_day(end)
    return end


def resolve_day(value: str) -> tuple[pendulum.DateTime, pendulum.DateTime]:
    """Resolve a date expression to the span from its midnight to its last instant."""
    start = parse_date_only(value)
    return start, time.end_of_local_day(start)


def parse_tags(value: Optional[str]) -> list[str]:
    """
    Split a comma-separated tag list, trimming whitespace and dropping empty
    pieces. Order and duplicates are preserved.
    """
    if value is None:
        return []
    return [tag.strip() for tag in value.split(",") if tag.strip()]
