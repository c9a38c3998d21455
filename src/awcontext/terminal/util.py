# SPDX-License-Identifier: MIT

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

import pendulum
import typer

from awcontext.client.activitywatch import ActivityWatchClient
from awcontext.errors import AwContextError, ValidationError
from awcontext.parse import resolve_day, resolve_end, resolve_range
from awcontext.repository.configuration import CONFIGURATION_REPO
from awcontext.view.util import error_console

logger = logging.getLogger(__name__)


@contextmanager
def exit_on_error() -> Iterator[None]:
    """
    Report aw-context errors as `Error: <message>` on stderr and exit 1.

    The traceback is only logged at debug level.
    """
    try:
        yield
    except AwContextError as e:
        logger.debug("Command failed", exc_info=True)
        error_console().print(f"Error: {e}", markup=False)
        raise typer.Exit(1) from e


def activitywatch_client() -> ActivityWatchClient:
    config = CONFIGURATION_REPO.get_config()
    return ActivityWatchClient(
        config["activitywatch_url"],
        timeout=config["request_timeout"],
        query_timeout=config["query_timeout"],
    )


def resolve_date_or_range(
    date: Optional[str], start: Optional[str], end: Optional[str]
) -> tuple[pendulum.DateTime, pendulum.DateTime]:
    """
    Resolve the positional date or the --start/--end pair of a command.

    The date defaults to today and cannot be combined with --start.
    """
    if start is not None:
        if date is not None:
            raise ValidationError(
                f"Cannot combine the date '{date}' with --start; "
                "use --start/--end alone"
            )
        return resolve_range(start, end)

    range_start, range_end = resolve_day(date if date is not None else "today")
    if end is not None:
        range_end = resolve_end(end)
    return range_start, range_end
