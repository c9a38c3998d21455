# SPDX-License-Identifier: MIT

"""
Error kinds raised by aw-context.

Every error derives from AwContextError so the CLI can report it as a
message and a non-zero exit without a traceback.
"""

from typing import Optional


class AwContextError(Exception):
    """Base class for all aw-context errors."""


class ValidationError(AwContextError, ValueError):
    """Bad user input: a malformed date/time string or unrecognized keyword."""


class StorageError(AwContextError, OSError):
    """A directory or day file could not be created, read, parsed or written."""


class RemoteError(AwContextError):
    """The ActivityWatch server answered with an error or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RemoteTimeoutError(RemoteError):
    """A request to the ActivityWatch server exceeded its timeout."""


class NotFoundError(AwContextError, LookupError):
    """A required bucket or entry does not exist."""
