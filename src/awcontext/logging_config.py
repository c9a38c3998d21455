# SPDX-License-Identifier: MIT

"""
Logging configuration for aw-context.

Library modules only create loggers; handlers are installed here by the CLI
entry point.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"

_handler: logging.StreamHandler | None = None


def configure_logging(verbose: bool = False) -> None:
    """
    Send aw-context log records to stderr.

    Warnings and errors are always shown. With verbose, debug output from
    aw-context is enabled as well, while HTTP library chatter stays at
    WARNING.

    Each call replaces the handler installed by the previous one, so the
    handler always writes to the current sys.stderr.
    """
    global _handler

    level = logging.DEBUG if verbose else logging.WARNING
    app_logger = logging.getLogger("awcontext")
    app_logger.setLevel(level)

    if _handler is not None:
        app_logger.removeHandler(_handler)

    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    _handler.setLevel(level)
    app_logger.addHandler(_handler)

    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)
