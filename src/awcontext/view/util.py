# SPDX-License-Identifier: MIT

from typing import Optional

from rich.console import Console


def format_tags(tags: Optional[list[str]]) -> str:
    """Format a list of tags as a comma-separated string without brackets or quotes."""
    if tags is None or len(tags) == 0:
        return ""
    return ", ".join(tags)


def line_console() -> Console:
    """
    A console for plain line output.

    Lines are never wrapped, highlighted or interpreted as markup so that
    scripts parsing the output see exactly what was printed.
    """
    return Console(soft_wrap=True, highlight=False, markup=False, emoji=False)


def error_console() -> Console:
    return Console(stderr=True, soft_wrap=True, highlight=False)
