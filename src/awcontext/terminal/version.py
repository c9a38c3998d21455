# SPDX-License-Identifier: MIT

from awcontext.version import full_version
from awcontext.view.util import line_console


def version() -> None:
    """
    Show the aw-context version.
    """
    line_console().print(f"aw-context {full_version()}")
