# SPDX-License-Identifier: MIT

__version__ = "1.1.0"
BUILD_DATE = "2024-12-06"


def full_version() -> str:
    return f"{__version__} ({BUILD_DATE})"
