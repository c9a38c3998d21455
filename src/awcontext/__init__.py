# SPDX-License-Identifier: MIT

from awcontext.initialize import initialize, register_cleanup
from awcontext.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
