# SPDX-License-Identifier: MIT

from htracker.initialize import initialize
from htracker.terminal.app import run


def main() -> None:
    initialize()
    run()


if __name__ == "__main__":
    main()
