"""Emit one diagnostic from the command line.

    python -m warntrace [LEVEL] [CODE] MESSAGE [DETAILS...]
"""

from __future__ import annotations

import sys

from .tty import warn


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    warn(*argv)
    return 0


if __name__ == "__main__":
    sys.exit(main())
