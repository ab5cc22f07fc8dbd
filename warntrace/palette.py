from __future__ import annotations

import enum
import re
from collections.abc import Mapping
from typing import Any, TextIO

# ANSI escape codes (can be monkeypatched for styling)
ESC = "\x1b["
RESET = f"{ESC}0m"
BOLD = f"{ESC}1m"
RED = f"{ESC}31m"
GREEN = f"{ESC}32m"
YELLOW = f"{ESC}33m"
BLUE = f"{ESC}34m"
MAGENTA = f"{ESC}35m"
CYAN = f"{ESC}36m"
GOLD = f"{ESC}38;5;220m"  # xterm256 Gold1, needs a 256 color terminal

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")


def strip_ansi(text: str) -> str:
    """Remove terminal attribute codes so that only printable text remains."""
    return ANSI_ESCAPE_RE.sub("", text)


class Severity(enum.Enum):
    DEBUG = "[DEBUG]"
    INFO = "[INFO ]"
    WARN = "[WARN ]"
    ERROR = "[ERROR]"
    CRITICAL = "[CRIT ]"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def parse(cls, token: Any) -> Severity | None:
        """Return the severity named by token, or None if it names none.

        Accepts members, names in any case and the WARNING alias.
        """
        if isinstance(token, cls):
            return token
        if not isinstance(token, str):
            return None
        name = token.strip().upper()
        if name == "WARNING":
            name = "WARN"
        return cls.__members__.get(name)


# Role tokens besides the severities
BOLD_ROLE = "bold"
RESET_ROLE = "reset"
EXTENDED_ROLE = "extended"
DETAILS_ROLE = "details"


class Palette(Mapping):
    """Role to display attribute lookup.

    Roles are Severity members plus "bold", "reset", "extended" and
    "details". Unknown roles resolve to an empty attribute.
    """

    def __init__(self, attributes: Mapping[Any, str] | None = None) -> None:
        self._attributes = dict(attributes or {})

    def __getitem__(self, role: Any) -> str:
        return self._attributes.get(role, "")

    def __contains__(self, role: object) -> bool:
        return role in self._attributes

    def __iter__(self):
        return iter(self._attributes)

    def __len__(self) -> int:
        return len(self._attributes)

    @property
    def bold(self) -> str:
        return self[BOLD_ROLE]

    @property
    def reset(self) -> str:
        return self[RESET_ROLE]

    @classmethod
    def ansi(cls, colors: int = 256) -> Palette:
        gold = GOLD if colors >= 256 else YELLOW
        return cls(
            {
                Severity.DEBUG: CYAN,
                Severity.INFO: GREEN,
                Severity.WARN: gold,
                Severity.ERROR: MAGENTA,
                Severity.CRITICAL: RED,
                BOLD_ROLE: BOLD,
                RESET_ROLE: RESET,
                EXTENDED_ROLE: CYAN,
                DETAILS_ROLE: BLUE,
            }
        )

    @classmethod
    def plain(cls) -> Palette:
        return cls()


def resolve_palette(file: TextIO | None) -> Palette:
    """Pick the palette for an output stream.

    Colors only go to terminals. Any failure while asking the stream
    degrades to the plain palette.
    """
    try:
        is_tty = file.isatty() if hasattr(file, "isatty") else False  # type: ignore[union-attr]
    except (OSError, ValueError, AttributeError):
        is_tty = False
    return Palette.ansi() if is_tty else Palette.plain()
