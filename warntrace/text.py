from __future__ import annotations

import re
import textwrap
from collections import namedtuple
from typing import Any

from .errors import InvalidNumericInput
from .logging import logger

ELLIPSIS = "…"

# Columns reserved on every wrapped line for the ellipsis glyphs
ELLIPSIS_RESERVE = 2

DIGITS_RE = re.compile(r"[0-9]+")

WrappedMessage = namedtuple("WrappedMessage", ["primary", "overflow", "secondary"])


def _split(text: str, width: int) -> list[str]:
    return textwrap.wrap(
        text,
        width=max(1, width - ELLIPSIS_RESERVE),
        break_long_words=True,
        break_on_hyphens=False,
    )


def _decorate(lines: list[str]) -> list[str]:
    """Mark continuation with ellipses: trailing on the first line, leading
    on the last, both on any line between them."""
    if len(lines) < 2:
        return lines
    last = len(lines) - 1
    result = []
    for i, line in enumerate(lines):
        if i == 0:
            line = f"{line.removesuffix(' ')}{ELLIPSIS}"
        elif i == last:
            line = f"{ELLIPSIS}{line}"
        else:
            line = f"{ELLIPSIS}{line.removesuffix(' ')}{ELLIPSIS}"
        result.append(line)
    return result


def wrap(text: str, width: int, *, ellipsis: bool = True) -> list[str]:
    """Wrap text at word boundaries into lines of at most ``width`` columns.

    Two columns per line are kept free for the ellipsis glyphs, whether or
    not decoration is requested, so decorated and plain text break at the
    same places. Text that already fits is returned as is, and empty text
    gives an empty list. A width too narrow to hold a mark next to any text
    wraps without decoration.
    """
    if not text:
        return []
    if len(text) <= width:
        return [text]
    if width <= ELLIPSIS_RESERVE:
        return textwrap.wrap(text, width=max(1, width), break_on_hyphens=False)
    lines = _split(text, width)
    return _decorate(lines) if ellipsis else lines


def combine(width: int, primary: str, secondary: str = "") -> WrappedMessage:
    """Fit a primary message and its details into ``width`` columns.

    The first line of the primary message stays on its own; anything past
    it goes to ``overflow``. Details are wrapped without decoration.
    """
    overflow: list[str] = []
    if len(primary) > width:
        wrapped = wrap(primary, width)
        if wrapped:
            primary, overflow = wrapped[0], wrapped[1:]

    if not secondary:
        secondary_lines = []
    elif len(secondary) <= width:
        secondary_lines = [secondary]
    else:
        secondary_lines = wrap(secondary, width, ellipsis=False)

    return WrappedMessage(primary, overflow, secondary_lines)


def add_period(text: str) -> str | None:
    """Return text ending in a period, or None (with a warning) if empty."""
    if not text:
        logger.warning("Input to add_period cannot be empty.")
        return None
    return text if text.endswith(".") else f"{text}."


def remove_period(text: str) -> str | None:
    if not text:
        logger.warning("Input to remove_period cannot be empty.")
        return None
    return text.removesuffix(".")


def title_case(name: str) -> str:
    """Turn a routine name like ``stack_trace`` into ``Stack Trace``."""
    return " ".join(word.capitalize() for word in name.split("_") if word)


def format_number(number: Any, width: Any = 4) -> str:
    """Right-justify a non-negative integer in a field of ``width``.

    Strings are read in base 10 so that leading zeros never change the
    value. Anything else raises InvalidNumericInput.
    """
    if isinstance(number, bool) or not isinstance(number, (int, str)):
        raise InvalidNumericInput("Input must be a valid non-negative integer.")
    if isinstance(number, str):
        if not DIGITS_RE.fullmatch(number):
            raise InvalidNumericInput("Input must be a valid non-negative integer.")
        number = int(number, 10)
    elif number < 0:
        raise InvalidNumericInput("Input must be a valid non-negative integer.")

    if isinstance(width, str) and DIGITS_RE.fullmatch(width):
        width = int(width, 10)
    if isinstance(width, bool) or not isinstance(width, int) or width < 1:
        raise InvalidNumericInput("Width must be a positive integer.")

    return f"{number:>{width}d}"
