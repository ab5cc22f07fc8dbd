from __future__ import annotations

import textwrap
from collections.abc import Sequence
from dataclasses import dataclass

from .palette import Palette, strip_ansi
from .stack import StackFrame
from .text import format_number

# Printable columns of a frame line besides its indent and name
FRAME_LINE_OVERHEAD = 28


@dataclass(frozen=True)
class ReportGeometry:
    total_width: int
    dash_char: str
    left_pad: int
    right_pad: int
    frame_indent: int
    name_width: int

    @classmethod
    def compute(
        cls, total_width: int, label: str, longest: int, dash_char: str = "-"
    ) -> ReportGeometry:
        """Derive banner dashes and frame alignment.

        ``label`` may carry color codes; only its printable part counts.
        """
        label_len = len(strip_ansi(label))
        left = max(0, (total_width - label_len - 2) // 2)
        right = left + (total_width - label_len) % 2
        indent = max(0, total_width // 2 - (longest + FRAME_LINE_OVERHEAD) // 2)
        return cls(
            total_width=total_width,
            dash_char=dash_char,
            left_pad=left,
            right_pad=right,
            frame_indent=indent,
            name_width=max(0, longest) + 2,
        )


def build_header(
    label: str, color: str, geometry: ReportGeometry, palette: Palette
) -> str:
    """Dashed banner with the label centered in bold."""
    reset = palette.reset
    left = geometry.dash_char * geometry.left_pad
    right = geometry.dash_char * geometry.right_pad
    return (
        f"{color}{left}{reset} "
        f"{color}{palette.bold}{label}{reset} "
        f"{color}{right}{reset}"
    )


def build_footer(color: str, geometry: ReportGeometry, palette: Palette) -> str:
    footer = geometry.dash_char * geometry.total_width
    if color:
        footer = f"{color}{footer}{palette.reset}"
    return f"{palette.bold}{footer}{palette.reset}"


def build_message_lines(
    message: str, color: str, geometry: ReportGeometry, palette: Palette
) -> list[str]:
    """The ``Details:`` line of a stack block.

    Text wider than the block is wrapped at word boundaries and loses the
    bold label styling.
    """
    reset = palette.reset
    styled = f"{color}{palette.bold}Details: {reset}{color}{message}{reset}"
    plain = strip_ansi(styled)
    if len(plain) <= geometry.total_width:
        return [styled]
    lines = textwrap.wrap(
        plain,
        width=max(1, geometry.total_width),
        break_on_hyphens=False,
    )
    return [f"{color}{line}{reset}" for line in lines]


def build_frame_lines(
    frames: Sequence[StackFrame],
    color: str,
    geometry: ReportGeometry,
    palette: Palette,
) -> list[str]:
    lines = []
    marker = ">".rjust(geometry.frame_indent)
    for idx, frame in enumerate(frames):
        name = f"{frame.name}()".ljust(geometry.name_width)
        lineno = format_number(frame.lineno, 4)
        lines.append(
            f"{color}{marker} [{idx}] Function: {name} Line: {lineno}{palette.reset}"
        )
    return lines
