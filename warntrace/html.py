from __future__ import annotations

from collections.abc import Iterable, Sequence
from importlib.resources import files
from typing import Any, cast

from html5tagger import E  # type: ignore[import]

from .palette import Severity
from .stack import DEFAULT_SKIP, StackFrame, capture, live_trace
from .text import title_case
from .tty import TRACE_ROUTINE, normalize_details, normalize_message

style = files(cast(str, __package__)).joinpath("style.css").read_text(encoding="UTF-8")


def html_report(
    level: Any = Severity.INFO,
    message: str = "",
    details: Iterable[str] = (),
    *,
    code: int | None = None,
    frames: Sequence[StackFrame] | None = None,
    include_css: bool = True,
) -> Any:
    """Render a diagnostic as HTML for notebooks and web pages.

    Frames default to the call chain of the caller, filtered the same way
    as the terminal report.
    """
    level = Severity.parse(level) or Severity.INFO
    if frames is None:
        frames = capture(DEFAULT_SKIP, trace=live_trace()).frames
    message = normalize_message(message, code)
    details_text = normalize_details(details)

    with E.div(class_=f"warntrace warntrace-{level.name.lower()}") as doc:
        if include_css:
            doc._style(style)
        doc.h3(title_case(TRACE_ROUTINE), class_="warntrace-header")
        doc.p(
            E.span(level.label, class_="warntrace-level")(f" {message}"),
            class_="warntrace-message",
        )
        if details_text:
            doc.p(details_text, class_="warntrace-details")
        _frame_table(doc, frames)
    return doc


def _frame_table(doc: Any, frames: Sequence[StackFrame]) -> None:
    if not frames:
        return
    with doc.table(class_="warntrace-frames"):
        for idx, frame in enumerate(frames):
            doc.tr()
            doc.td(str(idx), class_="index")
            doc.td(f"{frame.name}()", class_="function")
            doc.td(str(frame.lineno), class_="lineno")
