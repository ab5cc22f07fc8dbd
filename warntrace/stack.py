"""Call chain capture.

A raw trace is a list of :class:`CallRecord` ordered innermost first, where
index 0 is the routine doing the capture and every record holds the line at
which that routine was invoked. The line reported for frame ``i`` is
therefore the one stored at ``i - 1``: the line inside frame ``i`` where the
next inner call happened.

Raw traces come either from the live interpreter frames or from an explicit
:class:`CallContext` that routines push onto themselves.
"""

from __future__ import annotations

import functools
import sys
import threading
from collections import namedtuple
from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager
from typing import Any, Callable

CallRecord = namedtuple("CallRecord", ["name", "lineno"])
StackFrame = namedtuple("StackFrame", ["name", "lineno"])
Capture = namedtuple("Capture", ["frames", "longest"])

ENTRY_POINT = "main"
DEFAULT_SKIP = frozenset({"die", "warn", "stack_trace"})


def live_trace(depth: int = 0) -> list[CallRecord]:
    """Read the raw trace from the running interpreter.

    ``depth`` counts frames above the caller of this function; the frame
    found there becomes index 0. Module level code is reported under the
    entry point name. The walk stops at the runpy machinery that launches
    ``python -m`` and ``runpy.run_path`` programs.
    """
    frame: Any = sys._getframe(depth + 1)
    trace = []
    while frame is not None and frame.f_globals.get("__name__") != "runpy":
        name = frame.f_code.co_name
        if name == "<module>":
            name = ENTRY_POINT
        caller = frame.f_back
        trace.append(CallRecord(name, (caller.f_lineno or 0) if caller else 0))
        frame = caller
    return trace


class CallContext(threading.local):
    """Explicit call stack, kept per thread.

    Routines register themselves with :meth:`enter` or the :func:`traced`
    decorator. When the stack is not empty it takes precedence over the
    live interpreter frames.
    """

    def __init__(self) -> None:
        self.records: list[CallRecord] = []

    def __bool__(self) -> bool:
        return bool(self.records)

    def push(self, name: str, lineno: int) -> None:
        self.records.append(CallRecord(name, lineno))

    def pop(self) -> CallRecord:
        return self.records.pop()

    @contextmanager
    def enter(self, name: str, lineno: int | None = None) -> Iterator[None]:
        if lineno is None:
            # Frames: enter() <- contextmanager __enter__ <- with statement
            lineno = sys._getframe(2).f_lineno
        self.push(name, lineno)
        try:
            yield
        finally:
            self.pop()

    def trace(self, lineno: int, name: str = "stack_trace") -> list[CallRecord]:
        """Raw trace with a capture record at ``lineno`` in front."""
        return [CallRecord(name, lineno), *reversed(self.records)]


context = CallContext()


def traced(func: Callable) -> Callable:
    """Register every call of ``func`` on the explicit call context."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        context.push(func.__name__, sys._getframe(1).f_lineno)
        try:
            return func(*args, **kwargs)
        finally:
            context.pop()

    return wrapper


def capture(
    skip: Iterable[str] = DEFAULT_SKIP,
    *,
    trace: Sequence[CallRecord] | None = None,
    entry_point: str = ENTRY_POINT,
    piped: bool = False,
) -> Capture:
    """Turn a raw trace into display frames, outermost first.

    Frames named in ``skip`` are dropped, and the entry point is kept only
    where it is first met scanning outward from the program's top level,
    so recursive re-entry collapses onto the outermost occurrence.

    A piped program calling from its top level has a one record trace; it
    still gets an entry point frame so that the report is never empty.
    """
    if trace is None:
        trace = context.trace(sys._getframe(1).f_lineno) if context else live_trace()
    skip = frozenset(skip)

    frames: list[StackFrame] = []
    longest = 0
    if piped and len(trace) == 1:
        frames.append(StackFrame(entry_point, trace[0].lineno))
        longest = len(entry_point)

    seen_entry = False
    for i in range(len(trace) - 1, 0, -1):
        name = trace[i].name
        if name in skip:
            continue
        if name == entry_point:
            if seen_entry:
                continue
            seen_entry = True
        longest = max(longest, len(name))
        frames.append(StackFrame(name, trace[i - 1].lineno))

    return Capture(frames, longest)
