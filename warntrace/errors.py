from __future__ import annotations


class WarntraceError(Exception):
    """Base class for errors raised by warntrace."""


class InvalidNumericInput(WarntraceError, ValueError):
    """A value that must be a non-negative integer failed validation.

    This is the only fatal condition: the emitter converts it into
    :func:`warntrace.tty.die` before anything is written.
    """
