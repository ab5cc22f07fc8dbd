from __future__ import annotations

import sys
import warnings
from collections.abc import Iterable, Sequence
from typing import Any, NoReturn, TextIO

from .config import Config, get_config
from .errors import InvalidNumericInput
from .layout import (
    ReportGeometry,
    build_footer,
    build_frame_lines,
    build_header,
    build_message_lines,
)
from .logging import logger
from .palette import (
    DETAILS_ROLE,
    EXTENDED_ROLE,
    Palette,
    Severity,
    resolve_palette,
    strip_ansi,
)
from .stack import (
    DEFAULT_SKIP,
    ENTRY_POINT,
    CallRecord,
    capture,
    context,
    live_trace,
)
from .text import DIGITS_RE, add_period, combine, remove_period, title_case

DEFAULT_MESSAGE = "A warning was raised on this line"
EXTENDED_LABEL = "[EXTND]"
DETAILS_LABEL = "[DETLS]"
TRACE_ROUTINE = "stack_trace"

# Narrowest message column; narrower terminals let lines run past the edge
MIN_MESSAGE_WIDTH = 20

# Frames of the warnings machinery between warnings.warn() and our hook
WARNINGS_SKIP = frozenset(
    {"_showwarning", "_showwarnmsg", "_showwarnmsg_impl", "warn_explicit"}
)


def _is_code(arg: Any) -> bool:
    if isinstance(arg, bool):
        return False
    if isinstance(arg, int):
        return arg >= 0
    return isinstance(arg, str) and bool(DIGITS_RE.fullmatch(arg))


def parse_args(args: Sequence[Any]) -> tuple[Severity, int | None, str, list[str]]:
    """Split loose ``warn`` arguments into level, code, message and details.

    A leading token that names no severity is message text, and the level
    falls back to INFO. A code is only taken when the next argument is a
    non-negative integer.
    """
    args = list(args)
    level = Severity.parse(args[0]) if args else None
    if level is None:
        level = Severity.INFO
    else:
        args.pop(0)

    code = None
    if args and _is_code(args[0]):
        code = int(str(args.pop(0)), 10)

    message = str(args.pop(0)) if args else ""
    details = [str(arg) for arg in args]
    return level, code, message, details


def normalize_message(message: str, code: Any = None) -> str:
    """Message with a trailing period and, if given, the ``Code: (N)`` suffix.

    The code must be a non-negative integer or a string of digits; anything
    else raises InvalidNumericInput.
    """
    message = add_period(message or DEFAULT_MESSAGE) or DEFAULT_MESSAGE
    if code is None:
        return message
    if not _is_code(code):
        raise InvalidNumericInput("Code must be a valid non-negative integer.")
    return f"{message} Code: ({int(str(code), 10)})"


def normalize_details(details: Iterable[str]) -> str:
    joined = " ".join(str(d) for d in details if d != "")
    return (add_period(joined) or "") if joined else ""


def _locate(trace: Sequence[CallRecord], skip: Iterable[str]) -> tuple[str, int]:
    """Name and line of the innermost frame that is not skipped."""
    skip = frozenset(skip)
    for i in range(1, len(trace)):
        if trace[i].name not in skip:
            return trace[i].name, trace[i - 1].lineno
    return ENTRY_POINT, trace[0].lineno if trace else 0


def format_prefix(
    palette: Palette, color: str, label: str, script: str, function: str, line: int
) -> str:
    bold, reset = palette.bold, palette.reset
    return f"{bold}{color}{label}{reset} {bold}[{script}:{function}:{line}]{reset} "


class Emitter:
    """Writes leveled diagnostics with an optional stack block.

    Every event is assembled in full and written with one call, so a fatal
    validation error never leaves a partial report behind.
    """

    def __init__(
        self,
        file: TextIO | None = None,
        *,
        config: Config | None = None,
        palette: Palette | None = None,
        skip: Iterable[str] = DEFAULT_SKIP,
    ) -> None:
        self.file = file if file is not None else sys.stderr
        self.config = config or get_config()
        self.palette = palette if palette is not None else resolve_palette(self.file)
        self.skip = frozenset(skip)

    def _trace(self, trace: Sequence[CallRecord] | None) -> list[CallRecord]:
        if trace is not None:
            return list(trace)
        # Index 0 is the public method that called us
        live = live_trace(1)
        if not context:
            return live
        _, line = _locate(live, self.skip)
        return context.trace(line, TRACE_ROUTINE)

    def warn(
        self,
        level: Any = Severity.INFO,
        code: int | None = None,
        message: str = "",
        details: Iterable[str] = (),
        *,
        trace: Sequence[CallRecord] | None = None,
    ) -> None:
        level = Severity.parse(level) or Severity.INFO
        trace = self._trace(trace)
        try:
            lines = self._warn_lines(level, code, message, details, trace)
        except InvalidNumericInput as e:
            die(1, str(e), file=self.file, config=self.config)
        self.file.write("\n".join(lines) + "\n")

    def stack_trace(
        self,
        level: Any = Severity.INFO,
        message: str = "",
        *,
        trace: Sequence[CallRecord] | None = None,
    ) -> None:
        level = Severity.parse(level) or Severity.INFO
        trace = self._trace(trace)
        try:
            lines = self._block_lines(level, message, trace)
        except InvalidNumericInput as e:
            die(1, str(e), file=self.file, config=self.config)
        self.file.write("\n".join(lines) + "\n")

    def _warn_lines(
        self,
        level: Severity,
        code: int | None,
        message: str,
        details: Iterable[str],
        trace: Sequence[CallRecord],
    ) -> list[str]:
        palette, config = self.palette, self.config
        message = normalize_message(message, code)
        function, line = _locate(trace, self.skip)

        def prefix(color: str, label: str) -> str:
            return format_prefix(palette, color, label, config.script, function, line)

        level_prefix = prefix(palette[level], level.label)
        width = config.width - len(strip_ansi(level_prefix))
        width = max(MIN_MESSAGE_WIDTH, width)
        wrapped = combine(width, message, normalize_details(details))

        lines = [f"{level_prefix}{wrapped.primary}"]
        extended = prefix(palette[EXTENDED_ROLE], EXTENDED_LABEL)
        lines += [f"{extended}{overflow}" for overflow in wrapped.overflow]
        detailed = prefix(palette[DETAILS_ROLE], DETAILS_LABEL)
        lines += [f"{detailed}{secondary}" for secondary in wrapped.secondary]

        if config.stack_trace:
            # The block is always colored as a warning, whatever the level
            lines += self._block_lines(Severity.WARN, message, trace)
        return lines

    def _block_lines(
        self, level: Severity, message: str, trace: Sequence[CallRecord]
    ) -> list[str]:
        palette, config = self.palette, self.config
        color = palette[level]
        frames, longest = capture(self.skip, trace=trace, piped=config.piped)
        label = title_case(TRACE_ROUTINE)
        geometry = ReportGeometry.compute(config.block_width, label, longest)

        lines = [build_header(label, color, geometry, palette)]
        message = add_period(message) if message else ""
        if message:
            lines += build_message_lines(message, color, geometry, palette)
        lines += build_frame_lines(frames, color, geometry, palette)
        lines.append(build_footer(color, geometry, palette))
        lines.append("")
        return lines


def warn(
    *args: Any,
    file: TextIO | None = None,
    config: Config | None = None,
    palette: Palette | None = None,
) -> None:
    """Emit a diagnostic: ``warn([level], [code], message, *details)``.

    Usage:
        warn("Disk almost full")
        warn("ERROR", 2, "Cannot open config", "Using defaults")
    """
    level, code, message, details = parse_args(args)
    Emitter(file, config=config, palette=palette).warn(level, code, message, details)


def stack_trace(
    *args: Any,
    file: TextIO | None = None,
    config: Config | None = None,
    palette: Palette | None = None,
) -> None:
    """Print only the stack block: ``stack_trace([level], *message)``."""
    args = list(args)
    level = Severity.parse(args[0]) if args else None
    if level is None:
        level = Severity.INFO
    else:
        args.pop(0)
    message = " ".join(str(arg) for arg in args)
    Emitter(file, config=config, palette=palette).stack_trace(level, message)


def die(
    status: int = 1,
    message: str = "Unrecoverable error.",
    *details: str,
    file: TextIO | None = None,
    config: Config | None = None,
) -> NoReturn:
    """Report a fatal condition and exit with ``status``."""
    file = file if file is not None else sys.stderr
    config = config or get_config()
    palette = resolve_palette(file)
    function, line = _locate(live_trace(), DEFAULT_SKIP)
    prefix = format_prefix(
        palette,
        palette[Severity.CRITICAL],
        Severity.CRITICAL.label,
        config.script,
        function,
        line,
    )
    message = message or "Unrecoverable error."
    lines = [f"{prefix}{message}"]
    if details:
        lines.append(f"{prefix}Details: {' '.join(details)}")
    reason = remove_period(message) or message
    lines.append(f"{prefix}Unrecoverable error: {reason} (exit status: {status}).")
    file.write("\n".join(lines) + "\n")
    raise SystemExit(status)


# Store the original hook for unload
_original_showwarning = None


def load(file: TextIO | None = None, config: Config | None = None) -> None:
    """Route Python warnings through the diagnostic emitter.

    Replaces warnings.showwarning; call unload() to restore it.

    Usage:
        import warntrace
        warntrace.load()
        warnings.warn("deprecated option")  # printed as [WARN ]
    """
    global _original_showwarning

    if _original_showwarning is None:
        _original_showwarning = warnings.showwarning

    def _showwarning(message, category, filename, lineno, file_=None, line=None):
        try:
            emitter = Emitter(
                file_ or file, config=config, skip=DEFAULT_SKIP | WARNINGS_SKIP
            )
            emitter.warn(
                Severity.WARN,
                None,
                f"{category.__name__}: {message}",
                trace=live_trace(),
            )
        except Exception as e:
            logger.debug(f"Falling back to the default warning display: {e}")
            if _original_showwarning:
                _original_showwarning(message, category, filename, lineno, file_, line)

    warnings.showwarning = _showwarning


def unload() -> None:
    """Restore the warnings display that was active before load()."""
    global _original_showwarning

    if _original_showwarning is not None:
        warnings.showwarning = _original_showwarning
        _original_showwarning = None
