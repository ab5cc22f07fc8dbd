from .config import Config, get_config
from .errors import InvalidNumericInput, WarntraceError
from .html import html_report
from .palette import Palette, Severity
from .stack import capture, context, traced
from .text import combine, format_number, wrap
from .tty import Emitter, die, load, stack_trace, unload, warn

__all__ = [
    "warn",
    "stack_trace",
    "die",
    "load",
    "unload",
    "Emitter",
    "Config",
    "get_config",
    "Palette",
    "Severity",
    "capture",
    "context",
    "traced",
    "combine",
    "wrap",
    "format_number",
    "html_report",
    "WarntraceError",
    "InvalidNumericInput",
]
