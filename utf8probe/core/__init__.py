"""Core modules for utf8probe."""

from .config import ConfigError, ScanConfig, load_config, parse_config  # noqa: F401
from .report import format_line, render_lines, summary_payload  # noqa: F401
from .scanlog import ScanLog  # noqa: F401
from .scanner import LineScanner, LineVerdict, ScanSummary  # noqa: F401
from .validator import (  # noqa: F401
    REJECT,
    SINGLE,
    SequenceValidator,
    classify_byte,
    is_continuation,
    validate,
)
