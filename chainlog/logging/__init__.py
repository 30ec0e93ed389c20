# chainlog - logging
"""Level gating, redaction, context tagging and record rendering"""

from .standard import (
    DEFAULT_LEVEL_FORMATS,
    DEFAULT_REDACT_KEYS,
    LevelFormat,
    LoggerOptions,
    LogLevel,
    merge_options,
    setup_logging,
    get_logger,
)
from .colors import clc
from .context import (
    LogContext,
    TimestampTracker,
)
from .filters import (
    LevelFilter,
    SensitiveDataFilter,
)
from .formatters import LogFormatter
from .handlers import (
    ConsoleSink,
    LoggingSink,
    LogSink,
)
from .logger import Logger
from .module import LoggerModule

__all__ = [
    "DEFAULT_LEVEL_FORMATS",
    "DEFAULT_REDACT_KEYS",
    "LevelFormat",
    "LoggerOptions",
    "LogLevel",
    "merge_options",
    "setup_logging",
    "get_logger",
    "clc",
    "LogContext",
    "TimestampTracker",
    "LevelFilter",
    "SensitiveDataFilter",
    "LogFormatter",
    "ConsoleSink",
    "LoggingSink",
    "LogSink",
    "Logger",
    "LoggerModule",
]
