# chainlog
"""Per-instance structured logging with redaction and context tags"""

from .logging import (
    ConsoleSink,
    Logger,
    LoggerModule,
    LoggerOptions,
    LoggingSink,
    LogLevel,
    LogSink,
)

__version__ = "1.0.0"

__all__ = [
    "ConsoleSink",
    "Logger",
    "LoggerModule",
    "LoggerOptions",
    "LoggingSink",
    "LogLevel",
    "LogSink",
]
