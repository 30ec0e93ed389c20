# chainlog - log sinks
"""Destinations rendered records are written to"""

import logging
import sys
from abc import ABC, abstractmethod
from typing import Dict, Optional, TextIO, Union

from .standard import LogLevel

# Severity bucket each level writes to
SEVERITY_BUCKETS: Dict[LogLevel, str] = {
    LogLevel.LOG: "log",
    LogLevel.VERBOSE: "log",
    LogLevel.INFO: "info",
    LogLevel.DEBUG: "debug",
    LogLevel.WARN: "warn",
    LogLevel.ERROR: "error",
    LogLevel.FATAL: "error",
}


class LogSink(ABC):
    """One write operation per severity bucket"""

    @abstractmethod
    def log(self, line: str) -> None:
        pass

    @abstractmethod
    def error(self, line: str) -> None:
        pass

    @abstractmethod
    def warn(self, line: str) -> None:
        pass

    @abstractmethod
    def info(self, line: str) -> None:
        pass

    @abstractmethod
    def debug(self, line: str) -> None:
        pass

    def write(self, level: LogLevel, line: str) -> None:
        getattr(self, SEVERITY_BUCKETS[level])(line)


class ConsoleSink(LogSink):
    """Standard streams: warnings and errors to stderr, the rest to stdout"""

    def __init__(self, stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None):
        self._stdout = stdout
        self._stderr = stderr

    @property
    def stdout(self) -> TextIO:
        return self._stdout or sys.stdout

    @property
    def stderr(self) -> TextIO:
        return self._stderr or sys.stderr

    def _emit(self, stream: TextIO, line: str) -> None:
        stream.write(line + "\n")
        stream.flush()

    def log(self, line: str) -> None:
        self._emit(self.stdout, line)

    def info(self, line: str) -> None:
        self._emit(self.stdout, line)

    def debug(self, line: str) -> None:
        self._emit(self.stdout, line)

    def warn(self, line: str) -> None:
        self._emit(self.stderr, line)

    def error(self, line: str) -> None:
        self._emit(self.stderr, line)


class LoggingSink(LogSink):
    """Forwards rendered records to a standard library logger"""

    def __init__(self, logger: Union[logging.Logger, str, None] = None):
        if logger is None or isinstance(logger, str):
            logger = logging.getLogger(logger)
        self.logger = logger

    def log(self, line: str) -> None:
        self.logger.info(line)

    def info(self, line: str) -> None:
        self.logger.info(line)

    def debug(self, line: str) -> None:
        self.logger.debug(line)

    def warn(self, line: str) -> None:
        self.logger.warning(line)

    def error(self, line: str) -> None:
        self.logger.error(line)
