# chainlog - logging standard
"""Log levels, logger options and diagnostics setup"""

import copy
import logging
import sys
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any, Callable, Dict, Optional, Set

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..core.config import get_settings
from .colors import clc


class LogLevel(str, Enum):
    """Log levels"""
    LOG = "log"
    ERROR = "error"
    WARN = "warn"
    DEBUG = "debug"
    VERBOSE = "verbose"
    FATAL = "fatal"
    INFO = "info"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            lowered = value.lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None

    @classmethod
    def parse(cls, value: Any) -> Optional["LogLevel"]:
        """Level for a name, or None when the name is unknown"""
        try:
            return cls(value)
        except (ValueError, TypeError):
            return None


class LevelFormat(BaseModel):
    """Colors of one level: the level tag and the message body"""
    level_color: Optional[Callable[[str], str]] = None
    message_color: Optional[Callable[[str], str]] = None


DEFAULT_LEVEL_FORMATS: Dict[LogLevel, LevelFormat] = {
    LogLevel.LOG: LevelFormat(level_color=clc.green_bright),
    LogLevel.ERROR: LevelFormat(level_color=clc.red_bright, message_color=clc.red_bright),
    LogLevel.WARN: LevelFormat(level_color=clc.yellow_bright, message_color=clc.yellow_bright),
    LogLevel.INFO: LevelFormat(level_color=clc.cyan_bright, message_color=clc.cyan_bright),
    LogLevel.DEBUG: LevelFormat(level_color=clc.magenta_bright, message_color=clc.magenta_bright),
    LogLevel.VERBOSE: LevelFormat(level_color=clc.blue_bright, message_color=clc.blue_bright),
}

DEFAULT_REDACT_KEYS = frozenset({"password", "token", "authorization"})


def default_log_levels(debug: bool = False) -> Set[LogLevel]:
    """Levels enabled when none are configured explicitly"""
    levels = set(LogLevel)
    if not debug:
        levels.discard(LogLevel.DEBUG)
    return levels


class LoggerOptions(BaseModel):
    """
    Logger options.

    Only explicitly given fields take part in merging, so a layer of module
    defaults never overrides what a caller set.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: Optional[str] = None
    context: Optional[str] = None
    debug: bool = False
    json_format: bool = False
    pretty_print_json: bool = False
    timestamp: bool = False
    colors: bool = True
    log_levels: Optional[Set[LogLevel]] = None
    redact_keys: Set[str] = Field(default_factory=lambda: set(DEFAULT_REDACT_KEYS))
    level_formats: Dict[LogLevel, LevelFormat] = Field(
        default_factory=lambda: dict(DEFAULT_LEVEL_FORMATS)
    )

    @field_validator("log_levels", mode="before")
    @classmethod
    def _parse_levels(cls, value):
        if isinstance(value, str):
            value = [value]
        if value is None or not isinstance(value, Iterable):
            return value
        return [level for level in map(LogLevel.parse, value) if level is not None]

    @field_validator("redact_keys", mode="before")
    @classmethod
    def _parse_redact_keys(cls, value):
        if value is None:
            return set()
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, Iterable):
            return value
        return {str(key).lower() for key in value if key is not None}

    @field_validator("level_formats", mode="before")
    @classmethod
    def _parse_level_formats(cls, value):
        if not isinstance(value, Mapping):
            return value
        parsed = {}
        for name, level_format in value.items():
            level = LogLevel.parse(name)
            if level is not None:
                parsed[level] = level_format
        return parsed

    @classmethod
    def coerce(cls, value: Any) -> "LoggerOptions":
        """
        Build options from a model, a mapping or None without raising.

        Fields that fail validation are dropped and reported.
        """
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if isinstance(value, BaseModel):
            value = {name: getattr(value, name) for name in value.model_fields_set}
        if not isinstance(value, Mapping):
            get_logger(__name__).warning("logger options ignored", type=type(value).__name__)
            return cls()

        data = dict(value)
        while True:
            try:
                return cls.model_validate(data)
            except ValidationError as exc:
                invalid = {err["loc"][0] for err in exc.errors() if err["loc"]}
                invalid &= set(data)
                if not invalid:
                    get_logger(__name__).warning("logger options ignored", error=str(exc))
                    return cls()
                get_logger(__name__).warning(
                    "invalid logger options ignored",
                    fields=sorted(str(name) for name in invalid),
                )
                for name in invalid:
                    data.pop(name)


def merge_options(*layers: Any) -> LoggerOptions:
    """Merge option layers left to right, later layers win"""
    data: Dict[str, Any] = {}
    for layer in layers:
        options = LoggerOptions.coerce(layer)
        for name in options.model_fields_set:
            data[name] = copy.copy(getattr(options, name))
    return LoggerOptions.model_validate(data)


def setup_logging(level: Optional[str] = None, json_format: Optional[bool] = None) -> None:
    """
    Configure the diagnostics the library emits about itself

    Args:
        level: level name, defaults to LOG_LEVEL
        json_format: JSON output, defaults to LOG_FORMAT == "json"
    """
    settings = get_settings()
    level = (level or settings.LOG_LEVEL).upper()
    if json_format is None:
        json_format = settings.LOG_FORMAT == "json"

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_format:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=not settings.NO_COLOR))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))

    diagnostics = logging.getLogger("chainlog")
    diagnostics.handlers = [handler]
    diagnostics.setLevel(getattr(logging, level, logging.INFO))
    diagnostics.propagate = False


def get_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    """Diagnostics logger"""
    return structlog.get_logger(name)
