# chainlog - logger
"""Chainable per-instance logger"""

import copy
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any, Callable, List, Optional, Set

import structlog

from ..core.config import get_settings
from .context import RESERVED_KEYS, LogContext, TimestampTracker
from .filters import LevelFilter, SensitiveDataFilter, is_structured
from .formatters import LogFormatter
from .handlers import ConsoleSink, LogSink
from .standard import LoggerOptions, LogLevel, default_log_levels, merge_options

logger = structlog.get_logger(__name__)


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (str, bytes, LogLevel)) or not isinstance(value, Iterable):
        return [value]
    return list(value)


def _caller_name(caller: Any) -> Optional[str]:
    if caller is None or isinstance(caller, str):
        return caller
    if isinstance(caller, type):
        return caller.__name__
    return type(caller).__name__


class Logger:
    """
    Logger owning its own levels, redaction keys, fields and tags.

    Configuration methods return the logger so calls can be chained::

        logger = Logger("Orders").enable_json_format().add_field("region", "eu")
        logger.log({"order": 42, "token": "abc"}, "checkout")

    Args:
        context: source name shown with every record
        options: per-instance options, highest priority
        caller: object or name used as the context when none is given
        defaults: module-wide options, below ``options``
        sink: destination, standard streams by default
        clock: millisecond clock for timestamp diffs
        now: datetime source for record timestamps
    """

    def __init__(
        self,
        context: Optional[str] = None,
        options: Any = None,
        caller: Any = None,
        defaults: Any = None,
        sink: Optional[LogSink] = None,
        clock: Optional[Callable[[], int]] = None,
        now: Optional[Callable[[], datetime]] = None,
    ):
        settings = get_settings()
        self.options: LoggerOptions = merge_options(defaults, options)
        if self.options.id is None:
            self.options.id = settings.SERVICE_NAME
        if "colors" not in self.options.model_fields_set and settings.NO_COLOR:
            self.options.colors = False

        self._redactor = SensitiveDataFilter(self.options.redact_keys)
        self.options.redact_keys = self._redactor.keys

        levels = self.options.log_levels
        self._levels = LevelFilter(default_log_levels() if levels is None else levels)
        if self.options.debug:
            self._levels.add(LogLevel.DEBUG)
        self.options.log_levels = self._levels.levels

        self._context = LogContext(
            context=context or _caller_name(caller) or self.options.context,
            tracker=TimestampTracker(clock),
        )
        self._formatter = LogFormatter(self.options, self._redactor, now)
        self.sink = sink or ConsoleSink()

    # ---------- state ----------

    @property
    def context(self) -> Optional[str]:
        return self._context.context

    @property
    def service_id(self) -> str:
        return self.options.id

    @property
    def log_levels(self) -> Set[LogLevel]:
        return set(self._levels.levels)

    @property
    def redact_keys(self) -> Set[str]:
        return set(self._redactor.keys)

    @property
    def ctx_params(self) -> List[str]:
        return list(self._context.ctx_params)

    @property
    def additional_fields(self) -> dict:
        return dict(self._context.additional_fields)

    def is_level_enabled(self, level: Any) -> bool:
        return self._levels.filter(level)

    # ---------- configuration ----------

    def set_context(self, context: Optional[str]) -> "Logger":
        self._context.context = None if context is None else str(context)
        return self

    def set_options(self, options: Any) -> "Logger":
        """Merge options into the current ones"""
        update = LoggerOptions.coerce(options)
        changed = update.model_fields_set
        for name in changed:
            if name == "id" and update.id is None:
                continue
            setattr(self.options, name, copy.copy(getattr(update, name)))

        if "redact_keys" in changed:
            self._redactor.set_keys(update.redact_keys)
        if "log_levels" in changed:
            levels = update.log_levels
            self._levels.set_levels(default_log_levels(self.options.debug) if levels is None else levels)
        if "debug" in changed:
            if update.debug:
                self._levels.add(LogLevel.DEBUG)
            else:
                self._levels.remove(LogLevel.DEBUG)

        self.options.redact_keys = self._redactor.keys
        self.options.log_levels = self._levels.levels
        return self

    def set_log_levels(self, levels: Any) -> "Logger":
        self._levels.set_levels(_as_list(levels))
        self.options.log_levels = self._levels.levels
        return self

    def add_log_level(self, *levels: Any) -> "Logger":
        self._levels.add(*levels)
        return self

    def remove_log_level(self, *levels: Any) -> "Logger":
        self._levels.remove(*levels)
        return self

    def set_ctx_params(self, params: Any) -> "Logger":
        self._context.ctx_params = [str(param) for param in _as_list(params) if param is not None]
        return self

    def reset_timestamp(self) -> "Logger":
        self._context.tracker.reset()
        return self

    def enable_json_format(self) -> "Logger":
        self.options.json_format = True
        return self

    def disable_json_format(self) -> "Logger":
        self.options.json_format = False
        return self

    def enable_pretty_print(self) -> "Logger":
        self.options.pretty_print_json = True
        return self

    def disable_pretty_print(self) -> "Logger":
        self.options.pretty_print_json = False
        return self

    def enable_timestamp(self) -> "Logger":
        self.options.timestamp = True
        return self

    def disable_timestamp(self) -> "Logger":
        self.options.timestamp = False
        return self

    def add_field(self, key: Any, value: Any) -> "Logger":
        key = str(key)
        if key in RESERVED_KEYS:
            logger.warning("reserved field ignored", field=key)
            return self
        self._context.additional_fields[key] = value
        return self

    def add_fields(self, fields: Any) -> "Logger":
        if not isinstance(fields, Mapping):
            logger.warning("fields ignored", type=type(fields).__name__)
            return self
        for key, value in fields.items():
            self.add_field(key, value)
        return self

    def remove_field(self, *keys: Any) -> "Logger":
        for key in keys:
            self._context.additional_fields.pop(str(key), None)
        return self

    def set_redact_keys(self, keys: Any) -> "Logger":
        self._redactor.set_keys(_as_list(keys))
        self.options.redact_keys = self._redactor.keys
        return self

    def add_redact_key(self, *keys: Any) -> "Logger":
        self._redactor.add(*keys)
        return self

    def remove_redact_key(self, *keys: Any) -> "Logger":
        self._redactor.remove(*keys)
        return self

    # ---------- logging ----------

    def log(self, message: Any, *params: Any) -> None:
        self._emit(LogLevel.LOG, message, params)

    def error(self, message: Any, *params: Any) -> None:
        self._emit(LogLevel.ERROR, message, params)

    def warn(self, message: Any, *params: Any) -> None:
        self._emit(LogLevel.WARN, message, params)

    def debug(self, message: Any, *params: Any) -> None:
        self._emit(LogLevel.DEBUG, message, params)

    def verbose(self, message: Any, *params: Any) -> None:
        self._emit(LogLevel.VERBOSE, message, params)

    def fatal(self, message: Any, *params: Any) -> None:
        self._emit(LogLevel.FATAL, message, params)

    def info(self, message: Any, *params: Any) -> None:
        self._emit(LogLevel.INFO, message, params)

    def _emit(self, level: LogLevel, message: Any, params: tuple) -> None:
        if not self._levels.filter(level):
            return

        processed = [
            self._redactor.redact(param) if is_structured(param) else param
            for param in params
        ]
        try:
            line = self._formatter.format(level, message, processed, self._context)
        except Exception as e:
            logger.error("log record could not be rendered", log_level=level.value, error=repr(e))
            line = f"{level.value.upper()} <unrenderable {type(message).__name__}>"

        self.sink.write(level, line)
