# chainlog - record formatters
"""Structured (JSON) and human-readable renderers"""

import json
import pprint
import sys
import traceback
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Set

from .colors import clc
from .context import LogContext
from .filters import CIRCULAR, SensitiveDataFilter, is_structured
from .standard import LevelFormat, LoggerOptions, LogLevel

# Width of the level tag, the longest level name is VERBOSE
LEVEL_WIDTH = 7


def format_timestamp(dt: datetime) -> str:
    """ISO-8601 with milliseconds, UTC as Z"""
    dt = dt.astimezone(timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def stack_lines(error: BaseException) -> List[str]:
    lines = traceback.format_exception(type(error), error, error.__traceback__, chain=False)
    return "".join(lines).rstrip("\n").splitlines()


def format_error(error: BaseException, _seen: Optional[Set[int]] = None) -> Dict[str, Any]:
    """Reduce an exception to name, message, stack and cause"""
    seen = _seen if _seen is not None else set()
    seen.add(id(error))

    result: Dict[str, Any] = {
        "name": type(error).__name__,
        "message": str(error),
        "stack": stack_lines(error),
    }
    cause = error.__cause__
    if cause is not None:
        result["cause"] = CIRCULAR if id(cause) in seen else format_error(cause, seen)
    return result


class LogFormatter:
    """
    Renders one record.

    ``format_json`` builds the structured record, ``format_text`` the
    colored console line. Both consume at most one timestamp tick.
    """

    def __init__(
        self,
        options: LoggerOptions,
        redactor: SensitiveDataFilter,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.options = options
        self.redactor = redactor
        self._now = clock or (lambda: datetime.now(timezone.utc))

    def format(self, level: LogLevel, message: Any, params: List[Any], context: LogContext) -> str:
        if self.options.json_format:
            return self.format_json(level, message, params, context)
        return self.format_text(level, message, params, context)

    # ---------- structured ----------

    def format_json(self, level: LogLevel, message: Any, params: List[Any], context: LogContext) -> str:
        entry = self.redactor.redact(context.overlay())
        entry.update({
            "timestamp": format_timestamp(self._now()),
            "service": self.options.id or "",
            "level": level.value.upper(),
            "context": context.context,
            "data": self.format_data(message),
        })

        tags = context.tags([self._tag_value(param) for param in params])
        if tags:
            entry["tags"] = tags

        if self.options.timestamp:
            entry["timestampDiff"] = context.timestamp_diff()

        indent = 2 if self.options.pretty_print_json else None
        return json.dumps(entry, ensure_ascii=False, default=str, indent=indent)

    def format_data(self, message: Any) -> Any:
        if isinstance(message, BaseException):
            return {"error": format_error(message)}
        if is_structured(message):
            return self.redactor.redact(message)
        return {"message": str(message)}

    def _tag_value(self, param: Any) -> Any:
        if isinstance(param, BaseException):
            return format_error(param)
        return param

    # ---------- text ----------

    def format_text(self, level: LogLevel, message: Any, params: List[Any], context: LogContext) -> str:
        level_format = self.options.level_formats.get(level) or LevelFormat()
        texts = [self._param_text(param) for param in params if param is not None]

        level_tag = self._paint(clc.bold, f"{level.value.upper():>{LEVEL_WIDTH}}")
        level_tag = self._paint(level_format.level_color, level_tag)

        if isinstance(message, str):
            body = self._paint(level_format.message_color, message)
            if self.options.timestamp:
                body += self._paint(clc.yellow, f" +{context.timestamp_diff()}ms")
        else:
            if self.options.timestamp:
                texts.append(f"+{context.timestamp_diff()}ms")
            body = self._inspect(message)

        parts = [self._prefix(), level_tag]
        segments = context.segments(texts)
        if segments:
            parts.append(self._paint(clc.yellow, "".join(f"[{s}]" for s in segments)))
        parts.append(body)
        return " ".join(parts)

    def _prefix(self) -> str:
        timestamp = self._paint(clc.gray, format_timestamp(self._now()))
        if not self.options.id:
            return timestamp
        return f"{self._paint(clc.green, f'[{self.options.id}]')} {timestamp}"

    def _inspect(self, message: Any) -> str:
        if isinstance(message, BaseException):
            lines = traceback.format_exception(type(message), message, message.__traceback__)
            return "".join(lines).rstrip("\n")
        if not is_structured(message):
            return str(message)

        value = self.redactor.redact(message)
        if self.options.pretty_print_json:
            return pprint.pformat(value, indent=2, width=80, sort_dicts=False)
        return pprint.pformat(value, width=sys.maxsize, sort_dicts=False)

    def _param_text(self, param: Any) -> str:
        if isinstance(param, BaseException):
            return f"{type(param).__name__}: {param}"
        if isinstance(param, (dict, list)):
            return json.dumps(param, ensure_ascii=False, default=str)
        return str(param)

    def _paint(self, color: Optional[Callable[[str], str]], text: str) -> str:
        if color is None or not self.options.colors:
            return text
        return color(text)
