# chainlog - log filters
"""Level gating and sensitive data redaction"""

import dataclasses
from collections.abc import Mapping
from typing import Any, Iterable, Optional, Set

import structlog
from pydantic import BaseModel

from .standard import LogLevel

logger = structlog.get_logger(__name__)

REDACTED = "[REDACTED]"
CIRCULAR = "[Circular]"
TRUNCATED = "[Truncated]"

# Nesting depth past which values are replaced instead of descended into
MAX_DEPTH = 100

_JSON_KEY_TYPES = (str, int, float, bool)


def is_structured(value: Any) -> bool:
    """Whether a value is rendered as a structure rather than as text"""
    if isinstance(value, (Mapping, list, tuple, BaseModel)):
        return True
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _fields_of(value: Any) -> Optional[Mapping]:
    if isinstance(value, Mapping):
        return value
    if isinstance(value, BaseModel):
        return dict(value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    return None


class LevelFilter:
    """Decides per call whether a level is active"""

    def __init__(self, levels: Iterable = ()):
        self.levels: Set[LogLevel] = set()
        self.set_levels(levels)

    def filter(self, level) -> bool:
        return LogLevel.parse(level) in self.levels

    should_emit = filter

    def set_levels(self, levels: Iterable) -> None:
        self.levels = set()
        self.add(*(levels or ()))

    def add(self, *levels) -> None:
        for name in levels:
            level = LogLevel.parse(name)
            if level is None:
                logger.warning("unknown log level ignored", log_level=name)
                continue
            self.levels.add(level)

    def remove(self, *levels) -> None:
        for name in levels:
            level = LogLevel.parse(name)
            if level is not None:
                self.levels.discard(level)


class SensitiveDataFilter:
    """
    Recursive redaction of sensitive keys.

    Keys are matched case-insensitively against the configured set and their
    values are replaced with ``[REDACTED]`` without being descended into.
    Lists and tuples come back as lists, mappings, pydantic models and
    dataclass instances come back as dicts. Every other value is returned as is.
    """

    def __init__(self, keys: Iterable[str] = (), max_depth: int = MAX_DEPTH):
        self.keys: Set[str] = set()
        self.max_depth = max_depth
        self.set_keys(keys)

    def set_keys(self, keys: Iterable[str]) -> None:
        self.keys = set()
        self.add(*(keys or ()))

    def add(self, *keys) -> None:
        for key in keys:
            if key is None:
                continue
            self.keys.add(str(key).lower())

    def remove(self, *keys) -> None:
        for key in keys:
            if key is not None:
                self.keys.discard(str(key).lower())

    def is_sensitive(self, key: Any) -> bool:
        return str(key).lower() in self.keys

    def redact(self, value: Any) -> Any:
        return self._redact(value, set(), 0)

    def _redact(self, value: Any, ancestors: Set[int], depth: int) -> Any:
        if isinstance(value, (str, bytes, int, float, bool)) or value is None:
            return value
        if isinstance(value, BaseException):
            return value

        fields = _fields_of(value)
        if fields is None and not isinstance(value, (list, tuple)):
            return value

        if id(value) in ancestors:
            return CIRCULAR
        if depth >= self.max_depth:
            return TRUNCATED

        ancestors.add(id(value))
        try:
            if fields is None:
                return [self._redact(item, ancestors, depth + 1) for item in value]

            result = {}
            for key, item in fields.items():
                if not (key is None or isinstance(key, _JSON_KEY_TYPES)):
                    key = str(key)
                if self.is_sensitive(key):
                    result[key] = REDACTED
                else:
                    result[key] = self._redact(item, ancestors, depth + 1)
            return result
        finally:
            ancestors.discard(id(value))
