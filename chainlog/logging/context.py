# chainlog - log context
"""Context tags, additional fields and timestamp diffs"""

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

# Keys computed by the structured renderer, never taken from additional fields
RESERVED_KEYS = frozenset({
    "timestamp", "service", "level", "context", "data", "tags", "timestampDiff",
})


def now_ms() -> int:
    return time.time_ns() // 1_000_000


class TimestampTracker:
    """Milliseconds elapsed between consecutive emitted records"""

    def __init__(self, clock: Optional[Callable[[], int]] = None):
        self._clock = clock or now_ms
        self.last_timestamp_ms = 0

    def tick(self) -> int:
        """Diff since the previous tick, 0 on the first tick after a reset"""
        now = int(self._clock())
        if self.last_timestamp_ms <= 0:
            self.last_timestamp_ms = now
            return 0
        if now < self.last_timestamp_ms:
            return 0
        diff = now - self.last_timestamp_ms
        self.last_timestamp_ms = now
        return diff

    def reset(self) -> None:
        self.last_timestamp_ms = 0


@dataclass
class LogContext:
    """Context of one logger: source name, persistent tags and fields"""
    context: Optional[str] = None
    ctx_params: List[str] = field(default_factory=list)
    additional_fields: Dict[str, Any] = field(default_factory=dict)
    tracker: TimestampTracker = field(default_factory=TimestampTracker)

    def overlay(self) -> Dict[str, Any]:
        """Additional fields that may be merged into a record"""
        return {
            key: value for key, value in self.additional_fields.items()
            if key not in RESERVED_KEYS
        }

    def tags(self, params: List[Any]) -> List[Any]:
        return [*self.ctx_params, *params]

    def segments(self, params: List[Any]) -> List[str]:
        """Context name, persistent tags and per-call params as text"""
        parts = [self.context, *self.ctx_params, *params]
        return [str(part) for part in parts if part is not None and part != ""]

    def timestamp_diff(self) -> int:
        return self.tracker.tick()
