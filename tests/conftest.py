# chainlog - test fixtures
"""Shared fixtures"""

import logging
from datetime import datetime, timezone

import pytest
import structlog

from chainlog.core.config import get_settings
from chainlog.logging import Logger, LoggerModule, LogSink

FIXED_NOW = datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)


class MemorySink(LogSink):
    """Keeps every write with its severity bucket"""

    def __init__(self):
        self.records = []

    def log(self, line):
        self.records.append(("log", line))

    def error(self, line):
        self.records.append(("error", line))

    def warn(self, line):
        self.records.append(("warn", line))

    def info(self, line):
        self.records.append(("info", line))

    def debug(self, line):
        self.records.append(("debug", line))

    @property
    def lines(self):
        return [line for _, line in self.records]

    @property
    def last(self):
        return self.records[-1][1]


class FakeClock:
    """Millisecond clock moved by hand"""

    def __init__(self, now=1_000):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    monkeypatch.delenv("SERVICE_NAME", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)
    get_settings.cache_clear()
    LoggerModule.reset_global()
    yield
    get_settings.cache_clear()
    LoggerModule.reset_global()


@pytest.fixture
def reset_structlog():
    yield
    structlog.reset_defaults()
    diagnostics = logging.getLogger("chainlog")
    diagnostics.handlers = []
    diagnostics.propagate = True
    diagnostics.setLevel(logging.NOTSET)


@pytest.fixture
def sink():
    return MemorySink()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_logger(sink, clock):
    """Logger writing to the memory sink, colors off, fixed timestamps"""
    def factory(context="Test", **options):
        options.setdefault("colors", False)
        return Logger(context, options, sink=sink, clock=clock, now=lambda: FIXED_NOW)
    return factory
