# chainlog - sink tests
"""Console and standard logging sinks"""

import io
import logging

import pytest

from chainlog.logging import ConsoleSink, Logger, LoggingSink, LogLevel, LogSink
from chainlog.logging.handlers import SEVERITY_BUCKETS


class TestSeverityBuckets:
    """Level to bucket mapping"""

    def test_every_level_has_a_bucket(self):
        assert set(SEVERITY_BUCKETS) == set(LogLevel)

    def test_buckets(self):
        assert SEVERITY_BUCKETS[LogLevel.FATAL] == "error"
        assert SEVERITY_BUCKETS[LogLevel.VERBOSE] == "log"

    def test_sink_is_abstract(self):
        with pytest.raises(TypeError):
            LogSink()


class TestConsoleSink:
    """Standard streams"""

    def test_routing(self, capsys):
        logger = Logger("Test", {"colors": False, "debug": True}, sink=ConsoleSink())

        logger.log("to-out")
        logger.info("info-out")
        logger.debug("debug-out")
        logger.warn("to-err")
        logger.error("error-err")
        logger.fatal("fatal-err")

        captured = capsys.readouterr()
        assert [line.split()[-1] for line in captured.out.splitlines()] == [
            "to-out", "info-out", "debug-out",
        ]
        assert [line.split()[-1] for line in captured.err.splitlines()] == [
            "to-err", "error-err", "fatal-err",
        ]

    def test_explicit_streams(self):
        out, err = io.StringIO(), io.StringIO()
        sink = ConsoleSink(stdout=out, stderr=err)

        sink.write(LogLevel.VERBOSE, "a")
        sink.write(LogLevel.WARN, "b")

        assert out.getvalue() == "a\n"
        assert err.getvalue() == "b\n"

    def test_write_failures_propagate(self):
        stream = io.StringIO()
        stream.close()
        logger = Logger("Test", sink=ConsoleSink(stdout=stream))

        with pytest.raises(ValueError):
            logger.log("closed")


class TestLoggingSink:
    """Standard library adapter"""

    def test_levels(self, caplog):
        caplog.set_level(logging.DEBUG, logger="chainlog_test_output")
        logger = Logger(
            "Test",
            {"colors": False, "debug": True},
            sink=LoggingSink("chainlog_test_output"),
        )

        logger.log("a")
        logger.debug("b")
        logger.warn("c")
        logger.fatal("d")

        records = [r for r in caplog.records if r.name == "chainlog_test_output"]
        assert [r.levelno for r in records] == [
            logging.INFO, logging.DEBUG, logging.WARNING, logging.ERROR,
        ]
        assert records[2].getMessage().endswith("[Test] c")

    def test_logger_instance(self):
        target = logging.getLogger("chainlog_test_instance")

        assert LoggingSink(target).logger is target
        assert LoggingSink().logger is logging.getLogger()
