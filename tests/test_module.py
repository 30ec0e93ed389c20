# chainlog - module tests
"""Module-wide defaults"""

import json

from chainlog.logging import Logger, LoggerModule


class OrderService:
    pass


class TestLoggerModule:
    """Module wiring"""

    def test_for_root_registers_global(self, sink):
        module = LoggerModule.for_root({"id": "app"}, context="Root", sink=sink)

        assert LoggerModule.get_global() is module
        assert isinstance(module.logger, Logger)
        assert module.logger.context == "Root"
        assert module.logger.service_id == "app"

    def test_not_global(self, sink):
        LoggerModule.for_root(is_global=False, sink=sink)

        assert LoggerModule.get_global() is None

    def test_create_logger_uses_module_defaults(self, sink):
        module = LoggerModule.for_root({"json_format": True, "id": "app"}, sink=sink)

        logger = module.create_logger(caller=OrderService(), options={"id": "orders"})
        logger.log("hi")

        record = json.loads(sink.last)
        assert record["context"] == "OrderService"
        assert record["service"] == "orders"

    def test_created_loggers_are_independent(self, sink):
        module = LoggerModule.for_root({"redact_keys": ["secret"]}, sink=sink)

        first = module.create_logger("First").add_redact_key("pin")
        second = module.create_logger("Second")

        assert first.redact_keys == {"secret", "pin"}
        assert second.redact_keys == {"secret"}
        assert module.options.redact_keys == {"secret"}

    def test_invalid_module_options(self, sink):
        module = LoggerModule.for_root({"timestamp": "maybe"}, sink=sink)

        assert not module.create_logger().options.timestamp
