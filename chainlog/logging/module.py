# chainlog - logger module
"""Module-wide defaults and logger construction"""

from typing import Any, ClassVar, Optional

from .handlers import LogSink
from .logger import Logger
from .standard import LoggerOptions


class LoggerModule:
    """
    Holds options shared by every logger of an application.

    ``for_root`` builds the module with a root logger; components then ask
    the module for their own transient logger::

        module = LoggerModule.for_root({"json_format": True}, context="App")
        orders = module.create_logger(caller=OrderService)
    """

    _global: ClassVar[Optional["LoggerModule"]] = None

    def __init__(
        self,
        options: Any = None,
        context: Optional[str] = None,
        sink: Optional[LogSink] = None,
    ):
        self.options = LoggerOptions.coerce(options)
        self.context = context
        self.sink = sink
        self.logger = Logger(context, self.options, sink=sink)

    @classmethod
    def for_root(
        cls,
        options: Any = None,
        is_global: bool = True,
        context: Optional[str] = None,
        sink: Optional[LogSink] = None,
    ) -> "LoggerModule":
        module = cls(options, context=context, sink=sink)
        if is_global:
            cls._global = module
        return module

    @classmethod
    def get_global(cls) -> Optional["LoggerModule"]:
        return cls._global

    @classmethod
    def reset_global(cls) -> None:
        cls._global = None

    def create_logger(
        self,
        context: Optional[str] = None,
        options: Any = None,
        caller: Any = None,
    ) -> Logger:
        """New logger with the module options as defaults"""
        return Logger(
            context,
            options,
            caller=caller,
            defaults=self.options,
            sink=self.sink,
        )
