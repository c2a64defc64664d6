"""
Sink interface and composition helpers.

A sink consumes records and answers three cheap questions so that wrappers
upstream can skip work:

- ``min_level()``: records below this level are never wanted
- ``should_log(record)``: finer per-record decision
- ``catch_exceptions()``: whether a failing ``handle`` may be swallowed
  by the caller (the stdlib bridge honours this)
"""

import threading
from abc import ABC, abstractmethod
from typing import Tuple

from models.record import Level, Record


class LogSink(ABC):
    """Base class for every sink. Subclasses implement ``handle``."""

    @abstractmethod
    def handle(self, record: Record) -> None:
        """Consume one record."""

    def should_log(self, record: Record) -> bool:
        return True

    def min_level(self) -> Level:
        return Level.BELOW_MIN

    def catch_exceptions(self) -> bool:
        return False


def comp_should_log(sink: LogSink, record: Record) -> bool:
    """Whether ``sink`` wants ``record``: level gate first, then the predicate."""
    return sink.min_level() <= record.level and sink.should_log(record)


class WrappingSink(LogSink):
    """A sink that forwards to one downstream sink."""

    def __init__(self, sink: LogSink):
        self.sink = sink

    def catch_exceptions(self) -> bool:
        return self.sink.catch_exceptions()


class TeeSink(LogSink):
    """Fan a record out to every child sink that wants it."""

    def __init__(self, *sinks: LogSink):
        self.sinks: Tuple[LogSink, ...] = sinks

    def handle(self, record: Record) -> None:
        for sink in self.sinks:
            if comp_should_log(sink, record):
                sink.handle(record)

    def should_log(self, record: Record) -> bool:
        return any(comp_should_log(sink, record) for sink in self.sinks)

    def min_level(self) -> Level:
        return min((sink.min_level() for sink in self.sinks), default=Level.BELOW_MIN)

    def catch_exceptions(self) -> bool:
        return any(sink.catch_exceptions() for sink in self.sinks)


class LockedSink(WrappingSink):
    """
    Serializes ``handle`` behind a lock.

    The stateful sinks are not synchronized; wrap the outermost one in a
    LockedSink when several threads log through the same chain.
    """

    def __init__(self, sink: LogSink):
        super().__init__(sink)
        self._lock = threading.Lock()

    def handle(self, record: Record) -> None:
        with self._lock:
            self.sink.handle(record)

    def should_log(self, record: Record) -> bool:
        return self.sink.should_log(record)

    def min_level(self) -> Level:
        return self.sink.min_level()
