"""
Failure context replay.

Keeps the last few records in memory and only lets them through when a
failure record shows up, so a failing test is logged together with what
led up to it.
"""

import logging
from collections import deque
from typing import Deque, List

from config.constants import DEFAULT_CONTEXT_CAPACITY, DEFAULT_FAILURE_MARKER
from models.exceptions import ConfigurationError
from models.record import Level, Record

from .base import LogSink, WrappingSink, comp_should_log

logger = logging.getLogger(__name__)


class FailureContextBuffer(WrappingSink):
    """
    Ring buffer of recent records, flushed ahead of a failure.

    Records whose message contains ``failure_marker`` drain the buffer
    (oldest first) into the downstream sink and are then forwarded
    themselves. Other records are only buffered; once ``capacity`` is
    reached the oldest is dropped.
    """

    def __init__(
        self,
        sink: LogSink,
        capacity: int = DEFAULT_CONTEXT_CAPACITY,
        failure_marker: str = DEFAULT_FAILURE_MARKER,
    ):
        super().__init__(sink)
        if capacity < 1:
            raise ConfigurationError("capacity", capacity, "must be at least 1")
        if not failure_marker:
            raise ConfigurationError(
                "failure_marker", failure_marker, "must not be empty"
            )
        self.capacity = capacity
        self.failure_marker = failure_marker
        self._buffer: Deque[Record] = deque(maxlen=capacity)

    def handle(self, record: Record) -> None:
        if not comp_should_log(self.sink, record):
            return

        if self.failure_marker in record.message:
            if self._buffer:
                logger.debug("Replaying %d context records", len(self._buffer))
            while self._buffer:
                self.sink.handle(self._buffer.popleft())
            self.sink.handle(record)
        else:
            self._buffer.append(record)

    def pending(self) -> List[Record]:
        """Snapshot of the buffered records, oldest first."""
        return list(self._buffer)

    def should_log(self, record: Record) -> bool:
        return True

    def min_level(self) -> Level:
        return Level.BELOW_MIN
