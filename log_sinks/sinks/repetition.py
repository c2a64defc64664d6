"""
Repetition suppression.

Collapses bursts of identical records from watched modules into the first
occurrence plus a ``(repeated xN)`` summary, emitted once the burst ends.
"""

import time
from typing import Callable, Iterable, Optional

from config.constants import DEFAULT_REPEAT_WINDOW_SECONDS, REPEAT_SUMMARY_TEMPLATE
from models.exceptions import ConfigurationError
from models.record import Level, Record

from .base import LogSink, WrappingSink, comp_should_log


class RepetitionFilter(WrappingSink):
    """
    Suppresses consecutive duplicates within a sliding time window.

    A record repeats the previous one when id, module and message all match
    and it arrives within ``window_seconds`` of the previous occurrence.
    Each repeat moves the window forward. Only records at or below
    ``max_level`` from a module in ``watched_modules`` are considered;
    everything else is forwarded untouched and leaves the state alone.

    Not synchronized: one writer at a time.
    """

    def __init__(
        self,
        sink: LogSink,
        watched_modules: Iterable[str],
        window_seconds: float = DEFAULT_REPEAT_WINDOW_SECONDS,
        max_level: Level = Level.INFO,
        clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__(sink)
        if window_seconds < 0:
            raise ConfigurationError(
                "window_seconds", window_seconds, "must not be negative"
            )
        self.watched_modules = frozenset(watched_modules)
        self.window_seconds = window_seconds
        self.max_level = max_level
        self.clock = clock

        self.last_record: Optional[Record] = None
        self.last_time: float = 0.0
        self.repeat_count: int = 0

    def _watched(self, record: Record) -> bool:
        return record.level <= self.max_level and record.module in self.watched_modules

    def _is_repeat(self, record: Record, now: float) -> bool:
        last = self.last_record
        return (
            last is not None
            and last.id == record.id
            and last.module == record.module
            and last.message == record.message
            and now - self.last_time <= self.window_seconds
        )

    def _emit_summary(self) -> None:
        if self.repeat_count > 0 and self.last_record is not None:
            prefix = REPEAT_SUMMARY_TEMPLATE.format(count=self.repeat_count)
            summary = self.last_record.with_message(prefix + self.last_record.message)
            self.repeat_count = 0
            self.sink.handle(summary)

    def handle(self, record: Record) -> None:
        if not comp_should_log(self.sink, record):
            return
        if not self._watched(record):
            self.sink.handle(record)
            return

        now = self.clock()
        if self._is_repeat(record, now):
            self.repeat_count += 1
            self.last_time = now
            return

        self._emit_summary()
        self.last_record = record
        self.last_time = now
        self.sink.handle(record)

    def flush(self) -> None:
        """Emit the pending summary, if any, and forget the last record."""
        self._emit_summary()
        self.last_record = None
        self.repeat_count = 0

    def should_log(self, record: Record) -> bool:
        return self.sink.should_log(record)

    def min_level(self) -> Level:
        return self.sink.min_level()
