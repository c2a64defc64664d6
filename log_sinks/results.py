"""
Test result records.

Helpers for a test runner that already has its counts: they only emit the
records (start, failure, summary) into a sink. Failure records carry the
default failure marker, so a FailureContextBuffer in the chain replays the
context that led up to them.

Records are attributed to the library module, so they take its reserved
background, with the file and line of the helper's caller.
"""

import sys
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from config.constants import DEFAULT_FAILURE_MARKER, LIBRARY_LOGGER_PREFIX
from models.record import Level, Record

from .sinks.base import LogSink, comp_should_log


@dataclass(frozen=True)
class TestCounts:
    __test__ = False  # not a pytest test class

    passes: int = 0
    fails: int = 0
    errors: int = 0
    broken: int = 0

    @property
    def total(self) -> int:
        return self.passes + self.fails + self.errors + self.broken

    @property
    def all_passed(self) -> bool:
        return self.fails + self.errors + self.broken == 0


def _emit(
    sink: LogSink,
    level: Level,
    message: str,
    fields: Optional[Mapping[str, Any]] = None,
) -> None:
    # Library module, caller's file and line
    frame = sys._getframe(2)
    record = Record.create(
        level,
        message,
        LIBRARY_LOGGER_PREFIX,
        frame.f_code.co_filename,
        frame.f_lineno,
        fields=fields,
    )
    if comp_should_log(sink, record):
        sink.handle(record)


def log_test_set_start(sink: LogSink, name: str) -> None:
    _emit(sink, Level.INFO, f"Test Set: {name}")


def log_test_failure(sink: LogSink, name: str, detail: str) -> None:
    """``detail`` is the runner's own description (location, expression...)."""
    _emit(sink, Level.ERROR, f"{name}: {DEFAULT_FAILURE_MARKER} at {detail}")


def log_test_set_finish(sink: LogSink, name: str, counts: TestCounts) -> bool:
    """Emit the summary records; returns whether everything passed."""
    if counts.all_passed:
        _emit(sink, Level.INFO, f"Test Set: {name} -- All tests passed.")
        return True

    _emit(
        sink,
        Level.INFO,
        f"Test Summary: {name}",
        {
            "passes": counts.passes,
            "fails": counts.fails,
            "errors": counts.errors,
            "broken": counts.broken,
        },
    )
    _emit(
        sink,
        Level.ERROR,
        f"{name} did not pass: {counts.passes} passed, {counts.fails} failed, "
        f"{counts.errors} errored, {counts.broken} broken.",
    )
    return False
