import io
import re
from datetime import datetime
from typing import List

import pytest

from log_sinks.sinks.base import LogSink
from models.record import Level, Record

ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")

FIXED_TIME = datetime(2024, 5, 1, 10, 11, 5, 339000)


def strip_ansi(text: str) -> str:
    return ANSI_RE.sub("", text)


class RecordingSink(LogSink):
    """Collects everything it is handed."""

    def __init__(self, min_level: Level = Level.BELOW_MIN):
        self.records: List[Record] = []
        self._min_level = min_level

    def handle(self, record: Record) -> None:
        self.records.append(record)

    def min_level(self) -> Level:
        return self._min_level

    @property
    def messages(self) -> List[str]:
        return [r.message for r in self.records]


class FakeClock:
    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def recording_sink():
    return RecordingSink()


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def text_stream():
    return io.StringIO()


@pytest.fixture
def make_record():
    """Factory with sensible defaults and a fixed timestamp."""

    def _make(
        message="hello",
        level=Level.INFO,
        module="M",
        file="/src/pkg/M.py",
        line=12,
        **kwargs,
    ) -> Record:
        kwargs.setdefault("timestamp", FIXED_TIME)
        return Record.create(level, message, module, file, line, **kwargs)

    return _make
