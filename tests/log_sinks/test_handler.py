"""
Tests for log_sinks/handler.py
"""

import logging
import sys
from unittest.mock import MagicMock, patch

import pytest

from log_sinks.handler import SinkHandler, record_from_logging, setup_sink_logging
from models.record import Level
from tests.conftest import RecordingSink


def make_log_record(
    msg="hello %s",
    args=("world",),
    level=logging.INFO,
    name="app.db",
    exc_info=None,
    **extra,
):
    record = logging.LogRecord(name, level, "/src/app/db.py", 42, msg, args, exc_info)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def logger_factory():
    """Loggers with unique names, handlers removed afterwards."""
    created = []

    def _make(name):
        with patch("log_sinks.handler.colorama_init"):
            logger = setup_sink_logging(_make.sink, logger_name=name)
        logger.propagate = False
        created.append(logger)
        return logger

    _make.sink = RecordingSink()
    yield _make
    for logger in created:
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)


class TestRecordFromLogging:
    """Conversion of stdlib LogRecords."""

    def test_basic_fields(self):
        record = record_from_logging(make_log_record())
        assert record.level == Level.INFO
        assert record.message == "hello world"
        assert record.module == "app.db"
        assert record.group == "app.db"
        assert record.file == "/src/app/db.py"
        assert record.line == 42
        assert record.id == "app.db_db_42"
        assert record.fields == ()

    def test_timestamp_from_created(self):
        log_record = make_log_record()
        record = record_from_logging(log_record)
        assert record.timestamp.timestamp() == pytest.approx(log_record.created)

    @pytest.mark.parametrize(
        "levelno,expected",
        [
            (logging.DEBUG, Level.DEBUG),
            (5, Level.DEBUG),
            (logging.INFO, Level.INFO),
            (logging.WARNING, Level.WARN),
            (logging.ERROR, Level.ERROR),
            (logging.CRITICAL, Level.ERROR),
        ],
    )
    def test_level_mapping(self, levelno, expected):
        assert record_from_logging(make_log_record(level=levelno)).level == expected

    def test_extra_fields_dict(self):
        record = record_from_logging(make_log_record(fields={"table": "users", "rows": 3}))
        assert record.fields == (("table", "users"), ("rows", 3))

    def test_extra_fields_pairs(self):
        record = record_from_logging(make_log_record(fields=[("a", 1), ("b", 2)]))
        assert record.fields == (("a", 1), ("b", 2))

    def test_exception_becomes_field(self):
        try:
            raise ValueError("bad row")
        except ValueError:
            exc_info = sys.exc_info()
        record = record_from_logging(make_log_record(exc_info=exc_info))
        key, (exc, tb) = record.fields[-1]
        assert key == "exception"
        assert isinstance(exc, ValueError)
        assert tb is exc_info[2]


class TestSinkHandler:
    def test_routes_records(self, logger_factory):
        logger = logger_factory("tests.handler.routes")
        logger.info("Loaded %d rows", 12, extra={"fields": {"table": "users"}})
        records = logger_factory.sink.records
        assert len(records) == 1
        assert records[0].message == "Loaded 12 rows"
        assert records[0].fields == (("table", "users"),)
        assert records[0].module == "tests.handler.routes"

    def test_library_loggers_skipped(self):
        sink = RecordingSink()
        handler = SinkHandler(sink)
        handler.emit(make_log_record(name="log_sinks.sinks.failure_context"))
        handler.emit(make_log_record(name="log_sinks"))
        handler.emit(make_log_record(name="log_sinks_other"))
        assert [r.module for r in sink.records] == ["log_sinks_other"]

    def test_sink_level_gate(self):
        sink = RecordingSink(min_level=Level.WARN)
        handler = SinkHandler(sink)
        handler.emit(make_log_record(level=logging.INFO))
        handler.emit(make_log_record(level=logging.ERROR))
        assert [r.level for r in sink.records] == [Level.ERROR]

    def test_sink_error_propagates(self):
        """Sinks that do not catch exceptions let the error reach the caller."""
        sink = MagicMock()
        sink.min_level.return_value = Level.BELOW_MIN
        sink.should_log.return_value = True
        sink.catch_exceptions.return_value = False
        sink.handle.side_effect = OSError("disk full")
        with pytest.raises(OSError):
            SinkHandler(sink).emit(make_log_record())

    def test_sink_error_handled_when_allowed(self):
        sink = MagicMock()
        sink.min_level.return_value = Level.BELOW_MIN
        sink.should_log.return_value = True
        sink.catch_exceptions.return_value = True
        sink.handle.side_effect = OSError("disk full")
        handler = SinkHandler(sink)
        log_record = make_log_record()
        with patch.object(handler, "handleError") as handle_error:
            handler.emit(log_record)
        handle_error.assert_called_once_with(log_record)


class TestSetupSinkLogging:
    """Tests for setup_sink_logging."""

    def test_replaces_existing_handlers(self):
        logger = logging.getLogger("tests.handler.replace")
        old = logging.NullHandler()
        logger.addHandler(old)
        try:
            with patch("log_sinks.handler.colorama_init") as init:
                result = setup_sink_logging(RecordingSink(), logger_name="tests.handler.replace")
            init.assert_called_once_with(autoreset=False)
            assert result is logger
            assert old not in logger.handlers
            assert len(logger.handlers) == 1
            assert isinstance(logger.handlers[0], SinkHandler)
            assert logger.level == logging.DEBUG
        finally:
            for handler in logger.handlers[:]:
                logger.removeHandler(handler)

    def test_custom_level(self):
        with patch("log_sinks.handler.colorama_init"):
            logger = setup_sink_logging(
                RecordingSink(), level=logging.WARNING, logger_name="tests.handler.level"
            )
        try:
            assert logger.level == logging.WARNING
            assert logger.handlers[0].level == logging.WARNING
        finally:
            for handler in logger.handlers[:]:
                logger.removeHandler(handler)
