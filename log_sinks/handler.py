"""
Standard-library logging bridge.

Lets ``logging`` users feed a sink chain:

    logger = setup_sink_logging(build_pipeline(settings))
    logger.info("Loaded %d rows", 12, extra={"fields": {"table": "users"}})
"""

import logging
from datetime import datetime
from typing import Any, List, Optional, Tuple

from colorama import init as colorama_init

from config.constants import LIBRARY_LOGGER_PREFIX
from models.record import Level, Record

from .sinks.base import LogSink, comp_should_log


def record_from_logging(record: logging.LogRecord) -> Record:
    """Convert a stdlib LogRecord; ``extra={"fields": ...}`` becomes fields."""
    fields: List[Tuple[str, Any]] = []
    extra_fields = getattr(record, "fields", None)
    if isinstance(extra_fields, dict):
        fields.extend(extra_fields.items())
    elif extra_fields:
        fields.extend(extra_fields)
    if record.exc_info and record.exc_info[1] is not None:
        fields.append(("exception", (record.exc_info[1], record.exc_info[2])))

    return Record.create(
        Level.from_logging(record.levelno),
        record.getMessage(),
        record.name,
        record.pathname,
        record.lineno,
        id=f"{record.name}_{record.module}_{record.lineno}",
        fields=fields,
        timestamp=datetime.fromtimestamp(record.created),
    )


def _is_library_logger(name: str) -> bool:
    return name == LIBRARY_LOGGER_PREFIX or name.startswith(LIBRARY_LOGGER_PREFIX + ".")


class SinkHandler(logging.Handler):
    """
    Dispatches stdlib log records into a sink.

    ``Handler.handle`` already holds the handler lock around ``emit``, so a
    chain used only through this handler needs no extra locking.
    """

    def __init__(self, sink: LogSink, level: int = logging.NOTSET):
        super().__init__(level)
        self.sink = sink

    def emit(self, record: logging.LogRecord) -> None:
        if _is_library_logger(record.name):
            return
        try:
            converted = record_from_logging(record)
            if comp_should_log(self.sink, converted):
                self.sink.handle(converted)
        except Exception:
            if self.sink.catch_exceptions():
                self.handleError(record)
            else:
                raise


def setup_sink_logging(
    sink: LogSink,
    level: int = logging.DEBUG,
    logger_name: Optional[str] = None,
) -> logging.Logger:
    """
    Route a logger into ``sink``.

    Args:
        sink: Head of the sink chain
        level: Logging level (default: DEBUG)
        logger_name: Optional logger name (default: root logger)

    Returns:
        Configured logger instance
    """
    # Initialize colorama
    colorama_init(autoreset=False)

    logger = logging.getLogger(logger_name) if logger_name else logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = SinkHandler(sink, level)
    logger.addHandler(handler)

    return logger
