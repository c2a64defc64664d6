"""
File and stream sinks.

Both sinks flush after every record so that a crash never loses what was
already logged. Write failures, including unencodable text and writes to a
closed stream, surface as StreamWriteError.
"""

import shutil
import sys
from typing import Callable, Optional, TextIO

from config.constants import DEFAULT_RENDER_WIDTH
from models.exceptions import ConfigurationError, StreamWriteError
from models.record import Record

from ..core.colors import ColorAssigner
from ..core.rendering import ColumnRenderer, format_plain_record
from .base import LogSink


class StreamSink(LogSink):
    """Writes each record's rendering to a text stream and flushes."""

    def __init__(self, stream: TextIO, render: Callable[[Record], str]):
        self.stream = stream
        self._render = render
        self._owns_stream = False

    @property
    def path(self) -> Optional[str]:
        return getattr(self.stream, "name", None)

    def handle(self, record: Record) -> None:
        text = self._render(record)
        try:
            self.stream.write(text)
            self.stream.flush()
        except (OSError, ValueError) as e:
            raise StreamWriteError(
                f"Failed to write log record: {e}", path=self.path
            ) from e

    def close(self) -> None:
        if self._owns_stream:
            self.stream.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class PlainFileSink(StreamSink):
    """Box-framed plain text, one block per record."""

    def __init__(self, stream: TextIO):
        super().__init__(stream, format_plain_record)

    @classmethod
    def open(cls, path: str) -> "PlainFileSink":
        sink = cls(open(path, "a", encoding="utf-8"))
        sink._owns_stream = True
        return sink


class ColumnFileSink(StreamSink):
    """Column layout at a fixed width."""

    def __init__(
        self,
        stream: TextIO,
        width: int = DEFAULT_RENDER_WIDTH,
        colors: Optional[ColorAssigner] = None,
        colorize: bool = True,
    ):
        if width <= 0:
            raise ConfigurationError("width", width, "must be positive")
        self.width = width
        self.renderer = ColumnRenderer(colors=colors, colorize=colorize)
        super().__init__(stream, lambda record: self.renderer.render(self.width, record))

    @classmethod
    def open(
        cls,
        path: str,
        width: int = DEFAULT_RENDER_WIDTH,
        colors: Optional[ColorAssigner] = None,
        colorize: bool = True,
    ) -> "ColumnFileSink":
        stream = open(path, "a", encoding="utf-8")
        try:
            sink = cls(stream, width, colors, colorize)
        except ConfigurationError:
            stream.close()
            raise
        sink._owns_stream = True
        return sink


def column_console_sink(
    stream: Optional[TextIO] = None, colors: Optional[ColorAssigner] = None
) -> ColumnFileSink:
    """Column sink on stdout, as wide as the terminal."""
    width = shutil.get_terminal_size((DEFAULT_RENDER_WIDTH, 24)).columns
    return ColumnFileSink(stream if stream is not None else sys.stdout, width, colors)
