from .base import LockedSink, LogSink, TeeSink, WrappingSink, comp_should_log
from .failure_context import FailureContextBuffer
from .files import ColumnFileSink, PlainFileSink, StreamSink, column_console_sink
from .repetition import RepetitionFilter
from .split_terminal import SplitRegion, SplitTerminalController

__all__ = [
    "LogSink",
    "WrappingSink",
    "comp_should_log",
    "TeeSink",
    "LockedSink",
    "RepetitionFilter",
    "FailureContextBuffer",
    "StreamSink",
    "PlainFileSink",
    "ColumnFileSink",
    "column_console_sink",
    "SplitRegion",
    "SplitTerminalController",
]
