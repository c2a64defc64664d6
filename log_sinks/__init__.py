# Column log sinks
from .core.colors import ColorAssigner
from .core.constants import BACKGROUND_PALETTE, Colors, Columns, Tint
from .core.rendering import (
    ColumnRenderer,
    column_format_log,
    display_width,
    format_plain_record,
    render_value,
)
from .handler import SinkHandler, record_from_logging, setup_sink_logging
from .pipeline import build_pipeline
from .results import TestCounts, log_test_failure, log_test_set_finish, log_test_set_start
from .sinks.base import LockedSink, LogSink, TeeSink, comp_should_log
from .sinks.failure_context import FailureContextBuffer
from .sinks.files import ColumnFileSink, PlainFileSink, column_console_sink
from .sinks.repetition import RepetitionFilter
from .sinks.split_terminal import SplitRegion, SplitTerminalController

__all__ = [
    # Rendering
    "ColorAssigner",
    "ColumnRenderer",
    "column_format_log",
    "format_plain_record",
    "render_value",
    "display_width",
    "Colors",
    "Columns",
    "Tint",
    "BACKGROUND_PALETTE",
    # Sinks
    "LogSink",
    "comp_should_log",
    "TeeSink",
    "LockedSink",
    "RepetitionFilter",
    "FailureContextBuffer",
    "SplitRegion",
    "SplitTerminalController",
    "PlainFileSink",
    "ColumnFileSink",
    "column_console_sink",
    # Stdlib bridge
    "SinkHandler",
    "record_from_logging",
    "setup_sink_logging",
    # Pipeline
    "build_pipeline",
    # Test results
    "TestCounts",
    "log_test_set_start",
    "log_test_failure",
    "log_test_set_finish",
]
