"""
Standard sink chain:

    RepetitionFilter -> FailureContextBuffer -> terminal sink

Each wrapper is optional and left out when the settings disable it.
"""

import sys
from typing import Optional, TextIO

from config.settings import PipelineSettings

from .core.colors import ColorAssigner
from .core.rendering import ColumnRenderer
from .sinks.base import LogSink
from .sinks.failure_context import FailureContextBuffer
from .sinks.files import ColumnFileSink
from .sinks.repetition import RepetitionFilter
from .sinks.split_terminal import SplitTerminalController


def build_terminal_sink(
    settings: PipelineSettings,
    stream: Optional[TextIO] = None,
    colors: Optional[ColorAssigner] = None,
) -> LogSink:
    colors = colors if colors is not None else ColorAssigner()
    if settings.split_terminal:
        return SplitTerminalController(
            stream=stream,
            renderer=ColumnRenderer(colors=colors, colorize=settings.colorize),
            split_fraction=settings.split_fraction,
        )
    if settings.output_path:
        return ColumnFileSink.open(
            settings.output_path, settings.render_width, colors, settings.colorize
        )
    return ColumnFileSink(
        stream if stream is not None else sys.stdout,
        settings.render_width,
        colors,
        settings.colorize,
    )


def build_pipeline(
    settings: PipelineSettings,
    stream: Optional[TextIO] = None,
    colors: Optional[ColorAssigner] = None,
) -> LogSink:
    """Validate ``settings`` and assemble the chain, outermost sink returned."""
    settings.validate()
    sink = build_terminal_sink(settings, stream, colors)
    if settings.failure_context:
        sink = FailureContextBuffer(
            sink, settings.context_capacity, settings.failure_marker
        )
    if settings.watched_modules:
        sink = RepetitionFilter(
            sink,
            settings.watched_modules,
            settings.repeat_window_seconds,
            settings.max_dedup_level,
        )
    return sink
