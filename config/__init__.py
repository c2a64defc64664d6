from .constants import (
    DEFAULT_CONTEXT_CAPACITY,
    DEFAULT_FAILURE_MARKER,
    DEFAULT_RENDER_WIDTH,
    DEFAULT_REPEAT_WINDOW_SECONDS,
    DEFAULT_SPLIT_FRACTION,
    LIBRARY_LOGGER_PREFIX,
    REPEAT_SUMMARY_TEMPLATE,
)
from .settings import PipelineSettings, parse_level

__all__ = [
    "DEFAULT_CONTEXT_CAPACITY",
    "DEFAULT_FAILURE_MARKER",
    "DEFAULT_RENDER_WIDTH",
    "DEFAULT_REPEAT_WINDOW_SECONDS",
    "DEFAULT_SPLIT_FRACTION",
    "LIBRARY_LOGGER_PREFIX",
    "REPEAT_SUMMARY_TEMPLATE",
    "PipelineSettings",
    "parse_level",
]
