"""
Pipeline settings.

Components never read the environment themselves. ``PipelineSettings``
collects the construction parameters in one validated object, and
``PipelineSettings.from_env()`` lets an entry point (the demo CLI) fill it
from ``.env`` / environment variables.
"""

import os
from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from dotenv import load_dotenv

from models.exceptions import ConfigurationError
from models.record import Level

from .constants import (
    DEFAULT_CONTEXT_CAPACITY,
    DEFAULT_FAILURE_MARKER,
    DEFAULT_RENDER_WIDTH,
    DEFAULT_REPEAT_WINDOW_SECONDS,
    DEFAULT_SPLIT_FRACTION,
)


def get_environment_variable(key: str, default: str = "") -> str:
    """Return an environment variable or the default."""
    return os.environ.get(key, default)


def get_boolean_env(key: str, default: bool = False) -> bool:
    """Return a boolean environment variable."""
    value = os.environ.get(key, "").lower()
    if default:
        return value not in ("false", "0", "no", "off")
    else:
        return value in ("true", "1", "yes", "on")


def get_int_env(key: str, default: int = 0) -> int:
    """Return an integer environment variable, falling back on bad input."""
    try:
        return int(os.environ.get(key, str(default)))
    except (ValueError, TypeError):
        return default


def get_float_env(key: str, default: float = 0.0) -> float:
    """Return a float environment variable, falling back on bad input."""
    try:
        return float(os.environ.get(key, str(default)))
    except (ValueError, TypeError):
        return default


def parse_level(name: str) -> Level:
    """Parse a level name such as ``info`` or ``WARNING``."""
    key = name.strip().upper()
    if key == "WARNING":
        key = "WARN"
    try:
        return Level[key]
    except KeyError:
        raise ConfigurationError("level", name, "unknown level name") from None


@dataclass(frozen=True)
class PipelineSettings:
    """Every knob of the standard pipeline."""

    render_width: int = DEFAULT_RENDER_WIDTH
    split_terminal: bool = False
    split_fraction: float = DEFAULT_SPLIT_FRACTION
    repeat_window_seconds: float = DEFAULT_REPEAT_WINDOW_SECONDS
    max_dedup_level: Level = Level.INFO
    watched_modules: FrozenSet[str] = field(default_factory=frozenset)
    failure_context: bool = True
    context_capacity: int = DEFAULT_CONTEXT_CAPACITY
    failure_marker: str = DEFAULT_FAILURE_MARKER
    colorize: bool = True
    output_path: Optional[str] = None

    def validate(self) -> "PipelineSettings":
        if self.render_width <= 0:
            raise ConfigurationError(
                "render_width", self.render_width, "must be positive"
            )
        if not 0 < self.split_fraction < 1:
            raise ConfigurationError(
                "split_fraction", self.split_fraction, "must be between 0 and 1"
            )
        if self.repeat_window_seconds < 0:
            raise ConfigurationError(
                "repeat_window_seconds",
                self.repeat_window_seconds,
                "must not be negative",
            )
        if self.context_capacity < 1:
            raise ConfigurationError(
                "context_capacity", self.context_capacity, "must be at least 1"
            )
        if not self.failure_marker:
            raise ConfigurationError(
                "failure_marker", self.failure_marker, "must not be empty"
            )
        return self

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "PipelineSettings":
        """
        Build settings from ``LOG_SINKS_*`` environment variables.

        A ``.env`` file is loaded first; variables already set in the
        environment win.
        """
        load_dotenv(dotenv_path)
        watched = get_environment_variable("LOG_SINKS_WATCHED_MODULES")
        output_path = get_environment_variable("LOG_SINKS_OUTPUT_PATH") or None
        settings = cls(
            render_width=get_int_env("LOG_SINKS_WIDTH", DEFAULT_RENDER_WIDTH),
            split_terminal=get_boolean_env("LOG_SINKS_SPLIT_TERMINAL", False),
            split_fraction=get_float_env(
                "LOG_SINKS_SPLIT_FRACTION", DEFAULT_SPLIT_FRACTION
            ),
            repeat_window_seconds=get_float_env(
                "LOG_SINKS_REPEAT_WINDOW", DEFAULT_REPEAT_WINDOW_SECONDS
            ),
            max_dedup_level=parse_level(
                get_environment_variable("LOG_SINKS_MAX_DEDUP_LEVEL", "INFO")
            ),
            watched_modules=frozenset(m.strip() for m in watched.split(",") if m.strip()),
            failure_context=get_boolean_env("LOG_SINKS_FAILURE_CONTEXT", True),
            context_capacity=get_int_env(
                "LOG_SINKS_CONTEXT_CAPACITY", DEFAULT_CONTEXT_CAPACITY
            ),
            failure_marker=get_environment_variable(
                "LOG_SINKS_FAILURE_MARKER", DEFAULT_FAILURE_MARKER
            ),
            colorize=get_boolean_env("LOG_SINKS_COLORIZE", True),
            output_path=output_path,
        )
        return settings.validate()
