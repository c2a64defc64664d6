"""
Log Sinks - Exception Hierarchy

Two failure kinds surface to callers:
- ConfigurationError: bad construction parameters, raised immediately
- StreamWriteError: the physical file/stream refused a write

Formatting problems never raise; the renderer degrades instead.

Usage:
    try:
        sink.handle(record)
    except StreamWriteError as e:
        print(e.path, e.context)
"""

from typing import Any, Optional

# ==================== BASE EXCEPTION ====================


class LogSinkError(Exception):
    """
    Base exception for all sink pipeline errors.

    Attributes:
        message: Human-readable error message
        context: Additional error context (parameter names, paths, etc.)
    """

    def __init__(self, message: str, **context: Any):
        self.message = message
        self.context = context
        super().__init__(message)

    def __repr__(self) -> str:
        context_str = f", context={self.context}" if self.context else ""
        return f"{self.__class__.__name__}(message={self.message!r}{context_str})"


# ==================== CONSTRUCTION ERRORS ====================


class ConfigurationError(LogSinkError, ValueError):
    """
    Invalid construction parameter.

    Raised from __init__ so that a misconfigured pipeline fails before the
    first record is handled.
    """

    def __init__(self, parameter: str, value: Any, reason: str, **context: Any):
        message = f"Invalid {parameter}={value!r}: {reason}"
        super().__init__(message, parameter=parameter, value=value, **context)
        self.parameter = parameter
        self.value = value


# ==================== I/O ERRORS ====================


class StreamWriteError(LogSinkError, OSError):
    """
    Writing to the underlying file or stream failed.

    Never retried: a partially written record is reported, not replayed.
    """

    def __init__(
        self,
        message: str = "Failed to write log record",
        path: Optional[str] = None,
        **context: Any,
    ):
        if path:
            message = f"{message} ({path})"
        super().__init__(message, path=path, **context)
        self.path = path
