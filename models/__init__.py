# Record model
from .exceptions import ConfigurationError, LogSinkError, StreamWriteError
from .record import Level, Record

__all__ = [
    # Records
    "Level",
    "Record",
    # Exceptions
    "LogSinkError",
    "ConfigurationError",
    "StreamWriteError",
]
