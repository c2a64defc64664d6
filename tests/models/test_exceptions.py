"""
Tests for models/exceptions.py
"""

import pytest

from models.exceptions import ConfigurationError, LogSinkError, StreamWriteError


class TestLogSinkError:
    def test_message_and_context(self):
        error = LogSinkError("broken", sink="tee")
        assert str(error) == "broken"
        assert error.context == {"sink": "tee"}

    def test_repr(self):
        assert repr(LogSinkError("x")) == "LogSinkError(message='x')"
        assert repr(LogSinkError("x", a=1)) == "LogSinkError(message='x', context={'a': 1})"


class TestConfigurationError:
    """Tests for ConfigurationError."""

    def test_attributes(self):
        error = ConfigurationError("width", 0, "must be positive")
        assert error.parameter == "width"
        assert error.value == 0
        assert str(error) == "Invalid width=0: must be positive"
        assert error.context == {"parameter": "width", "value": 0}

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            raise ConfigurationError("capacity", -1, "must be at least 1")

    def test_is_log_sink_error(self):
        assert isinstance(ConfigurationError("a", 1, "b"), LogSinkError)


class TestStreamWriteError:
    def test_path_in_message(self):
        error = StreamWriteError("Write failed", path="/tmp/x.log")
        assert str(error) == "Write failed (/tmp/x.log)"
        assert error.path == "/tmp/x.log"

    def test_default_message(self):
        error = StreamWriteError()
        assert str(error) == "Failed to write log record"
        assert error.path is None

    def test_is_os_error(self):
        with pytest.raises(OSError):
            raise StreamWriteError("x")
