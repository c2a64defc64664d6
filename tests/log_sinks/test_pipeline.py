"""
Tests for log_sinks/pipeline.py and the demo entry point.
"""

import io
import os
from unittest.mock import patch

import pytest

from config.settings import PipelineSettings
from log_sinks.__main__ import main
from log_sinks.core.colors import ColorAssigner
from log_sinks.pipeline import build_pipeline, build_terminal_sink
from log_sinks.sinks.failure_context import FailureContextBuffer
from log_sinks.sinks.files import ColumnFileSink
from log_sinks.sinks.repetition import RepetitionFilter
from log_sinks.sinks.split_terminal import SplitTerminalController
from models.exceptions import ConfigurationError
from models.record import Level
from tests.conftest import strip_ansi


class TestBuildTerminalSink:
    def test_column_sink_on_stream(self):
        stream = io.StringIO()
        sink = build_terminal_sink(PipelineSettings(render_width=100), stream)
        assert isinstance(sink, ColumnFileSink)
        assert sink.stream is stream
        assert sink.width == 100

    def test_split_terminal(self):
        with patch(
            "log_sinks.sinks.split_terminal.shutil.get_terminal_size",
            return_value=os.terminal_size((90, 30)),
        ):
            sink = build_terminal_sink(
                PipelineSettings(split_terminal=True, split_fraction=0.5), io.StringIO()
            )
        assert isinstance(sink, SplitTerminalController)
        assert sink.region.split_row == 15

    def test_output_path(self, tmp_path):
        path = tmp_path / "out.log"
        sink = build_terminal_sink(PipelineSettings(output_path=str(path)))
        try:
            assert isinstance(sink, ColumnFileSink)
            assert sink.path == str(path)
        finally:
            sink.close()

    def test_shared_colors(self, make_record):
        colors = ColorAssigner()
        sink = build_terminal_sink(PipelineSettings(), io.StringIO(), colors)
        sink.handle(make_record(module="db"))
        assert "db" in colors.assigned()


class TestBuildPipeline:
    """Chain assembly from settings."""

    def test_default_chain(self):
        sink = build_pipeline(PipelineSettings(), io.StringIO())
        assert isinstance(sink, FailureContextBuffer)
        assert isinstance(sink.sink, ColumnFileSink)

    def test_full_chain(self):
        settings = PipelineSettings(
            watched_modules=frozenset({"poller"}),
            repeat_window_seconds=5.0,
            max_dedup_level=Level.WARN,
            context_capacity=3,
            failure_marker="FAIL",
        )
        sink = build_pipeline(settings, io.StringIO())
        assert isinstance(sink, RepetitionFilter)
        assert sink.watched_modules == frozenset({"poller"})
        assert sink.window_seconds == 5.0
        assert sink.max_level == Level.WARN
        assert isinstance(sink.sink, FailureContextBuffer)
        assert sink.sink.capacity == 3
        assert sink.sink.failure_marker == "FAIL"

    def test_no_wrappers(self):
        sink = build_pipeline(PipelineSettings(failure_context=False), io.StringIO())
        assert isinstance(sink, ColumnFileSink)

    def test_invalid_settings_rejected(self):
        with pytest.raises(ConfigurationError):
            build_pipeline(PipelineSettings(render_width=0), io.StringIO())

    def test_end_to_end(self, make_record):
        """Repeats collapse, ordinary records wait, a failure brings them out."""
        stream = io.StringIO()
        settings = PipelineSettings(
            render_width=80, colorize=False, watched_modules=frozenset({"poller", "suite"})
        )
        sink = build_pipeline(settings, stream)

        for _ in range(3):
            sink.handle(make_record("tick", module="poller"))
        sink.handle(make_record("step", module="suite"))
        assert stream.getvalue() == ""

        sink.handle(make_record("suite: Test Failed at a.py:1", level=Level.ERROR))
        output = strip_ansi(stream.getvalue())
        assert output.count("tick") == 2
        assert "(repeated x2) tick" in output
        assert output.index("step") < output.index("Test Failed")


class TestDemo:
    def test_main_writes_output_file(self, tmp_path):
        path = tmp_path / "demo.log"
        with patch.dict(os.environ, {}, clear=True), patch(
            "config.settings.load_dotenv"
        ), patch("log_sinks.handler.colorama_init") as init:
            exit_code = main(["--output", str(path), "--no-color", "--watch", "demo.poller"])

        assert exit_code == 1
        init.assert_called_once_with(autoreset=False)
        content = path.read_text(encoding="utf-8")
        assert "Connecting to the fixture database" in content
        assert "Sample suite: Test Failed at demo.py:42" in content
        assert content.count("Waiting for worker") == 1
        assert "\x1b[" not in content
