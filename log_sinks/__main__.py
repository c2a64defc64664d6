"""
Demonstration of the sink pipeline.

    python -m log_sinks --width 120
    python -m log_sinks --split --watch demo.poller
"""

import argparse
import logging
from dataclasses import replace
from typing import List, Optional

from config.settings import PipelineSettings

from .handler import setup_sink_logging
from .pipeline import build_pipeline
from .results import TestCounts, log_test_failure, log_test_set_finish, log_test_set_start
from .sinks.files import StreamSink
from .sinks.repetition import RepetitionFilter
from .sinks.split_terminal import SplitTerminalController


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="log_sinks", description="Render sample records through the pipeline."
    )
    parser.add_argument("--env-file", default=None, help=".env file with LOG_SINKS_* settings")
    parser.add_argument("--width", type=int, default=None, help="Render width")
    parser.add_argument("--split", action="store_true", help="Use the split terminal")
    parser.add_argument(
        "--watch",
        action="append",
        default=None,
        help="Module whose repeats are collapsed (repeatable)",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colors")
    parser.add_argument("--output", default=None, help="Append to this file instead")
    return parser.parse_args(argv)


def _find(sink, kind):
    while sink is not None:
        if isinstance(sink, kind):
            return sink
        sink = getattr(sink, "sink", None)
    return None


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    settings = PipelineSettings.from_env(args.env_file)
    overrides = {}
    if args.width is not None:
        overrides["render_width"] = args.width
    if args.split:
        overrides["split_terminal"] = True
    if args.watch:
        overrides["watched_modules"] = frozenset(args.watch)
    if args.no_color:
        overrides["colorize"] = False
    if args.output:
        overrides["output_path"] = args.output
    settings = replace(settings, **overrides)

    sink = build_pipeline(settings)
    logger = setup_sink_logging(sink, logger_name="demo")
    poller = logging.getLogger("demo.poller")
    terminal = _find(sink, SplitTerminalController)

    log_test_set_start(sink, "Sample suite")
    logger.info("Connecting to the fixture database")
    logger.debug("Connection settings", extra={"fields": {"host": "localhost", "port": 5432}})
    for _ in range(4):
        poller.info("Waiting for worker")
    logger.warning("Slow query\nSELECT *\n  FROM users", extra={"fields": {"elapsed_ms": 812}})
    if terminal is not None:
        terminal.write_status("Sample suite: 3 passed, 1 failed\nrunning...")
    log_test_failure(sink, "Sample suite", "demo.py:42\n  Expression: 1 == 2")
    passed = log_test_set_finish(sink, "Sample suite", TestCounts(passes=3, fails=1))

    repetition = _find(sink, RepetitionFilter)
    if repetition is not None:
        repetition.flush()
    if terminal is not None:
        terminal.release()
    output = _find(sink, StreamSink)
    if output is not None:
        output.close()
    return 0 if passed else 1


if __name__ == "__main__":
    raise SystemExit(main())
