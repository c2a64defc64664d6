"""
Rendering Logic for Log Sinks

Two layouts share the same line splitting:

Column layout (terminals, colored files):

[  INFO 10:11:05.339               worker │ Log Message        runner.py:42
┌  WARN 10:11:05.412               worker │ First line
│                                         │ retries = 3
└─────────────────────────────────────────────────── runner.py:57

Plain layout (log files):

┌ INFO 2024-05-01T10:11:05.339000: Log Message
│ retries = 3
└ @ worker runner.py:42
"""

import os
import traceback
from typing import Any, List, Optional

from wcwidth import wcswidth, wcwidth

from models.record import Record

from .colors import ColorAssigner
from .constants import PLAIN, Colors, Columns, Glyphs


# =============================================================================
# Measuring
# =============================================================================


def display_width(text: str) -> int:
    """
    Terminal columns taken by ``text``.

    Strings wcwidth cannot measure (control characters and the like) fall
    back to their UTF-8 byte length.
    """
    width = wcswidth(text)
    if width < 0:
        return len(text.encode("utf-8", errors="replace"))
    return width


def truncate_to_width(text: str, width: int) -> str:
    """Longest prefix of ``text`` that fits in ``width`` columns."""
    used = 0
    for index, char in enumerate(text):
        used += max(wcwidth(char), 0)
        if used > width:
            return text[:index]
    return text


def _spaces(count: int) -> str:
    return " " * max(0, count)


def _rjust(text: str, width: int) -> str:
    return _spaces(width - display_width(text)) + text


def _ljust(text: str, width: int) -> str:
    return text + _spaces(width - display_width(text))


# =============================================================================
# Value rendering (YAML-style for containers)
# =============================================================================


def format_object(obj: Any, indent: int = 0) -> str:
    """
    Format a dict or list in YAML style.

    Args:
        obj: The object to format (dict, list, or primitive)
        indent: Current indentation level

    Returns:
        Formatted string representation
    """
    lines: List[str] = []
    prefix = "  " * indent

    if isinstance(obj, dict):
        for key, value in obj.items():
            if isinstance(value, (dict, list)) and value:
                lines.append(f"{prefix}{key}:")
                lines.append(format_object(value, indent + 1))
            else:
                lines.append(f"{prefix}{key}: {_format_scalar(value)}")
    elif isinstance(obj, list):
        for item in obj:
            if isinstance(item, (dict, list)) and item:
                lines.append(f"{prefix}-")
                lines.append(format_object(item, indent + 1))
            else:
                lines.append(f"{prefix}- {_format_scalar(item)}")
    else:
        lines.append(f"{prefix}{_format_scalar(obj)}")

    return "\n".join(lines)


def _format_scalar(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value)


def _format_exception(exc: BaseException, tb: Any = None) -> str:
    if tb is None:
        tb = exc.__traceback__
    return "".join(traceback.format_exception(type(exc), exc, tb)).rstrip("\n")


def render_value(value: Any) -> str:
    """
    Render a field value as text. Never raises.

    Strings are kept as-is, exceptions (or ``(exception, traceback)`` pairs)
    become tracebacks, dicts and lists become indented blocks.
    """
    try:
        if isinstance(value, str):
            return value
        if isinstance(value, BaseException):
            return _format_exception(value)
        if (
            isinstance(value, tuple)
            and len(value) == 2
            and isinstance(value[0], BaseException)
        ):
            return _format_exception(value[0], value[1])
        if isinstance(value, (dict, list)) and value:
            return format_object(value)
        return repr(value)
    except Exception:
        return f"<unrenderable {type(value).__name__}>"


def message_lines(record: Record) -> List[str]:
    """Split the message and append one or more lines per field."""
    lines = record.message.rstrip("\n").split("\n")
    for key, value in record.fields:
        value_lines = render_value(value).split("\n")
        if len(value_lines) == 1:
            lines.append(f"{key} = {value_lines[0]}")
        else:
            lines.append(f"{key} =")
            lines.extend(value_lines)
    return lines


def file_line(record: Record) -> str:
    """``basename(file):line`` with the group in front when it differs."""
    location = f"{os.path.basename(record.file)}:{str(record.line).ljust(Columns.LINE_NUMBER)}"
    if record.group != record.module:
        location = f"{record.group}:{location}"
    return location


def format_time(record: Record) -> str:
    ts = record.timestamp
    return ts.strftime("%H:%M:%S.") + f"{ts.microsecond // 1000:03d}"


# =============================================================================
# Column Renderer
# =============================================================================


class ColumnRenderer:
    """
    Fixed-width column layout with module backgrounds and level colors.

    Format: PREFIX LEVEL TIME MODULE │ MESSAGE ...pad... FILE:LINE

    Every tint is closed on the line it was opened on, so nothing leaks
    into the next line or into whatever the terminal prints afterwards.
    """

    def __init__(self, colors: Optional[ColorAssigner] = None, colorize: bool = True):
        self.colors = colors if colors is not None else ColorAssigner()
        self.colorize = colorize

    def _tints(self, record: Record):
        if not self.colorize:
            return PLAIN, PLAIN, PLAIN
        return (
            self.colors.color_for(record.module),
            Colors.for_level(record.level),
            Colors.DIM,
        )

    def render(self, width: int, record: Record) -> str:
        """Render ``record`` into ``width`` columns. Output ends with a newline."""
        lines = message_lines(record)
        multi = len(lines) > 1
        location = file_line(record)
        suffix = "" if multi else location
        bg, lc, dim = self._tints(record)

        prefix = Glyphs.OPEN_MULTI if multi else Glyphs.OPEN_SINGLE
        pad = width - Columns.RESERVED - display_width(lines[0]) - display_width(suffix)

        # [  INFO 10:11:05.339               Module │ Log Message [ -- pad -- ] file:line
        out = [
            bg.open
            + lc.wrap(prefix + _rjust(record.level.label, Columns.LEVEL))
            + " "
            + dim.wrap(_ljust(format_time(record), Columns.TIME))
            + " "
            + _rjust(record.module, Columns.MODULE)
            + Glyphs.DIVIDER
            + lines[0]
            + _spaces(pad)
            + dim.wrap(suffix)
            + bg.close
        ]

        if multi:
            # │ [ ------ left block ------ ] │ line [ ------ pad ------ ]
            for line in lines[1:]:
                pad = width - Columns.LEFT_BLOCK - Columns.PREFIX - Columns.DIVIDER - display_width(line)
                out.append(
                    bg.open
                    + lc.wrap(Glyphs.CONTINUE)
                    + _spaces(Columns.LEFT_BLOCK)
                    + Glyphs.DIVIDER
                    + line
                    + _spaces(pad)
                    + bg.close
                )
            # └──────────────────────────────────────────── file:line
            rule = Glyphs.RULE * max(0, width - display_width(location) - 2)
            out.append(
                bg.open
                + lc.wrap(Glyphs.CLOSE + rule)
                + " "
                + dim.wrap(location)
                + bg.close
            )

        return "\n".join(out) + "\n"

    __call__ = render


def column_format_log(
    width: int,
    record: Record,
    colors: Optional[ColorAssigner] = None,
    colorize: bool = True,
) -> str:
    """One-shot column rendering (builds a throwaway renderer)."""
    return ColumnRenderer(colors=colors, colorize=colorize).render(width, record)


# =============================================================================
# Plain Renderer (for log files - no ANSI codes)
# =============================================================================


def format_plain_record(record: Record) -> str:
    """Box-framed plain text for append-only log files."""
    lines = message_lines(record)
    out = [f"┌ {record.level.label} {record.timestamp.isoformat()}: {lines[0]}"]
    out.extend(f"│ {line}" for line in lines[1:])
    out.append(
        f"└ @ {record.module} {os.path.basename(record.file)}:{record.line}"
    )
    return "\n".join(out) + "\n"
