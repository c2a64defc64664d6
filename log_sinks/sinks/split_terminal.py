"""
Split terminal output.

The screen is divided once, at construction:

    rows 1 .. split_row        scrolling log region
    row  split_row + 1         divider
    rows split_row + 2 .. end  status region

Every record is written in a single stream write that confines scrolling
to the log region, prints the rendered lines at its bottom, then restores
the full region, repaints the divider and puts the cursor back where it
was. Terminal resizes after construction are not picked up, and terminals
without scroll-region support will garble the layout.
"""

import logging
import os
import shutil
import sys
from dataclasses import dataclass
from typing import Optional, TextIO

from colorama import Cursor
from colorama.ansi import CSI, clear_line, clear_screen

from config.constants import DEFAULT_SPLIT_FRACTION
from models.exceptions import ConfigurationError
from models.record import Record

from ..core.colors import ColorAssigner
from ..core.constants import Glyphs
from ..core.rendering import ColumnRenderer, truncate_to_width
from .base import LogSink

logger = logging.getLogger(__name__)

# =============================================================================
# Control sequences
# =============================================================================

SAVE_CURSOR = "\x1b7"
RESTORE_CURSOR = "\x1b8"
HIDE_CURSOR = CSI + "?25l"
SHOW_CURSOR = CSI + "?25h"


def set_scroll_region(top: int, bottom: int) -> str:
    return f"{CSI}{top};{bottom}r"


def move_to(row: int, column: int = 1) -> str:
    return Cursor.POS(column, row)


# =============================================================================
# Region
# =============================================================================


@dataclass(frozen=True)
class SplitRegion:
    split_row: int
    width: int
    height: int

    @property
    def divider_row(self) -> int:
        return self.split_row + 1

    @property
    def status_rows(self) -> int:
        return max(0, self.height - self.split_row - 1)

    @classmethod
    def compute(cls, columns: int, lines: int, fraction: float) -> "SplitRegion":
        if not 0 < fraction < 1:
            raise ConfigurationError("split_fraction", fraction, "must be between 0 and 1")
        if columns <= 0:
            raise ConfigurationError("width", columns, "must be positive")
        if lines < 2:
            raise ConfigurationError("height", lines, "need room for a divider")
        split_row = min(max(1, int(lines * fraction)), lines - 1)
        return cls(split_row=split_row, width=columns, height=lines)


# =============================================================================
# Controller
# =============================================================================


class SplitTerminalController(LogSink):
    """
    Log sink that keeps a status footer below a scrolling log region.

    Not safe for concurrent writers; stream errors propagate unchanged and
    are never retried, since control sequences are not idempotent.
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        renderer: Optional[ColumnRenderer] = None,
        split_fraction: float = DEFAULT_SPLIT_FRACTION,
        size: Optional[os.terminal_size] = None,
        colors: Optional[ColorAssigner] = None,
    ):
        self.stream = stream if stream is not None else sys.stdout
        self.renderer = renderer if renderer is not None else ColumnRenderer(colors=colors)
        if size is None:
            size = shutil.get_terminal_size()
        self.region = SplitRegion.compute(size.columns, size.lines, split_fraction)
        logger.debug(
            "Reserved rows 1-%d of %d for logs, %d status rows",
            self.region.split_row,
            self.region.height,
            self.region.status_rows,
        )

    def _prologue(self) -> str:
        return (
            SAVE_CURSOR
            + HIDE_CURSOR
            + set_scroll_region(1, self.region.split_row)
            + move_to(self.region.split_row)
        )

    def _epilogue(self) -> str:
        return (
            set_scroll_region(1, self.region.height)
            + move_to(self.region.divider_row)
            + clear_line()
            + Glyphs.RULE * self.region.width
            + RESTORE_CURSOR
            + SHOW_CURSOR
        )

    def handle(self, record: Record) -> None:
        body = self.renderer.render(self.region.width, record).rstrip("\n")
        self.stream.write(self._prologue() + "\n" + body + self._epilogue())
        self.stream.flush()

    def write_status(self, text: str) -> None:
        """Replace the status region with ``text``, clipped to fit."""
        if self.region.status_rows == 0:
            return
        first_row = self.region.divider_row + 1
        lines = text.split("\n")[: self.region.status_rows]
        parts = [SAVE_CURSOR, HIDE_CURSOR, move_to(first_row), clear_screen(0)]
        for offset, line in enumerate(lines):
            parts.append(move_to(first_row + offset))
            parts.append(truncate_to_width(line, self.region.width))
        parts.append(RESTORE_CURSOR + SHOW_CURSOR)
        self.stream.write("".join(parts))
        self.stream.flush()

    def release(self) -> None:
        """Give the whole screen back to normal scrolling."""
        self.stream.write(set_scroll_region(1, self.region.height) + SHOW_CURSOR)
        self.stream.flush()
