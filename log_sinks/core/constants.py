"""
Rendering Constants
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from colorama import Back, Fore
from colorama.ansi import code_to_chars

from models.record import Level

# =============================================================================
# Paired colors
# =============================================================================


@dataclass(frozen=True)
class Tint:
    """An SGR open sequence and the sequence that undoes only what it set."""

    open: str
    close: str

    def wrap(self, text: str) -> str:
        return f"{self.open}{text}{self.close}"


def foreground(code: str) -> Tint:
    return Tint(code, Fore.RESET)


def background(code: str) -> Tint:
    return Tint(code, Back.RESET)


def background_256(index: int) -> Tint:
    return background(code_to_chars(f"48;5;{index}"))


PLAIN = Tint("", "")


# =============================================================================
# Column Configuration
# =============================================================================


class Columns:
    """Fixed column widths for the column renderer."""

    PREFIX = 2  # "[ " or "┌ "
    LEVEL = 5  # DEBUG, INFO, WARN, ERROR (right aligned)
    TIME = 12  # HH:MM:SS.mmm
    MODULE = 20  # Module name (right aligned)
    DIVIDER = 3  # " │ "
    GAP = 1

    # prefix + level + gap + time + gap + module + divider
    RESERVED = PREFIX + LEVEL + GAP + TIME + GAP + MODULE + DIVIDER
    # Continuation lines indent this far before their own divider
    LEFT_BLOCK = LEVEL + GAP + TIME + GAP + MODULE
    LINE_NUMBER = 4


class Glyphs:
    """Box-drawing characters."""

    OPEN_SINGLE = "[ "
    OPEN_MULTI = "┌ "
    CONTINUE = "│ "
    DIVIDER = " │ "
    CLOSE = "└"
    RULE = "─"


# =============================================================================
# Color Definitions
# =============================================================================


class Colors:
    """Centralized color definitions for consistent theming."""

    # Level colors, ascending intensity
    LEVELS: Dict[Level, Tint] = {
        Level.DEBUG: foreground(Fore.BLUE),
        Level.INFO: foreground(Fore.CYAN),
        Level.WARN: foreground(Fore.YELLOW),
        Level.ERROR: foreground(Fore.LIGHTRED_EX),
    }

    # Timestamp and file:line suffix (256-color grey)
    DIM = foreground(code_to_chars("38;5;246"))

    # Background for the library's own records
    LIBRARY_BACKGROUND = background_256(16)

    @classmethod
    def for_level(cls, level: Level) -> Tint:
        if level < Level.INFO:
            return cls.LEVELS[Level.DEBUG]
        if level < Level.WARN:
            return cls.LEVELS[Level.INFO]
        if level < Level.ERROR:
            return cls.LEVELS[Level.WARN]
        return cls.LEVELS[Level.ERROR]


# Cyclic module backgrounds: greys first, then blues, greens and olives
BACKGROUND_PALETTE: Tuple[Tint, ...] = tuple(
    background_256(index)
    for index in (
        233, 234, 235, 236, 237, 238, 239, 240, 241, 242,
        17, 18, 19, 20, 21, 22, 23, 24, 25,
        58, 59, 60,
    )
)  # fmt: skip
