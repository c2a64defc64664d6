"""
Module Background Assignment
"""

import itertools
from typing import Dict, Iterable, Iterator, Mapping, Optional

from config.constants import LIBRARY_LOGGER_PREFIX
from models.exceptions import ConfigurationError

from .constants import BACKGROUND_PALETTE, Colors, Tint


class ColorAssigner:
    """
    Maps module names to background tints, first seen first served.

    The table only grows: once a module has a tint it keeps it for the
    lifetime of the assigner. Unknown modules take the next tint from a
    cyclic palette cursor, so the order in which modules first appear
    decides their colors.

    Not synchronized; share one instance between renderers and guard it
    the same way as the sink that owns the renderer.
    """

    def __init__(
        self,
        palette: Iterable[Tint] = BACKGROUND_PALETTE,
        preset: Optional[Mapping[str, Tint]] = None,
    ):
        palette = tuple(palette)
        if not palette:
            raise ConfigurationError("palette", palette, "must not be empty")
        self._cursor: Iterator[Tint] = itertools.cycle(palette)
        if preset is None:
            preset = {LIBRARY_LOGGER_PREFIX: Colors.LIBRARY_BACKGROUND}
        self._table: Dict[str, Tint] = dict(preset)

    def color_for(self, module: str) -> Tint:
        tint = self._table.get(module)
        if tint is None:
            tint = next(self._cursor)
            self._table[module] = tint
        return tint

    __call__ = color_for

    def assigned(self) -> Dict[str, Tint]:
        return dict(self._table)
