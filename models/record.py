import logging
import os
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import IntEnum
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

FieldPairs = Tuple[Tuple[str, Any], ...]
FieldsArg = Union[Mapping[str, Any], Iterable[Tuple[str, Any]], None]


class Level(IntEnum):
    """Record severity. Values line up with the stdlib logging levels."""

    BELOW_MIN = logging.NOTSET
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARN = logging.WARNING
    ERROR = logging.ERROR

    @property
    def label(self) -> str:
        return self.name

    @classmethod
    def from_logging(cls, levelno: int) -> "Level":
        """Map a stdlib level number to the closest level at or below it."""
        if levelno >= logging.ERROR:
            return cls.ERROR
        if levelno >= logging.WARNING:
            return cls.WARN
        if levelno >= logging.INFO:
            return cls.INFO
        return cls.DEBUG


def _freeze_fields(fields: FieldsArg) -> FieldPairs:
    if fields is None:
        return ()
    if isinstance(fields, Mapping):
        return tuple((str(k), v) for k, v in fields.items())
    return tuple((str(k), v) for k, v in fields)


@dataclass(frozen=True)
class Record:
    """
    One log event.

    ``message`` and every field value may span several lines; the renderers
    treat both the same way. ``fields`` keeps insertion order.
    """

    level: Level
    message: str
    module: str
    group: str
    id: str
    file: str
    line: int
    fields: FieldPairs = ()
    timestamp: datetime = field(default_factory=datetime.now)

    @classmethod
    def create(
        cls,
        level: Level,
        message: Any,
        module: str,
        file: str = "",
        line: int = 0,
        *,
        group: Optional[str] = None,
        id: Optional[str] = None,
        fields: FieldsArg = None,
        timestamp: Optional[datetime] = None,
    ) -> "Record":
        """Build a record, filling group/id/timestamp defaults."""
        if id is None:
            stem = os.path.splitext(os.path.basename(file))[0]
            id = f"{module}_{stem}_{line}"
        return cls(
            level=Level(level),
            message=str(message),
            module=module,
            group=group if group is not None else module,
            id=id,
            file=file,
            line=line,
            fields=_freeze_fields(fields),
            timestamp=timestamp if timestamp is not None else datetime.now(),
        )

    def with_message(self, message: str) -> "Record":
        return replace(self, message=message)
