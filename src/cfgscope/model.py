"""Classified line types and format constants."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import ClassVar, Union


MULTILINE_SENTINEL = "'''"
MAX_SECTION_DEPTH = 10
DEFAULT_ENCODING = "utf-8"

# Characters C's isspace() accepts; str.strip() alone would also eat
# Unicode separators.
WHITESPACE = " \t\n\r\x0b\x0c"


# ---------------------------------------------------------------------------
# LineType
# ---------------------------------------------------------------------------

class LineType(Enum):
    SECTION = auto()       # name param {
    SECTION_END = auto()   # }
    LINE = auto()          # key = value


# ---------------------------------------------------------------------------
# Classified lines
# ---------------------------------------------------------------------------

@dataclass(slots=True, frozen=True)
class Section:
    """Opening line of a section: ``name param {``."""

    name: str
    param: str = ""

    type: ClassVar[LineType] = LineType.SECTION


@dataclass(slots=True, frozen=True)
class SectionEnd:
    type: ClassVar[LineType] = LineType.SECTION_END


@dataclass(slots=True, frozen=True)
class KeyValue:
    """A ``key = value`` line; multiline values arrive already joined."""

    key: str
    value: str

    type: ClassVar[LineType] = LineType.LINE


ConfigLine = Union[Section, SectionEnd, KeyValue]
