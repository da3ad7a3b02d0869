from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from . import meta_keys
from .meta_keys import MARKERS_CUE_COUNT


@dataclass(frozen=True, slots=True)
class Color:
    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        for channel in (self.red, self.green, self.blue):
            if not 0 <= channel <= 0xFF:
                raise ValueError(f"Color channel out of range: {channel}")

    @classmethod
    def from_int(cls, value: int) -> "Color":
        if not 0 <= value <= 0xFFFFFF:
            raise ValueError(f"Color value out of range: {value:#x}")
        return cls(red=(value >> 16) & 0xFF, green=(value >> 8) & 0xFF, blue=value & 0xFF)

    def to_int(self) -> int:
        return (self.red << 16) | (self.green << 8) | self.blue

    def __str__(self) -> str:
        return f"#{self.to_int():06x}"


class TagKind(Enum):
    """The six tag records a container can hold, in slot order."""

    ANALYSIS = "analysis"
    AUTOTAGS = "autotags"
    BEATGRID = "beatgrid"
    MARKERS = "markers"
    MARKERS2 = "markers2"
    OVERVIEW = "overview"

    @property
    def tag_name(self) -> str:
        return _TAG_NAMES[self]


_TAG_NAMES = {
    TagKind.ANALYSIS: meta_keys.ANALYSIS,
    TagKind.AUTOTAGS: meta_keys.AUTOTAGS,
    TagKind.BEATGRID: meta_keys.BEATGRID,
    TagKind.MARKERS: meta_keys.MARKERS,
    TagKind.MARKERS2: meta_keys.MARKERS2,
    TagKind.OVERVIEW: meta_keys.OVERVIEW,
}


@dataclass(frozen=True, slots=True)
class Version:
    major: int
    minor: int


@dataclass(frozen=True, slots=True)
class Analysis:
    version: Version


@dataclass(frozen=True, slots=True)
class Autotags:
    version: Version
    bpm: float
    auto_gain: float
    gain_db: float


@dataclass(frozen=True, slots=True)
class NonTerminalMarker:
    position: float
    beats_till_next_marker: int


@dataclass(frozen=True, slots=True)
class TerminalMarker:
    position: float
    bpm: float


@dataclass(frozen=True, slots=True)
class Beatgrid:
    version: Version
    non_terminal_markers: Tuple[NonTerminalMarker, ...]
    terminal_marker: TerminalMarker
    footer: int = 0


class EntryType(Enum):
    """Entry kinds of the legacy `Serato Markers_` tag."""

    INVALID = 0
    CUE = 1
    LOOP = 3
    UNKNOWN = -1

    @classmethod
    def _missing_(cls, value: object) -> "EntryType":
        return cls.UNKNOWN


@dataclass(frozen=True, slots=True)
class Marker:
    entry_type: EntryType
    start_position_millis: Optional[int]
    end_position_millis: Optional[int]
    color: Color
    is_locked: bool = False


@dataclass(frozen=True, slots=True)
class Markers:
    """Legacy marker tag: five cue slots followed by the loop slots."""

    version: Version
    entries: Tuple[Marker, ...]
    track_color: Color

    def cues(self) -> list[tuple[int, Marker]]:
        return list(enumerate(self.entries[:MARKERS_CUE_COUNT]))

    def loops(self) -> list[tuple[int, Marker]]:
        return list(enumerate(self.entries[MARKERS_CUE_COUNT:]))


@dataclass(frozen=True, slots=True)
class CueMarker:
    index: int
    position_millis: int
    color: Color
    label: Optional[str] = None


@dataclass(frozen=True, slots=True)
class LoopMarker:
    index: int
    start_position_millis: int
    end_position_millis: int
    color: Color
    label: Optional[str] = None
    is_locked: bool = False


@dataclass(frozen=True, slots=True)
class ColorMarker:
    color: Color


@dataclass(frozen=True, slots=True)
class BpmLockMarker:
    is_locked: bool


@dataclass(frozen=True, slots=True)
class UnknownMarker:
    name: str
    data: bytes


Markers2Entry = Union[CueMarker, LoopMarker, ColorMarker, BpmLockMarker, UnknownMarker]


@dataclass(frozen=True, slots=True)
class Markers2:
    version: Version
    content: Tuple[Markers2Entry, ...]

    def cues(self) -> list[CueMarker]:
        return [entry for entry in self.content if isinstance(entry, CueMarker)]

    def loops(self) -> list[LoopMarker]:
        return [entry for entry in self.content if isinstance(entry, LoopMarker)]

    def track_color(self) -> Optional[Color]:
        color = None
        for entry in self.content:
            if isinstance(entry, ColorMarker):
                color = entry.color
        return color

    def bpm_locked(self) -> Optional[bool]:
        locked = None
        for entry in self.content:
            if isinstance(entry, BpmLockMarker):
                locked = entry.is_locked
        return locked


@dataclass(frozen=True, slots=True)
class Overview:
    version: Version
    data: Tuple[bytes, ...]


TagRecord = Union[Analysis, Autotags, Beatgrid, Markers, Markers2, Overview]

RECORD_KINDS: dict[type, TagKind] = {
    Analysis: TagKind.ANALYSIS,
    Autotags: TagKind.AUTOTAGS,
    Beatgrid: TagKind.BEATGRID,
    Markers: TagKind.MARKERS,
    Markers2: TagKind.MARKERS2,
    Overview: TagKind.OVERVIEW,
}


def record_kind(record: object) -> TagKind:
    kind = RECORD_KINDS.get(type(record))
    if kind is None:
        raise TypeError(f"Not a Serato tag record: {type(record).__name__}")
    return kind


class SeratoMetaError(Exception):
    """Base class for errors raised by this package."""


class TagDecodeError(SeratoMetaError):
    """Raised by a provider when a tag is present but cannot be decoded."""


class SlotOccupiedError(SeratoMetaError):
    """Raised when a container slot that already holds a record is populated again."""

    def __init__(self, kind: TagKind) -> None:
        super().__init__(f"{kind.tag_name} slot is already populated")
        self.kind = kind
