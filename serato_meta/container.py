from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Tuple, TypeVar

from .diagnostics import MarkerDiagnostics, MarkerIssue
from .models import (
    Analysis,
    Autotags,
    Beatgrid,
    Color,
    CueMarker,
    EntryType,
    LoopMarker,
    Markers,
    Markers2,
    NonTerminalMarker,
    Overview,
    SlotOccupiedError,
    TagKind,
    TagRecord,
    TerminalMarker,
    record_kind,
)

_T = TypeVar("_T")


@dataclass(slots=True)
class Container:
    """Streamlined, read-only view over the Serato tags of a single track.

    Some of the data in the tags is redundant and may contradict itself. The queries below
    merge it the same way Serato does: `Serato Markers_` wins over `Serato Markers2` for
    positions, colors and existence, while labels can only come from `Serato Markers2`.
    """

    analysis: Optional[Analysis] = None
    autotags: Optional[Autotags] = None
    beatgrid: Optional[Beatgrid] = None
    markers: Optional[Markers] = None
    markers2: Optional[Markers2] = None
    overview: Optional[Overview] = None
    diagnostics: MarkerDiagnostics = field(default_factory=MarkerDiagnostics, repr=False, compare=False)

    def populate(self, record: TagRecord) -> TagKind:
        kind = record_kind(record)
        if getattr(self, kind.value) is not None:
            raise SlotOccupiedError(kind)
        setattr(self, kind.value, record)
        return kind

    def present_kinds(self) -> List[TagKind]:
        return [kind for kind in TagKind if getattr(self, kind.value) is not None]

    def auto_gain(self) -> Optional[float]:
        if self.autotags is None:
            return None
        return self.autotags.auto_gain

    def gain_db(self) -> Optional[float]:
        if self.autotags is None:
            return None
        return self.autotags.gain_db

    def beatgrid_markers(self) -> Optional[Tuple[Tuple[NonTerminalMarker, ...], TerminalMarker]]:
        """Returns the non-terminal markers and the terminal marker of `Serato BeatGrid`."""
        if self.beatgrid is None:
            return None
        return self.beatgrid.non_terminal_markers, self.beatgrid.terminal_marker

    def bpm_locked(self) -> Optional[bool]:
        if self.markers2 is None:
            return None
        return self.markers2.bpm_locked()

    def cues(self) -> List[CueMarker]:
        """Returns the cues from `Serato Markers2`, corrected by `Serato Markers_`.

        Only indices known to `Serato Markers2` are reported; a cue that exists solely in
        `Serato Markers_` is left out, matching what Serato displays.
        """
        merged: Dict[int, CueMarker] = {}
        if self.markers2 is not None:
            for cue in self.markers2.cues():
                merged[cue.index] = cue

        if self.markers is not None:
            for index, marker in self.markers.cues():
                if marker.entry_type is EntryType.INVALID:
                    merged.pop(index, None)
                    continue
                if marker.entry_type is not EntryType.CUE:
                    self.diagnostics.report("cue", index, MarkerIssue.UNEXPECTED_ENTRY_TYPE, marker.entry_type.name)
                    continue
                if marker.start_position_millis is None:
                    self.diagnostics.report("cue", index, MarkerIssue.MISSING_POSITION, "no start position")
                    merged.pop(index, None)
                    continue
                existing = merged.get(index)
                if existing is None:
                    continue
                merged[index] = replace(
                    existing,
                    position_millis=marker.start_position_millis,
                    color=marker.color,
                )

        return _ordered_values(merged)

    def loops(self) -> List[LoopMarker]:
        """Returns the saved loops from `Serato Markers2`, corrected by `Serato Markers_`."""
        merged: Dict[int, LoopMarker] = {}
        if self.markers2 is not None:
            for saved_loop in self.markers2.loops():
                merged[saved_loop.index] = saved_loop

        if self.markers is not None:
            for index, marker in self.markers.loops():
                if marker.entry_type is not EntryType.LOOP:
                    # Empty loop slots are stored as INVALID entries.
                    if marker.entry_type is not EntryType.INVALID:
                        self.diagnostics.report(
                            "loop", index, MarkerIssue.UNEXPECTED_ENTRY_TYPE, marker.entry_type.name
                        )
                    continue
                if marker.start_position_millis is None or marker.end_position_millis is None:
                    missing = "start" if marker.start_position_millis is None else "end"
                    self.diagnostics.report("loop", index, MarkerIssue.MISSING_POSITION, f"no {missing} position")
                    merged.pop(index, None)
                    continue
                existing = merged.get(index)
                if existing is None:
                    continue
                merged[index] = replace(
                    existing,
                    start_position_millis=marker.start_position_millis,
                    end_position_millis=marker.end_position_millis,
                    color=marker.color,
                    is_locked=marker.is_locked,
                )

        return _ordered_values(merged)

    def track_color(self) -> Optional[Color]:
        color = None
        if self.markers2 is not None:
            color = self.markers2.track_color()
        if self.markers is not None:
            color = self.markers.track_color
        return color

    def overview_data(self) -> Optional[Tuple[bytes, ...]]:
        if self.overview is None:
            return None
        return self.overview.data

    def to_record(self) -> Dict[str, object]:
        grid = self.beatgrid_markers()
        color = self.track_color()
        data = self.overview_data()
        return {
            "tags": [kind.tag_name for kind in self.present_kinds()],
            "auto_gain": self.auto_gain(),
            "gain_db": self.gain_db(),
            "bpm_locked": self.bpm_locked(),
            "track_color": str(color) if color is not None else None,
            "beatgrid": None
            if grid is None
            else {
                "markers": [
                    {"position": m.position, "beats_till_next_marker": m.beats_till_next_marker} for m in grid[0]
                ],
                "terminal": {"position": grid[1].position, "bpm": grid[1].bpm},
            },
            "cues": [
                {"index": c.index, "position_millis": c.position_millis, "color": str(c.color), "label": c.label}
                for c in self.cues()
            ],
            "loops": [
                {
                    "index": lp.index,
                    "start_position_millis": lp.start_position_millis,
                    "end_position_millis": lp.end_position_millis,
                    "color": str(lp.color),
                    "label": lp.label,
                    "is_locked": lp.is_locked,
                }
                for lp in self.loops()
            ],
            "overview_blocks": None if data is None else len(data),
        }


def _ordered_values(merged: Dict[int, _T]) -> List[_T]:
    return [merged[index] for index in sorted(merged)]
