import unittest

from serato_meta.container import Container
from serato_meta.diagnostics import MarkerIssue
from serato_meta.models import (
    Color,
    CueMarker,
    EntryType,
    Marker,
    Markers,
    Markers2,
    Version,
)

RED = Color.from_int(0xCC0000)
BLUE = Color.from_int(0x0000CC)
ORANGE = Color.from_int(0xCC8800)
BLACK = Color.from_int(0x000000)


def _cue(index, position, color=BLUE, label=None):
    return CueMarker(index=index, position_millis=position, color=color, label=label)


def _v1_cue(start, color=RED, entry_type=EntryType.CUE):
    return Marker(entry_type=entry_type, start_position_millis=start, end_position_millis=None, color=color)


def _v1_invalid():
    return Marker(entry_type=EntryType.INVALID, start_position_millis=None, end_position_millis=None, color=BLACK)


def _markers(*cue_entries):
    return Markers(version=Version(2, 5), entries=tuple(cue_entries), track_color=BLACK)


def _markers2(*cues):
    return Markers2(version=Version(1, 1), content=tuple(cues))


class TestContainerCues(unittest.TestCase):
    def test_v1_position_and_color_keep_v2_label(self) -> None:
        container = Container(
            markers2=_markers2(_cue(3, 1000, label="Intro")),
            markers=_markers(_v1_invalid(), _v1_invalid(), _v1_invalid(), _v1_cue(1200, RED)),
        )
        self.assertEqual(container.cues(), [CueMarker(index=3, position_millis=1200, color=RED, label="Intro")])

    def test_invalid_v1_entry_removes_v2_cue(self) -> None:
        container = Container(
            markers2=_markers2(_cue(0, 10), _cue(4, 500)),
            markers=_markers(_v1_cue(10, BLUE), _v1_invalid(), _v1_invalid(), _v1_invalid(), _v1_invalid()),
        )
        self.assertEqual([c.index for c in container.cues()], [0])

    def test_cue_without_start_position_is_dropped_and_reported(self) -> None:
        container = Container(
            markers2=_markers2(_cue(0, 10), _cue(1, 20)),
            markers=_markers(_v1_cue(None), _v1_cue(25, ORANGE)),
        )
        with self.assertLogs("serato_meta.diagnostics", level="WARNING"):
            cues = container.cues()
        self.assertEqual(cues, [_cue(1, 25, ORANGE)])
        self.assertEqual(container.diagnostics.counts[MarkerIssue.MISSING_POSITION], 1)
        self.assertEqual(container.diagnostics.events[0].index, 0)

    def test_v2_only_index_is_unchanged(self) -> None:
        original = _cue(2, 3000, ORANGE, "Drop")
        container = Container(markers2=_markers2(_cue(0, 10), original), markers=_markers(_v1_cue(15, RED)))
        cues = container.cues()
        self.assertEqual(cues[1], original)
        self.assertEqual(cues[0], _cue(0, 15, RED))

    def test_v1_only_index_is_not_added(self) -> None:
        container = Container(markers2=_markers2(_cue(1, 100)), markers=_markers(_v1_cue(50), _v1_cue(120)))
        self.assertEqual(container.cues(), [_cue(1, 120, RED)])

    def test_v1_alone_yields_no_cues(self) -> None:
        container = Container(markers=_markers(_v1_cue(50), _v1_cue(120)))
        self.assertEqual(container.cues(), [])

    def test_unexpected_entry_type_is_ignored_with_diagnostic(self) -> None:
        loop_in_cue_slot = _v1_cue(999, RED, entry_type=EntryType.LOOP)
        container = Container(markers2=_markers2(_cue(0, 10, label="A")), markers=_markers(loop_in_cue_slot))
        with self.assertLogs("serato_meta.diagnostics", level="WARNING") as logs:
            cues = container.cues()
        self.assertEqual(cues, [_cue(0, 10, label="A")])
        self.assertEqual(container.diagnostics.counts[MarkerIssue.UNEXPECTED_ENTRY_TYPE], 1)
        self.assertIn("LOOP", logs.output[0])

    def test_result_is_sorted_without_duplicates(self) -> None:
        container = Container(markers2=_markers2(_cue(4, 40), _cue(1, 10), _cue(4, 45), _cue(0, 5)))
        cues = container.cues()
        self.assertEqual([c.index for c in cues], [0, 1, 4])
        self.assertEqual(cues[-1].position_millis, 45)

    def test_repeated_queries_are_identical(self) -> None:
        container = Container(
            markers2=_markers2(_cue(0, 10, label="x"), _cue(1, 20)),
            markers=_markers(_v1_cue(11), _v1_invalid()),
        )
        self.assertEqual(container.cues(), container.cues())

    def test_v2_only_cues_when_v1_absent(self) -> None:
        cues = (_cue(2, 200), _cue(0, 0, label="Start"))
        container = Container(markers2=_markers2(*cues))
        self.assertEqual(container.cues(), [cues[1], cues[0]])


if __name__ == "__main__":
    unittest.main()
