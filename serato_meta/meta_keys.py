from __future__ import annotations

# Serato tag names as they appear in the host container (GEOB descriptions, Vorbis keys, ...).
# Keep these centralized to reduce magic strings and accidental divergence.

ANALYSIS = "Serato Analysis"
AUTOTAGS = "Serato Autotags"
BEATGRID = "Serato BeatGrid"
MARKERS = "Serato Markers_"
MARKERS2 = "Serato Markers2"
OVERVIEW = "Serato Overview"

# `Serato Markers_` stores a fixed number of cue slots before the loop slots.
MARKERS_CUE_COUNT = 5
