"""Config: instrument geometry and engine limits shared by every module."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

# ── Instrument ───────────────────────────────────────────────────────
TUNING: Final[tuple[str, ...]] = ("E", "B", "G", "D", "A", "E", "B")
"""Open-string note names, index 0 = highest string, index 6 = low B."""

TUNING_OCTAVES: Final[tuple[int, ...]] = (4, 3, 3, 3, 2, 2, 1)
"""Scientific-pitch octave of each open string (E4 ... B1)."""

STRING_LABELS: Final[tuple[str, ...]] = ("e", "B", "G", "D", "A", "E", "B")
"""Row labels used by tablature output."""

NUM_STRINGS: Final[int] = 7
NUM_FRETS: Final[int] = 24

SEMITONES: Final[int] = 12

# ── Fingering windows ("positions") ──────────────────────────────────
WINDOW_ANCHOR_MAX_FRET: Final[int] = 15
"""Highest fret scanned for a low-string anchor note."""

WINDOW_SPAN: Final[int] = 4
"""A window covers base..base+WINDOW_SPAN (five frets)."""

ANCHOR_STRINGS: Final[tuple[int, ...]] = (6, 5)
"""The two lowest-pitched strings; a window is anchored on one of them."""

MIN_WINDOW_STRINGS: Final[int] = 5
MIN_WINDOW_NOTES: Final[int] = 10
MIN_MAP_NOTES: Final[int] = 7
MAX_POSITIONS: Final[int] = 7

# ── Voicing projection ───────────────────────────────────────────────
VOICING_ANCHOR_MIN_FRET: Final[int] = 0
"""Exclusive lower bound for a movable shape's anchor fret."""

VOICING_ANCHOR_MAX_FRET: Final[int] = 20
"""Exclusive upper bound for a movable shape's anchor fret."""

# ── Tablature ────────────────────────────────────────────────────────
NOTES_PER_BAR: Final[int] = 8


@dataclass(frozen=True)
class EngineConfig:
    """
    Runtime switches for a generation request.

    Frozen and hashable so that it can take part in memoization keys.

    Attributes:
        enable_shell_voicings: Include R-3-7 shell shapes in chord voicings.
        max_positions:         Cap on the number of fingering windows returned.
    """

    enable_shell_voicings: bool = True
    max_positions: int = MAX_POSITIONS


DEFAULT_CONFIG: Final[EngineConfig] = EngineConfig()
