"""PositionWindower: groups fretboard notes into five-fret fingering boxes."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fretlab.config import (
    ANCHOR_STRINGS,
    MAX_POSITIONS,
    MIN_MAP_NOTES,
    MIN_WINDOW_NOTES,
    MIN_WINDOW_STRINGS,
    WINDOW_ANCHOR_MAX_FRET,
    WINDOW_SPAN,
)
from fretlab.fretboard_map import FretboardMap, FretPosition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FingeredNote:
    """A fretboard position with the finger that frets it ("0" = open)."""

    position: FretPosition
    finger: str

    @property
    def key(self) -> str:
        return self.position.key


@dataclass(frozen=True)
class FingeringWindow:
    """
    One "position": every scale note between ``base_fret`` and
    ``base_fret + 4`` with one finger per fret.

    Attributes:
        base_fret: Fret under the index finger.
        notes:     Fingered notes in fretboard traversal order.
    """

    base_fret: int
    notes: tuple[FingeredNote, ...]

    @property
    def max_fret(self) -> int:
        return self.base_fret + WINDOW_SPAN

    @property
    def key(self) -> tuple[int, int]:
        return self.base_fret, self.max_fret

    @property
    def strings_covered(self) -> int:
        return len({note.position.string for note in self.notes})

    def __len__(self) -> int:
        return len(self.notes)


class PositionWindower:
    """
    Scans the low strings for anchor notes and builds a fingering window
    at each one.

    Algorithm overview
    ------------------
    For every fret 0..15 that holds a scale note on one of the two lowest
    strings:

    1. **Window choice** - Count the notes inside ``[f, f+4]`` and inside
       ``[f-1, f+3]``. The shifted window wins only when it holds strictly
       more notes and ``f > 0``.

    2. **Deduplication** - A window already accepted under the same
       ``(base, base+4)`` key is not emitted again.

    3. **Playability filter** - Keep windows spanning at least five strings
       and holding at least ten notes.

    Accepted windows are sorted by base fret and capped at seven.
    """

    def __init__(self, max_positions: int = MAX_POSITIONS) -> None:
        self.max_positions = max_positions

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _has_anchor(self, fretboard: FretboardMap, fret: int) -> bool:
        return any(fretboard.get(string, fret) is not None for string in ANCHOR_STRINGS)

    def _choose_base(self, fretboard: FretboardMap, fret: int) -> int:
        aligned = fret
        shifted = max(0, fret - 1)
        aligned_count = len(fretboard.in_fret_range(aligned, aligned + WINDOW_SPAN))
        shifted_count = len(fretboard.in_fret_range(shifted, shifted + WINDOW_SPAN))
        if shifted_count > aligned_count and fret > 0:
            return shifted
        return aligned

    def _finger(self, fret: int, base_fret: int) -> str:
        if fret == 0 and base_fret == 0:
            return "0"
        return str(fret - base_fret + 1)

    def _build_window(self, fretboard: FretboardMap, base_fret: int) -> FingeringWindow:
        notes = tuple(
            FingeredNote(position=position, finger=self._finger(position.fret, base_fret))
            for position in fretboard.in_fret_range(base_fret, base_fret + WINDOW_SPAN)
        )
        return FingeringWindow(base_fret=base_fret, notes=notes)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def windows(self, fretboard: FretboardMap) -> list[FingeringWindow]:
        """
        Compute the fingering windows ("positions") of a fretboard map.

        Returns:
            Up to ``max_positions`` windows ordered by base fret. Maps too
            sparse to fill a window yield an empty list.
        """
        if len(fretboard) < MIN_MAP_NOTES:
            return []

        accepted: dict[tuple[int, int], FingeringWindow] = {}
        for fret in range(WINDOW_ANCHOR_MAX_FRET + 1):
            if not self._has_anchor(fretboard, fret):
                continue

            base_fret = self._choose_base(fretboard, fret)
            window_key = (base_fret, base_fret + WINDOW_SPAN)
            if window_key in accepted:
                continue

            window = self._build_window(fretboard, base_fret)
            if window.strings_covered >= MIN_WINDOW_STRINGS and len(window) >= MIN_WINDOW_NOTES:
                accepted[window_key] = window
                logger.debug("Accepted window %s with %d notes", window_key, len(window))

        ordered = sorted(accepted.values(), key=lambda w: w.base_fret)
        return ordered[: self.max_positions]


def windows(fretboard: FretboardMap, max_positions: int = MAX_POSITIONS) -> list[FingeringWindow]:
    """Module-level shortcut for :meth:`PositionWindower.windows`."""
    return PositionWindower(max_positions=max_positions).windows(fretboard)
