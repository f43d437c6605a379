"""HandPathModel: threads one ergonomic melodic line ("diagonal run") across the neck."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Final

from fretlab.fretboard_map import FretboardMap, FretPosition
from fretlab.scale_theory import ROOT_DEGREE

logger = logging.getLogger(__name__)

# ── Movement cost model ─────────────────────────────────────────────────────
SLIDE_BASE_COST: Final[float] = 1.0
REPOSITION_BASE_COST: Final[float] = 1.5
FALLBACK_JUMP_COST: Final[float] = 10.0

MAX_SLIDE_DISTANCE: Final[int] = 4
MAX_REPOSITION_DISTANCE: Final[int] = 3

# ── Hand geometry ───────────────────────────────────────────────────────────
NARROW_SPAN: Final[int] = 4
WIDE_SPAN: Final[int] = 5
WIDE_SPAN_FROM_FRET: Final[int] = 5  # frets get narrower up the neck

MIN_FINGER = 1
MAX_FINGER = 4


class ShiftType(str, Enum):
    """How the hand reaches the next phrase."""

    SLIDE = "slide"
    REPOSITION = "reposition"
    JUMP = "jump"


@dataclass(frozen=True)
class HandPosition:
    """
    The fretting hand: index finger over ``anchor_fret``, reaching ``span``
    frets beyond it.
    """

    anchor_fret: int
    span: int

    @classmethod
    def at(cls, fret: int) -> HandPosition:
        """Place the hand so that *fret* falls under the second finger."""
        anchor = fret - 1 if fret > 1 else fret
        span = NARROW_SPAN if anchor < WIDE_SPAN_FROM_FRET else WIDE_SPAN
        return cls(anchor_fret=anchor, span=span)

    def reaches(self, fret: int) -> bool:
        return 0 <= fret - self.anchor_fret <= self.span

    def finger_for(self, fret: int) -> str:
        offset = fret - self.anchor_fret
        return str(min(MAX_FINGER, max(MIN_FINGER, offset + 1)))


@dataclass(frozen=True)
class ShiftOption:
    """A candidate move from the end of one phrase to the start of the next."""

    target: FretPosition
    cost: float
    shift_type: ShiftType


@dataclass(frozen=True)
class PathNode:
    """
    One time step of the diagonal run.

    Attributes:
        position:   The fretted scale note.
        finger:     "1".."4".
        shift_type: "slide" when the hand slid along the string onto this
                    note, otherwise None.
    """

    position: FretPosition
    finger: str
    shift_type: str | None = None

    @property
    def string(self) -> int:
        return self.position.string

    @property
    def fret(self) -> int:
        return self.position.fret

    @property
    def pitch(self) -> int:
        return self.position.pitch

    @property
    def degree(self) -> str:
        return self.position.degree

    @property
    def coordinate(self) -> tuple[int, int]:
        return self.position.string, self.position.fret


def _low_to_high(position: FretPosition) -> tuple[int, int]:
    """Master ordering: lowest-pitched string first, then ascending fret."""
    return -position.string, position.fret


class HandPathModel:
    """
    Greedy, cost-minimising model of a fretting hand walking up the neck.

    Algorithm overview
    ------------------
    1. **Phrase** - From the current note, place the hand with
       :meth:`HandPosition.at` and collect the consecutive scale notes on
       the same string that stay inside its reach.

    2. **Shift** - From the phrase's last note, scan forward through the
       master ordering (low string first, ascending fret). Same-string
       targets 1-4 frets away cost ``1 + d`` (slide); targets on the next
       higher string within 3 frets cost ``1.5 + d`` (reposition). The scan
       stops once it passes the next string. The cheapest option wins,
       ties going to the earlier candidate.

    3. **Fallback** - With no candidate, take the very next note of the
       master ordering at cost 10.

    4. Repeat until nothing follows in the master ordering.

    Each shift strictly advances through the master ordering, so the run
    always terminates. The run is not guaranteed to visit every note.
    """

    def __init__(self, fretboard: FretboardMap) -> None:
        self.fretboard = fretboard
        self._ordered: list[FretPosition] = sorted(fretboard, key=_low_to_high)
        self._master_index: dict[tuple[int, int], int] = {
            (p.string, p.fret): idx for idx, p in enumerate(self._ordered)
        }
        self._by_string: dict[int, list[FretPosition]] = {}
        for position in self._ordered:
            self._by_string.setdefault(position.string, []).append(position)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _phrase_in_reach(self, start: FretPosition) -> list[PathNode]:
        notes_on_string = self._by_string.get(start.string, [])
        start_index = next(
            (idx for idx, p in enumerate(notes_on_string) if p.fret == start.fret), None
        )
        if start_index is None:
            return []

        hand = HandPosition.at(start.fret)
        phrase: list[PathNode] = []
        for position in notes_on_string[start_index:]:
            if not hand.reaches(position.fret):
                break
            phrase.append(PathNode(position=position, finger=hand.finger_for(position.fret)))
        return phrase

    def _shift_options(self, last: FretPosition, master_index: int) -> list[ShiftOption]:
        options: list[ShiftOption] = []
        for candidate in self._ordered[master_index + 1:]:
            if candidate.string == last.string:
                distance = candidate.fret - last.fret
                if 0 < distance <= MAX_SLIDE_DISTANCE:
                    options.append(
                        ShiftOption(candidate, SLIDE_BASE_COST + distance, ShiftType.SLIDE)
                    )
            elif candidate.string == last.string - 1:
                distance = abs(candidate.fret - last.fret)
                if distance <= MAX_REPOSITION_DISTANCE:
                    options.append(
                        ShiftOption(candidate, REPOSITION_BASE_COST + distance, ShiftType.REPOSITION)
                    )
            elif candidate.string < last.string - 1:
                break
        return options

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def next_shift(self, last: FretPosition) -> ShiftOption | None:
        """
        The cheapest move out of *last*, or None at the end of the neck.
        """
        master_index = self._master_index.get((last.string, last.fret))
        if master_index is None:
            return None

        options = self._shift_options(last, master_index)
        if options:
            # min() keeps the first of equal-cost options, i.e. the nearer one
            return min(options, key=lambda option: option.cost)

        if master_index + 1 < len(self._ordered):
            target = self._ordered[master_index + 1]
            logger.debug("Awkward jump from %s to %s", last.key, target.key)
            return ShiftOption(target, FALLBACK_JUMP_COST, ShiftType.JUMP)
        return None

    def generate_full_path(self, start: FretPosition) -> list[PathNode]:
        """
        Build the complete run beginning at *start*.

        Returns:
            Ordered path nodes; empty when *start* is not on the map.
        """
        path: list[PathNode] = []
        current: FretPosition | None = start
        arrived_by: ShiftType | None = None

        while current is not None:
            phrase = self._phrase_in_reach(current)
            if not phrase:
                break

            if arrived_by is ShiftType.SLIDE:
                phrase[0] = PathNode(phrase[0].position, phrase[0].finger, ShiftType.SLIDE.value)

            if path and path[-1].coordinate == phrase[0].coordinate:
                phrase = phrase[1:]
            path.extend(phrase)

            shift = self.next_shift(path[-1].position)
            if shift is None:
                break
            current, arrived_by = shift.target, shift.shift_type

        logger.debug("Diagonal run from %s has %d notes", start.key, len(path))
        return path


def lowest_root(fretboard: FretboardMap) -> FretPosition | None:
    """The root on the lowest-pitched string, lowest fret first."""
    roots = [p for p in fretboard if p.degree == ROOT_DEGREE]
    if not roots:
        return None
    return min(roots, key=_low_to_high)


def diagonal_run(fretboard: FretboardMap) -> list[PathNode]:
    """The ergonomic run starting from the lowest root of *fretboard*."""
    start = lowest_root(fretboard)
    if start is None:
        return []
    return HandPathModel(fretboard).generate_full_path(start)
