"""FretboardMap: projects scale notes onto the (string, fret) grid of the fixed tuning."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

import numpy as np

from fretlab.config import NUM_FRETS, SEMITONES
from fretlab.pitch_space import OPEN_PITCHES, note_name
from fretlab.scale_theory import ScaleNote

logger = logging.getLogger(__name__)

#: pitch class of every (string, fret) cell, shape (strings, frets + 1)
PITCH_GRID: np.ndarray = (
    np.asarray(OPEN_PITCHES)[:, np.newaxis] + np.arange(NUM_FRETS + 1)
) % SEMITONES


@dataclass(frozen=True)
class FretPosition:
    """
    A scale note at a concrete fretboard coordinate.

    Attributes:
        string: 0 = high E ... 6 = low B.
        fret:   0 (open) ... 24.
        pitch:  Pitch class sounding at this coordinate.
        degree: Scale degree label of that pitch.
    """

    string: int
    fret: int
    pitch: int
    degree: str

    @property
    def name(self) -> str:
        return note_name(self.pitch)

    @property
    def key(self) -> str:
        """``"<string>_<fret>"`` identifier used by diagram hit-testing."""
        return f"{self.string}_{self.fret}"


@dataclass(frozen=True)
class FretboardMap:
    """
    Every coordinate whose pitch belongs to the active scale.

    Positions are stored in traversal order (string ascending, then fret
    ascending). Lookup by ``(string, fret)`` is O(1).
    """

    positions: tuple[FretPosition, ...] = ()
    _index: dict[tuple[int, int], FretPosition] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __post_init__(self) -> None:
        ordered = tuple(sorted(self.positions, key=lambda p: (p.string, p.fret)))
        object.__setattr__(self, "positions", ordered)
        object.__setattr__(self, "_index", {(p.string, p.fret): p for p in ordered})

    def __len__(self) -> int:
        return len(self.positions)

    def __iter__(self) -> Iterator[FretPosition]:
        return iter(self.positions)

    def __contains__(self, coordinate: object) -> bool:
        return coordinate in self._index

    def get(self, string: int, fret: int) -> FretPosition | None:
        return self._index.get((string, fret))

    def on_string(self, string: int) -> list[FretPosition]:
        """Positions on one string, ascending fret."""
        return [p for p in self.positions if p.string == string]

    def in_fret_range(self, low: int, high: int) -> list[FretPosition]:
        """Positions with ``low <= fret <= high`` in traversal order."""
        return [p for p in self.positions if low <= p.fret <= high]

    def with_pitches(self, pitches: Iterable[int]) -> list[FretPosition]:
        wanted = set(pitches)
        return [p for p in self.positions if p.pitch in wanted]


def populate(scale: Iterable[ScaleNote]) -> FretboardMap:
    """
    Build the FretboardMap of *scale* on the fixed tuning.

    A coordinate is kept iff its pitch class is in the scale and is tagged
    with that pitch's degree label. Empty input yields an empty map.
    """
    degree_by_pitch = {note.pitch: note.degree for note in scale}
    if not degree_by_pitch:
        return FretboardMap()

    mask = np.isin(PITCH_GRID, list(degree_by_pitch))
    positions = []
    for string, fret in np.argwhere(mask):
        pitch = int(PITCH_GRID[string, fret])
        positions.append(
            FretPosition(
                string=int(string),
                fret=int(fret),
                pitch=pitch,
                degree=degree_by_pitch[pitch],
            )
        )

    logger.debug("Populated fretboard map with %d positions", len(positions))
    return FretboardMap(positions=tuple(positions))
