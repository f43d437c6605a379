"""Pipeline: assembles and memoizes the ScaleData bundle for one (root, scale) selection."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache

from fretlab.config import DEFAULT_CONFIG, EngineConfig
from fretlab.fretboard_map import FretboardMap, populate
from fretlab.hand_path import PathNode, diagonal_run
from fretlab.harmony import (
    AnchorContext,
    Chord,
    ChordInspection,
    ChordProgression,
    anchor_contexts,
    diatonic_chords,
    inspect_chord,
    progressions,
)
from fretlab.pitch_space import note_index, normalize_note_name
from fretlab.position_windower import FingeringWindow, PositionWindower
from fretlab.result import Failure, Result, Success
from fretlab.scale_theory import (
    ScaleNote,
    UnknownScaleError,
    characteristic_degrees,
    degree_table_markdown,
    generate_scale,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScaleData:
    """
    Everything computed for one (root, scale) selection.

    Attributes:
        root_note:               Canonical root name.
        scale_name:              Catalog key of the scale.
        scale_notes:             Degree-labelled notes, root first.
        characteristic_degrees:  Colour tones to outline on diagrams.
        fretboard:               Every scale coordinate on the neck.
        positions:               Five-fret fingering windows.
        diagonal_run:            The ergonomic run from the lowest root.
        chords:                  Diatonic chords in scale-degree order.
        progressions:            Catalog progressions resolved to chords.
        degree_table:            Markdown degree/note table.
    """

    root_note: str
    scale_name: str
    scale_notes: tuple[ScaleNote, ...]
    characteristic_degrees: tuple[str, ...]
    fretboard: FretboardMap
    positions: tuple[FingeringWindow, ...]
    diagonal_run: tuple[PathNode, ...]
    chords: tuple[Chord, ...]
    progressions: tuple[ChordProgression, ...]
    degree_table: str

    @property
    def chord_map(self) -> dict[str, Chord]:
        """Chords keyed by roman-numeral degree."""
        return {chord.degree: chord for chord in self.chords}

    def chord(self, degree: str) -> Chord | None:
        return self.chord_map.get(degree)

    def inspect(self, degree: str) -> ChordInspection | None:
        """Chord tones, scale tones and tensions of the chord on *degree*."""
        chord = self.chord(degree)
        if chord is None:
            return None
        return inspect_chord(chord, self.scale_notes)

    def anchor_contexts(self, string: int, fret: int) -> list[AnchorContext]:
        """Chord contexts for a clicked coordinate; empty off the scale."""
        position = self.fretboard.get(string, fret)
        if position is None:
            return []
        return anchor_contexts(position, self.chords, self.fretboard)


@lru_cache(maxsize=256)
def _build(root_note: str, scale_name: str, config: EngineConfig) -> Result[ScaleData, UnknownScaleError]:
    scale_result = generate_scale(note_index(root_note), scale_name)
    if isinstance(scale_result, Failure):
        return scale_result

    scale = scale_result.value
    fretboard = populate(scale)
    positions = PositionWindower(max_positions=config.max_positions).windows(fretboard)
    run = diagonal_run(fretboard)
    chord_map = diatonic_chords(scale, fretboard, config)
    resolved = progressions(chord_map, scale_name)

    logger.info(
        "Generated %s %s: %d fretboard notes, %d positions, %d-note run, %d chords",
        root_note, scale_name, len(fretboard), len(positions), len(run), len(chord_map),
    )
    return Success(
        ScaleData(
            root_note=root_note,
            scale_name=scale_name,
            scale_notes=scale,
            characteristic_degrees=tuple(characteristic_degrees(scale)),
            fretboard=fretboard,
            positions=tuple(positions),
            diagonal_run=tuple(run),
            chords=tuple(chord_map.values()),
            progressions=tuple(resolved),
            degree_table=degree_table_markdown(scale),
        )
    )


def generate_scale_data(
    root_note: str,
    scale_name: str,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Result[ScaleData, UnknownScaleError]:
    """
    Run the whole engine for one selection.

    Args:
        root_note:  Any spelling of the root ("Bb", "a#", "C").
        scale_name: Key into the scale catalog.
        config:     Runtime switches.

    Returns:
        ``Success(ScaleData)``, or ``Failure(UnknownScaleError)`` when the
        scale is not in the catalog.

    Raises:
        ValueError: If *root_note* is not a note name.
    """
    canonical = normalize_note_name(root_note)
    note_index(canonical)
    return _build(canonical, scale_name, config)


def clear_cache() -> None:
    _build.cache_clear()
