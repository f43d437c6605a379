"""ScaleTheory: expands a root and a scale formula into degree-labelled notes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from fretlab.config import SEMITONES
from fretlab.pitch_space import note_name
from fretlab.result import Failure, Result, Success

#: (semitone step, degree label) pairs walked upward from the root.
SCALE_FORMULAS: Final[dict[str, tuple[tuple[int, str], ...]]] = {
    "Major": ((2, "2"), (2, "3"), (1, "4"), (2, "5"), (2, "6"), (2, "7")),
    "Natural Minor": ((2, "2"), (1, "b3"), (2, "4"), (2, "5"), (1, "b6"), (2, "b7")),
    "Harmonic Minor": ((2, "2"), (1, "b3"), (2, "4"), (2, "5"), (1, "b6"), (3, "7")),
    "Melodic Minor": ((2, "2"), (1, "b3"), (2, "4"), (2, "5"), (2, "6"), (2, "7")),
    "Major Pentatonic": ((2, "2"), (2, "3"), (3, "5"), (2, "6")),
    "Minor Pentatonic": ((3, "b3"), (2, "4"), (2, "5"), (3, "b7")),
    "Blues Scale": ((3, "b3"), (2, "4"), (1, "b5"), (1, "5"), (3, "b7")),
    "Dorian": ((2, "2"), (1, "b3"), (2, "4"), (2, "5"), (2, "6"), (1, "b7")),
    "Phrygian": ((1, "b2"), (2, "b3"), (2, "4"), (2, "5"), (1, "b6"), (2, "b7")),
    "Lydian": ((2, "2"), (2, "3"), (2, "#4"), (1, "5"), (2, "6"), (2, "7")),
    "Mixolydian": ((2, "2"), (2, "3"), (1, "4"), (2, "5"), (2, "6"), (1, "b7")),
    "Locrian": ((1, "b2"), (2, "b3"), (2, "4"), (1, "b5"), (2, "b6"), (2, "b7")),
    "Whole Tone": ((2, "2"), (2, "3"), (2, "#4"), (2, "#5"), (2, "#6")),
    "Diminished (WH)": ((2, "2"), (1, "b3"), (2, "4"), (1, "b5"), (2, "b6"), (1, "6"), (2, "7")),
    "Diminished (HW)": ((1, "b2"), (2, "b3"), (1, "3"), (2, "#4"), (1, "5"), (2, "6"), (1, "b7")),
    "Augmented Scale": ((3, "b3"), (1, "3"), (3, "5"), (1, "#5"), (3, "7")),
    "Phrygian Dominant": ((1, "b2"), (3, "3"), (1, "4"), (2, "5"), (1, "b6"), (2, "b7")),
    "Double Harmonic Major": ((1, "b2"), (3, "3"), (1, "4"), (2, "5"), (1, "b6"), (3, "7")),
    "Hungarian Minor": ((2, "2"), (1, "b3"), (3, "#4"), (1, "5"), (1, "b6"), (3, "7")),
    "Neapolitan Minor": ((1, "b2"), (2, "b3"), (2, "4"), (2, "5"), (1, "b6"), (3, "7")),
}

SCALE_NAMES: Final[tuple[str, ...]] = tuple(SCALE_FORMULAS)

ROOT_DEGREE = "R"

# Colour tones flagged on diagrams whenever present.
_CHARACTERISTIC_ALWAYS: Final[tuple[str, ...]] = ("b2", "#4", "b6")


class UnknownScaleError(LookupError):
    """Returned inside a :class:`Failure` when a scale name is not in the catalog."""

    def __init__(self, scale_name: str) -> None:
        super().__init__(f'Scale formula for "{scale_name}" not found.')
        self.scale_name = scale_name


@dataclass(frozen=True)
class ScaleNote:
    """
    One note of a generated scale.

    Attributes:
        pitch:  Pitch class (0=A, 1=A#, ..., 11=G#).
        degree: Scale-relative label, "R" for the root.
    """

    pitch: int
    degree: str

    @property
    def name(self) -> str:
        return note_name(self.pitch)


def generate_scale(root: int, scale_name: str) -> Result[tuple[ScaleNote, ...], UnknownScaleError]:
    """
    Walk the named formula upward from *root*.

    Args:
        root:       Pitch class of the tonic.
        scale_name: Key into :data:`SCALE_FORMULAS`.

    Returns:
        ``Success`` holding the notes in ascending order starting with the
        root, or ``Failure`` wrapping :class:`UnknownScaleError`.
    """
    formula = SCALE_FORMULAS.get(scale_name)
    if formula is None:
        return Failure(UnknownScaleError(scale_name))

    current = root % SEMITONES
    notes = [ScaleNote(pitch=current, degree=ROOT_DEGREE)]
    for step, degree in formula:
        current = (current + step) % SEMITONES
        notes.append(ScaleNote(pitch=current, degree=degree))
    return Success(tuple(notes))


def characteristic_degrees(scale: tuple[ScaleNote, ...] | list[ScaleNote]) -> list[str]:
    """
    Degrees worth highlighting as the scale's modal colour.

    ``b2``, ``#4`` and ``b6`` always qualify. A natural ``7`` qualifies
    next to a ``b6`` and a natural ``6`` next to a ``b7``.
    """
    degrees = {note.degree for note in scale}
    flagged = [degree for degree in _CHARACTERISTIC_ALWAYS if degree in degrees]
    if "7" in degrees and "b6" in degrees:
        flagged.append("7")
    if "6" in degrees and "b7" in degrees:
        flagged.append("6")
    return flagged


def degree_table_markdown(scale: tuple[ScaleNote, ...] | list[ScaleNote]) -> str:
    """Two-column Markdown table of degree and note name."""
    header = "| Degree | Note |"
    separator = "|---|---|"
    rows = [f"| {note.degree} | {note.name} |" for note in scale]
    return "\n".join([header, separator, *rows])
