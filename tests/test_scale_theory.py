"""Unit tests for scale generation and the scale catalog."""

import pytest

from fretlab.pitch_space import NOTE_NAMES, note_index
from fretlab.result import Failure, Success
from fretlab.scale_theory import (
    SCALE_FORMULAS,
    SCALE_NAMES,
    UnknownScaleError,
    characteristic_degrees,
    degree_table_markdown,
    generate_scale,
)


def _scale(root: str, name: str):
    result = generate_scale(note_index(root), name)
    assert isinstance(result, Success)
    return result.value


def test_e_natural_minor_notes_and_degrees() -> None:
    scale = _scale("E", "Natural Minor")
    assert [note.name for note in scale] == ["E", "F#", "G", "A", "B", "C", "D"]
    assert [note.degree for note in scale] == ["R", "2", "b3", "4", "5", "b6", "b7"]


@pytest.mark.parametrize("scale_name", SCALE_NAMES)
def test_every_scale_starts_on_root_with_formula_length(scale_name: str) -> None:
    for root in range(len(NOTE_NAMES)):
        result = generate_scale(root, scale_name)
        assert result.ok
        scale = result.value
        assert (scale[0].pitch, scale[0].degree) == (root, "R")
        assert len(scale) == len(SCALE_FORMULAS[scale_name]) + 1


def test_diminished_scales_have_eight_notes() -> None:
    assert len(_scale("C", "Diminished (WH)")) == 8
    assert len(_scale("C", "Diminished (HW)")) == 8


def test_unknown_scale_is_returned_as_failure() -> None:
    result = generate_scale(0, "Bogus")
    assert isinstance(result, Failure)
    assert not result.ok
    assert isinstance(result.error, UnknownScaleError)
    assert result.error.scale_name == "Bogus"
    assert str(result.error) == 'Scale formula for "Bogus" not found.'


def test_characteristic_degrees() -> None:
    assert characteristic_degrees(_scale("C", "Major")) == []
    assert characteristic_degrees(_scale("A", "Harmonic Minor")) == ["b6", "7"]
    assert characteristic_degrees(_scale("D", "Dorian")) == ["6"]
    assert characteristic_degrees(_scale("E", "Phrygian")) == ["b2", "b6"]
    assert characteristic_degrees(_scale("F", "Lydian")) == ["#4"]


def test_degree_table_markdown() -> None:
    table = degree_table_markdown(_scale("G", "Major Pentatonic"))
    lines = table.splitlines()
    assert lines[0] == "| Degree | Note |"
    assert lines[1] == "|---|---|"
    assert lines[2] == "| R | G |"
    assert lines[-1] == "| 6 | E |"
    assert len(lines) == 7
