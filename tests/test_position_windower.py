"""Unit tests for five-fret fingering windows."""

from fretlab.fretboard_map import FretboardMap, FretPosition, populate
from fretlab.pitch_space import note_index, pitch_at
from fretlab.position_windower import PositionWindower, windows
from fretlab.scale_theory import SCALE_NAMES, generate_scale


def _map(root: str, name: str) -> FretboardMap:
    return populate(generate_scale(note_index(root), name).value)


def test_windows_satisfy_playability_rules() -> None:
    for name in SCALE_NAMES:
        result = windows(_map("G", name))
        keys = [window.key for window in result]
        assert len(keys) == len(set(keys))
        assert len(result) <= 7
        assert [w.base_fret for w in result] == sorted(w.base_fret for w in result)
        for window in result:
            frets = [note.position.fret for note in window.notes]
            assert max(frets) - min(frets) <= 4
            assert window.base_fret <= min(frets)
            assert max(frets) <= window.max_fret
            assert window.strings_covered >= 5
            assert len(window) >= 10


def test_e_minor_first_window_is_open_position() -> None:
    first = windows(_map("E", "Natural Minor"))[0]
    assert first.key == (0, 4)
    assert len(first) == 21
    fingers = {(n.position.string, n.position.fret): n.finger for n in first.notes}
    assert fingers[(6, 0)] == "0"
    assert fingers[(6, 3)] == "4"
    assert fingers[(4, 2)] == "3"


def test_fingers_count_from_base_fret() -> None:
    for window in windows(_map("A", "Major")):
        for note in window.notes:
            if note.finger != "0":
                assert int(note.finger) == note.position.fret - window.base_fret + 1


def test_max_positions_caps_output() -> None:
    fretboard = _map("E", "Natural Minor")
    assert len(PositionWindower(max_positions=2).windows(fretboard)) == 2


def test_sparse_map_yields_no_windows() -> None:
    sparse = FretboardMap(
        positions=tuple(
            FretPosition(string=6, fret=fret, pitch=pitch_at(6, fret), degree="R")
            for fret in (0, 12, 24)
        )
    )
    assert windows(sparse) == []
    assert windows(FretboardMap()) == []
