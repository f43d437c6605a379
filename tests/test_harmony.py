"""Unit tests for diatonic chords, progressions, tensions and anchor contexts."""

from fretlab.config import EngineConfig
from fretlab.fretboard_map import populate
from fretlab.harmony import (
    Chord,
    _resolve_degree,
    anchor_contexts,
    build_chord,
    chord_tone_degree,
    classify_seventh,
    classify_triad,
    diatonic_chords,
    inspect_chord,
    progressions,
    project_voicings,
    roman_degree,
    tension_notes,
)
from fretlab.pitch_space import note_index
from fretlab.scale_theory import generate_scale


def _scale(root: str, name: str):
    return generate_scale(note_index(root), name).value


def _chords(root: str, name: str, with_voicings: bool = False) -> dict[str, Chord]:
    scale = _scale(root, name)
    return diatonic_chords(scale, populate(scale) if with_voicings else None)


def _pcs(*names: str) -> list[int]:
    return [note_index(name) for name in names]


# ── Chord construction ─────────────────────────────────────────────────────────

def test_classify_triad() -> None:
    assert classify_triad(4, 7) == "maj"
    assert classify_triad(3, 7) == "min"
    assert classify_triad(3, 6) == "dim"
    assert classify_triad(4, 8) == "aug"
    # non-tertian stacks fall back to major
    assert classify_triad(4, 9) == "maj"


def test_classify_seventh() -> None:
    assert classify_seventh("maj", 11) == "maj7"
    assert classify_seventh("maj", 10) == "dom7"
    assert classify_seventh("dim", 9) == "dim7"
    assert classify_seventh("min", 11) is None


def test_roman_degree_marks_quality() -> None:
    assert roman_degree(0, "maj") == "I"
    assert roman_degree(1, "min") == "ii"
    assert roman_degree(6, "dim") == "vii°"
    assert roman_degree(2, "aug") == "III+"
    assert roman_degree(7, "maj") == "VIII"


def test_c_major_diatonic_chords() -> None:
    chords = list(_chords("C", "Major").values())
    assert chords[0].triad_notes == ["C", "E", "G"]
    assert chords[0].quality == "maj"
    assert chords[6].quality == "dim"
    assert [c.degree for c in chords] == ["I", "ii", "iii", "IV", "V", "vi", "vii°"]
    assert [c.name for c in chords] == ["C", "Dm", "Em", "F", "G", "Am", "Bdim"]
    assert [c.seventh_name for c in chords] == ["Cmaj7", "Dm7", "Em7", "Fmaj7", "G7", "Am7", "Bm7b5"]
    assert [c.seventh_degree for c in chords] == [
        "Imaj7", "ii7", "iii7", "IVmaj7", "V7", "vi7", "viiø7",
    ]


def test_g_major_tonic_triad() -> None:
    assert _chords("G", "Major")["I"].triad_notes == ["G", "B", "D"]


def test_harmonic_minor_chords() -> None:
    chords = _chords("A", "Harmonic Minor")
    assert chords["III+"].name == "Caug"
    assert chords["vii°"].seventh_name == "G#dim7"
    assert chords["vii°"].seventh_degree == "vii°7"
    # minor-major seventh has no seventh classification
    assert chords["i"].seventh_quality is None
    assert chords["i"].seventh_name == "Am"
    assert chords["i"].seventh_notes == ["A", "C", "E", "G#"]


def test_diminished_scale_gets_eight_chords() -> None:
    chords = _chords("C", "Diminished (WH)")
    assert len(chords) == 8
    assert list(chords)[-1].upper().startswith("VIII")


def test_build_chord_has_no_voicings() -> None:
    assert build_chord(_scale("C", "Major"), 0).voicings == ()


# ── Voicings ───────────────────────────────────────────────────────────────────

def test_open_chord_keeps_its_name() -> None:
    names = [v.name for v in _chords("C", "Major", with_voicings=True)["I"].voicings]
    assert "Open C Major" in names
    assert all(name.startswith("Open") or "fr" in name for name in names)


def test_movable_shapes_are_named_by_anchor_fret() -> None:
    names = [v.name for v in _chords("C", "Major", with_voicings=True)["I"].voicings]
    assert "E-Shape Barre (7-String) @ 8fr" in names
    assert "A-Shape Barre (7-String) @ 3fr" in names


def test_shell_voicings_follow_config() -> None:
    scale = _scale("C", "Major")
    fretboard = populate(scale)
    tonic = build_chord(scale, 0)

    with_shells = [v.name for v in project_voicings(tonic, fretboard)]
    assert "Shell (E-string root) @ 8fr" in with_shells

    config = EngineConfig(enable_shell_voicings=False)
    without = [v.name for v in project_voicings(tonic, fretboard, config)]
    assert without
    assert not any(name.startswith("Shell") for name in without)


def test_open_e_minor_only_for_e_root() -> None:
    em = _chords("E", "Natural Minor", with_voicings=True)["i"]
    am = _chords("A", "Natural Minor", with_voicings=True)["i"]
    assert "Open E Minor" in [v.name for v in em.voicings]
    assert "Open E Minor" not in [v.name for v in am.voicings]
    assert "Open A Minor" in [v.name for v in am.voicings]


# ── Progressions ───────────────────────────────────────────────────────────────

def test_major_progressions_resolve() -> None:
    resolved = {p.name: p for p in progressions(_chords("C", "Major"), "Major")}
    pop = resolved["Classic Pop/Rock"]
    assert pop.analysis == "I - V - vi - IV"
    assert [c.name for c in pop.chords] == ["C", "G", "Am", "F"]
    assert [c.name for c in resolved["Folk & Blues"].chords] == ["C", "F", "G"]


def test_minor_progressions_resolve() -> None:
    resolved = {p.name: p for p in progressions(_chords("E", "Natural Minor"), "Natural Minor")}
    assert [c.name for c in resolved["Standard Minor"].chords] == ["Em", "C", "G", "D"]
    assert [c.name for c in resolved["Andalusian Cadence"].chords] == ["Em", "D", "C", "Bm"]


def test_harmonic_minor_turnaround() -> None:
    resolved = {p.name: p for p in progressions(_chords("A", "Harmonic Minor"), "Harmonic Minor")}
    assert [c.name for c in resolved["Neoclassical Turnaround"].chords] == ["Am", "F", "G#dim", "Am"]
    assert [c.name for c in resolved["Dramatic Minor"].chords] == ["Am", "Dm", "E", "Am"]


def test_scales_without_catalog_use_natural_minor() -> None:
    names = [p.name for p in progressions(_chords("A", "Locrian"), "Locrian")]
    assert names == ["Standard Minor", "Andalusian Cadence"]


def test_unresolved_degrees_are_dropped_from_chords() -> None:
    tonic = _chords("C", "Major")["I"]
    pop = progressions({"I": tonic}, "Major")[0]
    assert pop.degrees == ("I", "V", "vi", "IV")
    assert pop.chords == (tonic,)


def test_degree_resolution_ignores_case_and_marks() -> None:
    chords = _chords("C", "Major")
    assert _resolve_degree("VII", chords).name == "Bdim"
    assert _resolve_degree("vii°", chords).name == "Bdim"
    assert _resolve_degree("V7", chords).name == "G"
    assert _resolve_degree("IX", chords) is None


# ── Tensions ───────────────────────────────────────────────────────────────────

def test_major_seventh_tensions_skip_eleventh() -> None:
    scale = _scale("C", "Major")
    cmaj7 = build_chord(scale, 0)
    assert cmaj7.seventh_notes == ["C", "E", "G", "B"]
    assert tension_notes(cmaj7, [n.pitch for n in scale]) == _pcs("D", "A")


def test_minor_chord_allows_eleventh() -> None:
    scale = _scale("C", "Major")
    dm7 = build_chord(scale, 1)
    assert tension_notes(dm7, [n.pitch for n in scale]) == _pcs("E", "G", "B")


def test_inspect_chord() -> None:
    scale = _scale("C", "Major")
    inspection = inspect_chord(build_chord(scale, 0), scale)
    assert list(inspection.chord_tones) == _pcs("C", "E", "G", "B")
    assert list(inspection.scale_tones) == _pcs("D", "F", "A")
    assert list(inspection.tension_notes) == _pcs("D", "A")


# ── Anchor contexts ────────────────────────────────────────────────────────────

def test_chord_tone_degree_labels() -> None:
    chords = _chords("E", "Natural Minor")
    em = chords["i"]
    assert [chord_tone_degree(p, em) for p in em.seventh] == ["R", "b3", "5", "b7"]
    half_dim = chords["ii°"]
    assert [chord_tone_degree(p, half_dim) for p in half_dim.seventh] == ["R", "b3", "b5", "b7"]
    cmaj = chords["VI"]
    assert chord_tone_degree(note_index("B"), cmaj) == "7"


def test_anchor_contexts_for_open_low_e() -> None:
    scale = _scale("E", "Natural Minor")
    fretboard = populate(scale)
    chords = diatonic_chords(scale)
    contexts = anchor_contexts(fretboard.get(5, 0), chords.values(), fretboard)

    assert {c.chord_degree for c in contexts} == {"i", "ii°", "iv", "VI"}
    counts = [len(c.arpeggio_notes) for c in contexts]
    assert counts == sorted(counts, reverse=True)

    em = next(c for c in contexts if c.chord_degree == "i")
    assert em.description == "E as part of Em (i)"
    assert len(em.arpeggio_notes) == 13
    for note in em.arpeggio_notes:
        assert 0 <= note.position.fret <= 4
        assert note.finger == str(note.position.fret + 1)
    assert {n.degree for n in em.arpeggio_notes} == {"R", "b3", "5", "b7"}
