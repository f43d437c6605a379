"""HarmonyEngine: diatonic chords, concrete voicings, progressions and tension analysis."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import Final

from fretlab.config import (
    DEFAULT_CONFIG,
    NUM_FRETS,
    SEMITONES,
    VOICING_ANCHOR_MAX_FRET,
    VOICING_ANCHOR_MIN_FRET,
    EngineConfig,
)
from fretlab.fretboard_map import FretboardMap, FretPosition
from fretlab.pitch_space import INTERVAL_LABELS, interval, note_index, note_name, pitch_at
from fretlab.scale_theory import ScaleNote
from fretlab.voicing_library import VOICING_LIBRARY, Barre, VoicingTemplate

logger = logging.getLogger(__name__)

ROMAN_NUMERALS: Final[tuple[str, ...]] = ("I", "II", "III", "IV", "V", "VI", "VII", "VIII")

# ── Interval tables ─────────────────────────────────────────────────────────
MINOR_THIRD = 3
MAJOR_THIRD = 4
DIMINISHED_FIFTH = 6
AUGMENTED_FIFTH = 8
DIMINISHED_SEVENTH = 9
MINOR_SEVENTH = 10
MAJOR_SEVENTH = 11

TRIAD_QUALITIES: Final[tuple[str, ...]] = ("maj", "min", "dim", "aug")
SEVENTH_QUALITIES: Final[tuple[str, ...]] = ("maj7", "min7", "dom7", "min7b5", "dim7")

_TRIAD_SUFFIX: Final[dict[str, str]] = {"maj": "", "min": "m", "dim": "dim", "aug": "aug"}
_SEVENTH_SUFFIX: Final[dict[str, str]] = {
    "maj7": "maj7", "dom7": "7", "min7": "m7", "min7b5": "m7b5", "dim7": "dim7",
}
_SEVENTH_DEGREE_SUFFIX: Final[dict[str, str]] = {
    "maj7": "maj7", "dom7": "7", "min7": "7", "min7b5": "ø7", "dim7": "°7",
}
_SEVENTH_TONE_LABEL: Final[dict[str, str]] = {
    "maj7": "7", "dom7": "b7", "min7": "b7", "min7b5": "b7", "dim7": "bb7",
}
# (triad quality, seventh interval) -> seventh-chord quality
_SEVENTH_CLASSES: Final[dict[tuple[str, int], str]] = {
    ("maj", MAJOR_SEVENTH): "maj7",
    ("maj", MINOR_SEVENTH): "dom7",
    ("min", MINOR_SEVENTH): "min7",
    ("dim", MINOR_SEVENTH): "min7b5",
    ("dim", DIMINISHED_SEVENTH): "dim7",
}

# b9, 9, #9, 11, #11, b13, 13
TENSION_INTERVALS: Final[frozenset[int]] = frozenset({1, 2, 3, 5, 6, 8, 9})
PERFECT_ELEVENTH = 5

#: Scale name -> [(progression name, roman-numeral degrees)]
PROGRESSION_FORMULAS: Final[dict[str, tuple[tuple[str, tuple[str, ...]], ...]]] = {
    "Major": (
        ("Classic Pop/Rock", ("I", "V", "vi", "IV")),
        ("Folk & Blues", ("I", "IV", "V")),
    ),
    "Natural Minor": (
        ("Standard Minor", ("i", "VI", "III", "VII")),
        ("Andalusian Cadence", ("i", "VII", "VI", "V")),
    ),
    "Harmonic Minor": (
        ("Dramatic Minor", ("i", "iv", "V", "i")),
        ("Neoclassical Turnaround", ("i", "VI", "vii°", "i")),
    ),
    "Dorian": (
        ("Dorian Vamp", ("i", "IV")),
        ("Minor Rock Cycle", ("i", "VII", "IV", "i")),
    ),
    "Phrygian": (
        ("Phrygian Vamp", ("i", "II")),
        ("Phrygian Descent", ("i", "vii", "VI", "II")),
    ),
    "Lydian": (
        ("Lydian Lift", ("I", "II")),
        ("Floating Cadence", ("I", "II", "vii", "I")),
    ),
    "Mixolydian": (
        ("Mixolydian Rock", ("I", "VII", "IV", "I")),
        ("Dominant Vamp", ("I", "v", "IV")),
    ),
}
DEFAULT_PROGRESSION_SCALE = "Natural Minor"


@dataclass(frozen=True)
class VoicingNote:
    """A fretted note of a concrete voicing."""

    string: int
    fret: int
    degree: str
    pitch: int


@dataclass(frozen=True)
class Voicing:
    """A voicing template placed at a concrete fret; every fret lies in 0..24."""

    name: str
    notes: tuple[VoicingNote, ...]
    barres: tuple[Barre, ...] = ()
    open_strings: tuple[int, ...] = ()
    muted_strings: tuple[int, ...] = ()


@dataclass(frozen=True)
class Chord:
    """
    The diatonic chord built on one scale degree.

    Attributes:
        name:            Triad name, e.g. "Am" or "Bdim".
        degree:          Roman-numeral label, e.g. "vi" or "vii°".
        quality:         Triad quality: "maj", "min", "dim" or "aug".
        root:            Pitch class of the chord root.
        triad:           Root, third and fifth pitch classes.
        seventh:         Triad plus the scale tone a seventh above the root.
        seventh_quality: "maj7", "dom7", "min7", "min7b5", "dim7" or None
                         when the stacked fourth tone is not a seventh.
        seventh_name:    e.g. "Am7" (the triad name when there is no seventh).
        seventh_degree:  e.g. "vi7" (the triad degree when there is no seventh).
        voicings:        Playable voicings projected onto the fretboard.
    """

    name: str
    degree: str
    quality: str
    root: int
    triad: tuple[int, ...]
    seventh: tuple[int, ...]
    seventh_quality: str | None = None
    seventh_name: str = ""
    seventh_degree: str = ""
    voicings: tuple[Voicing, ...] = ()

    @property
    def triad_notes(self) -> list[str]:
        return [note_name(p) for p in self.triad]

    @property
    def seventh_notes(self) -> list[str]:
        return [note_name(p) for p in self.seventh]

    @property
    def qualities(self) -> frozenset[str]:
        """Triad and seventh qualities, for template matching."""
        if self.seventh_quality is None:
            return frozenset({self.quality})
        return frozenset({self.quality, self.seventh_quality})

    @property
    def is_major_family(self) -> bool:
        return self.quality == "maj" or self.seventh_quality in ("maj7", "dom7")


@dataclass(frozen=True)
class ChordProgression:
    name: str
    analysis: str
    degrees: tuple[str, ...]
    chords: tuple[Chord, ...]


@dataclass(frozen=True)
class ChordInspection:
    """Chord tones, remaining parent-scale tones and the usable tensions among them."""

    chord_tones: tuple[int, ...]
    scale_tones: tuple[int, ...]
    tension_notes: tuple[int, ...]


@dataclass(frozen=True)
class ArpeggioNote:
    position: FretPosition
    finger: str
    degree: str


@dataclass(frozen=True)
class AnchorContext:
    """A diatonic chord containing the clicked note, shown inside a nearby hand box."""

    description: str
    chord_degree: str
    arpeggio_notes: tuple[ArpeggioNote, ...]


# ── Chord construction ──────────────────────────────────────────────────────

def classify_triad(third: int, fifth: int) -> str:
    """Triad quality from the root-to-third and root-to-fifth intervals."""
    if third == MINOR_THIRD:
        return "dim" if fifth == DIMINISHED_FIFTH else "min"
    if third == MAJOR_THIRD and fifth == AUGMENTED_FIFTH:
        return "aug"
    return "maj"


def classify_seventh(triad_quality: str, seventh: int) -> str | None:
    return _SEVENTH_CLASSES.get((triad_quality, seventh))


def roman_degree(index: int, quality: str) -> str:
    numeral = ROMAN_NUMERALS[index]
    if quality == "min":
        return numeral.lower()
    if quality == "dim":
        return f"{numeral.lower()}°"
    if quality == "aug":
        return f"{numeral}+"
    return numeral


def _seventh_degree(index: int, triad_quality: str, seventh_quality: str | None) -> str:
    if seventh_quality is None:
        return roman_degree(index, triad_quality)
    numeral = ROMAN_NUMERALS[index]
    if triad_quality in ("min", "dim"):
        numeral = numeral.lower()
    return numeral + _SEVENTH_DEGREE_SUFFIX[seventh_quality]


def build_chord(scale: tuple[ScaleNote, ...] | list[ScaleNote], index: int) -> Chord:
    """Stack thirds on scale degree *index* (no voicings attached)."""
    size = len(scale)
    root = scale[index].pitch
    third = scale[(index + 2) % size].pitch
    fifth = scale[(index + 4) % size].pitch
    seventh = scale[(index + 6) % size].pitch

    quality = classify_triad(interval(root, third), interval(root, fifth))
    seventh_quality = classify_seventh(quality, interval(root, seventh))
    name = note_name(root) + _TRIAD_SUFFIX[quality]

    return Chord(
        name=name,
        degree=roman_degree(index, quality),
        quality=quality,
        root=root,
        triad=(root, third, fifth),
        seventh=(root, third, fifth, seventh),
        seventh_quality=seventh_quality,
        seventh_name=note_name(root) + _SEVENTH_SUFFIX[seventh_quality] if seventh_quality else name,
        seventh_degree=_seventh_degree(index, quality, seventh_quality),
    )


def diatonic_chords(
    scale: tuple[ScaleNote, ...] | list[ScaleNote],
    fretboard: FretboardMap | None = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> dict[str, Chord]:
    """
    One chord per scale degree, keyed by roman-numeral label in scale order.

    When *fretboard* is given, each chord also carries its projected voicings.
    """
    chords: dict[str, Chord] = {}
    for index in range(len(scale)):
        chord = build_chord(scale, index)
        if fretboard is not None:
            chord = _with_voicings(chord, project_voicings(chord, fretboard, config))
        chords[chord.degree] = chord
    return chords


def _with_voicings(chord: Chord, voicings: list[Voicing]) -> Chord:
    return replace(chord, voicings=tuple(voicings))


# ── Voicing projection ──────────────────────────────────────────────────────

def _templates_for(chord: Chord, config: EngineConfig) -> list[VoicingTemplate]:
    templates = [t for t in VOICING_LIBRARY if t.qualities & chord.qualities]
    if not config.enable_shell_voicings:
        templates = [t for t in templates if t.category != "shell"]
    return templates


def _place(template: VoicingTemplate, offset: int, name: str) -> Voicing | None:
    notes = tuple(
        VoicingNote(
            string=note.string,
            fret=note.fret + offset,
            degree=note.degree,
            pitch=pitch_at(note.string, note.fret + offset),
        )
        for note in template.notes
    )
    barres = tuple(
        Barre(from_string=b.from_string, to_string=b.to_string, fret=b.fret + offset)
        for b in template.barres
    )
    frets = [n.fret for n in notes] + [b.fret for b in barres]
    if not all(0 <= fret <= NUM_FRETS for fret in frets):
        return None
    return Voicing(
        name=name,
        notes=notes,
        barres=barres,
        open_strings=template.open_strings,
        muted_strings=template.muted_strings,
    )


def project_voicings(
    chord: Chord,
    fretboard: FretboardMap,
    config: EngineConfig = DEFAULT_CONFIG,
) -> list[Voicing]:
    """
    Instantiate every matching template for *chord*.

    Movable shapes are anchored on each occurrence of the chord root on the
    template's root string with ``0 < fret < 20``; placements that would
    leave the 0..24 fret range are dropped. Open shapes are used as-is when
    their root note matches.
    """
    voicings: list[Voicing] = []
    for template in _templates_for(chord, config):
        if not template.movable:
            if template.root_note is not None and note_index(template.root_note) == chord.root:
                placed = _place(template, 0, template.name)
                if placed is not None:
                    voicings.append(placed)
            continue

        anchors = [
            p
            for p in fretboard.on_string(template.root.string)
            if p.pitch == chord.root and VOICING_ANCHOR_MIN_FRET < p.fret < VOICING_ANCHOR_MAX_FRET
        ]
        for anchor in anchors:
            offset = anchor.fret - template.root.fret
            placed = _place(template, offset, f"{template.name} @ {anchor.fret}fr")
            if placed is not None:
                voicings.append(placed)

    logger.debug("Projected %d voicings for %s", len(voicings), chord.name)
    return voicings


# ── Progressions ────────────────────────────────────────────────────────────

def _plain_degree(label: str) -> str:
    """Case- and diacritic-insensitive form of a roman-numeral label."""
    stripped = label.lower()
    for mark in ("°7", "ø7", "maj7", "°", "ø", "+", "7"):
        stripped = stripped.replace(mark, "")
    return stripped


def _resolve_degree(degree: str, chords: dict[str, Chord]) -> Chord | None:
    if degree in chords:
        return chords[degree]
    wanted = _plain_degree(degree)
    for key, chord in chords.items():
        if _plain_degree(key) == wanted:
            return chord
    for key, chord in chords.items():
        if _plain_degree(key).startswith(wanted):
            return chord
    return None


def progressions(chords: dict[str, Chord], scale_name: str) -> list[ChordProgression]:
    """
    Resolve the scale's progression catalog against its diatonic chords.

    Scales without their own catalog use the Natural Minor one. Degrees that
    do not resolve are omitted from ``chords`` but kept in ``degrees``.
    """
    formulas = PROGRESSION_FORMULAS.get(scale_name, PROGRESSION_FORMULAS[DEFAULT_PROGRESSION_SCALE])
    result = []
    for name, degrees in formulas:
        resolved = [_resolve_degree(degree, chords) for degree in degrees]
        result.append(
            ChordProgression(
                name=name,
                analysis=" - ".join(degrees),
                degrees=degrees,
                chords=tuple(chord for chord in resolved if chord is not None),
            )
        )
    return result


# ── Ad-hoc analysis ─────────────────────────────────────────────────────────

def tension_notes(chord: Chord, parent_scale: Iterable[int]) -> list[int]:
    """
    Parent-scale pitches usable as extensions over *chord*.

    A tone qualifies when it is outside the seventh chord and lies a b9, 9,
    #9, 11, #11, b13 or 13 above the root. The natural 11 is withheld from
    major and dominant chords.
    """
    chord_tones = set(chord.seventh)
    tensions = []
    for pitch in dict.fromkeys(p % SEMITONES for p in parent_scale):
        if pitch in chord_tones:
            continue
        distance = interval(chord.root, pitch)
        if distance not in TENSION_INTERVALS:
            continue
        if distance == PERFECT_ELEVENTH and chord.is_major_family:
            continue
        tensions.append(pitch)
    return tensions


def inspect_chord(chord: Chord, scale: tuple[ScaleNote, ...] | list[ScaleNote]) -> ChordInspection:
    parent = [note.pitch for note in scale]
    chord_tones = tuple(dict.fromkeys(chord.seventh))
    return ChordInspection(
        chord_tones=chord_tones,
        scale_tones=tuple(p for p in dict.fromkeys(parent) if p not in chord_tones),
        tension_notes=tuple(tension_notes(chord, parent)),
    )


def chord_tone_degree(pitch: int, chord: Chord) -> str:
    """Label of *pitch* relative to the chord root and quality."""
    if pitch == chord.triad[0]:
        return "R"
    if pitch == chord.triad[1]:
        return "b3" if chord.quality in ("min", "dim") else "3"
    if pitch == chord.triad[2]:
        return {"dim": "b5", "aug": "#5"}.get(chord.quality, "5")
    if chord.seventh_quality is not None:
        return _SEVENTH_TONE_LABEL[chord.seventh_quality]
    return INTERVAL_LABELS[interval(chord.root, pitch)]


def anchor_contexts(
    note: FretPosition,
    chords: Iterable[Chord],
    fretboard: FretboardMap,
) -> list[AnchorContext]:
    """
    Every diatonic chord that contains *note*, as a fingered arpeggio fragment
    inside a five-fret box starting two frets below the note.

    Contexts with fewer than two chord tones in the box are skipped; the rest
    are ordered by note count, richest first.
    """
    base_fret = max(0, note.fret - 2)
    max_fret = base_fret + 4

    contexts: list[AnchorContext] = []
    for chord in chords:
        chord_tones = set(chord.seventh)
        if note.pitch not in chord_tones:
            continue

        in_box = [p for p in fretboard.with_pitches(chord_tones) if base_fret <= p.fret <= max_fret]
        if len(in_box) < 2:
            continue

        arpeggio = tuple(
            ArpeggioNote(
                position=p,
                finger=str(p.fret - base_fret + 1),
                degree=chord_tone_degree(p.pitch, chord),
            )
            for p in in_box
        )
        contexts.append(
            AnchorContext(
                description=f"{note.name} as part of {chord.name} ({chord.degree})",
                chord_degree=chord.degree,
                arpeggio_notes=arpeggio,
            )
        )

    contexts.sort(key=lambda context: len(context.arpeggio_notes), reverse=True)
    return contexts
