"""PitchSpace: pitch classes (0 = A), note spelling and the pitch at any (string, fret)."""

from __future__ import annotations

import re
from typing import Final

from fretlab.config import NUM_FRETS, SEMITONES, TUNING, TUNING_OCTAVES

# ── Pitch classes (index 0 = A) ──────────────────────────────────────
NOTE_NAMES: Final[tuple[str, ...]] = (
    "A", "A#", "B", "C", "C#", "D", "D#", "E", "F", "F#", "G", "G#",
)

NOTE_MAP: Final[dict[str, int]] = {name: idx for idx, name in enumerate(NOTE_NAMES)}

# Enharmonic spellings outside the canonical sharp set.
_ENHARMONICS: Final[dict[str, str]] = {
    "BB": "A#",
    "DB": "C#",
    "EB": "D#",
    "GB": "F#",
    "AB": "G#",
    "CB": "B",
    "FB": "E",
    "E#": "F",
    "B#": "C",
}

_NOTE_PATTERN = re.compile(r"^([A-G])(##|#|bb|b)?$")

# Interval (semitones above a root) -> degree label.
INTERVAL_LABELS: Final[tuple[str, ...]] = (
    "R", "b2", "2", "b3", "3", "4", "b5", "5", "#5", "6", "b7", "7",
)

OPEN_PITCHES: Final[tuple[int, ...]] = tuple(NOTE_MAP[name] for name in TUNING)
"""Open-string pitch classes, high E first."""


def normalize_note_name(note: str) -> str:
    """
    Return the canonical sharp spelling of *note*.

    Accepts flats, double sharps/flats and any letter case, e.g. ``"bb"``,
    ``"Db"``, ``"E#"``, ``"F##"``. Unrecognised input is returned stripped
    and upper-cased so the caller can decide how to report it.
    """
    if not note:
        return note
    stripped = note.strip()
    if not stripped:
        return stripped

    if stripped.upper() in _ENHARMONICS:
        return _ENHARMONICS[stripped.upper()]

    candidate = stripped[0].upper() + stripped[1:]
    match = _NOTE_PATTERN.match(candidate)
    if not match:
        return stripped.upper()

    letter, accidental = match.group(1), match.group(2) or ""
    offset = {"": 0, "#": 1, "##": 2, "b": -1, "bb": -2}[accidental]
    return NOTE_NAMES[(NOTE_MAP[letter] + offset) % SEMITONES]


def note_index(note: str) -> int:
    """
    Pitch class of a note name.

    Raises:
        ValueError: If *note* is not a recognisable note name.
    """
    normalized = normalize_note_name(note)
    if normalized not in NOTE_MAP:
        raise ValueError(f"Unknown note name '{note}'.")
    return NOTE_MAP[normalized]


def note_name(pitch: int) -> str:
    """Canonical name of a pitch class (wraps modulo 12)."""
    return NOTE_NAMES[pitch % SEMITONES]


def interval(from_pitch: int, to_pitch: int) -> int:
    """Ascending interval in semitones, 0-11."""
    return (to_pitch - from_pitch) % SEMITONES


def pitch_at(string: int, fret: int) -> int:
    """Pitch class sounding at *fret* on *string*."""
    return (OPEN_PITCHES[string] + fret) % SEMITONES


def octave_at(string: int, fret: int) -> int:
    """
    Scientific-pitch octave of the note at (string, fret).

    Octaves roll over at C, so the high E string at fret 8 (C5) is one
    octave above the open string (E4).
    """
    semitones_from_c = (OPEN_PITCHES[string] - NOTE_MAP["C"]) % SEMITONES
    return TUNING_OCTAVES[string] + (semitones_from_c + fret) // SEMITONES


def note_at(string: int, fret: int) -> tuple[str, int]:
    """Note name and octave at (string, fret)."""
    return note_name(pitch_at(string, fret)), octave_at(string, fret)


def find_pitch(note: str, octave: int) -> list[tuple[int, int]]:
    """
    Every (string, fret) coordinate that sounds exactly *note* in *octave*.

    Args:
        note:   Any spelling accepted by :func:`normalize_note_name`.
        octave: Scientific-pitch octave number.

    Returns:
        Coordinates ordered by string (high to low) then fret.
    """
    target = note_index(note)
    return [
        (string, fret)
        for string in range(len(OPEN_PITCHES))
        for fret in range(NUM_FRETS + 1)
        if pitch_at(string, fret) == target and octave_at(string, fret) == octave
    ]
