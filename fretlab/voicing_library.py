"""VoicingLibrary: declarative chord-shape catalog for the seven-string tuning."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

# Each template lists notes relative to `root`, the string and fret of the
# chord root inside the shape. Strings: 0 = high E ... 5 = E, 6 = low B.


@dataclass(frozen=True)
class ShapeNote:
    """A fretted note inside a template (fret relative to the template's frame)."""

    string: int
    fret: int
    degree: str


@dataclass(frozen=True)
class Barre:
    from_string: int
    to_string: int
    fret: int


@dataclass(frozen=True)
class RootLocation:
    string: int
    fret: int


@dataclass(frozen=True)
class VoicingTemplate:
    """
    A fixed chord shape.

    Attributes:
        name:          Display name, e.g. "E-Shape Barre (7-String)".
        qualities:     Chord qualities the shape spells (triad or seventh).
        root:          Where the chord root sits inside the shape.
        notes:         Fretted notes.
        category:      "open", "barre", "shell", "triad", "power" or "symmetric".
        movable:       False for open shapes tied to ``root_note``.
        root_note:     Fixed root name of a non-movable shape.
        barres:        Barres, in the same fret frame as ``notes``.
        open_strings:  Strings sounded open.
        muted_strings: Strings not played.
    """

    name: str
    qualities: frozenset[str]
    root: RootLocation
    notes: tuple[ShapeNote, ...]
    category: str
    movable: bool = True
    root_note: str | None = None
    barres: tuple[Barre, ...] = ()
    open_strings: tuple[int, ...] = ()
    muted_strings: tuple[int, ...] = ()


def _shape(*notes: tuple[int, int, str]) -> tuple[ShapeNote, ...]:
    return tuple(ShapeNote(string=s, fret=f, degree=d) for s, f, d in notes)


def _q(*qualities: str) -> frozenset[str]:
    return frozenset(qualities)


# Semitones above the chord root for every degree label used by the shapes.
DEGREE_SEMITONES: Final[dict[str, int]] = {
    "R": 0, "b3": 3, "3": 4, "b5": 6, "5": 7, "#5": 8, "bb7": 9, "b7": 10, "7": 11,
}

_FULL_BARRE = (Barre(from_string=0, to_string=6, fret=0),)
_A_BARRE = (Barre(from_string=0, to_string=5, fret=0),)

VOICING_LIBRARY: Final[tuple[VoicingTemplate, ...]] = (
    # ── Open chords ──────────────────────────────────────────────────────────
    VoicingTemplate(
        name="Open E Major", qualities=_q("maj"), root=RootLocation(5, 0), category="open",
        movable=False, root_note="E",
        notes=_shape((4, 2, "5"), (3, 2, "R"), (2, 1, "3")),
        open_strings=(6, 5, 1, 0),
    ),
    VoicingTemplate(
        name="Open E Minor", qualities=_q("min"), root=RootLocation(5, 0), category="open",
        movable=False, root_note="E",
        notes=_shape((4, 2, "5"), (3, 2, "R")),
        open_strings=(6, 5, 2, 1, 0),
    ),
    VoicingTemplate(
        name="Open E7", qualities=_q("dom7"), root=RootLocation(5, 0), category="open",
        movable=False, root_note="E",
        notes=_shape((4, 2, "5"), (2, 1, "3")),
        open_strings=(6, 5, 3, 1, 0),
    ),
    VoicingTemplate(
        name="Open A Major", qualities=_q("maj"), root=RootLocation(4, 0), category="open",
        movable=False, root_note="A",
        notes=_shape((3, 2, "5"), (2, 2, "R"), (1, 2, "3")),
        open_strings=(5, 4, 0), muted_strings=(6,),
    ),
    VoicingTemplate(
        name="Open A Minor", qualities=_q("min"), root=RootLocation(4, 0), category="open",
        movable=False, root_note="A",
        notes=_shape((3, 2, "5"), (2, 2, "R"), (1, 1, "b3")),
        open_strings=(5, 4, 0), muted_strings=(6,),
    ),
    VoicingTemplate(
        name="Open A7", qualities=_q("dom7"), root=RootLocation(4, 0), category="open",
        movable=False, root_note="A",
        notes=_shape((3, 2, "5"), (1, 2, "3")),
        open_strings=(5, 4, 2, 0), muted_strings=(6,),
    ),
    VoicingTemplate(
        name="Open Am7", qualities=_q("min7"), root=RootLocation(4, 0), category="open",
        movable=False, root_note="A",
        notes=_shape((3, 2, "5"), (1, 1, "b3")),
        open_strings=(5, 4, 2, 0), muted_strings=(6,),
    ),
    VoicingTemplate(
        name="Open D Major", qualities=_q("maj"), root=RootLocation(3, 0), category="open",
        movable=False, root_note="D",
        notes=_shape((2, 2, "5"), (1, 3, "R"), (0, 2, "3")),
        open_strings=(3,), muted_strings=(6, 5, 4),
    ),
    VoicingTemplate(
        name="Open D Minor", qualities=_q("min"), root=RootLocation(3, 0), category="open",
        movable=False, root_note="D",
        notes=_shape((2, 2, "5"), (1, 3, "R"), (0, 1, "b3")),
        open_strings=(3,), muted_strings=(6, 5, 4),
    ),
    VoicingTemplate(
        name="Open G Major", qualities=_q("maj"), root=RootLocation(5, 3), category="open",
        movable=False, root_note="G",
        notes=_shape((5, 3, "R"), (4, 2, "3"), (0, 3, "R")),
        open_strings=(3, 2, 1), muted_strings=(6,),
    ),
    VoicingTemplate(
        name="Open C Major", qualities=_q("maj"), root=RootLocation(4, 3), category="open",
        movable=False, root_note="C",
        notes=_shape((4, 3, "R"), (3, 2, "3"), (1, 1, "R")),
        open_strings=(2, 0), muted_strings=(6, 5),
    ),

    # ── 7-string barre chords ────────────────────────────────────────────────
    VoicingTemplate(
        name="E-Shape Barre (7-String)", qualities=_q("maj"), root=RootLocation(5, 0), category="barre",
        notes=_shape((6, 0, "5"), (5, 0, "R"), (4, 2, "5"), (3, 2, "R"), (2, 1, "3"), (1, 0, "5"), (0, 0, "R")),
        barres=_FULL_BARRE,
    ),
    VoicingTemplate(
        name="Em-Shape Barre (7-String)", qualities=_q("min"), root=RootLocation(5, 0), category="barre",
        notes=_shape((6, 0, "5"), (5, 0, "R"), (4, 2, "5"), (3, 2, "R"), (2, 0, "b3"), (1, 0, "5"), (0, 0, "R")),
        barres=_FULL_BARRE,
    ),
    VoicingTemplate(
        name="E7-Shape Barre (7-String)", qualities=_q("dom7"), root=RootLocation(5, 0), category="barre",
        notes=_shape((6, 0, "5"), (5, 0, "R"), (4, 2, "5"), (3, 0, "b7"), (2, 1, "3"), (1, 0, "5"), (0, 0, "R")),
        barres=_FULL_BARRE,
    ),
    VoicingTemplate(
        name="Em7-Shape Barre (7-String)", qualities=_q("min7"), root=RootLocation(5, 0), category="barre",
        notes=_shape((6, 0, "5"), (5, 0, "R"), (4, 2, "5"), (3, 0, "b7"), (2, 0, "b3"), (1, 0, "5"), (0, 0, "R")),
        barres=_FULL_BARRE,
    ),
    VoicingTemplate(
        name="A-Shape Barre (7-String)", qualities=_q("maj"), root=RootLocation(4, 0), category="barre",
        notes=_shape((5, 0, "5"), (4, 0, "R"), (3, 2, "5"), (2, 2, "R"), (1, 2, "3"), (0, 0, "5")),
        barres=_A_BARRE, muted_strings=(6,),
    ),
    VoicingTemplate(
        name="Am-Shape Barre (7-String)", qualities=_q("min"), root=RootLocation(4, 0), category="barre",
        notes=_shape((5, 0, "5"), (4, 0, "R"), (3, 2, "5"), (2, 2, "R"), (1, 1, "b3"), (0, 0, "5")),
        barres=_A_BARRE, muted_strings=(6,),
    ),
    VoicingTemplate(
        name="A7-Shape Barre (7-String)", qualities=_q("dom7"), root=RootLocation(4, 0), category="barre",
        notes=_shape((5, 0, "5"), (4, 0, "R"), (3, 2, "5"), (2, 0, "b7"), (1, 2, "3"), (0, 0, "5")),
        barres=_A_BARRE, muted_strings=(6,),
    ),
    VoicingTemplate(
        name="Am7-Shape Barre (7-String)", qualities=_q("min7"), root=RootLocation(4, 0), category="barre",
        notes=_shape((5, 0, "5"), (4, 0, "R"), (3, 2, "5"), (2, 0, "b7"), (1, 1, "b3"), (0, 0, "5")),
        barres=_A_BARRE, muted_strings=(6,),
    ),
    VoicingTemplate(
        name="Low-B Power Chord", qualities=_q("maj", "min"), root=RootLocation(6, 0), category="power",
        notes=_shape((6, 0, "R"), (5, 2, "5"), (4, 2, "R")),
        muted_strings=(3, 2, 1, 0),
    ),

    # ── Shell voicings (R-3-7, sixth-string and fifth-string roots) ─────────
    VoicingTemplate(
        name="Shell (E-string root)", qualities=_q("maj7"), root=RootLocation(5, 0), category="shell",
        notes=_shape((5, 0, "R"), (3, 1, "7"), (2, 1, "3")),
        muted_strings=(6, 4, 1, 0),
    ),
    VoicingTemplate(
        name="Shell (E-string root)", qualities=_q("dom7"), root=RootLocation(5, 0), category="shell",
        notes=_shape((5, 0, "R"), (3, 0, "b7"), (2, 1, "3")),
        muted_strings=(6, 4, 1, 0),
    ),
    VoicingTemplate(
        name="Shell (E-string root)", qualities=_q("min7"), root=RootLocation(5, 0), category="shell",
        notes=_shape((5, 0, "R"), (3, 0, "b7"), (2, 0, "b3")),
        muted_strings=(6, 4, 1, 0),
    ),
    VoicingTemplate(
        name="Shell (E-string root)", qualities=_q("min7b5"), root=RootLocation(5, 0), category="shell",
        notes=_shape((5, 0, "R"), (4, 1, "b5"), (3, 0, "b7"), (2, 0, "b3")),
        muted_strings=(6, 1, 0),
    ),
    VoicingTemplate(
        name="Shell (A-string root)", qualities=_q("maj7"), root=RootLocation(4, 0), category="shell",
        notes=_shape((4, 0, "R"), (2, 1, "7"), (1, 2, "3")),
        muted_strings=(6, 5, 3, 0),
    ),
    VoicingTemplate(
        name="Shell (A-string root)", qualities=_q("dom7"), root=RootLocation(4, 0), category="shell",
        notes=_shape((4, 0, "R"), (2, 0, "b7"), (1, 2, "3")),
        muted_strings=(6, 5, 3, 0),
    ),
    VoicingTemplate(
        name="Shell (A-string root)", qualities=_q("min7"), root=RootLocation(4, 0), category="shell",
        notes=_shape((4, 0, "R"), (2, 0, "b7"), (1, 1, "b3")),
        muted_strings=(6, 5, 3, 0),
    ),
    VoicingTemplate(
        name="Shell (A-string root)", qualities=_q("min7b5"), root=RootLocation(4, 0), category="shell",
        notes=_shape((4, 0, "R"), (3, 1, "b5"), (2, 0, "b7"), (1, 1, "b3")),
        muted_strings=(6, 5, 0),
    ),

    # ── Top-string triads ───────────────────────────────────────────────────
    VoicingTemplate(
        name="Triad (G-B-E)", qualities=_q("maj"), root=RootLocation(2, 0), category="triad",
        notes=_shape((2, 0, "R"), (1, 0, "3"), (0, -2, "5")),
        muted_strings=(6, 5, 4, 3),
    ),
    VoicingTemplate(
        name="Triad (G-B-E)", qualities=_q("min"), root=RootLocation(2, 0), category="triad",
        notes=_shape((2, 0, "R"), (1, -1, "b3"), (0, -2, "5")),
        muted_strings=(6, 5, 4, 3),
    ),
    VoicingTemplate(
        name="Triad (G-B-E)", qualities=_q("dim"), root=RootLocation(2, 0), category="triad",
        notes=_shape((2, 0, "R"), (1, -1, "b3"), (0, -3, "b5")),
        muted_strings=(6, 5, 4, 3),
    ),
    VoicingTemplate(
        name="Triad (G-B-E)", qualities=_q("aug"), root=RootLocation(2, 0), category="triad",
        notes=_shape((2, 0, "R"), (1, 0, "3"), (0, -1, "#5")),
        muted_strings=(6, 5, 4, 3),
    ),

    # ── Diminished and augmented ────────────────────────────────────────────
    VoicingTemplate(
        name="Movable Diminished", qualities=_q("dim"), root=RootLocation(4, 0), category="symmetric",
        notes=_shape((4, 0, "R"), (3, 1, "b5"), (2, 2, "R"), (1, 1, "b3")),
        muted_strings=(6, 5, 0),
    ),
    VoicingTemplate(
        name="Diminished 7th (E-string root)", qualities=_q("dim7"), root=RootLocation(5, 0),
        category="symmetric",
        notes=_shape((5, 0, "R"), (4, 1, "b5"), (3, -1, "bb7"), (2, 0, "b3")),
        muted_strings=(6, 1, 0),
    ),
    VoicingTemplate(
        name="Diminished 7th (A-string root)", qualities=_q("dim7"), root=RootLocation(4, 0),
        category="symmetric",
        notes=_shape((4, 0, "R"), (3, 1, "b5"), (2, -1, "bb7"), (1, 1, "b3")),
        muted_strings=(6, 5, 0),
    ),
    VoicingTemplate(
        name="Movable Augmented", qualities=_q("aug"), root=RootLocation(3, 0), category="symmetric",
        notes=_shape((3, 0, "R"), (2, -1, "3"), (1, -1, "#5"), (0, -2, "R")),
        muted_strings=(6, 5, 4),
    ),
)
