"""TabFormatter: lays an ordered path out as a seven-row tablature grid."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from fretlab.config import NOTES_PER_BAR, NUM_STRINGS
from fretlab.hand_path import PathNode, ShiftType

logger = logging.getLogger(__name__)

FILLER = "-"
BAR_LINE = "|"


@dataclass(frozen=True)
class TabColumn:
    """
    One time step: a cell per string, index 0 = high E.

    Melodic columns hold a fret label on exactly one string and ``"-"``
    elsewhere; bar columns hold ``"|"`` on every string.
    """

    cells: tuple[str, ...]

    @property
    def is_bar(self) -> bool:
        return all(cell == BAR_LINE for cell in self.cells)

    @property
    def width(self) -> int:
        return max(len(cell) for cell in self.cells)


@dataclass(frozen=True)
class TabGrid:
    columns: tuple[TabColumn, ...]

    def __len__(self) -> int:
        return len(self.columns)

    def row(self, string: int) -> list[str]:
        return [column.cells[string] for column in self.columns]


def _fret_label(node: PathNode, previous: PathNode | None) -> str:
    slid = (
        node.shift_type == ShiftType.SLIDE.value
        and previous is not None
        and previous.string == node.string
    )
    return f"/{node.fret}" if slid else str(node.fret)


def format_path_as_tab(path: Sequence[PathNode]) -> TabGrid:
    """
    One column per path node, with a bar column after every eighth note
    (never after the final note).
    """
    playable: list[PathNode] = []
    for node in path:
        if not 0 <= node.string < NUM_STRINGS:
            logger.warning("Skipping note with invalid string index %d", node.string)
            continue
        playable.append(node)

    columns: list[TabColumn] = []
    previous: PathNode | None = None
    for count, node in enumerate(playable, start=1):
        cells = [FILLER] * NUM_STRINGS
        cells[node.string] = _fret_label(node, previous)
        columns.append(TabColumn(cells=tuple(cells)))
        previous = node

        if count % NOTES_PER_BAR == 0 and count < len(playable):
            columns.append(TabColumn(cells=(BAR_LINE,) * NUM_STRINGS))

    return TabGrid(columns=tuple(columns))
