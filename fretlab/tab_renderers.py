"""Renderer implementations for tablature output formats."""

from __future__ import annotations

from abc import ABC, abstractmethod

from fretlab.config import NUM_STRINGS, STRING_LABELS
from fretlab.scale_theory import ScaleNote, degree_table_markdown
from fretlab.tab_formatter import FILLER, TabGrid


def tab_lines(grid: TabGrid) -> list[str]:
    """
    Lay a grid out as seven text rows, high E on top.

    Each column is padded with ``"-"`` to its widest cell so multi-digit
    frets and slide marks stay aligned across strings.
    """
    widths = [column.width for column in grid.columns]
    lines = []
    for string in range(NUM_STRINGS):
        cells = [cell.ljust(width, FILLER) for cell, width in zip(grid.row(string), widths)]
        body = FILLER.join(cells)
        lines.append(f"{STRING_LABELS[string]}|{FILLER}{body}{FILLER}|")
    return lines


class TabRenderer(ABC):
    """Abstract tablature renderer."""

    @property
    @abstractmethod
    def default_extension(self) -> str:
        """Default filename extension for this renderer."""

    @abstractmethod
    def render(
        self,
        *,
        title: str,
        grid: TabGrid,
        scale: tuple[ScaleNote, ...] | None = None,
    ) -> str:
        """Render output into a file content string."""


class PlainTextTabRenderer(TabRenderer):
    """Bare ASCII tab, optionally preceded by a title line."""

    @property
    def default_extension(self) -> str:
        return ".txt"

    def render(
        self,
        *,
        title: str,
        grid: TabGrid,
        scale: tuple[ScaleNote, ...] | None = None,
    ) -> str:
        lines = [title, ""] if title else []
        lines.extend(tab_lines(grid))
        return "\n".join(lines) + "\n"


class MarkdownTabRenderer(TabRenderer):
    """Markdown document: heading, optional degree table and a fenced tab block."""

    @property
    def default_extension(self) -> str:
        return ".md"

    def render(
        self,
        *,
        title: str,
        grid: TabGrid,
        scale: tuple[ScaleNote, ...] | None = None,
    ) -> str:
        sections = [f"# {title}" if title else "# Tablature"]
        if scale:
            sections.append(degree_table_markdown(scale))
        sections.append("```text\n" + "\n".join(tab_lines(grid)) + "\n```")
        return "\n\n".join(sections) + "\n"


def get_renderer(output_format: str) -> TabRenderer:
    """
    Raises:
        ValueError: For an unsupported format name.
    """
    normalized = output_format.strip().lower()
    if normalized == "text":
        return PlainTextTabRenderer()
    if normalized == "markdown":
        return MarkdownTabRenderer()
    raise ValueError(f"Unsupported output format '{output_format}'. Use one of: markdown, text.")
