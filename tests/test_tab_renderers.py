"""Unit tests for the text and Markdown tablature renderers."""

import pytest

from fretlab.fretboard_map import FretPosition
from fretlab.hand_path import PathNode
from fretlab.pitch_space import note_index, pitch_at
from fretlab.scale_theory import generate_scale
from fretlab.tab_formatter import format_path_as_tab
from fretlab.tab_renderers import (
    MarkdownTabRenderer,
    PlainTextTabRenderer,
    get_renderer,
    tab_lines,
)


def _sample_grid():
    nodes = [
        PathNode(
            position=FretPosition(string=s, fret=f, pitch=pitch_at(s, f), degree="R"),
            finger="1",
        )
        for s, f in [(0, 12), (0, 3)]
    ]
    return format_path_as_tab(nodes)


def test_tab_lines_pad_columns_to_widest_cell() -> None:
    lines = tab_lines(_sample_grid())
    assert len(lines) == 7
    assert lines[0] == "e|-12-3-|"
    assert lines[1] == "B|------|"
    assert lines[6].startswith("B|")
    assert len({len(line) for line in lines}) == 1


def test_plain_text_renderer() -> None:
    renderer = PlainTextTabRenderer()
    content = renderer.render(title="E Natural Minor run", grid=_sample_grid())
    assert renderer.default_extension == ".txt"
    assert content.startswith("E Natural Minor run\n\ne|")
    assert content.endswith("|\n")


def test_plain_text_renderer_without_title() -> None:
    content = PlainTextTabRenderer().render(title="", grid=_sample_grid())
    assert content.startswith("e|")


def test_markdown_renderer_has_heading_and_fenced_tab() -> None:
    renderer = MarkdownTabRenderer()
    content = renderer.render(title="My Run", grid=_sample_grid())
    assert renderer.default_extension == ".md"
    assert content.startswith("# My Run")
    assert "```text\ne|-12-3-|" in content
    assert "| Degree | Note |" not in content


def test_markdown_renderer_includes_degree_table() -> None:
    scale = generate_scale(note_index("E"), "Natural Minor").value
    content = MarkdownTabRenderer().render(title="Run", grid=_sample_grid(), scale=scale)
    assert "| Degree | Note |" in content
    assert "| b6 | C |" in content


def test_get_renderer() -> None:
    assert isinstance(get_renderer("text"), PlainTextTabRenderer)
    assert isinstance(get_renderer(" Markdown "), MarkdownTabRenderer)
    with pytest.raises(ValueError):
        get_renderer("pdf")
