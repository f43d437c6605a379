"""Command-line tests driven through click's CliRunner."""

import json
import logging

from click.testing import CliRunner

from fretlab import __version__
from fretlab.cli import main
from fretlab.logger_config import LOGGER_NAME, configure_logging


def _run(*args: str):
    return CliRunner().invoke(main, list(args))


def test_version() -> None:
    result = _run("--version")
    assert result.exit_code == 0
    assert __version__ in result.output


def test_scales_lists_catalog() -> None:
    result = _run("scales")
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0] == "Major"
    assert "Hungarian Minor" in lines


def test_show_summary() -> None:
    result = _run("show", "E", "Natural Minor")
    assert result.exit_code == 0
    assert "E Natural Minor" in result.output
    assert "E(R)  F#(2)  G(b3)" in result.output
    assert "| Degree | Note |" in result.output


def test_show_json() -> None:
    result = _run("show", "e", "Natural Minor", "--json")
    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["root_note"] == "E"
    assert payload["chords"][0]["name"] == "Em"
    assert payload["scale_notes"][1] == {"pitch": 9, "degree": "2", "name": "F#"}
    assert len(payload["fretboard"]) == 105


def test_unknown_scale_exits_with_error() -> None:
    result = _run("show", "E", "Bogus")
    assert result.exit_code == 1
    assert 'ERROR: Scale formula for "Bogus" not found.' in result.output


def test_bad_root_is_a_usage_error() -> None:
    result = _run("show", "H", "Major")
    assert result.exit_code == 2
    assert "Unknown note name 'H'" in result.output


def test_positions() -> None:
    result = _run("positions", "E", "Natural Minor")
    assert result.exit_code == 0
    assert "Position 1: frets 0-4 (21 notes)" in result.output


def test_max_positions_option() -> None:
    result = _run("--max-positions", "1", "positions", "E", "Natural Minor")
    assert result.exit_code == 0
    assert "Position 1:" in result.output
    assert "Position 2:" not in result.output


def test_tab_to_stdout() -> None:
    result = _run("tab", "E", "Natural Minor")
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0] == "E Natural Minor run"
    assert lines[2].startswith("e|")
    assert lines[8].startswith("B|")


def test_tab_markdown_file(tmp_path) -> None:
    output = tmp_path / "run.md"
    result = _run("tab", "A", "Dorian", "--format", "markdown", "-o", str(output))
    assert result.exit_code == 0
    assert "Done!" in result.output
    content = output.read_text(encoding="utf-8")
    assert content.startswith("# A Dorian run")
    assert "```text" in content


def test_chords_with_voicings() -> None:
    result = _run("chords", "C", "Major", "--voicings")
    assert result.exit_code == 0
    assert "Cmaj7" in result.output
    assert "Bm7b5" in result.output
    assert "Open C Major" in result.output
    assert "x-x-3-2-0-1-0" in result.output
    assert "Shell" in result.output


def test_no_shell_voicings_flag() -> None:
    result = _run("--no-shell-voicings", "chords", "C", "Major", "--voicings")
    assert result.exit_code == 0
    assert "Shell" not in result.output


def test_progressions() -> None:
    result = _run("progressions", "C", "Major")
    assert result.exit_code == 0
    assert "C - G - Am - F" in result.output


def test_tensions() -> None:
    result = _run("tensions", "C", "Major", "I")
    assert result.exit_code == 0
    assert "Cmaj7 (Imaj7)" in result.output
    assert "Tensions    : D A" in result.output


def test_tensions_unknown_degree() -> None:
    result = _run("tensions", "C", "Major", "IX")
    assert result.exit_code == 1
    assert "No chord on degree 'IX'" in result.output


def test_anchor() -> None:
    result = _run("anchor", "E", "Natural Minor", "5", "0")
    assert result.exit_code == 0
    assert result.output.splitlines()[0] == "Anchor: E2 (E string, fret 0)"
    assert "E as part of Em (i)" in result.output


def test_anchor_off_scale() -> None:
    result = _run("anchor", "E", "Natural Minor", "0", "1")
    assert result.exit_code == 0
    assert "Anchor: F4 (e string, fret 1)" in result.output
    assert "No chord contexts" in result.output


def test_find() -> None:
    result = _run("find", "E", "4")
    assert result.exit_code == 0
    assert "e (string 0) fret 0" in result.output
    assert "E (string 5) fret 24" in result.output


def test_configure_logging_is_idempotent() -> None:
    logger = configure_logging(verbose=True)
    configure_logging(verbose=False)
    assert logger is logging.getLogger(LOGGER_NAME)
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING
