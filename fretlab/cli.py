"""fretlab CLI entry point."""

import json
import sys
from dataclasses import asdict
from pathlib import Path

import click

from fretlab import __version__
from fretlab.config import MAX_POSITIONS, NUM_FRETS, NUM_STRINGS, STRING_LABELS, EngineConfig
from fretlab.harmony import Voicing
from fretlab.logger_config import configure_logging
from fretlab.pipeline import ScaleData, generate_scale_data
from fretlab.pitch_space import find_pitch, normalize_note_name, note_at, note_index, note_name
from fretlab.result import Failure
from fretlab.scale_theory import SCALE_NAMES
from fretlab.tab_formatter import format_path_as_tab
from fretlab.tab_renderers import get_renderer


def _validate_note(ctx: click.Context, param: click.Parameter, value: str) -> str:
    """Click callback: canonical spelling of a note argument."""
    try:
        note_index(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc
    return normalize_note_name(value)


def _load(config: EngineConfig, root: str, scale: str) -> ScaleData:
    """Run the engine or exit with status 1 on an unknown scale."""
    result = generate_scale_data(root, scale, config)
    if isinstance(result, Failure):
        click.echo(f"  ERROR: {result.error}", err=True)
        sys.exit(1)
    return result.value


def _voicing_frets(voicing: Voicing) -> str:
    """Compact fret string, low B first: ``x-x-3-2-0-1-0``."""
    by_string = {note.string: str(note.fret) for note in voicing.notes}
    cells = []
    for string in reversed(range(NUM_STRINGS)):
        if string in by_string:
            cells.append(by_string[string])
        elif string in voicing.open_strings:
            cells.append("0")
        else:
            cells.append("x")
    return "-".join(cells)


def _bundle_to_dict(data: ScaleData) -> dict:
    return {
        "root_note": data.root_note,
        "scale_name": data.scale_name,
        "scale_notes": [{**asdict(note), "name": note.name} for note in data.scale_notes],
        "characteristic_degrees": list(data.characteristic_degrees),
        "fretboard": [asdict(position) for position in data.fretboard],
        "positions": [asdict(window) for window in data.positions],
        "diagonal_run": [asdict(node) for node in data.diagonal_run],
        "chords": [asdict(chord) for chord in data.chords],
        "progressions": [asdict(progression) for progression in data.progressions],
        "degree_table": data.degree_table,
    }


root_argument = click.argument("root", callback=_validate_note)
scale_argument = click.argument("scale")


# ── CLI group ──────────────────────────────────────────────────────────────────

@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="fretlab")
@click.option("--verbose", "-v", is_flag=True, help="Log engine decisions to stderr.")
@click.option(
    "--no-shell-voicings",
    is_flag=True,
    help="Leave R-3-7 shell shapes out of chord voicings.",
)
@click.option(
    "--max-positions",
    type=click.IntRange(min=1),
    default=MAX_POSITIONS,
    show_default=True,
    help="Maximum number of fingering positions to compute.",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, no_shell_voicings: bool, max_positions: int) -> None:
    """fretlab - seven-string scale, fingering and harmony explorer."""
    configure_logging(verbose)
    ctx.obj = EngineConfig(
        enable_shell_voicings=not no_shell_voicings,
        max_positions=max_positions,
    )


# ── scales subcommand ──────────────────────────────────────────────────────────

@main.command()
def scales() -> None:
    """List every scale in the catalog."""
    for name in SCALE_NAMES:
        click.echo(name)


# ── show subcommand ────────────────────────────────────────────────────────────

@main.command()
@root_argument
@scale_argument
@click.option("--json", "as_json", is_flag=True, help="Dump the full scale bundle as JSON.")
@click.pass_obj
def show(config: EngineConfig, root: str, scale: str, as_json: bool) -> None:
    """
    Summarise a scale on the seven-string neck.

    \b
    Examples:
      fretlab show E "Natural Minor"
      fretlab show Bb Dorian --json
    """
    data = _load(config, root, scale)
    if as_json:
        click.echo(json.dumps(_bundle_to_dict(data), indent=2))
        return

    click.echo(f"fretlab v{__version__}")
    click.echo(f"  Scale     : {data.root_note} {data.scale_name}")
    click.echo(f"  Notes     : {'  '.join(f'{n.name}({n.degree})' for n in data.scale_notes)}")
    colour = ", ".join(data.characteristic_degrees) or "-"
    click.echo(f"  Colour    : {colour}")
    click.echo(f"  Fretboard : {len(data.fretboard)} notes")
    click.echo(f"  Positions : {len(data.positions)}")
    click.echo(f"  Run       : {len(data.diagonal_run)} notes")
    click.echo(f"  Chords    : {'  '.join(chord.name for chord in data.chords)}")
    click.echo()
    click.echo(data.degree_table)


# ── positions subcommand ───────────────────────────────────────────────────────

@main.command()
@root_argument
@scale_argument
@click.pass_obj
def positions(config: EngineConfig, root: str, scale: str) -> None:
    """Print each five-fret fingering position as fret(finger) per string."""
    data = _load(config, root, scale)
    if not data.positions:
        click.echo("No playable positions for this scale.")
        return

    for number, window in enumerate(data.positions, start=1):
        click.echo(f"Position {number}: frets {window.base_fret}-{window.max_fret} ({len(window)} notes)")
        for string in range(NUM_STRINGS):
            cells = [
                f"{note.position.fret}({note.finger})"
                for note in window.notes
                if note.position.string == string
            ]
            click.echo(f"  {STRING_LABELS[string]} | {' '.join(cells)}")
        click.echo()


# ── tab subcommand ─────────────────────────────────────────────────────────────

@main.command()
@root_argument
@scale_argument
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "markdown"], case_sensitive=False),
    default="text",
    show_default=True,
    help="Tablature output format.",
)
@click.option(
    "--output",
    "-o",
    default=None,
    metavar="PATH",
    help="Write the tablature to PATH instead of stdout.",
)
@click.option("--title", default=None, metavar="TEXT", help="Heading. Defaults to '<root> <scale> run'.")
@click.pass_obj
def tab(
    config: EngineConfig,
    root: str,
    scale: str,
    output_format: str,
    output: str | None,
    title: str | None,
) -> None:
    """
    Render the diagonal run as tablature.

    \b
    Examples:
      fretlab tab E "Natural Minor"
      fretlab tab A Dorian --format markdown -o a_dorian.md
    """
    data = _load(config, root, scale)
    renderer = get_renderer(output_format)
    resolved_title = title if title is not None else f"{data.root_note} {data.scale_name} run"
    content = renderer.render(
        title=resolved_title,
        grid=format_path_as_tab(data.diagonal_run),
        scale=data.scale_notes,
    )

    if output is None:
        click.echo(content, nl=False)
        return

    try:
        Path(output).write_text(content, encoding="utf-8")
    except OSError as exc:
        click.echo(f"  ERROR: Could not write tab file - {exc}", err=True)
        sys.exit(1)
    click.echo(f"Done!  Wrote {len(data.diagonal_run)} notes to '{output}'.")


# ── chords subcommand ──────────────────────────────────────────────────────────

@main.command()
@root_argument
@scale_argument
@click.option("--voicings", is_flag=True, help="List every playable voicing under each chord.")
@click.pass_obj
def chords(config: EngineConfig, root: str, scale: str, voicings: bool) -> None:
    """Print the diatonic chords of a scale."""
    data = _load(config, root, scale)
    for chord in data.chords:
        click.echo(
            f"{chord.degree:<6} {chord.name:<7} {chord.seventh_name:<8} "
            f"{' '.join(chord.seventh_notes)}"
        )
        if voicings:
            for voicing in chord.voicings:
                click.echo(f"         {_voicing_frets(voicing):<20} {voicing.name}")


# ── progressions subcommand ────────────────────────────────────────────────────

@main.command()
@root_argument
@scale_argument
@click.pass_obj
def progressions(config: EngineConfig, root: str, scale: str) -> None:
    """Print the common progressions of a scale, resolved to chord names."""
    data = _load(config, root, scale)
    for progression in data.progressions:
        names = " - ".join(chord.name for chord in progression.chords)
        click.echo(f"{progression.name:<24} {progression.analysis:<20} {names}")


# ── tensions subcommand ────────────────────────────────────────────────────────

@main.command()
@root_argument
@scale_argument
@click.argument("degree")
@click.pass_obj
def tensions(config: EngineConfig, root: str, scale: str, degree: str) -> None:
    """
    Show chord tones, other scale tones and usable tensions of one chord.

    DEGREE is the roman-numeral label printed by `fretlab chords`.
    """
    data = _load(config, root, scale)
    inspection = data.inspect(degree)
    if inspection is None:
        available = ", ".join(data.chord_map)
        click.echo(f"  ERROR: No chord on degree '{degree}'. Available: {available}", err=True)
        sys.exit(1)

    chord = data.chord_map[degree]
    click.echo(f"{chord.seventh_name} ({chord.seventh_degree})")
    click.echo(f"  Chord tones : {' '.join(note_name(p) for p in inspection.chord_tones)}")
    click.echo(f"  Scale tones : {' '.join(note_name(p) for p in inspection.scale_tones) or '-'}")
    click.echo(f"  Tensions    : {' '.join(note_name(p) for p in inspection.tension_notes) or '-'}")


# ── anchor subcommand ──────────────────────────────────────────────────────────

@main.command()
@root_argument
@scale_argument
@click.argument("string", type=click.IntRange(0, NUM_STRINGS - 1))
@click.argument("fret", type=click.IntRange(0, NUM_FRETS))
@click.pass_obj
def anchor(config: EngineConfig, root: str, scale: str, string: int, fret: int) -> None:
    """
    List the diatonic chords a fretted note belongs to, as arpeggio boxes.

    STRING counts from 0 (high E) to 6 (low B).
    """
    data = _load(config, root, scale)
    name, octave = note_at(string, fret)
    click.echo(f"Anchor: {name}{octave} ({STRING_LABELS[string]} string, fret {fret})")
    contexts = data.anchor_contexts(string, fret)
    if not contexts:
        click.echo(f"No chord contexts for string {string} fret {fret}.")
        return

    for context in contexts:
        click.echo(context.description)
        for note in context.arpeggio_notes:
            click.echo(
                f"  {STRING_LABELS[note.position.string]} fret {note.position.fret:<2}"
                f"  finger {note.finger}  {note.degree}"
            )


# ── find subcommand ────────────────────────────────────────────────────────────

@main.command()
@click.argument("note", callback=_validate_note)
@click.argument("octave", type=int)
def find(note: str, octave: int) -> None:
    """Every (string, fret) that sounds NOTE in OCTAVE, e.g. `fretlab find E 4`."""
    coordinates = find_pitch(note, octave)
    if not coordinates:
        click.echo(f"{note}{octave} is not on the neck.")
        return
    for string, fret in coordinates:
        click.echo(f"{STRING_LABELS[string]} (string {string}) fret {fret}")
