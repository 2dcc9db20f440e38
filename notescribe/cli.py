"""Command-line interface for notescribe.

Provides commands for:
- analyze: Notes, tempo, key and time signature of an audio file
- info: Show audio file information
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .core import AnalysisConfig, AnalysisResult, AudioDecodeError
from .core.constants import MAX_DURATION

app = typer.Typer(
    name="notescribe",
    help="Derive notes, tempo, key and meter from recorded audio",
    rich_markup_mode="markdown",
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load(input_file: Path):
    from .input import AudioLoader

    if not input_file.exists():
        console.print(f"[red]Error: File not found: {input_file}[/red]")
        raise typer.Exit(1)

    try:
        return AudioLoader().load(str(input_file))
    except (ValueError, AudioDecodeError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def analyze(
    input_file: Path = typer.Argument(..., help="Input audio file (WAV, MP3, FLAC, ...)"),
    detector: str = typer.Option(
        "mpm", "-d", "--detector", help="Pitch detector: mpm or pyin"
    ),
    max_duration: float = typer.Option(
        MAX_DURATION, "--max-duration", help="Analyze at most this many seconds"
    ),
    show_notes: int = typer.Option(
        20, "-n", "--notes", help="Number of notes to list (0 = none)"
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Output results as JSON (for scripting)"
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Verbose output"
    ),
):
    """Analyze an audio file into notes, tempo, key and time signature.

    **Examples:**

        notescribe analyze melody.wav

        notescribe analyze song.mp3 --json
    """
    from .analysis import get_pitch_detector
    from .pipeline import AnalysisPipeline

    _setup_logging(verbose)

    try:
        pitch_detector = get_pitch_detector(detector)
        config = AnalysisConfig(max_duration=max_duration)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    buffer = _load(input_file)
    if not json_output:
        console.print(f"[blue]Analyzing:[/blue] {input_file}")
        console.print(
            f"  Duration: {buffer.duration:.2f}s, Sample rate: {buffer.sample_rate}Hz"
        )

    result = AnalysisPipeline(config, pitch_detector).analyze(buffer)

    if json_output:
        console.print_json(data=result.to_dict())
        return

    if result.truncated:
        console.print(f"  [yellow]Only the first {max_duration:.0f}s were analyzed[/yellow]")
    console.print(f"  Tempo: {result.tempo} BPM")
    console.print(f"  Key: {result.key}")
    console.print(f"  Time signature: {result.time_signature}")
    console.print(f"  Notes: {len(result.notes)}")

    if show_notes > 0:
        _show_notes_table(result, show_notes)

    console.print("[green]Analysis complete![/green]")


@app.command()
def info(
    input_file: Path = typer.Argument(..., help="Input audio file"),
):
    """Show audio file information."""
    buffer = _load(input_file)

    table = Table(title=f"Audio Info: {input_file.name}")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Duration", f"{buffer.duration:.2f}s")
    table.add_row("Sample Rate", f"{buffer.sample_rate} Hz")
    table.add_row("Channels", str(buffer.num_channels))
    table.add_row("Samples", str(buffer.num_samples))

    console.print(table)


def _show_notes_table(result: AnalysisResult, limit: int) -> None:
    """Display detected notes in a table."""
    table = Table(title="Detected Notes")
    table.add_column("Pitch", style="cyan")
    table.add_column("Start", style="green")
    table.add_column("Duration", style="yellow")
    table.add_column("Velocity", style="magenta")

    for note in result.notes[:limit]:
        table.add_row(
            note.pitch,
            f"{note.start_time:.3f}s",
            f"{note.duration:.3f}s",
            str(note.velocity),
        )

    console.print(table)
    if len(result.notes) > limit:
        console.print(f"[dim]... and {len(result.notes) - limit} more notes[/dim]")


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
