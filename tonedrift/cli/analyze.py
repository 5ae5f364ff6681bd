"""Analyze command for tonedrift CLI.

Builds entries from files and inline text, runs one drift analysis
and renders the report.
"""

import json
import re
from pathlib import Path
from typing import Optional, Sequence

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from tonedrift.models import AnalysisResult, EntryBook, JournalEntry

console = Console()


# Leading ISO date in a file name, e.g. "2024-03-01-morning.md"
FILENAME_DATE = re.compile(r"^(\d{4}-\d{2}-\d{2})")


def _entry_from_item(item, source: Path) -> JournalEntry:
    if isinstance(item, str):
        return JournalEntry(text=item)
    if isinstance(item, dict):
        return JournalEntry(
            date=str(item.get("date") or ""),
            text=str(item.get("text") or ""),
        )
    raise click.BadParameter(f"Unsupported entry in {source}: {item!r}")


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        raise click.BadParameter(f"{path} is not valid UTF-8 text")
    except OSError as e:
        raise click.BadParameter(f"Could not read {path}: {e.strerror or e}")


def load_entry_file(path: Path) -> list[JournalEntry]:
    """Read entries from one file.

    A ``.json`` file holds a list of ``{"date", "text"}`` objects (or plain
    strings), optionally under an ``"entries"`` key. Any other file is a
    single entry whose date is taken from a leading ISO date in its name.

    Raises:
        click.BadParameter: If the file is unreadable or a JSON file has
            the wrong shape.
    """
    if path.suffix.lower() == ".json":
        try:
            data = json.loads(_read_text(path))
        except json.JSONDecodeError as e:
            raise click.BadParameter(f"Invalid JSON in {path}: {e}")

        if isinstance(data, dict):
            data = data.get("entries", [])
        if not isinstance(data, list):
            raise click.BadParameter(f"Expected a list of entries in {path}")
        return [_entry_from_item(item, path) for item in data]

    match = FILENAME_DATE.match(path.stem)
    return [JournalEntry(
        date=match.group(1) if match else "",
        text=_read_text(path),
    )]


def collect_entries(
    files: Sequence[Path],
    texts: Sequence[str] = (),
    dates: Sequence[str] = (),
) -> EntryBook:
    """Build an EntryBook from files followed by inline entries.

    The i-th ``--date`` applies to the i-th ``--entry``.

    Raises:
        click.BadParameter: If there are more dates than inline entries.
    """
    if len(dates) > len(texts):
        raise click.BadParameter(
            f"Got {len(dates)} --date values for {len(texts)} --entry values",
            param_hint="'--date'",
        )

    entries: list[JournalEntry] = []
    for path in files:
        entries.extend(load_entry_file(path))
    for i, text in enumerate(texts):
        entries.append(JournalEntry(text=text, date=dates[i] if i < len(dates) else ""))
    return EntryBook(entries)


def export_svg(result: AnalysisResult, path: Path) -> bool:
    """Write the score chart as SVG.

    Returns:
        False if there are too few scored entries to draw a chart.
    """
    from tonedrift.chart import project, render_svg

    projection = project(result.entries)
    if projection is None:
        return False

    path.write_text(render_svg(projection), encoding="utf-8")
    return True


def show_error(message: str, out: Optional[Console] = None) -> None:
    """Render an analysis error inline."""
    (out or console).print(Panel(
        f"[red]{escape(message)}[/red]",
        title="[bold red]Analysis Failed[/bold red]",
        border_style="red",
    ))


@click.command()
@click.argument(
    "files",
    nargs=-1,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option("-e", "--entry", "texts", multiple=True, help="Inline entry text (repeatable).")
@click.option("-d", "--date", "dates", multiple=True, help="Date for the matching --entry.")
@click.option(
    "--svg",
    "svg_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write the score chart as SVG.",
)
@click.option("--json", "as_json", is_flag=True, help="Print the analysis as JSON.")
@click.option(
    "--strict-json",
    is_flag=True,
    help="Extract the first balanced JSON object instead of first-to-last brace.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file to use.",
)
def analyze(
    files: tuple[Path, ...],
    texts: tuple[str, ...],
    dates: tuple[str, ...],
    svg_path: Optional[Path],
    as_json: bool,
    strict_json: bool,
    config_path: Optional[Path],
) -> None:
    """Analyze journal entries for emotional drift.

    FILES are entry files in chronological order: text or markdown files
    (one entry each, dated by a leading YYYY-MM-DD in the name) or JSON
    lists of {"date", "text"} objects.

    \b
    Examples:
      tonedrift analyze 2024-03-01.md 2024-03-08.md 2024-03-15.md
      tonedrift analyze entries.json --svg drift.svg
      tonedrift analyze -e "Great week" -e "Tired and anxious" -d 2024-03-01 -d 2024-03-08
    """
    from tonedrift.agents.drift import DriftAnalysisAgent
    from tonedrift.config import load_settings
    from tonedrift.render import render_report
    from tonedrift.session import AnalysisSession

    settings = load_settings(config_path)
    book = collect_entries(files, texts, dates)
    strategy = "balanced" if strict_json else settings.extraction

    session = AnalysisSession(DriftAnalysisAgent(settings.client()), book, strategy=strategy)

    with console.status("[dim]Analyzing your emotional journey...[/dim]"):
        result = session.analyze()

    if result is None:
        show_error(session.error or "Analysis failed.")
        raise SystemExit(1)

    if as_json:
        console.print_json(result.model_dump_json())
    else:
        render_report(result, console)

    if svg_path is not None:
        if export_svg(result, svg_path):
            console.print(f"[dim]Chart written to {svg_path}[/dim]")
        else:
            console.print("[yellow]Not enough scored entries to draw a chart.[/yellow]")
