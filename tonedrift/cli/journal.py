"""Interactive journal editor for tonedrift CLI.

Lets the user add, edit, date and remove entries, then run an analysis
over them without leaving the prompt.
"""

import shlex
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tonedrift.cli.analyze import collect_entries, export_svg, show_error
from tonedrift.session import AnalysisSession

console = Console()


HELP_TEXT = """[bold]Commands[/bold]
  [cyan]list[/cyan]                 Show all entries
  [cyan]add[/cyan] TEXT             Add an entry
  [cyan]edit[/cyan] N TEXT          Replace the text of entry N
  [cyan]date[/cyan] N DATE          Set the date of entry N ("-" clears it)
  [cyan]remove[/cyan] N             Remove entry N (the last entry always stays)
  [cyan]analyze[/cyan]              Analyze emotional drift across entries
  [cyan]svg[/cyan] PATH             Write the last chart as SVG
  [cyan]help[/cyan]                 Show this help
  [cyan]quit[/cyan]                 Leave the journal"""


class JournalShell:
    """Command interpreter over an AnalysisSession."""

    def __init__(self, session: AnalysisSession, out: Optional[Console] = None):
        self.session = session
        self.console = out or console

    def _entry_id(self, number: str) -> Optional[str]:
        """Map a 1-based display number to an entry id."""
        try:
            index = int(number) - 1
        except ValueError:
            index = -1
        if not 0 <= index < len(self.session.book):
            self.console.print(f"[red]No entry {escape(number)}[/red]")
            return None
        return self.session.book[index].id

    def show_entries(self) -> None:
        table = Table(title="Journal Entries", show_header=True, header_style="bold")
        table.add_column("Entry", style="bold", justify="right")
        table.add_column("Date", style="dim")
        table.add_column("Text", max_width=60)

        for i, entry in enumerate(self.session.book, start=1):
            text = escape(entry.text.strip()) or "[dim](empty)[/dim]"
            table.add_row(str(i), entry.date or "-", text)
        self.console.print(table)

    def run_analysis(self) -> None:
        from tonedrift.render import render_report

        with self.console.status("[dim]Analyzing your emotional journey...[/dim]"):
            result = self.session.analyze()

        if result is None:
            if self.session.error:
                show_error(self.session.error, self.console)
            return
        render_report(result, self.console)

    def handle(self, line: str) -> bool:
        """Execute one command line.

        Returns:
            False when the shell should exit.
        """
        try:
            parts = shlex.split(line)
        except ValueError as e:
            self.console.print(f"[red]{escape(str(e))}[/red]")
            return True
        if not parts:
            return True

        command, args = parts[0].lower(), parts[1:]
        book = self.session.book

        if command in ("quit", "exit", "q"):
            return False
        elif command in ("list", "ls"):
            self.show_entries()
        elif command == "add":
            book.add(text=" ".join(args))
            self.console.print(f"[green]Added entry {len(book)}[/green]")
        elif command == "edit" and len(args) >= 2:
            entry_id = self._entry_id(args[0])
            if entry_id:
                book.update(entry_id, "text", " ".join(args[1:]))
        elif command == "date" and len(args) == 2:
            entry_id = self._entry_id(args[0])
            if entry_id:
                book.update(entry_id, "date", "" if args[1] == "-" else args[1])
        elif command == "remove" and len(args) == 1:
            entry_id = self._entry_id(args[0])
            if entry_id and not book.remove(entry_id):
                self.console.print("[yellow]At least one entry must remain.[/yellow]")
        elif command == "analyze":
            self.run_analysis()
        elif command == "svg" and len(args) == 1:
            if self.session.analysis is None:
                self.console.print("[yellow]Run analyze first.[/yellow]")
            elif export_svg(self.session.analysis, Path(args[0])):
                self.console.print(f"[dim]Chart written to {escape(args[0])}[/dim]")
            else:
                self.console.print("[yellow]Not enough scored entries to draw a chart.[/yellow]")
        else:
            self.console.print(HELP_TEXT)
        return True


@click.command()
@click.argument(
    "files",
    nargs=-1,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option("--strict-json", is_flag=True, help="Use balanced JSON extraction.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file to use.",
)
def journal(files: tuple[Path, ...], strict_json: bool, config_path: Optional[Path]) -> None:
    """Write journal entries interactively and analyze them.

    FILES optionally pre-load entries (same formats as analyze).

    \b
    Examples:
      tonedrift journal
      tonedrift journal entries.json
    """
    from tonedrift.agents.drift import DriftAnalysisAgent
    from tonedrift.config import load_settings

    settings = load_settings(config_path)
    book = collect_entries(files)
    strategy = "balanced" if strict_json else settings.extraction
    session = AnalysisSession(DriftAnalysisAgent(settings.client()), book, strategy=strategy)
    shell = JournalShell(session)

    console.print("[bold]📓 Emotional Tone Drift Analyzer[/bold]")
    console.print("[dim]Add 2+ entries in chronological order to detect drift. Type 'help' for commands.[/dim]\n")
    shell.show_entries()

    while True:
        try:
            line = click.prompt("journal", prompt_suffix="> ", default="", show_default=False)
        except (EOFError, click.Abort):
            break
        if not shell.handle(line):
            break
