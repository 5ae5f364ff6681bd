"""Config command for tonedrift CLI.

Creates the template configuration file.
"""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel

from tonedrift.config import CONFIG_PATH, create_template_config

console = Console()


@click.command()
@click.option(
    "--path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Where to write the config file.",
)
@click.option("--force", is_flag=True, help="Overwrite an existing config file.")
def init(path: Optional[Path], force: bool) -> None:
    """Create a template configuration file.

    \b
    Examples:
      tonedrift init
      tonedrift init --path ./tonedrift.toml
    """
    config_path = path or CONFIG_PATH

    if config_path.exists() and not force:
        console.print(Panel(
            f"[yellow]Config already exists:[/yellow] [cyan]{config_path}[/cyan]\n\n"
            "Use [cyan]--force[/cyan] to overwrite it.",
            title="[bold yellow]Config Exists[/bold yellow]",
            border_style="yellow",
        ))
        return

    written = create_template_config(config_path)
    console.print(Panel(
        f"[green]Config written to[/green] [cyan]{written}[/cyan]\n\n"
        "Add your API key under [cyan]\\[llm][/cyan], or set [cyan]XAI_API_KEY[/cyan].",
        title="[bold green]Config Created[/bold green]",
        border_style="green",
    ))
