"""
datespine config - Show the resolved calendar settings.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from datespine.core.api import load_project
from datespine.exceptions import DatespineError

app = typer.Typer(name="config", help="Show resolved calendar configuration", invoke_without_command=True)

console = Console()


@app.callback()
def config(
    ctx: typer.Context,
    env: str | None = typer.Option(None, help="Environment to resolve"),
    project_dir: Path = typer.Option(Path.cwd(), "--project-dir", "-d", help="Project directory"),
) -> None:
    """
    Validate config.yaml (and the env overlay) and print the calendar settings.
    """
    if ctx.invoked_subcommand is None:
        try:
            cfg, settings = load_project(project_dir, env)
        except DatespineError as e:
            typer.echo(f"Error: {e.message}", err=True)
            raise typer.Exit(1) from e

        console.print(f"\n[bold blue]{cfg.get('name', project_dir.name)}[/bold blue] [dim]({cfg.env})[/dim]\n")

        table = Table(title="Calendar settings", show_header=True)
        table.add_column("Setting", style="cyan")
        table.add_column("Value")
        for key, value in settings.to_dict().items():
            table.add_row(key, "-" if value is None else str(value))
        console.print(table)

        if cfg.connections:
            conn_table = Table(title="Connections", show_header=True)
            conn_table.add_column("Name", style="cyan")
            conn_table.add_column("Type", style="green")
            conn_table.add_column("Access", style="dim")
            for name, conn_config in cfg.connections.items():
                conn_table.add_row(name, str(conn_config.get("type", "unknown")), conn_config.get("access", "readwrite"))
            console.print(conn_table)
