"""
datespine run - Build and replace the calendar table.
"""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from datespine.core.api import run as run_calendar
from datespine.exceptions import DatespineError
from datespine.utils.logging import get_logger

logger = get_logger("datespine.cli.run")

app = typer.Typer(name="run", help="Build the calendar and replace the destination table", invoke_without_command=True)

console = Console()


@app.callback()
def run(
    ctx: typer.Context,
    env: str | None = typer.Option(None, help="Environment (dev, staging, prod)"),
    project_dir: Path = typer.Option(Path.cwd(), "--project-dir", "-d", help="Project directory"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Generate rows without writing the table"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    as_json: bool = typer.Option(False, "--json", help="Print the run result as JSON"),
) -> None:
    """
    Build the calendar dimension and fully replace the destination table.

    Exits with status 1 when the run fails; nothing is written in that case.
    """
    if ctx.invoked_subcommand is None:
        try:
            result = run_calendar(project_dir, env=env, dry_run=dry_run, log_level="DEBUG" if verbose else None)
        except DatespineError as e:
            logger.error(f"Run failed: {e.message}")
            typer.echo(f"Error: {e.message}", err=True)
            raise typer.Exit(1) from e

        if as_json:
            typer.echo(json.dumps(result.to_dict(), indent=2))
            return

        summary = Table(title="Calendar run", show_header=False)
        summary.add_column("Field", style="cyan")
        summary.add_column("Value")
        summary.add_row("Table", result.table)
        summary.add_row("Rows", str(result.row_count))
        summary.add_row("Watermark", result.watermark.isoformat() if result.watermark else "-")
        summary.add_row("Range", f"{result.first_date} to {result.last_date}" if result.first_date else "empty")
        summary.add_row("Truncated", "[yellow]yes[/yellow]" if result.truncated else "no")
        summary.add_row("Written", "yes" if result.materialized else "no (dry run)")
        if result.quality is not None:
            summary.add_row("Quality", f"{result.quality.passed}/{result.quality.total_checks} checks passed")
        summary.add_row("Duration", f"{result.duration_seconds:.2f}s")
        console.print(summary)
