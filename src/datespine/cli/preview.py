"""
datespine preview - Show the rows a run would write.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from datespine.core.api import preview as preview_calendar
from datespine.exceptions import DatespineError

app = typer.Typer(name="preview", help="Preview calendar rows without writing", invoke_without_command=True)

console = Console()


@app.callback()
def preview(
    ctx: typer.Context,
    env: str | None = typer.Option(None, help="Environment (dev, staging, prod)"),
    project_dir: Path = typer.Option(Path.cwd(), "--project-dir", "-d", help="Project directory"),
    limit: int = typer.Option(10, "--limit", "-n", min=1, help="Rows to show from each end"),
) -> None:
    """
    Read the upstream watermark and print the first and last calendar rows.
    """
    if ctx.invoked_subcommand is None:
        try:
            build = preview_calendar(project_dir, env=env)
        except DatespineError as e:
            typer.echo(f"Error: {e.message}", err=True)
            raise typer.Exit(1) from e

        watermark = build.watermark.isoformat() if build.watermark else "none (upstream empty)"
        console.print(f"[bold]Watermark:[/bold] {watermark}")
        console.print(f"[bold]Rows:[/bold] {len(build.rows)}")
        if build.truncated:
            console.print("[yellow]row_count ends before the watermark; the calendar is truncated[/yellow]")
        if not build.rows:
            console.print("[dim]No rows would be written[/dim]")
            return

        rows = build.rows
        shown = rows if len(rows) <= 2 * limit else rows[:limit] + rows[-limit:]
        columns = list(shown[0].to_dict().keys())

        table = Table(show_header=True)
        for column in columns:
            table.add_column(column, style="cyan" if column == "date_key" else None)
        for i, row in enumerate(shown):
            if len(shown) < len(rows) and i == limit:
                table.add_row(*["..." for _ in columns])
            values = row.to_dict()
            table.add_row(*[_display(values[c]) for c in columns])
        console.print(table)


def _display(value) -> str:
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)
