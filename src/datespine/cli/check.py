"""
datespine check - Re-run the quality checks against the existing calendar table.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from datespine.core.api import check as check_calendar
from datespine.exceptions import DatespineError
from datespine.quality import QualityCheckStatus

app = typer.Typer(name="check", help="Run quality checks against the calendar table", invoke_without_command=True)

console = Console()

_STATUS_STYLE = {
    QualityCheckStatus.PASSED: "green",
    QualityCheckStatus.FAILED: "red",
    QualityCheckStatus.ERROR: "red",
    QualityCheckStatus.SKIPPED: "dim",
}


@app.callback()
def check(
    ctx: typer.Context,
    env: str | None = typer.Option(None, help="Environment (dev, staging, prod)"),
    project_dir: Path = typer.Option(Path.cwd(), "--project-dir", "-d", help="Project directory"),
) -> None:
    """
    Check the destination table for NULL, duplicate and missing dates.

    Exits with status 1 when an error-severity check fails.
    """
    if ctx.invoked_subcommand is not None:
        return
    try:
        summary = check_calendar(project_dir, env=env)
    except DatespineError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(1) from e

    table = Table(title=f"Quality checks: {summary.table_name}", show_header=True)
    table.add_column("Check", style="cyan")
    table.add_column("Status")
    table.add_column("Message")
    for result in summary.results:
        style = _STATUS_STYLE[result.status]
        table.add_row(result.check_name, f"[{style}]{result.status.value}[/{style}]", result.message)
    console.print(table)

    if summary.has_failures:
        raise typer.Exit(1)
