"""
Main CLI entry point.
"""

import typer

from datespine import __version__
from datespine.cli import check, config, preview, run

app = typer.Typer(
    name="datespine",
    help="Build the dim_date calendar up to the latest upstream quote date",
    add_completion=False,
)

app.add_typer(run.app, name="run")
app.add_typer(preview.app, name="preview")
app.add_typer(check.app, name="check")
app.add_typer(config.app, name="config")


def _print_version(value: bool):
    if value:
        typer.echo(f"datespine version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def entrypoint(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Show version and exit.",
    ),
):
    """
    Build the dim_date calendar up to the latest upstream quote date.

    Typical use: 'datespine run -d <project>' after the silver layer refreshes.
    """
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def main():
    app()


if __name__ == "__main__":
    main()
