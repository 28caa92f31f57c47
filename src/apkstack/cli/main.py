"""Root CLI application for apkstack."""

import typer

from apkstack import __version__
from apkstack.cli import analyze
from apkstack.utils.output import setup_logging

app = typer.Typer(
    name="apkstack",
    help="Detect the framework and libraries of decompiled Android apps.",
    no_args_is_help=True,
)

# Register subcommands
app.add_typer(analyze.app, name="analyze", help="Static analysis of decompiled APKs")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"apkstack {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Show debug logs on stderr.",
    ),
) -> None:
    """apkstack - tech stack detection for decompiled APKs."""
    setup_logging(verbose)


if __name__ == "__main__":
    app()
