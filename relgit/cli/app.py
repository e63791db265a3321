from __future__ import annotations

import typer

from relgit import __version__
from relgit.cli.commands.release_cmd import check, release


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


app.command()(release)
app.command()(check)


@app.command("version")
def version() -> None:
    """Show the relgit version."""
    typer.echo(__version__)


def main() -> None:
    app()
