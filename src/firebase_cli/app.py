"""Root Typer app: global options and command registration."""

from __future__ import annotations

from typing import Optional

import typer

from firebase_cli import __version__
from firebase_cli.commands import auth, projects
from firebase_cli.output.logs import configure_logging

app = typer.Typer(
    name="firebase",
    help="Log in to Firebase and manage Firebase projects.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    if value:
        print(f"firebase-cli {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None, "--version", "-V", callback=version_callback, is_eager=True, help="Show version and exit."
    ),
    non_interactive: bool = typer.Option(
        False, "--non-interactive", help="Fail instead of prompting for input."
    ),
    debug: bool = typer.Option(False, "--debug", help="Print debug logging to stderr."),
) -> None:
    """Log in to Firebase and manage your Firebase projects."""
    configure_logging(debug)
    ctx.obj = {"non_interactive": non_interactive, "debug": debug}


app.command("login")(auth.login)
app.command("logout")(auth.logout)
app.add_typer(projects.app, name="projects")


def main() -> None:
    app()
