"""Login and logout commands (registered at the top level of the app)."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from firebase_cli.auth.login import login as run_login
from firebase_cli.client.errors import error_handler
from firebase_cli.commands._common import (
    get_store,
    is_non_interactive,
    make_authenticator,
    make_prompter,
)

console = Console()

SESSION_KEYS = ("user", "tokens", "loginScopes", "session")


@error_handler
def login(
    ctx: typer.Context,
    localhost: Annotated[
        bool,
        typer.Option(
            "--localhost/--no-localhost",
            help="Capture the login redirect on localhost; use --no-localhost on "
            "devices without an accessible localhost",
        ),
    ] = True,
    reauth: Annotated[
        bool,
        typer.Option("--reauth", help="Force reauthentication even if already logged in"),
    ] = False,
) -> None:
    """Log the CLI into Firebase."""
    prompter = make_prompter(ctx)
    run_login(
        get_store(),
        make_authenticator(prompter),
        prompter,
        non_interactive=is_non_interactive(ctx),
        localhost=localhost,
        reauth=reauth,
    )


@error_handler
def logout() -> None:
    """Remove the stored session."""
    store = get_store()
    user = store.user
    removed = [key for key in SESSION_KEYS if store.delete(key)]
    if not removed:
        console.print("[yellow]No credentials found.[/]")
        return
    label = f" {user.label}" if user is not None else ""
    console.print(f"[green]Logged out{label}.[/]")
