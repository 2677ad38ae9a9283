"""Human-readable status lines and the progress spinner."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from firebase_cli.output.formatter import console


def log_bullet(message: str) -> None:
    console.print(f"[bold cyan]i[/]  {message}")


def log_success(message: str) -> None:
    console.print(f"[bold green]✔[/]  {message}")


def log_warning(message: str) -> None:
    console.print(f"[bold yellow]⚠[/]  {message}")


@contextmanager
def progress(message: str) -> Iterator[None]:
    """Show a spinner while the block runs.

    The line is marked failed before any exception leaves the block.
    """
    try:
        with console.status(message):
            yield
    except BaseException:
        console.print(f"[bold red]✖[/] {message}")
        raise
    console.print(f"[bold green]✔[/] {message}")
