"""Interactive prompts built on rich.prompt."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from rich.console import Console
from rich.prompt import Confirm, IntPrompt, Prompt

from firebase_cli.client.errors import NonInteractiveError
from firebase_cli.output.formatter import console as default_console

# Returns an error message, or None when the answer is acceptable
Validator = Callable[[str], "str | None"]


@dataclass(frozen=True)
class Choice:
    name: str
    value: str


class Prompter:
    """Synchronous user prompts.

    In non-interactive mode every prompt raises NonInteractiveError with the
    question in the message, so the user knows which flag to pass instead.
    """

    def __init__(self, *, non_interactive: bool = False, console: Console | None = None) -> None:
        self.non_interactive = non_interactive
        self.console = console or default_console

    def _ensure_interactive(self, message: str) -> None:
        if self.non_interactive:
            raise NonInteractiveError(
                f"Cannot prompt in non-interactive mode: {message.strip()}"
            )

    def confirm(self, message: str, *, default: bool = False) -> bool:
        self._ensure_interactive(message)
        return Confirm.ask(message, default=default, console=self.console)

    def text(
        self,
        message: str,
        *,
        default: str | None = None,
        validate: Validator | None = None,
    ) -> str:
        self._ensure_interactive(message)
        kwargs: dict[str, Any] = {"console": self.console}
        if default is not None:
            kwargs["default"] = default
        while True:
            answer = (Prompt.ask(message, **kwargs) or "").strip()
            error = validate(answer) if validate else None
            if error is None:
                return answer
            self.console.print(f"[red]>>[/] {error}")

    def select(self, message: str, choices: Sequence[Choice]) -> str:
        self._ensure_interactive(message)
        if not choices:
            raise ValueError("select() needs at least one choice")
        self.console.print(f"[bold]?[/] {message}")
        for index, choice in enumerate(choices, start=1):
            self.console.print(f"  [cyan]{index:>3}[/]  {choice.name}", highlight=False)
        picked = IntPrompt.ask(
            "Enter a number",
            choices=[str(i) for i in range(1, len(choices) + 1)],
            show_choices=False,
            console=self.console,
        )
        return choices[picked - 1].value
