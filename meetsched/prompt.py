"""Ask the user to pick one of several labels in the terminal."""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol, Sequence

from rich.console import Console
from rich.prompt import IntPrompt
from rich.table import Table

log = logging.getLogger(__name__)


class ChoicePrompt(Protocol):
    """Presents labels and resolves once, with the picked index or None."""

    async def present_choices(self, labels: Sequence[str]) -> int | None:
        ...


class ConsoleChoicePrompt:
    """Numbered-list prompt on a rich console.

    Entering 0, or hitting EOF / Ctrl-C, cancels the choice.
    """

    def __init__(self, console: Console | None = None, title: str = "Choose an account") -> None:
        self.console = console or Console()
        self.title = title

    async def present_choices(self, labels: Sequence[str]) -> int | None:
        return await asyncio.to_thread(self._ask, list(labels))

    def _ask(self, labels: list[str]) -> int | None:
        table = Table(title=self.title, show_header=False)
        table.add_column(justify="right", style="bold")
        table.add_column()
        for i, label in enumerate(labels, start=1):
            table.add_row(str(i), label)
        self.console.print(table)

        choices = [str(i) for i in range(len(labels) + 1)]
        try:
            answer = IntPrompt.ask(
                "Account number (0 to cancel)",
                console=self.console,
                choices=choices,
                show_choices=False,
            )
        except (EOFError, KeyboardInterrupt):
            log.debug("Choice prompt interrupted")
            return None

        if answer == 0:
            return None
        return answer - 1


def alert_no_accounts(console: Console) -> None:
    """Tell the user that no suitable account was found."""
    console.print("\n[red]No account found.[/red]")
    console.print(
        "A Google account is required to schedule meetings. "
        "Run [bold]python -m meetsched add-account[/bold] to add one."
    )
