"""Rich terminal output for accounts and attendees."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from .models import Attendee


def display_attendees(
    console: Console,
    attendees: list[Attendee],
    *,
    account_name: str = "",
) -> None:
    """Show the attendee list, selected attendees marked."""
    console.print()
    title = "Possible Attendees"
    if account_name:
        title += f" for {account_name}"
    console.rule(f"[bold]{title}[/bold]")
    console.print()

    if not attendees:
        console.print("[yellow]No attendees.[/yellow]")
        return

    table = Table(show_header=True, box=None, padding=(0, 2))
    table.add_column("", justify="center")
    table.add_column("Attendee", style="bold")
    table.add_column("Email")
    table.add_column("Photo", style="dim")

    for attendee in attendees:
        mark = "[green]✓[/green]" if attendee.selected else ""
        table.add_row(mark, attendee.label, attendee.email, attendee.photo_ref or "")

    console.print(table)
    console.print(f"\n[dim]{len(attendees)} attendee(s)[/dim]")


def display_accounts(console: Console, accounts: list[dict]) -> None:
    """Show the registered accounts."""
    table = Table(title="Registered Accounts")
    table.add_column("Email", style="bold")
    table.add_column("Type")
    table.add_column("Provider")
    table.add_column("Added")

    for account in accounts:
        table.add_row(
            account["email_address"],
            account["account_type"],
            account["provider"],
            (account["created_at"] or "")[:10],
        )

    console.print()
    console.print(table)
