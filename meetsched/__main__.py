"""CLI entry point.

Usage:
    python -m meetsched list-accounts                  # list registered accounts
    python -m meetsched add-account                    # add a Google account
    python -m meetsched remove-account EMAIL           # remove an account
    python -m meetsched attendees                      # choose account, list attendees
    python -m meetsched attendees --vcf contacts.vcf   # ... from a vCard file
    python -m meetsched resolve-email --self ME ADDR*  # pick one address for a contact
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from googleapiclient.errors import HttpError
from rich.console import Console
from rich.logging import RichHandler

from . import config
from .accounts import (
    get_account_row,
    get_all_accounts,
    list_accounts,
    register_account,
    remove_account,
)
from .account_selector import AccountSelector
from .attendees import get_possible_attendees
from .database import init_db
from .display import display_accounts, display_attendees
from .email_resolver import resolve_email
from .models import Account, ContactEntry, EmailRecord, SelectionStatus
from .prompt import ConsoleChoicePrompt, alert_no_accounts

console = Console()
log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Account management
# ---------------------------------------------------------------------------

def cmd_list_accounts(args: argparse.Namespace) -> None:
    """List all registered accounts."""
    init_db()
    accounts = get_all_accounts()

    if not accounts:
        console.print("\n[yellow]No accounts registered.[/yellow]")
        console.print("Run [bold]python -m meetsched add-account[/bold] to add one.")
        return

    display_accounts(console, accounts)


def cmd_add_account(args: argparse.Namespace) -> None:
    """Add a new Google account interactively."""
    from .auth import add_account_interactive

    init_db()
    console.print("[bold]Starting OAuth flow for new account...[/bold]")
    try:
        _creds, email, token_path = add_account_interactive()
    except FileNotFoundError as exc:
        console.print(f"\n[red]Error:[/red] {exc}")
        sys.exit(1)
    except Exception as exc:
        console.print(f"\n[red]Authentication failed:[/red] {exc}")
        sys.exit(1)

    register_account(email, account_type=config.ACCOUNT_TYPE, token_path=token_path)
    console.print(f"[green]  Authenticated as {email}.[/green]")


def cmd_remove_account(args: argparse.Namespace) -> None:
    """Remove an account and its token file."""
    init_db()
    if not remove_account(args.email):
        console.print(f"\n[red]Account not found:[/red] {args.email}")
        sys.exit(1)
    console.print(f"\n[bold green]Account {args.email} removed.[/bold green]")


# ---------------------------------------------------------------------------
# Attendees
# ---------------------------------------------------------------------------

def _load_contacts(args: argparse.Namespace, account: Account) -> list[ContactEntry]:
    """Fetch contacts from a vCard path or the account's Google contacts."""
    if args.vcf:
        from .vcard_source import load_contacts

        return load_contacts(args.vcf, recursive=args.recursive)

    from .auth import get_credentials_for_account
    from .contacts_client import fetch_contacts
    from .rate_limiter import RateLimiter

    row = get_account_row(account.name)
    token_path = Path(row["auth_token_path"]) if row and row["auth_token_path"] else (
        config.token_path_for_account(account.name)
    )
    creds = get_credentials_for_account(token_path)
    return fetch_contacts(creds, RateLimiter(rate=config.PEOPLE_RATE_LIMIT))


async def _select_account(selector: AccountSelector, hint: str | None) -> Account | None:
    outcome = await selector.choose_account(list_accounts, config.ACCOUNT_TYPE, hint)
    if outcome.status is SelectionStatus.NONE_FOUND:
        alert_no_accounts(console)
        return None
    if outcome.status is SelectionStatus.DECLINED:
        console.print("\n[yellow]No account selected.[/yellow]")
        return None
    return outcome.account


def cmd_attendees(args: argparse.Namespace) -> None:
    """Choose the active account, then list possible attendees."""
    init_db()
    selector = AccountSelector(ConsoleChoicePrompt(console))
    hint = args.account or config.DEFAULT_ACCOUNT

    account = asyncio.run(_select_account(selector, hint))
    if account is None:
        sys.exit(1)
    console.print(f"\n[bold]Acting as {account.name}[/bold]")

    try:
        contacts = _load_contacts(args, account)
    except (FileNotFoundError, ValueError) as exc:
        console.print(f"\n[red]Error:[/red] {exc}")
        sys.exit(1)
    except HttpError as exc:
        log.warning("Contact fetch failed for %s: %s", account.name, exc)
        console.print(f"\n[red]Contact fetch failed:[/red] {exc}")
        sys.exit(1)

    attendees = get_possible_attendees(contacts, account)
    display_attendees(console, attendees, account_name=account.name)


# ---------------------------------------------------------------------------
# resolve-email
# ---------------------------------------------------------------------------

def parse_record_arg(raw: str) -> EmailRecord:
    """``addr`` is a plain record, ``addr*`` a primary one."""
    if raw.endswith("*"):
        return EmailRecord(address=raw[:-1], is_primary=True)
    return EmailRecord(address=raw)


def cmd_resolve_email(args: argparse.Namespace) -> None:
    """Resolve one contact's email records against the acting account."""
    records = [parse_record_arg(a) for a in args.addresses]
    email = resolve_email(records, args.self_account)
    if email is None:
        console.print("[yellow]No valid email address.[/yellow]")
        sys.exit(1)
    console.print(email)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="meetsched",
        description="Pick the acting account and attendee addresses for meeting scheduling",
    )
    sub = parser.add_subparsers(dest="command")

    # list-accounts
    sub.add_parser("list-accounts", help="List registered accounts")

    # add-account
    sub.add_parser("add-account", help="Add a new Google account")

    # remove-account
    rm = sub.add_parser("remove-account", help="Remove an account")
    rm.add_argument("email", help="Email address of the account to remove")

    # attendees
    at = sub.add_parser("attendees", help="Choose an account and list possible attendees")
    at.add_argument("--account", help="Preferred account when several are registered")
    at.add_argument("--vcf", type=Path, help="Read contacts from a .vcf file or directory")
    at.add_argument("--recursive", action="store_true",
                    help="Search --vcf directory recursively")

    # resolve-email
    re_ = sub.add_parser("resolve-email", help="Pick the best address for one contact")
    re_.add_argument("--self", dest="self_account", required=True,
                     help="Email of the acting account")
    re_.add_argument("addresses", nargs="+",
                     help="Contact addresses; append '*' to mark a primary one")

    return parser


def main(argv: list[str] | None = None) -> None:
    # Set up logging
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
    )

    parser = build_parser()
    args = parser.parse_args(argv)

    commands = {
        "list-accounts": cmd_list_accounts,
        "add-account": cmd_add_account,
        "remove-account": cmd_remove_account,
        "attendees": cmd_attendees,
        "resolve-email": cmd_resolve_email,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        sys.exit(2)
    handler(args)


if __name__ == "__main__":
    main()
