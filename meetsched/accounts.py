"""Account registry: the accounts the scheduler may act as."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path

from . import config
from .database import get_connection
from .models import Account

log = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def register_account(
    email: str,
    *,
    account_type: str | None = None,
    provider: str = "google",
    display_name: str | None = None,
    token_path: str | Path | None = None,
    db_path=None,
) -> str:
    """Register an account or return its existing ID.

    Returns the account_id (UUID).
    """
    account_type = account_type or config.ACCOUNT_TYPE
    now = _now_iso()

    with get_connection(db_path) as conn:
        row = conn.execute(
            "SELECT id FROM provider_accounts WHERE provider = ? AND email_address = ?",
            (provider, email),
        ).fetchone()

        if row:
            log.info("Account already registered: %s (%s)", email, row["id"])
            return row["id"]

        account_id = str(uuid.uuid4())
        conn.execute(
            """INSERT INTO provider_accounts
               (id, provider, account_type, email_address, display_name,
                auth_token_path, created_at, updated_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                account_id, provider, account_type, email, display_name,
                str(token_path) if token_path else None, now, now,
            ),
        )

    log.info("Registered account %s (%s)", email, account_id)
    return account_id


def list_accounts(account_type: str | None = None, *, db_path=None) -> list[Account]:
    """Return the registered accounts of *account_type*, oldest first.

    An empty list means no account exists to act as.
    """
    account_type = account_type or config.ACCOUNT_TYPE
    with get_connection(db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM provider_accounts WHERE account_type = ? "
            "ORDER BY created_at, rowid",
            (account_type,),
        ).fetchall()
    return [Account.from_row(r) for r in rows]


def get_all_accounts(*, db_path=None) -> list[dict]:
    """Return all registered provider accounts."""
    with get_connection(db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM provider_accounts ORDER BY created_at, rowid"
        ).fetchall()
        return [dict(r) for r in rows]


def get_account_row(email: str, *, db_path=None) -> dict | None:
    """Look up an account by email address."""
    with get_connection(db_path) as conn:
        row = conn.execute(
            "SELECT * FROM provider_accounts WHERE email_address = ?",
            (email,),
        ).fetchone()
    return dict(row) if row else None


def remove_account(email: str, *, db_path=None) -> bool:
    """Remove an account and its token file. Returns True if it existed."""
    row = get_account_row(email, db_path=db_path)
    if not row:
        return False

    with get_connection(db_path) as conn:
        conn.execute("DELETE FROM provider_accounts WHERE id = ?", (row["id"],))

    token_file = row["auth_token_path"]
    if token_file:
        token_path = Path(token_file)
        if token_path.exists():
            token_path.unlink()
            log.info("Deleted token file %s", token_path)

    log.info("Removed account %s", email)
    return True
