"""Data models for account selection and attendee resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class Account:
    """A named identity the application can act as."""

    name: str
    type: str

    @classmethod
    def from_row(cls, row) -> Account:
        """Construct from a sqlite3.Row or dict of ``provider_accounts``."""
        r = dict(row)
        return cls(name=r["email_address"], type=r["account_type"])


@dataclass(frozen=True)
class EmailRecord:
    """One raw email string for a contact, plus its primary flag.

    The address is not validated; it may lack an '@' entirely.
    """

    address: str
    is_primary: bool = False


@dataclass(frozen=True)
class Attendee:
    """A person proposed as a meeting participant."""

    label: str
    email: str
    photo_ref: str | None = None
    selected: bool = False


@dataclass(frozen=True)
class ContactEntry:
    """A contact as handed over by a contact source."""

    contact_id: str
    display_name: str
    emails: tuple[EmailRecord, ...] = field(default_factory=tuple)
    photo_ref: str | None = None


class SelectionStatus(Enum):
    RESOLVED = "RESOLVED"
    NONE_FOUND = "NONE_FOUND"
    DECLINED = "DECLINED"


@dataclass(frozen=True)
class SelectionOutcome:
    """Result of one account selection."""

    status: SelectionStatus
    account: Account | None = None

    def __bool__(self) -> bool:
        return self.status is SelectionStatus.RESOLVED

    @classmethod
    def resolved(cls, account: Account) -> SelectionOutcome:
        return cls(SelectionStatus.RESOLVED, account)

    @classmethod
    def none_found(cls) -> SelectionOutcome:
        return cls(SelectionStatus.NONE_FOUND)

    @classmethod
    def declined(cls) -> SelectionOutcome:
        return cls(SelectionStatus.DECLINED)
