"""Pick the email address that best represents a contact as an attendee."""

from __future__ import annotations

import logging
from typing import Iterable

from .models import Attendee, EmailRecord

log = logging.getLogger(__name__)

GMAIL_DOMAIN = "@gmail.com"


def extract_domain(address: str) -> str | None:
    """Return *address* from its first '@' on, as written.

    Returns None if the address has no '@' sign.
    """
    if not address or "@" not in address:
        return None
    return address[address.index("@"):]


def is_same_domain(lhs: str, rhs: str) -> bool:
    """Return True if both addresses share a domain, ignoring case.

    An address without an '@' never matches anything.
    """
    lhs_domain = extract_domain(lhs)
    rhs_domain = extract_domain(rhs)
    if lhs_domain is None or rhs_domain is None:
        return False
    return lhs_domain.lower() == rhs_domain.lower()


def resolve_email(
    records: Iterable[EmailRecord],
    self_account_name: str,
) -> str | None:
    """Choose one address for a contact from its raw email records.

    Records without an '@' are skipped.  The rest are scanned primary
    first (stable on input order):

    1. The first address on the same domain as *self_account_name* wins.
    2. Otherwise the first ``@gmail.com`` address seen.
    3. Otherwise the first valid address in input order.

    Returns None when no record is a valid address.
    """
    valid: list[EmailRecord] = []
    for record in records:
        if "@" in record.address:
            valid.append(record)
        else:
            log.debug("Skipping malformed email record %r", record.address)
    if not valid:
        return None

    gmail: str | None = None
    for record in sorted(valid, key=lambda r: not r.is_primary):
        if is_same_domain(self_account_name, record.address):
            return record.address
        if gmail is None and is_same_domain(GMAIL_DOMAIN, record.address):
            gmail = record.address

    if gmail is not None:
        return gmail
    return valid[0].address


def build_attendee(display_name: str, email: str, photo_ref: str | None = None) -> Attendee:
    return Attendee(label=f"{display_name} ({email})", email=email, photo_ref=photo_ref)


def current_user_attendee(self_account_name: str) -> Attendee:
    """The attendee standing for the acting account; always selected."""
    return Attendee(
        label=f"Me ({self_account_name})",
        email=self_account_name,
        photo_ref=None,
        selected=True,
    )
