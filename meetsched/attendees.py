"""Build the list of possible meeting attendees for the active account."""

from __future__ import annotations

import logging
from typing import Iterable

from .email_resolver import build_attendee, current_user_attendee, resolve_email
from .models import Account, Attendee, ContactEntry

log = logging.getLogger(__name__)


def get_current_user(account: Account) -> Attendee:
    return current_user_attendee(account.name)


def get_possible_attendees(
    contacts: Iterable[ContactEntry],
    account: Account,
) -> list[Attendee]:
    """Resolve one attendee per contact, then append the current user.

    Contacts without any valid email address are left out.
    """
    result: list[Attendee] = []
    seen = 0
    skipped = 0

    for contact in contacts:
        seen += 1
        email = resolve_email(contact.emails, account.name)
        if email is None:
            skipped += 1
            continue
        name = contact.display_name or email
        result.append(build_attendee(name, email, contact.photo_ref))

    if not seen:
        log.warning("No contacts found.")
    else:
        log.info(
            "Resolved %d attendees from %d contacts (%d without a valid email)",
            len(result), seen, skipped,
        )

    result.append(get_current_user(account))
    return result
