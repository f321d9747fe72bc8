"""Google People API wrapper for fetching contacts with their email records."""

from __future__ import annotations

import logging

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build

from .models import ContactEntry, EmailRecord
from .rate_limiter import RateLimiter

log = logging.getLogger(__name__)

_PERSON_FIELDS = "names,emailAddresses,photos"


def get_user_email(creds: Credentials) -> str:
    """Return the authenticated user's primary email address."""
    service = build("people", "v1", credentials=creds)
    me = service.people().get(resourceName="people/me", personFields="emailAddresses").execute()
    records = _extract_email_records(me)
    for record in records:
        if record.is_primary:
            return record.address.lower()
    if not records:
        raise ValueError("Authenticated profile has no email address")
    return records[0].address.lower()


def _extract_email_records(person: dict) -> list[EmailRecord]:
    """Email records of a person, in API order, unvalidated."""
    records = []
    for entry in person.get("emailAddresses", []):
        value = (entry.get("value") or "").strip()
        if value:
            primary = bool(entry.get("metadata", {}).get("primary", False))
            records.append(EmailRecord(address=value, is_primary=primary))
    return records


def _extract_photo_ref(person: dict) -> str | None:
    """URL of the contact's own photo, skipping Google's generated avatar."""
    for photo in person.get("photos", []):
        if photo.get("default"):
            continue
        url = photo.get("url")
        if url:
            return url
    return None


def _extract_display_name(person: dict) -> str:
    names = person.get("names", [])
    return names[0].get("displayName", "") if names else ""


def person_to_contact(person: dict) -> ContactEntry:
    """Convert a People API person resource to a :class:`ContactEntry`."""
    return ContactEntry(
        contact_id=person.get("resourceName", ""),
        display_name=_extract_display_name(person),
        emails=tuple(_extract_email_records(person)),
        photo_ref=_extract_photo_ref(person),
    )


def fetch_contacts(
    creds: Credentials,
    rate_limiter: RateLimiter | None = None,
) -> list[ContactEntry]:
    """Fetch all connections that carry at least one email record."""
    service = build("people", "v1", credentials=creds)
    contacts: list[ContactEntry] = []
    page_token: str | None = None

    while True:
        if rate_limiter:
            rate_limiter.acquire()

        result = (
            service.people()
            .connections()
            .list(
                resourceName="people/me",
                pageSize=200,
                personFields=_PERSON_FIELDS,
                pageToken=page_token or "",
            )
            .execute()
        )

        for person in result.get("connections", []):
            contact = person_to_contact(person)
            if contact.emails:
                contacts.append(contact)

        page_token = result.get("nextPageToken")
        if not page_token:
            break

    log.info("Fetched %d contacts with email records", len(contacts))
    return contacts
