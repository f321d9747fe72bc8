"""Tests for meetsched.contacts_client: Google People API contact source."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from meetsched.contacts_client import (
    _extract_email_records,
    _extract_photo_ref,
    fetch_contacts,
    get_user_email,
    person_to_contact,
)
from meetsched.models import ContactEntry, EmailRecord

PERSON = {
    "resourceName": "people/c1",
    "names": [{"displayName": "Alice Wonder"}],
    "emailAddresses": [
        {"value": "alice@wonder.com", "metadata": {"primary": False}},
        {"value": " alice@gmail.com ", "metadata": {"primary": True}},
        {"value": "not-an-email"},
        {"value": ""},
    ],
    "photos": [
        {"url": "https://lh3/default", "default": True},
        {"url": "https://lh3/alice"},
    ],
}


def _mock_service(pages: list[dict]) -> MagicMock:
    service = MagicMock()
    list_call = service.people.return_value.connections.return_value.list
    list_call.return_value.execute.side_effect = pages
    return service


# ---------------------------------------------------------------------------
# Extraction helpers
# ---------------------------------------------------------------------------

class TestExtraction:
    def test_email_records_keep_order_and_primary(self):
        assert _extract_email_records(PERSON) == [
            EmailRecord("alice@wonder.com", False),
            EmailRecord("alice@gmail.com", True),
            EmailRecord("not-an-email", False),
        ]

    def test_no_emails(self):
        assert _extract_email_records({}) == []

    def test_photo_skips_default(self):
        assert _extract_photo_ref(PERSON) == "https://lh3/alice"

    def test_only_default_photo(self):
        person = {"photos": [{"url": "https://lh3/default", "default": True}]}
        assert _extract_photo_ref(person) is None

    def test_person_to_contact(self):
        contact = person_to_contact(PERSON)
        assert contact.contact_id == "people/c1"
        assert contact.display_name == "Alice Wonder"
        assert len(contact.emails) == 3
        assert contact.photo_ref == "https://lh3/alice"

    def test_person_without_name(self):
        contact = person_to_contact({"resourceName": "people/c2"})
        assert contact == ContactEntry("people/c2", "", (), None)


# ---------------------------------------------------------------------------
# fetch_contacts
# ---------------------------------------------------------------------------

class TestFetchContacts:
    @patch("meetsched.contacts_client.build")
    def test_pages_and_skips_contacts_without_email(self, mock_build):
        mock_build.return_value = _mock_service([
            {"connections": [PERSON, {"resourceName": "people/none"}], "nextPageToken": "p2"},
            {"connections": [{
                "resourceName": "people/c3",
                "names": [{"displayName": "Bob"}],
                "emailAddresses": [{"value": "bob@builder.com"}],
            }]},
        ])
        limiter = MagicMock()

        contacts = fetch_contacts(MagicMock(), limiter)

        assert [c.contact_id for c in contacts] == ["people/c1", "people/c3"]
        assert limiter.acquire.call_count == 2
        list_call = mock_build.return_value.people.return_value.connections.return_value.list
        assert list_call.call_args_list[1].kwargs["pageToken"] == "p2"

    @patch("meetsched.contacts_client.build")
    def test_empty(self, mock_build):
        mock_build.return_value = _mock_service([{}])
        assert fetch_contacts(MagicMock()) == []


# ---------------------------------------------------------------------------
# get_user_email
# ---------------------------------------------------------------------------

class TestGetUserEmail:
    def _service(self, me: dict) -> MagicMock:
        service = MagicMock()
        service.people.return_value.get.return_value.execute.return_value = me
        return service

    @patch("meetsched.contacts_client.build")
    def test_prefers_primary(self, mock_build):
        mock_build.return_value = self._service({"emailAddresses": [
            {"value": "other@corp.com"},
            {"value": "Me@Corp.com", "metadata": {"primary": True}},
        ]})
        assert get_user_email(MagicMock()) == "me@corp.com"

    @patch("meetsched.contacts_client.build")
    def test_first_when_no_primary(self, mock_build):
        mock_build.return_value = self._service({"emailAddresses": [{"value": "a@corp.com"}]})
        assert get_user_email(MagicMock()) == "a@corp.com"

    @patch("meetsched.contacts_client.build")
    def test_no_email_raises(self, mock_build):
        mock_build.return_value = self._service({})
        with pytest.raises(ValueError):
            get_user_email(MagicMock())
