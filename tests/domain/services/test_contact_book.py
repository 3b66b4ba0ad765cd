"""Tests for the contact book and SOS links."""

from urllib.parse import parse_qs, urlparse

import pytest

from conftest import MemoryStore
from trust_lens.domain.errors import InputValidationError
from trust_lens.domain.services.contact_book import (
    ContactBook,
    build_sos_message,
    build_sos_share_link,
)


def test_add_and_reload():
    backing = MemoryStore()
    book = ContactBook(backing)

    contact = book.add("  Asha ", " +91 98765 43210 ")

    assert contact.name == "Asha"
    assert contact.phone == "+91 98765 43210"
    assert ContactBook(backing).all() == [contact]


@pytest.mark.parametrize("name,phone", [("", "123"), ("Asha", "  "), (None, None)])
def test_add_requires_name_and_phone(name, phone):
    with pytest.raises(InputValidationError):
        ContactBook(MemoryStore()).add(name, phone)


def test_remove():
    book = ContactBook(MemoryStore())
    contact = book.add("Ravi", "555-0100")

    assert book.remove(contact.id) is True
    assert book.remove(contact.id) is False
    assert book.get(contact.id) is None


def test_ids_are_unique():
    book = ContactBook(MemoryStore())

    ids = {book.add(f"c{i}", "1").id for i in range(20)}

    assert len(ids) == 20


def test_sos_link_strips_phone_formatting():
    url = build_sos_share_link("+91 (987) 654-3210", 12.9716, 77.5946)
    parsed = urlparse(url)

    assert parsed.netloc == "wa.me"
    assert parsed.path == "/919876543210"
    assert parse_qs(parsed.query)["text"] == [build_sos_message(12.9716, 77.5946)]


def test_sos_message_contains_map_link():
    assert "https://www.google.com/maps?q=1.5,-2.25" in build_sos_message(1.5, -2.25)


def test_sos_link_needs_digits():
    with pytest.raises(InputValidationError):
        build_sos_share_link("call me", 0, 0)


def test_corrupt_contacts_start_empty():
    assert ContactBook(MemoryStore({"contacts": "garbage"})).all() == []
