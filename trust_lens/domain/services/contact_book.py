"""Emergency contacts and SOS location sharing."""

import logging
import re
from typing import List, Optional
from urllib.parse import quote

from ..errors import InputValidationError
from ..models.contact import EmergencyContact
from ..ports.key_value_store import KeyValueStore
from .persistence import load_model_list, save_model_list

logger = logging.getLogger(__name__)

CONTACTS_KEY = "contacts"


def build_sos_message(latitude: float, longitude: float) -> str:
    return f"SOS! I need help. My current location: https://www.google.com/maps?q={latitude},{longitude}"


def build_sos_share_link(phone: str, latitude: float, longitude: float) -> str:
    """WhatsApp deep link that sends the SOS message with a map link to phone.

    Raises:
        InputValidationError: If phone contains no digits
    """
    digits = re.sub(r"\D", "", phone or "")
    if not digits:
        raise InputValidationError(f"Phone number has no digits: {phone!r}")
    return f"https://wa.me/{digits}?text={quote(build_sos_message(latitude, longitude), safe='')}"


class ContactBook:
    """Locally stored emergency contacts."""

    def __init__(self, store: KeyValueStore, key: str = CONTACTS_KEY):
        self._store = store
        self._key = key
        self._contacts: List[EmergencyContact] = load_model_list(store, key, EmergencyContact)

    def add(self, name: str, phone: str) -> EmergencyContact:
        """Add a contact.

        Raises:
            InputValidationError: If name or phone is blank
        """
        name, phone = (name or "").strip(), (phone or "").strip()
        if not name or not phone:
            raise InputValidationError("Contact needs both a name and a phone number")
        contact = EmergencyContact(name=name, phone=phone)
        self._contacts.append(contact)
        self._persist()
        logger.info(f"📇 Added emergency contact {name}")
        return contact

    def get(self, contact_id: str) -> Optional[EmergencyContact]:
        return next((c for c in self._contacts if c.id == contact_id), None)

    def remove(self, contact_id: str) -> bool:
        remaining = [c for c in self._contacts if c.id != contact_id]
        if len(remaining) == len(self._contacts):
            return False
        self._contacts = remaining
        self._persist()
        return True

    def all(self) -> List[EmergencyContact]:
        return list(self._contacts)

    def _persist(self) -> None:
        save_model_list(self._store, self._key, self._contacts)
