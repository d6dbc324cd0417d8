from __future__ import annotations

from dataclasses import dataclass

from src.application.services.record_cache import CONTACTS, RecordCache
from src.domain.entities.contact import ContactEntity
from src.domain.errors import RecordNotFoundError
from src.infrastructure.database.repositories.contact_repository import ContactRepository


@dataclass
class UpdateContactStatusUseCase:
    """
    Admin transitions on a contact: new -> read -> replied, or deleted.

    Flags are only written after the record is confirmed to exist, and the
    returned entity is the row as stored by the backend.
    """

    contacts: ContactRepository
    cache: RecordCache

    def _load(self, contact_id: str) -> ContactEntity:
        contact = self.contacts.get(contact_id)
        if contact is None:
            raise RecordNotFoundError(f"Contact {contact_id} not found")
        return contact

    def _store(self, current: ContactEntity, target: ContactEntity) -> ContactEntity:
        if target == current:
            return current
        updated = self.contacts.update_status(
            current.id, {"read": target.read, "replied": target.replied}
        )
        self.cache.invalidate(CONTACTS)
        return updated

    def mark_as_read(self, contact_id: str) -> ContactEntity:
        current = self._load(contact_id)
        return self._store(current, current.mark_as_read())

    def mark_as_replied(self, contact_id: str) -> ContactEntity:
        current = self._load(contact_id)
        return self._store(current, current.mark_as_replied())

    def open(self, contact_id: str) -> ContactEntity:
        """Detail view: an unread contact becomes read just by being opened."""
        return self.mark_as_read(contact_id)

    def delete(self, contact_id: str) -> None:
        if not self.contacts.delete(contact_id):
            raise RecordNotFoundError(f"Contact {contact_id} not found")
        self.cache.invalidate(CONTACTS)
