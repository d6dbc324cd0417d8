from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import UTC, datetime

from src.application.services.record_cache import CONTACTS, RecordCache
from src.domain.entities.contact import DEFAULT_SUBJECT, ContactEntity
from src.domain.errors import ValidationError
from src.infrastructure.database.repositories.contact_repository import ContactRepository

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")


def validate_contact_form(name: str, email: str, message: str) -> None:
    if not name.strip() or not email.strip() or not message.strip():
        raise ValidationError("Please fill in all required fields")
    if not EMAIL_PATTERN.search(email):
        raise ValidationError("Please enter a valid email address")


@dataclass
class SubmitContactUseCase:
    contacts: ContactRepository
    cache: RecordCache

    def execute(self, name: str, email: str, message: str, subject: str = "") -> ContactEntity:
        """Validate the public contact form and append a new, unread submission."""
        validate_contact_form(name, email, message)
        entity = self.contacts.create(
            {
                "name": name.strip(),
                "email": email.strip(),
                "message": message.strip(),
                "subject": subject.strip() or DEFAULT_SUBJECT,
                "read": False,
                "replied": False,
                "created_at": datetime.now(UTC),
            }
        )
        self.cache.invalidate(CONTACTS)
        logger.info("Contact submission %s stored", entity.id)
        return entity
