from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum

DEFAULT_SUBJECT = "No subject"


class ContactStatus(str, Enum):
    NEW = "new"
    READ = "read"
    REPLIED = "replied"


@dataclass(frozen=True)
class ContactEntity:
    """A contact-form submission.

    ``read`` and ``replied`` are independent flags, but every transition keeps
    ``replied`` implying ``read``: replying to a message means it was read.
    """

    id: str
    name: str
    email: str
    subject: str
    message: str
    created_at: datetime
    read: bool = False
    replied: bool = False

    @property
    def status(self) -> ContactStatus:
        if self.replied:
            return ContactStatus.REPLIED
        if self.read:
            return ContactStatus.READ
        return ContactStatus.NEW

    def mark_as_read(self) -> ContactEntity:
        return replace(self, read=True)

    def mark_as_replied(self) -> ContactEntity:
        return replace(self, read=True, replied=True)
