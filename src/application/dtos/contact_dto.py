from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from src.domain.entities.contact import ContactEntity, ContactStatus


class ContactFormRequest(BaseModel):
    """Public contact form.

    Fields default to empty so that missing values reach the form validation
    and get its user-facing message instead of a schema error.
    """
    name: str = Field("", max_length=200, examples=["Ana"])
    email: str = Field("", max_length=320, examples=["ana@x.com"])
    subject: str = Field("", max_length=300, description="Optional; defaults to 'No subject'")
    message: str = Field("", max_length=10000, examples=["Hi"])


class ContactSubmittedResponse(BaseModel):
    ok: bool = Field(True)
    id: str = Field(..., description="Identifier of the stored submission")


class ContactResponse(BaseModel):
    id: str
    name: str
    email: str
    subject: str
    message: str
    created_at: datetime
    read: bool
    replied: bool
    status: ContactStatus = Field(..., description="new, read or replied")

    @classmethod
    def from_entity(cls, entity: ContactEntity) -> ContactResponse:
        return cls(
            id=entity.id,
            name=entity.name,
            email=entity.email,
            subject=entity.subject,
            message=entity.message,
            created_at=entity.created_at,
            read=entity.read,
            replied=entity.replied,
            status=entity.status,
        )


class ContactStats(BaseModel):
    total: int = Field(..., ge=0)
    unread: int = Field(..., ge=0)
    replied: int = Field(..., ge=0)


class ContactListResponse(BaseModel):
    contacts: list[ContactResponse] = Field(..., description="Contacts that passed the filters, newest first")
    stats: ContactStats = Field(..., description="Counts over the whole inbox, not just the filtered page")
