from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, Query

from src.application.dtos.common_dto import ErrorResponse, SuccessResponse
from src.application.dtos.contact_dto import ContactListResponse, ContactResponse, ContactStats
from src.application.services.record_cache import CONTACTS, RecordCache
from src.application.use_cases.update_contact_status import UpdateContactStatusUseCase
from src.domain.services.list_filter_service import ListFilterService
from src.infrastructure.api.dependencies import get_admin_contact_repo, get_cache
from src.infrastructure.database.repositories.contact_repository import ContactRepository

router = APIRouter(
    prefix="/contacts",
    tags=["Admin: Contacts"],
    responses={404: {"model": ErrorResponse, "description": "Not Found - Contact does not exist"}},
)


def _use_case(contacts: ContactRepository, cache: RecordCache) -> UpdateContactStatusUseCase:
    return UpdateContactStatusUseCase(contacts=contacts, cache=cache)


@router.get(
    "",
    response_model=ContactListResponse,
    summary="List Contacts",
    description="""
    Contact submissions, newest first.

    - `search` matches name, email, subject and message, case-insensitively
    - `status` is `all`, `unread` or `read`
    - `stats` always counts the whole inbox
    """,
)
def list_contacts(
    contacts: ContactRepository = Depends(get_admin_contact_repo),
    cache: RecordCache = Depends(get_cache),
    search: str = Query("", description="Free-text search"),
    status: Literal["all", "unread", "read"] = Query("all", description="Read-status filter"),
):
    items = cache.get_or_load(CONTACTS, contacts.list_all)
    filtered = ListFilterService.filter_contacts(items, search, status)
    return ContactListResponse(
        contacts=[ContactResponse.from_entity(c) for c in filtered],
        stats=ContactStats(**ListFilterService.contact_stats(items)),
    )


@router.get(
    "/{contact_id}",
    response_model=ContactResponse,
    summary="Open Contact",
    description="Detail view of a submission. Opening an unread contact marks it as read.",
)
def open_contact(
    contact_id: str,
    contacts: ContactRepository = Depends(get_admin_contact_repo),
    cache: RecordCache = Depends(get_cache),
):
    return ContactResponse.from_entity(_use_case(contacts, cache).open(contact_id))


@router.post("/{contact_id}/read", response_model=ContactResponse, summary="Mark As Read")
def mark_as_read(
    contact_id: str,
    contacts: ContactRepository = Depends(get_admin_contact_repo),
    cache: RecordCache = Depends(get_cache),
):
    return ContactResponse.from_entity(_use_case(contacts, cache).mark_as_read(contact_id))


@router.post(
    "/{contact_id}/replied",
    response_model=ContactResponse,
    summary="Mark As Replied",
    description="Sets both `replied` and `read`.",
)
def mark_as_replied(
    contact_id: str,
    contacts: ContactRepository = Depends(get_admin_contact_repo),
    cache: RecordCache = Depends(get_cache),
):
    return ContactResponse.from_entity(_use_case(contacts, cache).mark_as_replied(contact_id))


@router.delete("/{contact_id}", response_model=SuccessResponse, summary="Delete Contact")
def delete_contact(
    contact_id: str,
    contacts: ContactRepository = Depends(get_admin_contact_repo),
    cache: RecordCache = Depends(get_cache),
):
    _use_case(contacts, cache).delete(contact_id)
    return SuccessResponse(message="Contact deleted successfully!")
