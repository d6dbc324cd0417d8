"""
Tests for the write use cases, with mocked repositories.
"""
from __future__ import annotations

from dataclasses import replace
from datetime import UTC, datetime
from unittest.mock import Mock

import pytest

from src.application.services.record_cache import CONTACTS, PROFILE, PROJECTS
from src.application.use_cases.save_profile import SaveProfileUseCase
from src.application.use_cases.save_project import DeleteProjectUseCase, SaveProjectUseCase
from src.application.use_cases.submit_contact import SubmitContactUseCase
from src.application.use_cases.update_contact_status import UpdateContactStatusUseCase
from src.domain.entities.contact import ContactEntity
from src.domain.entities.profile import ProfileEntity
from src.domain.errors import RecordNotFoundError, ValidationError


def _contact(**kw) -> ContactEntity:
    fields = dict(
        id="c1",
        name="Ana",
        email="ana@x.com",
        subject="No subject",
        message="Hi",
        created_at=datetime(2024, 1, 1, tzinfo=UTC),
    )
    fields.update(kw)
    return ContactEntity(**fields)


class TestSubmitContactUseCase:
    def test_blank_subject_defaults_and_flags_start_false(self, mock_contacts, cache):
        uc = SubmitContactUseCase(contacts=mock_contacts, cache=cache)

        uc.execute(name="Ana", email="ana@x.com", message="Hi", subject="")

        data = mock_contacts.create.call_args[0][0]
        assert data["subject"] == "No subject"
        assert data["read"] is False
        assert data["replied"] is False
        assert data["name"] == "Ana" and data["message"] == "Hi"
        cache.invalidate.assert_called_once_with(CONTACTS)

    def test_fields_are_trimmed(self, mock_contacts, cache):
        uc = SubmitContactUseCase(contacts=mock_contacts, cache=cache)
        uc.execute(name="  Ana ", email=" ana@x.com ", message=" Hi ", subject=" Hello ")
        data = mock_contacts.create.call_args[0][0]
        assert (data["name"], data["email"], data["message"], data["subject"]) == (
            "Ana", "ana@x.com", "Hi", "Hello",
        )

    @pytest.mark.parametrize(
        "name,email,message",
        [("", "ana@x.com", "Hi"), ("Ana", "  ", "Hi"), ("Ana", "ana@x.com", "   ")],
    )
    def test_missing_required_fields(self, mock_contacts, cache, name, email, message):
        uc = SubmitContactUseCase(contacts=mock_contacts, cache=cache)
        with pytest.raises(ValidationError, match="required fields"):
            uc.execute(name=name, email=email, message=message)
        mock_contacts.create.assert_not_called()

    @pytest.mark.parametrize("email", ["ana", "ana@x", "@x.com", "ana@ x.com"])
    def test_malformed_email(self, mock_contacts, cache, email):
        uc = SubmitContactUseCase(contacts=mock_contacts, cache=cache)
        with pytest.raises(ValidationError, match="valid email"):
            uc.execute(name="Ana", email=email, message="Hi")
        mock_contacts.create.assert_not_called()


class TestUpdateContactStatusUseCase:
    def test_open_unread_marks_read(self, mock_contacts, cache):
        mock_contacts.get.return_value = _contact()
        uc = UpdateContactStatusUseCase(contacts=mock_contacts, cache=cache)

        out = uc.open("c1")

        mock_contacts.update_status.assert_called_once_with("c1", {"read": True, "replied": False})
        assert out.read is True
        cache.invalidate.assert_called_once_with(CONTACTS)

    def test_open_read_contact_writes_nothing(self, mock_contacts, cache):
        mock_contacts.get.return_value = _contact(read=True)
        uc = UpdateContactStatusUseCase(contacts=mock_contacts, cache=cache)

        out = uc.open("c1")

        assert out.read is True
        mock_contacts.update_status.assert_not_called()
        cache.invalidate.assert_not_called()

    def test_mark_as_replied_sets_read_too(self, mock_contacts, cache):
        mock_contacts.get.return_value = _contact()
        uc = UpdateContactStatusUseCase(contacts=mock_contacts, cache=cache)

        out = uc.mark_as_replied("c1")

        mock_contacts.update_status.assert_called_once_with("c1", {"read": True, "replied": True})
        assert out.read and out.replied

    def test_mark_as_read_keeps_replied(self, mock_contacts, cache):
        mock_contacts.get.return_value = _contact(read=True, replied=True)
        uc = UpdateContactStatusUseCase(contacts=mock_contacts, cache=cache)
        assert uc.mark_as_read("c1").replied is True

    def test_unknown_contact(self, mock_contacts, cache):
        mock_contacts.get.return_value = None
        uc = UpdateContactStatusUseCase(contacts=mock_contacts, cache=cache)
        with pytest.raises(RecordNotFoundError):
            uc.mark_as_read("nope")
        mock_contacts.update_status.assert_not_called()

    def test_delete(self, mock_contacts, cache):
        uc = UpdateContactStatusUseCase(contacts=mock_contacts, cache=cache)
        mock_contacts.delete.return_value = True
        uc.delete("c1")
        cache.invalidate.assert_called_once_with(CONTACTS)

        mock_contacts.delete.return_value = False
        with pytest.raises(RecordNotFoundError):
            uc.delete("c1")


class TestSaveProfileUseCase:
    def test_first_save_creates(self, cache):
        profiles = Mock()
        profiles.get_singleton.return_value = None
        profiles.create.side_effect = lambda data: ProfileEntity(id="p1", **data)
        uc = SaveProfileUseCase(profiles=profiles, cache=cache)

        out = uc.execute(
            name="Ana", skills="React, Go, React", socials={"github": "https://github.com/ana", "twitter": " "}
        )

        profiles.update.assert_not_called()
        assert out.skills == ["React", "Go", "React"]
        assert out.socials == {"github": "https://github.com/ana", "twitter": None}
        cache.invalidate.assert_called_once_with(PROFILE)

    def test_later_save_updates_existing_row(self, cache):
        existing = ProfileEntity(id="p1", name="Old")
        profiles = Mock()
        profiles.get_singleton.return_value = existing
        profiles.update.side_effect = lambda pid, data: replace(existing, **data)
        uc = SaveProfileUseCase(profiles=profiles, cache=cache)

        out = uc.execute(name="New", bio="Hello", skills=["Python"])

        profiles.create.assert_not_called()
        assert profiles.update.call_args[0][0] == "p1"
        assert out.name == "New" and out.skills == ["Python"]


class TestSaveProjectUseCase:
    def test_create_parses_stack_and_blank_urls(self, cache):
        projects = Mock()
        uc = SaveProjectUseCase(projects=projects, cache=cache)

        uc.execute({"title": " Shop ", "stack": "React, Node.js,", "github": "", "live": "https://shop.dev"})

        data = projects.create.call_args[0][0]
        assert data["title"] == "Shop"
        assert data["stack"] == ["React", "Node.js"]
        assert data["github"] is None
        assert data["live"] == "https://shop.dev"
        assert data["image"] is None
        cache.invalidate.assert_called_once_with(PROJECTS)

    def test_edit_goes_to_update(self, cache):
        projects = Mock()
        uc = SaveProjectUseCase(projects=projects, cache=cache)
        uc.execute({"title": "Shop", "stack": ["Go"]}, project_id="proj_9")
        assert projects.update.call_args[0][0] == "proj_9"
        projects.create.assert_not_called()

    def test_title_required(self, cache):
        projects = Mock()
        uc = SaveProjectUseCase(projects=projects, cache=cache)
        with pytest.raises(ValidationError):
            uc.execute({"title": "   "})
        projects.create.assert_not_called()
        cache.invalidate.assert_not_called()

    def test_delete_missing_project(self, cache):
        projects = Mock()
        projects.delete.return_value = False
        with pytest.raises(RecordNotFoundError):
            DeleteProjectUseCase(projects=projects, cache=cache).execute("proj_404")
        cache.invalidate.assert_not_called()


@pytest.fixture
def cache():
    return Mock()


@pytest.fixture
def mock_contacts():
    """Contact repository whose writes echo back what a backend would store."""
    contacts = Mock()

    def create(data):
        return _contact(id="c_new", **data)

    def update_status(contact_id, fields):
        return replace(contacts.get.return_value, **fields)

    contacts.create.side_effect = create
    contacts.update_status.side_effect = update_status
    return contacts
