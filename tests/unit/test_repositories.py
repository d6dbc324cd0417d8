"""
Tests for row validation and the Supabase code paths of the repositories,
using a mocked client.
"""
from __future__ import annotations

from datetime import datetime
from unittest.mock import Mock

import pytest

from src.domain.errors import BackendError, MalformedRecordError
from src.infrastructure.database.repositories.contact_repository import ContactRepository
from src.infrastructure.database.repositories.profile_repository import ProfileRepository
from src.infrastructure.database.repositories.project_repository import ProjectRepository
from src.infrastructure.database.repositories.rows import map_rows, timestamp


@pytest.fixture
def supabase_mode(monkeypatch):
    monkeypatch.setenv("SUPABASE_DISABLED", "0")
    monkeypatch.setenv("USE_LOCAL_DB", "0")


def _client_returning(rows):
    client = Mock()
    client.table.return_value.select.return_value.execute.return_value = Mock(data=rows)
    return client


class APIError(Exception):
    """Stand-in for postgrest's error, which carries the server text on .message."""

    def __init__(self, message):
        super().__init__({"message": message})
        self.message = message


def test_project_row_defaults():
    repo = ProjectRepository(None)
    project = repo._row_to_entity({"id": 7, "title": "Shop", "created_at": "2024-03-01T10:00:00Z"})

    assert project.id == "7"
    assert project.description == ""
    assert project.stack == []
    assert project.github is None and project.live is None and project.image is None
    assert project.created_at == datetime.fromisoformat("2024-03-01T10:00:00+00:00")


def test_project_row_without_title_is_malformed():
    with pytest.raises(MalformedRecordError):
        ProjectRepository(None)._row_to_entity({"id": "p1", "title": None})


def test_contact_row_requires_created_at():
    repo = ContactRepository(None)
    with pytest.raises(MalformedRecordError):
        repo._row_to_entity({"id": "c1", "name": "A", "email": "a@b.co", "message": "Hi"})


def test_contact_row_blank_subject_gets_default():
    repo = ContactRepository(None)
    contact = repo._row_to_entity(
        {
            "id": "c1",
            "name": "A",
            "email": "a@b.co",
            "message": "Hi",
            "subject": "",
            "created_at": "2024-01-01T00:00:00+00:00",
        }
    )
    assert contact.subject == "No subject"
    assert contact.read is False and contact.replied is False


def test_profile_row_rejects_non_object_socials():
    with pytest.raises(MalformedRecordError):
        ProfileRepository(None)._row_to_entity({"id": "p", "socials": ["github"]})


def test_map_rows_skips_bad_rows(caplog):
    repo = ProjectRepository(None)
    rows = [
        {"id": "1", "title": "Good"},
        {"id": "2"},
        {"title": "No id"},
        {"id": "3", "title": "Also good", "stack": ["Go", 5, " "]},
    ]
    with caplog.at_level("WARNING"):
        projects = map_rows(rows, repo._row_to_entity, "projects")

    assert [p.id for p in projects] == ["1", "3"]
    assert projects[1].stack == ["Go"]
    assert "Skipping malformed projects row" in caplog.text


def test_timestamp_rejects_garbage():
    with pytest.raises(MalformedRecordError):
        timestamp("yesterday")
    with pytest.raises(MalformedRecordError):
        timestamp(12345)


def test_supabase_list_maps_rows(supabase_mode):
    client = _client_returning(
        [{"id": "1", "title": "Shop", "stack": ["React"]}, {"id": "2", "title": 3}]
    )
    projects = ProjectRepository(client).list_all()

    client.table.assert_called_with("projects")
    assert [p.title for p in projects] == ["Shop"]


def test_supabase_error_surfaces_backend_message(supabase_mode):
    client = Mock()
    client.table.return_value.select.return_value.execute.side_effect = APIError(
        "new row violates row-level security policy"
    )
    with pytest.raises(BackendError, match="row-level security"):
        ProjectRepository(client).list_all()


def test_supabase_contacts_newest_first(supabase_mode):
    client = Mock()
    query = client.table.return_value.select.return_value.order.return_value
    query.execute.return_value = Mock(
        data=[
            {
                "id": "c2",
                "name": "B",
                "email": "b@b.co",
                "message": "Later",
                "created_at": "2024-02-01T00:00:00+00:00",
            }
        ]
    )
    contacts = ContactRepository(client).list_all()

    client.table.return_value.select.return_value.order.assert_called_once_with(
        "created_at", desc=True
    )
    assert [c.id for c in contacts] == ["c2"]


def test_missing_client_outside_disabled_mode_is_an_error(supabase_mode):
    for repo_cls in (ProjectRepository, ContactRepository, ProfileRepository):
        with pytest.raises(BackendError, match="Supabase is not configured"):
            repo_cls(None)
