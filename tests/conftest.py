import os
import sys
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure project root is on sys.path so 'src' is importable during tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("SUPABASE_DISABLED", "1")
os.environ.setdefault("SUPABASE_STORAGE_LOCAL_DIR", tempfile.mkdtemp(prefix="portfolio-storage-"))
os.environ.setdefault("ADMIN_EMAIL", "admin@example.com")
os.environ.setdefault("ADMIN_PASSWORD", "s3cret")


@pytest.fixture(autouse=True)
def clean_stores():
    """Each test starts with empty in-memory collections, sessions and cache."""
    from src.application.services.record_cache import get_record_cache
    from src.infrastructure.database.repositories.contact_repository import _MEM_CONTACTS
    from src.infrastructure.database.repositories.profile_repository import _MEM_PROFILE
    from src.infrastructure.database.repositories.project_repository import _MEM_PROJECTS
    from src.infrastructure.database.supabase_client import _MEM_SESSIONS

    for store in (_MEM_CONTACTS, _MEM_PROFILE, _MEM_PROJECTS, _MEM_SESSIONS):
        store.clear()
    get_record_cache().clear()
    yield


@pytest.fixture()
def app():
    # lazy import after env configured
    from src.main import create_app

    return create_app()


@pytest.fixture()
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def admin_header(client) -> dict[str, str]:
    r = client.post(
        "/admin/login",
        json={"email": os.environ["ADMIN_EMAIL"], "password": os.environ["ADMIN_PASSWORD"]},
    )
    assert r.status_code == 200, r.text
    # drop the cookie so requests without the header stay anonymous
    client.cookies.clear()
    return {"Authorization": f"Bearer {r.json()['access_token']}"}
