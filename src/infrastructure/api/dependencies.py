from __future__ import annotations

import os
from typing import Annotated

from fastapi import Depends, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from supabase import Client

from src.application.services.record_cache import RecordCache, get_record_cache
from src.application.services.session_guard import AdminSessionState, SessionGuard
from src.domain.entities.session import AdminSession
from src.infrastructure.database.repositories.contact_repository import ContactRepository
from src.infrastructure.database.repositories.profile_repository import ProfileRepository
from src.infrastructure.database.repositories.project_repository import ProjectRepository
from src.infrastructure.database.supabase_client import (
    SupabaseAuthAdapter,
    get_supabase_client,
    get_user_client,
)
from src.infrastructure.storage.supabase_storage import SupabaseStorage

_bearer_scheme = HTTPBearer(auto_error=False)


class LoginRequired(Exception):
    """Raised by the admin guard; the app turns it into a redirect to the login page."""

    def __init__(self, redirect_to: str) -> None:
        super().__init__(redirect_to)
        self.redirect_to = redirect_to


def session_cookie_name() -> str:
    return os.getenv("SESSION_COOKIE_NAME", "portfolio_session")


def get_auth_adapter() -> SupabaseAuthAdapter:
    return SupabaseAuthAdapter()


def get_request_token(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Security(_bearer_scheme)] = None,
) -> str | None:
    """Bearer token if present, otherwise the session cookie."""
    if credentials and credentials.scheme and credentials.scheme.lower() == "bearer":
        return credentials.credentials or None
    return request.cookies.get(session_cookie_name()) or None


async def get_admin_session_state(
    token: Annotated[str | None, Depends(get_request_token)],
    auth: Annotated[SupabaseAuthAdapter, Depends(get_auth_adapter)],
) -> AdminSessionState:
    return await SessionGuard(auth).resolve(token)


async def require_admin_session(
    state: Annotated[AdminSessionState, Depends(get_admin_session_state)],
) -> AdminSession:
    """Guard for the admin router; FastAPI resolves it once per request."""
    if not state.authenticated:
        raise LoginRequired(state.redirect_to or "/admin/login")
    return state.session


def get_profile_repo() -> ProfileRepository:
    return ProfileRepository(get_supabase_client())


def get_project_repo() -> ProjectRepository:
    return ProjectRepository(get_supabase_client())


def get_contact_repo() -> ContactRepository:
    return ContactRepository(get_supabase_client())


def get_cache() -> RecordCache:
    return get_record_cache()


# Admin pages talk to Supabase as the signed-in admin so that row-level
# security sees the admin's JWT, not the anonymous role.
def get_admin_client(
    session: Annotated[AdminSession, Depends(require_admin_session)],
) -> Client | None:
    return get_user_client(session.access_token)


def get_admin_storage(
    client: Annotated[Client | None, Depends(get_admin_client)],
) -> SupabaseStorage:
    return SupabaseStorage(client)


def get_admin_profile_repo(
    client: Annotated[Client | None, Depends(get_admin_client)],
) -> ProfileRepository:
    return ProfileRepository(client)


def get_admin_project_repo(
    client: Annotated[Client | None, Depends(get_admin_client)],
) -> ProjectRepository:
    return ProjectRepository(client)


def get_admin_contact_repo(
    client: Annotated[Client | None, Depends(get_admin_client)],
) -> ContactRepository:
    return ContactRepository(client)
