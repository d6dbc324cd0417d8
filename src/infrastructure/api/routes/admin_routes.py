from __future__ import annotations

from fastapi import APIRouter, Depends

from src.application.dtos.auth_dto import DashboardResponse
from src.application.services.record_cache import CONTACTS, PROJECTS, RecordCache
from src.domain.entities.session import AdminSession
from src.infrastructure.api.dependencies import (
    get_admin_contact_repo,
    get_admin_project_repo,
    get_cache,
    require_admin_session,
)
from src.infrastructure.api.routes.admin_contact_routes import router as contact_router
from src.infrastructure.api.routes.admin_profile_routes import router as profile_router
from src.infrastructure.api.routes.admin_project_routes import router as project_router
from src.infrastructure.database.repositories.contact_repository import ContactRepository
from src.infrastructure.database.repositories.project_repository import ProjectRepository

# Every admin page sits behind this one session check; without a session the
# request is redirected to /admin/login before any handler runs.
router = APIRouter(
    prefix="/admin",
    dependencies=[Depends(require_admin_session)],
    responses={303: {"description": "See Other - No admin session, redirected to /admin/login"}},
)


@router.get("", response_model=DashboardResponse, tags=["Admin"], summary="Admin Dashboard")
def dashboard(
    session: AdminSession = Depends(require_admin_session),
    projects: ProjectRepository = Depends(get_admin_project_repo),
    contacts: ContactRepository = Depends(get_admin_contact_repo),
    cache: RecordCache = Depends(get_cache),
):
    project_items = cache.get_or_load(PROJECTS, projects.list_all)
    contact_items = cache.get_or_load(CONTACTS, contacts.list_all)
    return DashboardResponse(
        email=session.email,
        projects=len(project_items),
        contacts=len(contact_items),
        unread_contacts=sum(1 for c in contact_items if not c.read),
    )


router.include_router(profile_router)
router.include_router(project_router)
router.include_router(contact_router)
