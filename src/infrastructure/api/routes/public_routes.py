from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.application.dtos.common_dto import ErrorResponse
from src.application.dtos.contact_dto import ContactFormRequest, ContactSubmittedResponse
from src.application.dtos.page_dto import AboutPageResponse, HomePageResponse
from src.application.dtos.profile_dto import ProfileResponse
from src.application.dtos.project_dto import ProjectListResponse, ProjectResponse
from src.application.services.record_cache import PROFILE, PROJECTS, RecordCache
from src.application.use_cases.submit_contact import SubmitContactUseCase
from src.domain.errors import BackendError
from src.domain.services.list_filter_service import ListFilterService
from src.infrastructure.api.dependencies import (
    get_cache,
    get_contact_repo,
    get_profile_repo,
    get_project_repo,
)
from src.infrastructure.database.repositories.contact_repository import ContactRepository
from src.infrastructure.database.repositories.profile_repository import ProfileRepository
from src.infrastructure.database.repositories.project_repository import ProjectRepository

logger = logging.getLogger(__name__)

FEATURED_PROJECTS = 3

router = APIRouter(
    prefix="/pages",
    tags=["Public Pages"],
    responses={
        422: {"description": "Validation Error - Invalid request format"},
        502: {"model": ErrorResponse, "description": "Bad Gateway - The backing database rejected the request"},
    },
)


def _load_profile(profiles: ProfileRepository, cache: RecordCache) -> ProfileResponse | None:
    entity = cache.get_or_load(PROFILE, profiles.get_singleton)
    return ProfileResponse.from_entity(entity) if entity else None


@router.get(
    "/home",
    response_model=HomePageResponse,
    summary="Home Page",
    description="Profile summary and the first three projects.",
)
def home_page(
    profiles: ProfileRepository = Depends(get_profile_repo),
    projects: ProjectRepository = Depends(get_project_repo),
    cache: RecordCache = Depends(get_cache),
):
    items = cache.get_or_load(PROJECTS, projects.list_all)
    return HomePageResponse(
        profile=_load_profile(profiles, cache),
        featured_projects=[ProjectResponse.from_entity(p) for p in items[:FEATURED_PROJECTS]],
    )


@router.get(
    "/about",
    response_model=AboutPageResponse,
    summary="About Page",
    description="Full profile with skills grouped into frontend, backend, database and tools.",
)
def about_page(
    profiles: ProfileRepository = Depends(get_profile_repo),
    cache: RecordCache = Depends(get_cache),
):
    profile = _load_profile(profiles, cache)
    return AboutPageResponse(
        profile=profile,
        skill_categories=ListFilterService.categorize_skills(profile.skills if profile else None),
    )


@router.get(
    "/projects",
    response_model=ProjectListResponse,
    summary="Projects Page",
    description="""
    List projects, narrowed by a free-text search and a technology filter.

    - `search` matches title, description and technologies, case-insensitively
    - `tech` must equal one of a project's technologies (case-insensitive); `all` disables it
    - `technologies` is always derived from the full list, not the filtered one
    """,
)
def projects_page(
    projects: ProjectRepository = Depends(get_project_repo),
    cache: RecordCache = Depends(get_cache),
    search: str = Query("", description="Free-text search"),
    tech: str = Query("all", description="Technology filter, or 'all'"),
):
    items = cache.get_or_load(PROJECTS, projects.list_all)
    filtered = ListFilterService.filter_projects(items, search, tech)
    return ProjectListResponse(
        projects=[ProjectResponse.from_entity(p) for p in filtered],
        technologies=ListFilterService.derive_tag_universe(items),
        shown=len(filtered),
        total=len(items),
    )


@router.post(
    "/contact",
    response_model=ContactSubmittedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit Contact Form",
    description="""
    Store a message for the site owner.

    **Validation** (400 with a user-facing message):
    - name, email and message are required
    - email must look like `something@domain.tld`

    A blank subject is stored as "No subject".
    """,
    responses={400: {"model": ErrorResponse, "description": "Bad Request - Missing fields or invalid email"}},
)
def submit_contact(
    body: ContactFormRequest,
    contacts: ContactRepository = Depends(get_contact_repo),
    cache: RecordCache = Depends(get_cache),
):
    uc = SubmitContactUseCase(contacts=contacts, cache=cache)
    try:
        entity = uc.execute(
            name=body.name, email=body.email, message=body.message, subject=body.subject
        )
    except BackendError as exc:
        logger.error("Error sending message: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to send message. Please try again.",
        ) from exc
    return ContactSubmittedResponse(id=entity.id)
