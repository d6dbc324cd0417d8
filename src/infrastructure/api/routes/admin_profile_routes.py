from __future__ import annotations

from fastapi import APIRouter, Depends

from src.application.dtos.profile_dto import ProfileResponse, UpdateProfileRequest
from src.application.services.record_cache import RecordCache
from src.application.use_cases.save_profile import SaveProfileUseCase
from src.infrastructure.api.dependencies import get_admin_profile_repo, get_cache
from src.infrastructure.database.repositories.profile_repository import ProfileRepository

router = APIRouter(prefix="/profile", tags=["Admin: Profile"])


@router.get(
    "",
    response_model=ProfileResponse | None,
    summary="Get Profile For Editing",
    description="Returns null until the profile is saved for the first time.",
)
def get_profile(profiles: ProfileRepository = Depends(get_admin_profile_repo)):
    entity = profiles.get_singleton()
    return ProfileResponse.from_entity(entity) if entity else None


@router.put(
    "",
    response_model=ProfileResponse,
    summary="Save Profile",
    description="""
    Save the single site profile.

    The first save creates the row; later saves update it. `skills` may be a
    list or comma-separated text; order and duplicates are preserved.
    """,
)
def save_profile(
    body: UpdateProfileRequest,
    profiles: ProfileRepository = Depends(get_admin_profile_repo),
    cache: RecordCache = Depends(get_cache),
):
    uc = SaveProfileUseCase(profiles=profiles, cache=cache)
    entity = uc.execute(
        name=body.name,
        bio=body.bio,
        location=body.location,
        skills=body.skills,
        socials=body.socials.model_dump(),
    )
    return ProfileResponse.from_entity(entity)
