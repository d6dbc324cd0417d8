from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from starlette.concurrency import run_in_threadpool

from src.application.dtos.common_dto import ErrorResponse, SuccessResponse
from src.application.dtos.project_dto import (
    ImageUploadResponse,
    ProjectListResponse,
    ProjectRequest,
    ProjectResponse,
)
from src.application.services.record_cache import PROJECTS, RecordCache
from src.application.use_cases.save_project import DeleteProjectUseCase, SaveProjectUseCase
from src.application.use_cases.upload_project_image import UploadProjectImageUseCase
from src.domain.errors import BackendError
from src.domain.services.list_filter_service import ListFilterService
from src.infrastructure.api.dependencies import (
    get_admin_project_repo,
    get_admin_storage,
    get_cache,
)
from src.infrastructure.database.repositories.project_repository import ProjectRepository
from src.infrastructure.storage.supabase_storage import SupabaseStorage

ACCESS_DENIED = "Access denied. Please make sure you are logged in as an admin."

router = APIRouter(
    prefix="/projects",
    tags=["Admin: Projects"],
    responses={
        403: {"model": ErrorResponse, "description": "Forbidden - Row-level security denied the read"},
        404: {"model": ErrorResponse, "description": "Not Found - Project does not exist"},
    },
)


def _is_rls_denial(message: str) -> bool:
    return "RLS" in message or "row-level security" in message.lower()


@router.get(
    "",
    response_model=ProjectListResponse,
    summary="List Projects",
    description="All projects, as stored. Row-level security denials are reported as 403.",
)
def list_projects(
    projects: ProjectRepository = Depends(get_admin_project_repo),
    cache: RecordCache = Depends(get_cache),
):
    try:
        items = cache.get_or_load(PROJECTS, projects.list_all)
    except BackendError as exc:
        if _is_rls_denial(str(exc)):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=ACCESS_DENIED) from exc
        raise
    return ProjectListResponse(
        projects=[ProjectResponse.from_entity(p) for p in items],
        technologies=ListFilterService.derive_tag_universe(items),
        shown=len(items),
        total=len(items),
    )


@router.post(
    "",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add Project",
    responses={400: {"description": "Bad Request - Missing title"}},
)
def create_project(
    body: ProjectRequest,
    projects: ProjectRepository = Depends(get_admin_project_repo),
    cache: RecordCache = Depends(get_cache),
):
    uc = SaveProjectUseCase(projects=projects, cache=cache)
    return ProjectResponse.from_entity(uc.execute(body.model_dump()))


@router.put(
    "/{project_id}",
    response_model=ProjectResponse,
    summary="Edit Project",
    description="Replace every editable field of a project; the response is the stored row.",
    responses={400: {"description": "Bad Request - Missing title"}},
)
def update_project(
    project_id: str,
    body: ProjectRequest,
    projects: ProjectRepository = Depends(get_admin_project_repo),
    cache: RecordCache = Depends(get_cache),
):
    uc = SaveProjectUseCase(projects=projects, cache=cache)
    return ProjectResponse.from_entity(uc.execute(body.model_dump(), project_id=project_id))


@router.delete(
    "/{project_id}",
    response_model=SuccessResponse,
    summary="Delete Project",
)
def delete_project(
    project_id: str,
    projects: ProjectRepository = Depends(get_admin_project_repo),
    cache: RecordCache = Depends(get_cache),
):
    DeleteProjectUseCase(projects=projects, cache=cache).execute(project_id)
    return SuccessResponse(message="Project deleted successfully!")


@router.post(
    "/images",
    response_model=ImageUploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload Project Image",
    description="""
    Upload an image to the project-images bucket and get its public URL.

    The URL is not attached to any project; send it as `image` when adding or
    editing one.
    """,
    responses={400: {"description": "Bad Request - Not an image file"}},
)
async def upload_project_image(
    file: UploadFile = File(..., description="Image file to upload"),
    storage: SupabaseStorage = Depends(get_admin_storage),
):
    data = await file.read()
    uc = UploadProjectImageUseCase(storage=storage)
    stored = await run_in_threadpool(uc.execute, data, file.filename, file.content_type)
    return ImageUploadResponse(
        path=stored.path, url=stored.url, content_type=stored.content_type, size=stored.size
    )
