from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from src.domain.entities.project import ProjectEntity


class ProjectResponse(BaseModel):
    id: str = Field(..., description="Unique identifier of the project", examples=["proj_1"])
    title: str = Field(..., description="Project title")
    description: str = Field("", description="Project description")
    stack: list[str] = Field(default_factory=list, description="Technology tags", examples=[["React", "Go"]])
    github: str | None = Field(None, description="Source repository URL")
    live: str | None = Field(None, description="Live deployment URL")
    image: str | None = Field(None, description="Public URL of the project image")
    created_at: datetime | None = Field(None, description="When the project was added")

    @classmethod
    def from_entity(cls, entity: ProjectEntity) -> ProjectResponse:
        return cls(
            id=entity.id,
            title=entity.title,
            description=entity.description,
            stack=list(entity.stack),
            github=entity.github,
            live=entity.live,
            image=entity.image,
            created_at=entity.created_at,
        )


class ProjectRequest(BaseModel):
    """Create/edit form for a project. ``stack`` accepts a list or comma-separated text."""
    title: str = Field(..., max_length=200, description="Project title", examples=["Portfolio"])
    description: str = Field("", description="Project description")
    stack: str | list[str] = Field(default_factory=list, examples=["Next.js, Supabase"])
    github: str | None = Field(None, description="Source repository URL")
    live: str | None = Field(None, description="Live deployment URL")
    image: str | None = Field(None, description="Image URL returned by the image upload endpoint")


class ProjectListResponse(BaseModel):
    """Projects after search and technology filtering."""
    projects: list[ProjectResponse] = Field(..., description="Projects that passed the filters")
    technologies: list[str] = Field(..., description="Every technology across all projects, sorted")
    shown: int = Field(..., ge=0, description="Number of projects returned")
    total: int = Field(..., ge=0, description="Number of projects before filtering")


class ImageUploadResponse(BaseModel):
    path: str = Field(..., description="Storage path inside the bucket")
    url: str = Field(..., description="Public URL to store on the project")
    content_type: str = Field(..., examples=["image/png"])
    size: int = Field(..., ge=0, description="Size in bytes")
