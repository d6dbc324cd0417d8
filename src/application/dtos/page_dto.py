from __future__ import annotations

from pydantic import BaseModel, Field

from src.application.dtos.profile_dto import ProfileResponse
from src.application.dtos.project_dto import ProjectResponse


class HomePageResponse(BaseModel):
    profile: ProfileResponse | None = Field(None, description="Null until the profile is first saved")
    featured_projects: list[ProjectResponse] = Field(..., description="Up to three projects")


class AboutPageResponse(BaseModel):
    profile: ProfileResponse | None = None
    skill_categories: dict[str, list[str]] = Field(
        ...,
        description="Profile skills grouped into frontend, backend, database and tools",
        examples=[{"frontend": ["React"], "backend": ["Go"], "database": [], "tools": ["Docker"]}],
    )
