from __future__ import annotations

from pydantic import BaseModel, Field

from src.domain.entities.profile import ProfileEntity


class Socials(BaseModel):
    github: str | None = Field(None, description="GitHub profile URL", examples=["https://github.com/ana"])
    twitter: str | None = Field(None, description="Twitter/X profile URL")
    email: str | None = Field(None, description="Public contact address or mailto: URL")


class ProfileResponse(BaseModel):
    """The site owner's public profile."""
    id: str = Field(..., description="Identifier of the profile row")
    name: str = Field(..., description="Display name", examples=["Ana Souza"])
    bio: str = Field("", description="Free-text biography")
    location: str = Field("", description="Free-text location", examples=["Lisbon, Portugal"])
    skills: list[str] = Field(default_factory=list, description="Skill tags in the order entered")
    socials: Socials = Field(default_factory=Socials, description="Social links")

    @classmethod
    def from_entity(cls, entity: ProfileEntity) -> ProfileResponse:
        return cls(
            id=entity.id,
            name=entity.name,
            bio=entity.bio,
            location=entity.location,
            skills=list(entity.skills),
            socials=Socials(**entity.socials),
        )


class UpdateProfileRequest(BaseModel):
    """Profile form. ``skills`` accepts a list or comma-separated text."""
    name: str = Field(..., max_length=100, description="Display name", examples=["Ana Souza"])
    bio: str = Field("", description="Free-text biography")
    location: str = Field("", description="Free-text location")
    skills: str | list[str] = Field(default_factory=list, examples=["React, FastAPI, PostgreSQL"])
    socials: Socials = Field(default_factory=Socials)
