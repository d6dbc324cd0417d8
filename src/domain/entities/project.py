from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class ProjectEntity:
    id: str
    title: str
    description: str = ""
    stack: list[str] = field(default_factory=list)
    github: str | None = None  # source repository URL
    live: str | None = None  # deployment URL
    image: str | None = None  # public URL in the project-images bucket
    created_at: datetime | None = None
