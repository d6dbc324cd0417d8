from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from src.application.services.record_cache import PROJECTS, RecordCache
from src.domain.entities.project import ProjectEntity
from src.domain.errors import RecordNotFoundError, ValidationError
from src.domain.services.list_filter_service import ListFilterService
from src.infrastructure.database.repositories.project_repository import ProjectRepository

URL_FIELDS = ("github", "live", "image")


@dataclass
class SaveProjectUseCase:
    projects: ProjectRepository
    cache: RecordCache

    def execute(self, data: dict[str, Any], project_id: str | None = None) -> ProjectEntity:
        """
        Create a project, or update ``project_id`` when given.

        ``stack`` may be a list or the comma-separated text typed into the
        admin form. Blank URLs are stored as null.

        Raises:
            ValidationError: If the title is missing.
            RecordNotFoundError: If ``project_id`` does not exist.
        """
        title = (data.get("title") or "").strip()
        if not title:
            raise ValidationError("Project title is required")
        record = {
            "title": title,
            "description": (data.get("description") or "").strip(),
            "stack": ListFilterService.parse_tag_list(data.get("stack")),
        }
        for key in URL_FIELDS:
            value = data.get(key)
            record[key] = (value.strip() or None) if isinstance(value, str) else None

        if project_id is None:
            entity = self.projects.create(record)
        else:
            entity = self.projects.update(project_id, record)
        self.cache.invalidate(PROJECTS)
        return entity


@dataclass
class DeleteProjectUseCase:
    projects: ProjectRepository
    cache: RecordCache

    def execute(self, project_id: str) -> None:
        if not self.projects.delete(project_id):
            raise RecordNotFoundError(f"Project {project_id} not found")
        self.cache.invalidate(PROJECTS)
