from __future__ import annotations

import itertools
import os
from dataclasses import asdict
from datetime import UTC, datetime
from typing import Any

from supabase import Client

from src.domain.entities.project import ProjectEntity
from src.domain.errors import BackendError, RecordNotFoundError
from src.infrastructure.database.postgres_client import get_postgres_client
from src.infrastructure.database.repositories.rows import (
    backend_message,
    map_rows,
    optional_str,
    require_id,
    require_str,
    tag_list,
    timestamp,
)
from src.infrastructure.database.supabase_client import SUPABASE_NOT_CONFIGURED

TABLE = "projects"
EDITABLE_FIELDS = ("title", "description", "stack", "github", "live", "image")

# module-level in-memory store for disabled mode
_MEM_PROJECTS: dict[str, ProjectEntity] = {}
_IDS = itertools.count(1)


class ProjectRepository:
    def __init__(self, client: Client | None) -> None:
        self.client = client
        self.disabled = os.getenv("SUPABASE_DISABLED", "0") == "1"
        self.use_local_db = os.getenv("USE_LOCAL_DB", "0") == "1"
        self.pg_client = get_postgres_client() if self.use_local_db else None
        if client is None and not (self.disabled or self.use_local_db):
            raise BackendError(SUPABASE_NOT_CONFIGURED)

    @property
    def in_memory(self) -> bool:
        return self.disabled

    def _row_to_entity(self, row: dict) -> ProjectEntity:
        return ProjectEntity(
            id=require_id(row),
            title=require_str(row, "title"),
            description=optional_str(row, "description", "") or "",
            stack=tag_list(row.get("stack")),
            github=optional_str(row, "github"),
            live=optional_str(row, "live"),
            image=optional_str(row, "image"),
            created_at=timestamp(row.get("created_at")),
        )

    def list_all(self) -> list[ProjectEntity]:
        # PostgreSQL mode
        if self.use_local_db and self.pg_client:
            rows = self.pg_client.fetch_all(f"SELECT * FROM {TABLE} ORDER BY created_at")
            return map_rows(rows, self._row_to_entity, TABLE)

        # In-memory mode
        if self.in_memory:
            return list(_MEM_PROJECTS.values())

        # Supabase mode
        try:  # pragma: no cover - network
            res = self.client.table(TABLE).select("*").execute()
        except Exception as exc:  # pragma: no cover - network
            raise BackendError(backend_message(exc)) from exc
        return map_rows(res.data or [], self._row_to_entity, TABLE)  # pragma: no cover

    def get(self, project_id: str) -> ProjectEntity | None:
        if self.use_local_db and self.pg_client:
            row = self.pg_client.fetch_one(f"SELECT * FROM {TABLE} WHERE id = %s", (project_id,))
            return self._row_to_entity(row) if row else None

        if self.in_memory:
            return _MEM_PROJECTS.get(project_id)

        try:  # pragma: no cover - network
            res = self.client.table(TABLE).select("*").eq("id", project_id).limit(1).execute()
        except Exception as exc:  # pragma: no cover - network
            raise BackendError(backend_message(exc)) from exc
        rows = res.data or []  # pragma: no cover
        return self._row_to_entity(rows[0]) if rows else None  # pragma: no cover

    def create(self, data: dict[str, Any]) -> ProjectEntity:
        data = {k: v for k, v in data.items() if k in EDITABLE_FIELDS}

        if self.use_local_db and self.pg_client:
            return self._row_to_entity(self.pg_client.insert(TABLE, data))

        if self.in_memory:
            project_id = f"proj_{next(_IDS)}"
            entity = self._row_to_entity(
                {**data, "id": project_id, "created_at": datetime.now(UTC)}
            )
            _MEM_PROJECTS[project_id] = entity
            return entity

        try:  # pragma: no cover - network
            res = self.client.table(TABLE).insert(data).execute()
        except Exception as exc:  # pragma: no cover - network
            raise BackendError(backend_message(exc)) from exc
        return self._row_to_entity(res.data[0])  # pragma: no cover

    def update(self, project_id: str, data: dict[str, Any]) -> ProjectEntity:
        """Apply ``data`` and return the row as the backend now holds it."""
        data = {k: v for k, v in data.items() if k in EDITABLE_FIELDS}

        if self.use_local_db and self.pg_client:
            if data and self.pg_client.update(TABLE, project_id, data) == 0:
                raise RecordNotFoundError(f"Project {project_id} not found")
            updated = self.get(project_id)
            if updated is None:
                raise RecordNotFoundError(f"Project {project_id} not found")
            return updated

        if self.in_memory:
            current = _MEM_PROJECTS.get(project_id)
            if current is None:
                raise RecordNotFoundError(f"Project {project_id} not found")
            updated = self._row_to_entity({**asdict(current), **data})
            _MEM_PROJECTS[project_id] = updated
            return updated

        try:  # pragma: no cover - network
            res = self.client.table(TABLE).update(data).eq("id", project_id).execute()
        except Exception as exc:  # pragma: no cover - network
            raise BackendError(backend_message(exc)) from exc
        rows = res.data or []  # pragma: no cover
        if not rows:  # pragma: no cover
            raise RecordNotFoundError(f"Project {project_id} not found")
        return self._row_to_entity(rows[0])  # pragma: no cover

    def delete(self, project_id: str) -> bool:
        if self.use_local_db and self.pg_client:
            return self.pg_client.execute(f"DELETE FROM {TABLE} WHERE id = %s", (project_id,)) > 0

        if self.in_memory:
            return _MEM_PROJECTS.pop(project_id, None) is not None

        try:  # pragma: no cover - network
            res = self.client.table(TABLE).delete().eq("id", project_id).execute()
        except Exception as exc:  # pragma: no cover - network
            raise BackendError(backend_message(exc)) from exc
        return bool(res.data)  # pragma: no cover
