from __future__ import annotations

import os
from dataclasses import asdict
from typing import Any

from supabase import Client

from src.domain.entities.profile import SOCIAL_KEYS, ProfileEntity
from src.domain.errors import BackendError, MalformedRecordError, RecordNotFoundError
from src.infrastructure.database.postgres_client import get_postgres_client
from src.infrastructure.database.repositories.rows import (
    backend_message,
    optional_str,
    require_id,
    tag_list,
)
from src.infrastructure.database.supabase_client import SUPABASE_NOT_CONFIGURED

TABLE = "profile"
EDITABLE_FIELDS = ("name", "bio", "location", "skills", "socials")

# the profile is a singleton; disabled mode keeps at most one row here
_MEM_PROFILE: dict[str, ProfileEntity] = {}


class ProfileRepository:
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

    def _row_to_entity(self, row: dict) -> ProfileEntity:
        """Convert database row to ProfileEntity."""
        socials = row.get("socials") or {}
        if not isinstance(socials, dict):
            raise MalformedRecordError(f"row {row.get('id')!r}: socials must be an object")
        return ProfileEntity(
            id=require_id(row),
            name=optional_str(row, "name", "") or "",
            bio=optional_str(row, "bio", "") or "",
            location=optional_str(row, "location", "") or "",
            skills=tag_list(row.get("skills")),
            socials={k: socials.get(k) or None for k in SOCIAL_KEYS if k in socials},
        )

    def get_singleton(self) -> ProfileEntity | None:
        """Return the first profile row, or None before the first save."""
        # PostgreSQL mode
        if self.use_local_db and self.pg_client:
            row = self.pg_client.fetch_one(f"SELECT * FROM {TABLE} LIMIT 1")
            return self._row_to_entity(row) if row else None

        # In-memory mode
        if self.in_memory:
            return next(iter(_MEM_PROFILE.values()), None)

        # Supabase mode
        try:  # pragma: no cover - network
            res = self.client.table(TABLE).select("*").limit(1).execute()
        except Exception as exc:  # pragma: no cover - network
            raise BackendError(backend_message(exc)) from exc
        rows = res.data or []  # pragma: no cover
        return self._row_to_entity(rows[0]) if rows else None  # pragma: no cover

    def create(self, data: dict[str, Any]) -> ProfileEntity:
        data = {k: v for k, v in data.items() if k in EDITABLE_FIELDS}

        if self.use_local_db and self.pg_client:
            return self._row_to_entity(self.pg_client.insert(TABLE, data))

        if self.in_memory:
            entity = self._row_to_entity({**data, "id": "profile_1"})
            _MEM_PROFILE.clear()
            _MEM_PROFILE[entity.id] = entity
            return entity

        try:  # pragma: no cover - network
            res = self.client.table(TABLE).insert(data).execute()
        except Exception as exc:  # pragma: no cover - network
            raise BackendError(backend_message(exc)) from exc
        return self._row_to_entity(res.data[0])  # pragma: no cover

    def update(self, profile_id: str, data: dict[str, Any]) -> ProfileEntity:
        data = {k: v for k, v in data.items() if k in EDITABLE_FIELDS}

        if self.use_local_db and self.pg_client:
            if data and self.pg_client.update(TABLE, profile_id, data) == 0:
                raise RecordNotFoundError(f"Profile {profile_id} not found")
            row = self.pg_client.fetch_one(f"SELECT * FROM {TABLE} WHERE id = %s", (profile_id,))
            if row is None:
                raise RecordNotFoundError(f"Profile {profile_id} not found")
            return self._row_to_entity(row)

        if self.in_memory:
            current = _MEM_PROFILE.get(profile_id)
            if current is None:
                raise RecordNotFoundError(f"Profile {profile_id} not found")
            updated = self._row_to_entity({**asdict(current), **data})
            _MEM_PROFILE[profile_id] = updated
            return updated

        try:  # pragma: no cover - network
            res = self.client.table(TABLE).update(data).eq("id", profile_id).execute()
        except Exception as exc:  # pragma: no cover - network
            raise BackendError(backend_message(exc)) from exc
        rows = res.data or []  # pragma: no cover
        if not rows:  # pragma: no cover
            raise RecordNotFoundError(f"Profile {profile_id} not found")
        return self._row_to_entity(rows[0])  # pragma: no cover
