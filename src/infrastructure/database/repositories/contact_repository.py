from __future__ import annotations

import itertools
import os
from dataclasses import asdict
from datetime import UTC, datetime
from typing import Any

from supabase import Client

from src.domain.entities.contact import DEFAULT_SUBJECT, ContactEntity
from src.domain.errors import BackendError, MalformedRecordError, RecordNotFoundError
from src.infrastructure.database.postgres_client import get_postgres_client
from src.infrastructure.database.repositories.rows import (
    backend_message,
    map_rows,
    optional_str,
    require_id,
    require_str,
    timestamp,
)
from src.infrastructure.database.supabase_client import SUPABASE_NOT_CONFIGURED

TABLE = "contacts"
INSERT_FIELDS = ("name", "email", "subject", "message", "read", "replied", "created_at")
STATUS_FIELDS = ("read", "replied")

# module-level in-memory store for disabled mode
_MEM_CONTACTS: dict[str, ContactEntity] = {}
_IDS = itertools.count(1)


class ContactRepository:
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

    def _row_to_entity(self, row: dict) -> ContactEntity:
        created_at = timestamp(row.get("created_at"))
        if created_at is None:
            raise MalformedRecordError(f"row {row.get('id')!r}: missing created_at")
        return ContactEntity(
            id=require_id(row),
            name=require_str(row, "name"),
            email=require_str(row, "email"),
            subject=optional_str(row, "subject", DEFAULT_SUBJECT) or DEFAULT_SUBJECT,
            message=require_str(row, "message"),
            created_at=created_at,
            read=bool(row.get("read", False)),
            replied=bool(row.get("replied", False)),
        )

    def list_all(self) -> list[ContactEntity]:
        """All submissions, newest first."""
        # PostgreSQL mode
        if self.use_local_db and self.pg_client:
            rows = self.pg_client.fetch_all(f"SELECT * FROM {TABLE} ORDER BY created_at DESC")
            return map_rows(rows, self._row_to_entity, TABLE)

        # In-memory mode
        if self.in_memory:
            return sorted(_MEM_CONTACTS.values(), key=lambda c: c.created_at, reverse=True)

        # Supabase mode
        try:  # pragma: no cover - network
            res = self.client.table(TABLE).select("*").order("created_at", desc=True).execute()
        except Exception as exc:  # pragma: no cover - network
            raise BackendError(backend_message(exc)) from exc
        return map_rows(res.data or [], self._row_to_entity, TABLE)  # pragma: no cover

    def get(self, contact_id: str) -> ContactEntity | None:
        if self.use_local_db and self.pg_client:
            row = self.pg_client.fetch_one(f"SELECT * FROM {TABLE} WHERE id = %s", (contact_id,))
            return self._row_to_entity(row) if row else None

        if self.in_memory:
            return _MEM_CONTACTS.get(contact_id)

        try:  # pragma: no cover - network
            res = self.client.table(TABLE).select("*").eq("id", contact_id).limit(1).execute()
        except Exception as exc:  # pragma: no cover - network
            raise BackendError(backend_message(exc)) from exc
        rows = res.data or []  # pragma: no cover
        return self._row_to_entity(rows[0]) if rows else None  # pragma: no cover

    def create(self, data: dict[str, Any]) -> ContactEntity:
        data = {k: v for k, v in data.items() if k in INSERT_FIELDS}
        data.setdefault("created_at", datetime.now(UTC))

        if self.use_local_db and self.pg_client:
            return self._row_to_entity(self.pg_client.insert(TABLE, data))

        if self.in_memory:
            contact_id = f"contact_{next(_IDS)}"
            entity = self._row_to_entity({**data, "id": contact_id})
            _MEM_CONTACTS[contact_id] = entity
            return entity

        payload = {**data, "created_at": data["created_at"].isoformat()}
        try:  # pragma: no cover - network
            res = self.client.table(TABLE).insert(payload).execute()
        except Exception as exc:  # pragma: no cover - network
            raise BackendError(backend_message(exc)) from exc
        return self._row_to_entity(res.data[0])  # pragma: no cover

    def update_status(self, contact_id: str, fields: dict[str, bool]) -> ContactEntity:
        """Write the ``read``/``replied`` flags and return the stored row."""
        fields = {k: bool(v) for k, v in fields.items() if k in STATUS_FIELDS}

        if self.use_local_db and self.pg_client:
            if fields and self.pg_client.update(TABLE, contact_id, fields) == 0:
                raise RecordNotFoundError(f"Contact {contact_id} not found")
            updated = self.get(contact_id)
            if updated is None:
                raise RecordNotFoundError(f"Contact {contact_id} not found")
            return updated

        if self.in_memory:
            current = _MEM_CONTACTS.get(contact_id)
            if current is None:
                raise RecordNotFoundError(f"Contact {contact_id} not found")
            updated = self._row_to_entity({**asdict(current), **fields})
            _MEM_CONTACTS[contact_id] = updated
            return updated

        try:  # pragma: no cover - network
            res = self.client.table(TABLE).update(fields).eq("id", contact_id).execute()
        except Exception as exc:  # pragma: no cover - network
            raise BackendError(backend_message(exc)) from exc
        rows = res.data or []  # pragma: no cover
        if not rows:  # pragma: no cover
            raise RecordNotFoundError(f"Contact {contact_id} not found")
        return self._row_to_entity(rows[0])  # pragma: no cover

    def delete(self, contact_id: str) -> bool:
        if self.use_local_db and self.pg_client:
            return self.pg_client.execute(f"DELETE FROM {TABLE} WHERE id = %s", (contact_id,)) > 0

        if self.in_memory:
            return _MEM_CONTACTS.pop(contact_id, None) is not None

        try:  # pragma: no cover - network
            res = self.client.table(TABLE).delete().eq("id", contact_id).execute()
        except Exception as exc:  # pragma: no cover - network
            raise BackendError(backend_message(exc)) from exc
        return bool(res.data)  # pragma: no cover
