from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from supabase import Client

from src.domain.errors import BackendError
from src.infrastructure.database.repositories.rows import backend_message
from src.infrastructure.database.supabase_client import SUPABASE_NOT_CONFIGURED

LOCAL_URL_PREFIX = "/local-storage"


@dataclass
class StorageResult:
    path: str
    content_type: str
    size: int
    url: str


class SupabaseStorage:
    """Object store for project images, with a local directory fallback."""

    def __init__(self, client: Client | None) -> None:
        self.client = client
        self.bucket = os.getenv("SUPABASE_STORAGE_BUCKET", "project-images")
        self.disabled = os.getenv("SUPABASE_DISABLED", "0") == "1"
        self.local_dir = Path(os.getenv("SUPABASE_STORAGE_LOCAL_DIR", ".local_storage"))
        if client is None and not self.disabled:
            raise BackendError(SUPABASE_NOT_CONFIGURED)

    @property
    def local(self) -> bool:
        return self.disabled

    def upload(self, path: str, data: bytes, content_type: str) -> StorageResult:
        if self.local:
            full_path = self.local_dir / path
            full_path.parent.mkdir(parents=True, exist_ok=True)
            full_path.write_bytes(data)
        else:
            try:  # pragma: no cover - network
                self.client.storage.from_(self.bucket).upload(
                    path=path,
                    file=data,
                    file_options={"content-type": content_type},
                )
            except Exception as exc:  # pragma: no cover - network
                raise BackendError(backend_message(exc)) from exc
        return StorageResult(
            path=path, content_type=content_type, size=len(data), url=self.get_public_url(path)
        )

    def get_public_url(self, path: str) -> str:
        if self.local:
            return f"{LOCAL_URL_PREFIX}/{path}"
        return self.client.storage.from_(self.bucket).get_public_url(path)  # pragma: no cover - network
