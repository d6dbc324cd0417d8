from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AdminSession:
    access_token: str
    user_id: str
    email: str | None = None
    expires_at: datetime | None = None
