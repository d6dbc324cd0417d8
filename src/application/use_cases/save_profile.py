from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from src.application.services.record_cache import PROFILE, RecordCache
from src.domain.entities.profile import SOCIAL_KEYS, ProfileEntity
from src.domain.services.list_filter_service import ListFilterService
from src.infrastructure.database.repositories.profile_repository import ProfileRepository


@dataclass
class SaveProfileUseCase:
    """Create the profile on first save, update the existing row afterwards."""

    profiles: ProfileRepository
    cache: RecordCache

    def execute(
        self,
        *,
        name: str,
        bio: str = "",
        location: str = "",
        skills: str | list[str] | None = None,
        socials: dict[str, Any] | None = None,
    ) -> ProfileEntity:
        data = {
            "name": name.strip(),
            "bio": bio.strip(),
            "location": location.strip(),
            "skills": ListFilterService.parse_tag_list(skills),
            "socials": {
                k: (v.strip() or None) if isinstance(v, str) else None
                for k, v in (socials or {}).items()
                if k in SOCIAL_KEYS
            },
        }
        existing = self.profiles.get_singleton()
        if existing is None:
            entity = self.profiles.create(data)
        else:
            entity = self.profiles.update(existing.id, data)
        self.cache.invalidate(PROFILE)
        return entity
