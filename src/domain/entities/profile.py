from __future__ import annotations

from dataclasses import dataclass, field

SOCIAL_KEYS = ("github", "twitter", "email")


@dataclass(frozen=True)
class ProfileEntity:
    id: str
    name: str
    bio: str = ""
    location: str = ""
    skills: list[str] = field(default_factory=list)  # order preserved, duplicates allowed
    socials: dict[str, str | None] = field(default_factory=dict)  # github / twitter / email
