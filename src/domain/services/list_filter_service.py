from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from src.domain.entities.contact import ContactEntity
from src.domain.entities.project import ProjectEntity

ALL = "all"
CONTACT_STATUS_FILTERS = ("all", "unread", "read")

SKILL_CATEGORIES: dict[str, tuple[str, ...]] = {
    "frontend": (
        "React", "Next.js", "TypeScript", "JavaScript", "HTML", "CSS",
        "Tailwind", "Vue", "Angular", "Svelte",
    ),
    "backend": (
        "Node.js", "Python", "Java", "PHP", "Express", "Django",
        "Spring", "Laravel", "FastAPI", "Go",
    ),
    "database": ("PostgreSQL", "MySQL", "MongoDB", "Redis", "Supabase", "Firebase", "SQLite"),
    "tools": ("Git", "Docker", "AWS", "Linux", "Figma", "VS Code", "Vercel", "Netlify"),
}

# Free-text fields checked on any record; missing attributes are ignored
_TEXT_FIELDS = ("title", "name", "description", "subject", "message", "email")
_TAG_FIELDS = ("stack", "skills")


def _tags_of(record: Any) -> list[str]:
    for attr in _TAG_FIELDS:
        tags = getattr(record, attr, None)
        if isinstance(tags, (list, tuple)):
            return [t for t in tags if isinstance(t, str) and t.strip()]
    return []


class ListFilterService:
    """In-memory search and filtering over record lists.

    Every collection is fetched whole and narrowed here; record counts are
    expected in the tens to low hundreds.
    """

    # Case-insensitive substring over text fields and tags; "" matches all
    @staticmethod
    def matches_search(record: Any, term: str | None) -> bool:
        if not term:
            return True
        needle = term.lower()
        for attr in _TEXT_FIELDS:
            value = getattr(record, attr, None)
            if isinstance(value, str) and needle in value.lower():
                return True
        return any(needle in tag.lower() for tag in _tags_of(record))

    # Exact, case-insensitive match against at least one tag; "all" disables
    @staticmethod
    def matches_tag(record: Any, tag: str | None) -> bool:
        if not tag or tag == ALL:
            return True
        wanted = tag.lower()
        return any(t.lower() == wanted for t in _tags_of(record))

    @staticmethod
    def matches_status(contact: ContactEntity, status: str | None) -> bool:
        if not status or status == ALL:
            return True
        if status == "read":
            return contact.read
        if status == "unread":
            return not contact.read
        raise ValueError(f"Unsupported status filter: {status}")

    @staticmethod
    def filter_projects(
        projects: Sequence[ProjectEntity], search: str | None = "", tech: str | None = ALL
    ) -> list[ProjectEntity]:
        return [
            p
            for p in projects
            if ListFilterService.matches_search(p, search) and ListFilterService.matches_tag(p, tech)
        ]

    @staticmethod
    def filter_contacts(
        contacts: Sequence[ContactEntity], search: str | None = "", status: str | None = ALL
    ) -> list[ContactEntity]:
        return [
            c
            for c in contacts
            if ListFilterService.matches_search(c, search)
            and ListFilterService.matches_status(c, status)
        ]

    # Sorted, de-duplicated union of every tag, case kept as stored
    @staticmethod
    def derive_tag_universe(records: Iterable[Any]) -> list[str]:
        universe: set[str] = set()
        for record in records:
            universe.update(_tags_of(record))
        return sorted(universe)

    @staticmethod
    def categorize_skills(skills: Sequence[str] | None) -> dict[str, list[str]]:
        skills = list(skills or [])
        return {
            category: [s for s in skills if s in members]
            for category, members in SKILL_CATEGORIES.items()
        }

    @staticmethod
    def contact_stats(contacts: Sequence[ContactEntity]) -> dict[str, int]:
        return {
            "total": len(contacts),
            "unread": sum(1 for c in contacts if not c.read),
            "replied": sum(1 for c in contacts if c.replied),
        }

    # "React, Go ," -> ["React", "Go"]
    @staticmethod
    def parse_tag_list(raw: str | Sequence[str] | None) -> list[str]:
        if raw is None:
            return []
        parts = raw.split(",") if isinstance(raw, str) else list(raw)
        return [p.strip() for p in parts if isinstance(p, str) and p.strip()]
