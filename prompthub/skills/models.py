"""Skill records shared by the store, scanner and installers"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal, Optional

ProtocolType = Literal["skill", "mcp", "claude-code"]

SkillCategory = Literal[
    "general", "office", "dev", "ai", "data",
    "management", "deploy", "design", "security", "meta",
]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Skill:
    """A persisted skill.

    ``instructions`` is an alias of ``content``: both always hold the same
    SKILL.md text.
    """

    id: str
    name: str
    description: Optional[str] = None
    content: str = ""
    protocol_type: ProtocolType = "mcp"
    version: str = "1.0.0"
    author: str = "User"
    tags: list[str] = field(default_factory=list)
    is_favorite: bool = False
    source_url: Optional[str] = None
    icon_url: Optional[str] = None
    icon_emoji: Optional[str] = None
    category: SkillCategory = "general"
    is_builtin: bool = False
    registry_slug: Optional[str] = None
    content_url: Optional[str] = None
    prerequisites: Optional[Any] = None
    compatibility: Optional[Any] = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @property
    def instructions(self) -> str:
        return self.content

    @instructions.setter
    def instructions(self, value: str) -> None:
        self.content = value

    def has_tag(self, tag: str) -> bool:
        return tag in set(self.tags)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "content": self.content,
            "instructions": self.content,
            "protocol_type": self.protocol_type,
            "version": self.version,
            "author": self.author,
            "tags": list(self.tags),
            "is_favorite": self.is_favorite,
            "source_url": self.source_url,
            "icon_url": self.icon_url,
            "icon_emoji": self.icon_emoji,
            "category": self.category,
            "is_builtin": self.is_builtin,
            "registry_slug": self.registry_slug,
            "content_url": self.content_url,
            "prerequisites": self.prerequisites,
            "compatibility": self.compatibility,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


@dataclass
class ScannedSkill:
    """A SKILL.md found on disk during a preview scan (never persisted)"""
    name: str
    description: str
    version: str
    author: str
    tags: list[str]
    instructions: str
    file_path: str  # first SKILL.md found for this name
    platforms: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "version": self.version,
            "author": self.author,
            "tags": list(self.tags),
            "instructions": self.instructions,
            "file_path": self.file_path,
            "platforms": list(self.platforms),
        }


@dataclass
class ScanResult:
    """Outcome of an importing scan.

    ``skipped`` counts candidates rejected because a skill with the same name
    already exists; ``failed`` counts every other per-candidate error.
    """
    imported: int = 0
    skipped: int = 0
    failed: int = 0
    skill_ids: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.imported + self.skipped + self.failed
