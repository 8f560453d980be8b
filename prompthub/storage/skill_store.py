"""SQLite persistence for skills."""

from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Any, Optional
from uuid import uuid4

from prompthub.errors import DuplicateSkillError
from prompthub.skills.models import Skill, utcnow

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS skills (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    description TEXT,
    content TEXT,
    protocol_type TEXT NOT NULL DEFAULT 'mcp',
    version TEXT,
    author TEXT,
    tags TEXT NOT NULL DEFAULT '[]',
    is_favorite INTEGER NOT NULL DEFAULT 0,
    source_url TEXT,
    icon_url TEXT,
    icon_emoji TEXT,
    category TEXT NOT NULL DEFAULT 'general',
    is_builtin INTEGER NOT NULL DEFAULT 0,
    registry_slug TEXT,
    content_url TEXT,
    prerequisites TEXT,
    compatibility TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_skills_name ON skills (name COLLATE NOCASE);
"""

# Plain columns that map 1:1 onto Skill attributes
_TEXT_FIELDS = (
    "name", "description", "protocol_type", "version", "author",
    "source_url", "icon_url", "icon_emoji", "category", "registry_slug",
    "content_url",
)
_BOOL_FIELDS = ("is_favorite", "is_builtin")
_JSON_FIELDS = ("prerequisites", "compatibility")

UPDATABLE_FIELDS = frozenset(
    _TEXT_FIELDS + _BOOL_FIELDS + _JSON_FIELDS + ("tags", "content", "instructions")
)


class SkillStore:
    """CRUD access to the ``skills`` table.

    Names are unique case-insensitively, but only when a skill is created;
    renaming through :meth:`update` is not checked.
    """

    def __init__(self, db_path: Path | str = ":memory:"):
        self.db_path = str(db_path)
        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(self.db_path)
        self._conn.row_factory = sqlite3.Row
        self._conn.executescript(SCHEMA)
        self._conn.commit()

    def close(self) -> None:
        self._conn.close()

    def get_by_name(self, name: str) -> Skill | None:
        row = self._conn.execute(
            "SELECT * FROM skills WHERE LOWER(name) = LOWER(?)", (name,)
        ).fetchone()
        return self._row_to_skill(row) if row else None

    def get_by_id(self, skill_id: str) -> Skill | None:
        row = self._conn.execute("SELECT * FROM skills WHERE id = ?", (skill_id,)).fetchone()
        return self._row_to_skill(row) if row else None

    def get_all(self) -> list[Skill]:
        rows = self._conn.execute("SELECT * FROM skills ORDER BY updated_at DESC").fetchall()
        return [self._row_to_skill(row) for row in rows]

    def create(self, name: str, **fields: Any) -> Skill:
        """Insert a new skill. ``content`` wins over ``instructions`` if both are given."""
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise TypeError(f"Unknown skill fields: {', '.join(sorted(unknown))}")

        if self.get_by_name(name):
            raise DuplicateSkillError(name)

        skill_id = str(uuid4())
        now = utcnow().isoformat()
        content = fields.get("content") or fields.get("instructions") or None

        self._conn.execute(
            """
            INSERT INTO skills (
                id, name, description, content, protocol_type, version, author,
                tags, is_favorite, source_url, icon_url, icon_emoji, category,
                is_builtin, registry_slug, content_url, prerequisites,
                compatibility, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                skill_id,
                name,
                fields.get("description") or None,
                content,
                fields.get("protocol_type") or "mcp",
                fields.get("version") or "1.0.0",
                fields.get("author") or "User",
                self._dump_tags(fields.get("tags")),
                1 if fields.get("is_favorite") else 0,
                fields.get("source_url") or None,
                fields.get("icon_url") or None,
                fields.get("icon_emoji") or None,
                fields.get("category") or "general",
                1 if fields.get("is_builtin") else 0,
                fields.get("registry_slug") or None,
                fields.get("content_url") or None,
                self._dump_optional(fields.get("prerequisites")),
                self._dump_optional(fields.get("compatibility")),
                now,
                now,
            ),
        )
        self._conn.commit()
        logger.debug(f"Created skill {name} ({skill_id})")
        return self.get_by_id(skill_id)

    def update(self, skill_id: str, **fields: Any) -> Skill | None:
        """Apply a partial update; only the given fields change.

        ``instructions`` takes priority over ``content`` and both end up equal.
        Returns the updated skill, or None if the id is unknown.
        """
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise TypeError(f"Unknown skill fields: {', '.join(sorted(unknown))}")

        if self.get_by_id(skill_id) is None:
            return None

        assignments = ["updated_at = ?"]
        values: list[Any] = [utcnow().isoformat()]

        for key in _TEXT_FIELDS:
            if key in fields:
                assignments.append(f"{key} = ?")
                values.append(fields[key])
        for key in _BOOL_FIELDS:
            if key in fields:
                assignments.append(f"{key} = ?")
                values.append(1 if fields[key] else 0)
        for key in _JSON_FIELDS:
            if key in fields:
                assignments.append(f"{key} = ?")
                values.append(self._dump_optional(fields[key]))
        if "tags" in fields:
            assignments.append("tags = ?")
            values.append(self._dump_tags(fields["tags"]))

        if fields.get("instructions") is not None:
            assignments.append("content = ?")
            values.append(fields["instructions"])
        elif fields.get("content") is not None:
            assignments.append("content = ?")
            values.append(fields["content"])

        values.append(skill_id)
        self._conn.execute(
            f"UPDATE skills SET {', '.join(assignments)} WHERE id = ?", values
        )
        self._conn.commit()
        return self.get_by_id(skill_id)

    def delete(self, skill_id: str) -> bool:
        cursor = self._conn.execute("DELETE FROM skills WHERE id = ?", (skill_id,))
        self._conn.commit()
        return cursor.rowcount > 0

    def search(self, query: str) -> list[Skill]:
        """Case-insensitive substring match over name, description and tags"""
        needle = query.strip().lower()
        if not needle:
            return self.get_all()
        escaped = needle.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        pattern = f"%{escaped}%"
        rows = self._conn.execute(
            """
            SELECT * FROM skills
            WHERE LOWER(name) LIKE ? ESCAPE '\\'
               OR LOWER(COALESCE(description, '')) LIKE ? ESCAPE '\\'
               OR LOWER(tags) LIKE ? ESCAPE '\\'
            ORDER BY updated_at DESC
            """,
            (pattern, pattern, pattern),
        ).fetchall()
        return [self._row_to_skill(row) for row in rows]

    @staticmethod
    def _dump_tags(tags: Any) -> str:
        """A comma separated string is split like a frontmatter ``tags:`` line"""
        if isinstance(tags, str):
            tags = [t.strip() for t in tags.split(",")]
        return json.dumps([str(t) for t in (tags or []) if t])

    @staticmethod
    def _dump_optional(value: Any) -> Optional[str]:
        return json.dumps(value) if value is not None else None

    @staticmethod
    def _row_to_skill(row: sqlite3.Row) -> Skill:
        return Skill(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            content=row["content"] or "",
            protocol_type=row["protocol_type"],
            version=row["version"] or "1.0.0",
            author=row["author"] or "User",
            tags=json.loads(row["tags"] or "[]"),
            is_favorite=row["is_favorite"] == 1,
            source_url=row["source_url"],
            icon_url=row["icon_url"],
            icon_emoji=row["icon_emoji"],
            category=row["category"] or "general",
            is_builtin=row["is_builtin"] == 1,
            registry_slug=row["registry_slug"],
            content_url=row["content_url"],
            prerequisites=json.loads(row["prerequisites"]) if row["prerequisites"] else None,
            compatibility=json.loads(row["compatibility"]) if row["compatibility"] else None,
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
