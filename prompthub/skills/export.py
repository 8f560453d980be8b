"""Export skills as SKILL.md text or JSON, and import them back from JSON"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from prompthub.errors import SkillImportError

from .frontmatter import split_frontmatter
from .models import Skill

if TYPE_CHECKING:
    from prompthub.storage.skill_store import SkillStore

logger = logging.getLogger(__name__)

EXPORT_COMPATIBILITY = "prompthub"
JSON_FORMAT_VERSION = "1.0"


def export_as_skill_md(skill: Skill) -> str:
    """Render a skill as a Claude-compatible SKILL.md document.

    If the stored instructions already carry a frontmatter block it is replaced
    by the one generated here.
    """
    lines = ["---", f"name: {skill.name}"]
    if skill.description:
        lines.append(f"description: {skill.description}")
    if skill.version:
        lines.append(f"version: {skill.version}")
    if skill.author:
        lines.append(f"author: {skill.author}")
    if skill.tags:
        lines.append(f"tags: [{', '.join(skill.tags)}]")
    lines.append(f"compatibility: {EXPORT_COMPATIBILITY}")
    lines.append("---")
    lines.append("")

    block, body = split_frontmatter(skill.instructions or "")
    if block is None:
        body = skill.instructions or ""
    return "\n".join(lines) + body


def export_as_json(skill: Skill) -> str:
    data = {
        "name": skill.name,
        "description": skill.description or "",
        "version": skill.version or "1.0.0",
        "author": skill.author or "",
        "tags": list(skill.tags or []),
        "instructions": skill.instructions or "",
        "protocol_type": skill.protocol_type or "skill",
        "exported_at": datetime.now(timezone.utc).isoformat(),
        "format_version": JSON_FORMAT_VERSION,
    }
    return json.dumps(data, indent=2, ensure_ascii=False)


def import_from_json(json_content: str, store: "SkillStore") -> str:
    """Create a skill from exported JSON and return its id"""
    try:
        data = json.loads(json_content)
    except ValueError as e:
        raise SkillImportError(f"Invalid skill JSON: {e}") from e

    if not isinstance(data, dict) or not data.get("name"):
        raise SkillImportError("Invalid skill JSON: missing name")

    skill = store.create(
        name=data["name"],
        description=data.get("description") or "",
        version=data.get("version") or "1.0.0",
        author=data.get("author") or "Imported",
        content=data.get("instructions") or "",
        protocol_type=data.get("protocol_type") or "skill",
        tags=data.get("tags") or ["imported"],
        is_favorite=False,
    )
    logger.info(f"Imported skill {skill.name} from JSON")
    return skill.id
