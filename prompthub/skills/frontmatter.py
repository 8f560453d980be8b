"""SKILL.md frontmatter parsing.

A deliberately small parser for the ``key: value`` block fenced by ``---``
lines at the top of a SKILL.md document. It does not implement YAML: no nested
lists, no multi-line scalars, no escapes beyond stripping surrounding quotes.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional

FRONTMATTER_RE = re.compile(r"^---\s*\n(.*?)\n---\s*\n?", re.DOTALL)

SCALAR_KEYS = ("name", "description", "version", "author", "license", "compatibility")

METADATA_INDENT = "  "


@dataclass
class SkillFrontmatter:
    name: str = ""
    description: Optional[str] = None
    version: Optional[str] = None
    author: Optional[str] = None
    license: Optional[str] = None
    compatibility: Optional[str] = None
    tags: Optional[list[str]] = None
    metadata: Optional[dict[str, str]] = None


@dataclass
class ParsedSkillMd:
    frontmatter: SkillFrontmatter = field(default_factory=SkillFrontmatter)
    body: str = ""
    raw: str = ""


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _parse_list(value: str) -> list[str]:
    items = (item.strip().strip("'\"") for item in value[1:-1].split(","))
    return [item for item in items if item]


def split_frontmatter(content: str) -> tuple[Optional[str], str]:
    """Return (frontmatter block or None, body) for a SKILL.md document"""
    match = FRONTMATTER_RE.match(content)
    if not match:
        return None, content.strip()
    return match.group(1), content[match.end():].strip()


def parse_skill_md(content: str) -> ParsedSkillMd:
    """Parse SKILL.md content into frontmatter fields and body text.

    Parsing never fails: a document without a fence yields an empty name and
    the whole (stripped) document as the body.
    """
    block, body = split_frontmatter(content or "")
    if block is None:
        return ParsedSkillMd(frontmatter=SkillFrontmatter(), body=body, raw=content)

    frontmatter = SkillFrontmatter()
    metadata: dict[str, str] = {}
    in_metadata = False

    for line in block.split("\n"):
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("#"):
            continue

        if trimmed == "metadata:":
            in_metadata = True
            continue

        key, sep, value = trimmed.partition(":")
        if not sep:
            continue
        key = key.strip()
        value = value.strip()

        indented = line.startswith(METADATA_INDENT)
        if in_metadata and indented:
            metadata[key] = _unquote(value)
            continue
        if not indented:
            in_metadata = False

        value = _unquote(value)

        if value.startswith("[") and value.endswith("]"):
            # Only tags materialize a list; other bracketed keys are dropped
            if key == "tags":
                frontmatter.tags = _parse_list(value)
            continue

        if key in SCALAR_KEYS:
            setattr(frontmatter, key, value)
        elif key == "tags" and frontmatter.tags is None:
            frontmatter.tags = [t.strip() for t in value.split(",") if t.strip()]

    if metadata:
        frontmatter.metadata = metadata

    return ParsedSkillMd(frontmatter=frontmatter, body=body, raw=content)
