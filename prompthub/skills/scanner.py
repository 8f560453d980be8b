"""Discovery of SKILL.md skills already present in AI tool directories"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from prompthub.errors import DuplicateSkillError

from .frontmatter import parse_skill_md
from .install import read_manifest
from .models import ScannedSkill, ScanResult
from .platforms import SKILL_PLATFORMS, SkillPlatform, get_platform_skills_dir

if TYPE_CHECKING:
    from prompthub.storage.skill_store import SkillStore

logger = logging.getLogger(__name__)

DEFAULT_TAGS = ("local", "discovered")


@dataclass
class ScanLocation:
    path: Path
    platform: SkillPlatform


@dataclass
class LocalSkill:
    """Metadata merged from SKILL.md frontmatter, manifest.json and defaults"""
    name: str
    description: str
    version: str
    author: str
    tags: list[str]
    instructions: str
    file_path: Path


def scan_locations(
    platforms: Sequence[SkillPlatform] = SKILL_PLATFORMS,
    os_key: Optional[str] = None,
) -> list[ScanLocation]:
    """Resolve every platform directory once; the first platform claims a shared path."""
    locations: list[ScanLocation] = []
    seen: set[Path] = set()
    for platform in platforms:
        path = get_platform_skills_dir(platform, os_key)
        if path in seen:
            continue
        seen.add(path)
        locations.append(ScanLocation(path=path, platform=platform))
    return locations


def iter_skill_files(location: ScanLocation) -> Iterator[Path]:
    """Yield ``<dir>/SKILL.md`` for each immediate subdirectory that has one"""
    if not location.path.is_dir():
        logger.debug(f"Scan path does not exist, skipping: {location.path}")
        return
    logger.debug(f"Scanning path for skills: {location.path}")
    for entry in sorted(location.path.iterdir()):
        if not entry.is_dir():
            continue
        skill_md = entry / "SKILL.md"
        if skill_md.is_file():
            yield skill_md


def load_local_skill(skill_md: Path) -> LocalSkill:
    folder = skill_md.parent
    instructions = skill_md.read_text(encoding="utf-8")
    # Only string values are taken from manifest.json
    manifest: dict[str, Any] = {k: v for k, v in read_manifest(folder).items() if isinstance(v, str)}
    fm = parse_skill_md(instructions).frontmatter

    return LocalSkill(
        name=fm.name or manifest.get("name") or folder.name,
        description=fm.description or manifest.get("description") or f"Local skill found in {folder.name}",
        version=fm.version or manifest.get("version") or "1.0.0",
        author=fm.author or manifest.get("author") or "Local",
        tags=list(fm.tags) if fm.tags else list(DEFAULT_TAGS),
        instructions=instructions,
        file_path=skill_md,
    )


async def scan_local(
    store: "SkillStore",
    platforms: Sequence[SkillPlatform] = SKILL_PLATFORMS,
    os_key: Optional[str] = None,
) -> ScanResult:
    """Import every SKILL.md found in the platform directories as a new skill.

    One bad candidate never stops the scan. Name conflicts with existing
    skills are counted as skipped, any other error as failed.
    """
    result = ScanResult()

    for location in scan_locations(platforms, os_key):
        try:
            skill_files = list(iter_skill_files(location))
        except OSError as e:
            logger.warning(f"Failed to scan path {location.path}: {e}")
            result.errors.append(f"{location.path}: {e}")
            continue

        for skill_md in skill_files:
            try:
                local = load_local_skill(skill_md)
                tags = local.tags
                if location.platform.id not in tags:
                    tags.append(location.platform.id)

                skill = store.create(
                    name=local.name,
                    description=local.description,
                    version=local.version,
                    author=local.author,
                    content=local.instructions,
                    protocol_type="skill",
                    is_favorite=False,
                    tags=tags,
                )
            except DuplicateSkillError as e:
                result.skipped += 1
                logger.debug(f"Skipping {skill_md}: {e}")
            except Exception as e:
                result.failed += 1
                result.errors.append(f"{skill_md}: {e}")
                logger.warning(f"Failed to import skill from {skill_md}: {e}")
            else:
                result.imported += 1
                result.skill_ids.append(skill.id)
                logger.info(f"Discovered local skill {skill.name} in {skill_md.parent.name}")

    return result


async def scan_local_preview(
    platforms: Sequence[SkillPlatform] = SKILL_PLATFORMS,
    os_key: Optional[str] = None,
) -> list[ScannedSkill]:
    """List the SKILL.md skills on disk without importing them.

    Skills are keyed by name: the first directory scanned supplies the content,
    later ones only add their platform name.
    """
    found: dict[str, ScannedSkill] = {}

    for location in scan_locations(platforms, os_key):
        platform_name = location.platform.name
        try:
            skill_files = list(iter_skill_files(location))
        except OSError as e:
            logger.warning(f"Failed to scan path {location.path}: {e}")
            continue

        for skill_md in skill_files:
            try:
                local = load_local_skill(skill_md)
            except (OSError, ValueError, TypeError) as e:
                logger.warning(f"Failed to parse skill at {skill_md}: {e}")
                continue

            existing = found.get(local.name)
            if existing:
                if platform_name not in existing.platforms:
                    existing.platforms.append(platform_name)
                continue

            found[local.name] = ScannedSkill(
                name=local.name,
                description=local.description,
                version=local.version,
                author=local.author,
                tags=local.tags,
                instructions=local.instructions,
                file_path=str(skill_md),
                platforms=[platform_name],
            )

    return list(found.values())
