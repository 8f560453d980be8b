"""Skill manager - the single entry point for every skill operation"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal, Optional

from prompthub.config import Config
from prompthub.errors import RemoteFetchError, SkillNotFoundError
from prompthub.storage.skill_store import SkillStore

from . import platform_install
from .export import export_as_json, export_as_skill_md, import_from_json
from .install import install_from_github
from .models import ScannedSkill, ScanResult, Skill
from .platforms import SkillPlatform
from .registry import RegistrySkill, get_registry_skill, list_registry
from .remote import fetch_remote_content
from .scanner import scan_local, scan_local_preview
from .validator import ValidationResult, validate_skill_package

logger = logging.getLogger(__name__)

ExportFormat = Literal["skillmd", "json"]


class SkillManager:
    """
    Manages skills stored in the local database and their installation into
    AI coding tools.

    Each public method corresponds to one operation of the request/response
    boundary: callers pass typed arguments and get the result back, or the
    operation's exception.
    """

    def __init__(self, config: Optional[Config] = None, store: Optional[SkillStore] = None):
        self.config = config or Config()
        self.store = store or SkillStore(self.config.storage.db_path)

    @property
    def skills_dir(self) -> Path:
        return self.config.storage.skills_dir

    def init(self) -> None:
        """Make sure the private skills directory exists"""
        self.skills_dir.mkdir(parents=True, exist_ok=True)

    def close(self) -> None:
        self.store.close()

    # ==================== CRUD ====================

    async def create(self, name: str, **fields: Any) -> Skill:
        """Create a skill.

        A GitHub ``source_url`` with no content or instructions is cloned and
        parsed instead of stored as-is.
        """
        source_url = fields.get("source_url") or ""
        if "github.com" in source_url and not fields.get("content") and not fields.get("instructions"):
            return await self.install_from_github(source_url)
        return self.store.create(name=name, **fields)

    def get(self, skill_id: str) -> Skill | None:
        return self.store.get_by_id(skill_id)

    def get_all(self) -> list[Skill]:
        return self.store.get_all()

    def update(self, skill_id: str, **fields: Any) -> Skill | None:
        return self.store.update(skill_id, **fields)

    def delete(self, skill_id: str) -> bool:
        return self.store.delete(skill_id)

    def search(self, query: str) -> list[Skill]:
        return self.store.search(query)

    def require(self, skill_id: str) -> Skill:
        skill = self.store.get_by_id(skill_id)
        if skill is None:
            raise SkillNotFoundError(skill_id)
        return skill

    # ==================== Discovery ====================

    async def install_from_github(self, url: str) -> Skill:
        skill_id = await install_from_github(
            url,
            self.store,
            self.skills_dir,
            git=self.config.git.executable,
            depth=self.config.git.depth,
        )
        return self.store.get_by_id(skill_id)

    async def scan_local(self) -> ScanResult:
        result = await scan_local(self.store)
        logger.info(
            f"Local scan: {result.imported} imported, {result.skipped} skipped, {result.failed} failed"
        )
        return result

    async def scan_local_preview(self) -> list[ScannedSkill]:
        return await scan_local_preview()

    def validate_package(self, path: Path | str) -> ValidationResult:
        return validate_skill_package(path)

    # ==================== Config-merge install ====================

    async def install_to_platform(self, target: str, name: str, mcp_config: dict[str, Any]) -> None:
        await platform_install.install_to_platform(target, name, mcp_config)

    async def uninstall_from_platform(self, target: str, name: str) -> None:
        await platform_install.uninstall_from_platform(target, name)

    async def get_platform_status(self, name: str) -> dict[str, bool]:
        return await platform_install.get_platform_status(name)

    # ==================== SKILL.md install ====================

    def get_supported_platforms(self) -> list[SkillPlatform]:
        return platform_install.get_supported_platforms()

    async def detect_installed_platforms(self) -> list[str]:
        return await platform_install.detect_installed_platforms()

    async def install_skill_md(self, name: str, content: str, platform_id: str) -> Path:
        return await platform_install.install_skill_md(name, content, platform_id)

    async def install_skill_md_symlink(self, name: str, content: str, platform_id: str) -> Path:
        self.init()
        return await platform_install.install_skill_md_symlink(
            name, content, platform_id, self.skills_dir
        )

    async def uninstall_skill_md(self, name: str, platform_id: str) -> None:
        await platform_install.uninstall_skill_md(name, platform_id)

    async def get_skill_md_install_status(self, name: str) -> dict[str, bool]:
        return await platform_install.get_skill_md_install_status(name)

    async def fetch_remote_content(self, url: str) -> str | None:
        """Fetch remote SKILL.md text; failures are logged and give None"""
        try:
            return await fetch_remote_content(
                url,
                timeout=self.config.http.timeout,
                max_bytes=self.config.http.remote_max_bytes,
                user_agent=self.config.http.user_agent,
            )
        except RemoteFetchError as e:
            logger.warning(f"Failed to fetch remote content: {e}")
            return None

    # ==================== Export / import ====================

    def export(self, skill_id: str, format: ExportFormat = "skillmd") -> str:
        skill = self.require(skill_id)
        if format == "skillmd":
            return export_as_skill_md(skill)
        if format == "json":
            return export_as_json(skill)
        raise ValueError(f"Unknown export format: {format}")

    def import_from_json(self, json_content: str) -> Skill:
        skill_id = import_from_json(json_content, self.store)
        return self.store.get_by_id(skill_id)

    # ==================== Registry ====================

    def list_registry(self, category: Optional[str] = None) -> list[RegistrySkill]:
        return list_registry(category)

    async def install_from_registry(self, slug: str, refresh: bool = False) -> Skill:
        """Create a skill from a built-in registry entry.

        With ``refresh`` the upstream SKILL.md is fetched first; the embedded
        content is used when that fails.
        """
        entry = get_registry_skill(slug)
        if entry is None:
            raise SkillNotFoundError(slug, f"Registry skill not found: {slug}")

        content = entry.content
        if refresh and entry.content_url:
            content = await self.fetch_remote_content(entry.content_url) or entry.content

        skill = self.store.create(
            name=entry.slug,
            description=entry.description,
            content=content,
            protocol_type="skill",
            version=entry.version,
            author=entry.author,
            tags=entry.tags,
            source_url=entry.source_url,
            category=entry.category,
            is_builtin=True,
            registry_slug=entry.slug,
            content_url=entry.content_url,
            prerequisites=entry.prerequisites,
            compatibility=entry.compatibility,
        )
        logger.info(f"Installed registry skill {slug}")
        return skill
