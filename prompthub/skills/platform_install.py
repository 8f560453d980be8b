"""Install skills into third-party AI tools.

Two mechanisms:

- config merge: register an MCP server entry in the tool's JSON config file
  (Claude Desktop and Cursor only)
- SKILL.md install: write ``<platform skills dir>/<name>/SKILL.md`` either as
  a plain copy or as a directory symlink to a canonical copy owned by prompthub
"""

from __future__ import annotations

import json
import logging
import os
import shutil
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from prompthub.errors import InvalidSkillNameError, UnknownPlatformError

from .platforms import (
    SKILL_PLATFORMS,
    SkillPlatform,
    get_platform_by_id,
    get_platform_skills_dir,
    resolve_platform_path,
    select_template,
)

logger = logging.getLogger(__name__)

MCP_CONFIG_PATHS: dict[str, dict[str, str]] = {
    "claude": {
        "darwin": "~/Library/Application Support/Claude/claude_desktop_config.json",
        "win32": "%APPDATA%\\Claude\\claude_desktop_config.json",
        "linux": "~/.config/Claude/claude_desktop_config.json",
    },
    "cursor": {
        "darwin": "~/.cursor/mcp.json",
        "win32": "%USERPROFILE%\\.cursor\\mcp.json",
        "linux": "~/.cursor/mcp.json",
    },
}

MCP_TARGETS = tuple(MCP_CONFIG_PATHS)


class ServersKey(str, Enum):
    """Key under which a tool's config file keeps its server registry."""
    MCP_SERVERS = "mcpServers"
    MCP_SERVERS_SNAKE = "mcp_servers"
    SERVERS = "servers"

    @classmethod
    def detect(cls, config: dict) -> Optional["ServersKey"]:
        for key in cls:
            if config.get(key.value) is not None:
                return key
        return None


def get_mcp_config_path(target: str, os_key: Optional[str] = None) -> Path:
    templates = MCP_CONFIG_PATHS.get(target)
    if templates is None:
        raise UnknownPlatformError(target)
    return Path(resolve_platform_path(select_template(templates, os_key)))


def _read_config(path: Path) -> dict:
    config = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(config, dict):
        raise ValueError(f"{path} does not contain a JSON object")
    return config


def _write_config(path: Path, config: dict) -> None:
    path.write_text(json.dumps(config, indent=2), encoding="utf-8")


async def install_to_platform(
    target: str,
    name: str,
    mcp_config: dict[str, Any],
    os_key: Optional[str] = None,
) -> None:
    """Merge a server entry into the target tool's config file.

    ``mcp_config`` is either ``{"servers": {name: cfg, ...}}`` or a single
    server config stored under ``name``.
    """
    if not isinstance(mcp_config, dict):
        raise ValueError(f"MCP config for {name} must be a JSON object")
    config_path = get_mcp_config_path(target, os_key)

    if not config_path.exists():
        config_path.parent.mkdir(parents=True, exist_ok=True)
        _write_config(config_path, {ServersKey.MCP_SERVERS.value: {}})

    try:
        config = _read_config(config_path)

        key = ServersKey.detect(config)
        if key is None:
            key = ServersKey.MCP_SERVERS
            config[key.value] = {}

        if isinstance(mcp_config.get("servers"), dict):
            source_servers = mcp_config["servers"]
        else:
            source_servers = {name: mcp_config}
        if not isinstance(config[key.value], dict):
            raise ValueError(f"{config_path}: '{key.value}' is not a JSON object")
        config[key.value] = {**config[key.value], **source_servers}

        _write_config(config_path, config)
        logger.info(f"Installed skill {name} to {target}")
    except (OSError, ValueError) as e:
        logger.error(f"Failed to install {name} to {target}: {e}")
        raise


async def uninstall_from_platform(target: str, name: str, os_key: Optional[str] = None) -> None:
    """Remove a server entry; a missing file or entry is a no-op."""
    config_path = get_mcp_config_path(target, os_key)
    if not config_path.exists():
        return

    try:
        config = _read_config(config_path)
        key = ServersKey.detect(config) or ServersKey.MCP_SERVERS
        servers = config.get(key.value)
        if isinstance(servers, dict) and name in servers:
            del servers[name]
            _write_config(config_path, config)
            logger.info(f"Uninstalled skill {name} from {target}")
    except (OSError, ValueError) as e:
        logger.error(f"Failed to uninstall {name} from {target}: {e}")
        raise


async def get_platform_status(name: str, os_key: Optional[str] = None) -> dict[str, bool]:
    """Report whether ``name`` is registered in each config-merge target"""
    status = {target: False for target in MCP_TARGETS}

    for target in MCP_TARGETS:
        config_path = get_mcp_config_path(target, os_key)
        if not config_path.exists():
            continue
        try:
            config = _read_config(config_path)
        except (OSError, ValueError):
            continue
        key = ServersKey.detect(config)
        servers = config.get(key.value) if key else {}
        if isinstance(servers, dict) and servers.get(name):
            status[target] = True

    return status


# ==================== SKILL.md installation ====================

def _require_platform(platform_id: str) -> SkillPlatform:
    platform = get_platform_by_id(platform_id)
    if platform is None:
        raise UnknownPlatformError(platform_id)
    return platform


def check_skill_dir_name(name: str) -> None:
    """Reject names that would escape the platform skills directory"""
    if not name or not name.strip():
        raise InvalidSkillNameError(name, "Skill name is required")
    if name in (".", "..") or "/" in name or "\\" in name or "\0" in name:
        raise InvalidSkillNameError(name, f"Skill name is not a valid directory name: {name!r}")


def _remove_path(path: Path) -> None:
    """Remove a file, symlink (without following it) or directory tree"""
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.is_dir():
        shutil.rmtree(path)


def get_supported_platforms() -> list[SkillPlatform]:
    return list(SKILL_PLATFORMS)


async def detect_installed_platforms(os_key: Optional[str] = None) -> list[str]:
    """Ids of platforms whose skills directory parent exists (e.g. ~/.claude)"""
    return [
        platform.id
        for platform in SKILL_PLATFORMS
        if get_platform_skills_dir(platform, os_key).parent.exists()
    ]


async def install_skill_md(
    name: str,
    content: str,
    platform_id: str,
    os_key: Optional[str] = None,
) -> Path:
    """Write SKILL.md into ``<platform skills dir>/<name>/`` and return that directory"""
    check_skill_dir_name(name)
    platform = _require_platform(platform_id)
    skill_dir = get_platform_skills_dir(platform, os_key) / name

    try:
        skill_dir.mkdir(parents=True, exist_ok=True)
        (skill_dir / "SKILL.md").write_text(content, encoding="utf-8")
    except OSError as e:
        logger.error(f"Failed to install SKILL.md to {platform.name}: {e}")
        raise

    logger.info(f'Installed SKILL.md for "{name}" to {platform.name} at {skill_dir}')
    return skill_dir


async def install_skill_md_symlink(
    name: str,
    content: str,
    platform_id: str,
    skills_dir: Path,
    os_key: Optional[str] = None,
) -> Path:
    """Soft install: link the platform directory to prompthub's canonical copy.

    The canonical ``<skills_dir>/<name>/SKILL.md`` is (re)written first, then
    whatever sits at the platform target is replaced by a directory symlink,
    so every linked platform sees later edits. Returns the symlink path.
    """
    check_skill_dir_name(name)
    platform = _require_platform(platform_id)

    # Symlink targets are relative to the link's directory, so link to an absolute path
    canonical_dir = skills_dir.resolve() / name
    canonical_dir.mkdir(parents=True, exist_ok=True)
    (canonical_dir / "SKILL.md").write_text(content, encoding="utf-8")

    platform_skills_dir = get_platform_skills_dir(platform, os_key)
    link = platform_skills_dir / name

    try:
        platform_skills_dir.mkdir(parents=True, exist_ok=True)
        _remove_path(link)
        os.symlink(canonical_dir, link, target_is_directory=True)
    except OSError as e:
        logger.error(f'Failed to create symlink for "{name}" to {platform.name}: {e}')
        raise

    logger.info(f'Symlinked "{name}" to {platform.name}: {canonical_dir} -> {link}')
    return link


async def uninstall_skill_md(name: str, platform_id: str, os_key: Optional[str] = None) -> None:
    """Remove ``<platform skills dir>/<name>``; the canonical copy is left alone."""
    check_skill_dir_name(name)
    platform = _require_platform(platform_id)
    skill_dir = get_platform_skills_dir(platform, os_key) / name

    if not (skill_dir.exists() or skill_dir.is_symlink()):
        return

    try:
        _remove_path(skill_dir)
    except OSError as e:
        logger.error(f"Failed to uninstall SKILL.md from {platform.name}: {e}")
        raise
    logger.info(f'Uninstalled SKILL.md for "{name}" from {platform.name}')


async def get_skill_md_install_status(name: str, os_key: Optional[str] = None) -> dict[str, bool]:
    return {
        platform.id: (get_platform_skills_dir(platform, os_key) / name / "SKILL.md").exists()
        for platform in SKILL_PLATFORMS
    }
