"""Catalog of AI coding tools and their skills directories.

Each platform maps an OS key (``darwin``, ``win32``, ``linux``) to a path
template. Templates may start with ``~`` or contain the Windows style
``%USERPROFILE%`` / ``%APPDATA%`` placeholders; anything else is returned as-is.
"""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional

OsKey = Literal["darwin", "win32", "linux"]

DEFAULT_OS: OsKey = "linux"

_USERPROFILE_RE = re.compile(r"%USERPROFILE%", re.IGNORECASE)
_APPDATA_RE = re.compile(r"%APPDATA%", re.IGNORECASE)


@dataclass(frozen=True)
class SkillPlatform:
    """A third-party tool with its own skills directory convention"""
    id: str
    name: str
    icon: str  # lucide icon name
    skills_dir: dict[str, str]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "icon": self.icon,
            "skills_dir": dict(self.skills_dir),
        }


def _dirs(posix: str, windows: str) -> dict[str, str]:
    return {"darwin": posix, "win32": windows, "linux": posix}


SKILL_PLATFORMS: tuple[SkillPlatform, ...] = (
    SkillPlatform("claude", "Claude Code", "Sparkles",
                  _dirs("~/.claude/skills", "%USERPROFILE%\\.claude\\skills")),
    SkillPlatform("copilot", "GitHub Copilot", "Github",
                  _dirs("~/.copilot/skills", "%USERPROFILE%\\.copilot\\skills")),
    SkillPlatform("cursor", "Cursor", "Terminal",
                  _dirs("~/.cursor/skills", "%USERPROFILE%\\.cursor\\skills")),
    SkillPlatform("windsurf", "Windsurf", "Wind",
                  _dirs("~/.codeium/windsurf/skills", "%USERPROFILE%\\.codeium\\windsurf\\skills")),
    SkillPlatform("kiro", "Kiro", "Sparkle",
                  _dirs("~/.kiro/skills", "%USERPROFILE%\\.kiro\\skills")),
    SkillPlatform("gemini", "Gemini CLI", "Sparkles",
                  _dirs("~/.gemini/skills", "%USERPROFILE%\\.gemini\\skills")),
    SkillPlatform("trae", "Trae", "Zap",
                  _dirs("~/.trae/skills", "%USERPROFILE%\\.trae\\skills")),
    SkillPlatform("opencode", "OpenCode", "Terminal",
                  _dirs("~/.config/opencode/skills", "%APPDATA%\\opencode\\skills")),
    SkillPlatform("codex", "Codex CLI", "Terminal",
                  _dirs("~/.codex/skills", "%USERPROFILE%\\.codex\\skills")),
    SkillPlatform("roo", "Roo Code", "Bot",
                  _dirs("~/.roo/skills", "%USERPROFILE%\\.roo\\skills")),
    SkillPlatform("amp", "Amp", "Zap",
                  _dirs("~/.config/agents/skills", "%APPDATA%\\agents\\skills")),
    SkillPlatform("openclaw", "OpenClaw", "Claw",
                  _dirs("~/.openclaw/skills", "%USERPROFILE%\\.openclaw\\skills")),
)


def current_os() -> OsKey:
    """Normalize sys.platform to one of the catalog's OS keys"""
    if sys.platform == "darwin":
        return "darwin"
    if sys.platform == "win32":
        return "win32"
    return DEFAULT_OS


def resolve_platform_path(template: str, home: Optional[Path] = None) -> str:
    """Substitute home/roaming-data placeholders in a path template.

    Placeholders that are not recognized are left in place.
    """
    home_str = str(home if home is not None else Path.home())
    appdata = str(Path(home_str) / "AppData" / "Roaming")

    resolved = template
    if resolved.startswith("~"):
        resolved = home_str + resolved[1:]
    resolved = _USERPROFILE_RE.sub(lambda _: home_str, resolved)
    resolved = _APPDATA_RE.sub(lambda _: appdata, resolved)
    return resolved


def select_template(templates: dict[str, str], os_key: Optional[str] = None) -> str:
    key = os_key or current_os()
    return templates.get(key) or templates[DEFAULT_OS]


def get_platform_skills_dir(
    platform: SkillPlatform,
    os_key: Optional[str] = None,
    home: Optional[Path] = None,
) -> Path:
    """Resolve a platform's skills directory for the given (or current) OS"""
    return Path(resolve_platform_path(select_template(platform.skills_dir, os_key), home))


def get_platform_by_id(platform_id: str) -> SkillPlatform | None:
    for platform in SKILL_PLATFORMS:
        if platform.id == platform_id:
            return platform
    return None
