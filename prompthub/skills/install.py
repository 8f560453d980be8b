"""
Skill installation from GitHub repositories.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
import shutil
from pathlib import Path
from typing import TYPE_CHECKING, Any

from prompthub.errors import GitCloneError, InvalidGitHubURLError, SkillExistsError

if TYPE_CHECKING:
    from prompthub.storage.skill_store import SkillStore

logger = logging.getLogger(__name__)

GITHUB_REPO_RE = re.compile(r"github\.com/([^/?#]+)/([^/?#]+)")

# Files tried in order for the skill instructions after manifest.json
INSTRUCTION_FILES = ("SKILL.md", "README.md")


def parse_github_url(url: str) -> tuple[str, str]:
    """
    Extract (owner, repo) from a GitHub URL.

    Supported formats:
    - https://github.com/owner/repo
    - https://github.com/owner/repo.git
    - https://github.com/owner/repo/tree/main/skills/x  (extra segments ignored)
    """
    match = GITHUB_REPO_RE.search(url or "")
    if not match:
        raise InvalidGitHubURLError(url)
    owner = match.group(1)
    repo = re.sub(r"\.git$", "", match.group(2))
    if not repo:
        raise InvalidGitHubURLError(url)
    return owner, repo


def install_dir_name(url: str) -> str:
    owner, repo = parse_github_url(url)
    return f"{owner}-{repo}"


def read_manifest(skill_dir: Path) -> dict[str, Any]:
    """Load manifest.json from a skill folder; absent or unparsable gives {}"""
    try:
        data = json.loads((skill_dir / "manifest.json").read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def read_instructions(skill_dir: Path, manifest: dict[str, Any]) -> str:
    if manifest.get("instructions"):
        return manifest["instructions"]
    for filename in INSTRUCTION_FILES:
        try:
            return (skill_dir / filename).read_text(encoding="utf-8")
        except OSError:
            continue
    return ""


async def git_clone(url: str, dest: Path, git: str = "git", depth: int = 1) -> None:
    """Shallow clone ``url`` into ``dest``; the URL is passed as a plain argument."""
    try:
        proc = await asyncio.create_subprocess_exec(
            git, "clone", "--depth", str(depth), url, str(dest),
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise GitCloneError(url, stderr=str(e)) from e

    _, stderr = await proc.communicate()
    if proc.returncode != 0:
        raise GitCloneError(url, proc.returncode, stderr.decode(errors="replace"))


async def install_from_github(
    url: str,
    store: "SkillStore",
    skills_dir: Path,
    git: str = "git",
    depth: int = 1,
) -> str:
    """
    Clone a GitHub repository into ``skills_dir`` and register it as a skill.

    The clone lands in ``<skills_dir>/<owner>-<repo>``. An existing directory is
    never overwritten. If anything after the clone starts fails, the directory
    is removed and the original error re-raised.

    Returns:
        The id of the created skill
    """
    owner, repo = parse_github_url(url)
    install_dir = skills_dir / f"{owner}-{repo}"

    skills_dir.mkdir(parents=True, exist_ok=True)
    if install_dir.exists():
        raise SkillExistsError(owner, repo, install_dir)

    try:
        logger.info(f"Cloning {url} to {install_dir}")
        await git_clone(url, install_dir, git=git, depth=depth)

        manifest = read_manifest(install_dir)
        instructions = read_instructions(install_dir, manifest)

        skill = store.create(
            name=manifest.get("name") or repo,
            description=manifest.get("description") or f"Installed from {url}",
            version=manifest.get("version") or "1.0.0",
            author=manifest.get("author") or owner,
            content=instructions,
            protocol_type="skill",
            source_url=url,
            is_favorite=False,
            tags=manifest.get("tags") or ["github"],
        )
        logger.info(f"Installed skill {skill.name} from {url}")
        return skill.id
    except Exception as e:
        logger.error(f"Installation from {url} failed: {e}")
        shutil.rmtree(install_dir, ignore_errors=True)
        raise


def list_installed(skills_dir: Path) -> list[str]:
    """List skill folders (those holding a SKILL.md) in the app skills directory."""
    if not skills_dir.exists():
        return []

    return sorted(
        d.name for d in skills_dir.iterdir()
        if d.is_dir() and (d / "SKILL.md").exists()
    )
