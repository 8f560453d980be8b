"""Validation of skill names, SKILL.md documents and skill package folders."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .frontmatter import ParsedSkillMd, parse_skill_md

# Lowercase alphanumeric groups separated by single hyphens
SKILL_NAME_RE = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")
SKILL_NAME_MAX_LENGTH = 64
DESCRIPTION_MAX_LENGTH = 1024


@dataclass
class ValidationResult:
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    data: Optional[ParsedSkillMd] = None


def validate_skill_name(name: str) -> bool:
    if not name or not isinstance(name, str):
        return False
    if len(name) > SKILL_NAME_MAX_LENGTH:
        return False
    return SKILL_NAME_RE.match(name) is not None


def get_skill_name_error(name: str) -> str | None:
    """Explain why a skill name is invalid, or return None if it is valid"""
    if not name or not isinstance(name, str):
        return "Skill name is required"
    if len(name) > SKILL_NAME_MAX_LENGTH:
        return f"Skill name cannot exceed {SKILL_NAME_MAX_LENGTH} characters"

    if SKILL_NAME_RE.match(name):
        return None

    if name != name.lower():
        return "Skill name must be lowercase"
    if name.startswith("-") or name.endswith("-"):
        return "Skill name cannot start or end with a hyphen"
    if "--" in name:
        return "Skill name cannot contain consecutive hyphens"
    if re.search(r"[^a-z0-9-]", name):
        return "Skill name can only contain lowercase letters, numbers, and hyphens"
    return "Invalid skill name format"


def validate_skill_md(content: str, directory_name: Optional[str] = None) -> ValidationResult:
    """Validate SKILL.md content, optionally against its directory name."""
    errors: list[str] = []
    warnings: list[str] = []

    parsed = parse_skill_md(content)
    fm = parsed.frontmatter

    if not fm.name:
        errors.append("Missing required field: name")
    else:
        name_error = get_skill_name_error(fm.name)
        if name_error:
            errors.append(f"Invalid name: {name_error}")
        if directory_name and fm.name != directory_name:
            warnings.append(
                f'Skill name "{fm.name}" does not match directory name "{directory_name}"'
            )

    if not fm.description:
        warnings.append("Missing recommended field: description")
    elif len(fm.description) > DESCRIPTION_MAX_LENGTH:
        errors.append(f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters")

    if not parsed.body:
        warnings.append("SKILL.md has no content after frontmatter")

    return ValidationResult(valid=not errors, errors=errors, warnings=warnings, data=parsed)


def validate_skill_package(folder: Path | str) -> ValidationResult:
    """Validate a skill folder: it must be a directory holding a SKILL.md.

    An optional manifest.json only produces a warning when it is not valid JSON.
    """
    folder = Path(folder)

    if not folder.is_dir():
        return ValidationResult(valid=False, errors=["Path is not a directory"])

    skill_md = folder / "SKILL.md"
    try:
        content = skill_md.read_text(encoding="utf-8")
    except OSError:
        return ValidationResult(valid=False, errors=["SKILL.md file not found"])

    result = validate_skill_md(content, folder.name)

    manifest = folder / "manifest.json"
    if manifest.is_file():
        try:
            json.loads(manifest.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            result.warnings.append("manifest.json contains invalid JSON")

    return result
