"""Skill discovery, validation and installation"""

from .frontmatter import parse_skill_md, ParsedSkillMd, SkillFrontmatter
from .models import Skill, ScannedSkill, ScanResult
from .platforms import SKILL_PLATFORMS, SkillPlatform, get_platform_by_id, get_platform_skills_dir
from .validator import validate_skill_md, validate_skill_name, validate_skill_package, ValidationResult

__all__ = [
    "Skill",
    "ScannedSkill",
    "ScanResult",
    "SkillPlatform",
    "SKILL_PLATFORMS",
    "get_platform_by_id",
    "get_platform_skills_dir",
    "parse_skill_md",
    "ParsedSkillMd",
    "SkillFrontmatter",
    "validate_skill_md",
    "validate_skill_name",
    "validate_skill_package",
    "ValidationResult",
]
