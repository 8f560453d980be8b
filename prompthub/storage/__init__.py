"""Local persistence"""

from .skill_store import SkillStore

__all__ = ["SkillStore"]
