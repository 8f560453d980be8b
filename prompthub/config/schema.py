"""Configuration schemas using Pydantic"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field


def default_data_dir() -> Path:
    return Path.home() / ".local" / "share" / "prompthub"


class StorageConfig(BaseModel):
    """Where the skill database and installed skill folders live"""
    data_dir: Path = Field(default_factory=default_data_dir)

    @property
    def db_path(self) -> Path:
        return self.data_dir / "prompthub.db"

    @property
    def skills_dir(self) -> Path:
        return self.data_dir / "skills"


class GitConfig(BaseModel):
    """Git clone settings"""
    executable: str = "git"
    depth: int = Field(default=1, ge=1)


class HttpConfig(BaseModel):
    """Remote SKILL.md fetch settings"""
    timeout: float = Field(default=30.0, gt=0)
    remote_max_bytes: int | None = Field(default=None, gt=0)  # None = unbounded
    user_agent: str = "prompthub-skills"


class LoggingConfig(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"


class Config(BaseModel):
    """Main configuration"""
    storage: StorageConfig = Field(default_factory=StorageConfig)
    git: GitConfig = Field(default_factory=GitConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
