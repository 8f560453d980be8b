"""Exceptions raised by skill storage, installation and import."""

from typing import Optional


class PromptHubError(Exception):
    """Base class for all prompthub errors."""


class InvalidGitHubURLError(PromptHubError):
    """Raised when a URL does not point at a github.com owner/repo."""
    def __init__(self, url: str, message: Optional[str] = None):
        self.url = url
        self.message = message or f"Invalid GitHub URL: {url}"
        super().__init__(self.message)


class InvalidSkillNameError(PromptHubError):
    """Raised when a skill name cannot be used as a directory name."""
    def __init__(self, name: str, reason: str = ""):
        self.name = name
        self.reason = reason or f"Invalid skill name: {name!r}"
        super().__init__(self.reason)


class DuplicateSkillError(PromptHubError):
    """Raised when creating a skill whose name is already taken."""
    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Skill "{name}" already exists')


class SkillExistsError(PromptHubError):
    """Raised when a clone target directory is already present."""
    def __init__(self, owner: str, repo: str, path=None):
        self.owner = owner
        self.repo = repo
        self.path = path
        super().__init__(f"Skill {owner}/{repo} already exists. Please delete it first.")


class SkillNotFoundError(PromptHubError):
    """Raised when a skill id or registry slug does not resolve."""
    def __init__(self, key: str, message: Optional[str] = None):
        self.key = key
        self.message = message or f"Skill not found: {key}"
        super().__init__(self.message)


class GitCloneError(PromptHubError):
    """Raised when the git clone subprocess fails."""
    def __init__(self, url: str, returncode: Optional[int] = None, stderr: str = ""):
        self.url = url
        self.returncode = returncode
        self.stderr = stderr
        if returncode is None:
            message = f"Git clone error: {stderr}"
        else:
            message = f"Git clone failed with code {returncode}: {stderr}"
        super().__init__(message)


class UnknownPlatformError(PromptHubError):
    """Raised for a platform id that is not in the catalog."""
    def __init__(self, platform_id: str):
        self.platform_id = platform_id
        super().__init__(f"Unknown platform: {platform_id}")


class RemoteFetchError(PromptHubError):
    """Raised when remote SKILL.md content cannot be fetched."""
    def __init__(self, url: str, status_code: Optional[int] = None, reason: str = ""):
        self.url = url
        self.status_code = status_code
        if status_code is not None:
            message = f"HTTP {status_code} fetching {url}"
        else:
            message = reason or f"Failed to fetch {url}"
        super().__init__(message)


class SkillImportError(PromptHubError):
    """Raised when JSON skill data cannot be imported."""
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)
