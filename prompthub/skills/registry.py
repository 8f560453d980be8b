"""Built-in skill registry.

Registry entries embed a minimal SKILL.md and point at the upstream copy
(``content_url``) so an install can pick up the latest version.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .models import SkillCategory

SKILL_REGISTRY_VERSION = "1.0.0"

_COMMON_TARGETS = ["claude", "cursor", "windsurf", "opencode"]


@dataclass(frozen=True)
class RegistrySkill:
    slug: str
    name: str
    description: str
    category: SkillCategory
    author: str
    source_url: str
    tags: list[str]
    version: str
    content: str
    content_url: Optional[str] = None
    prerequisites: Optional[list[str]] = None
    compatibility: list[str] = field(default_factory=lambda: list(_COMMON_TARGETS))


BUILTIN_SKILL_REGISTRY: tuple[RegistrySkill, ...] = (
    RegistrySkill(
        slug="pdf",
        name="PDF Skill",
        description="Read, extract, create, merge, split, rotate, watermark, encrypt, and OCR PDF files.",
        category="office",
        author="Anthropic",
        source_url="https://github.com/anthropics/skills/tree/main/skills/pdf",
        content_url="https://raw.githubusercontent.com/anthropics/skills/main/skills/pdf/SKILL.md",
        tags=["pdf", "document", "extract", "ocr"],
        version="1.0.0",
        content=(
            "---\n"
            "name: pdf\n"
            "description: Use this skill whenever the user wants to do anything with PDF files, "
            "including reading, merging, splitting, rotating, watermarking, filling forms and OCR.\n"
            "---"
        ),
        prerequisites=["Python 3", "pypdf / pdfplumber / reportlab"],
    ),
    RegistrySkill(
        slug="playwright",
        name="Playwright CLI",
        description="Automate real browsers from the terminal: navigation, form filling, snapshots, screenshots, and data extraction.",
        category="dev",
        author="OpenAI",
        source_url="https://github.com/openai/skills/tree/main/skills/.curated/playwright",
        content_url="https://raw.githubusercontent.com/openai/skills/main/skills/.curated/playwright/SKILL.md",
        tags=["playwright", "testing", "e2e", "browser", "automation"],
        version="1.0.0",
        content=(
            "---\n"
            "name: playwright\n"
            'description: "Use when the task requires automating a real browser from the terminal via playwright-cli."\n'
            "---"
        ),
        prerequisites=["Node.js", "npx"],
    ),
    RegistrySkill(
        slug="gh-fix-ci",
        name="Fix CI Checks",
        description="Debug and fix failing GitHub PR checks in GitHub Actions. Inspect logs, summarize failures, and draft fixes.",
        category="dev",
        author="OpenAI",
        source_url="https://github.com/openai/skills/tree/main/skills/.curated/gh-fix-ci",
        content_url="https://raw.githubusercontent.com/openai/skills/main/skills/.curated/gh-fix-ci/SKILL.md",
        tags=["github", "ci", "actions", "debugging"],
        version="1.0.0",
        content=(
            "---\n"
            "name: gh-fix-ci\n"
            'description: "Use when a user asks to debug or fix failing GitHub PR checks that run in GitHub Actions."\n'
            "---"
        ),
        prerequisites=["GitHub CLI (gh)", "repo + workflow scopes"],
    ),
    RegistrySkill(
        slug="mcp-builder",
        name="MCP Builder",
        description="Build high-quality MCP (Model Context Protocol) servers for LLM integration with external services.",
        category="dev",
        author="Anthropic",
        source_url="https://github.com/anthropics/skills/tree/main/skills/mcp-builder",
        content_url="https://raw.githubusercontent.com/anthropics/skills/main/skills/mcp-builder/SKILL.md",
        tags=["mcp", "server", "protocol", "integration"],
        version="1.0.0",
        content=(
            "---\n"
            "name: mcp-builder\n"
            "description: Guide for creating high-quality MCP servers that enable LLMs to interact "
            "with external services through well-designed tools.\n"
            "---"
        ),
        prerequisites=["Python (FastMCP) or Node/TypeScript (MCP SDK)"],
    ),
    RegistrySkill(
        slug="tdd",
        name="Test-Driven Development",
        description="Apply TDD methodology: write tests first, then implement code to pass them.",
        category="dev",
        author="obra",
        source_url="https://github.com/obra/superpowers/tree/main/skills/test-driven-development",
        content_url="https://raw.githubusercontent.com/obra/superpowers/main/skills/test-driven-development/SKILL.md",
        tags=["tdd", "testing", "development", "workflow"],
        version="1.0.0",
        content=(
            "---\n"
            "name: test-driven-development\n"
            "description: Use when implementing any feature or bugfix, before writing implementation code\n"
            "---"
        ),
    ),
    RegistrySkill(
        slug="brainstorming",
        name="Brainstorming",
        description="Transform rough ideas into fully-formed designs through structured questioning and alternative exploration.",
        category="meta",
        author="obra",
        source_url="https://github.com/obra/superpowers/tree/main/skills/brainstorming",
        content_url="https://raw.githubusercontent.com/obra/superpowers/main/skills/brainstorming/SKILL.md",
        tags=["brainstorm", "ideation", "design", "thinking"],
        version="1.0.0",
        content=(
            "---\n"
            "name: brainstorming\n"
            "description: Use when the user has a rough idea and wants to explore it further.\n"
            "---"
        ),
    ),
)


def get_registry_skill(slug: str) -> RegistrySkill | None:
    for entry in BUILTIN_SKILL_REGISTRY:
        if entry.slug == slug:
            return entry
    return None


def list_registry(category: Optional[str] = None) -> list[RegistrySkill]:
    if category is None:
        return list(BUILTIN_SKILL_REGISTRY)
    return [entry for entry in BUILTIN_SKILL_REGISTRY if entry.category == category]
