"""Tests for SKILL.md / JSON export and JSON import"""

import json

import pytest

from prompthub.errors import DuplicateSkillError, SkillImportError
from prompthub.skills.export import export_as_json, export_as_skill_md, import_from_json
from prompthub.skills.frontmatter import parse_skill_md
from prompthub.storage import SkillStore


class TestExportSkillMd:
    def test_layout(self, store):
        skill = store.create(
            name="pdf",
            description="Work with PDFs",
            author="Ann",
            tags=["pdf", "ocr"],
            content="Use pypdf.",
        )
        text = export_as_skill_md(skill)

        assert text == (
            "---\n"
            "name: pdf\n"
            "description: Work with PDFs\n"
            "version: 1.0.0\n"
            "author: Ann\n"
            "tags: [pdf, ocr]\n"
            "compatibility: prompthub\n"
            "---\n"
            "Use pypdf."
        )

    def test_parses_back(self, store):
        skill = store.create(
            name="tdd", description="Tests first", version="2.1.0", author="Ann",
            tags=["testing"], content="Red first.",
        )
        parsed = parse_skill_md(export_as_skill_md(skill))

        assert parsed.frontmatter.name == "tdd"
        assert parsed.frontmatter.description == "Tests first"
        assert parsed.frontmatter.version == "2.1.0"
        assert parsed.frontmatter.author == "Ann"
        assert parsed.frontmatter.tags == ["testing"]
        assert parsed.frontmatter.compatibility == "prompthub"
        assert parsed.body == "Red first."

    def test_existing_frontmatter_replaced(self, store):
        skill = store.create(name="new-name", content="---\nname: old-name\n---\nBody stays")
        text = export_as_skill_md(skill)

        assert text.count("---\n") == 2
        assert "old-name" not in text
        assert text.endswith("Body stays")

    def test_no_tags_line_when_empty(self, store):
        skill = store.create(name="bare")
        assert "tags:" not in export_as_skill_md(skill)


class TestJson:
    def test_export_fields(self, store):
        skill = store.create(name="pdf", protocol_type="skill", tags=["a"], content="Body")
        data = json.loads(export_as_json(skill))

        assert data["name"] == "pdf"
        assert data["instructions"] == "Body"
        assert data["tags"] == ["a"]
        assert data["protocol_type"] == "skill"
        assert data["format_version"] == "1.0"
        assert data["exported_at"].endswith("+00:00")

    def test_round_trip_into_new_store(self, store):
        original = store.create(
            name="pdf", description="PDFs", author="Ann", tags=["doc"], content="Body",
            protocol_type="skill",
        )
        other = SkillStore()
        try:
            imported = other.get_by_id(import_from_json(export_as_json(original), other))
            assert imported.name == "pdf"
            assert imported.description == "PDFs"
            assert imported.author == "Ann"
            assert imported.tags == ["doc"]
            assert imported.instructions == "Body"
        finally:
            other.close()

    def test_import_defaults(self, store):
        skill = store.get_by_id(import_from_json('{"name": "minimal"}', store))

        assert skill.author == "Imported"
        assert skill.tags == ["imported"]
        assert skill.protocol_type == "skill"
        assert skill.version == "1.0.0"

    @pytest.mark.parametrize("text", ["{oops", '{"description": "no name"}', "[]", '"string"'])
    def test_import_rejects_bad_input(self, store, text):
        with pytest.raises(SkillImportError):
            import_from_json(text, store)

    def test_import_duplicate(self, store):
        store.create(name="pdf")
        with pytest.raises(DuplicateSkillError):
            import_from_json('{"name": "PDF"}', store)

    def test_import_string_tags(self, store):
        skill = store.get_by_id(import_from_json('{"name": "tagged", "tags": "cli"}', store))
        assert skill.tags == ["cli"]
