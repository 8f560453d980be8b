"""Tests for SQLite skill storage"""

import pytest

from prompthub.errors import DuplicateSkillError
from prompthub.storage import SkillStore


class TestCreate:
    def test_defaults(self, store):
        skill = store.create(name="pdf")

        assert skill.id
        assert skill.protocol_type == "mcp"
        assert skill.version == "1.0.0"
        assert skill.author == "User"
        assert skill.category == "general"
        assert skill.tags == []
        assert not skill.is_favorite
        assert skill.created_at == skill.updated_at

    def test_fields_round_trip(self, store):
        skill = store.create(
            name="tdd",
            description="Red, green, refactor",
            content="Write the test first.",
            protocol_type="skill",
            tags=["testing", "workflow"],
            is_builtin=True,
            prerequisites=["pytest"],
            compatibility=["claude"],
        )
        loaded = store.get_by_id(skill.id)

        assert loaded.description == "Red, green, refactor"
        assert loaded.instructions == "Write the test first."
        assert loaded.tags == ["testing", "workflow"]
        assert loaded.is_builtin
        assert loaded.prerequisites == ["pytest"]
        assert loaded.compatibility == ["claude"]

    def test_instructions_alias(self, store):
        skill = store.create(name="alias", instructions="from instructions")
        assert skill.content == "from instructions"
        assert skill.instructions == "from instructions"

    def test_duplicate_name_case_insensitive(self, store):
        store.create(name="My-Skill")
        with pytest.raises(DuplicateSkillError) as exc:
            store.create(name="my-skill")
        assert str(exc.value) == 'Skill "my-skill" already exists'

    def test_unknown_field_rejected(self, store):
        with pytest.raises(TypeError):
            store.create(name="x", colour="blue")


class TestRead:
    def test_get_by_name_ignores_case(self, store):
        created = store.create(name="Playwright")
        assert store.get_by_name("PLAYWRIGHT").id == created.id
        assert store.get_by_name("missing") is None

    def test_get_all(self, store):
        store.create(name="a")
        store.create(name="b")
        assert {s.name for s in store.get_all()} == {"a", "b"}

    def test_get_unknown_id(self, store):
        assert store.get_by_id("nope") is None


class TestUpdate:
    def test_partial_update(self, store):
        skill = store.create(name="x", description="old", author="Ann")
        updated = store.update(skill.id, description="new")

        assert updated.description == "new"
        assert updated.author == "Ann"
        assert updated.updated_at >= skill.updated_at

    def test_instructions_win_over_content(self, store):
        skill = store.create(name="x", content="v1")
        updated = store.update(skill.id, content="ignored", instructions="v2")

        assert updated.content == "v2"
        assert updated.instructions == "v2"

    def test_rename_to_taken_name_not_checked(self, store):
        store.create(name="first")
        second = store.create(name="second")

        renamed = store.update(second.id, name="first")
        assert renamed.name == "first"

    def test_unknown_id(self, store):
        assert store.update("nope", name="x") is None

    def test_toggle_favorite(self, store):
        skill = store.create(name="fav")
        assert store.update(skill.id, is_favorite=True).is_favorite


class TestDeleteAndSearch:
    def test_delete(self, store):
        skill = store.create(name="gone")
        assert store.delete(skill.id)
        assert not store.delete(skill.id)
        assert store.get_by_id(skill.id) is None

    def test_search(self, store):
        store.create(name="pdf", description="Read PDF files", tags=["document"])
        store.create(name="playwright", description="Browser automation", tags=["testing"])

        assert [s.name for s in store.search("BROWSER")] == ["playwright"]
        assert [s.name for s in store.search("document")] == ["pdf"]
        assert len(store.search("  ")) == 2
        assert store.search("nothing-matches") == []


class TestPersistence:
    def test_file_database(self, tmp_path):
        db_path = tmp_path / "data" / "prompthub.db"
        first = SkillStore(db_path)
        skill = first.create(name="kept")
        first.close()

        second = SkillStore(db_path)
        try:
            assert second.get_by_id(skill.id).name == "kept"
        finally:
            second.close()


class TestSkillModel:
    def test_to_dict_carries_both_names_for_body(self, store):
        skill = store.create(name="pdf", content="Body", tags=["doc"])
        data = skill.to_dict()

        assert data["content"] == data["instructions"] == "Body"
        assert data["tags"] == ["doc"]
        assert data["created_at"] == skill.created_at.isoformat()

    def test_instructions_setter(self, store):
        skill = store.create(name="pdf")
        skill.instructions = "changed"
        assert skill.content == "changed"
        assert skill.has_tag("doc") is False


class TestTagNormalization:
    def test_string_tags_become_a_list(self, store):
        skill = store.create(name="x", tags="cli")
        assert skill.tags == ["cli"]

    def test_comma_separated_string(self, store):
        skill = store.create(name="x", tags="cli, tools,")
        assert store.update(skill.id, tags="a,b").tags == ["a", "b"]
        assert skill.tags == ["cli", "tools"]


class TestSearchWildcards:
    def test_like_wildcards_are_literal(self, store):
        store.create(name="snake_case")
        store.create(name="plain")
        store.create(name="hundred", description="100% done")

        assert [s.name for s in store.search("_")] == ["snake_case"]
        assert [s.name for s in store.search("%")] == ["hundred"]
