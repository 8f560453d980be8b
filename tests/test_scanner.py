"""Tests for local skill discovery"""

import pytest

from prompthub.skills.platforms import get_platform_by_id
from prompthub.skills.scanner import load_local_skill, scan_local, scan_local_preview, scan_locations

CLAUDE = get_platform_by_id("claude")
CURSOR = get_platform_by_id("cursor")


def add_skill(root, folder, content, manifest=None):
    skill_dir = root / folder
    skill_dir.mkdir(parents=True)
    (skill_dir / "SKILL.md").write_text(content, encoding="utf-8")
    if manifest is not None:
        (skill_dir / "manifest.json").write_text(manifest, encoding="utf-8")
    return skill_dir / "SKILL.md"


class TestLoadLocalSkill:
    def test_frontmatter_wins(self, tmp_path):
        path = add_skill(
            tmp_path, "folder",
            "---\nname: alpha\ndescription: First\ntags: [x]\n---\nBody",
            manifest='{"name": "ignored", "author": "Manifest Author"}',
        )
        local = load_local_skill(path)

        assert local.name == "alpha"
        assert local.description == "First"
        assert local.author == "Manifest Author"
        assert local.tags == ["x"]
        assert local.instructions.endswith("Body")

    def test_defaults(self, tmp_path):
        local = load_local_skill(add_skill(tmp_path, "beta", "plain markdown"))

        assert local.name == "beta"
        assert local.description == "Local skill found in beta"
        assert local.version == "1.0.0"
        assert local.author == "Local"
        assert local.tags == ["local", "discovered"]


class TestScanLocations:
    def test_one_location_per_platform(self, home):
        locations = scan_locations([CLAUDE, CURSOR], os_key="linux")
        assert [loc.path for loc in locations] == [
            home / ".claude" / "skills",
            home / ".cursor" / "skills",
        ]

    def test_shared_path_claimed_once(self, home):
        locations = scan_locations([CLAUDE, CLAUDE], os_key="linux")
        assert len(locations) == 1


class TestScanLocal:
    @pytest.mark.asyncio
    async def test_import_then_skip(self, home, store):
        root = home / ".claude" / "skills"
        add_skill(root, "alpha", "---\nname: alpha\ndescription: First\n---\nBody")
        add_skill(root, "beta", "no frontmatter")
        (root / "not-a-skill").mkdir()
        (root / "loose.md").write_text("ignored")

        result = await scan_local(store, [CLAUDE, CURSOR], os_key="linux")

        assert result.imported == 2
        assert result.skipped == 0
        assert result.failed == 0
        assert len(result.skill_ids) == 2

        alpha = store.get_by_name("alpha")
        assert alpha.protocol_type == "skill"
        assert "claude" in alpha.tags
        assert store.get_by_name("beta").tags == ["local", "discovered", "claude"]

        again = await scan_local(store, [CLAUDE, CURSOR], os_key="linux")
        assert again.imported == 0
        assert again.skipped == 2
        assert again.total == 2

    @pytest.mark.asyncio
    async def test_bad_file_counted_as_failed(self, home, store):
        root = home / ".claude" / "skills"
        add_skill(root, "good", "---\nname: good\n---\nBody")
        bad = root / "bad"
        bad.mkdir()
        (bad / "SKILL.md").write_bytes(b"\xff\xfe\xfa not utf-8")

        result = await scan_local(store, [CLAUDE], os_key="linux")

        assert result.imported == 1
        assert result.failed == 1
        assert len(result.errors) == 1
        assert "bad" in result.errors[0]

    @pytest.mark.asyncio
    async def test_nothing_to_scan(self, home, store):
        result = await scan_local(store, [CLAUDE, CURSOR], os_key="linux")
        assert result.total == 0
        assert store.get_all() == []


class TestScanLocalPreview:
    @pytest.mark.asyncio
    async def test_same_name_merged(self, home, store):
        add_skill(home / ".claude" / "skills", "shared", "---\nname: shared\n---\nClaude copy")
        add_skill(home / ".cursor" / "skills", "shared", "---\nname: shared\n---\nCursor copy")
        add_skill(home / ".cursor" / "skills", "solo", "---\nname: solo\n---\nOnly here")

        found = await scan_local_preview([CLAUDE, CURSOR], os_key="linux")
        by_name = {item.name: item for item in found}

        assert set(by_name) == {"shared", "solo"}
        assert by_name["shared"].platforms == ["Claude Code", "Cursor"]
        assert "Claude copy" in by_name["shared"].instructions
        assert by_name["shared"].file_path.endswith("SKILL.md")
        assert by_name["solo"].platforms == ["Cursor"]
        assert by_name["solo"].to_dict()["platforms"] == ["Cursor"]

    @pytest.mark.asyncio
    async def test_preview_does_not_import(self, home, store):
        add_skill(home / ".claude" / "skills", "alpha", "---\nname: alpha\n---\nBody")

        await scan_local_preview([CLAUDE], os_key="linux")
        assert store.get_all() == []

    @pytest.mark.asyncio
    async def test_non_string_manifest_values_ignored(self, home):
        root = home / ".claude" / "skills"
        add_skill(root, "bad", "plain body", manifest='{"name": ["x"], "author": 3}')
        add_skill(root, "good", "---\nname: good\n---\nBody")

        found = await scan_local_preview([CLAUDE], os_key="linux")

        assert sorted(item.name for item in found) == ["bad", "good"]
        bad = next(item for item in found if item.name == "bad")
        assert bad.author == "Local"
