"""Shared fixtures"""

import stat
from pathlib import Path

import pytest

from prompthub.storage import SkillStore


@pytest.fixture
def home(tmp_path, monkeypatch) -> Path:
    """Point the home directory at a temp folder so platform paths stay inside it"""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("USERPROFILE", str(home_dir))
    monkeypatch.delenv("PROMPTHUB_CONFIG", raising=False)
    monkeypatch.delenv("PROMPTHUB_DATA_DIR", raising=False)
    return home_dir


@pytest.fixture
def store():
    skill_store = SkillStore()
    yield skill_store
    skill_store.close()


def write_script(path: Path, body: str) -> Path:
    path.write_text("#!/bin/sh\n" + body, encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def fake_git(tmp_path) -> Path:
    """A stand-in for git that 'clones' by creating the destination with a SKILL.md.

    The destination is the last argument, as in ``git clone --depth 1 URL DEST``.
    """
    return write_script(
        tmp_path / "fake-git",
        'for dest; do :; done\n'
        'mkdir -p "$dest"\n'
        'cat > "$dest/SKILL.md" <<EOF\n'
        '---\n'
        'name: widget\n'
        'description: A cloned skill\n'
        '---\n'
        'Use the widget.\n'
        'EOF\n',
    )


@pytest.fixture
def failing_git(tmp_path) -> Path:
    """Creates a partial destination, then fails like git does"""
    return write_script(
        tmp_path / "failing-git",
        'for dest; do :; done\n'
        'mkdir -p "$dest"\n'
        'echo "fatal: repository not found" >&2\n'
        'exit 128\n',
    )


@pytest.fixture
def make_script(tmp_path):
    """Factory for throwaway executables in the test's temp dir"""
    def _make(name: str, body: str) -> Path:
        return write_script(tmp_path / name, body)
    return _make
