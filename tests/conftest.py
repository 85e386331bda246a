"""Shared test fixtures for git-sub-project."""

import subprocess
from pathlib import Path

import pytest

from git_sub_project.config import LinkConfig
from git_sub_project.layout import DEFAULT_METADATA_DIR

GIT_IDENTITY = ["-c", "user.name=test", "-c", "user.email=test@example.com"]


def run_git(args: list[str], cwd: Path) -> subprocess.CompletedProcess:
    return subprocess.run(
        ["git"] + GIT_IDENTITY + args,
        cwd=cwd, capture_output=True, text=True, check=True,
    )


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch, tmp_path):
    """Keep the user's own settings file out of every test."""
    monkeypatch.delenv("GIT_SUB_PROJECT_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))


@pytest.fixture
def git():
    """Run git with a throwaway identity, raising on failure."""
    return run_git


@pytest.fixture
def make_metadata():
    """Create the minimum metadata structure git recognises."""

    def _make(directory: Path, name: str = DEFAULT_METADATA_DIR) -> Path:
        meta = directory / name
        (meta / "objects").mkdir(parents=True)
        (meta / "refs" / "heads").mkdir(parents=True)
        (meta / "HEAD").write_text("ref: refs/heads/main\n")
        (meta / "config").write_text(
            "[core]\n\trepositoryformatversion = 0\n\tbare = false\n"
        )
        return meta

    return _make


@pytest.fixture
def make_unlinked(tmp_path, make_metadata):
    """Create a sub-project whose pointer was stripped by a parent clone."""

    def _make(rel: str) -> Path:
        directory = tmp_path / rel
        directory.mkdir(parents=True, exist_ok=True)
        (directory / "README.md").write_text(f"# {directory.name}\n")
        make_metadata(directory)
        return directory

    return _make


@pytest.fixture
def make_git_sub_project(tmp_path):
    """Create a real committed repository, then strip it to the unlinked state."""

    def _make(rel: str) -> Path:
        directory = tmp_path / rel
        directory.mkdir(parents=True, exist_ok=True)
        (directory / "README.md").write_text(f"# {directory.name}\n")
        run_git(["init", "-b", "main"], directory)
        run_git(["add", "."], directory)
        run_git(["commit", "-m", "init"], directory)
        (directory / ".git").rename(directory / DEFAULT_METADATA_DIR)
        return directory

    return _make


@pytest.fixture
def structural_config(tmp_path):
    return LinkConfig(root=tmp_path, probe="structural")


@pytest.fixture
def git_config(tmp_path):
    return LinkConfig(root=tmp_path, probe="git")
