"""Shared helpers for tests that run the real git executable."""

import os
import subprocess
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_git_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep git from reading user config or discovering repositories above tmp_path."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", os.devnull)
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))


def run_git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=repo,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


def commit_file(repo: Path, name: str, content: str, message: str) -> None:
    path = repo / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    run_git(repo, "add", name)
    run_git(repo, "commit", "-q", "-m", message)


def init_git_repo(repo: Path, branch: str, *, with_commit: bool = True) -> None:
    """Initialize a repository on `branch`, optionally with one commit."""
    run_git(repo, "init", "-q")
    run_git(repo, "symbolic-ref", "HEAD", f"refs/heads/{branch}")
    run_git(repo, "config", "user.name", "Test User")
    run_git(repo, "config", "user.email", "test@example.com")
    run_git(repo, "config", "commit.gpgsign", "false")
    if with_commit:
        commit_file(repo, "README.md", "# repo\n", "Initial commit")
