"""Integration tests for the Git wrapper against a local bare remote.

These tests require the git binary. Run with: pytest tests/integration/ -m integration
"""

import shutil
import subprocess
from pathlib import Path

import pytest

from portbot.git import Git, GitError, GitRefNotFoundError

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(shutil.which("git") is None, reason="git binary required"),
]


def run(cwd: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args], cwd=cwd, check=True, capture_output=True, text=True
    )
    return result.stdout.strip()


def commit_file(repo: Path, name: str, content: str, message: str) -> str:
    (repo / name).write_text(content)
    run(repo, "add", name)
    run(repo, "commit", "-m", message)
    return run(repo, "rev-parse", "HEAD")


@pytest.fixture
def clone(tmp_path: Path) -> Path:
    """A clone whose origin has `main`, `release` and a merged `feature` commit.

    `feature` adds one new file on top of `main`; `release` branches off
    before it and changes `shared.txt` differently than `main`.
    """
    origin = tmp_path / "origin.git"
    run(tmp_path, "init", "--bare", str(origin))

    repo = tmp_path / "repo"
    run(tmp_path, "clone", origin.as_uri(), str(repo))
    run(repo, "config", "user.email", "test@example.com")
    run(repo, "config", "user.name", "Test User")
    run(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    commit_file(repo, "shared.txt", "base\n", "base")
    run(repo, "push", "origin", "main")

    run(repo, "checkout", "-b", "release")
    commit_file(repo, "shared.txt", "release\n", "release change")
    run(repo, "push", "origin", "release")

    run(repo, "checkout", "main")
    commit_file(repo, "shared.txt", "main\n", "main change")
    run(repo, "push", "origin", "main")
    return repo


@pytest.fixture
def git(clone: Path) -> Git:
    return Git(repo_path=clone, timeout=60)


class TestFetch:
    """Tests for fetch."""

    def test_fetch_existing_branch(self, git: Git) -> None:
        git.fetch("release", depth=1)

    def test_fetch_missing_branch(self, git: Git) -> None:
        with pytest.raises(GitRefNotFoundError) as exc_info:
            git.fetch("does-not-exist", depth=1)

        assert exc_info.value.ref == "does-not-exist"


class TestBackportFlow:
    """Tests for checkout, cherry-pick and push together."""

    def test_cherry_pick_and_push(self, git: Git, clone: Path) -> None:
        sha = commit_file(clone, "feature.txt", "feature\n", "add feature")

        git.fetch("release", depth=1)
        git.checkout("port/port-1-to-release", "origin/release")
        git.cherry_pick([sha])

        assert (clone / "feature.txt").read_text() == "feature\n"
        message = run(clone, "log", "-1", "--format=%B")
        assert f"(cherry picked from commit {sha})" in message
        assert run(clone, "log", "-1", "--format=%cn") == "github-actions[bot]"

        assert git.push("port/port-1-to-release") == 0
        remote = run(clone, "ls-remote", "origin", "port/port-1-to-release")
        assert remote.startswith(run(clone, "rev-parse", "HEAD"))

    def test_checkout_existing_branch_fails(self, git: Git) -> None:
        git.fetch("release", depth=1)
        git.checkout("port/port-1-to-release", "origin/release")

        with pytest.raises(GitError):
            git.checkout("port/port-1-to-release", "origin/release")

    def test_conflicting_cherry_pick_is_aborted(self, git: Git, clone: Path) -> None:
        conflicting = run(clone, "rev-parse", "HEAD")

        git.fetch("release", depth=1)
        git.checkout("port/port-1-to-release", "origin/release")
        with pytest.raises(GitError):
            git.cherry_pick([conflicting])

        assert run(clone, "status", "--porcelain") == ""
        assert not (clone / ".git" / "CHERRY_PICK_HEAD").exists()
        assert (clone / "shared.txt").read_text() == "release\n"
