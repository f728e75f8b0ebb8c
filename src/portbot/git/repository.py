"""Git - Runs the fetch/switch/cherry-pick/push commands of a backport."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path

from portbot.git.exceptions import GitError, GitRefNotFoundError
from portbot.logging import sanitize_for_log, truncate_output

logger = logging.getLogger("portbot.git")

# git exits with 128 when a fetched ref cannot be found on the remote
REF_NOT_FOUND_EXIT_CODE = 128

COMMITTER_ENV = {
    "GIT_COMMITTER_NAME": "github-actions[bot]",
    "GIT_COMMITTER_EMAIL": "github-actions[bot]@users.noreply.github.com",
}


class Git:
    """Runs git commands against a local clone.

    Assumes the repository is already cloned and has an `origin` remote.
    """

    def __init__(self, repo_path: str | Path = ".", timeout: float | None = None) -> None:
        """Initialize the git wrapper.

        Args:
            repo_path: Path to local repository clone
            timeout: Seconds to wait for a single git command (None waits forever)
        """
        self.repo_path = Path(repo_path)
        self.timeout = timeout

    def _run_git(self, command: str, *args: str) -> subprocess.CompletedProcess[str]:
        """Run a git command in the repo directory.

        Unlike most wrappers this never raises on a non-zero exit code, the
        callers decide what each exit code means.

        Raises:
            GitError: If the command times out
        """
        cmdline = " ".join(["git", command, *args])
        logger.info(cmdline)
        try:
            result = subprocess.run(
                ["git", command, *args],
                cwd=self.repo_path,
                env={**os.environ, **COMMITTER_ENV},
                capture_output=True,
                text=True,
                check=False,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise GitError(f"'{cmdline}' timed out after {self.timeout} seconds") from e

        if result.stderr:
            logger.debug("%s: %s", cmdline, sanitize_for_log(truncate_output(result.stderr)))
        return result

    def fetch(self, ref: str, depth: int) -> None:
        """Fetch a ref from origin.

        Args:
            ref: The sha, branch name, etc to fetch
            depth: The number of commits to fetch

        Raises:
            GitRefNotFoundError: When the ref does not exist on origin
            GitError: For any other non-zero exit code
        """
        result = self._run_git("fetch", f"--depth={depth}", "origin", ref)
        if result.returncode == REF_NOT_FOUND_EXIT_CODE:
            raise GitRefNotFoundError(f"Expected to fetch '{ref}', but couldn't find it", ref)
        if result.returncode != 0:
            raise GitError(f"'git fetch origin {ref}' failed with exit code {result.returncode}")

    def checkout(self, branch: str, start: str) -> None:
        """Create and switch to a new branch.

        Args:
            branch: Name of the branch to create
            start: Starting point of the new branch

        Raises:
            GitError: If the branch exists already or the start point is invalid
        """
        result = self._run_git("switch", "-c", branch, start)
        if result.returncode != 0:
            raise GitError(
                f"'git switch -c {branch} {start}' failed with exit code {result.returncode}"
            )

    def cherry_pick(self, shas: list[str]) -> None:
        """Cherry-pick commits onto the current branch, recording their origin.

        A failed cherry-pick is aborted before raising, so the working tree
        is clean again for the next target.

        Raises:
            GitError: If any commit could not be applied
        """
        result = self._run_git("cherry-pick", "-x", *shas)
        if result.returncode != 0:
            self._run_git("cherry-pick", "--abort")
            raise GitError(
                f"'git cherry-pick -x {' '.join(shas)}' failed with exit code {result.returncode}"
            )

    def push(self, branch: str) -> int:
        """Push a branch to origin and track it.

        Returns:
            The exit code of git push (0 on success)
        """
        result = self._run_git("push", "--set-upstream", "origin", branch)
        return result.returncode
