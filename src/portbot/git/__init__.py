"""Git - Thin wrapper around the git commands a backport needs."""

from portbot.git.exceptions import GitError, GitRefNotFoundError
from portbot.git.repository import Git

__all__ = [
    "Git",
    "GitError",
    "GitRefNotFoundError",
]
