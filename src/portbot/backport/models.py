"""Data models for the backport module."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from portbot.github import PullRequest


class Stage(str, Enum):
    """Stages of a backport to one target, in execution order."""

    FETCH = "fetch"
    CHECKOUT = "checkout"
    CHERRY_PICK = "cherry-pick"
    PUSH = "push"
    CREATE_PR = "create-pr"
    LABEL = "label"
    COMMENT = "comment"


@dataclass(frozen=True)
class SourcePullRequest:
    """The merged pull request being backported.

    Attributes:
        pull: The pull request as read from GitHub.
        commits: Its commit shas, oldest first.
        comment_body: The comment that triggered the run.
    """

    pull: PullRequest
    commits: tuple[str, ...]
    comment_body: str | None = None

    @property
    def number(self) -> int:
        return self.pull.number

    @property
    def head_sha(self) -> str:
        return self.pull.head_sha

    @property
    def base_sha(self) -> str:
        return self.pull.base_sha

    @property
    def labels(self) -> tuple[str, ...]:
        return self.pull.labels


@dataclass(frozen=True)
class BackportOutcome:
    """How the backport to one target ended.

    Attributes:
        target: The target branch.
        success: Whether a backport pull request was created.
        stage: The last stage reached; COMMENT for a success.
        message: Text commented on the source pull request.
        pull_number: Number of the created pull request, on success.
    """

    target: str
    success: bool
    stage: Stage
    message: str
    pull_number: int | None = None


@dataclass(frozen=True)
class BackportReport:
    """The outcomes of a run, in processing order."""

    outcomes: tuple[BackportOutcome, ...] = ()

    @property
    def was_successful(self) -> bool:
        """True when no target failed."""
        return all(outcome.success for outcome in self.outcomes)

    @property
    def success_by_target(self) -> dict[str, bool]:
        return {outcome.target: outcome.success for outcome in self.outcomes}

    @property
    def by_target_text(self) -> str:
        """One `target=true|false` line per processed target."""
        return "".join(
            f"{outcome.target}={str(outcome.success).lower()}\n" for outcome in self.outcomes
        )
