"""Data models for the GitHub client."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class PullRequest:
    """A pull request as read from the GitHub API.

    Attributes:
        number: Pull request number.
        title: Pull request title.
        body: Pull request description, None when empty.
        author: Login of the pull request author.
        head_sha: Commit the head ref pointed at.
        base_sha: Commit the base ref pointed at.
        labels: Label names, in the order GitHub returns them.
        commits: Number of commits in the pull request.
    """

    number: int
    title: str
    body: str | None
    author: str
    head_sha: str
    base_sha: str
    labels: tuple[str, ...] = ()
    commits: int = 0

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> PullRequest:
        """Build a PullRequest from a `GET /pulls/{number}` payload."""
        return cls(
            number=data["number"],
            title=data["title"],
            body=data.get("body"),
            author=(data.get("user") or {}).get("login", ""),
            head_sha=data["head"]["sha"],
            base_sha=data["base"]["sha"],
            labels=tuple(label["name"] for label in data.get("labels", [])),
            commits=data.get("commits", 0),
        )


@dataclass
class CreatePullRequestResponse:
    """Response of a create pull request request.

    `number` is only set when GitHub accepted the request.
    """

    status: int
    number: int | None = None
    data: Any = field(default_factory=dict)

    @property
    def created(self) -> bool:
        return self.status == 201


@dataclass
class LabelResponse:
    """Response of an add labels request."""

    status: int
    data: Any = field(default_factory=list)
