"""ActionContext - What triggered the GitHub Actions run."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from portbot.github.exceptions import ContextError


@dataclass(frozen=True)
class ActionContext:
    """The repository, pull request and trigger comment of a run.

    Attributes:
        owner: Owner of the repository.
        repo: Name of the repository.
        pull_number: Number of the pull request to backport.
        comment_body: Body of the comment that triggered the run, if any.
    """

    owner: str
    repo: str
    pull_number: int
    comment_body: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @classmethod
    def from_payload(cls, repository: str, payload: Mapping[str, Any]) -> ActionContext:
        """Build the context from a webhook event payload.

        Args:
            repository: The "owner/repo" the workflow runs in.
            payload: The event payload (issue_comment or pull_request event).

        Raises:
            ContextError: If the payload does not reference a pull request.
        """
        if "/" not in repository:
            raise ContextError(f"Expected repository as 'owner/repo', got '{repository}'")
        owner, repo = repository.split("/", 1)
        repo = (payload.get("repository") or {}).get("name") or repo

        issue = payload.get("issue") or payload.get("pull_request") or {}
        if "number" not in issue:
            raise ContextError("Event payload does not reference a pull request")

        comment = payload.get("comment") or {}
        return cls(
            owner=owner,
            repo=repo,
            pull_number=int(issue["number"]),
            comment_body=comment.get("body"),
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ActionContext:
        """Build the context from the GITHUB_* variables of an Actions runner.

        Raises:
            ContextError: If a variable is missing or the event file is unreadable.
        """
        env = os.environ if environ is None else environ
        repository = env.get("GITHUB_REPOSITORY")
        event_path = env.get("GITHUB_EVENT_PATH")
        if not repository or not event_path:
            raise ContextError("GITHUB_REPOSITORY and GITHUB_EVENT_PATH must be set")

        try:
            payload = json.loads(Path(event_path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ContextError(f"Cannot read event payload {event_path}: {e}") from e

        if not isinstance(payload, dict):
            raise ContextError(f"Event payload must be an object, got {type(payload).__name__}")
        return cls.from_payload(repository, payload)
