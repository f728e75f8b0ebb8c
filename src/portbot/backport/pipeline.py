"""BackportPipeline - Backports the source pull request to a single target."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from portbot.backport import messages
from portbot.backport.messages import FailureReason
from portbot.backport.models import BackportOutcome, SourcePullRequest, Stage
from portbot.git import GitError, GitRefNotFoundError
from portbot.logging import truncate_output
from portbot.templates import replace_placeholders

if TYPE_CHECKING:
    from portbot.config import PullConfig
    from portbot.git import Git
    from portbot.github import GitHubClient

logger = logging.getLogger("portbot.backport")

BRANCH_NAMESPACE = "port"


def working_branch_name(pull_number: int, target: str) -> str:
    """Name of the branch holding the backport of a pull request to a target.

    The name is the same on every rerun for the same pull request and target.
    """
    return f"{BRANCH_NAMESPACE}/port-{pull_number}-to-{target}"


@dataclass
class _Attempt:
    """A backport to one target while it is in progress."""

    target: str
    branch: str
    pull_number: int = 0


class BackportPipeline:
    """Runs fetch, checkout, cherry-pick, push, create-PR and label for a target.

    A failure ends the backport to that target only. The pipeline never
    comments itself; it returns a BackportOutcome carrying the comment text.
    """

    def __init__(
        self,
        git: Git,
        github: GitHubClient,
        source: SourcePullRequest,
        labels: list[str],
        pull_config: PullConfig,
    ) -> None:
        """Initialize the pipeline.

        Args:
            git: Git wrapper for the workspace clone.
            github: GitHub client for the repository.
            source: The merged pull request to backport.
            labels: Labels to put on every backport pull request.
            pull_config: Title and description templates.
        """
        self.git = git
        self.github = github
        self.source = source
        self.labels = labels
        self.pull_config = pull_config

    def run(self, target: str) -> BackportOutcome:
        """Backport to `target`, returning how it ended."""
        attempt = _Attempt(target=target, branch=working_branch_name(self.source.number, target))
        logger.info("Start port of #%d to %s", self.source.number, attempt.branch)

        steps: tuple[tuple[Stage, Callable[[_Attempt], str | None]], ...] = (
            (Stage.FETCH, self._fetch_target),
            (Stage.CHECKOUT, self._checkout),
            (Stage.CHERRY_PICK, self._cherry_pick),
            (Stage.PUSH, self._push),
            (Stage.CREATE_PR, self._create_pr),
            (Stage.LABEL, self._label),
        )
        stage = Stage.FETCH
        try:
            for stage, step in steps:
                failure = step(attempt)
                if failure is not None:
                    return BackportOutcome(
                        target=target, success=False, stage=stage, message=failure
                    )
        except Exception as e:
            logger.exception("Backport to %s failed during %s: %s", target, stage.value, e)
            return BackportOutcome(target=target, success=False, stage=stage, message=str(e))

        return BackportOutcome(
            target=target,
            success=True,
            stage=Stage.COMMENT,
            message=messages.success(target, attempt.pull_number),
            pull_number=attempt.pull_number,
        )

    def _fetch_target(self, attempt: _Attempt) -> str | None:
        try:
            self.git.fetch(attempt.target, depth=1)
        except GitRefNotFoundError as e:
            return messages.fetch_target_failure(e.ref)
        return None

    def _checkout(self, attempt: _Attempt) -> str | None:
        try:
            self.git.checkout(attempt.branch, f"origin/{attempt.target}")
        except GitError as e:
            logger.error("Checkout of %s failed: %s", attempt.branch, e)
            return self._script_failure(attempt, FailureReason.BRANCH_FAILURE)
        return None

    def _cherry_pick(self, attempt: _Attempt) -> str | None:
        try:
            self.git.cherry_pick(list(self.source.commits))
        except GitError as e:
            logger.error("Cherry-pick onto %s failed: %s", attempt.branch, e)
            return self._script_failure(attempt, FailureReason.CHERRY_PICK_FAILURE)
        return None

    def _push(self, attempt: _Attempt) -> str | None:
        logger.info("Push branch %s to origin", attempt.branch)
        exit_code = self.git.push(attempt.branch)
        if exit_code != 0:
            return messages.push_failure(attempt.target, exit_code)
        return None

    def _create_pr(self, attempt: _Attempt) -> str | None:
        logger.info("Create PR for %s", attempt.branch)
        response = self.github.create_pr(
            title=replace_placeholders(self.pull_config.title, self.source.pull, attempt.target),
            body=replace_placeholders(
                self.pull_config.description, self.source.pull, attempt.target
            ),
            head=attempt.branch,
            base=attempt.target,
            maintainer_can_modify=True,
        )
        if not response.created or response.number is None:
            logger.error(
                "Failed to create PR for %s: %s",
                attempt.branch,
                _describe_response(response.status, response.data),
            )
            return messages.create_pr_failure(response.status)
        attempt.pull_number = response.number
        return None

    def _label(self, attempt: _Attempt) -> str | None:
        # Only logged on failure, the pull request exists already
        if not self.labels:
            return None
        try:
            response = self.github.label_pr(attempt.pull_number, self.labels)
        except Exception as e:
            logger.warning("Failed to label PR #%d: %s", attempt.pull_number, e)
            return None
        if response.status != 200:
            logger.error(
                "Failed to label PR #%d: %s",
                attempt.pull_number,
                _describe_response(response.status, response.data),
            )
        return None

    def _script_failure(self, attempt: _Attempt, reason: FailureReason) -> str:
        return messages.script_failure(
            attempt.target,
            reason,
            self.source.base_sha,
            self.source.head_sha,
            attempt.branch,
        )


def _describe_response(status: int, data: object) -> str:
    return truncate_output(json.dumps({"status": status, "data": data}, default=str))
