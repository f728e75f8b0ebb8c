"""Backport - Runs the backport of one pull request to all requested targets."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from portbot.backport import messages
from portbot.backport.command import parse_targets, select_targets
from portbot.backport.exceptions import BackportRunError
from portbot.backport.labels import labels_to_copy
from portbot.backport.models import BackportOutcome, BackportReport, SourcePullRequest, Stage
from portbot.backport.pipeline import BackportPipeline
from portbot.github import GitHubError

if TYPE_CHECKING:
    from portbot.config import BackportConfig
    from portbot.git import Git
    from portbot.github import ActionContext, GitHubClient
    from portbot.outputs import ActionOutputs

logger = logging.getLogger("portbot.backport")


class Backport:
    """Backports a merged pull request to the branches named in its `/port` comment.

    Targets are processed one at a time in the order they were named, since
    they all share the single workspace clone. Every target gets exactly one
    comment on the source pull request and one line in the report.
    """

    def __init__(
        self,
        github: GitHubClient,
        git: Git,
        config: BackportConfig,
        context: ActionContext,
        outputs: ActionOutputs,
    ) -> None:
        """Initialize the run.

        Args:
            github: GitHub client for the repository.
            git: Git wrapper for the workspace clone.
            config: Run settings.
            context: The pull request and comment that triggered the run.
            outputs: Where the run outputs and failure are reported.
        """
        self.github = github
        self.git = git
        self.config = config
        self.context = context
        self.outputs = outputs

    def run(self) -> BackportReport | None:
        """Run the backport and write its outputs.

        Returns:
            The report, or None when the run failed as a whole. A failed run
            is reported through `outputs.set_failed` and writes no outputs.
        """
        try:
            report = self._run()
        except Exception as e:
            logger.exception("Backport of #%d failed: %s", self.context.pull_number, e)
            error = e if isinstance(e, BackportRunError) else BackportRunError(str(e))
            self.outputs.set_failed(str(error))
            return None

        self.outputs.write_report(report)
        return report

    def _run(self) -> BackportReport:
        pull_number = self.context.pull_number
        try:
            pull = self.github.get_pull_request(pull_number)
            merged = self.github.is_merged(pull)
        except GitHubError as e:
            raise BackportRunError(f"Failed to read pull request #{pull_number}: {e}") from e

        if not merged:
            logger.info("Pull request #%d is not merged, nothing to backport", pull_number)
            self.github.create_comment(pull_number, messages.not_merged())
            return BackportReport()

        commits = self.github.get_commits(pull)
        logger.info("Found commits: %s", commits)
        source = SourcePullRequest(
            pull=pull,
            commits=tuple(commits),
            comment_body=self.context.comment_body,
        )

        logger.info("PR comment body: %s", source.comment_body)
        targets = select_targets(parse_targets(source.comment_body or ""))
        logger.info("Detected targets: %s", targets)
        if not targets:
            return BackportReport()

        # One extra commit in case this is a shallow clone
        logger.info("Fetching all the commits from the pull request: %d", pull.commits + 1)
        self.git.fetch(f"refs/pull/{pull_number}/head", depth=pull.commits + 1)

        labels = labels_to_copy(
            source.labels, self.config.copy_labels_pattern, self.config.label_pattern
        )
        logger.info(
            "Will copy labels matching %s. Found matching labels: %s",
            self.config.copy_labels_pattern.pattern if self.config.copy_labels_pattern else None,
            labels,
        )

        pipeline = BackportPipeline(self.git, self.github, source, labels, self.config.pull)
        return BackportReport(tuple(self._record(pipeline.run(target)) for target in targets))

    def _record(self, outcome: BackportOutcome) -> BackportOutcome:
        """Log an outcome and comment it on the source pull request.

        When the comment cannot be posted the outcome becomes a failure at
        the comment stage and the error itself is commented once. Only a
        second failed comment stops the run.
        """
        if outcome.success:
            logger.info(outcome.message)
        else:
            logger.error(outcome.message)

        try:
            self.github.create_comment(self.context.pull_number, outcome.message)
            return outcome
        except GitHubError as e:
            logger.error("Failed to comment the backport to %s: %s", outcome.target, e)
            outcome = BackportOutcome(
                target=outcome.target,
                success=False,
                stage=Stage.COMMENT,
                message=str(e),
                pull_number=outcome.pull_number,
            )

        try:
            self.github.create_comment(self.context.pull_number, outcome.message)
        except GitHubError as e:
            raise BackportRunError(
                f"Failed to report the backport to {outcome.target}: {e}"
            ) from e
        return outcome
