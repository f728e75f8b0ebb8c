"""GitHubClient - The GitHub REST calls of a backport run."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from portbot.github.exceptions import GitHubError
from portbot.github.models import CreatePullRequestResponse, LabelResponse, PullRequest
from portbot.logging import truncate_output

logger = logging.getLogger("portbot.github")

COMMITS_PER_PAGE = 100


class GitHubClient:
    """Reads pull requests and writes comments, pull requests and labels."""

    def __init__(
        self,
        repo: str,
        token: str,
        base_url: str = "https://api.github.com",
    ) -> None:
        """Initialize the GitHub client.

        Args:
            repo: GitHub repo in "owner/repo" format
            token: GitHub token with pull request and issue write access
            base_url: GitHub API base URL (for testing/enterprise)
        """
        self.repo = repo
        self.owner, self.repo_name = repo.split("/")
        self.token = token
        self.base_url = base_url.rstrip("/")
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client for GitHub API."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url,
                headers={
                    "Authorization": f"Bearer {self.token}",
                    "Accept": "application/vnd.github+json",
                    "X-GitHub-Api-Version": "2022-11-28",
                },
                timeout=30.0,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def get_pull_request(self, number: int) -> PullRequest:
        """Get a pull request.

        Raises:
            GitHubError: If the pull request cannot be read
        """
        response = self.client.get(f"/repos/{self.repo}/pulls/{number}")
        if response.status_code != 200:
            raise GitHubError(
                f"Failed to get PR {number}: {response.status_code} - {response.text}"
            )
        return PullRequest.from_api(response.json())

    def is_merged(self, pr: PullRequest) -> bool:
        """Check whether a pull request has been merged.

        Raises:
            GitHubError: If GitHub answers with anything but merged/not merged
        """
        response = self.client.get(f"/repos/{self.repo}/pulls/{pr.number}/merge")
        if response.status_code == 204:
            return True
        if response.status_code == 404:
            return False
        raise GitHubError(
            f"Failed to check merge status of PR {pr.number}: "
            f"{response.status_code} - {response.text}"
        )

    def get_commits(self, pr: PullRequest) -> list[str]:
        """List the commit shas of a pull request, oldest first.

        Raises:
            GitHubError: If a page of commits cannot be read
        """
        shas: list[str] = []
        page = 1
        while True:
            response = self.client.get(
                f"/repos/{self.repo}/pulls/{pr.number}/commits",
                params={"per_page": COMMITS_PER_PAGE, "page": page},
            )
            if response.status_code != 200:
                raise GitHubError(
                    f"Failed to list commits of PR {pr.number}: "
                    f"{response.status_code} - {response.text}"
                )
            commits = response.json()
            shas.extend(commit["sha"] for commit in commits)
            if len(commits) < COMMITS_PER_PAGE:
                return shas
            page += 1

    def create_comment(self, issue_number: int, body: str) -> None:
        """Comment on an issue or pull request.

        Raises:
            GitHubError: If the comment was not created
        """
        response = self.client.post(
            f"/repos/{self.repo}/issues/{issue_number}/comments",
            json={"body": body},
        )
        if response.status_code != 201:
            raise GitHubError(
                f"Failed to comment on #{issue_number}: {response.status_code} - {response.text}"
            )

    def create_pr(
        self,
        title: str,
        body: str,
        head: str,
        base: str,
        maintainer_can_modify: bool = True,
    ) -> CreatePullRequestResponse:
        """Create a pull request.

        A rejected request is returned rather than raised, so the caller can
        report the status code.
        """
        logger.info("Creating PR: %s (%s -> %s)", title, head, base)
        response = self.client.post(
            f"/repos/{self.repo}/pulls",
            json={
                "title": title,
                "body": body,
                "head": head,
                "base": base,
                "maintainer_can_modify": maintainer_can_modify,
            },
        )
        data = _json_or_text(response)
        if response.status_code != 201:
            return CreatePullRequestResponse(status=response.status_code, data=data)
        return CreatePullRequestResponse(
            status=response.status_code,
            number=data["number"],
            data=data,
        )

    def label_pr(self, number: int, labels: list[str]) -> LabelResponse:
        """Add labels to a pull request."""
        logger.info("Adding labels %s to PR #%d", labels, number)
        response = self.client.post(
            f"/repos/{self.repo}/issues/{number}/labels",
            json={"labels": labels},
        )
        return LabelResponse(status=response.status_code, data=_json_or_text(response))


def _json_or_text(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return truncate_output(response.text)
