"""Shared pytest fixtures and configuration."""

import re

import pytest

from portbot.config import BackportConfig, PullConfig
from portbot.github import ActionContext, PullRequest


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: tests running the real git binary")


# Shared fixtures


@pytest.fixture
def sample_pull() -> PullRequest:
    """A merged pull request with two commits."""
    return PullRequest(
        number=42,
        title="Fix the widget",
        body="The widget was broken.",
        author="octocat",
        head_sha="headsha",
        base_sha="basesha",
        labels=("backport-to-main", "security", "backport-to-release-2.0"),
        commits=2,
    )


@pytest.fixture
def sample_config() -> BackportConfig:
    """Config copying every label that does not request a backport."""
    return BackportConfig(
        github_token="test-token",
        label_pattern=re.compile(r"^backport-to-.*$"),
        copy_labels_pattern=re.compile(r"^(?!backport-to-).*$"),
        pull=PullConfig(
            title="[Backport ${target_branch}] ${pull_title}",
            description="Backport of #${pull_number} to `${target_branch}`.",
        ),
    )


@pytest.fixture
def sample_context() -> ActionContext:
    """Context of a `/port` comment on pull request #42."""
    return ActionContext(
        owner="owner",
        repo="repo",
        pull_number=42,
        comment_body="please /port main,release-2.0",
    )
