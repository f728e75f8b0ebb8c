"""GitHub - REST client and Actions context for the backport run."""

from portbot.github.client import GitHubClient
from portbot.github.context import ActionContext
from portbot.github.exceptions import ContextError, GitHubError
from portbot.github.models import CreatePullRequestResponse, LabelResponse, PullRequest

__all__ = [
    "ActionContext",
    "ContextError",
    "CreatePullRequestResponse",
    "GitHubClient",
    "GitHubError",
    "LabelResponse",
    "PullRequest",
]
