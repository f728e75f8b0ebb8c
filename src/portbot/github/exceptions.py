"""Custom exceptions for the GitHub client."""


class GitHubError(Exception):
    """Base exception for GitHub API errors."""


class ContextError(GitHubError):
    """The GitHub Actions event context is missing or incomplete."""
