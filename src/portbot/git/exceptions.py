"""Custom exceptions for the git wrapper."""


class GitError(Exception):
    """A git command exited unsuccessfully."""


class GitRefNotFoundError(GitError):
    """The requested ref does not exist on the remote."""

    def __init__(self, message: str, ref: str) -> None:
        super().__init__(message)
        self.ref = ref
