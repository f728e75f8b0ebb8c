"""Comment texts reported on the source pull request.

Every function here is pure: the same arguments always produce the same
text, which people read in the pull request and tests match literally.
"""

from __future__ import annotations

from enum import IntEnum


class FailureReason(IntEnum):
    """Why the local backport steps failed."""

    UNKNOWN_SCRIPT_ERROR = 1
    WORKTREE_FAILURE = 2
    BRANCH_FAILURE = 3
    CHERRY_PICK_FAILURE = 4
    COMMITS_UNAVAILABLE = 5
    COMMITS_MISSING = 6

    @classmethod
    def from_code(cls, code: int) -> FailureReason:
        """Map an exit code to a reason, unknown codes map to UNKNOWN_SCRIPT_ERROR."""
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN_SCRIPT_ERROR

    @property
    def description(self) -> str:
        return _REASONS[self]

    @property
    def can_cherry_pick_locally(self) -> bool:
        """Whether a manual cherry-pick recipe applies to this failure."""
        return self <= FailureReason.CHERRY_PICK_FAILURE


_REASONS = {
    FailureReason.UNKNOWN_SCRIPT_ERROR: "due to an unknown script error",
    FailureReason.WORKTREE_FAILURE: (
        "because it was unable to create/access the git worktree directory"
    ),
    FailureReason.BRANCH_FAILURE: "because it was unable to create a new branch",
    FailureReason.CHERRY_PICK_FAILURE: "because it was unable to cherry-pick the commit(s)",
    FailureReason.COMMITS_UNAVAILABLE: "because 1 or more of the commits are not available",
    FailureReason.COMMITS_MISSING: "because 1 or more of the commits are not available",
}


def not_merged() -> str:
    return "Only merged pull requests can be backported."


def fetch_target_failure(target: str) -> str:
    return (
        f"Backport failed for `{target}`: couldn't find remote ref `{target}`.\n"
        f"Please ensure that this Github repo has a branch named `{target}`."
    )


def script_failure(
    target: str,
    reason: FailureReason | int,
    base_sha: str,
    head_sha: str,
    branch_name: str,
) -> str:
    """Explain a failed local backport step and how to redo it by hand.

    Args:
        target: The target branch.
        reason: A FailureReason or its exit code.
        base_sha: Commit the source pull request's base pointed at.
        head_sha: Commit the source pull request's head pointed at.
        branch_name: The working branch of the backport.
    """
    if not isinstance(reason, FailureReason):
        reason = FailureReason.from_code(reason)

    if reason.can_cherry_pick_locally:
        suggestion = (
            "```bash\n"
            f"git fetch origin {target}\n"
            f"git worktree add -d .worktree/{branch_name} origin/{target}\n"
            f"cd .worktree/{branch_name}\n"
            f"git checkout -b {branch_name}\n"
            f"ancref=$(git merge-base {base_sha} {head_sha})\n"
            f"git cherry-pick -x $ancref..{head_sha}\n"
            "```"
        )
    else:
        suggestion = "Note that rebase and squash merges are not supported at this time."

    return (
        f"Backport failed for `{target}`, {reason.description}.\n"
        "\n"
        "Please cherry-pick the changes locally.\n"
        f"{suggestion}"
    )


def push_failure(target: str, exit_code: int) -> str:
    return f"Git push to origin failed for {target} with exitcode {exit_code}"


def create_pr_failure(status: int) -> str:
    return (
        "Backport branch created but failed to create PR. \n"
        f"Request to create PR rejected with status {status}.\n"
        "\n"
        "(see action log for full response)"
    )


def success(target: str, pull_number: int) -> str:
    return f"Successfully created backport PR for `{target}`:\n- #{pull_number}"
