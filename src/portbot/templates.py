"""Placeholder substitution for backport pull request titles and bodies."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from portbot.github import PullRequest

PLACEHOLDER_RE = re.compile(
    r"\$\{(pull_author|pull_number|pull_title|pull_description|target_branch)\}"
)


def replace_placeholders(template: str, pull: PullRequest, target: str) -> str:
    """Fill in the placeholders of a title or description template.

    Supported placeholders are ${pull_author}, ${pull_number}, ${pull_title},
    ${pull_description} and ${target_branch}. Every occurrence is replaced in
    a single pass, so placeholders inside substituted values stay as written.
    """
    values = {
        "pull_author": pull.author,
        "pull_number": str(pull.number),
        "pull_title": pull.title,
        "pull_description": pull.body or "",
        "target_branch": target,
    }
    return PLACEHOLDER_RE.sub(lambda match: values[match.group(1)], template)
