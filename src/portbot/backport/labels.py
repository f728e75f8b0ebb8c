"""Selection of the labels copied onto backport pull requests."""

from __future__ import annotations

import re
from collections.abc import Iterable


def labels_to_copy(
    labels: Iterable[str],
    copy_pattern: re.Pattern[str] | None,
    trigger_pattern: re.Pattern[str],
) -> list[str]:
    """Return the labels matching `copy_pattern` but not `trigger_pattern`.

    Labels that request a backport are never copied, even when they also
    match `copy_pattern`. Without a copy pattern nothing is copied.
    """
    if copy_pattern is None:
        return []
    return [
        label
        for label in labels
        if copy_pattern.search(label) and not trigger_pattern.search(label)
    ]
