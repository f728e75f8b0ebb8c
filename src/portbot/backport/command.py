"""Parsing of the `/port` trigger comment."""

from __future__ import annotations

import logging

logger = logging.getLogger("portbot.backport")

PORT_COMMAND = "/port"


def find_port_command(body: str | None) -> str | None:
    """Return the text following the `/port` command, or None without one.

    One character after the command (normally a space) is skipped.
    """
    if body is None:
        return None
    index = body.find(PORT_COMMAND)
    if index < 0:
        return None
    return body[index + len(PORT_COMMAND) + 1 :]


def parse_targets(body: str | None) -> list[str]:
    """Return the comma separated target branches of a `/port` comment.

    Names are not trimmed or validated, so `"/port a, b,"` yields
    `["a", " b", ""]`. A body without the command yields no targets.
    """
    arguments = find_port_command(body)
    if arguments is None:
        return []
    return arguments.split(",")


def select_targets(candidates: list[str]) -> list[str]:
    """Drop empty names and repeated names from parsed targets, keeping order."""
    targets: list[str] = []
    for name in candidates:
        if not name.strip():
            logger.warning("Ignoring empty target branch name %r", name)
        elif name in targets:
            logger.warning("Ignoring repeated target branch %s", name)
        else:
            targets.append(name)
    return targets
