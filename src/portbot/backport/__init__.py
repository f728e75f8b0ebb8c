"""Backport package - Per-target backport pipeline and run orchestration."""

from portbot.backport.command import PORT_COMMAND, find_port_command, parse_targets, select_targets
from portbot.backport.exceptions import BackportError, BackportRunError
from portbot.backport.labels import labels_to_copy
from portbot.backport.messages import FailureReason
from portbot.backport.models import (
    BackportOutcome,
    BackportReport,
    SourcePullRequest,
    Stage,
)
from portbot.backport.orchestrator import Backport
from portbot.backport.pipeline import BackportPipeline, working_branch_name

__all__ = [
    "PORT_COMMAND",
    "Backport",
    "BackportError",
    "BackportOutcome",
    "BackportPipeline",
    "BackportReport",
    "BackportRunError",
    "FailureReason",
    "SourcePullRequest",
    "Stage",
    "find_port_command",
    "labels_to_copy",
    "parse_targets",
    "select_targets",
    "working_branch_name",
]
