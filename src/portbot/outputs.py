"""ActionOutputs - Reports run results to the enclosing GitHub Actions workflow."""

from __future__ import annotations

import logging
import os
import sys
import uuid
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from portbot.backport import BackportReport

logger = logging.getLogger("portbot.outputs")

WAS_SUCCESSFUL = "was_successful"
WAS_SUCCESSFUL_BY_TARGET = "was_successful_by_target"


class ActionOutputs:
    """Writes step outputs and the failure signal of a run.

    Outputs are appended to the file named by GITHUB_OUTPUT using the
    multiline `name<<delimiter` syntax. Outside of Actions they are only logged.
    """

    def __init__(
        self,
        output_path: str | Path | None = None,
        stream: TextIO | None = None,
    ) -> None:
        """Initialize the outputs.

        Args:
            output_path: Output file, defaults to the GITHUB_OUTPUT variable.
            stream: Where workflow commands are written, defaults to stdout.
        """
        if output_path is None:
            output_path = os.environ.get("GITHUB_OUTPUT") or None
        self.output_path = Path(output_path) if output_path is not None else None
        self.stream = stream if stream is not None else sys.stdout
        self.failed = False

    def set_output(self, name: str, value: str | bool) -> None:
        if isinstance(value, bool):
            value = str(value).lower()
        if self.output_path is None:
            logger.info("Output %s=%s", name, value)
            return

        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        with open(self.output_path, "a", encoding="utf-8") as f:
            f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")

    def set_failed(self, message: str) -> None:
        """Mark the step as failed with an error annotation."""
        self.failed = True
        self.stream.write(f"::error::{_escape_data(message)}\n")
        self.stream.flush()

    def write_report(self, report: BackportReport) -> None:
        self.set_output(WAS_SUCCESSFUL, report.was_successful)
        self.set_output(WAS_SUCCESSFUL_BY_TARGET, report.by_target_text)


def _escape_data(message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
