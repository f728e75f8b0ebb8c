"""Configuration loading for portbot runs."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

DEFAULT_LABEL_PATTERN = r"^backport-to-.*$"
DEFAULT_PULL_TITLE = "[Backport ${target_branch}] ${pull_title}"
DEFAULT_PULL_DESCRIPTION = "# Description\nBackport of #${pull_number} to `${target_branch}`."

# Action inputs understood by config_from_env, without their INPUT_ prefix
INPUT_KEYS = (
    "github_token",
    "github_workspace",
    "github_api_url",
    "label_pattern",
    "copy_labels_pattern",
    "pull_title",
    "pull_description",
    "git_timeout",
)


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass
class PullConfig:
    """Templates for the backport pull requests."""

    title: str = DEFAULT_PULL_TITLE
    description: str = DEFAULT_PULL_DESCRIPTION


@dataclass
class BackportConfig:
    """Settings of a backport run.

    `label_pattern` matches the labels used to request backports, those are
    never copied. `copy_labels_pattern` selects the labels copied to every
    backport pull request; when unset no labels are copied.
    """

    github_token: str
    workspace: Path = field(default_factory=Path)
    github_api_url: str = "https://api.github.com"
    label_pattern: re.Pattern[str] = field(
        default_factory=lambda: re.compile(DEFAULT_LABEL_PATTERN)
    )
    copy_labels_pattern: re.Pattern[str] | None = None
    pull: PullConfig = field(default_factory=PullConfig)
    git_timeout: float | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], root_path: Path | None = None) -> BackportConfig:
        """Create config from dictionary.

        Args:
            data: Flat mapping of the keys listed in INPUT_KEYS. Empty strings
                  count as unset, which is how Actions passes omitted inputs.
            root_path: Directory relative workspaces are resolved against.

        Returns:
            Parsed configuration object.

        Raises:
            ConfigError: If the token is missing or a value is invalid.
        """
        values = {key: value for key, value in data.items() if value not in (None, "")}

        token = values.get("github_token")
        if not token:
            raise ConfigError("Missing required field: github_token")

        workspace = Path(values.get("github_workspace", "."))
        if root_path is not None and not workspace.is_absolute():
            workspace = root_path / workspace

        copy_pattern = values.get("copy_labels_pattern")

        return cls(
            github_token=str(token),
            workspace=workspace,
            github_api_url=str(values.get("github_api_url", "https://api.github.com")),
            label_pattern=_compile(
                "label_pattern", values.get("label_pattern", DEFAULT_LABEL_PATTERN)
            ),
            copy_labels_pattern=(
                _compile("copy_labels_pattern", copy_pattern) if copy_pattern is not None else None
            ),
            pull=PullConfig(
                title=str(values.get("pull_title", DEFAULT_PULL_TITLE)),
                description=str(values.get("pull_description", DEFAULT_PULL_DESCRIPTION)),
            ),
            git_timeout=_parse_timeout(values.get("git_timeout")),
        )


def _compile(name: str, pattern: Any) -> re.Pattern[str]:
    try:
        return re.compile(str(pattern))
    except re.error as e:
        raise ConfigError(f"Invalid regular expression for {name}: {e}") from e


def _parse_timeout(value: Any) -> float | None:
    if value is None:
        return None
    try:
        timeout = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"git_timeout must be a number of seconds, got {value!r}") from e
    if timeout <= 0:
        raise ConfigError(f"git_timeout must be positive, got {value!r}")
    return timeout


def load_config(
    config_path: Path | str,
    environ: Mapping[str, str] | None = None,
) -> BackportConfig:
    """Load configuration from a YAML file.

    The token may be left out of the file, it then comes from the
    GITHUB_TOKEN environment variable.

    Raises:
        ConfigError: If file doesn't exist or is invalid.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a YAML mapping, got {type(data).__name__}")

    unknown = sorted(set(data) - set(INPUT_KEYS))
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    env = os.environ if environ is None else environ
    data.setdefault("github_token", env.get("GITHUB_TOKEN"))
    return BackportConfig.from_dict(data, config_path.parent)


def config_from_env(environ: Mapping[str, str] | None = None) -> BackportConfig:
    """Load configuration from GitHub Actions inputs (INPUT_* variables).

    Raises:
        ConfigError: If the inputs are invalid.
    """
    env = os.environ if environ is None else environ
    data = {key: env.get(f"INPUT_{key.upper()}") for key in INPUT_KEYS}
    if not data["github_token"]:
        data["github_token"] = env.get("GITHUB_TOKEN")
    if not data["github_workspace"]:
        data["github_workspace"] = env.get("GITHUB_WORKSPACE")
    if not data["github_api_url"]:
        data["github_api_url"] = env.get("GITHUB_API_URL")
    return BackportConfig.from_dict(data)
