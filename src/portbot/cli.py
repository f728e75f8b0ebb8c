"""CLI entry point for portbot.

Meant to run as a GitHub Actions step on an `issue_comment` event: the
workflow checks out the repository and calls `portbot run`.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from portbot import __version__
from portbot.backport import Backport, parse_targets, select_targets
from portbot.config import ConfigError, config_from_env, load_config
from portbot.git import Git
from portbot.github import ActionContext, ContextError, GitHubClient
from portbot.logging import setup_logging
from portbot.outputs import ActionOutputs


@click.group()
@click.version_option(__version__)
def main() -> None:
    """portbot - backport merged pull requests with a `/port` comment."""
    pass


@main.command()
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to a portbot YAML config (defaults to the action inputs)",
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Also write rotating log files to this directory",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose output",
)
def run(config_path: Path | None, log_dir: Path | None, verbose: bool) -> None:
    """Backport the pull request of the current workflow event."""
    setup_logging(log_dir=log_dir, level="DEBUG" if verbose else None)
    outputs = ActionOutputs()

    try:
        config = load_config(config_path) if config_path else config_from_env()
        context = ActionContext.from_env()
    except (ConfigError, ContextError) as e:
        outputs.set_failed(str(e))
        sys.exit(1)

    git = Git(config.workspace, timeout=config.git_timeout)
    with GitHubClient(context.full_name, config.github_token, config.github_api_url) as github:
        Backport(github, git, config, context, outputs).run()

    if outputs.failed:
        sys.exit(1)


@main.command()
@click.argument("body")
def targets(body: str) -> None:
    """Print the target branches a comment BODY would backport to."""
    for name in select_targets(parse_targets(body)):
        click.echo(name)
