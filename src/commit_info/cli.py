"""
Command line interface for the commit_info tool.

This module defines the ``main`` function which is used as the entry
point when executing the ``commitinfo`` command. It loads the
configuration, locates the repository, looks up the summaries of the
given commit ids and prints them in the order they were given. Failures
are reported on stderr and mapped to the exit codes below.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from functools import partial
from pathlib import Path
from typing import List, Optional, Tuple

import click

from commit_info import __version__
from commit_info.config.loader import ConfigError, load_config
from commit_info.history.commit_model import CommitId, CommitSummary
from commit_info.history.summaries import get_commit_summaries
from commit_info.timing import scope_time
from commit_info.vcs.git_client import (
    CommitNotFoundError,
    GitError,
    GitRepository,
    RepositoryInaccessibleError,
    open_repository,
)

logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_INVALID_USAGE = 2
EXIT_NO_REPO = 3
EXIT_CONFIG_ERROR = 5
EXIT_COMMIT_NOT_FOUND = 6


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------

def print_error(message: str, indent: int = 0):
    """Print an error message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✗ {message}", err=True)


def print_info(message: str, indent: int = 0):
    """Print an info message."""
    prefix = "  " * indent
    click.echo(f"{prefix}ℹ {message}", err=True)


def format_time(seconds: int, time_format: str) -> str:
    """Render a commit time in UTC, falling back to raw seconds if out of range."""
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc).strftime(time_format)
    except (OverflowError, OSError, ValueError):
        return str(seconds)


def format_summary(summary: CommitSummary, time_format: str) -> str:
    """Format a summary as one log line."""
    return "  ".join(
        [
            summary.id.short(),
            format_time(summary.time, time_format),
            summary.author,
            summary.message,
        ]
    )


def summaries_to_json(summaries: List[CommitSummary]) -> str:
    return json.dumps(
        [
            {
                "id": str(summary.id),
                "time": summary.time,
                "author": summary.author,
                "message": summary.message,
            }
            for summary in summaries
        ],
        indent=2,
        ensure_ascii=False,
    )


def parse_commit_ids(values: Tuple[str, ...]) -> List[CommitId]:
    """Parse commit ids given on the command line.

    Raises
    ------
    click.BadParameter
        If a value is not a full hexadecimal commit id.
    """
    ids = []
    for value in values:
        try:
            ids.append(CommitId.from_hex(value))
        except ValueError as exc:
            raise click.BadParameter(str(exc), param_hint="COMMIT_ID") from exc
    return ids


def resolve_repo_path(repo: Optional[Path]) -> Path:
    """Return ``repo`` or, when omitted, the repository enclosing the cwd."""
    if repo is not None:
        return repo
    cwd = Path.cwd()
    return GitRepository.find_repo_root(cwd) or cwd


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

@click.command()
@click.argument("commit_ids", nargs=-1, metavar="COMMIT_ID...")
@click.option(
    "--repo",
    type=click.Path(path_type=Path, file_okay=False),
    help="Repository location (default: the repository containing the current directory).",
)
@click.option("--limit", type=click.IntRange(min=0), help="Maximum characters of the message's first line.")
@click.option("--json", "as_json", is_flag=True, help="Print the summaries as JSON.")
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="commitinfo")
def main(
    commit_ids: Tuple[str, ...],
    repo: Optional[Path],
    limit: Optional[int],
    as_json: bool,
    verbose: bool,
) -> None:
    """Show message, author and time of the given commits, in the order given."""
    # force=True so handlers are reconfigured on repeated invocations (tests).
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        force=True,
    )
    # module loggers stay quiet unless verbose output is requested
    for name in list(logging.root.manager.loggerDict):
        if name.startswith("commit_info"):
            logging.getLogger(name).propagate = verbose

    ids = parse_commit_ids(commit_ids)

    try:
        config = load_config()
    except ConfigError as exc:
        print_error(f"Configuration error: {exc}")
        raise click.exceptions.Exit(EXIT_CONFIG_ERROR)

    message_limit = config["message_length_limit"] if limit is None else limit
    repo_path = resolve_repo_path(repo)
    logger.debug("Looking up %d commit(s) in %s", len(ids), repo_path)

    try:
        with scope_time("get_commit_summaries"):
            summaries = get_commit_summaries(
                str(repo_path),
                ids,
                message_limit,
                opener=partial(open_repository, git_executable=config["git_executable"]),
            )
    except RepositoryInaccessibleError as exc:
        print_error(f"Unable to load commit history: {exc}")
        raise click.exceptions.Exit(EXIT_NO_REPO)
    except CommitNotFoundError as exc:
        print_error(f"Unable to load commit history: {exc}")
        print_info(f"Repository: {repo_path}", indent=1)
        raise click.exceptions.Exit(EXIT_COMMIT_NOT_FOUND)
    except GitError as exc:
        logger.exception("Git failure")
        print_error(f"Git error: {exc}")
        raise click.exceptions.Exit(EXIT_GENERIC_ERROR)

    if as_json:
        click.echo(summaries_to_json(summaries))
    else:
        for summary in summaries:
            click.echo(format_summary(summary, config["time_format"]))

    raise click.exceptions.Exit(EXIT_SUCCESS)
