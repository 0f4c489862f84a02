"""
Batch lookup of commit summaries.

Given a repository location and an ordered list of commit ids, resolve
every id to its commit object and project each one into a
:class:`~commit_info.history.commit_model.CommitSummary` suitable for a
commit log view. The lookup is all-or-nothing: a single id that cannot be
resolved fails the whole batch.
"""

from __future__ import annotations

from typing import Callable, ContextManager, List, Optional, Sequence

from commit_info.history.commit_model import UNKNOWN, CommitId, CommitSummary
from commit_info.vcs.git_client import CommitObject, RepositoryAccessor, open_repository


Opener = Callable[[str], ContextManager[RepositoryAccessor]]


def limit_str(text: str, limit: int) -> str:
    """Return the first line of ``text`` cut to at most ``limit`` characters.

    A line ends at a line feed, optionally preceded by a carriage return;
    other control or Unicode separators stay part of the line. Characters are counted as code
    points, so multi-byte text is never cut in the middle of a character.
    An empty ``text`` yields ``""``.
    """
    if limit < 0:
        raise ValueError(f"limit must not be negative: {limit}")
    first, newline, _ = text.partition("\n")
    if newline and first.endswith("\r"):
        first = first[:-1]
    return first[:limit]


def summarize_commit(commit_id: CommitId, commit: CommitObject, limit: int) -> CommitSummary:
    """Project a resolved commit object into a summary."""
    if commit.message is None:
        message = UNKNOWN
    else:
        message = limit_str(commit.message, limit)
    author = commit.author_name or UNKNOWN
    return CommitSummary(message=message, time=commit.time, author=author, id=commit_id)


def get_commit_summaries(
    repo_path: str,
    ids: Sequence[CommitId],
    message_length_limit: int,
    opener: Optional[Opener] = None,
) -> List[CommitSummary]:
    """Look up summaries for ``ids`` in the repository at ``repo_path``.

    Parameters
    ----------
    repo_path : str
        Location of the repository.
    ids : Sequence[CommitId]
        Commit ids in the order the summaries should be returned in.
        Duplicates are kept.
    message_length_limit : int
        Maximum number of characters kept from the first message line.
    opener : callable, optional
        Returns a context manager yielding a repository accessor for a
        location. Defaults to :func:`commit_info.vcs.git_client.open_repository`.

    Returns
    -------
    List[CommitSummary]
        One summary per id, in input order.

    Raises
    ------
    RepositoryInaccessibleError
        If the repository cannot be opened.
    CommitNotFoundError
        If any id does not name a commit. No summaries are returned.
    ValueError
        If ``message_length_limit`` is negative.
    """
    if message_length_limit < 0:
        raise ValueError(f"message_length_limit must not be negative: {message_length_limit}")
    ids = list(ids)
    open_repo = opener or open_repository

    with open_repo(repo_path) as repo:
        commits = [repo.find_commit(commit_id) for commit_id in ids]

    return [
        summarize_commit(commit_id, commit, message_length_limit)
        for commit_id, commit in zip(ids, commits)
    ]
