"""
Version control system (VCS) integrations.

This package contains the read-only Git repository accessor used to
resolve commit ids to commit objects.
"""

from .git_client import (  # noqa: F401
    CommitNotFoundError,
    CommitObject,
    GitError,
    GitRepository,
    RepositoryInaccessibleError,
    open_repository,
)
