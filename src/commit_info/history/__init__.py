"""
Commit history queries.

This package contains the commit identifier and summary value types
(:mod:`commit_info.history.commit_model`) and the batch lookup that turns
commit ids into display-friendly summaries
(:mod:`commit_info.history.summaries`).
"""

from .commit_model import UNKNOWN, CommitId, CommitSummary  # noqa: F401
