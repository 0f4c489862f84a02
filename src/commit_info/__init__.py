"""
Top-level package for commit_info.

This package exposes the batch commit summary lookup via
:mod:`commit_info.history` and the ``commitinfo`` CLI entry point via the
``commit_info.cli`` module.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
