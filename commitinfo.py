#!/usr/bin/env python
"""
Thin wrapper script to invoke the commit_info CLI.

Running ``python commitinfo.py`` is equivalent to running the
``commitinfo`` console script installed via ``pyproject.toml``.
"""

from commit_info.cli import main


if __name__ == "__main__":
    main(prog_name="commitinfo")
