"""
Timing helper for instrumenting calls from the outside.

:func:`scope_time` logs how long the wrapped block took. The lookup code
itself does not time anything; callers such as the CLI wrap it.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Iterator


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


@contextmanager
def scope_time(name: str) -> Iterator[None]:
    """Log the wall time spent inside the ``with`` block at DEBUG level."""
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        logger.debug("scope %s took %.3f ms", name, elapsed * 1000)
