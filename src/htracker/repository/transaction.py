# SPDX-License-Identifier: MIT

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

from htracker.repository.entry import ENTRY_REPO
from htracker.repository.tracker import TRACKER_REPO

logger = logging.getLogger(__name__)

_depth: ContextVar[int] = ContextVar("transaction_depth", default=0)


@contextmanager
def transaction() -> Iterator[None]:
    """
    Run a block of repository writes as one all-or-nothing unit.

    Both repositories are flushed to disk when the block completes. If the
    block or the flush raises, both are restored to their state at entry.
    Nested blocks join the outermost one.
    """
    depth = _depth.get()
    token = _depth.set(depth + 1)
    try:
        if depth > 0:
            yield
            return

        tracker_snapshot = TRACKER_REPO.snapshot()
        entry_snapshot = ENTRY_REPO.snapshot()
        try:
            yield
            # Entries first, so statistics on disk never count a missing entry
            ENTRY_REPO.flush()
            TRACKER_REPO.flush()
        except Exception:
            TRACKER_REPO.restore(tracker_snapshot)
            ENTRY_REPO.restore(entry_snapshot)
            logger.debug("transaction rolled back")
            raise
    finally:
        _depth.reset(token)
