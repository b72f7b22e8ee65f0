"""
Index Store

Holds the ContentIndex currently being served.

Design choices
--------------
- Readers take the current index reference without locking; an index is
  immutable once built, so a reference is always a complete snapshot.
- A rebuild constructs a whole new index first and then replaces the
  reference in one assignment.
- Rebuilds are serialized with a re-entrant lock.
- A failed rebuild keeps the previous index and re-raises.
"""

from __future__ import annotations

import logging
from threading import RLock
from typing import Optional

from .indexer import ContentIndexer
from .models import ContentIndex

logger = logging.getLogger("blog.store")


class IndexNotReadyError(RuntimeError):
    """Raised when the index is read before the first build completed."""


class IndexStore:
    """
    Owner of the served ContentIndex.
    """

    def __init__(self, indexer: ContentIndexer) -> None:
        self._indexer = indexer
        self._current: Optional[ContentIndex] = None
        self._lock = RLock()

    @property
    def indexer(self) -> ContentIndexer:
        return self._indexer

    @property
    def ready(self) -> bool:
        return self._current is not None

    @property
    def current(self) -> ContentIndex:
        """
        Return the index being served.

        Raises
        ------
        IndexNotReadyError
            If no build has completed yet.
        """
        index = self._current
        if index is None:
            raise IndexNotReadyError("Content index has not been built yet")
        return index

    def rebuild(self) -> ContentIndex:
        """
        Build a new index and make it current.

        Returns the new index. On failure the previous index stays current.
        """
        with self._lock:
            try:
                index = self._indexer.build()
            except Exception:
                logger.exception("Rebuild failed; keeping previous index")
                raise

            self._current = index
            logger.info("Serving %d posts from %s", len(index), index.root)
            return index

    def load(self) -> ContentIndex:
        """Build the index once; later calls return the existing one."""
        with self._lock:
            if self._current is not None:
                return self._current
            return self.rebuild()
