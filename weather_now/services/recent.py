"""In-memory list of recent successful searches."""

import logging

logger = logging.getLogger(__name__)

RECENT_LIMIT = 5


class RecentSearches:
    """Most-recent-first list of distinct search strings with a size cap."""

    def __init__(self, limit: int = RECENT_LIMIT):
        if limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")
        self.limit = limit
        self._items: list[str] = []

    def push(self, query: str) -> None:
        """Move ``query`` to the front, evicting the oldest entry past the cap."""
        self._items = [query, *(item for item in self._items if item != query)]
        if len(self._items) > self.limit:
            evicted = self._items[self.limit :]
            self._items = self._items[: self.limit]
            logger.debug(f"Evicted recent searches: {evicted}")

    def items(self) -> list[str]:
        """Return a copy of the entries, most recent first."""
        return list(self._items)
