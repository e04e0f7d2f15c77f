"""Search analytics: history, popular and trending searches."""

import threading
from typing import Callable, Optional

from loguru import logger

from shopsense.config import DAY_MS, SearchConfig, current_time_ms
from shopsense.text import SubstringMatcher, TextMatcher


class SearchAnalytics:
    """
    Records submitted searches in memory.

    Keeps per-query timestamps (search history) and per-query counts
    (popular searches). Queries are stored in cleaned form. Data lives
    only as long as the instance.
    """

    def __init__(
        self,
        config: Optional[SearchConfig] = None,
        matcher: Optional[TextMatcher] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self.config = config or SearchConfig()
        self.matcher = matcher or SubstringMatcher()
        self.clock = clock or current_time_ms
        self.search_history: dict[str, list[int]] = {}
        self.popular_searches: dict[str, int] = {}
        self._lock = threading.Lock()

    def track_search(self, query: str) -> None:
        """Record one submission of a query."""
        clean_query = self.matcher.clean(query)
        timestamp = self.clock()

        with self._lock:
            self.search_history.setdefault(clean_query, []).append(timestamp)
            self.popular_searches[clean_query] = self.popular_searches.get(clean_query, 0) + 1

        logger.debug(f"Tracked search '{clean_query}'")

    def get_popular_searches(self) -> dict[str, int]:
        """Snapshot of query -> count, in first-seen order."""
        with self._lock:
            return dict(self.popular_searches)

    def get_search_analytics(self) -> dict:
        """
        Summarize tracked searches.

        Returns:
            Dict with top_searches (list of (query, count)), recent_searches
            (list of dicts with query, last_searched, frequency) and
            total_searches
        """
        with self._lock:
            popular = list(self.popular_searches.items())
            history = [(query, list(ts)) for query, ts in self.search_history.items()]

        n = self.config.n_top_searches
        top_searches = sorted(popular, key=lambda x: x[1], reverse=True)[:n]

        recent_searches = sorted(
            (
                {
                    "query": query,
                    "last_searched": max(timestamps),
                    "frequency": len(timestamps),
                }
                for query, timestamps in history
            ),
            key=lambda x: x["last_searched"],
            reverse=True,
        )[:n]

        return {
            "top_searches": top_searches,
            "recent_searches": recent_searches,
            "total_searches": sum(count for _, count in popular),
        }

    def get_trending_searches(self) -> list[str]:
        """Queries searched within the trending window, most frequent first."""
        cutoff = self.clock() - self.config.trending_window_days * DAY_MS

        with self._lock:
            history = [(query, list(ts)) for query, ts in self.search_history.items()]

        trending = []
        for query, timestamps in history:
            recent_count = sum(1 for t in timestamps if t > cutoff)
            if recent_count > 0:
                trending.append((query, recent_count))

        trending.sort(key=lambda x: x[1], reverse=True)
        return [query for query, _ in trending[: self.config.n_trending_searches]]

    def reset(self) -> None:
        with self._lock:
            self.search_history.clear()
            self.popular_searches.clear()
        logger.info("Search analytics reset")
