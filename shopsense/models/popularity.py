"""Trending (recent popularity) recommendation model."""

from typing import Optional, Sequence

from shopsense.data.schemas import Product
from shopsense.models.base import BaseRecommender


class TrendingRecommender(BaseRecommender):
    """
    Recommends products with the most behavior weight across all users
    within a trailing window.

    Serves as the cold-start fallback for content-based recommendations.
    """

    reason = "Trending now"

    def __init__(self, behavior_log, config=None, name: str = "trending", clock=None) -> None:
        super().__init__(behavior_log, config=config, name=name, clock=clock)

    def score_products(
        self,
        user_id: Optional[str],
        catalog: Sequence[Product],
        n: int = 10,
    ) -> dict[str, float]:
        """Sum of event weights per product id within the trending window."""
        window_start = self._window_start(self.config.trending_window_days)
        scores: dict[str, float] = {}

        for _, events in self.behavior_log:
            for event in events:
                if event.timestamp > window_start:
                    scores[event.product_id] = scores.get(event.product_id, 0) + event.weight

        return scores
