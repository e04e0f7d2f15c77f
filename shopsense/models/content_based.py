"""Content-based recommendation model."""

from typing import Optional, Sequence

from loguru import logger

from shopsense.data.schemas import Product
from shopsense.models.base import BaseRecommender, index_catalog, parse_product_id
from shopsense.models.popularity import TrendingRecommender
from shopsense.models.similarity import find_similar_products


class ContentBasedRecommender(BaseRecommender):
    """
    Recommends products similar to what the user interacted with recently.

    Users with no recent behavior get the trending list instead.
    """

    reason = "Based on your recent interests"

    def __init__(
        self,
        behavior_log,
        config=None,
        name: str = "content_based",
        clock=None,
        fallback: Optional[TrendingRecommender] = None,
    ) -> None:
        """
        Args:
            behavior_log: Shared behavior log
            config: Recommender configuration
            name: Model name
            clock: Returns current time in epoch ms
            fallback: Recommender used for cold-start users
        """
        super().__init__(behavior_log, config=config, name=name, clock=clock)
        self.fallback = fallback or TrendingRecommender(behavior_log, config=self.config, clock=self.clock)

    def get_recent_behaviors(self, user_id: str):
        """The user's newest events inside the content window."""
        window_start = self._window_start(self.config.content_window_days)
        recent = [
            event
            for event in self.behavior_log.get_events(user_id)
            if event.timestamp > window_start
        ]
        recent.sort(key=lambda e: e.timestamp, reverse=True)
        return recent[: self.config.max_recent_behaviors]

    def recommend(
        self,
        user_id: Optional[str],
        catalog: Sequence[Product],
        n: int = 10,
    ):
        """Content-based recommendations, or trending when there is no recent behavior."""
        if not self.get_recent_behaviors(user_id):
            logger.debug(f"No recent behavior for {user_id}, falling back to trending")
            return self.fallback.recommend(user_id, catalog, n)
        return super().recommend(user_id, catalog, n)

    def score_products(
        self,
        user_id: Optional[str],
        catalog: Sequence[Product],
        n: int = 10,
    ) -> dict[int, float]:
        index = index_catalog(catalog)
        scores: dict[int, float] = {}

        for event in self.get_recent_behaviors(user_id):
            product_idx = parse_product_id(event.product_id)
            source = index.get(product_idx) if product_idx is not None else None
            if source is None:
                continue

            similar = find_similar_products(
                source,
                catalog,
                min_similarity=self.config.min_product_similarity,
                n=self.config.max_similar_products,
            )
            for product, similarity in similar:
                if product.id != source.id:
                    scores[product.id] = scores.get(product.id, 0) + similarity * event.weight

        return scores
