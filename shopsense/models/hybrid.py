"""Hybrid recommendation model blending personal and popular signals."""

from typing import Optional, Sequence

from loguru import logger

from shopsense.data.schemas import Product
from shopsense.models.base import BaseRecommender
from shopsense.models.collaborative import CollaborativeRecommender
from shopsense.models.content_based import ContentBasedRecommender
from shopsense.models.popularity import TrendingRecommender


class HybridRecommender(BaseRecommender):
    """
    Weighted blend of collaborative, content-based and trending scores.

    Each source ranks its own candidates independently (2n personal
    candidates, n trending). Raw scores are then combined per product with
    the configured weights, 0.4 / 0.4 / 0.2 by default. Scores are not
    normalized before blending.
    """

    reason = "Personalized for you"

    def __init__(
        self,
        behavior_log,
        config=None,
        name: str = "hybrid",
        clock=None,
        collaborative: Optional[CollaborativeRecommender] = None,
        content_based: Optional[ContentBasedRecommender] = None,
        trending: Optional[TrendingRecommender] = None,
    ) -> None:
        super().__init__(behavior_log, config=config, name=name, clock=clock)
        self.trending = trending or TrendingRecommender(
            behavior_log, config=self.config, clock=self.clock
        )
        self.collaborative = collaborative or CollaborativeRecommender(
            behavior_log, config=self.config, clock=self.clock
        )
        self.content_based = content_based or ContentBasedRecommender(
            behavior_log, config=self.config, clock=self.clock, fallback=self.trending
        )

    def score_products(
        self,
        user_id: Optional[str],
        catalog: Sequence[Product],
        n: int = 10,
    ) -> dict[int, float]:
        sources = [
            (self.collaborative.recommend(user_id, catalog, n * 2), self.config.collaborative_weight),
            (self.content_based.recommend(user_id, catalog, n * 2), self.config.content_weight),
            (self.trending.recommend(user_id, catalog, n), self.config.trending_weight),
        ]

        scores: dict[int, float] = {}
        for results, weight in sources:
            for result in results:
                product_id = result.product.id
                scores[product_id] = scores.get(product_id, 0) + result.score * weight

        logger.debug(
            f"Hybrid for {user_id}: {[len(results) for results, _ in sources]} "
            f"candidates, {len(scores)} blended"
        )
        return scores
