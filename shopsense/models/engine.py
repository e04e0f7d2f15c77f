"""Recommendation engine composing the behavior log and all models."""

from typing import Any, Callable, Optional, Sequence

from loguru import logger

from shopsense.config import RecommenderConfig, current_time_ms
from shopsense.data.schemas import Action, BehaviorEvent, Product, ScoredResult
from shopsense.models.collaborative import CollaborativeRecommender
from shopsense.models.content_based import ContentBasedRecommender
from shopsense.models.hybrid import HybridRecommender
from shopsense.models.item_similarity import ItemSimilarityRecommender
from shopsense.models.popularity import TrendingRecommender
from shopsense.tracking.behavior import BehaviorLog, BehaviorTracker


class RecommendationEngine:
    """
    Behavior tracking plus the four recommendation flavors.

    Every model shares one behavior log. All results are recomputed on each
    call from the current log and the catalog passed in.

    Example:
        engine = RecommendationEngine()
        engine.track_behavior("u1", "purchase", "1")
        engine.get_hybrid_recommendations("u1", catalog, n=5)
    """

    def __init__(
        self,
        config: Optional[RecommenderConfig] = None,
        behavior_log: Optional[BehaviorLog] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        """
        Args:
            config: Recommender configuration
            behavior_log: Behavior log to read and write (default: a new one)
            clock: Returns current time in epoch ms
        """
        self.config = config or RecommenderConfig()
        self.clock = clock or current_time_ms
        self.behavior_log = (
            behavior_log
            if behavior_log is not None
            else BehaviorLog(max_size=self.config.max_behaviors_per_user)
        )

        self.tracker = BehaviorTracker(self.config, self.behavior_log, self.clock)
        self.trending = TrendingRecommender(self.behavior_log, self.config, clock=self.clock)
        self.collaborative = CollaborativeRecommender(self.behavior_log, self.config, clock=self.clock)
        self.content_based = ContentBasedRecommender(
            self.behavior_log, self.config, clock=self.clock, fallback=self.trending
        )
        self.hybrid = HybridRecommender(
            self.behavior_log,
            self.config,
            clock=self.clock,
            collaborative=self.collaborative,
            content_based=self.content_based,
            trending=self.trending,
        )
        self.item_similarity = ItemSimilarityRecommender(self.config)

        logger.info("RecommendationEngine initialized")

    def track_behavior(
        self,
        user_id: str,
        action: str | Action,
        product_id: str | int,
        metadata: Optional[dict[str, Any]] = None,
    ) -> BehaviorEvent:
        return self.tracker.track(user_id, action, product_id, metadata)

    def get_collaborative_recommendations(
        self, user_id: str, catalog: Sequence[Product], n: int = 10
    ) -> list[ScoredResult]:
        return self.collaborative.recommend(user_id, catalog, n)

    def get_content_based_recommendations(
        self, user_id: str, catalog: Sequence[Product], n: int = 10
    ) -> list[ScoredResult]:
        return self.content_based.recommend(user_id, catalog, n)

    def get_trending_recommendations(
        self, catalog: Sequence[Product], n: int = 10
    ) -> list[ScoredResult]:
        return self.trending.recommend(None, catalog, n)

    def get_hybrid_recommendations(
        self, user_id: str, catalog: Sequence[Product], n: int = 10
    ) -> list[ScoredResult]:
        return self.hybrid.recommend(user_id, catalog, n)

    def get_related_products(
        self, product_id: str | int, catalog: Sequence[Product], n: int = 4
    ) -> list[ScoredResult]:
        return self.item_similarity.get_related_products(product_id, catalog, n)

    def get_cross_sell_recommendations(
        self, cart_items: Sequence[Product], catalog: Sequence[Product], n: int = 6
    ) -> list[ScoredResult]:
        return self.item_similarity.get_cross_sell_recommendations(cart_items, catalog, n)
