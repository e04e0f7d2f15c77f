"""ShopSense facade: the search and recommendation call surface."""

from typing import Any, Callable, Optional, Sequence

from loguru import logger

from shopsense.config import RecommenderConfig, SearchConfig, current_time_ms
from shopsense.data.schemas import (
    ANONYMOUS_USER,
    Action,
    ParsedQuery,
    Product,
    ScoredResult,
    SearchResponse,
    Suggestion,
)
from shopsense.models.engine import RecommendationEngine
from shopsense.search.engine import SearchEngine

SEARCH_PRODUCT_ID = "search_query"


class ShopSense:
    """
    Search and recommendations over a caller-owned catalog.

    Holds the search analytics and behavior log for one application scope.
    Construct one per scope (or per test); nothing is shared globally.

    Example:
        shop = ShopSense()
        shop.track_behavior("u1", "purchase", "1")
        response = shop.search("cheap sony headphones", catalog, user_id="u1")
        personal = shop.get_personal_recommendations("u1", catalog, limit=5)
    """

    def __init__(
        self,
        search_config: Optional[SearchConfig] = None,
        recommender_config: Optional[RecommenderConfig] = None,
        search_engine: Optional[SearchEngine] = None,
        recommendation_engine: Optional[RecommendationEngine] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        clock = clock or current_time_ms
        self.search_engine = search_engine or SearchEngine(config=search_config, clock=clock)
        self.recommendation_engine = recommendation_engine or RecommendationEngine(
            config=recommender_config, clock=clock
        )

    def parse_query(self, query: str) -> ParsedQuery:
        return self.search_engine.parser.parse(query)

    def search(
        self,
        query: str,
        catalog: Sequence[Product],
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        sort_by: str = "relevance",
        user_id: Optional[str] = None,
    ) -> SearchResponse:
        """
        Search the catalog.

        When ``user_id`` is given, the search is also recorded as a
        ``search`` behavior for that user.
        """
        if user_id is not None and self.search_engine.parser.clean(query):
            self.track_behavior(
                user_id,
                Action.SEARCH,
                SEARCH_PRODUCT_ID,
                {"query": query.strip()},
            )
        return self.search_engine.search(query, catalog, limit=limit, offset=offset, sort_by=sort_by)

    def suggest(self, partial_query: str, catalog: Sequence[Product]) -> list[Suggestion]:
        return self.search_engine.suggest(partial_query, catalog)

    def track_behavior(
        self,
        user_id: Optional[str],
        action: str | Action,
        product_id: str | int,
        metadata: Optional[dict[str, Any]] = None,
    ) -> None:
        """Record a user action. Unauthenticated callers pass None."""
        user_id = user_id or ANONYMOUS_USER
        self.recommendation_engine.track_behavior(user_id, action, product_id, metadata)

    def get_personal_recommendations(
        self,
        user_id: Optional[str],
        catalog: Sequence[Product],
        limit: int = 10,
    ) -> list[ScoredResult]:
        """Hybrid recommendations for a user (or the anonymous user)."""
        user_id = user_id or ANONYMOUS_USER
        results = self.recommendation_engine.get_hybrid_recommendations(user_id, catalog, limit)
        logger.debug(f"{len(results)} personal recommendations for {user_id}")
        return results

    def get_trending_recommendations(
        self,
        catalog: Sequence[Product],
        limit: int = 10,
    ) -> list[ScoredResult]:
        return self.recommendation_engine.get_trending_recommendations(catalog, limit)

    def get_related_products(
        self,
        product_id: str | int,
        catalog: Sequence[Product],
        limit: int = 4,
    ) -> list[ScoredResult]:
        return self.recommendation_engine.get_related_products(product_id, catalog, limit)

    def get_cross_sell_recommendations(
        self,
        cart_items: Sequence[Product],
        catalog: Sequence[Product],
        limit: int = 6,
    ) -> list[ScoredResult]:
        return self.recommendation_engine.get_cross_sell_recommendations(cart_items, catalog, limit)

    def get_search_analytics(self) -> dict:
        return self.search_engine.analytics.get_search_analytics()

    def get_trending_searches(self) -> list[str]:
        return self.search_engine.analytics.get_trending_searches()
