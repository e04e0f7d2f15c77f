"""Base class and helpers for recommendation models."""

from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence

from shopsense.config import DAY_MS, RecommenderConfig, current_time_ms
from shopsense.data.schemas import Product, ScoredResult
from shopsense.tracking.behavior import BehaviorLog


def parse_product_id(product_id: str | int) -> Optional[int]:
    """Catalog id for a behavior product id, None if it is not numeric."""
    try:
        return int(product_id)
    except (TypeError, ValueError):
        return None


def index_catalog(catalog: Sequence[Product]) -> dict[int, Product]:
    """Map product id to product. The first occurrence of an id wins."""
    index: dict[int, Product] = {}
    for product in catalog:
        index.setdefault(product.id, product)
    return index


def rank_scores(
    scores: dict,
    catalog: Sequence[Product],
    reason: str,
    n: int,
) -> list[ScoredResult]:
    """
    Turn accumulated product scores into ranked results.

    Keys that do not resolve to a catalog product are dropped. Ties keep
    the order in which products were first scored.

    Args:
        scores: Product id (int or numeric string) -> score
        catalog: Products to resolve ids against
        reason: Explanation attached to every result
        n: Number of results

    Returns:
        List of ScoredResult sorted by score descending
    """
    index = index_catalog(catalog)
    results = []

    for product_id, score in scores.items():
        product_idx = parse_product_id(product_id)
        product = index.get(product_idx) if product_idx is not None else None
        if product is not None:
            results.append(ScoredResult(product=product, score=score, reason=reason))

    results.sort(key=lambda r: r.score, reverse=True)
    return results[:n]


class BaseRecommender(ABC):
    """Abstract base class for behavior-driven recommendation models."""

    reason: str = ""

    def __init__(
        self,
        behavior_log: BehaviorLog,
        config: Optional[RecommenderConfig] = None,
        name: str = "base",
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self.name = name
        self.behavior_log = behavior_log
        self.config = config or RecommenderConfig()
        self.clock = clock or current_time_ms

    @abstractmethod
    def score_products(
        self,
        user_id: Optional[str],
        catalog: Sequence[Product],
        n: int = 10,
    ) -> dict:
        """
        Accumulate a score per candidate product.

        Args:
            user_id: User to recommend for (ignored by global models)
            catalog: Read-only product catalog
            n: Number of recommendations requested

        Returns:
            Dict mapping product id to score, in first-scored order
        """
        pass

    def recommend(
        self,
        user_id: Optional[str],
        catalog: Sequence[Product],
        n: int = 10,
    ) -> list[ScoredResult]:
        """
        Generate recommendations for a user.

        Args:
            user_id: User identifier
            catalog: Read-only product catalog
            n: Number of recommendations

        Returns:
            List of ScoredResult, sorted by score descending
        """
        if not catalog:
            return []
        scores = self.score_products(user_id, catalog, n)
        return rank_scores(scores, catalog, self.reason, n)

    def _window_start(self, days: int) -> int:
        """Epoch ms before which events fall outside a trailing window."""
        return self.clock() - days * DAY_MS

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}')"
