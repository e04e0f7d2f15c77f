"""Item-to-item recommendations: related products and cross-sell."""

from typing import Optional, Sequence

from loguru import logger

from shopsense.config import RecommenderConfig
from shopsense.data.schemas import Product, ScoredResult
from shopsense.models.base import index_catalog, parse_product_id, rank_scores
from shopsense.models.similarity import find_similar_products


class ItemSimilarityRecommender:
    """Recommends by product similarity alone, with no behavior input."""

    related_reason = "Similar products"
    cross_sell_reason = "Frequently bought together"

    def __init__(self, config: Optional[RecommenderConfig] = None) -> None:
        self.config = config or RecommenderConfig()

    def _similar(self, source: Product, catalog: Sequence[Product]) -> list[tuple[Product, float]]:
        return find_similar_products(
            source,
            catalog,
            min_similarity=self.config.min_product_similarity,
            n=self.config.max_similar_products,
        )

    def get_related_products(
        self,
        product_id: str | int,
        catalog: Sequence[Product],
        n: int = 4,
    ) -> list[ScoredResult]:
        """
        Products most similar to the given one, for a product detail page.

        The similarity search is not filtered, so the product itself ranks
        first when it is in the catalog.
        """
        product_idx = parse_product_id(product_id)
        product = index_catalog(catalog).get(product_idx) if product_idx is not None else None
        if product is None:
            logger.warning(f"Related products requested for unknown product {product_id}")
            return []

        return [
            ScoredResult(product=similar, score=similarity, reason=self.related_reason)
            for similar, similarity in self._similar(product, catalog)[:n]
        ]

    def get_cross_sell_recommendations(
        self,
        cart_items: Sequence[Product],
        catalog: Sequence[Product],
        n: int = 6,
    ) -> list[ScoredResult]:
        """
        Products similar to the cart contents, excluding anything in the cart.

        Similarities add up when several cart items point at the same product.
        """
        if not catalog:
            return []

        cart_ids = {item.id for item in cart_items}
        scores: dict[int, float] = {}

        for cart_item in cart_items:
            for product, similarity in self._similar(cart_item, catalog):
                if product.id not in cart_ids:
                    scores[product.id] = scores.get(product.id, 0) + similarity

        return rank_scores(scores, catalog, self.cross_sell_reason, n)
