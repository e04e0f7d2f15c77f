"""Product and user similarity measures."""

from typing import Sequence

import numpy as np

from shopsense.data.schemas import Product


# Weight of each factor in product similarity; they sum to 1
SIMILARITY_WEIGHTS = {
    "category": 0.4,
    "price": 0.2,
    "brand": 0.2,
    "rating": 0.1,
    "tags": 0.1,
}

MAX_RATING = 5.0


def jaccard_similarity(set_a: set, set_b: set) -> float:
    """|A & B| / |A | B|, 0.0 for two empty sets."""
    union = set_a | set_b
    if not union:
        return 0.0
    return len(set_a & set_b) / len(union)


def calculate_product_similarity(product_a: Product, product_b: Product) -> float:
    """
    Weighted similarity of two products in [0, 1].

    Factors: category match, price ratio, brand match, rating closeness and
    tag overlap. Two missing categories (or brands) count as equal. Tag
    overlap needs tags on both sides and adds nothing otherwise; the
    remaining weights are not re-normalized. Missing ratings count as 0.
    """
    w = SIMILARITY_WEIGHTS
    similarity = 0.0

    if product_a.category == product_b.category:
        similarity += w["category"]

    high_price = max(product_a.price, product_b.price)
    low_price = min(product_a.price, product_b.price)
    price_ratio = low_price / high_price if high_price > 0 else 1.0
    similarity += price_ratio * w["price"]

    if product_a.brand == product_b.brand:
        similarity += w["brand"]

    rating_diff = abs((product_a.rating or 0) - (product_b.rating or 0))
    similarity += max(0.0, 1 - rating_diff / MAX_RATING) * w["rating"]

    if product_a.tags and product_b.tags:
        similarity += jaccard_similarity(set(product_a.tags), set(product_b.tags)) * w["tags"]

    return similarity


def find_similar_products(
    source: Product,
    catalog: Sequence[Product],
    min_similarity: float = 0.3,
    n: int = 20,
) -> list[tuple[Product, float]]:
    """
    Products most similar to ``source``, most similar first.

    The source itself is not excluded. Ties keep catalog order.

    Args:
        source: Product to compare against
        catalog: Candidate products
        min_similarity: Strict lower bound on similarity
        n: Maximum number of products returned

    Returns:
        List of (product, similarity) tuples
    """
    if not catalog:
        return []

    similarities = np.array(
        [calculate_product_similarity(source, product) for product in catalog]
    )
    order = np.argsort(-similarities, kind="stable")

    return [
        (catalog[idx], float(similarities[idx]))
        for idx in order
        if similarities[idx] > min_similarity
    ][:n]
