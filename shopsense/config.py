"""Configuration for ShopSense engines."""

import time
from dataclasses import dataclass


@dataclass
class SearchConfig:
    """Tunable constants for query parsing, scoring and result shaping."""

    default_limit: int = 20
    default_offset: int = 0
    max_suggestions: int = 8
    min_suggestion_length: int = 2

    # Intent post-filters
    price_conscious_max_price: float = 100.0
    premium_min_price: float = 200.0
    information_min_rating: float = 4.0

    # Scoring boosts
    high_rating_threshold: float = 4.5

    # Search analytics
    trending_window_days: int = 7
    n_top_searches: int = 10
    n_trending_searches: int = 5


@dataclass
class RecommenderConfig:
    """Tunable constants for behavior tracking and recommendation."""

    max_behaviors_per_user: int = 1000

    # Collaborative filtering
    min_user_similarity: float = 0.1
    max_similar_users: int = 10

    # Product similarity
    min_product_similarity: float = 0.3
    max_similar_products: int = 20

    # Content-based
    content_window_days: int = 30
    max_recent_behaviors: int = 20

    # Trending
    trending_window_days: int = 7

    # Hybrid blend (collaborative, content-based, trending)
    collaborative_weight: float = 0.4
    content_weight: float = 0.4
    trending_weight: float = 0.2


DAY_MS = 24 * 60 * 60 * 1000


def current_time_ms() -> int:
    """Wall-clock time in epoch milliseconds. Default clock for all engines."""
    return int(time.time() * 1000)
