"""Recommendation models for ShopSense."""

from shopsense.models.base import BaseRecommender, rank_scores
from shopsense.models.collaborative import CollaborativeRecommender
from shopsense.models.content_based import ContentBasedRecommender
from shopsense.models.engine import RecommendationEngine
from shopsense.models.hybrid import HybridRecommender
from shopsense.models.item_similarity import ItemSimilarityRecommender
from shopsense.models.popularity import TrendingRecommender
from shopsense.models.similarity import (
    calculate_product_similarity,
    find_similar_products,
    jaccard_similarity,
)

__all__ = [
    # Base
    "BaseRecommender",
    "rank_scores",
    # Models
    "CollaborativeRecommender",
    "ContentBasedRecommender",
    "TrendingRecommender",
    "HybridRecommender",
    "ItemSimilarityRecommender",
    # Engine
    "RecommendationEngine",
    # Similarity
    "calculate_product_similarity",
    "find_similar_products",
    "jaccard_similarity",
]
