"""Data handling and schemas for ShopSense."""

from shopsense.data.schemas import (
    Action,
    BehaviorEvent,
    ParsedQuery,
    PriceRange,
    Product,
    ScoredResult,
    SearchIntent,
    SearchResponse,
    Suggestion,
)
from shopsense.data.loader import CatalogLoader, load_behaviors
from shopsense.data.validation import CatalogValidator

__all__ = [
    "Action",
    "BehaviorEvent",
    "ParsedQuery",
    "PriceRange",
    "Product",
    "ScoredResult",
    "SearchIntent",
    "SearchResponse",
    "Suggestion",
    "CatalogLoader",
    "load_behaviors",
    "CatalogValidator",
]
