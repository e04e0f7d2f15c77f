"""Data schemas and models for ShopSense."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


ANONYMOUS_USER = "anonymous"


class Product(BaseModel):
    """Catalog product. Owned by the surrounding application, read-only here."""

    id: int = Field(..., description="Unique product identifier")
    name: str = Field(..., description="Product name")
    description: Optional[str] = Field(default=None, description="Product description")
    category: Optional[str] = Field(default=None, description="Product category")
    brand: Optional[str] = Field(default=None, description="Brand name")
    price: float = Field(..., ge=0, description="Product price")
    rating: Optional[float] = Field(default=None, ge=0, le=5, description="Average rating (0-5)")
    tags: list[str] = Field(default_factory=list, description="Product tags")
    is_bestseller: bool = Field(
        default=False,
        alias="isBestseller",
        description="Whether product is flagged as a bestseller",
    )

    # Optional attributes matched against query attributes
    color: Optional[str] = Field(default=None, description="Primary color")
    size: Optional[str] = Field(default=None, description="Size label")
    material: Optional[str] = Field(default=None, description="Primary material")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "id": 1,
                "name": "Sony Wireless Headphones",
                "description": "Noise cancelling over-ear headphones",
                "category": "electronics",
                "brand": "sony",
                "price": 149.99,
                "rating": 4.6,
                "tags": ["audio", "wireless"],
                "isBestseller": True,
            }
        }

    def get_attribute(self, name: str) -> Optional[str]:
        """Return a matchable attribute value (color, size, material) or None."""
        if name not in ATTRIBUTE_FIELDS:
            return None
        return getattr(self, name)


ATTRIBUTE_FIELDS = ("color", "size", "material")


class Action(str, Enum):
    """Tracked user actions."""
    VIEW = "view"
    SEARCH = "search"
    WISHLIST = "wishlist"
    CART = "cart"
    PURCHASE = "purchase"
    REVIEW = "review"
    SHARE = "share"


# Intent strength per action; unknown actions fall back to DEFAULT_ACTION_WEIGHT
ACTION_WEIGHTS = {
    Action.VIEW.value: 1,
    Action.SEARCH.value: 2,
    Action.WISHLIST.value: 3,
    Action.CART.value: 4,
    Action.PURCHASE.value: 10,
    Action.REVIEW.value: 5,
    Action.SHARE.value: 3,
}

DEFAULT_ACTION_WEIGHT = 1


def get_action_weight(action: str) -> int:
    """Weight for an action, 1 for unrecognized actions."""
    if isinstance(action, Action):
        action = action.value
    return ACTION_WEIGHTS.get(action, DEFAULT_ACTION_WEIGHT)


class BehaviorEvent(BaseModel):
    """A single tracked user action."""

    action: str = Field(..., description="view, search, wishlist, cart, purchase, review, share")
    product_id: str = Field(..., description="Product identifier as sent by the client")
    timestamp: int = Field(..., description="Epoch milliseconds")
    metadata: dict[str, Any] = Field(default_factory=dict)
    weight: int = Field(..., ge=0, description="Weight derived from the action type")

    class Config:
        json_schema_extra = {
            "example": {
                "action": "purchase",
                "product_id": "1",
                "timestamp": 1718000000000,
                "metadata": {"source": "product_page"},
                "weight": 10,
            }
        }


class SearchIntent(str, Enum):
    """Detected purpose of a search query."""
    PRICE_CONSCIOUS = "price_conscious"
    PREMIUM_FOCUSED = "premium_focused"
    COMPARISON = "comparison"
    PURCHASE_INTENT = "purchase_intent"
    INFORMATION_SEEKING = "information_seeking"
    GIFT_SEEKING = "gift_seeking"
    GENERAL_SEARCH = "general_search"


@dataclass
class PriceRange:
    """Inclusive price bounds; None means unbounded on that side."""
    min: Optional[float] = None
    max: Optional[float] = None

    @property
    def is_specified(self) -> bool:
        return self.min is not None or self.max is not None

    def contains(self, price: float) -> bool:
        return (self.min is None or price >= self.min) and (
            self.max is None or price <= self.max
        )


@dataclass
class ParsedQuery:
    """Structured interpretation of a free-text query."""
    original_query: str
    clean_query: str
    intent: SearchIntent
    categories: list[str] = field(default_factory=list)
    brands: list[str] = field(default_factory=list)
    price_range: PriceRange = field(default_factory=PriceRange)
    attributes: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "original_query": self.original_query,
            "clean_query": self.clean_query,
            "intent": self.intent.value,
            "categories": list(self.categories),
            "brands": list(self.brands),
            "price_range": {"min": self.price_range.min, "max": self.price_range.max},
            "attributes": dict(self.attributes),
        }


@dataclass
class ScoredResult:
    """A product with its score and explanation."""
    product: Product
    score: float
    match_reasons: list[str] = field(default_factory=list)
    reason: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "product": self.product.model_dump(),
            "score": self.score,
            "match_reasons": list(self.match_reasons),
            "reason": self.reason,
        }


@dataclass
class Suggestion:
    """Autocomplete, category or popular-search suggestion."""
    type: str
    text: str
    reason: str


@dataclass
class SearchResponse:
    """Ranked results plus suggestions for a query."""
    results: list[ScoredResult]
    total_found: int
    parsed_query: ParsedQuery
    suggestions: list[Suggestion] = field(default_factory=list)
    alternative_queries: list[str] = field(default_factory=list)
