"""Post-ranking filters for search results."""

from typing import Callable, Optional

from shopsense.config import SearchConfig
from shopsense.data.schemas import ScoredResult, SearchIntent


Rule = Callable[[ScoredResult], bool]


class ResultFilter:
    """
    Filter ranked results with a set of rules.

    Filtering preserves the incoming order.
    """

    def __init__(self) -> None:
        self.rules: list[Rule] = []

    def add_rule(self, rule_fn: Rule) -> "ResultFilter":
        """
        Add a rule.

        Args:
            rule_fn: Function that takes a result and returns True if it is kept

        Returns:
            self
        """
        self.rules.append(rule_fn)
        return self

    def filter(self, results: list[ScoredResult]) -> list[ScoredResult]:
        return [r for r in results if all(rule(r) for rule in self.rules)]


# Pre-built rules
def max_price_rule(max_price: float) -> Rule:
    """Rule: price at most max_price."""
    def rule(result: ScoredResult) -> bool:
        return result.product.price <= max_price
    return rule


def min_price_rule(min_price: float) -> Rule:
    """Rule: price at least min_price."""
    def rule(result: ScoredResult) -> bool:
        return result.product.price >= min_price
    return rule


def min_rating_rule(min_rating: float) -> Rule:
    """Rule: rating at least min_rating. Unrated products fail."""
    def rule(result: ScoredResult) -> bool:
        rating = result.product.rating
        return rating is not None and rating >= min_rating
    return rule


def intent_filter(intent: SearchIntent, config: Optional[SearchConfig] = None) -> ResultFilter:
    """Build the post-filter for a detected intent. Unlisted intents keep everything."""
    config = config or SearchConfig()
    result_filter = ResultFilter()

    if intent == SearchIntent.PRICE_CONSCIOUS:
        result_filter.add_rule(max_price_rule(config.price_conscious_max_price))
    elif intent == SearchIntent.PREMIUM_FOCUSED:
        result_filter.add_rule(min_price_rule(config.premium_min_price))
    elif intent == SearchIntent.INFORMATION_SEEKING:
        result_filter.add_rule(min_rating_rule(config.information_min_rating))

    return result_filter
