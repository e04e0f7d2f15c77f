"""Relevance scoring for product search."""

from typing import Optional, Sequence

from shopsense.config import SearchConfig
from shopsense.data.schemas import ParsedQuery, Product, ScoredResult
from shopsense.text import SubstringMatcher, TextMatcher


# Additive points per signal
SCORE_WEIGHTS = {
    "exact_name": 100,
    "name_word": 20,
    "category": 30,
    "brand": 25,
    "description_word": 5,
    "price_range": 15,
    "attribute": 10,
    "tag_word": 8,
    "high_rating": 5,
    "bestseller": 10,
}


def _lower(value: Optional[str]) -> Optional[str]:
    return value.lower() if value is not None else None


class RelevanceScorer:
    """
    Additive point-based relevance scoring.

    Terms are summed in a fixed order so totals are reproducible. Missing
    optional product fields contribute nothing to their term.
    """

    def __init__(
        self,
        config: Optional[SearchConfig] = None,
        matcher: Optional[TextMatcher] = None,
        weights: Optional[dict[str, int]] = None,
    ) -> None:
        self.config = config or SearchConfig()
        self.matcher = matcher or SubstringMatcher()
        self.weights = weights or SCORE_WEIGHTS

    def score(self, product: Product, parsed: ParsedQuery) -> float:
        """Compute the relevance score of a product for a parsed query."""
        w = self.weights
        contains = self.matcher.contains
        query = parsed.clean_query
        words = self.matcher.words(query)
        name = product.name.lower()
        score = 0

        if contains(name, query):
            score += w["exact_name"]

        for word in words:
            if contains(name, word):
                score += w["name_word"]

        if _lower(product.category) in parsed.categories:
            score += w["category"]

        if _lower(product.brand) in parsed.brands:
            score += w["brand"]

        if product.description is not None:
            description = product.description.lower()
            for word in words:
                if contains(description, word):
                    score += w["description_word"]

        if parsed.price_range.is_specified and parsed.price_range.contains(product.price):
            score += w["price_range"]

        for attribute, value in parsed.attributes.items():
            if _lower(product.get_attribute(attribute)) == value:
                score += w["attribute"]

        if product.tags:
            tags = [tag.lower() for tag in product.tags]
            for word in words:
                if any(contains(tag, word) for tag in tags):
                    score += w["tag_word"]

        if product.rating is not None and product.rating >= self.config.high_rating_threshold:
            score += w["high_rating"]

        if product.is_bestseller:
            score += w["bestseller"]

        return score

    def match_reasons(self, product: Product, parsed: ParsedQuery) -> list[str]:
        """Qualitative reasons a product matched, independent of the score."""
        reasons = []

        if self.matcher.contains(product.name.lower(), parsed.clean_query):
            reasons.append("Exact name match")

        if _lower(product.category) in parsed.categories:
            reasons.append(f"Category: {product.category}")

        if _lower(product.brand) in parsed.brands:
            reasons.append(f"Brand: {product.brand}")

        if product.rating is not None and product.rating >= self.config.high_rating_threshold:
            reasons.append("Highly rated")

        if product.is_bestseller:
            reasons.append("Bestseller")

        return reasons

    def rank(self, catalog: Sequence[Product], parsed: ParsedQuery) -> list[ScoredResult]:
        """
        Score every product and rank by descending score.

        Zero-score products are dropped. The sort is stable, so equal scores
        keep catalog order.
        """
        results = []
        for product in catalog:
            score = self.score(product, parsed)
            if score > 0:
                results.append(
                    ScoredResult(
                        product=product,
                        score=score,
                        match_reasons=self.match_reasons(product, parsed),
                    )
                )

        return sorted(results, key=lambda r: r.score, reverse=True)
