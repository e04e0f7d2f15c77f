"""Product search: parse, score, rank, filter, paginate, suggest."""

from typing import Callable, Optional, Sequence

from loguru import logger

from shopsense.config import SearchConfig
from shopsense.data.schemas import (
    ParsedQuery,
    Product,
    ScoredResult,
    SearchResponse,
    Suggestion,
)
from shopsense.monitoring.analytics import SearchAnalytics
from shopsense.search.filters import intent_filter
from shopsense.search.query_parser import QueryParser
from shopsense.search.scoring import RelevanceScorer


SORT_OPTIONS = ("relevance", "price_low", "price_high", "rating")


def sort_results(results: list[ScoredResult], sort_by: str = "relevance") -> list[ScoredResult]:
    """
    Re-order ranked results by a user-selected sort.

    "relevance" (and any unknown option) keeps the ranked order.
    """
    if sort_by == "price_low":
        return sorted(results, key=lambda r: r.product.price)
    if sort_by == "price_high":
        return sorted(results, key=lambda r: r.product.price, reverse=True)
    if sort_by == "rating":
        return sorted(results, key=lambda r: r.product.rating or 0, reverse=True)
    return list(results)


class SearchEngine:
    """
    Relevance search over a product catalog.

    Every search with words left after cleaning is recorded in the analytics store, which feeds
    popular-search suggestions.

    Example:
        engine = SearchEngine()
        response = engine.search("cheap sony headphones", catalog)
        for result in response.results:
            print(result.product.name, result.score, result.match_reasons)
    """

    def __init__(
        self,
        config: Optional[SearchConfig] = None,
        parser: Optional[QueryParser] = None,
        scorer: Optional[RelevanceScorer] = None,
        analytics: Optional[SearchAnalytics] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self.config = config or SearchConfig()
        self.parser = parser or QueryParser()
        self.scorer = scorer or RelevanceScorer(config=self.config, matcher=self.parser.matcher)
        self.analytics = analytics or SearchAnalytics(
            config=self.config, matcher=self.parser.matcher, clock=clock
        )

    def search(
        self,
        query: str,
        catalog: Sequence[Product],
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        sort_by: str = "relevance",
    ) -> SearchResponse:
        """
        Search the catalog.

        Args:
            query: Free-text query
            catalog: Products to search, in catalog order
            limit: Page size (default from config)
            offset: Page start (default 0)
            sort_by: One of SORT_OPTIONS, applied to the returned page

        Returns:
            SearchResponse. total_found is the size of the returned page.
        """
        parsed = self.parser.parse(query)

        if not parsed.clean_query:
            return SearchResponse(results=[], total_found=0, parsed_query=parsed)

        self.analytics.track_search(query)

        ranked = self.scorer.rank(catalog, parsed)
        filtered = intent_filter(parsed.intent, self.config).filter(ranked)

        limit = limit or self.config.default_limit
        offset = max(offset or self.config.default_offset, 0)
        page = sort_results(filtered[offset:offset + limit], sort_by)

        logger.debug(
            f"Search '{query}': {len(ranked)} scored, {len(filtered)} after "
            f"{parsed.intent.value} filter, {len(page)} returned"
        )

        return SearchResponse(
            results=page,
            total_found=len(page),
            parsed_query=parsed,
            suggestions=self.generate_search_suggestions(query, catalog),
            alternative_queries=self.generate_alternative_queries(parsed),
        )

    def suggest(self, partial_query: str, catalog: Sequence[Product]) -> list[Suggestion]:
        """Suggestions while typing. Too-short input yields none."""
        if len(partial_query.strip()) < self.config.min_suggestion_length:
            return []
        return self.generate_search_suggestions(partial_query, catalog)

    def generate_search_suggestions(
        self,
        query: str,
        catalog: Sequence[Product],
    ) -> list[Suggestion]:
        """Autocomplete, category and popular-search suggestions, capped."""
        suggestions = []
        lower_query = query.lower()
        contains = self.parser.matcher.contains

        unique_names = list(dict.fromkeys(p.name for p in catalog))
        for name in unique_names:
            lower_name = name.lower()
            if contains(lower_name, lower_query) and lower_name != lower_query:
                suggestions.append(Suggestion(type="autocomplete", text=name, reason="Product name"))

        for category, keywords in self.parser.category_keywords.items():
            if any(contains(keyword, lower_query) for keyword in keywords):
                suggestions.append(
                    Suggestion(type="category", text=f"{query} in {category}", reason="Category suggestion")
                )

        for search in self.analytics.get_popular_searches():
            if contains(search, lower_query) and search != lower_query:
                suggestions.append(Suggestion(type="popular", text=search, reason="Popular search"))

        return suggestions[: self.config.max_suggestions]

    def generate_alternative_queries(self, parsed: ParsedQuery) -> list[str]:
        """Broader searches derived from the parsed query."""
        alternatives = []

        if parsed.categories:
            alternatives.append(f"All {parsed.categories[0]} products")

        if parsed.brands:
            alternatives.append(f"{parsed.brands[0]} products")

        if "color" in parsed.attributes:
            alternatives.append(f"{parsed.attributes['color']} products")

        return alternatives
