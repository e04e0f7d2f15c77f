"""Natural-language query understanding."""

from typing import Optional

from loguru import logger

from shopsense.data.schemas import ParsedQuery, PriceRange, SearchIntent
from shopsense.search import vocabulary
from shopsense.text import SubstringMatcher, TextMatcher


class QueryParser:
    """
    Convert free-text queries into a ParsedQuery.

    Keyword, synonym and regex matching over static vocabulary tables.
    Holds no mutable state, so a single instance can be shared freely.

    Example:
        parser = QueryParser()
        parsed = parser.parse("iphone under $500")
        parsed.price_range.max  # 500
        parsed.brands           # ["apple"]
    """

    def __init__(
        self,
        matcher: Optional[TextMatcher] = None,
        category_keywords: Optional[dict[str, list[str]]] = None,
        synonyms: Optional[dict[str, list[str]]] = None,
        brand_keywords: Optional[dict[str, list[str]]] = None,
        attribute_vocabulary: Optional[dict[str, list[str]]] = None,
    ) -> None:
        """
        Args:
            matcher: Text matcher (default: plain substring matching)
            category_keywords: Category -> keywords table
            synonyms: Keyword -> synonyms table
            brand_keywords: Brand -> keywords table
            attribute_vocabulary: Attribute class -> values, in match order
        """
        self.matcher = matcher or SubstringMatcher()
        self.category_keywords = category_keywords or vocabulary.CATEGORY_KEYWORDS
        self.synonyms = synonyms or vocabulary.SYNONYMS
        self.brand_keywords = brand_keywords or vocabulary.BRAND_KEYWORDS
        self.attribute_vocabulary = attribute_vocabulary or vocabulary.ATTRIBUTE_VOCABULARY

    def parse(self, query: str) -> ParsedQuery:
        """Parse a raw query into its structured intent."""
        parsed = ParsedQuery(
            original_query=query,
            clean_query=self.clean(query),
            intent=self.detect_intent(query),
            categories=self.extract_categories(query),
            brands=self.extract_brands(query),
            price_range=self.extract_price_range(query),
            attributes=self.extract_attributes(query),
        )
        logger.debug(
            f"Parsed '{query}': intent={parsed.intent.value}, "
            f"categories={parsed.categories}, brands={parsed.brands}"
        )
        return parsed

    def clean(self, query: str) -> str:
        return self.matcher.clean(query)

    def detect_intent(self, query: str) -> SearchIntent:
        """First matching intent pattern wins, in declaration order."""
        lower_query = query.lower()
        for intent, pattern in vocabulary.INTENT_PATTERNS:
            if pattern.search(lower_query):
                return intent
        return SearchIntent.GENERAL_SEARCH

    def extract_categories(self, query: str) -> list[str]:
        clean_query = self.clean(query)
        return [
            category
            for category, keywords in self.category_keywords.items()
            if any(
                self.matcher.contains(clean_query, keyword)
                or self._has_synonym_match(clean_query, keyword)
                for keyword in keywords
            )
        ]

    def extract_brands(self, query: str) -> list[str]:
        clean_query = self.clean(query)
        return [
            brand
            for brand, keywords in self.brand_keywords.items()
            if self.matcher.contains_any(clean_query, keywords)
            or self.matcher.contains(clean_query, brand)
        ]

    def extract_price_range(self, query: str) -> PriceRange:
        """
        Extract price bounds from the original query.

        Every match of every pattern is applied in order, so a later
        "under $50" overrides an earlier one.
        """
        price_range = PriceRange()

        for pattern, bound in vocabulary.PRICE_PATTERNS:
            for match in pattern.finditer(query):
                if bound == "range":
                    price_range.min = int(match.group(1))
                    price_range.max = int(match.group(2))
                elif bound == "max":
                    price_range.max = int(match.group(1))
                else:
                    price_range.min = int(match.group(1))

        return price_range

    def extract_attributes(self, query: str) -> dict[str, str]:
        """Color, size and material; the last listed value found wins per class."""
        lower_query = query.lower()
        attributes: dict[str, str] = {}

        for attribute, values in self.attribute_vocabulary.items():
            for value in values:
                if self.matcher.contains(lower_query, value):
                    attributes[attribute] = value

        return attributes

    def _has_synonym_match(self, clean_query: str, keyword: str) -> bool:
        return self.matcher.contains_any(clean_query, self.synonyms.get(keyword, []))
