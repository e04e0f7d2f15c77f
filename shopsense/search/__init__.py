"""Query understanding and relevance search."""

from shopsense.search.engine import SearchEngine, sort_results
from shopsense.search.query_parser import QueryParser
from shopsense.search.scoring import RelevanceScorer, SCORE_WEIGHTS
from shopsense.text import SubstringMatcher, TextMatcher

__all__ = [
    "SearchEngine",
    "sort_results",
    "QueryParser",
    "RelevanceScorer",
    "SCORE_WEIGHTS",
    "SubstringMatcher",
    "TextMatcher",
]
