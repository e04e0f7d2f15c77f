"""Tests for the ShopSense facade."""

import pytest

from shopsense.core import SEARCH_PRODUCT_ID, ShopSense
from shopsense.data.schemas import ANONYMOUS_USER, Product

NOW = 1_700_000_000_000


@pytest.fixture
def catalog():
    return [
        Product(id=1, name="Sony Headphones", category="electronics", brand="sony",
                price=50, rating=4.6, tags=["audio"]),
        Product(id=2, name="Levis Jeans", category="fashion", brand="levis",
                price=80, rating=4.0, tags=["denim"]),
        Product(id=3, name="Oak Table Lamp", category="home", brand="ikea",
                price=45, rating=3.9, tags=["lamp"]),
    ]


@pytest.fixture
def shop():
    return ShopSense(clock=lambda: NOW)


def result_ids(results):
    return [r.product.id for r in results]


class TestShopSense:
    """Tests for ShopSense."""

    def test_parse_query(self, shop):
        parsed = shop.parse_query("iphone under $500")

        assert parsed.price_range.max == 500
        assert parsed.brands == ["apple"]

    def test_search(self, shop, catalog):
        response = shop.search("cheap sony headphones", catalog[:2])

        assert result_ids(response.results) == [1]
        assert response.parsed_query.intent.value == "price_conscious"

    def test_search_records_behavior(self, shop, catalog):
        """Test that a user's search is recorded as a search behavior."""
        shop.search("  sony headphones ", catalog, user_id="u1")

        events = shop.recommendation_engine.behavior_log.get_events("u1")

        assert len(events) == 1
        assert events[0].action == "search"
        assert events[0].product_id == SEARCH_PRODUCT_ID
        assert events[0].metadata == {"query": "sony headphones"}
        assert events[0].weight == 2

    def test_anonymous_search_not_recorded(self, shop, catalog):
        shop.search("sony headphones", catalog)
        shop.search("   ", catalog, user_id="u1")

        assert len(shop.recommendation_engine.behavior_log) == 0

    def test_punctuation_search_not_recorded(self, shop, catalog):
        response = shop.search("?!", catalog, user_id="u1")

        assert response.results == []
        assert shop.recommendation_engine.behavior_log.get_events("u1") == []

    def test_track_anonymous(self, shop):
        shop.track_behavior(None, "view", "1")
        assert shop.recommendation_engine.behavior_log.users() == [ANONYMOUS_USER]

    def test_suggest(self, shop, catalog):
        suggestions = shop.suggest("lamp", catalog)
        assert [s.type for s in suggestions] == ["autocomplete", "category"]

    def test_personal_recommendations(self, shop, catalog):
        """Test the two-user collaborative scenario."""
        shop.track_behavior("u1", "purchase", "1")
        shop.track_behavior("u1", "view", "2")
        shop.track_behavior("u2", "purchase", "1")

        results = shop.get_personal_recommendations("u2", catalog, 5)
        scores = {r.product.id: r.score for r in results}

        assert scores[2] > 0
        # Nobody touched the lamp and it is not similar enough to anything
        assert 3 not in scores

        collaborative = shop.recommendation_engine.get_collaborative_recommendations("u2", catalog, 5)
        assert result_ids(collaborative) == [2]

    def test_search_history_feeds_collaborative(self, shop, catalog):
        """Test that search behaviors share the non-catalog product id."""
        shop.search("lamp", catalog, user_id="u1")
        shop.track_behavior("u1", "purchase", "3")
        shop.search("jeans", catalog, user_id="u2")

        results = shop.recommendation_engine.get_collaborative_recommendations("u2", catalog, 5)
        assert result_ids(results) == [3]

    def test_trending(self, shop, catalog):
        shop.track_behavior("u1", "purchase", "3")
        shop.track_behavior("u2", "view", "1")

        assert result_ids(shop.get_trending_recommendations(catalog, 5)) == [3, 1]

    def test_related_and_cross_sell(self, shop, catalog):
        related = shop.get_related_products(1, catalog, limit=2)
        cross_sell = shop.get_cross_sell_recommendations([catalog[0]], catalog)

        assert related[0].product.id == 1
        assert 1 not in result_ids(cross_sell)

    def test_search_analytics(self, shop, catalog):
        shop.search("sony headphones", catalog)
        shop.search("lamp", catalog)
        shop.search("lamp", catalog)

        assert shop.get_search_analytics()["top_searches"][0] == ("lamp", 2)
        assert shop.get_trending_searches() == ["lamp", "sony headphones"]

    def test_instances_are_isolated(self, catalog):
        a, b = ShopSense(), ShopSense()
        a.track_behavior("u1", "view", "1")
        a.search("lamp", catalog)

        assert len(b.recommendation_engine.behavior_log) == 0
        assert b.get_search_analytics()["total_searches"] == 0
