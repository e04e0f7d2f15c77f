"""Tests for recommendation models."""

import pytest

from shopsense.config import DAY_MS, RecommenderConfig
from shopsense.data.schemas import Product
from shopsense.models.base import rank_scores
from shopsense.models.engine import RecommendationEngine
from shopsense.models.similarity import calculate_product_similarity
from shopsense.tracking.behavior import BehaviorLog

NOW = 1_700_000_000_000


@pytest.fixture
def catalog():
    return [
        Product(id=1, name="Sony Headphones", category="electronics", brand="sony",
                price=50, rating=4.6, tags=["audio"]),
        Product(id=2, name="Levis Jeans", category="fashion", brand="levis",
                price=80, rating=4.0, tags=["denim"]),
        Product(id=3, name="Apple iPhone 15", category="electronics", brand="apple",
                price=799, rating=4.8, tags=["phone", "mobile"]),
        Product(id=4, name="Samsung Galaxy Phone", category="electronics", brand="samsung",
                price=599, rating=4.2, tags=["phone", "android"]),
        Product(id=5, name="Budget Wired Headphones", category="electronics", brand="generic",
                price=15, tags=["audio"]),
        Product(id=6, name="Oak Table Lamp", category="home", brand="ikea",
                price=45, rating=3.9, tags=["lamp"]),
    ]


@pytest.fixture
def engine():
    """Engine with a fixed clock."""
    return RecommendationEngine(clock=lambda: NOW)


def result_ids(results):
    return [r.product.id for r in results]


class TestRankScores:
    """Tests for rank_scores."""

    def test_resolves_and_sorts(self, catalog):
        scores = {"2": 1.0, "search_query": 50.0, "1": 3.0, "999": 9.0}
        results = rank_scores(scores, catalog, "why", n=10)

        assert result_ids(results) == [1, 2]
        assert all(r.reason == "why" for r in results)

    def test_ties_keep_insertion_order(self, catalog):
        results = rank_scores({4: 1.0, 2: 1.0, 3: 1.0}, catalog, "why", n=2)
        assert result_ids(results) == [4, 2]


class TestTrendingRecommender:
    """Tests for trending recommendations."""

    def test_sums_weights_across_users(self, engine, catalog):
        engine.track_behavior("u1", "purchase", "1")
        engine.track_behavior("u2", "view", "2")
        engine.track_behavior("u3", "view", "2")

        results = engine.get_trending_recommendations(catalog, 5)

        assert result_ids(results) == [1, 2]
        assert [r.score for r in results] == [10, 2]
        assert results[0].reason == "Trending now"

    def test_window(self, engine, catalog):
        """Test that events older than the trending window are ignored."""
        engine.tracker.track("u1", "purchase", "3", timestamp=NOW - 8 * DAY_MS)
        engine.tracker.track("u1", "view", "4", timestamp=NOW - 6 * DAY_MS)

        assert result_ids(engine.get_trending_recommendations(catalog, 5)) == [4]

    def test_non_catalog_ids_dropped(self, engine, catalog):
        engine.track_behavior("u1", "search", "search_query")
        assert engine.get_trending_recommendations(catalog, 5) == []

    def test_empty_catalog(self, engine):
        engine.track_behavior("u1", "purchase", "1")
        assert engine.get_trending_recommendations([], 5) == []


class TestCollaborativeRecommender:
    """Tests for collaborative filtering."""

    def test_find_similar_users(self, engine):
        engine.track_behavior("u1", "purchase", "1")
        engine.track_behavior("u1", "view", "2")
        engine.track_behavior("u2", "purchase", "1")
        engine.track_behavior("u3", "view", "6")

        similar = engine.collaborative.find_similar_users("u2")

        assert [uid for uid, _ in similar] == ["u1"]
        assert similar[0][1] == pytest.approx(0.5)

    def test_similarity_threshold(self, engine):
        """Test that users at or below the minimum similarity are excluded."""
        engine.track_behavior("u1", "view", "1")
        for product_id in range(1, 11):
            engine.track_behavior("u2", "view", str(product_id))

        # Jaccard 1/10
        assert engine.collaborative.find_similar_users("u1") == []

    def test_recommend(self, engine, catalog):
        engine.track_behavior("u1", "purchase", "1")
        engine.track_behavior("u1", "view", "2")
        engine.track_behavior("u1", "cart", "3")
        engine.track_behavior("u2", "purchase", "1")

        results = engine.get_collaborative_recommendations("u2", catalog, 5)

        # Jaccard 1/3: cart 4/3, view 1/3; product 1 already seen
        assert result_ids(results) == [3, 2]
        assert results[0].score == pytest.approx(4 / 3)
        assert results[1].score == pytest.approx(1 / 3)

    def test_unknown_user(self, engine, catalog):
        engine.track_behavior("u1", "purchase", "1")
        assert engine.get_collaborative_recommendations("ghost", catalog, 5) == []


class TestContentBasedRecommender:
    """Tests for content-based recommendations."""

    def test_recommends_similar_products(self, engine, catalog):
        engine.track_behavior("u1", "purchase", "1")

        results = engine.get_content_based_recommendations("u1", catalog, 5)
        ids = result_ids(results)

        assert ids[0] == 5
        assert 1 not in ids
        assert 2 not in ids
        assert results[0].score == pytest.approx(
            10 * calculate_product_similarity(catalog[0], catalog[4])
        )
        assert results[0].reason == "Based on your recent interests"

    def test_cold_start_falls_back_to_trending(self, engine, catalog):
        """Test that a user with no behavior gets the trending list."""
        engine.track_behavior("u1", "purchase", "3")
        engine.track_behavior("u2", "view", "6")

        content = engine.get_content_based_recommendations("ghost", catalog, 5)
        trending = engine.get_trending_recommendations(catalog, 5)

        assert result_ids(content) == result_ids(trending)
        assert [r.score for r in content] == [r.score for r in trending]

    def test_stale_behavior_falls_back(self, engine, catalog):
        engine.tracker.track("u1", "purchase", "1", timestamp=NOW - 31 * DAY_MS)
        engine.track_behavior("u2", "purchase", "6")

        results = engine.get_content_based_recommendations("u1", catalog, 5)
        assert result_ids(results) == [6]
        assert results[0].reason == "Trending now"

    def test_recent_behaviors_newest_first(self, engine):
        engine.tracker.track("u1", "view", "1", timestamp=NOW - 300)
        engine.tracker.track("u1", "view", "2", timestamp=NOW - 100)
        engine.tracker.track("u1", "view", "3", timestamp=NOW - 200)

        recent = engine.content_based.get_recent_behaviors("u1")
        assert [e.product_id for e in recent] == ["2", "3", "1"]

    def test_recent_behaviors_capped(self):
        engine = RecommendationEngine(
            config=RecommenderConfig(max_recent_behaviors=2), clock=lambda: NOW
        )
        for product_id in ("1", "2", "3"):
            engine.track_behavior("u1", "view", product_id)

        assert len(engine.content_based.get_recent_behaviors("u1")) == 2


class TestHybridRecommender:
    """Tests for the hybrid blend."""

    def test_weighted_blend(self, engine, catalog):
        """Test that scores are 0.4 / 0.4 / 0.2 sums of the component scores."""
        engine.track_behavior("u1", "purchase", "1")
        engine.track_behavior("u1", "view", "2")
        engine.track_behavior("u1", "cart", "4")
        engine.track_behavior("u2", "purchase", "1")

        n = 5
        expected = {}
        for results, weight in [
            (engine.get_collaborative_recommendations("u2", catalog, n * 2), 0.4),
            (engine.get_content_based_recommendations("u2", catalog, n * 2), 0.4),
            (engine.get_trending_recommendations(catalog, n), 0.2),
        ]:
            for r in results:
                expected[r.product.id] = expected.get(r.product.id, 0) + r.score * weight

        results = engine.get_hybrid_recommendations("u2", catalog, n)

        assert len(results) == min(n, len(expected))
        for r in results:
            assert r.score == pytest.approx(expected[r.product.id])
            assert r.reason == "Personalized for you"
        scores = [r.score for r in results]
        assert scores == sorted(scores, reverse=True)

    def test_cold_start_user(self, engine, catalog):
        """Test that an unknown user still gets trending-driven results."""
        engine.track_behavior("u1", "purchase", "3")

        results = engine.get_hybrid_recommendations("ghost", catalog, 5)

        # content falls back to trending: 10 * 0.4 + 10 * 0.2
        assert result_ids(results) == [3]
        assert results[0].score == pytest.approx(6.0)

    def test_empty_log(self, engine, catalog):
        assert engine.get_hybrid_recommendations("u1", catalog, 5) == []


class TestItemSimilarity:
    """Tests for related products and cross-sell."""

    def test_related_includes_source(self, engine, catalog):
        results = engine.get_related_products(1, catalog)

        assert results[0].product.id == 1
        assert results[0].score == pytest.approx(1.0)
        assert results[0].reason == "Similar products"
        assert len(results) <= 4

    def test_related_accepts_string_id(self, engine, catalog):
        assert result_ids(engine.get_related_products("1", catalog)) == result_ids(
            engine.get_related_products(1, catalog)
        )

    def test_related_unknown(self, engine, catalog):
        assert engine.get_related_products(999, catalog) == []
        assert engine.get_related_products("abc", catalog) == []

    def test_cross_sell_excludes_cart(self, engine, catalog):
        results = engine.get_cross_sell_recommendations([catalog[0]], catalog)

        assert 1 not in result_ids(results)
        assert result_ids(results)[0] == 5
        assert results[0].reason == "Frequently bought together"

    def test_cross_sell_is_additive(self, engine, catalog):
        cart = [catalog[0], catalog[4]]
        results = engine.get_cross_sell_recommendations(cart, catalog)
        by_id = {r.product.id: r.score for r in results}

        expected = calculate_product_similarity(catalog[0], catalog[2]) + calculate_product_similarity(
            catalog[4], catalog[2]
        )
        assert 1 not in by_id
        assert 5 not in by_id
        assert by_id[3] == pytest.approx(expected)

    def test_cross_sell_empty_cart(self, engine, catalog):
        assert engine.get_cross_sell_recommendations([], catalog) == []


class TestRecommendationEngine:
    """Tests for engine wiring."""

    def test_tracker_writes_the_shared_log(self, engine):
        """Test that tracked events reach the log every model reads."""
        assert engine.tracker.behavior_log is engine.behavior_log
        assert engine.trending.behavior_log is engine.behavior_log
        assert engine.collaborative.behavior_log is engine.behavior_log

        engine.track_behavior("u1", "purchase", "1")

        assert len(engine.behavior_log) == 1

    def test_tracked_events_drive_recommendations(self, engine, catalog):
        engine.track_behavior("u1", "purchase", "1")

        assert result_ids(engine.get_trending_recommendations(catalog, 5)) == [1]
        assert result_ids(engine.get_hybrid_recommendations("u1", catalog, 5))

    def test_injected_empty_log_is_used(self, catalog):
        log = BehaviorLog()
        engine = RecommendationEngine(behavior_log=log, clock=lambda: NOW)

        engine.track_behavior("u1", "view", "2")

        assert engine.behavior_log is log
        assert [e.product_id for e in log.get_events("u1")] == ["2"]
