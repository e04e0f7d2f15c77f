#!/usr/bin/env python3
"""
Quickstart example for ShopSense.

This script demonstrates:
1. Loading a product catalog
2. Natural-language search with query understanding
3. Tracking user behavior
4. Generating recommendations
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pandas as pd

from shopsense.core import ShopSense
from shopsense.data.loader import CatalogLoader, load_behaviors


def generate_demo_catalog() -> pd.DataFrame:
    """Small demo catalog for quick testing."""
    return pd.DataFrame([
        {"id": 1, "name": "Sony Wireless Headphones", "category": "electronics", "brand": "sony",
         "price": 89.99, "rating": 4.6, "tags": "audio|wireless", "isBestseller": True},
        {"id": 2, "name": "Apple iPhone 15", "category": "electronics", "brand": "apple",
         "price": 799.0, "rating": 4.8, "tags": "phone|mobile", "isBestseller": True},
        {"id": 3, "name": "Samsung Galaxy Tablet", "category": "electronics", "brand": "samsung",
         "price": 329.0, "rating": 4.3, "tags": "tablet|android", "isBestseller": False},
        {"id": 4, "name": "Nike Running Shoes", "category": "sports", "brand": "nike",
         "price": 120.0, "rating": 4.5, "tags": "running|shoes", "isBestseller": False},
        {"id": 5, "name": "Red Cotton Shirt", "category": "fashion", "brand": "uniqlo",
         "price": 24.5, "rating": 4.1, "tags": "shirt|cotton", "isBestseller": False,
         "color": "red", "material": "cotton"},
        {"id": 6, "name": "Oak Table Lamp", "category": "home", "brand": "ikea",
         "price": 45.0, "rating": 3.9, "tags": "lamp|decor", "isBestseller": False,
         "material": "wood"},
    ])


def main():
    print("=" * 60)
    print(" ShopSense - Quickstart Demo")
    print("=" * 60)

    # Step 1: Load catalog
    print("\n[1/4] Loading catalog...")

    data_path = Path("data/sample/products.csv")
    loader = CatalogLoader()
    if data_path.exists():
        print(f"  Loading from {data_path}")
        loader.load_products(str(data_path))
    else:
        print("  Using demo catalog...")
        loader.load_products(df=generate_demo_catalog())

    catalog = loader.products
    print(f"  Loaded {len(catalog)} products in {len(loader.get_categories())} categories")

    shop = ShopSense()

    # Step 2: Search
    print("\n[2/4] Searching...")

    for query in ["cheap sony headphones", "iphone under $1000", "red cotton shirt"]:
        response = shop.search(query, catalog, limit=3, user_id="demo_user")
        print(f"\n  '{query}' -> intent: {response.parsed_query.intent.value}")
        for rank, result in enumerate(response.results, 1):
            print(f"    {rank}. {result.product.name} (score: {result.score}) {result.match_reasons}")
        if response.alternative_queries:
            print(f"    Try also: {response.alternative_queries}")

    # Step 3: Track behavior
    print("\n[3/4] Tracking behavior...")

    behaviors_path = Path("data/sample/behaviors.csv")
    if behaviors_path.exists():
        behaviors_df = load_behaviors(str(behaviors_path))
        shop.recommendation_engine.tracker.replay(behaviors_df)
    else:
        shop.recommendation_engine.tracker.seed_sample_data()
        shop.track_behavior("demo_user", "purchase", catalog[0].id)
        shop.track_behavior("demo_user", "view", catalog[1].id)

    print(f"  {len(shop.recommendation_engine.behavior_log)} behaviors recorded")

    # Step 4: Recommendations
    print("\n[4/4] Generating recommendations...")

    user_id = shop.recommendation_engine.behavior_log.users()[0]
    sections = [
        (f"Personalized for {user_id}", shop.get_personal_recommendations(user_id, catalog, 5)),
        ("Trending", shop.get_trending_recommendations(catalog, 5)),
        (f"Related to {catalog[0].name}", shop.get_related_products(catalog[0].id, catalog)),
        ("Complete your cart", shop.get_cross_sell_recommendations(catalog[:1], catalog)),
    ]

    for title, results in sections:
        print(f"\n  {title}:")
        for rank, result in enumerate(results, 1):
            print(f"    {rank}. {result.product.name} (score: {result.score:.4f})")

    print("\n" + "=" * 60)
    print(" Demo complete! ")
    print("=" * 60)
    print("\nNext steps:")
    print("  1. Generate sample data: python scripts/generate_sample_data.py")
    print("  2. Start the API: SHOPSENSE_CATALOG_PATH=data/sample/products.csv python -m shopsense.api.main")
    print("  3. Visit: http://localhost:8000/docs")


if __name__ == "__main__":
    main()
