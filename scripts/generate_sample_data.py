#!/usr/bin/env python3
"""Generate a sample product catalog and behavior log for development."""

import random
from datetime import datetime, timedelta
from pathlib import Path

import numpy as np
import pandas as pd

CATEGORIES = {
    "electronics": {
        "brands": ["Apple", "Samsung", "Sony"],
        "nouns": ["Headphones", "Laptop", "Phone", "Tablet", "Camera", "Speaker"],
        "price": (30, 1500),
    },
    "clothing": {
        "brands": ["Nike", "Levi's", "Uniqlo"],
        "nouns": ["Shirt", "Jacket", "Jeans", "Dress", "Hoodie"],
        "price": (10, 250),
    },
    "sports": {
        "brands": ["Nike", "Adidas", "Wilson"],
        "nouns": ["Running Shoes", "Yoga Mat", "Basketball", "Tennis Racket"],
        "price": (15, 300),
    },
    "home": {
        "brands": ["IKEA", "Dyson", "KitchenAid"],
        "nouns": ["Table Lamp", "Desk Chair", "Sofa Cushion", "Blender"],
        "price": (20, 800),
    },
    "beauty": {
        "brands": ["Glossier", "CeraVe", "Olaplex"],
        "nouns": ["Face Cream", "Skincare Set", "Perfume", "Lipstick"],
        "price": (8, 150),
    },
}
COLORS = ["black", "white", "red", "blue", "green", "gray", "silver"]
SIZES = ["small", "medium", "large", "xl"]
MATERIALS = ["cotton", "leather", "metal", "plastic", "wood", "polyester"]
ACTIONS = ["view", "search", "wishlist", "cart", "purchase", "review", "share"]
ACTION_PROBS = [0.55, 0.05, 0.08, 0.14, 0.10, 0.04, 0.04]


def generate_sample_data(
    n_users: int = 200,
    n_products: int = 300,
    n_behaviors: int = 20000,
    output_dir: str = "data/sample",
    seed: int = 42,
    days: int = 60,
) -> tuple[pd.DataFrame, pd.DataFrame]:
    """
    Generate a synthetic catalog and behavior log.

    Creates realistic patterns:
    - Power-law distribution for product popularity
    - User activity varies (some users more active)
    - Temporal patterns (more recent = more behaviors)

    Args:
        n_users: Number of users
        n_products: Number of products
        n_behaviors: Total number of behavior events
        output_dir: Directory to save CSV files
        seed: Random seed for reproducibility
        days: How far back behaviors go

    Returns:
        Tuple of (products_df, behaviors_df)
    """
    random.seed(seed)
    np.random.seed(seed)

    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    products = []
    for i in range(n_products):
        category = random.choice(list(CATEGORIES))
        profile = CATEGORIES[category]
        brand = random.choice(profile["brands"])
        noun = random.choice(profile["nouns"])
        color = random.choice(COLORS)
        low, high = profile["price"]

        products.append({
            "id": i + 1,
            "name": f"{brand} {color.title()} {noun}",
            "description": f"{noun.lower()} by {brand} in {color}",
            "category": category,
            "brand": brand,
            "price": round(random.uniform(low, high), 2),
            "rating": round(random.uniform(2.5, 5.0), 1) if random.random() > 0.1 else None,
            "tags": "|".join(random.sample([noun.lower(), color, category, "gift", "new"], k=2)),
            "isBestseller": random.random() < 0.1,
            "color": color,
            "size": random.choice(SIZES) if category == "clothing" else None,
            "material": random.choice(MATERIALS) if random.random() > 0.3 else None,
        })

    products_df = pd.DataFrame(products)

    # Product popularity follows power law
    product_popularity = np.random.pareto(1.5, n_products) + 1
    product_popularity = product_popularity / product_popularity.sum()

    # User activity follows power law
    user_activity = np.random.pareto(1.2, n_users) + 1
    user_activity = user_activity / user_activity.sum()

    now = datetime.now()
    behaviors = []
    for _ in range(n_behaviors):
        user_idx = np.random.choice(n_users, p=user_activity)
        product_idx = np.random.choice(n_products, p=product_popularity)
        action = random.choices(ACTIONS, weights=ACTION_PROBS)[0]

        # Timestamp: more recent behaviors more likely
        days_ago = min(int(np.random.exponential(days / 6)), days)
        timestamp = now - timedelta(
            days=days_ago,
            hours=random.randint(0, 23),
            minutes=random.randint(0, 59),
        )

        behaviors.append({
            "user_id": f"user_{user_idx:04d}",
            "action": action,
            "product_id": str(product_idx + 1),
            "timestamp": int(timestamp.timestamp() * 1000),
        })

    behaviors_df = pd.DataFrame(behaviors)
    behaviors_df = behaviors_df.sort_values("timestamp", kind="stable").reset_index(drop=True)

    products_df.to_csv(output_path / "products.csv", index=False)
    behaviors_df.to_csv(output_path / "behaviors.csv", index=False)

    print(f"Generated data saved to {output_path}/")
    print(f"  - {len(products_df)} products")
    print(f"  - {len(behaviors_df)} behaviors")
    print(f"\nAction distribution:")
    print(behaviors_df["action"].value_counts())

    return products_df, behaviors_df


if __name__ == "__main__":
    generate_sample_data()
