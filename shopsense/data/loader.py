"""Catalog and behavior loading utilities."""

from pathlib import Path
from typing import Optional

import pandas as pd
from loguru import logger

from shopsense.data.schemas import Product
from shopsense.data.validation import CatalogValidator

PRODUCT_COLUMNS = ["id", "name", "price"]
BEHAVIOR_COLUMNS = ["user_id", "action", "product_id", "timestamp"]


def _read_frame(filepath: str | Path) -> pd.DataFrame:
    filepath = Path(filepath)
    if filepath.suffix == ".csv":
        return pd.read_csv(filepath)
    if filepath.suffix == ".json":
        return pd.read_json(filepath)
    if filepath.suffix == ".parquet":
        return pd.read_parquet(filepath)
    raise ValueError(f"Unsupported file format: {filepath.suffix}")


def _split_tags(value) -> list[str]:
    """Tags arrive as lists (JSON/parquet) or '|'-separated strings (CSV)."""
    if value is None:
        return []
    if isinstance(value, str):
        return [tag.strip() for tag in value.split("|") if tag.strip()]
    if isinstance(value, float) and pd.isna(value):
        return []
    return [str(tag) for tag in value]


class CatalogLoader:
    """Load a product catalog into Product records."""

    def __init__(self, validator: Optional[CatalogValidator] = None) -> None:
        """
        Args:
            validator: Catalog checks run on every load (default: non-strict)
        """
        self.validator = validator or CatalogValidator()
        self.validation_errors: list[str] = []
        self.products_df: Optional[pd.DataFrame] = None
        self.products: list[Product] = []
        self.product_index: dict[int, Product] = {}

    def load_products(
        self,
        filepath: Optional[str | Path] = None,
        df: Optional[pd.DataFrame] = None,
    ) -> list[Product]:
        """
        Load catalog data from file or DataFrame.

        Expected columns: id, name, price
        Optional columns: description, category, brand, rating, tags,
        isBestseller (or is_bestseller), color, size, material

        The catalog is checked by the validator first; its findings are kept
        in validation_errors, and a strict validator raises ValueError.
        Rows that fail Product validation are skipped with a warning.
        Catalog order is preserved since it breaks score ties.
        """
        if df is not None:
            self.products_df = df.copy()
        elif filepath is not None:
            self.products_df = _read_frame(filepath)
        else:
            raise ValueError("Either filepath or df must be provided")

        missing = set(PRODUCT_COLUMNS) - set(self.products_df.columns)
        if missing:
            raise ValueError(f"Missing required columns: {missing}")

        _, self.validation_errors = self.validator.validate_catalog(self.products_df)

        # NaN -> None so optional fields validate
        records = self.products_df.astype(object).where(
            self.products_df.notna(), None
        ).to_dict("records")

        self.products = []
        self.product_index = {}
        for record in records:
            record = {key: value for key, value in record.items() if value is not None}
            record["tags"] = _split_tags(record.get("tags"))
            try:
                product = Product.model_validate(record)
            except ValueError as e:
                logger.warning(f"Skipping invalid product row {record.get('id')}: {e}")
                continue

            if product.id in self.product_index:
                logger.warning(f"Skipping duplicate product id {product.id}")
                continue

            self.products.append(product)
            self.product_index[product.id] = product

        logger.info(f"Loaded {len(self.products)} products")
        return self.products

    def get_product(self, product_id: int | str) -> Optional[Product]:
        """Look up a loaded product by id, accepting string ids."""
        try:
            return self.product_index.get(int(product_id))
        except (TypeError, ValueError):
            return None

    def get_categories(self) -> list[str]:
        """Distinct categories in catalog order."""
        seen = []
        for product in self.products:
            if product.category is not None and product.category not in seen:
                seen.append(product.category)
        return seen


def load_behaviors(
    filepath: Optional[str | Path] = None,
    df: Optional[pd.DataFrame] = None,
) -> pd.DataFrame:
    """
    Load a recorded behavior export for replay.

    Expected columns: user_id, action, product_id, timestamp (epoch ms)

    Returns:
        DataFrame sorted by timestamp with product_id as string
    """
    if df is not None:
        behaviors_df = df.copy()
    elif filepath is not None:
        behaviors_df = _read_frame(filepath)
    else:
        raise ValueError("Either filepath or df must be provided")

    missing = set(BEHAVIOR_COLUMNS) - set(behaviors_df.columns)
    if missing:
        raise ValueError(f"Missing required columns: {missing}")

    behaviors_df["product_id"] = behaviors_df["product_id"].astype(str)
    behaviors_df["user_id"] = behaviors_df["user_id"].astype(str)
    behaviors_df["timestamp"] = behaviors_df["timestamp"].astype("int64")
    behaviors_df = behaviors_df.sort_values("timestamp", kind="stable")

    logger.info(
        f"Loaded {len(behaviors_df)} behaviors for "
        f"{behaviors_df['user_id'].nunique()} users"
    )
    return behaviors_df
