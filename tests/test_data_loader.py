"""Tests for catalog and behavior loading."""

import numpy as np
import pandas as pd
import pytest

from shopsense.data.loader import CatalogLoader, load_behaviors
from shopsense.data.validation import CatalogValidator


@pytest.fixture
def sample_products_df():
    """Create sample catalog DataFrame."""
    return pd.DataFrame({
        "id": [1, 2, 3],
        "name": ["Sony Headphones", "Levis Jeans", "Oak Table Lamp"],
        "category": ["electronics", "fashion", None],
        "brand": ["sony", "levis", "ikea"],
        "price": [50.0, 80.0, 45.0],
        "rating": [4.6, np.nan, 3.9],
        "tags": ["audio|wireless", "denim", np.nan],
        "isBestseller": [True, False, False],
    })


class TestCatalogLoader:
    """Tests for CatalogLoader class."""

    def test_load_products_from_df(self, sample_products_df):
        """Test loading a catalog from DataFrame."""
        loader = CatalogLoader()
        products = loader.load_products(df=sample_products_df)

        assert len(products) == 3
        assert [p.id for p in products] == [1, 2, 3]
        assert products[0].tags == ["audio", "wireless"]
        assert products[0].is_bestseller is True
        assert products[1].rating is None
        assert products[2].category is None
        assert products[2].tags == []

    def test_load_products_from_csv(self, sample_products_df, tmp_path):
        path = tmp_path / "products.csv"
        sample_products_df.to_csv(path, index=False)

        loader = CatalogLoader()
        loader.load_products(str(path))

        assert len(loader.products) == 3
        assert loader.products[0].tags == ["audio", "wireless"]

    def test_load_products_from_json(self, tmp_path):
        path = tmp_path / "products.json"
        pd.DataFrame([
            {"id": 1, "name": "Mug", "price": 8.0, "tags": ["kitchen", "gift"]},
        ]).to_json(path, orient="records")

        loader = CatalogLoader()
        loader.load_products(str(path))

        assert loader.products[0].tags == ["kitchen", "gift"]

    def test_missing_columns(self):
        """Test error on missing required columns."""
        loader = CatalogLoader()
        with pytest.raises(ValueError, match="Missing required columns"):
            loader.load_products(df=pd.DataFrame({"id": [1], "name": ["Mug"]}))

    def test_no_input(self):
        with pytest.raises(ValueError, match="Either filepath or df"):
            CatalogLoader().load_products()

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "products.xml"
        path.write_text("<products/>")

        with pytest.raises(ValueError, match="Unsupported file format"):
            CatalogLoader().load_products(str(path))

    def test_invalid_and_duplicate_rows_skipped(self):
        """Test that bad rows are skipped rather than failing the load."""
        df = pd.DataFrame({
            "id": [1, 2, 1],
            "name": ["Mug", "Broken", "Mug Copy"],
            "price": [8.0, -1.0, 9.0],
        })
        loader = CatalogLoader()
        products = loader.load_products(df=df)

        assert [p.name for p in products] == ["Mug"]

    def test_validation_runs_on_load(self):
        """Test that catalog problems are reported while usable rows still load."""
        df = pd.DataFrame({
            "id": [1, 2],
            "name": ["Mug", "Broken"],
            "price": [8.0, -1.0],
        })
        loader = CatalogLoader()
        loader.load_products(df=df)

        assert any("negative prices" in e for e in loader.validation_errors)
        assert [p.id for p in loader.products] == [1]

    def test_clean_catalog_has_no_validation_errors(self, sample_products_df):
        loader = CatalogLoader()
        loader.load_products(df=sample_products_df)

        assert loader.validation_errors == []

    def test_strict_validator_rejects_catalog(self):
        df = pd.DataFrame({"id": [1, 1], "name": ["Mug", "Mug"], "price": [8.0, 8.0]})
        loader = CatalogLoader(validator=CatalogValidator(strict_mode=True))

        with pytest.raises(ValueError, match="Catalog validation failed"):
            loader.load_products(df=df)

    def test_get_product(self, sample_products_df):
        loader = CatalogLoader()
        loader.load_products(df=sample_products_df)

        assert loader.get_product(2).name == "Levis Jeans"
        assert loader.get_product("2").name == "Levis Jeans"
        assert loader.get_product(99) is None
        assert loader.get_product("abc") is None

    def test_get_categories(self, sample_products_df):
        loader = CatalogLoader()
        loader.load_products(df=sample_products_df)

        assert loader.get_categories() == ["electronics", "fashion"]


class TestLoadBehaviors:
    """Tests for load_behaviors."""

    def test_sorted_and_typed(self):
        df = pd.DataFrame({
            "user_id": ["u1", "u2", "u1"],
            "action": ["view", "purchase", "cart"],
            "product_id": [3, 1, 2],
            "timestamp": [300, 100, 200],
        })
        behaviors = load_behaviors(df=df)

        assert behaviors["timestamp"].tolist() == [100, 200, 300]
        assert behaviors["product_id"].tolist() == ["1", "2", "3"]

    def test_missing_columns(self):
        with pytest.raises(ValueError, match="Missing required columns"):
            load_behaviors(df=pd.DataFrame({"user_id": ["u1"]}))
