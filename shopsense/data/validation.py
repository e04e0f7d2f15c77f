"""Catalog validation schemas using Pandera."""

from typing import Optional

import pandas as pd
import pandera as pa
from loguru import logger
from pandera import Check, Column, DataFrameSchema


CatalogSchema = DataFrameSchema(
    {
        "id": Column(
            int,
            nullable=False,
            unique=True,
            description="Unique product identifier",
        ),
        "name": Column(
            str,
            Check.str_length(min_value=1),
            nullable=False,
            description="Product name",
        ),
        "price": Column(
            float,
            Check.greater_than_or_equal_to(0),
            nullable=False,
            description="Product price (non-negative)",
        ),
        "rating": Column(
            float,
            Check.in_range(0.0, 5.0),
            nullable=True,
            required=False,
            description="Average rating (0-5)",
        ),
        "category": Column(
            str,
            nullable=True,
            required=False,
            description="Product category",
        ),
        "brand": Column(
            str,
            nullable=True,
            required=False,
            description="Product brand",
        ),
        "description": Column(
            str,
            nullable=True,
            required=False,
            description="Product description",
        ),
    },
    coerce=True,
    strict=False,  # Allow tags, attributes and other extra columns
    name="CatalogSchema",
    description="Schema for the product catalog",
)


REQUIRED_COLUMNS = ("id", "name", "price")


def _structural_errors(df: pd.DataFrame) -> list[str]:
    """Problems that make the catalog unusable before any schema check."""
    errors = [
        f"Missing required column: {column}"
        for column in REQUIRED_COLUMNS
        if column not in df.columns
    ]
    if df.empty:
        return ["DataFrame is empty"] + errors

    if "id" in df.columns:
        duplicated = df["id"].dropna()
        duplicated = duplicated[duplicated.duplicated()].unique().tolist()
        if df["id"].isna().any():
            errors.append("id contains null values")
        if duplicated:
            errors.append(f"id has duplicates: {duplicated[:10]}")

    if "price" in df.columns:
        negative = df.loc[df["price"] < 0, "id" if "id" in df.columns else "price"].tolist()
        if negative:
            errors.append(f"{len(negative)} products have negative prices: {negative[:10]}")

    return errors


def _schema_errors(df: pd.DataFrame) -> list[str]:
    """Column-level failures reported by CatalogSchema."""
    try:
        CatalogSchema.validate(df, lazy=True)
    except pa.errors.SchemaErrors as e:
        return [
            f"Column '{case['column']}' failed {case['check']} "
            f"(value: {case['failure_case']})"
            for case in e.failure_cases.to_dict("records")
        ]
    return []


class CatalogValidator:
    """
    Check a catalog DataFrame before it is turned into Product records.

    Structural problems (empty frame, missing columns, duplicate ids,
    negative prices) are reported first; the pandera schema only runs on
    catalogs that pass them. CatalogLoader runs this on every load.

    Example:
        validator = CatalogValidator()
        is_valid, errors = validator.validate_catalog(df)
    """

    def __init__(self, strict_mode: bool = False) -> None:
        """
        Args:
            strict_mode: Raise ValueError instead of returning errors
        """
        self.strict_mode = strict_mode

    def validate_catalog(
        self,
        df: pd.DataFrame,
        raise_on_error: Optional[bool] = None,
    ) -> tuple[bool, list[str]]:
        """
        Validate a product catalog.

        Args:
            df: Catalog DataFrame
            raise_on_error: Override strict_mode for this call

        Returns:
            Tuple of (is_valid, list of error messages)
        """
        errors = _structural_errors(df) or _schema_errors(df)
        if not errors:
            return True, []

        if raise_on_error if raise_on_error is not None else self.strict_mode:
            raise ValueError(f"Catalog validation failed: {errors}")

        logger.warning(f"Catalog validation found {len(errors)} problems: {errors[:5]}")
        return False, errors
