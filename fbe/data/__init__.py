"""
FBE Data

Reference tables for fulfillment and storage fees, and the provider that hands
them to the pipeline.

Structure:
    - reference/: Static reference data (CSV tables and configuration)
    - records:    Typed row views of the tables

The tables are loaded once per process (load_reference_data) and never
mutated. Pipeline functions receive them through a ReferenceDataProvider, so
tests can inject their own tables.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Protocol

import polars as pl

from ..errors import ReferenceDataError
from .records import ProductFee, ProductMaxWeight, ProductThreshold
from .reference.billable_weight import (
    GIRTH_FACTOR,
    DIM_FACTOR,
    CM_PER_M,
    LIGHT_TIER_PREFIX,
    HEAVY_TIER_PREFIX,
)
from .reference.storage import (
    OFF_PEAK_SEASON,
    PEAK_SEASON,
    DEFAULT_SEASON,
    SEASONS,
    PRICE_DECIMALS,
)


REFERENCE_DIR = Path(__file__).parent / "reference"

FEES_SCHEMA = {
    "plc_name": pl.Utf8,
    "plc_code": pl.Utf8,
    "weight_limit": pl.Float64,
    "weight": pl.Utf8,
    "girth": pl.Float64,
    "local_order_fee": pl.Float64,
    "local_return_fee": pl.Float64,
    "cross_border_order_fee": pl.Float64,
    "cross_border_return_fee": pl.Float64,
    "removal_fee": pl.Float64,
    "disposal_fee": pl.Float64,
}

MAX_WEIGHT_SCHEMA = {
    "plc_name": pl.Utf8,
    "min_weight": pl.Float64,
    "max_weight": pl.Float64,
    "local_order_fee": pl.Float64,
}

THRESHOLD_SCHEMA = {
    "code": pl.Utf8,
    "period": pl.Utf8,
    "threshold": pl.Utf8,
    "threshold_random": pl.Int64,
    "fee_per_cubic_meter_per_day": pl.Float64,
}


# =============================================================================
# LOADERS
# =============================================================================

def load_product_fees(reference_dir: Path = REFERENCE_DIR) -> pl.DataFrame:
    """
    Load the fee table.

    Returns:
        DataFrame with one row per PLC weight tier:
            - plc_name, plc_code: Category and unique tier code
            - weight_limit, weight: Tier limit (kg) and its label ("≤ 1 kg", "> 2 kg")
            - girth: Category girth ceiling (mm)
            - local/cross-border order and return fees, removal and disposal fees
    """
    return pl.read_csv(reference_dir / "product_fees.csv", schema_overrides=FEES_SCHEMA)


def load_product_max_weight(reference_dir: Path = REFERENCE_DIR) -> pl.DataFrame:
    """
    Load weight brackets.

    Returns:
        DataFrame with columns:
            - plc_name: Category
            - min_weight: Lower bound (kg, inclusive)
            - max_weight: Upper bound (kg, inclusive, null for the open top bracket)
            - local_order_fee: Per-kg rate above the heavy tier limit
    """
    return pl.read_csv(
        reference_dir / "product_max_weight.csv",
        schema_overrides=MAX_WEIGHT_SCHEMA,
    )


def load_product_threshold(reference_dir: Path = REFERENCE_DIR) -> pl.DataFrame:
    """
    Load storage periods.

    Returns:
        DataFrame with columns:
            - code: Unique period code
            - period: Storage season ("January - September", "October - December")
            - threshold: Day range label ("0 - 30", "> 365")
            - threshold_random: Inclusive day ceiling (null for the open period)
            - fee_per_cubic_meter_per_day: Storage rate
    """
    return pl.read_csv(
        reference_dir / "product_threshold.csv",
        schema_overrides=THRESHOLD_SCHEMA,
    )


# =============================================================================
# PROVIDER
# =============================================================================

class ReferenceDataProvider(Protocol):
    """Read-only access to the three reference tables."""

    def get_fees(self) -> pl.DataFrame: ...

    def get_max_weights(self) -> pl.DataFrame: ...

    def get_thresholds(self) -> pl.DataFrame: ...


@dataclass(frozen=True)
class ReferenceData:
    """Immutable bundle of the reference tables."""

    fees: pl.DataFrame
    max_weights: pl.DataFrame
    thresholds: pl.DataFrame

    def get_fees(self) -> pl.DataFrame:
        return self.fees

    def get_max_weights(self) -> pl.DataFrame:
        return self.max_weights

    def get_thresholds(self) -> pl.DataFrame:
        return self.thresholds

    @classmethod
    def from_csv(cls, reference_dir: Path = REFERENCE_DIR) -> "ReferenceData":
        """Load all three tables from reference_dir and validate them."""
        reference = cls(
            fees=load_product_fees(reference_dir),
            max_weights=load_product_max_weight(reference_dir),
            thresholds=load_product_threshold(reference_dir),
        )
        validate_reference_data(reference)
        return reference


@lru_cache(maxsize=1)
def load_reference_data() -> ReferenceData:
    """Shipped reference tables, loaded once per process."""
    return ReferenceData.from_csv(REFERENCE_DIR)


# =============================================================================
# VALIDATION
# =============================================================================

def validate_reference_data(reference: ReferenceDataProvider) -> None:
    """
    Validate reference table integrity.

    Raises ReferenceDataError listing every problem found.
    """
    errors = (
        _fee_errors(reference.get_fees()) +
        _max_weight_errors(reference.get_max_weights()) +
        _threshold_errors(reference.get_thresholds())
    )

    if errors:
        raise ReferenceDataError("Reference data errors:\n  " + "\n  ".join(errors))


def _fee_errors(fees: pl.DataFrame) -> list[str]:
    errors = []

    duplicates = fees.filter(pl.col("plc_code").is_duplicated())["plc_code"].unique().sort()
    for code in duplicates:
        errors.append(f"product_fees: plc_code '{code}' is not unique")

    for row in fees.filter(pl.col("girth") < 0).iter_rows(named=True):
        errors.append(f"product_fees: {row['plc_code']} has negative girth {row['girth']}")

    return errors


def _max_weight_errors(max_weights: pl.DataFrame) -> list[str]:
    errors = []

    for plc_name in max_weights["plc_name"].unique().sort():
        brackets = [
            ProductMaxWeight.from_row(row)
            for row in (
                max_weights
                .filter(pl.col("plc_name") == plc_name)
                .sort("min_weight")
                .iter_rows(named=True)
            )
        ]

        if brackets[0].min_weight != 0:
            errors.append(f"product_max_weight: {plc_name} first bracket starts at {brackets[0].min_weight}, not 0")

        for previous, current in zip(brackets, brackets[1:]):
            if previous.is_open:
                errors.append(f"product_max_weight: {plc_name} open bracket at {previous.min_weight} is not last")
            elif current.min_weight != previous.max_weight:
                errors.append(
                    f"product_max_weight: {plc_name} bracket at {current.min_weight} "
                    f"does not continue from {previous.max_weight}"
                )

    return errors


def _threshold_errors(thresholds: pl.DataFrame) -> list[str]:
    errors = []

    for season in thresholds["period"].unique().sort():
        periods = thresholds.filter(pl.col("period") == season)

        open_count = periods["threshold_random"].null_count()
        if open_count > 1:
            errors.append(f"product_threshold: {season} has {open_count} open periods")

        ceilings = periods["threshold_random"].drop_nulls().sort().to_list()
        for previous, current in zip(ceilings, ceilings[1:]):
            if current <= previous:
                errors.append(f"product_threshold: {season} repeats day ceiling {current}")

    return errors


__all__ = [
    # Loaders
    "load_product_fees",
    "load_product_max_weight",
    "load_product_threshold",
    "load_reference_data",
    "REFERENCE_DIR",
    "FEES_SCHEMA",
    "MAX_WEIGHT_SCHEMA",
    "THRESHOLD_SCHEMA",
    # Provider
    "ReferenceDataProvider",
    "ReferenceData",
    "validate_reference_data",
    # Records
    "ProductFee",
    "ProductMaxWeight",
    "ProductThreshold",
    # Billable weight config
    "GIRTH_FACTOR",
    "DIM_FACTOR",
    "CM_PER_M",
    "LIGHT_TIER_PREFIX",
    "HEAVY_TIER_PREFIX",
    # Storage config
    "OFF_PEAK_SEASON",
    "PEAK_SEASON",
    "DEFAULT_SEASON",
    "SEASONS",
    "PRICE_DECIMALS",
]
