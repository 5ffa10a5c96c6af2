"""
Dimension & Weight Resolver

Turns parcel dimensions and weight into the values every later stage needs:
girth, PLC category, billable weight, volume and the matching weight bracket.
"""

import logging
import math

import polars as pl

from ..data import ReferenceDataProvider, load_reference_data
from ..data.records import ProductFee, ProductMaxWeight
from ..data.reference.billable_weight import GIRTH_FACTOR, DIM_FACTOR, CM_PER_M
from ..errors import InvalidDimensionsError
from .models import WeightList

logger = logging.getLogger(__name__)


def resolve_weight_list(
    length: float,
    height: float,
    width: float,
    weight: float,
    reference: ReferenceDataProvider | None = None,
) -> WeightList:
    """
    Resolve girth, category and weight bracket for one parcel.

    Args:
        length, height, width: Dimensions in centimetres
        weight: Actual weight in kilograms
        reference: Reference tables (shipped tables if not provided)

    Returns:
        WeightList with the category fee rows (data), girth_value and plc_name

    Raises:
        InvalidDimensionsError: Non-numeric or negative input, or all inputs zero
    """
    if reference is None:
        reference = load_reference_data()

    _validate_inputs(length=length, height=height, width=width, weight=weight)

    girth_value = calculate_girth(length, height, width)
    dim_weight = calculate_dim_weight(length, height, width)
    billable_weight = max(float(weight), dim_weight)

    fees = reference.get_fees()
    plc_name = resolve_category(fees, girth_value)
    data = category_fee_rows(fees, plc_name, girth_value)
    bracket, in_range = resolve_bracket(reference.get_max_weights(), plc_name, billable_weight)

    logger.debug(
        "girth=%s plc=%s billable_weight=%s bracket=%s in_range=%s",
        girth_value, plc_name, billable_weight, bracket, in_range,
    )

    return WeightList(
        data=data,
        girth_value=girth_value,
        plc_name=plc_name,
        actual_weight=float(weight),
        dim_weight=dim_weight,
        billable_weight=billable_weight,
        volume_cbm=calculate_volume(length, height, width),
        bracket=bracket,
        bracket_in_range=in_range,
    )


# =============================================================================
# GEOMETRY
# =============================================================================

def calculate_girth(length: float, height: float, width: float) -> float:
    """
    Girth in millimetres: the two shortest sides doubled plus the longest.

    ((a + b) * 2 + c) * GIRTH_FACTOR with a <= b <= c.
    """
    a, b, c = sorted([float(length), float(height), float(width)])
    return ((a + b) * 2 + c) * GIRTH_FACTOR


def calculate_dim_weight(length: float, height: float, width: float) -> float:
    """Volumetric weight in kilograms."""
    return float(length) * float(height) * float(width) / DIM_FACTOR


def calculate_volume(length: float, height: float, width: float) -> float:
    """Volume in cubic metres."""
    return (length / CM_PER_M) * (height / CM_PER_M) * (width / CM_PER_M)


def _validate_inputs(**values) -> None:
    for name, value in values.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidDimensionsError(f"{name} must be a number, got {value!r}")
        try:
            finite = math.isfinite(value)
        except OverflowError:
            finite = False
        if not finite:
            raise InvalidDimensionsError(f"{name} must be a finite number")
        if value < 0:
            raise InvalidDimensionsError(f"{name} must not be negative, got {value}")

    if all(value == 0 for value in values.values()):
        raise InvalidDimensionsError("Product with these dimensions does not exist.")


# =============================================================================
# LOOKUPS
# =============================================================================

def categories_by_girth(fees: pl.DataFrame) -> pl.DataFrame:
    """One row per category with its girth ceiling, smallest first."""
    return (
        fees
        .group_by("plc_name")
        .agg(pl.col("girth").max())
        .sort(["girth", "plc_name"])
    )


def resolve_category(fees: pl.DataFrame, girth_value: float) -> str:
    """
    First category whose girth ceiling holds girth_value.

    A girth above every ceiling resolves to the largest category; its fee rows
    will not match and the weight check flags the parcel.
    """
    categories = categories_by_girth(fees)
    if categories.is_empty():
        return ""

    matches = categories.filter(pl.col("girth") >= girth_value)
    if matches.is_empty():
        return categories["plc_name"][-1]
    return matches["plc_name"][0]


def category_fee_rows(
    fees: pl.DataFrame,
    plc_name: str,
    girth_value: float,
) -> tuple[ProductFee, ...]:
    """Fee rows of a category that accept girth_value, ordered by girth then weight limit."""
    rows = (
        fees
        .filter((pl.col("plc_name") == plc_name) & (pl.col("girth") >= girth_value))
        .sort(["girth", "weight_limit", "plc_code"])
    )
    return tuple(ProductFee.from_row(row) for row in rows.iter_rows(named=True))


def resolve_bracket(
    max_weights: pl.DataFrame,
    plc_name: str,
    billable_weight: float,
) -> tuple[ProductMaxWeight | None, bool]:
    """
    Weight bracket of a category holding billable_weight.

    Brackets are inclusive on both ends; on a shared endpoint the lower bracket
    wins. A weight above the top bracket resolves to the top bracket with
    in_range False.

    Returns:
        (bracket, in_range); bracket is None when the category has no brackets
    """
    brackets = max_weights.filter(pl.col("plc_name") == plc_name).sort("min_weight")
    if brackets.is_empty():
        return None, False

    matches = brackets.filter(
        (pl.col("min_weight") <= billable_weight) &
        (pl.col("max_weight").is_null() | (pl.col("max_weight") >= billable_weight))
    )
    if not matches.is_empty():
        return ProductMaxWeight.from_row(matches.row(0, named=True)), True

    top = ProductMaxWeight.from_row(brackets.row(len(brackets) - 1, named=True))
    return top, False


__all__ = [
    "resolve_weight_list",
    "calculate_girth",
    "calculate_dim_weight",
    "calculate_volume",
    "categories_by_girth",
    "resolve_category",
    "category_fee_rows",
    "resolve_bracket",
]
