"""
FBE Fulfillment Cost Calculator

Prices one parcel (compute_fulfillment_cost) or a DataFrame of parcels
(calculate_costs). Both are pure functions of their inputs and the reference
tables.

PIPELINE
--------
    1. resolve_weight_list - girth, PLC category, billable weight, bracket
    2. check_weight        - fee candidates (cheapest first)
    3. partition_days      - storage duration split along threshold periods
    4. price_calculation   - storage (threshold) price

    fulfillment_cost        = first candidate's local_order_fee, or 0 if none
    total_fulfillment_price = fulfillment_cost + threshold_price

REQUIRED INPUT COLUMNS (calculate_costs)
----------------------------------------
    length_cm           - Parcel length in centimetres
    height_cm           - Parcel height in centimetres
    width_cm            - Parcel width in centimetres
    weight_kg           - Actual weight in kilograms
    days                - Storage duration in days
    season              - Optional storage season (default January - September)

OUTPUT COLUMNS ADDED
--------------------
    girth_value, plc_name, dim_weight_kg, billable_weight_kg, volume_cbm,
    cost_fulfillment, cost_threshold, cost_total, calculator_version

USAGE
-----
    from fbe.calculate_costs import compute_fulfillment_cost
    result = compute_fulfillment_cost(CalculationRequest(20, 10, 10, 1, days=10))

    from fbe.calculate_costs import calculate_costs
    df = calculate_costs(parcels)
"""

import logging

import polars as pl

from .data import ReferenceDataProvider, load_reference_data
from .data.reference.storage import DEFAULT_SEASON
from .pipeline import (
    CalculationRequest,
    CalculationResult,
    resolve_weight_list,
    check_weight,
    partition_days,
    price_calculation,
)
from .version import VERSION

logger = logging.getLogger(__name__)


# =============================================================================
# SINGLE PARCEL
# =============================================================================

def compute_fulfillment_cost(
    request: CalculationRequest,
    reference: ReferenceDataProvider | None = None,
) -> CalculationResult:
    """
    Calculate fulfillment and storage cost for one parcel.

    Args:
        request: Parcel dimensions, weight, storage days and season
        reference: Reference tables (shipped tables if not provided)

    Returns:
        CalculationResult with the fee candidates, storage segments and totals

    Raises:
        InvalidDimensionsError: Invalid geometry or weight
        InvalidDayRangeError: Invalid day count or season
    """
    if reference is None:
        reference = load_reference_data()

    weight_list = resolve_weight_list(
        request.length, request.height, request.width, request.weight, reference
    )
    checked = check_weight(weight_list, reference)
    day_range = partition_days(request.days, request.season, reference)
    threshold = price_calculation(day_range, weight_list.volume_cbm)

    fulfillment_cost = checked.weight_check[0].local_order_fee if checked.weight_check else 0.0
    total = fulfillment_cost + threshold.threshold_price

    logger.debug(
        "plc=%s fulfillment=%s threshold=%s total=%s",
        checked.results.plc_name, fulfillment_cost, threshold.threshold_price, total,
    )

    return CalculationResult(
        girth_value=weight_list.girth_value,
        plc_name=checked.results.plc_name,
        volume_cbm=weight_list.volume_cbm,
        dim_weight=weight_list.dim_weight,
        billable_weight=weight_list.billable_weight,
        weight_check=checked.weight_check,
        results=checked.results,
        day_range=threshold.segments,
        fulfillment_cost=fulfillment_cost,
        threshold_price=threshold.threshold_price,
        total_fulfillment_price=total,
        calculator_version=VERSION,
    )


# =============================================================================
# DATAFRAME
# =============================================================================

def calculate_costs(
    df: pl.DataFrame,
    reference: ReferenceDataProvider | None = None,
) -> pl.DataFrame:
    """
    Calculate costs for a DataFrame of parcels.

    Args:
        df: Parcel DataFrame with required columns (see module docstring)
        reference: Reference tables (shipped tables if not provided)

    Returns:
        The same DataFrame with calculation columns and costs appended
    """
    if reference is None:
        reference = load_reference_data()

    has_season = "season" in df.columns
    records = []

    for row in df.iter_rows(named=True):
        request = CalculationRequest(
            length=row["length_cm"],
            height=row["height_cm"],
            width=row["width_cm"],
            weight=row["weight_kg"],
            days=row["days"],
            season=row["season"] if has_season and row["season"] else DEFAULT_SEASON,
        )
        result = compute_fulfillment_cost(request, reference)
        records.append({
            "girth_value": result.girth_value,
            "plc_name": result.plc_name,
            "dim_weight_kg": result.dim_weight,
            "billable_weight_kg": result.billable_weight,
            "volume_cbm": result.volume_cbm,
            "cost_fulfillment": result.fulfillment_cost,
            "cost_threshold": result.threshold_price,
            "cost_total": result.total_fulfillment_price,
        })

    costs = pl.DataFrame(records, schema=COST_SCHEMA)
    return (
        df
        .hstack(costs)
        .with_columns(pl.lit(VERSION).alias("calculator_version"))
    )


COST_SCHEMA = {
    "girth_value": pl.Float64,
    "plc_name": pl.Utf8,
    "dim_weight_kg": pl.Float64,
    "billable_weight_kg": pl.Float64,
    "volume_cbm": pl.Float64,
    "cost_fulfillment": pl.Float64,
    "cost_threshold": pl.Float64,
    "cost_total": pl.Float64,
}


__all__ = [
    "compute_fulfillment_cost",
    "calculate_costs",
    "COST_SCHEMA",
]
