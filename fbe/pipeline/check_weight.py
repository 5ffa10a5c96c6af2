"""
Weight-Fee Checker

Validates the resolved category against the girth value and prices the parcel
on its billable weight.

LIGHT PARCELS
-------------
Up to the category's largest "≤ X kg" tier the fee is flat: every light tier
whose limit holds the billable weight is a candidate, tightest (cheapest)
first.

HEAVY PARCELS
-------------
Above the light tiers the fee is the "> X kg" base fee plus a per-kg rate from
the weight bracket on every kilogram above X:

    fee = base.local_order_fee + (billable_weight - base.weight_limit) * bracket.local_order_fee

A parcel heavier than the top bracket is priced on the top bracket and flagged
out of range. A category without a base row or brackets yields no candidates
(fulfillment cost 0).
"""

import logging

import polars as pl

from ..data import ReferenceDataProvider, load_reference_data
from ..data.records import ProductFee, ProductMaxWeight
from ..errors import NoBracketMatchError
from .models import CheckResults, FeeCandidate, WeightCheck, WeightList
from .resolve_weight import categories_by_girth, category_fee_rows, resolve_bracket

logger = logging.getLogger(__name__)

NO_CATEGORY_MESSAGE = "Product with these dimensions does not exist."


def check_weight(
    weight_list: WeightList,
    reference: ReferenceDataProvider | None = None,
) -> WeightCheck:
    """
    Build the fee candidates for a resolved parcel.

    Args:
        weight_list: Output of resolve_weight_list
        reference: Reference tables (shipped tables if not provided)

    Returns:
        WeightCheck with weight_check (cheapest first, possibly empty) and
        diagnostic results

    A WeightList from resolve_weight_list has empty data only when the girth
    exceeds every category. The escalation to the next larger category covers
    WeightLists built elsewhere whose fee rows do not hold the girth.
    """
    if reference is None:
        reference = load_reference_data()

    plc_name = weight_list.plc_name
    data = weight_list.data
    bracket = weight_list.bracket
    in_range = weight_list.bracket_in_range
    billable_weight = weight_list.billable_weight
    rule = "girth" if weight_list.uses_dim_weight else "weight"
    escalated_from = None

    if not data:
        next_plc = _next_category(reference.get_fees(), weight_list.girth_value, plc_name)
        if next_plc is None:
            logger.warning("girth %s exceeds every category", weight_list.girth_value)
            return WeightCheck(
                weight_check=(),
                results=CheckResults(
                    rule="girth",
                    plc_name=plc_name,
                    girth_value=weight_list.girth_value,
                    billable_weight=billable_weight,
                    exceeds_all_brackets=True,
                    message=NO_CATEGORY_MESSAGE,
                ),
            )

        logger.debug("girth %s escalates %s -> %s", weight_list.girth_value, plc_name, next_plc)
        escalated_from, plc_name, rule = plc_name, next_plc, "girth"
        data = category_fee_rows(reference.get_fees(), plc_name, weight_list.girth_value)
        bracket, in_range = resolve_bracket(reference.get_max_weights(), plc_name, billable_weight)

    light = sorted((r for r in data if r.is_light_tier), key=lambda r: (r.weight_limit, r.plc_code))
    message = None

    if light and billable_weight <= light[-1].weight_limit:
        candidates = tuple(
            _light_candidate(row, rule)
            for row in light
            if row.weight_limit >= billable_weight
        )
    else:
        try:
            candidate = _heavy_candidate(data, bracket, in_range, billable_weight, rule)
            candidates = (candidate,)
            if not in_range:
                message = _out_of_range_message(bracket, billable_weight)
                logger.warning("%s: %s", plc_name, message)
        except NoBracketMatchError as exc:
            logger.warning("%s: %s Fulfillment cost defaults to 0.", plc_name, exc)
            candidates, message = (), str(exc)

    return WeightCheck(
        weight_check=candidates,
        results=CheckResults(
            rule=rule,
            plc_name=plc_name,
            girth_value=weight_list.girth_value,
            billable_weight=billable_weight,
            escalated_from=escalated_from,
            message=message,
            fee_rows=matching_fee_rows(data, billable_weight),
        ),
    )


def matching_fee_rows(data: tuple[ProductFee, ...], billable_weight: float) -> tuple[ProductFee, ...]:
    """Light tiers that hold the weight and heavy tiers the weight is above."""
    return tuple(
        row for row in data
        if (row.is_light_tier and row.weight_limit >= billable_weight)
        or (row.is_heavy_tier and row.weight_limit < billable_weight)
    )


def _next_category(fees: pl.DataFrame, girth_value: float, current: str) -> str | None:
    """Smallest category other than current whose ceiling holds girth_value."""
    larger = categories_by_girth(fees).filter(
        (pl.col("girth") >= girth_value) & (pl.col("plc_name") != current)
    )
    if larger.is_empty():
        return None
    return larger["plc_name"][0]


def _out_of_range_message(bracket: ProductMaxWeight, billable_weight: float) -> str:
    # Below the first bracket when the top bracket is open
    if bracket.is_open:
        return (
            f"Product weight {billable_weight:g}KG is outside the weight brackets "
            f"of {bracket.plc_name}."
        )
    return f"Product with these dimensions can not have weight more than {bracket.max_weight:g}KG."


def _light_candidate(row: ProductFee, rule: str) -> FeeCandidate:
    return FeeCandidate(
        plc_name=row.plc_name,
        plc_code=row.plc_code,
        weight=row.weight,
        weight_limit=row.weight_limit,
        girth=row.girth,
        local_order_fee=row.local_order_fee,
        rule=rule,
        within_range=True,
    )


def _heavy_candidate(
    data: tuple[ProductFee, ...],
    bracket: ProductMaxWeight | None,
    in_range: bool,
    billable_weight: float,
    rule: str,
) -> FeeCandidate:
    base = next((row for row in data if row.is_heavy_tier), None)
    if base is None:
        raise NoBracketMatchError("No base fee for weights above the light tiers.")
    if bracket is None:
        raise NoBracketMatchError(f"No weight bracket for {base.plc_name}.")

    extra_weight = max(billable_weight - base.weight_limit, 0.0)
    fee = base.local_order_fee + extra_weight * bracket.local_order_fee

    logger.debug(
        "base=%s extra_weight=%s per_kg=%s fee=%s",
        base.local_order_fee, extra_weight, bracket.local_order_fee, fee,
    )

    return FeeCandidate(
        plc_name=base.plc_name,
        plc_code=base.plc_code,
        weight=base.weight,
        weight_limit=base.weight_limit,
        girth=base.girth,
        local_order_fee=fee,
        rule=rule,
        within_range=in_range,
        per_kg_rate=bracket.local_order_fee,
        extra_weight=extra_weight,
    )


__all__ = [
    "check_weight",
    "matching_fee_rows",
    "NO_CATEGORY_MESSAGE",
]
