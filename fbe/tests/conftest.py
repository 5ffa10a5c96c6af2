"""
Shared fixtures: a small injected reference data set, independent of the
shipped CSV tables.

    SMALL  girth <= 500 mm   light tiers ≤ 1 kg / ≤ 2 kg, brackets [0, 2] [2, 10]
    LARGE  girth <= 1000 mm  light tiers ≤ 1 kg / ≤ 2 kg, brackets [0, 2] [2, open)

    Storage (January - September): 0-30 days 1.0, 31-60 days 2.0, > 60 days 4.0
"""

import pytest
import polars as pl

from fbe.data import (
    FEES_SCHEMA,
    MAX_WEIGHT_SCHEMA,
    THRESHOLD_SCHEMA,
    ReferenceData,
    load_reference_data,
)
from fbe.data.reference.storage import OFF_PEAK_SEASON


def fee_row(plc_name, plc_code, weight_limit, weight, girth, local_order_fee):
    return {
        "plc_name": plc_name,
        "plc_code": plc_code,
        "weight_limit": weight_limit,
        "weight": weight,
        "girth": girth,
        "local_order_fee": local_order_fee,
        "local_return_fee": local_order_fee - 1,
        "cross_border_order_fee": local_order_fee + 4,
        "cross_border_return_fee": local_order_fee + 3,
        "removal_fee": 2.0,
        "disposal_fee": 1.5,
    }


FEE_ROWS = [
    fee_row("SMALL", "S-100", 1.0, "≤ 1 kg", 500.0, 5.0),
    fee_row("SMALL", "S-200", 2.0, "≤ 2 kg", 500.0, 6.0),
    fee_row("SMALL", "S-H200", 2.0, "> 2 kg", 500.0, 6.0),
    fee_row("LARGE", "L-100", 1.0, "≤ 1 kg", 1000.0, 10.0),
    fee_row("LARGE", "L-200", 2.0, "≤ 2 kg", 1000.0, 12.0),
    fee_row("LARGE", "L-H200", 2.0, "> 2 kg", 1000.0, 12.0),
]

MAX_WEIGHT_ROWS = [
    {"plc_name": "SMALL", "min_weight": 0.0, "max_weight": 2.0, "local_order_fee": 0.0},
    {"plc_name": "SMALL", "min_weight": 2.0, "max_weight": 10.0, "local_order_fee": 1.0},
    {"plc_name": "LARGE", "min_weight": 0.0, "max_weight": 2.0, "local_order_fee": 0.0},
    {"plc_name": "LARGE", "min_weight": 2.0, "max_weight": None, "local_order_fee": 2.0},
]

THRESHOLD_ROWS = [
    {"code": "T-030", "period": OFF_PEAK_SEASON, "threshold": "0 - 30",
     "threshold_random": 30, "fee_per_cubic_meter_per_day": 1.0},
    {"code": "T-060", "period": OFF_PEAK_SEASON, "threshold": "31 - 60",
     "threshold_random": 60, "fee_per_cubic_meter_per_day": 2.0},
    {"code": "T-OPEN", "period": OFF_PEAK_SEASON, "threshold": "> 60",
     "threshold_random": None, "fee_per_cubic_meter_per_day": 4.0},
]


def build_reference(fees=None, max_weights=None, thresholds=None) -> ReferenceData:
    """ReferenceData from row dicts (fixture tables where not given)."""
    return ReferenceData(
        fees=pl.DataFrame(FEE_ROWS if fees is None else fees, schema=FEES_SCHEMA),
        max_weights=pl.DataFrame(
            MAX_WEIGHT_ROWS if max_weights is None else max_weights, schema=MAX_WEIGHT_SCHEMA
        ),
        thresholds=pl.DataFrame(
            THRESHOLD_ROWS if thresholds is None else thresholds, schema=THRESHOLD_SCHEMA
        ),
    )


@pytest.fixture
def reference():
    """Small injected reference data set."""
    return build_reference()


@pytest.fixture
def make_reference():
    """Factory for reference data sets with replaced tables."""
    return build_reference


@pytest.fixture(scope="session")
def shipped_reference():
    """Reference tables shipped with the package."""
    return load_reference_data()


@pytest.fixture
def fee_rows():
    return list(FEE_ROWS)


@pytest.fixture
def max_weight_rows():
    return list(MAX_WEIGHT_ROWS)


@pytest.fixture
def threshold_rows():
    return list(THRESHOLD_ROWS)
