"""
FBE Fulfillment Fee Engine

Fulfillment fee tier, girth and storage (threshold) cost for seller parcels.

USAGE
-----
    from fbe import CalculationRequest, compute_fulfillment_cost
    result = compute_fulfillment_cost(CalculationRequest(20, 10, 10, 1, days=10))
"""

from .calculate_costs import compute_fulfillment_cost, calculate_costs
from .data import ReferenceData, ReferenceDataProvider, load_reference_data
from .errors import (
    FeeEngineError,
    InvalidDimensionsError,
    NoBracketMatchError,
    InvalidDayRangeError,
    ReferenceDataError,
)
from .pipeline import CalculationRequest, CalculationResult
from .version import VERSION

__all__ = [
    "compute_fulfillment_cost",
    "calculate_costs",
    "ReferenceData",
    "ReferenceDataProvider",
    "load_reference_data",
    "FeeEngineError",
    "InvalidDimensionsError",
    "NoBracketMatchError",
    "InvalidDayRangeError",
    "ReferenceDataError",
    "CalculationRequest",
    "CalculationResult",
    "VERSION",
]
