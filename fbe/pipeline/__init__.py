"""
Pipeline Package

Fee calculation stages (pure functions over immutable values):
- resolve_weight:    Girth, PLC category, billable weight and weight bracket
- check_weight:      Fee candidates for the resolved parcel
- partition_days:    Storage duration split along threshold periods
- price_calculation: Storage (threshold) price of the partition
"""

from .models import (
    CalculationRequest,
    WeightList,
    FeeCandidate,
    CheckResults,
    WeightCheck,
    DaySegment,
    SegmentPrice,
    ThresholdPrice,
    CalculationResult,
)
from .resolve_weight import resolve_weight_list
from .check_weight import check_weight
from .partition_days import partition_days
from .price_calculation import price_calculation

__all__ = [
    "CalculationRequest",
    "WeightList",
    "FeeCandidate",
    "CheckResults",
    "WeightCheck",
    "DaySegment",
    "SegmentPrice",
    "ThresholdPrice",
    "CalculationResult",
    "resolve_weight_list",
    "check_weight",
    "partition_days",
    "price_calculation",
]
