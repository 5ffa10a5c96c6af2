"""
Pipeline Value Objects

Immutable values passed between the pipeline stages:

    CalculationRequest
        -> WeightList      (resolve_weight_list)
        -> WeightCheck     (check_weight)
        -> DaySegment[]    (partition_days)
        -> ThresholdPrice  (price_calculation)
        -> CalculationResult
"""

from dataclasses import dataclass

from ..data.records import ProductFee, ProductMaxWeight
from ..data.reference.storage import DEFAULT_SEASON


@dataclass(frozen=True)
class CalculationRequest:
    """Parcel in centimetres and kilograms, storage duration in days."""

    length: float
    height: float
    width: float
    weight: float
    days: int
    season: str = DEFAULT_SEASON


@dataclass(frozen=True)
class WeightList:
    """Output of the dimension & weight resolver."""

    data: tuple[ProductFee, ...]        # Category fee rows with girth >= girth_value
    girth_value: float
    plc_name: str
    actual_weight: float
    dim_weight: float
    billable_weight: float
    volume_cbm: float
    bracket: ProductMaxWeight | None
    bracket_in_range: bool

    @property
    def uses_dim_weight(self) -> bool:
        return self.dim_weight > self.actual_weight


@dataclass(frozen=True)
class FeeCandidate:
    """A fee the parcel qualifies for. weight_check lists these cheapest first."""

    plc_name: str
    plc_code: str
    weight: str
    weight_limit: float
    girth: float
    local_order_fee: float
    rule: str                           # "weight" or "girth"
    within_range: bool
    per_kg_rate: float = 0.0
    extra_weight: float = 0.0


@dataclass(frozen=True)
class CheckResults:
    """Diagnostics of the weight check. Does not affect the numbers."""

    rule: str
    plc_name: str
    girth_value: float
    billable_weight: float
    escalated_from: str | None = None
    exceeds_all_brackets: bool = False
    message: str | None = None
    fee_rows: tuple[ProductFee, ...] = ()


@dataclass(frozen=True)
class WeightCheck:
    weight_check: tuple[FeeCandidate, ...]
    results: CheckResults


@dataclass(frozen=True)
class DaySegment:
    """
    Half-open range [start, end) of storage days inside one threshold period.
    """

    start: int
    end: int
    days: int
    code: str
    threshold: str
    fee_per_cubic_meter_per_day: float


@dataclass(frozen=True)
class SegmentPrice:
    segment: DaySegment
    volume_cbm: float
    price: float


@dataclass(frozen=True)
class ThresholdPrice:
    threshold_price: float
    segments: tuple[SegmentPrice, ...] = ()


@dataclass(frozen=True)
class CalculationResult:
    """Combined cost breakdown returned by the facade."""

    girth_value: float
    plc_name: str
    volume_cbm: float
    dim_weight: float
    billable_weight: float
    weight_check: tuple[FeeCandidate, ...]
    results: CheckResults
    day_range: tuple[SegmentPrice, ...]
    fulfillment_cost: float
    threshold_price: float
    total_fulfillment_price: float
    calculator_version: str


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
]
