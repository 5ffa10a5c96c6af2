"""
Reference Records

Typed, immutable views of single rows of the three reference tables.
Built from polars rows via DataFrame.row(i, named=True) / iter_rows(named=True).
"""

from dataclasses import dataclass

from .reference.billable_weight import LIGHT_TIER_PREFIX, HEAVY_TIER_PREFIX


@dataclass(frozen=True)
class ProductFee:
    """One fee tier of a PLC category (product_fees.csv)."""

    plc_name: str
    plc_code: str
    weight_limit: float
    weight: str
    girth: float
    local_order_fee: float
    local_return_fee: float
    cross_border_order_fee: float
    cross_border_return_fee: float
    removal_fee: float
    disposal_fee: float

    @classmethod
    def from_row(cls, row: dict) -> "ProductFee":
        return cls(**{name: row[name] for name in cls.__dataclass_fields__})

    @property
    def is_light_tier(self) -> bool:
        """Flat fee tier ("≤ X kg")."""
        return self.weight.strip().startswith(LIGHT_TIER_PREFIX)

    @property
    def is_heavy_tier(self) -> bool:
        """Base tier for per-kg pricing ("> X kg")."""
        return self.weight.strip().startswith(HEAVY_TIER_PREFIX)


@dataclass(frozen=True)
class ProductMaxWeight:
    """One weight bracket of a PLC category (product_max_weight.csv)."""

    plc_name: str
    min_weight: float
    max_weight: float | None      # None = open top bracket
    local_order_fee: float        # Per-kg rate above the heavy tier limit

    @classmethod
    def from_row(cls, row: dict) -> "ProductMaxWeight":
        return cls(**{name: row[name] for name in cls.__dataclass_fields__})

    @property
    def is_open(self) -> bool:
        return self.max_weight is None

    def contains(self, weight: float) -> bool:
        """Inclusive on both ends; an open bracket has no upper bound."""
        if weight < self.min_weight:
            return False
        return self.is_open or weight <= self.max_weight


@dataclass(frozen=True)
class ProductThreshold:
    """One storage period of a season (product_threshold.csv)."""

    code: str
    period: str
    threshold: str
    threshold_random: int | None  # Inclusive day ceiling, None = open period
    fee_per_cubic_meter_per_day: float

    @classmethod
    def from_row(cls, row: dict) -> "ProductThreshold":
        return cls(**{name: row[name] for name in cls.__dataclass_fields__})

    @property
    def is_open(self) -> bool:
        return self.threshold_random is None


__all__ = [
    "ProductFee",
    "ProductMaxWeight",
    "ProductThreshold",
]
