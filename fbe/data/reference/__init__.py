"""
Reference Data

Static reference tables (CSV) and their configuration.
"""

from .billable_weight import (
    GIRTH_FACTOR,
    DIM_FACTOR,
    CM_PER_M,
    LIGHT_TIER_PREFIX,
    HEAVY_TIER_PREFIX,
)
from .storage import (
    OFF_PEAK_SEASON,
    PEAK_SEASON,
    DEFAULT_SEASON,
    SEASONS,
    PRICE_DECIMALS,
)

__all__ = [
    "GIRTH_FACTOR",
    "DIM_FACTOR",
    "CM_PER_M",
    "LIGHT_TIER_PREFIX",
    "HEAVY_TIER_PREFIX",
    "OFF_PEAK_SEASON",
    "PEAK_SEASON",
    "DEFAULT_SEASON",
    "SEASONS",
    "PRICE_DECIMALS",
]
