"""
Day-Range Partitioner

Splits a storage duration into segments aligned to the threshold periods of a
storage season.

BOUNDARIES
----------
Segments are half-open day ranges [start, end). A period with day ceiling C
covers day counts up to and including C, so 75 days against ceilings 30 and 60
gives [0, 30), [30, 60), [60, 75), and exactly 30 days stays in the first
period. The open period (no ceiling) takes everything after the last ceiling;
without one, the last period is extended.
"""

import logging

import polars as pl

from ..data import ReferenceDataProvider, load_reference_data
from ..data.records import ProductThreshold
from ..data.reference.storage import DEFAULT_SEASON
from ..errors import InvalidDayRangeError
from .models import DaySegment

logger = logging.getLogger(__name__)


def partition_days(
    days: int,
    season: str = DEFAULT_SEASON,
    reference: ReferenceDataProvider | None = None,
) -> tuple[DaySegment, ...]:
    """
    Partition days into threshold period segments.

    Args:
        days: Storage duration in whole days (0 gives no segments)
        season: Storage season, the "period" column of product_threshold.csv
        reference: Reference tables (shipped tables if not provided)

    Returns:
        Segments in day order; their lengths sum to days

    Raises:
        InvalidDayRangeError: Negative or fractional days, or unknown season
    """
    if reference is None:
        reference = load_reference_data()

    if isinstance(days, bool) or not isinstance(days, int):
        raise InvalidDayRangeError(f"days must be a whole number, got {days!r}")
    if days < 0:
        raise InvalidDayRangeError(f"days must not be negative, got {days}")

    periods = season_periods(reference.get_thresholds(), season)

    segments = []
    start = 0
    for i, period in enumerate(periods):
        if start >= days:
            break

        is_last = i == len(periods) - 1
        end = days if period.is_open or is_last else min(period.threshold_random, days)
        if end <= start:
            continue

        segments.append(DaySegment(
            start=start,
            end=end,
            days=end - start,
            code=period.code,
            threshold=period.threshold,
            fee_per_cubic_meter_per_day=period.fee_per_cubic_meter_per_day,
        ))
        start = end

    logger.debug("days=%s season=%s segments=%s", days, season, [(s.start, s.end) for s in segments])
    return tuple(segments)


def season_periods(thresholds: pl.DataFrame, season: str) -> list[ProductThreshold]:
    """Threshold periods of a season ordered by day ceiling, open period last."""
    if not isinstance(season, str):
        raise InvalidDayRangeError(f"season must be a string, got {season!r}")

    rows = (
        thresholds
        .filter(pl.col("period") == season)
        .sort("threshold_random", nulls_last=True)
    )
    if rows.is_empty():
        raise InvalidDayRangeError(f"Unknown storage season '{season}'")

    return [ProductThreshold.from_row(row) for row in rows.iter_rows(named=True)]


__all__ = [
    "partition_days",
    "season_periods",
]
