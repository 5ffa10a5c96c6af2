"""
Threshold Price Calculator

Storage cost of a partitioned duration:

    price = volume_cbm * segment.days * segment.fee_per_cubic_meter_per_day

summed over all segments. Prices are not rounded here; rounding happens when
the result is presented.
"""

import logging

from .models import DaySegment, SegmentPrice, ThresholdPrice

logger = logging.getLogger(__name__)


def price_calculation(
    day_range: tuple[DaySegment, ...],
    volume_cbm: float,
) -> ThresholdPrice:
    """
    Price every segment for a parcel of volume_cbm cubic metres.

    An empty day range costs exactly 0.
    """
    segments = tuple(
        SegmentPrice(
            segment=segment,
            volume_cbm=volume_cbm,
            price=volume_cbm * segment.days * segment.fee_per_cubic_meter_per_day,
        )
        for segment in day_range
    )
    threshold_price = sum((s.price for s in segments), 0.0)

    logger.debug("threshold_price=%s over %s segment(s)", threshold_price, len(segments))
    return ThresholdPrice(threshold_price=threshold_price, segments=segments)


__all__ = ["price_calculation"]
