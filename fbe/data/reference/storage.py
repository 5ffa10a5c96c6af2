"""
Storage (Threshold) Fee Configuration

Storage is charged per cubic metre per day. The rate depends on the storage
season and on how long the parcel has been stored; product_threshold.csv
holds one row per (season, day period).
"""

OFF_PEAK_SEASON = "January - September"
PEAK_SEASON = "October - December"

DEFAULT_SEASON = OFF_PEAK_SEASON
SEASONS = (OFF_PEAK_SEASON, PEAK_SEASON)

PRICE_DECIMALS = 4            # Precision of prices in API responses
