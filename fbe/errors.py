"""
Fee Engine Errors

All engine failures are ValueErrors: they are deterministic for a given input
and never worth retrying.
"""


class FeeEngineError(ValueError):
    """Base class for every error raised by the fee engine."""


class InvalidDimensionsError(FeeEngineError):
    """Geometry or weight inputs are non-numeric, negative or all zero."""


class NoBracketMatchError(FeeEngineError):
    """No weight bracket or fee row resolves for the parcel."""


class InvalidDayRangeError(FeeEngineError):
    """Day count is negative or not a whole number, or the season is unknown."""


class ReferenceDataError(FeeEngineError):
    """Reference tables violate their structural invariants."""


__all__ = [
    "FeeEngineError",
    "InvalidDimensionsError",
    "NoBracketMatchError",
    "InvalidDayRangeError",
    "ReferenceDataError",
]
