"""
Weight Calculation API Contract

Translates between the dashboard's JSON request/response bodies and the
engine. The HTTP server itself lives elsewhere; it passes the parsed JSON body
to weight_calculation and serializes what comes back.

REQUEST BODY
------------
    length, height, width   - Centimetres (numbers or numeric strings)
    weight                  - Kilograms
    days                    - Storage days
    season                  - Optional storage season

Numbers are read like JavaScript parseInt: the leading integer is kept,
so "12.7" and 12.7 both become 12.

RESPONSE BODY
-------------
    Success (200):
        status, message, fulfillmentCost, thresholdPrice ("0.0000"),
        totalFulFilmentPrice ("0.0000"), data: {weightCheck, results}
    Failure (400):
        status (false), message
"""

import logging
import re
from dataclasses import asdict

from .calculate_costs import compute_fulfillment_cost
from .data import ReferenceDataProvider
from .data.reference.storage import DEFAULT_SEASON, PRICE_DECIMALS
from .errors import FeeEngineError, InvalidDayRangeError, InvalidDimensionsError
from .pipeline import CalculationRequest, CalculationResult

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Weight calculation successful"
BAD_REQUEST = 400
OK = 200

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def weight_calculation(
    body: dict,
    reference: ReferenceDataProvider | None = None,
) -> tuple[dict, int]:
    """
    Handle one weight calculation request.

    Returns:
        (response body, HTTP status)
    """
    try:
        request = parse_request(body)
        result = compute_fulfillment_cost(request, reference)
    except FeeEngineError as exc:
        logger.info("weight calculation rejected: %s", exc)
        return {"status": False, "message": str(exc)}, BAD_REQUEST

    return build_response(result), OK


def parse_request(body: dict) -> CalculationRequest:
    """Coerce a JSON request body into a CalculationRequest."""
    if not isinstance(body, dict):
        raise InvalidDimensionsError("Request body must be a JSON object.")

    season = body.get("season") or DEFAULT_SEASON
    if not isinstance(season, str):
        raise InvalidDayRangeError(f"season must be a string, got {season!r}")

    return CalculationRequest(
        length=_parse_int(body.get("length"), "length", InvalidDimensionsError),
        height=_parse_int(body.get("height"), "height", InvalidDimensionsError),
        width=_parse_int(body.get("width"), "width", InvalidDimensionsError),
        weight=_parse_int(body.get("weight"), "weight", InvalidDimensionsError),
        days=_parse_int(body.get("days"), "days", InvalidDayRangeError),
        season=season,
    )


def build_response(result: CalculationResult) -> dict:
    """Success body for a calculation result."""
    return {
        "status": True,
        "message": SUCCESS_MESSAGE,
        "fulfillmentCost": result.fulfillment_cost,
        "thresholdPrice": format_price(result.threshold_price),
        "totalFulFilmentPrice": format_price(result.total_fulfillment_price),
        "data": {
            "weightCheck": [camel_keys(asdict(c)) for c in result.weight_check],
            "results": camel_keys(asdict(result.results)),
        },
    }


def format_price(value: float) -> str:
    return f"{value:.{PRICE_DECIMALS}f}"


def camel_keys(value: object) -> object:
    """Recursively rename snake_case dict keys to camelCase."""
    if isinstance(value, dict):
        return {_camel(k): camel_keys(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [camel_keys(v) for v in value]
    return value


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _parse_int(value, field: str, error: type[FeeEngineError]) -> int:
    if isinstance(value, bool) or value is None:
        raise error(f"{field} must be a number, got {value!r}")

    match = _LEADING_INT.match(str(value))
    if match is None:
        raise error(f"{field} must be a number, got {value!r}")
    return int(match.group(1))


__all__ = [
    "weight_calculation",
    "parse_request",
    "build_response",
    "format_price",
    "camel_keys",
]
