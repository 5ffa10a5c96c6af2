"""
FBE Fulfillment Cost Calculator
===============================

Interactive CLI tool to calculate fulfillment and storage cost for a single parcel.

Usage:
    python -m fbe.scripts.calculator [--verbose]
"""

import argparse
import logging

from fbe.calculate_costs import compute_fulfillment_cost
from fbe.data.reference.storage import SEASONS, DEFAULT_SEASON, PRICE_DECIMALS
from fbe.pipeline import CalculationRequest, CalculationResult
from fbe.version import VERSION


def get_user_input() -> CalculationRequest:
    """Prompt user for parcel details."""
    print("\n=== FBE Fulfillment Cost Calculator ===")
    print(f"Version: {VERSION}\n")

    # Dimensions
    length = float(input("Length (cm): "))
    height = float(input("Height (cm): "))
    width = float(input("Width (cm): "))
    weight = float(input("Weight (kg): "))

    # Storage
    days = int(input("Storage days: "))

    print("\nStorage season:")
    for i, season in enumerate(SEASONS, start=1):
        print(f"  {i}. {season}")
    choice = input(f"Select [default: {DEFAULT_SEASON}]: ").strip()
    season = SEASONS[int(choice) - 1] if choice in {str(i) for i in range(1, len(SEASONS) + 1)} else DEFAULT_SEASON

    return CalculationRequest(
        length=length,
        height=height,
        width=width,
        weight=weight,
        days=days,
        season=season,
    )


def print_results(result: CalculationResult, request: CalculationRequest) -> None:
    """Print calculation results."""
    decimals = PRICE_DECIMALS

    print("\n" + "=" * 50)
    print("CALCULATION RESULTS")
    print("=" * 50)

    # Input summary
    print(f"\nParcel: {request.length}x{request.height}x{request.width} cm, {request.weight} kg")
    print(f"Storage: {request.days} days ({request.season})")

    # Category and weight
    print(f"\nGirth: {result.girth_value:.0f} mm -> {result.plc_name}")
    print(f"Billable weight: {result.billable_weight:.2f} kg", end="")
    if result.dim_weight > request.weight:
        print(f" (volumetric: {result.dim_weight:.2f} kg)")
    else:
        print(" (actual)")

    if result.results.message:
        print(f"\nNote: {result.results.message}")

    # Storage segments
    if result.day_range:
        print("\n--- Storage ---")
        for priced in result.day_range:
            segment = priced.segment
            print(
                f"Days {segment.start:>4}-{segment.end:<4} ({segment.threshold:>10}): "
                f"{segment.days:>4} d x {segment.fee_per_cubic_meter_per_day:.2f}/m3/d = "
                f"{priced.price:.{decimals}f}"
            )

    # Cost breakdown
    print("\n--- Cost Breakdown ---")
    print(f"Fulfillment fee:    {result.fulfillment_cost:>12.{decimals}f}")
    print(f"Storage fee:        {result.threshold_price:>12.{decimals}f}")
    print(f"                    {'=' * 12}")
    print(f"TOTAL:              {result.total_fulfillment_price:>12.{decimals}f}")
    print()


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="FBE fulfillment cost calculator")
    parser.add_argument("--verbose", action="store_true", help="Log pipeline details")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        request = get_user_input()
        result = compute_fulfillment_cost(request)
        print_results(result, request)

    except KeyboardInterrupt:
        print("\n\nCancelled.")
    except ValueError as e:
        print(f"\nError: {e}")


if __name__ == "__main__":
    main()
