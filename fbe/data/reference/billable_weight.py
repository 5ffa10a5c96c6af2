"""
Billable Weight Configuration

Dimensions are in centimetres, weight in kilograms.

HOW GIRTH WORKS
---------------
The three dimensions are sorted ascending (a <= b <= c):

    girth_value = ((a + b) * 2 + c) * GIRTH_FACTOR

GIRTH_FACTOR converts centimetres to millimetres, the unit of the girth
ceilings in product_fees.csv. The girth value alone picks the PLC category.

HOW DIM WEIGHT WORKS
--------------------
Billable weight = max(actual_weight, dim_weight), where

    dim_weight = length * height * width / DIM_FACTOR

A bulky but light parcel is therefore priced on its volumetric weight.
"""

GIRTH_FACTOR = 10             # cm -> mm
DIM_FACTOR = 5000             # Cubic centimetres per kilogram
CM_PER_M = 100                # For volume in cubic metres

# Fee row labels
LIGHT_TIER_PREFIX = "≤"       # Flat fee up to weight_limit
HEAVY_TIER_PREFIX = ">"       # Base fee plus per-kg charge above weight_limit
