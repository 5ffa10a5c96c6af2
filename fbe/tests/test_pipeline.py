"""
Unit Tests for the Pipeline Stages

Each stage is tested against the small injected reference data set from
conftest.py.

Run with: pytest fbe/tests/test_pipeline.py -v
"""

import math
from dataclasses import replace

import pytest

from fbe.errors import InvalidDayRangeError, InvalidDimensionsError
from fbe.pipeline import (
    DaySegment,
    check_weight,
    partition_days,
    price_calculation,
    resolve_weight_list,
)
from fbe.pipeline.check_weight import NO_CATEGORY_MESSAGE, matching_fee_rows
from fbe.pipeline.resolve_weight import (
    calculate_dim_weight,
    calculate_girth,
    calculate_volume,
)


# =============================================================================
# GEOMETRY
# =============================================================================

class TestGeometry:
    """Tests for girth, volumetric weight and volume."""

    def test_girth_doubles_two_shortest_sides(self):
        """Girth = ((a + b) * 2 + c) * 10 with a <= b <= c."""
        # sorted 10, 10, 20 -> (20 * 2 + 20) * 10
        assert calculate_girth(20, 10, 10) == pytest.approx(600)

    def test_girth_ignores_argument_order(self):
        assert calculate_girth(5, 30, 12) == calculate_girth(30, 12, 5)

    def test_dim_weight(self):
        """5000 cubic centimetres per kilogram."""
        assert calculate_dim_weight(50, 40, 30) == pytest.approx(12.0)

    def test_volume_in_cubic_metres(self):
        assert calculate_volume(20, 10, 10) == pytest.approx(0.002)


# =============================================================================
# DIMENSION & WEIGHT RESOLVER
# =============================================================================

class TestResolveWeightList:
    """Tests for resolve_weight_list."""

    def test_small_category(self, reference):
        """Girth 500 sits exactly on the SMALL ceiling and stays in SMALL."""
        wl = resolve_weight_list(10, 10, 10, 1, reference)
        assert wl.girth_value == pytest.approx(500)
        assert wl.plc_name == "SMALL"
        assert [r.plc_code for r in wl.data] == ["S-100", "S-200", "S-H200"]

    def test_girth_above_ceiling_moves_up(self, reference):
        wl = resolve_weight_list(20, 10, 10, 1, reference)
        assert wl.girth_value == pytest.approx(600)
        assert wl.plc_name == "LARGE"

    def test_girth_above_every_ceiling(self, reference):
        """Resolves to the largest category with no matching fee rows."""
        wl = resolve_weight_list(40, 20, 20, 1, reference)
        assert wl.plc_name == "LARGE"
        assert wl.data == ()

    def test_billable_weight_is_actual_when_heavier(self, reference):
        wl = resolve_weight_list(10, 10, 10, 3, reference)
        assert wl.billable_weight == pytest.approx(3)
        assert not wl.uses_dim_weight

    def test_billable_weight_is_volumetric_when_heavier(self, reference):
        # 30 x 10 x 10 = 3000 cm3 -> 0.6 kg
        wl = resolve_weight_list(30, 10, 10, 0.5, reference)
        assert wl.dim_weight == pytest.approx(0.6)
        assert wl.billable_weight == pytest.approx(0.6)
        assert wl.uses_dim_weight

    def test_bracket_contains_weight(self, reference):
        wl = resolve_weight_list(10, 10, 10, 5, reference)
        assert wl.bracket.min_weight <= 5 <= wl.bracket.max_weight
        assert wl.bracket_in_range

    def test_shared_endpoint_resolves_to_lower_bracket(self, reference):
        wl = resolve_weight_list(10, 10, 10, 2, reference)
        assert wl.bracket.min_weight == 0
        assert wl.bracket.max_weight == 2

    def test_weight_above_top_bracket_resolves_to_top(self, reference):
        """Heavier than every bracket: top bracket, no error."""
        wl = resolve_weight_list(10, 10, 10, 50, reference)
        assert wl.bracket.max_weight == 10
        assert not wl.bracket_in_range

    def test_open_bracket_holds_any_weight(self, reference):
        wl = resolve_weight_list(20, 10, 10, 500, reference)
        assert wl.bracket.is_open
        assert wl.bracket_in_range

    def test_zero_dimensions_with_weight(self, reference):
        """A single positive input is enough; girth 0 falls in the smallest category."""
        wl = resolve_weight_list(0, 0, 0, 1, reference)
        assert wl.girth_value == 0
        assert wl.plc_name == "SMALL"

    def test_all_zero_rejected(self, reference):
        with pytest.raises(InvalidDimensionsError):
            resolve_weight_list(0, 0, 0, 0, reference)

    @pytest.mark.parametrize("bad", [-1, "10", None, math.nan, math.inf, True])
    def test_invalid_input_rejected(self, reference, bad):
        with pytest.raises(InvalidDimensionsError):
            resolve_weight_list(10, bad, 10, 1, reference)

    def test_integer_too_large_for_float_rejected(self, reference):
        with pytest.raises(InvalidDimensionsError):
            resolve_weight_list(10 ** 400, 10, 10, 1, reference)


# =============================================================================
# WEIGHT-FEE CHECKER
# =============================================================================

class TestCheckWeight:
    """Tests for check_weight."""

    def test_light_candidates_cheapest_first(self, reference):
        wl = resolve_weight_list(10, 10, 10, 0.5, reference)
        result = check_weight(wl, reference)
        assert [c.plc_code for c in result.weight_check] == ["S-100", "S-200"]
        assert result.weight_check[0].local_order_fee == pytest.approx(5.0)
        assert all(c.within_range for c in result.weight_check)
        assert result.results.rule == "weight"

    def test_light_boundary_weight(self, reference):
        """Exactly 2 kg is still a light parcel."""
        wl = resolve_weight_list(10, 10, 10, 2, reference)
        result = check_weight(wl, reference)
        assert [c.plc_code for c in result.weight_check] == ["S-200"]

    def test_heavy_fee_adds_per_kg_rate(self, reference):
        """6 + (5 - 2) * 1.0"""
        wl = resolve_weight_list(10, 10, 10, 5, reference)
        result = check_weight(wl, reference)
        assert len(result.weight_check) == 1
        candidate = result.weight_check[0]
        assert candidate.plc_code == "S-H200"
        assert candidate.local_order_fee == pytest.approx(9.0)
        assert candidate.extra_weight == pytest.approx(3.0)
        assert candidate.within_range
        assert result.results.message is None

    def test_heavy_fee_above_top_bracket(self, reference):
        """Priced on the top bracket, flagged out of range."""
        wl = resolve_weight_list(10, 10, 10, 12, reference)
        result = check_weight(wl, reference)
        candidate = result.weight_check[0]
        assert candidate.local_order_fee == pytest.approx(6.0 + 10 * 1.0)
        assert not candidate.within_range
        assert "can not have weight more than 10KG" in result.results.message

    def test_volumetric_weight_sets_rule(self, reference):
        wl = resolve_weight_list(30, 10, 10, 0.5, reference)
        result = check_weight(wl, reference)
        assert result.results.rule == "girth"

    def test_girth_above_every_category(self, reference):
        wl = resolve_weight_list(40, 20, 20, 1, reference)
        result = check_weight(wl, reference)
        assert result.weight_check == ()
        assert result.results.exceeds_all_brackets
        assert result.results.message == NO_CATEGORY_MESSAGE

    def test_escalates_when_category_rows_missing(self, reference):
        """Fee rows that do not hold the girth move the parcel one category up."""
        wl = resolve_weight_list(10, 10, 10, 1, reference)
        stripped = replace(wl, data=())
        result = check_weight(stripped, reference)
        assert result.results.escalated_from == "SMALL"
        assert result.results.plc_name == "LARGE"
        assert result.results.rule == "girth"
        assert result.weight_check[0].plc_code == "L-100"

    def test_resolved_parcel_does_not_escalate(self, reference):
        wl = resolve_weight_list(20, 10, 10, 1, reference)
        result = check_weight(wl, reference)
        assert result.results.escalated_from is None
        assert result.results.plc_name == "LARGE"

    def test_below_first_bracket_with_open_top(self, make_reference, max_weight_rows):
        """Weight under the first bracket falls back to the open top bracket."""
        brackets = [r for r in max_weight_rows if r["plc_name"] != "LARGE"]
        brackets.append({"plc_name": "LARGE", "min_weight": 3.0, "max_weight": None, "local_order_fee": 2.0})
        reference = make_reference(max_weights=brackets)
        wl = resolve_weight_list(20, 10, 10, 2.5, reference)
        result = check_weight(wl, reference)
        candidate = result.weight_check[0]
        assert not candidate.within_range
        assert candidate.local_order_fee == pytest.approx(12.0 + 0.5 * 2.0)
        assert "outside the weight brackets of LARGE" in result.results.message

    def test_missing_base_row_defaults_to_no_candidates(self, make_reference, fee_rows):
        reference = make_reference(fees=[r for r in fee_rows if r["plc_code"] != "S-H200"])
        wl = resolve_weight_list(10, 10, 10, 5, reference)
        result = check_weight(wl, reference)
        assert result.weight_check == ()
        assert result.results.message

    def test_missing_brackets_defaults_to_no_candidates(self, make_reference, max_weight_rows):
        reference = make_reference(max_weights=[r for r in max_weight_rows if r["plc_name"] != "SMALL"])
        wl = resolve_weight_list(10, 10, 10, 5, reference)
        assert wl.bracket is None
        result = check_weight(wl, reference)
        assert result.weight_check == ()

    def test_fee_rows_diagnostics(self, reference):
        wl = resolve_weight_list(10, 10, 10, 5, reference)
        rows = matching_fee_rows(wl.data, wl.billable_weight)
        assert [r.plc_code for r in rows] == ["S-H200"]


# =============================================================================
# DAY-RANGE PARTITIONER
# =============================================================================

class TestPartitionDays:
    """Tests for partition_days."""

    def test_zero_days(self, reference):
        assert partition_days(0, reference=reference) == ()

    def test_within_first_period(self, reference):
        segments = partition_days(10, reference=reference)
        assert [(s.start, s.end, s.days, s.code) for s in segments] == [(0, 10, 10, "T-030")]

    def test_boundary_stays_in_lower_period(self, reference):
        segments = partition_days(30, reference=reference)
        assert [s.code for s in segments] == ["T-030"]

    def test_crosses_periods(self, reference):
        segments = partition_days(45, reference=reference)
        assert [s.days for s in segments] == [30, 15]
        assert [s.code for s in segments] == ["T-030", "T-060"]

    def test_open_period_takes_remainder(self, reference):
        segments = partition_days(75, reference=reference)
        assert [(s.start, s.end) for s in segments] == [(0, 30), (30, 60), (60, 75)]
        assert segments[-1].code == "T-OPEN"

    @pytest.mark.parametrize("days", [1, 29, 30, 31, 59, 60, 61, 365, 1000])
    def test_segments_sum_to_days(self, reference, days):
        segments = partition_days(days, reference=reference)
        assert sum(s.days for s in segments) == days
        assert segments[0].start == 0
        assert all(a.end == b.start for a, b in zip(segments, segments[1:]))

    def test_last_period_extends_without_open_period(self, make_reference, threshold_rows):
        reference = make_reference(thresholds=threshold_rows[:2])
        segments = partition_days(90, reference=reference)
        assert [(s.start, s.end, s.code) for s in segments] == [(0, 30, "T-030"), (30, 90, "T-060")]

    def test_negative_days_rejected(self, reference):
        with pytest.raises(InvalidDayRangeError):
            partition_days(-1, reference=reference)

    @pytest.mark.parametrize("bad", [1.5, "10", None])
    def test_non_integer_days_rejected(self, reference, bad):
        with pytest.raises(InvalidDayRangeError):
            partition_days(bad, reference=reference)

    def test_unknown_season_rejected(self, reference):
        with pytest.raises(InvalidDayRangeError):
            partition_days(10, season="Summer", reference=reference)

    def test_non_string_season_rejected(self, reference):
        with pytest.raises(InvalidDayRangeError):
            partition_days(10, season=5, reference=reference)


# =============================================================================
# THRESHOLD PRICE CALCULATOR
# =============================================================================

class TestPriceCalculation:
    """Tests for price_calculation."""

    def test_empty_day_range(self):
        result = price_calculation((), 0.5)
        assert result.threshold_price == 0
        assert result.segments == ()

    def test_single_segment(self):
        segment = DaySegment(0, 10, 10, "T-030", "0 - 30", 1.5)
        result = price_calculation((segment,), 0.002)
        assert result.threshold_price == pytest.approx(0.002 * 10 * 1.5)

    def test_sums_segments(self, reference):
        segments = partition_days(75, reference=reference)
        result = price_calculation(segments, 0.5)
        expected = 0.5 * (30 * 1.0 + 30 * 2.0 + 15 * 4.0)
        assert result.threshold_price == pytest.approx(expected)
        assert [s.price for s in result.segments] == pytest.approx([15.0, 30.0, 30.0])
