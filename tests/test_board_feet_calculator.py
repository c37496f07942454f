"""
Board feet formula tests.

Tests:
1-8.   Numeric coercion and rounding (parse_number, parse_int, round_to)
9-14.  Canonical BF formula and inches variant
15-20. Selling unit → BF helpers
21-26. BF → selling unit helpers, reverse guards
27-29. Reference factors
"""

import math

from lumbersuite.calculators.base import format_number, join_names, parse_int, parse_number, round_to
from lumbersuite.calculators.board_feet import (
    board_feet_from_dimensions,
    calculate_bf,
    calculate_bf_from_inches,
    calculate_bf_from_lf,
    calculate_bf_from_mbf,
    calculate_bf_from_msf,
    calculate_bf_from_pieces,
    calculate_bf_from_sf,
    calculate_lf_from_bf,
    calculate_mbf_from_bf,
    calculate_msf_from_bf,
    calculate_pieces_from_bf,
    calculate_sf_from_bf,
    calculate_surface_measure,
    conversion_factors,
)


# ============================================================
# Numeric coercion and rounding
# ============================================================

def test_parse_number_accepts_numeric_strings():
    """Form values arrive as strings; the leading numeric prefix is used."""
    assert parse_number("2.5") == 2.5
    assert parse_number(" 6 ") == 6.0
    assert parse_number("8ft") == 8.0
    assert parse_number(".5") == 0.5
    assert parse_number("1e3") == 1000.0
    assert parse_number(-3) == -3.0


def test_parse_number_rejects_junk():
    assert parse_number(None) is None
    assert parse_number("") is None
    assert parse_number("abc") is None
    assert parse_number(True) is None
    assert parse_number(float("nan")) is None
    assert parse_number(float("inf")) is None
    assert parse_number("abc", 0.0) == 0.0
    assert parse_number(10 ** 400) is None
    assert parse_number("1e400") is None


def test_parse_int_takes_integer_prefix():
    assert parse_int("12 pcs") == 12
    assert parse_int(2.7) == 2
    assert parse_int("x") is None


def test_round_to_half_away_from_zero():
    assert round_to(2.5, 0) == 3.0
    assert round_to(-2.5, 0) == -3.0
    assert round_to(5.33333333, 4) == 5.3333
    assert round_to(0.00004, 4) == 0.0


def test_round_to_non_numeric_is_zero():
    assert round_to(float("nan"), 2) == 0.0
    assert round_to(float("inf"), 2) == 0.0
    assert round_to("abc", 2) == 0.0
    assert round_to(None, 2) == 0.0


def test_round_to_values_too_large_to_scale():
    """Huge values or precisions come back unrounded instead of overflowing."""
    assert round_to(1e306, 4) == 1e306
    assert round_to(-1e306, 4) == -1e306
    assert round_to(10, 400) == 10.0
    assert round_to(1.23456789e-300, 400) == 1.23456789e-300


def test_round_to_int_beyond_float_range_is_zero():
    assert round_to(10 ** 400, 2) == 0.0
    assert round_to(1234.5, -400) == 0.0


def test_message_helpers():
    assert join_names(["thickness"]) == "Thickness"
    assert join_names(["thickness", "width"]) == "Thickness and width"
    assert join_names(["thickness", "width", "length"]) == "Thickness, width and length"
    assert format_number(12.0) == "12"
    assert format_number(10.5) == "10.5"


# ============================================================
# Canonical formula
# ============================================================

def test_calculate_bf_two_by_six_by_ten():
    """2" × 6" × 10' = 10 BF exactly."""
    assert calculate_bf(2, 6, 10) == 10.0


def test_calculate_bf_rounds_to_four_places():
    """2" × 4" × 8' = 64/12 = 5.3333 BF."""
    assert calculate_bf(2, 4, 8) == 5.3333


def test_calculate_bf_accepts_strings():
    assert calculate_bf("2", "6", "10") == 10.0


def test_calculate_bf_missing_or_non_positive_is_zero():
    assert calculate_bf(0, 6, 10) == 0.0
    assert calculate_bf(None, 6, 10) == 0.0
    assert calculate_bf(2, -6, 10) == 0.0
    assert calculate_bf(2, 6, "abc") == 0.0


def test_calculate_bf_custom_precision():
    assert calculate_bf(2, 4, 8, 6) == 5.333333
    assert board_feet_from_dimensions(2, 4, 8) == 5.3333


def test_calculate_bf_from_inches_divides_by_144():
    """2" × 6" × 120" is the same board as 2" × 6" × 10'."""
    assert calculate_bf_from_inches(2, 6, 120) == 10.0
    assert calculate_bf_from_inches(2, 6, 0) == 0.0


# ============================================================
# Selling unit → BF
# ============================================================

def test_bf_from_linear_feet():
    """500 LF of 1×6 = 250 BF."""
    assert calculate_bf_from_lf(500, 1, 6) == 250.0


def test_bf_from_square_feet():
    """100 SF of 1" stock = 8.3333 BF."""
    assert calculate_bf_from_sf(100, 1) == 8.3333


def test_bf_from_mbf():
    assert calculate_bf_from_mbf(2.5) == 2500.0
    assert calculate_bf_from_mbf(0) == 0.0


def test_bf_from_msf():
    """1 MSF of 1" stock = 1000 SF × 1/12 = 83.3333 BF."""
    assert calculate_bf_from_msf(1, 1) == 83.3333


def test_bf_from_pieces():
    assert calculate_bf_from_pieces(10, 2, 6, 10) == 100.0


def test_bf_from_selling_unit_missing_dimension_is_zero():
    assert calculate_bf_from_lf(500, 1, None) == 0.0
    assert calculate_bf_from_sf(100, 0) == 0.0
    assert calculate_bf_from_pieces(10, 2, 6, None) == 0.0


# ============================================================
# BF → selling unit
# ============================================================

def test_linear_feet_from_bf():
    assert calculate_lf_from_bf(250, 1, 6) == 500.0


def test_square_feet_from_bf():
    assert calculate_sf_from_bf(12, 1) == 144.0


def test_mbf_from_bf():
    assert calculate_mbf_from_bf(2500) == 2.5


def test_msf_from_bf():
    """1000 BF of 1" stock = 12000 SF = 12 MSF."""
    assert calculate_msf_from_bf(1000, 1) == 12.0


def test_pieces_from_bf():
    assert calculate_pieces_from_bf(100, 2, 6, 10) == 10.0


def test_reverse_negative_bf_passes_through():
    """Inventory adjustments can carry negative BF."""
    assert calculate_lf_from_bf(-50, 1, 6) == -100.0
    assert calculate_lf_from_bf(0, 1, 6) == 0.0
    assert calculate_lf_from_bf(None, 1, 6) == 0.0
    assert calculate_pieces_from_bf(100, 2, 6, 0) == 0.0


# ============================================================
# Reference factors
# ============================================================

def test_surface_measure():
    """SM = W × L / 12, so 6" × 10' = 5."""
    assert calculate_surface_measure(6, 10) == 5.0


def test_conversion_factors_two_by_six():
    factors = conversion_factors(2, 6, 10)
    assert factors.bf_per_piece == 10.0
    assert factors.bf_per_linear_foot == 1.0
    assert factors.bf_per_square_foot == 0.166667
    assert factors.surface_measure == 5.0
    assert factors.cubic_feet == 0.8333
    assert factors.dimensions.thickness == 2


def test_conversion_factors_missing_dims_are_zero():
    factors = conversion_factors(None, None, None)
    assert factors.bf_per_piece == 0.0
    assert factors.lf_to_bf_factor == 0.0
    assert not math.isnan(factors.cubic_feet)
