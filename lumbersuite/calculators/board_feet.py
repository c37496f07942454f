"""
Board feet formulas.

A board foot is 1" thick × 12" wide × 1' long (144 in³).
    BF = (Thickness[in] × Width[in] × Length[ft]) / 12
    BF = (Thickness[in] × Width[in] × Length[in]) / 144

Every function here returns 0 for missing, non-numeric or non-positive
required inputs. Nothing raises.
"""

from ..constants import BF_DIVISOR_FEET, BF_DIVISOR_INCHES, PRECISION, THOUSAND
from ..schemas import ConversionFactors, Dimensions
from .base import parse_number, parse_positive, round_to

BF_PRECISION = PRECISION["BF"]
FACTOR_PRECISION = PRECISION["FACTOR"]


def calculate_bf(thickness, width, length, precision: int = BF_PRECISION) -> float:
    """Board feet for one piece, length in feet. 2" × 6" × 10' → 10.0"""
    t = parse_positive(thickness)
    w = parse_positive(width)
    l = parse_positive(length)
    if t is None or w is None or l is None:
        return 0.0
    return round_to((t * w * l) / BF_DIVISOR_FEET, precision)


def board_feet_from_dimensions(thickness, width, length, precision: int = BF_PRECISION) -> float:
    """Public name for the canonical piece formula (length in feet)."""
    return calculate_bf(thickness, width, length, precision)


def calculate_bf_from_inches(thickness, width, length_inches, precision: int = BF_PRECISION) -> float:
    """Board feet for one piece with every dimension in inches (divide by 144)."""
    t = parse_positive(thickness)
    w = parse_positive(width)
    l = parse_positive(length_inches)
    if t is None or w is None or l is None:
        return 0.0
    return round_to((t * w * l) / BF_DIVISOR_INCHES, precision)


# --- Selling unit → BF ---

def calculate_bf_from_lf(linear_feet, thickness, width, precision: int = BF_PRECISION) -> float:
    """BF = LF × (T × W) / 12"""
    lf = parse_positive(linear_feet)
    t = parse_positive(thickness)
    w = parse_positive(width)
    if lf is None or t is None or w is None:
        return 0.0
    return round_to(lf * (t * w) / BF_DIVISOR_FEET, precision)


def calculate_bf_from_sf(square_feet, thickness, precision: int = BF_PRECISION) -> float:
    """BF = SF × (T / 12). Square feet already carry width × length."""
    sf = parse_positive(square_feet)
    t = parse_positive(thickness)
    if sf is None or t is None:
        return 0.0
    return round_to(sf * (t / BF_DIVISOR_FEET), precision)


def calculate_bf_from_mbf(mbf, precision: int = BF_PRECISION) -> float:
    value = parse_positive(mbf)
    if value is None:
        return 0.0
    return round_to(value * THOUSAND, precision)


def calculate_bf_from_msf(msf, thickness, precision: int = BF_PRECISION) -> float:
    """MSF × 1000 = SF, then SF × (T / 12) = BF"""
    value = parse_positive(msf)
    t = parse_positive(thickness)
    if value is None or t is None:
        return 0.0
    square_feet = value * THOUSAND
    return round_to(square_feet * (t / BF_DIVISOR_FEET), precision)


def calculate_bf_from_pieces(pieces, thickness, width, length, precision: int = BF_PRECISION) -> float:
    p = parse_positive(pieces)
    bf_per_piece = calculate_bf(thickness, width, length, FACTOR_PRECISION)
    if p is None or bf_per_piece <= 0:
        return 0.0
    return round_to(p * bf_per_piece, precision)


# --- BF → selling unit ---

def _board_feet(value):
    """BF input for reverse formulas: None for missing/zero, negatives pass through."""
    bf = parse_number(value)
    if bf is None or bf == 0:
        return None
    return bf


def calculate_lf_from_bf(board_feet, thickness, width, precision: int = BF_PRECISION) -> float:
    """LF = BF / ((T × W) / 12)"""
    bf = _board_feet(board_feet)
    t = parse_positive(thickness)
    w = parse_positive(width)
    if bf is None or t is None or w is None:
        return 0.0
    factor = (t * w) / BF_DIVISOR_FEET
    if factor <= 0:
        return 0.0
    return round_to(bf / factor, precision)


def calculate_sf_from_bf(board_feet, thickness, precision: int = BF_PRECISION) -> float:
    """SF = BF / (T / 12)"""
    bf = _board_feet(board_feet)
    t = parse_positive(thickness)
    if bf is None or t is None:
        return 0.0
    factor = t / BF_DIVISOR_FEET
    if factor <= 0:
        return 0.0
    return round_to(bf / factor, precision)


def calculate_mbf_from_bf(board_feet, precision: int = BF_PRECISION) -> float:
    bf = _board_feet(board_feet)
    if bf is None:
        return 0.0
    return round_to(bf / THOUSAND, precision)


def calculate_msf_from_bf(board_feet, thickness, precision: int = BF_PRECISION) -> float:
    square_feet = calculate_sf_from_bf(board_feet, thickness, FACTOR_PRECISION)
    if square_feet <= 0:
        return 0.0
    return round_to(square_feet / THOUSAND, precision)


def calculate_pieces_from_bf(board_feet, thickness, width, length, precision: int = BF_PRECISION) -> float:
    bf = _board_feet(board_feet)
    if bf is None:
        return 0.0
    bf_per_piece = calculate_bf(thickness, width, length, FACTOR_PRECISION)
    if bf_per_piece <= 0:
        return 0.0
    return round_to(bf / bf_per_piece, precision)


# --- Reference values ---

def calculate_surface_measure(width, length) -> float:
    """Surface measure SM = (W × L) / 12, width in inches, length in feet."""
    w = parse_positive(width)
    l = parse_positive(length)
    if w is None or l is None:
        return 0.0
    return round_to((w * l) / BF_DIVISOR_FEET, 4)


def calculate_bf_per_linear_foot(thickness, width) -> float:
    t = parse_positive(thickness)
    w = parse_positive(width)
    if t is None or w is None:
        return 0.0
    return round_to((t * w) / BF_DIVISOR_FEET, FACTOR_PRECISION)


def calculate_bf_per_square_foot(thickness) -> float:
    t = parse_positive(thickness)
    if t is None:
        return 0.0
    return round_to(t / BF_DIVISOR_FEET, FACTOR_PRECISION)


def conversion_factors(thickness, width, length) -> ConversionFactors:
    """All per-unit BF factors for one dimension set, for pricing and display."""
    t = parse_positive(thickness) or 0.0
    w = parse_positive(width) or 0.0
    l = parse_positive(length) or 0.0

    return ConversionFactors(
        bf_per_piece=calculate_bf(t, w, l),
        bf_per_linear_foot=calculate_bf_per_linear_foot(t, w),
        bf_per_square_foot=calculate_bf_per_square_foot(t),
        lf_to_bf_factor=(t * w) / BF_DIVISOR_FEET,
        sf_to_bf_factor=t / BF_DIVISOR_FEET,
        surface_measure=calculate_surface_measure(w, l),
        cubic_feet=round_to((t * w * l * 12) / 1728, 4),
        dimensions=Dimensions(thickness=t, width=w, length=l),
    )
