"""
Dynamic UOM conversion between selling units and board feet.

All inventory is held in BF. Estimates, sales orders, work orders and repacks
enter quantities in whatever unit the customer buys in; this module turns them
into BF and back.

Contract: nothing here raises. Every failure comes back as a result object with
is_valid=False, a readable error and an error_code. Callers decide whether to
block a save, warn, or carry on with zero.
"""

import logging
import math
from collections.abc import Mapping
from typing import Callable, Iterable, List, Optional

from ..constants import BF, LF, SF, MBF, MSF, EACH, BUNDLE, PRECISION, UOM_LABELS
from ..schemas import (
    ConversionErrorCode,
    ConversionMatrix,
    ConversionResult,
    Dimensions,
    EngineSettings,
    LineBatchResult,
    LineConversion,
    ReverseConversionResult,
    UnitConversionResult,
    UnitInfo,
)
from .base import parse_int, parse_number, positive_dimensions, round_to
from .board_feet import calculate_bf
from .registry import get_unit, has_unit, list_units

logger = logging.getLogger(__name__)

FACTOR_PRECISION = PRECISION["FACTOR"]


def _bf_precision(precision: Optional[int]) -> int:
    return PRECISION["BF"] if precision is None else precision


def _pieces_per_bundle(value) -> int:
    """parseInt semantics; anything missing or non-positive counts as 1 piece."""
    pieces = parse_int(value)
    if pieces is None or pieces <= 0:
        return 1
    return pieces


def _unit_factor(unit, thickness, width, length, pieces_per_bundle) -> float:
    """BF in one unit; inf when the bundle count is too large to hold as a float."""
    try:
        return float(unit.factor(thickness, width, length, _pieces_per_bundle(pieces_per_bundle)))
    except OverflowError:
        return math.inf


def _out_of_range(unit) -> str:
    return f"{unit.CODE} conversion is out of numeric range; check quantity and dimensions"


def _uom_text(code) -> Optional[str]:
    return code if isinstance(code, str) else None


def convert_to_board_feet(source_uom, source_qty, dims=None, pieces_per_bundle=1,
                          precision: Optional[int] = None) -> ConversionResult:
    """
    Convert a quantity in any selling unit to board feet.

    Args:
        source_uom: "BF" | "LF" | "SF" | "MBF" | "MSF" | "EACH" | "BUNDLE"
        source_qty: quantity in source_uom (number or numeric string)
        dims: Dimensions, a {"thickness", "width", "length"} mapping, or None
        pieces_per_bundle: pieces in one bundle (BUNDLE only)
        precision: decimals for board_feet (default 4)

    Returns:
        ConversionResult. A quantity that is missing, zero or negative is a valid
        "nothing to convert" result; missing dimensions and unknown units are not.
    """
    bf_precision = _bf_precision(precision)

    try:
        unit = get_unit(source_uom)
    except ValueError:
        logger.debug("Rejected conversion to BF: unknown UOM %r", source_uom)
        return ConversionResult(
            is_valid=False,
            error=f"Invalid UOM code: {source_uom}",
            error_code=ConversionErrorCode.UNKNOWN_UNIT,
            source_uom=_uom_text(source_uom),
        )

    qty = parse_number(source_qty)
    if qty is None or qty <= 0:
        return ConversionResult(source_uom=unit.CODE, source_qty=qty or 0.0)

    thickness, width, length = positive_dimensions(dims)
    missing = unit.missing_dimensions(thickness, width, length)
    if missing:
        logger.debug("Rejected %s conversion: missing %s", unit.CODE, ", ".join(missing))
        return ConversionResult(
            is_valid=False,
            error=unit.missing_message(missing),
            error_code=ConversionErrorCode.MISSING_DIMENSION,
            source_uom=unit.CODE,
            source_qty=qty,
        )

    factor = _unit_factor(unit, thickness, width, length, pieces_per_bundle)
    if factor <= 0:
        return ConversionResult(
            is_valid=False,
            error=f"Conversion factor for {unit.CODE} is zero; check dimensions",
            error_code=ConversionErrorCode.DIVISION_GUARD,
            source_uom=unit.CODE,
            source_qty=qty,
        )

    board_feet = unit.to_board_feet(qty, factor)
    if not math.isfinite(board_feet):
        logger.debug("Rejected %s conversion: %r × %r overflows", unit.CODE, qty, factor)
        return ConversionResult(
            is_valid=False,
            error=_out_of_range(unit),
            error_code=ConversionErrorCode.INVALID_NUMERIC,
            source_uom=unit.CODE,
            source_qty=qty,
        )

    return ConversionResult(
        board_feet=round_to(board_feet, bf_precision),
        conversion_factor=round_to(factor, FACTOR_PRECISION),
        source_uom=unit.CODE,
        source_qty=qty,
    )


def convert_from_board_feet(target_uom, board_feet, dims=None, pieces_per_bundle=1,
                            precision: Optional[int] = None) -> ReverseConversionResult:
    """
    Convert board feet into a display/selling unit.
    Missing or zero BF is a valid zero result. Negative BF (adjustments) converts as-is.
    """
    bf_precision = _bf_precision(precision)

    try:
        unit = get_unit(target_uom)
    except ValueError:
        logger.debug("Rejected conversion from BF: unknown UOM %r", target_uom)
        return ReverseConversionResult(
            is_valid=False,
            error=f"Invalid UOM code: {target_uom}",
            error_code=ConversionErrorCode.UNKNOWN_UNIT,
            target_uom=_uom_text(target_uom),
        )

    bf = parse_number(board_feet)
    if bf is None or bf == 0:
        return ReverseConversionResult(target_uom=unit.CODE, board_feet=0.0)

    thickness, width, length = positive_dimensions(dims)
    missing = unit.missing_dimensions(thickness, width, length)
    if missing:
        logger.debug("Rejected BF → %s conversion: missing %s", unit.CODE, ", ".join(missing))
        return ReverseConversionResult(
            is_valid=False,
            error=unit.missing_message(missing),
            error_code=ConversionErrorCode.MISSING_DIMENSION,
            target_uom=unit.CODE,
            board_feet=bf,
        )

    factor = _unit_factor(unit, thickness, width, length, pieces_per_bundle)
    if factor <= 0:
        return ReverseConversionResult(
            is_valid=False,
            error=f"Conversion factor for {unit.CODE} is zero; check dimensions",
            error_code=ConversionErrorCode.DIVISION_GUARD,
            target_uom=unit.CODE,
            board_feet=bf,
        )

    display_qty = unit.from_board_feet(bf, factor)
    if not (math.isfinite(factor) and math.isfinite(display_qty)):
        logger.debug("Rejected BF → %s conversion: %r / %r out of range", unit.CODE, bf, factor)
        return ReverseConversionResult(
            is_valid=False,
            error=_out_of_range(unit),
            error_code=ConversionErrorCode.INVALID_NUMERIC,
            target_uom=unit.CODE,
            board_feet=bf,
        )

    return ReverseConversionResult(
        display_qty=round_to(display_qty, bf_precision),
        conversion_factor=round_to(factor, FACTOR_PRECISION),
        target_uom=unit.CODE,
        board_feet=bf,
    )


def board_feet_to_unit(unit, board_feet, dims=None, precision: Optional[int] = None,
                       pieces_per_bundle=1) -> float:
    """Board feet expressed in `unit`. 0 when the conversion is not possible."""
    result = convert_from_board_feet(unit, board_feet, dims, pieces_per_bundle, precision)
    return result.display_qty if result.is_valid else 0.0


def convert_between_units(source_uom, source_qty, target_uom, dims=None, pieces_per_bundle=1,
                          precision: Optional[int] = None) -> UnitConversionResult:
    """source → BF → target, e.g. 2 MBF of 2×6 in LF."""
    to_bf = convert_to_board_feet(source_uom, source_qty, dims, pieces_per_bundle, precision)
    if not to_bf.is_valid:
        return UnitConversionResult(
            is_valid=False,
            error=to_bf.error,
            error_code=to_bf.error_code,
            source_uom=to_bf.source_uom,
            target_uom=_uom_text(target_uom),
        )

    from_bf = convert_from_board_feet(target_uom, to_bf.board_feet, dims, pieces_per_bundle, precision)
    if not from_bf.is_valid:
        return UnitConversionResult(
            is_valid=False,
            error=from_bf.error,
            error_code=from_bf.error_code,
            source_uom=to_bf.source_uom,
            source_qty=to_bf.source_qty,
            target_uom=from_bf.target_uom,
            intermediary_bf=to_bf.board_feet,
        )

    total_factor = None
    if from_bf.conversion_factor > 0:
        total_factor = to_bf.conversion_factor / from_bf.conversion_factor

    return UnitConversionResult(
        result=from_bf.display_qty,
        source_uom=to_bf.source_uom,
        source_qty=to_bf.source_qty,
        target_uom=from_bf.target_uom,
        intermediary_bf=to_bf.board_feet,
        total_conversion_factor=total_factor,
    )


# --- Reference data ---

_REQUIRES_TEXT = {
    LF: "Requires thickness and width",
    SF: "Requires thickness",
    MSF: "Requires thickness",
    EACH: "Requires all dimensions",
    BUNDLE: "Requires all dimensions",
}


def _fmt(value: float) -> str:
    """4-decimal display without trailing zeros: 0.5, 83.3333, 1000."""
    return format(value, ".4f").rstrip("0").rstrip(".")


def conversion_matrix(thickness, width, length, pieces_per_bundle=1) -> ConversionMatrix:
    """
    BF factor for every unit for one dimension set, plus a one-line description
    of each ("1 LF = 0.5 BF"). Factors are None where dimensions are missing.
    """
    dims = Dimensions(
        thickness=parse_number(thickness, 0.0),
        width=parse_number(width, 0.0),
        length=parse_number(length, 0.0),
    )
    t, w, l = positive_dimensions(dims)
    ppb = _pieces_per_bundle(pieces_per_bundle)
    bf_per_piece = calculate_bf(t, w, l)

    factors = {}
    for code in list_units():
        unit = get_unit(code)
        factor = _unit_factor(unit, t, w, l, ppb) if unit.is_available(t, w, l) else None
        factors[code] = factor if factor is not None and math.isfinite(factor) else None

    descriptions = {}
    for code, text in _REQUIRES_TEXT.items():
        if factors[code] is None:
            descriptions[code] = text
    if factors[LF] is not None:
        descriptions[LF] = f"1 LF = {_fmt(factors[LF])} BF"
    if factors[SF] is not None:
        descriptions[SF] = f"1 SF = {_fmt(factors[SF])} BF"
    descriptions[MBF] = "1 MBF = 1,000 BF"
    if factors[MSF] is not None:
        descriptions[MSF] = f"1 MSF = {_fmt(factors[MSF])} BF"
    if factors[EACH] is not None:
        descriptions[EACH] = f"1 PC = {_fmt(bf_per_piece)} BF"
    if factors[BUNDLE] is not None:
        descriptions[BUNDLE] = f"1 BDL ({ppb} pcs) = {_fmt(factors[BUNDLE])} BF"

    return ConversionMatrix(
        to_bf=factors,
        from_bf=dict(factors),
        descriptions=descriptions,
        dimensions=dims,
        pieces_per_bundle=ppb,
        bf_per_piece=bf_per_piece,
    )


def available_units(thickness=None, width=None, length=None) -> List[UnitInfo]:
    """Every unit with whether the given dimensions are enough to use it."""
    t, w, l = positive_dimensions({"thickness": thickness, "width": width, "length": length})
    units = []
    for code in list_units():
        unit = get_unit(code)
        required = list(unit.REQUIRED_DIMS)
        if code == BUNDLE:
            required.append("pieces_per_bundle")
        units.append(UnitInfo(
            code=code,
            label=unit.LABEL,
            available=unit.is_available(t, w, l),
            requires_dimensions=unit.requires_dimensions,
            required_dims=required,
        ))
    return units


def unit_label(code) -> str:
    """Display label for a UOM code; unknown codes come back as-is."""
    return UOM_LABELS.get(code, code) if isinstance(code, str) else str(code)


def is_valid_unit(code) -> bool:
    return has_unit(code)


# --- Transaction lines ---

class ConversionCache:
    """
    Memo of line conversions for one request.

    Create one per request (or per record save) and pass it in. Nothing in the
    engine keeps a cache between calls.
    """

    def __init__(self):
        self._results = {}
        self.hits = 0
        self.misses = 0

    def get_or_convert(self, key, convert: Callable[[], ConversionResult]) -> ConversionResult:
        if key in self._results:
            self.hits += 1
            return self._results[key]
        self.misses += 1
        result = convert()
        self._results[key] = result
        return result

    def __len__(self):
        return len(self._results)


def _line_value(line, name):
    if isinstance(line, Mapping):
        return line.get(name)
    return getattr(line, name, None)


def convert_lines(lines: Iterable, settings: Optional[EngineSettings] = None,
                  cache: Optional[ConversionCache] = None) -> LineBatchResult:
    """
    Convert every line of a transaction to BF and total it.

    Each line carries uom (default BF), quantity, thickness, width, length and
    pieces_per_bundle. Invalid lines contribute 0 to the total and are listed
    in invalid_lines.
    """
    settings = settings or EngineSettings()
    cache = cache if cache is not None else ConversionCache()

    converted = []
    invalid = []
    total_bf = 0.0

    for index, line in enumerate(lines):
        uom = _line_value(line, "uom") or BF
        qty = parse_number(_line_value(line, "quantity"))
        dims = positive_dimensions(line)
        ppb = _pieces_per_bundle(_line_value(line, "pieces_per_bundle"))
        key = (uom if isinstance(uom, str) else repr(uom), qty, dims, ppb, settings.bf_precision)

        result = cache.get_or_convert(key, lambda: convert_to_board_feet(
            uom, qty, dict(zip(("thickness", "width", "length"), dims)), ppb, settings.bf_precision,
        ))

        if result.is_valid:
            total_bf += result.board_feet
        else:
            invalid.append(index)

        converted.append(LineConversion(
            line=index,
            uom=_uom_text(uom),
            quantity=qty,
            result=result,
        ))

    logger.info(
        "Converted %d lines: %.4f BF total, %d invalid, %d cached",
        len(converted), total_bf, len(invalid), cache.hits,
    )

    return LineBatchResult(
        lines=converted,
        total_bf=round_to(total_bf, settings.bf_precision),
        invalid_lines=invalid,
    )
