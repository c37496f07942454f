"""
Input validation for dimensions, quantities, percentages, tallies and work order lines.

Two families:
- validate_dimensions / validate_bf_quantity: the engine's own quick checks,
  returning DimensionCheck / BoardFeetCheck.
- Everything else aggregates errors and warnings into a ValidationResult so a
  form can show all problems at once. Nothing here raises.
"""

import math
from collections.abc import Mapping
from typing import List, Optional

from ..constants import BF, LF, SF, MBF, MSF, EACH, BUNDLE, TYPICAL_MAX, UOM_CODES
from ..schemas import BoardFeetCheck, DimensionCheck, EngineSettings, ValidationResult
from .base import format_number, parse_int, parse_number, positive_dimensions, round_to
from .board_feet import calculate_bf

MAX_QUANTITY = 999999999

# Messages for validate_dimensions_for_unit, by unit family
_UNIT_DIMENSION_LABELS = {
    LF: "Linear Feet",
    SF: "Square Feet",
    MSF: "Square Feet",
    EACH: "piece",
    BUNDLE: "piece",
}
_UNIT_REQUIRED_DIMS = {
    BF: (),
    MBF: (),
    LF: ("thickness", "width"),
    SF: ("thickness",),
    MSF: ("thickness",),
    EACH: ("thickness", "width", "length"),
    BUNDLE: ("thickness", "width", "length"),
}


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def _get(data, name):
    if isinstance(data, Mapping):
        return data.get(name)
    return getattr(data, name, None)


def create_result(is_valid: bool, errors: Optional[List[str]] = None,
                  warnings: Optional[List[str]] = None, data: Optional[dict] = None) -> ValidationResult:
    warnings = list(warnings or [])
    return ValidationResult(
        is_valid=is_valid,
        errors=list(errors or []),
        warnings=warnings,
        has_warnings=bool(warnings),
        data=data,
    )


# ============================================
# Engine checks
# ============================================

def validate_dimensions(thickness, width, length) -> DimensionCheck:
    """One reason per missing or non-positive dimension, joined with "; "."""
    t, w, l = positive_dimensions({"thickness": thickness, "width": width, "length": length})
    errors = []
    if t is None:
        errors.append("Thickness must be a positive number")
    if w is None:
        errors.append("Width must be a positive number")
    if l is None:
        errors.append("Length must be a positive number")
    return DimensionCheck(is_valid=not errors, message="; ".join(errors))


def validate_bf_quantity(board_feet, dims=None) -> BoardFeetCheck:
    """
    Sanity hint: does this BF work out to a whole number of pieces?
    Remainders under 0.001 or over 0.999 count as whole. Never blocks a save.
    """
    t, w, l = positive_dimensions(dims)
    bf_per_piece = calculate_bf(t, w, l)
    if bf_per_piece <= 0:
        return BoardFeetCheck(is_valid=False, message="Invalid dimensions provided")

    bf = parse_number(board_feet, 0.0)
    implied = bf / bf_per_piece
    if not math.isfinite(implied):
        return BoardFeetCheck(is_valid=False, message="Board feet out of numeric range",
                              bf_per_piece=bf_per_piece)
    remainder = math.fmod(implied, 1)
    is_whole = remainder < 0.001 or remainder > 0.999
    implied_pieces = round_to(implied, 2)

    return BoardFeetCheck(
        is_valid=True,
        message="" if is_whole else f"Note: {format_number(implied_pieces)} pieces implied",
        implied_pieces=implied_pieces,
        is_whole_number=is_whole,
        bf_per_piece=bf_per_piece,
    )


# ============================================
# Dimensions
# ============================================

def validate_dimension(value, name: str, min_value: float = 0, max_value: float = 1000,
                       required: bool = True) -> ValidationResult:
    """Single dimension: must be > min_value; above max_value is only a warning."""
    if _is_blank(value):
        errors = [f"{name} is required"] if required else []
        return create_result(not errors, errors)

    number = parse_number(value)
    if number is None:
        return create_result(False, [f"{name} must be a valid number"])

    errors = []
    warnings = []
    if number <= min_value:
        errors.append(f"{name} must be greater than {format_number(min_value)}")
    if number > max_value:
        warnings.append(f"{name} ({format_number(number)}) exceeds typical maximum of {format_number(max_value)}")

    return create_result(not errors, errors, warnings, {"value": number})


def validate_dimension_set(dims, require_all: bool = True,
                           settings: Optional[EngineSettings] = None) -> ValidationResult:
    """
    Thickness, width and length together, with typical-range warnings.
    settings.require_dimensions makes every dimension mandatory.
    """
    settings = settings or EngineSettings()
    thickness = _get(dims, "thickness") if dims is not None else None
    width = _get(dims, "width") if dims is not None else None
    length = _get(dims, "length") if dims is not None else None

    results = {
        "thickness": validate_dimension(thickness, "Thickness", 0, TYPICAL_MAX["thickness"], require_all),
        "width": validate_dimension(width, "Width", 0, TYPICAL_MAX["width"], require_all),
        "length": validate_dimension(length, "Length", 0, TYPICAL_MAX["length"], require_all),
    }

    errors = []
    warnings = []
    for result in results.values():
        errors.extend(result.errors)
        warnings.extend(result.warnings)

    values = {name: (r.data or {}).get("value") for name, r in results.items()}

    if values["thickness"] is not None and values["thickness"] < 0.25:
        warnings.append('Thickness under 0.25" is unusually thin for lumber')
    if values["width"] is not None and values["width"] < 1:
        warnings.append('Width under 1" is unusually narrow for lumber')

    if settings.require_dimensions:
        if not all(parse_number(v) for v in (thickness, width, length)):
            errors.append("All dimensions are required by system settings")

    return create_result(not errors, errors, warnings, values)


# ============================================
# Units
# ============================================

def validate_unit_code(uom_code) -> ValidationResult:
    if _is_blank(uom_code):
        return create_result(False, ["UOM code is required"])

    valid_codes = list(UOM_CODES.values())
    if uom_code not in valid_codes:
        return create_result(False, [f"Invalid UOM code: {uom_code}. Valid codes: {', '.join(valid_codes)}"])

    return create_result(True, data={"uom_code": uom_code})


def validate_dimensions_for_unit(uom_code, dims) -> ValidationResult:
    """Required dimensions present for the unit. Unknown units pass; see validate_unit_code."""
    t, w, l = positive_dimensions(dims)
    present = {"thickness": t, "width": w, "length": l}
    label = _UNIT_DIMENSION_LABELS.get(uom_code)

    errors = [
        f"{name.capitalize()} required for {label} conversion"
        for name in _UNIT_REQUIRED_DIMS.get(uom_code, ())
        if present[name] is None
    ]
    return create_result(not errors, errors)


# ============================================
# Quantities
# ============================================

def validate_quantity(value, name: str = "Quantity", allow_zero: bool = False,
                      allow_negative: bool = False, max_value: float = MAX_QUANTITY) -> ValidationResult:
    if _is_blank(value):
        return create_result(False, [f"{name} is required"])

    number = parse_number(value)
    if number is None:
        return create_result(False, [f"{name} must be a valid number"])

    errors = []
    if not allow_negative and number < 0:
        errors.append(f"{name} cannot be negative")
    if not allow_zero and number == 0:
        errors.append(f"{name} cannot be zero")
    if number > max_value:
        errors.append(f"{name} exceeds maximum allowed value of {format_number(max_value)}")

    return create_result(not errors, errors, data={"value": number})


def validate_board_feet(board_feet, dims=None) -> ValidationResult:
    """BF quantity, with warnings when it implies a sliver or a fractional piece count."""
    qty_result = validate_quantity(board_feet, "Board Feet")
    if not qty_result.is_valid:
        return qty_result

    bf = qty_result.data["value"]
    warnings = []

    t, w, l = positive_dimensions(dims)
    if dims is not None and None not in (t, w, l):
        bf_per_piece = calculate_bf(t, w, l)
        if bf_per_piece > 0:
            implied = bf / bf_per_piece
            if implied < 0.01:
                warnings.append("BF quantity implies less than 1% of a piece")
            remainder = math.fmod(implied, 1)
            if 0.01 < remainder < 0.99:
                warnings.append(f"BF quantity implies {format_number(round_to(implied, 2))} pieces (fractional)")

    return create_result(True, warnings=warnings, data={"board_feet": bf})


# ============================================
# Percentages
# ============================================

def validate_percentage(value, name: str = "Percentage", min_value: float = 0,
                        max_value: float = 100, allow_null: bool = False) -> ValidationResult:
    if _is_blank(value):
        errors = [] if allow_null else [f"{name} is required"]
        return create_result(not errors, errors)

    number = parse_number(value)
    if number is None:
        return create_result(False, [f"{name} must be a valid number"])

    errors = []
    if number < min_value:
        errors.append(f"{name} must be at least {format_number(min_value)}%")
    if number > max_value:
        errors.append(f"{name} cannot exceed {format_number(max_value)}%")

    return create_result(not errors, errors, data={"value": number})


def validate_yield_percentage(yield_pct) -> ValidationResult:
    """Hard 1–100 range. Unlike apply_yield, out-of-range is rejected here."""
    result = validate_percentage(yield_pct, "Yield", 1, 100)
    if result.is_valid and result.data["value"] < 50:
        return create_result(True, result.errors, ["Yield below 50% is unusually low"], result.data)
    return result


def validate_waste_percentage(waste_pct) -> ValidationResult:
    result = validate_percentage(waste_pct, "Waste", 0, 100)
    if result.is_valid and result.data["value"] > 50:
        return create_result(True, result.errors, ["Waste above 50% is unusually high"], result.data)
    return result


# ============================================
# Tallies
# ============================================

def validate_tally_data(tally) -> ValidationResult:
    errors = []
    warnings = []

    if not _get(tally, "item_id"):
        errors.append("Item is required for tally sheet")
    if not _get(tally, "location_id"):
        errors.append("Location is required for tally sheet")
    if not _get(tally, "subsidiary_id"):
        errors.append("Subsidiary is required for tally sheet")

    bf_result = validate_quantity(_get(tally, "received_bf"), "Received BF")
    errors.extend(bf_result.errors)

    moisture = _get(tally, "moisture_pct")
    if moisture is not None:
        moisture_result = validate_percentage(moisture, "Moisture", 0, 100)
        errors.extend(moisture_result.errors)
        if moisture_result.is_valid and moisture_result.data["value"] > 25:
            warnings.append("Moisture above 25% is unusually high for kiln-dried lumber")

    dims = {name: _get(tally, name) for name in ("thickness", "width", "length")}
    if any(dims.values()):
        dim_result = validate_dimension_set(dims, require_all=False)
        errors.extend(dim_result.errors)
        warnings.extend(dim_result.warnings)

    return create_result(not errors, errors, warnings)


def validate_tally_allocation(allocation, available_bf) -> ValidationResult:
    errors = []

    if not _get(allocation, "tally_id"):
        errors.append("Tally sheet is required for allocation")
    if not _get(allocation, "work_order_id"):
        errors.append("Work Order is required for allocation")

    available = parse_number(available_bf, 0.0)
    alloc_result = validate_quantity(_get(allocation, "allocated_bf"), "Allocated BF")
    if not alloc_result.is_valid:
        errors.extend(alloc_result.errors)
    elif alloc_result.data["value"] > available:
        errors.append(
            f"Cannot allocate {format_number(alloc_result.data['value'])} BF. "
            f"Only {format_number(available)} BF available."
        )

    return create_result(not errors, errors)


# ============================================
# Work orders
# ============================================

def validate_work_order_line(line) -> ValidationResult:
    errors = []
    warnings = []

    if not _get(line, "item_id"):
        errors.append("Item is required")

    qty_result = validate_quantity(_get(line, "quantity"), "Quantity")
    errors.extend(qty_result.errors)

    selling_uom = _get(line, "selling_uom")
    if selling_uom:
        uom_result = validate_unit_code(selling_uom)
        if not uom_result.is_valid:
            errors.extend(uom_result.errors)
        else:
            dims_result = validate_dimensions_for_unit(selling_uom, line)
            errors.extend(dims_result.errors)

    yield_pct = _get(line, "yield_pct")
    if yield_pct is not None:
        yield_result = validate_yield_percentage(yield_pct)
        errors.extend(yield_result.errors)
        warnings.extend(yield_result.warnings)

    return create_result(not errors, errors, warnings)


# ============================================
# Settings
# ============================================

def validate_settings(values) -> ValidationResult:
    """
    Check a settings payload before it is saved. Keys: default_yield_pct,
    default_waste_pct, bf_precision, and the enable_* module switches.
    """
    errors = []

    default_yield = _get(values, "default_yield_pct")
    if default_yield is not None:
        result = validate_yield_percentage(default_yield)
        if not result.is_valid:
            errors.append(f"Default Yield: {', '.join(result.errors)}")

    default_waste = _get(values, "default_waste_pct")
    if default_waste is not None:
        result = validate_waste_percentage(default_waste)
        if not result.is_valid:
            errors.append(f"Default Waste: {', '.join(result.errors)}")

    precision_value = _get(values, "bf_precision")
    if precision_value is not None:
        precision = parse_int(precision_value)
        if precision is None or precision < 0 or precision > 8:
            errors.append("BF Precision must be between 0 and 8")

    if _get(values, "enable_waste") and not _get(values, "enable_yield"):
        errors.append("Waste Tracking requires Yield Tracking to be enabled")
    if _get(values, "enable_repack") and not _get(values, "enable_tally"):
        errors.append("Repack Module requires Tally Sheets to be enabled")

    return create_result(not errors, errors)


# ============================================
# Utilities
# ============================================

def combine_results(*results: Optional[ValidationResult]) -> ValidationResult:
    errors = []
    warnings = []
    for result in results:
        if result is None:
            continue
        errors.extend(result.errors)
        warnings.extend(result.warnings)
    return create_result(not errors, errors, warnings)


def format_result(result: ValidationResult) -> str:
    """Plain-text rendering for messages and logs."""
    lines = []
    if not result.is_valid:
        lines.append("Validation Errors:")
        lines.extend(f"  • {error}" for error in result.errors)
    if result.has_warnings:
        lines.append("Warnings:")
        lines.extend(f"  ⚠ {warning}" for warning in result.warnings)
    return "\n".join(lines)
