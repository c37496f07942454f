"""
Dimension resolution for transaction lines.

Priority, lowest to highest:
    system defaults (1" × 12" × 8') → item nominal → tally sheet → line override

Callers pass already-loaded values (mappings or objects with thickness, width,
length, pieces_per_bundle). Each layer only overrides the dimensions it has
as positive numbers.
"""

from collections.abc import Mapping
from typing import Optional

from ..constants import DEFAULTS
from ..schemas import ResolvedDimensions, ValidationResult
from .base import format_number, parse_int, parse_number, parse_positive

DIMENSION_FIELDS = ("thickness", "width", "length")


def _get(source, name):
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


def _pieces(source) -> Optional[int]:
    pieces = parse_int(_get(source, "pieces_per_bundle"))
    if pieces is None or pieces <= 0:
        return None
    return pieces


def system_defaults() -> dict:
    return {
        "thickness": DEFAULTS["THICKNESS"],
        "width": DEFAULTS["WIDTH"],
        "length": DEFAULTS["LENGTH"],
        "pieces_per_bundle": DEFAULTS["PIECES_PER_BUNDLE"],
    }


def item_dimensions(item, defaults=None) -> dict:
    """
    Nominal dimensions of an item record. Blank fields fall back to the
    system defaults, the way item lookups fill gaps.
    """
    defaults = defaults or system_defaults()
    dims = {
        name: parse_number(_get(item, name), defaults[name])
        for name in DIMENSION_FIELDS
    }
    dims["pieces_per_bundle"] = _pieces(item) or 1
    return dims


def resolve_dimensions(item=None, tally=None, line=None, defaults=None,
                       tally_enabled: bool = True) -> ResolvedDimensions:
    """
    Layer defaults, item, tally and line dimensions.

    The item layer applies only when the item's dimensions are complete.
    resolution_path lists the layers that contributed, in order.
    """
    defaults = defaults or system_defaults()
    values = {name: parse_number(defaults.get(name), 0.0) for name in DIMENSION_FIELDS}
    pieces = parse_int(defaults.get("pieces_per_bundle"), 1) or 1
    source = "default"
    path = []

    if item is not None:
        item_dims = item_dimensions(item, defaults)
        if all(item_dims[name] > 0 for name in DIMENSION_FIELDS):
            values.update({name: item_dims[name] for name in DIMENSION_FIELDS})
            pieces = item_dims["pieces_per_bundle"]
            source = "item"
            path.append("item")

    for layer_name, layer in (("tally", tally if tally_enabled else None), ("line", line)):
        if layer is None:
            continue
        for name in DIMENSION_FIELDS:
            value = parse_positive(_get(layer, name))
            if value is not None:
                values[name] = value
                source = layer_name
        layer_pieces = _pieces(layer)
        if layer_pieces:
            pieces = layer_pieces
        if source == layer_name:
            path.append(layer_name)

    return ResolvedDimensions(
        thickness=values["thickness"],
        width=values["width"],
        length=values["length"],
        pieces_per_bundle=pieces,
        source=source,
        is_complete=all(values[name] > 0 for name in DIMENSION_FIELDS),
        resolution_path=path,
    )


def check_dimensions(dims: ResolvedDimensions) -> ValidationResult:
    """Business-rule warnings for resolved dimensions; incomplete is the only error."""
    errors = []
    warnings = []

    if not dims.is_complete:
        errors.append("Incomplete dimensions")

    if dims.thickness > 12:
        warnings.append(f'Thickness {format_number(dims.thickness)}" exceeds typical lumber thickness')
    if dims.width > 24:
        warnings.append(f'Width {format_number(dims.width)}" exceeds typical lumber width')
    if dims.length > 24:
        warnings.append(f"Length {format_number(dims.length)}' exceeds typical lumber length")
    if 0 < dims.thickness < 0.25:
        warnings.append(f'Thickness {format_number(dims.thickness)}" is unusually thin')

    return ValidationResult(
        is_valid=not errors,
        errors=errors,
        warnings=warnings,
        has_warnings=bool(warnings),
    )


def format_dimensions(dims, style: str = "standard") -> str:
    """
    2" × 6" × 10'                  standard
    2"×6"×10'                      compact
    2" thick × 6" wide × 10' long  full
    """
    if dims is None:
        return "N/A"
    values = [parse_positive(_get(dims, name)) for name in DIMENSION_FIELDS]
    if None in values:
        return "N/A"

    t, w, l = (format_number(v) for v in values)
    if style == "compact":
        return f"{t}\"×{w}\"×{l}'"
    if style == "full":
        return f"{t}\" thick × {w}\" wide × {l}' long"
    return f"{t}\" × {w}\" × {l}'"
