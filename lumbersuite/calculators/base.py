"""
Shared numeric helpers and the abstract base class for all selling units.

Every unit converts to board feet through a single factor:
    board_feet = quantity × factor
    quantity   = board_feet / factor
The unit class only decides which dimensions it needs and how the factor
is built from them.
"""

import math
import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import List, Optional, Tuple

DIMENSION_NAMES = ("thickness", "width", "length")

# Leading numeric prefix, same acceptance as JavaScript parseFloat
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")


def parse_number(value, default: Optional[float] = None) -> Optional[float]:
    """
    Parse a user-entered number the way form fields arrive: 2, 2.5, "2.5", " 6 ",
    "8ft" (→ 8.0). None, empty strings, booleans, text, NaN and infinities return default.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return default
        return number if math.isfinite(number) else default
    match = _FLOAT_PREFIX.match(str(value))
    if not match:
        return default
    try:
        number = float(match.group(1))
    except (ValueError, OverflowError):
        return default
    return number if math.isfinite(number) else default


def parse_int(value, default: Optional[int] = None) -> Optional[int]:
    """Integer prefix of a value ("12 pcs" → 12, 2.7 → 2). Unparseable returns default."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return default
        return int(value)
    match = _INT_PREFIX.match(str(value))
    if not match:
        return default
    return int(match.group(1))


def parse_positive(value) -> Optional[float]:
    """Parsed value if strictly positive, else None ("missing")."""
    number = parse_number(value)
    if number is None or number <= 0:
        return None
    return number


def round_to(value, decimals: int) -> float:
    """
    Round half away from zero at a fixed number of decimals.
    Non-numeric, NaN and infinite values round to 0. A value that overflows when
    scaled to `decimals` places comes back unrounded.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    try:
        value = float(value)
    except OverflowError:
        return 0.0
    if not math.isfinite(value):
        return 0.0
    try:
        multiplier = 10 ** decimals
        scaled = value * multiplier
    except OverflowError:
        return value + 0.0
    if not multiplier:
        return 0.0
    if not math.isfinite(scaled):
        return value + 0.0
    rounded = math.copysign(math.floor(abs(scaled) + 0.5), scaled) / multiplier
    return rounded + 0.0  # drop negative zero


def dimension_values(dims) -> Tuple:
    """Raw (thickness, width, length) from a Dimensions model, a mapping, or None."""
    if dims is None:
        return (None, None, None)
    if isinstance(dims, Mapping):
        return tuple(dims.get(name) for name in DIMENSION_NAMES)
    return tuple(getattr(dims, name, None) for name in DIMENSION_NAMES)


def positive_dimensions(dims) -> Tuple[Optional[float], Optional[float], Optional[float]]:
    """(thickness, width, length) with anything missing, non-numeric or ≤0 as None."""
    return tuple(parse_positive(v) for v in dimension_values(dims))


def join_names(names: List[str]) -> str:
    """["thickness", "width", "length"] → "Thickness, width and length"."""
    if not names:
        return ""
    if len(names) == 1:
        text = names[0]
    else:
        text = ", ".join(names[:-1]) + " and " + names[-1]
    return text[0].upper() + text[1:]


class BaseUnit(ABC):
    """All selling units inherit from this."""

    CODE = ""
    LABEL = ""
    REQUIRED_DIMS: Tuple[str, ...] = ()

    @abstractmethod
    def factor(self, thickness: Optional[float], width: Optional[float],
               length: Optional[float], pieces_per_bundle: int = 1) -> float:
        """
        Board feet in one unit of this UOM.
        Dimensions arrive already parsed; required ones are guaranteed positive.
        """
        pass

    @property
    def requires_dimensions(self) -> bool:
        return bool(self.REQUIRED_DIMS)

    def missing_dimensions(self, thickness: Optional[float], width: Optional[float],
                           length: Optional[float]) -> List[str]:
        """Names of required dimensions that are missing or non-positive, in canonical order."""
        values = {"thickness": thickness, "width": width, "length": length}
        return [name for name in self.REQUIRED_DIMS if values[name] is None]

    def missing_message(self, missing: List[str]) -> str:
        return f"{join_names(missing)} required for {self.CODE} conversion"

    def is_available(self, thickness: Optional[float], width: Optional[float],
                     length: Optional[float]) -> bool:
        return not self.missing_dimensions(thickness, width, length)

    def to_board_feet(self, quantity: float, factor: float) -> float:
        return quantity * factor

    def from_board_feet(self, board_feet: float, factor: float) -> float:
        if factor <= 0:
            return 0.0
        return board_feet / factor


def format_number(value) -> str:
    """Shortest plain rendering for messages: 12.0 → "12", 12.5 → "12.5"."""
    value = float(value)
    return str(int(value)) if value.is_integer() else str(value)
