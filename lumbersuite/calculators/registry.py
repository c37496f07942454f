"""
Unit registry: maps UOM codes to unit classes.

Order matches the UOM_CODES table and drives every listing (matrix, pickers).
"""

from .base import BaseUnit
from .units import (
    BoardFeetUnit,
    LinearFeetUnit,
    SquareFeetUnit,
    ThousandBoardFeetUnit,
    ThousandSquareFeetUnit,
    EachUnit,
    BundleUnit,
)

UNIT_REGISTRY: dict[str, type] = {
    BoardFeetUnit.CODE: BoardFeetUnit,
    LinearFeetUnit.CODE: LinearFeetUnit,
    SquareFeetUnit.CODE: SquareFeetUnit,
    ThousandBoardFeetUnit.CODE: ThousandBoardFeetUnit,
    ThousandSquareFeetUnit.CODE: ThousandSquareFeetUnit,
    EachUnit.CODE: EachUnit,
    BundleUnit.CODE: BundleUnit,
}


def get_unit(code: str) -> BaseUnit:
    """Returns an instance of the unit for a UOM code, or raises ValueError."""
    if not has_unit(code):
        raise ValueError(
            f"Invalid UOM code: {code}. "
            f"Available: {list(UNIT_REGISTRY.keys())}"
        )
    return UNIT_REGISTRY[code]()


def has_unit(code) -> bool:
    """Check if a UOM code is supported. Codes are case-sensitive."""
    return isinstance(code, str) and code in UNIT_REGISTRY


def list_units() -> list[str]:
    """List all supported UOM codes."""
    return list(UNIT_REGISTRY.keys())
