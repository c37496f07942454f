"""
Selling units. Each class knows its required dimensions and its BF factor.

| Unit   | Required dims            | Factor (BF per unit)        |
|--------|--------------------------|-----------------------------|
| BF     | —                        | 1                           |
| LF     | thickness, width         | (T × W) / 12                |
| SF     | thickness                | T / 12                      |
| MBF    | —                        | 1000                        |
| MSF    | thickness                | (T / 12) × 1000             |
| EACH   | thickness, width, length | (T × W × L) / 12 at 6 dp    |
| BUNDLE | thickness, width, length | BF per piece × pcs/bundle   |
"""

from ..constants import (
    BF, LF, SF, MBF, MSF, EACH, BUNDLE, UOM_LABELS, BF_DIVISOR_FEET, PRECISION, THOUSAND,
)
from .base import BaseUnit
from .board_feet import calculate_bf


class BoardFeetUnit(BaseUnit):
    CODE = BF
    LABEL = UOM_LABELS[BF]

    def factor(self, thickness, width, length, pieces_per_bundle=1):
        return 1.0


class LinearFeetUnit(BaseUnit):
    CODE = LF
    LABEL = UOM_LABELS[LF]
    REQUIRED_DIMS = ("thickness", "width")

    def factor(self, thickness, width, length, pieces_per_bundle=1):
        return (thickness * width) / BF_DIVISOR_FEET


class SquareFeetUnit(BaseUnit):
    CODE = SF
    LABEL = UOM_LABELS[SF]
    REQUIRED_DIMS = ("thickness",)

    def factor(self, thickness, width, length, pieces_per_bundle=1):
        return thickness / BF_DIVISOR_FEET


class ThousandBoardFeetUnit(BaseUnit):
    CODE = MBF
    LABEL = UOM_LABELS[MBF]

    def factor(self, thickness, width, length, pieces_per_bundle=1):
        return THOUSAND


class ThousandSquareFeetUnit(BaseUnit):
    CODE = MSF
    LABEL = UOM_LABELS[MSF]
    REQUIRED_DIMS = ("thickness",)

    def factor(self, thickness, width, length, pieces_per_bundle=1):
        return (thickness / BF_DIVISOR_FEET) * THOUSAND


class EachUnit(BaseUnit):
    CODE = EACH
    LABEL = UOM_LABELS[EACH]
    REQUIRED_DIMS = ("thickness", "width", "length")

    def factor(self, thickness, width, length, pieces_per_bundle=1):
        return calculate_bf(thickness, width, length, PRECISION["FACTOR"])


class BundleUnit(EachUnit):
    CODE = BUNDLE
    LABEL = UOM_LABELS[BUNDLE]

    def factor(self, thickness, width, length, pieces_per_bundle=1):
        bf_per_piece = super().factor(thickness, width, length)
        return bf_per_piece * pieces_per_bundle
