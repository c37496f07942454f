"""
Conversions API — selling units to and from board feet.

POST /api/conversions/to-bf     — any unit → BF
POST /api/conversions/from-bf   — BF → any unit
POST /api/conversions/between   — unit → unit through BF
POST /api/conversions/lines     — convert and total a transaction's lines
GET  /api/conversions/matrix    — BF factor of every unit for one dimension set
"""

from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..calculators.conversion import (
    ConversionCache,
    conversion_matrix,
    convert_between_units,
    convert_from_board_feet,
    convert_lines,
    convert_to_board_feet,
)
from ..config import Settings, get_settings
from ..constants import BF
from ..schemas import (
    ConversionMatrix,
    ConversionResult,
    LineBatchResult,
    ReverseConversionResult,
    UnitConversionResult,
)

router = APIRouter(prefix="/conversions", tags=["conversions"])


# --- Request schemas ---

class DimensionFields(BaseModel):
    thickness: Optional[float] = None   # inches
    width: Optional[float] = None       # inches
    length: Optional[float] = None      # feet
    pieces_per_bundle: Optional[int] = 1

    def dims(self) -> dict:
        return {"thickness": self.thickness, "width": self.width, "length": self.length}


class ToBoardFeetRequest(DimensionFields):
    source_uom: str
    source_qty: Optional[float] = None
    precision: Optional[int] = None


class FromBoardFeetRequest(DimensionFields):
    target_uom: str
    board_feet: Optional[float] = None
    precision: Optional[int] = None


class BetweenUnitsRequest(DimensionFields):
    source_uom: str
    source_qty: Optional[float] = None
    target_uom: str
    precision: Optional[int] = None


class LineRequest(DimensionFields):
    uom: Optional[str] = BF
    quantity: Optional[float] = None


class LinesRequest(BaseModel):
    lines: List[LineRequest]


def _precision(requested: Optional[int], settings: Settings) -> int:
    return settings.BF_PRECISION if requested is None else requested


# --- Endpoints ---

@router.post("/to-bf", response_model=ConversionResult)
def to_board_feet(request: ToBoardFeetRequest, settings: Settings = Depends(get_settings)):
    return convert_to_board_feet(
        request.source_uom,
        request.source_qty,
        request.dims(),
        request.pieces_per_bundle,
        _precision(request.precision, settings),
    )


@router.post("/from-bf", response_model=ReverseConversionResult)
def from_board_feet(request: FromBoardFeetRequest, settings: Settings = Depends(get_settings)):
    return convert_from_board_feet(
        request.target_uom,
        request.board_feet,
        request.dims(),
        request.pieces_per_bundle,
        _precision(request.precision, settings),
    )


@router.post("/between", response_model=UnitConversionResult)
def between_units(request: BetweenUnitsRequest, settings: Settings = Depends(get_settings)):
    return convert_between_units(
        request.source_uom,
        request.source_qty,
        request.target_uom,
        request.dims(),
        request.pieces_per_bundle,
        _precision(request.precision, settings),
    )


@router.post("/lines", response_model=LineBatchResult)
def convert_transaction_lines(request: LinesRequest, settings: Settings = Depends(get_settings)):
    """Lines with identical unit, quantity and dimensions are converted once per request."""
    cache = ConversionCache()
    return convert_lines(request.lines, settings.engine_settings(), cache)


@router.get("/matrix", response_model=ConversionMatrix)
def matrix(
    thickness: Optional[float] = None,
    width: Optional[float] = None,
    length: Optional[float] = None,
    pieces_per_bundle: int = 1,
):
    return conversion_matrix(thickness, width, length, pieces_per_bundle)
