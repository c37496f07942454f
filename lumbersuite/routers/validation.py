"""
Validation API — form checks before a record is saved.

POST /api/validation/dimensions       — thickness, width, length with range warnings
POST /api/validation/bf-quantity      — does a BF quantity make whole pieces?
POST /api/validation/yield-pct        — yield percentage, hard 1–100
POST /api/validation/work-order-line  — item, quantity, unit, dimensions and yield together
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..calculators.validation import (
    validate_bf_quantity,
    validate_dimension_set,
    validate_work_order_line,
    validate_yield_percentage,
)
from ..config import Settings, get_settings
from ..schemas import BoardFeetCheck, ValidationResult

router = APIRouter(prefix="/validation", tags=["validation"])


class DimensionsRequest(BaseModel):
    thickness: Optional[float] = None
    width: Optional[float] = None
    length: Optional[float] = None
    require_all: bool = True


class BoardFeetQuantityRequest(BaseModel):
    board_feet: float
    thickness: Optional[float] = None
    width: Optional[float] = None
    length: Optional[float] = None


class YieldPercentageRequest(BaseModel):
    yield_pct: Optional[float] = None


class WorkOrderLineRequest(BaseModel):
    item_id: Optional[str] = None
    quantity: Optional[float] = None
    selling_uom: Optional[str] = None
    thickness: Optional[float] = None
    width: Optional[float] = None
    length: Optional[float] = None
    yield_pct: Optional[float] = None


@router.post("/dimensions", response_model=ValidationResult)
def dimensions(request: DimensionsRequest, settings: Settings = Depends(get_settings)):
    return validate_dimension_set(request, request.require_all, settings.engine_settings())


@router.post("/bf-quantity", response_model=BoardFeetCheck)
def bf_quantity(request: BoardFeetQuantityRequest):
    return validate_bf_quantity(request.board_feet, request)


@router.post("/yield-pct", response_model=ValidationResult)
def yield_pct(request: YieldPercentageRequest):
    return validate_yield_percentage(request.yield_pct)


@router.post("/work-order-line", response_model=ValidationResult)
def work_order_line(request: WorkOrderLineRequest):
    return validate_work_order_line(request)
