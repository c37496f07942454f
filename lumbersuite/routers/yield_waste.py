"""
Yield API — raw BF requirements, waste and recovery.

POST /api/yield/apply          — raw BF needed for a finished quantity
POST /api/yield/waste          — waste breakdown from consumed vs output BF
POST /api/yield/process-waste  — kerf / shrinkage / defect split for a process
POST /api/yield/compare        — actual recovery vs expected yield
POST /api/yield/summary        — roll up yield register entries
"""

from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..calculators.yield_waste import (
    calculate_expected_waste,
    calculate_process_waste,
    calculate_recovery_pct,
    calculate_theoretical_bf,
    calculate_waste,
    classify_yield,
    compare_yield,
    summarize_yield,
)
from ..config import Settings, get_settings
from ..schemas import ProcessWasteBreakdown, WasteBreakdown, YieldSummary

router = APIRouter(prefix="/yield", tags=["yield"])


class ApplyYieldRequest(BaseModel):
    theoretical_bf: float
    yield_pct: Optional[float] = None   # falls back to DEFAULT_YIELD_PCT


class WasteRequest(BaseModel):
    consumed_bf: float
    output_bf: float


class ProcessWasteRequest(BaseModel):
    input_bf: float
    kerf_loss: float = 0
    shrinkage: float = 0
    defect_rate: float = 0


class CompareYieldRequest(BaseModel):
    input_bf: float
    output_bf: float
    expected_yield_pct: Optional[float] = None


class YieldEntry(BaseModel):
    input_bf: float
    output_bf: float
    waste_bf: Optional[float] = None
    waste_reason: Optional[str] = None


class YieldSummaryRequest(BaseModel):
    entries: List[YieldEntry]


@router.post("/apply")
def apply_yield_endpoint(request: ApplyYieldRequest, settings: Settings = Depends(get_settings)):
    """
    Raw BF to pull for a finished requirement. A yield outside 1–100
    leaves the quantity unadjusted.
    """
    yield_pct = request.yield_pct if request.yield_pct is not None else settings.DEFAULT_YIELD_PCT
    raw_bf = calculate_theoretical_bf(request.theoretical_bf, yield_pct, settings.engine_settings())
    return {
        "theoretical_bf": request.theoretical_bf,
        "yield_pct": yield_pct,
        "raw_bf": raw_bf,
        "expected_waste_bf": calculate_expected_waste(raw_bf, yield_pct),
    }


@router.post("/waste", response_model=WasteBreakdown)
def waste(request: WasteRequest):
    return calculate_waste(request.consumed_bf, request.output_bf)


@router.post("/process-waste", response_model=ProcessWasteBreakdown)
def process_waste(request: ProcessWasteRequest):
    return calculate_process_waste(
        request.input_bf, request.kerf_loss, request.shrinkage, request.defect_rate,
    )


@router.post("/compare")
def compare(request: CompareYieldRequest, settings: Settings = Depends(get_settings)):
    expected = request.expected_yield_pct
    if expected is None:
        expected = settings.DEFAULT_YIELD_PCT
    recovery = calculate_recovery_pct(request.output_bf, request.input_bf)
    comparison = compare_yield(expected, recovery)
    return {**comparison.model_dump(), "grade": classify_yield(recovery)}


@router.post("/summary", response_model=YieldSummary)
def summary(request: YieldSummaryRequest):
    return summarize_yield(request.entries)
