from datetime import date
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel


class ConversionErrorCode(str, Enum):
    MISSING_DIMENSION = "MISSING_DIMENSION"
    UNKNOWN_UNIT = "UNKNOWN_UNIT"
    INVALID_NUMERIC = "INVALID_NUMERIC"
    DIVISION_GUARD = "DIVISION_GUARD"


class Dimensions(BaseModel):
    thickness: Optional[float] = None   # inches
    width: Optional[float] = None       # inches
    length: Optional[float] = None      # feet
    class Config:
        frozen = True


class EngineSettings(BaseModel):
    bf_precision: int = 4
    default_yield_pct: float = 95.0
    default_waste_pct: float = 5.0
    require_dimensions: bool = False
    enforce_tally_fifo: bool = True
    class Config:
        frozen = True


# --- Conversion results ---

class ConversionResult(BaseModel):
    board_feet: float = 0.0
    conversion_factor: float = 0.0
    is_valid: bool = True
    error: Optional[str] = None
    error_code: Optional[ConversionErrorCode] = None
    source_uom: Optional[str] = None
    source_qty: Optional[float] = None
    class Config:
        frozen = True


class ReverseConversionResult(BaseModel):
    display_qty: float = 0.0
    conversion_factor: float = 0.0
    is_valid: bool = True
    error: Optional[str] = None
    error_code: Optional[ConversionErrorCode] = None
    target_uom: Optional[str] = None
    board_feet: Optional[float] = None
    class Config:
        frozen = True


class UnitConversionResult(BaseModel):
    result: float = 0.0
    is_valid: bool = True
    error: Optional[str] = None
    error_code: Optional[ConversionErrorCode] = None
    source_uom: Optional[str] = None
    source_qty: Optional[float] = None
    target_uom: Optional[str] = None
    intermediary_bf: float = 0.0
    total_conversion_factor: Optional[float] = None
    class Config:
        frozen = True


class ConversionFactors(BaseModel):
    bf_per_piece: float
    bf_per_linear_foot: float
    bf_per_square_foot: float
    lf_to_bf_factor: float
    sf_to_bf_factor: float
    surface_measure: float
    cubic_feet: float
    dimensions: Dimensions
    class Config:
        frozen = True


class ConversionMatrix(BaseModel):
    to_bf: Dict[str, Optional[float]]
    from_bf: Dict[str, Optional[float]]
    descriptions: Dict[str, str]
    dimensions: Dimensions
    pieces_per_bundle: int
    bf_per_piece: float
    class Config:
        frozen = True


class UnitInfo(BaseModel):
    code: str
    label: str
    available: bool
    requires_dimensions: bool
    required_dims: List[str] = []
    class Config:
        frozen = True


class LineConversion(BaseModel):
    line: int
    uom: Optional[str] = None
    quantity: Optional[float] = None
    result: ConversionResult
    class Config:
        frozen = True


class LineBatchResult(BaseModel):
    lines: List[LineConversion] = []
    total_bf: float = 0.0
    invalid_lines: List[int] = []
    class Config:
        frozen = True


# --- Yield / waste ---

class WasteBreakdown(BaseModel):
    consumed_bf: float
    output_bf: float
    waste_bf: float
    yield_pct: float
    waste_pct: float
    class Config:
        frozen = True


class ProcessWasteBreakdown(BaseModel):
    input_bf: float
    kerf_bf: float
    shrinkage_bf: float
    defect_bf: float
    total_waste_bf: float
    output_bf: float
    actual_yield_pct: float
    class Config:
        frozen = True


class YieldComparison(BaseModel):
    expected_yield_pct: float
    actual_recovery_pct: float
    variance: float
    variance_pct: float
    status: str
    class Config:
        frozen = True


class YieldSummary(BaseModel):
    entry_count: int = 0
    total_input_bf: float = 0.0
    total_output_bf: float = 0.0
    total_waste_bf: float = 0.0
    recovery_pct: float = 0.0
    grade: str = "CRITICAL"
    waste_by_reason: Dict[str, float] = {}
    class Config:
        frozen = True


# --- Validation ---

class DimensionCheck(BaseModel):
    is_valid: bool
    message: str = ""
    class Config:
        frozen = True


class BoardFeetCheck(BaseModel):
    is_valid: bool
    message: str = ""
    implied_pieces: float = 0.0
    is_whole_number: bool = False
    bf_per_piece: float = 0.0
    class Config:
        frozen = True


class ValidationResult(BaseModel):
    is_valid: bool
    errors: List[str] = []
    warnings: List[str] = []
    has_warnings: bool = False
    data: Optional[dict] = None
    class Config:
        frozen = True


# --- Dimension resolution ---

class ResolvedDimensions(BaseModel):
    thickness: float = 0.0
    width: float = 0.0
    length: float = 0.0
    pieces_per_bundle: int = 1
    source: str = "default"
    is_complete: bool = False
    resolution_path: List[str] = []
    class Config:
        frozen = True


# --- Tally lotting ---

class TallyLot(BaseModel):
    tally_id: str
    remaining_bf: float
    received_bf: float = 0.0
    received_date: Optional[date] = None
    status: str = "1"
    tally_number: Optional[str] = None
    vendor_lot: Optional[str] = None
    class Config:
        frozen = True


class TallyAllocation(BaseModel):
    tally_id: str
    allocated_bf: float
    class Config:
        frozen = True


class AllocationResult(BaseModel):
    success: bool
    allocations: List[TallyAllocation] = []
    total_allocated: float = 0.0
    shortfall: float = 0.0
    error: Optional[str] = None
    class Config:
        frozen = True
