from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..calculators.dimensions import check_dimensions, format_dimensions, resolve_dimensions
from ..config import Settings, get_settings

router = APIRouter(prefix="/dimensions", tags=["dimensions"])


class DimensionLayer(BaseModel):
    thickness: Optional[float] = None
    width: Optional[float] = None
    length: Optional[float] = None
    pieces_per_bundle: Optional[int] = None


class ResolveRequest(BaseModel):
    item: Optional[DimensionLayer] = None
    tally: Optional[DimensionLayer] = None
    line: Optional[DimensionLayer] = None
    style: str = "standard"   # standard | compact | full


@router.post("/resolve")
def resolve(request: ResolveRequest, settings: Settings = Depends(get_settings)):
    """
    Resolve the dimensions a line should convert with.
    Line overrides beat tally dimensions, which beat item nominal dimensions.
    """
    resolved = resolve_dimensions(
        item=request.item,
        tally=request.tally,
        line=request.line,
        tally_enabled=settings.ENABLE_TALLY,
    )
    return {
        "dimensions": resolved,
        "display": format_dimensions(resolved, request.style),
        "check": check_dimensions(resolved),
    }
