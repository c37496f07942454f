from typing import List, Optional

from fastapi import APIRouter, HTTPException

from ..calculators.conversion import available_units
from ..schemas import UnitInfo

router = APIRouter(prefix="/units", tags=["units"])


@router.get("/", response_model=List[UnitInfo])
def list_units(
    thickness: Optional[float] = None,
    width: Optional[float] = None,
    length: Optional[float] = None,
):
    """All selling units, flagged available when the given dimensions are enough."""
    return available_units(thickness, width, length)


@router.get("/{code}", response_model=UnitInfo)
def get_unit_info(
    code: str,
    thickness: Optional[float] = None,
    width: Optional[float] = None,
    length: Optional[float] = None,
):
    for unit in available_units(thickness, width, length):
        if unit.code == code:
            return unit
    raise HTTPException(status_code=404, detail=f"Unknown UOM code: {code}")
