from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..calculators.tally import allocate_fifo
from ..config import Settings, get_settings
from ..schemas import AllocationResult, TallyLot

router = APIRouter(prefix="/tally", tags=["tally"])


class AllocateRequest(BaseModel):
    tallies: List[TallyLot]
    required_bf: float
    enforce_fifo: Optional[bool] = None   # defaults to ENFORCE_TALLY_FIFO


@router.post("/allocate", response_model=AllocationResult)
def allocate(request: AllocateRequest, settings: Settings = Depends(get_settings)):
    """Plan a FIFO draw of required_bf across the given tally sheets. Nothing is saved."""
    enforce = request.enforce_fifo
    if enforce is None:
        enforce = settings.ENFORCE_TALLY_FIFO
    return allocate_fifo(request.tallies, request.required_bf, enforce)
