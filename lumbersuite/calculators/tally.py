"""
Tally sheet lotting.

A tally sheet is one received lot of lumber with its BF remaining. Work orders
draw from tallies oldest first (FIFO). These helpers work on TallyLot values the
caller has already loaded; nothing here persists anything.
"""

import logging
from datetime import date
from typing import Iterable, List, Optional

from ..constants import ERRORS, PRECISION, TALLY_STATUS, TALLY_STATUS_LABELS
from ..schemas import AllocationResult, TallyAllocation, TallyLot
from .base import parse_number, round_to

logger = logging.getLogger(__name__)

BF_PRECISION = PRECISION["BF"]

AVAILABLE_STATUSES = (TALLY_STATUS["OPEN"], TALLY_STATUS["ALLOCATED"])


def _fifo_key(lot: TallyLot):
    # Lots without a received date go last
    return (lot.received_date is None, lot.received_date or date.min, lot.tally_id)


def find_available_tallies(tallies: Iterable[TallyLot], required_bf=None,
                           enforce_fifo: bool = True) -> List[TallyLot]:
    """
    Open or allocated lots with BF remaining. With FIFO enforced they come back
    oldest first, and the list stops once it covers required_bf.
    """
    available = [
        lot for lot in tallies
        if lot.status in AVAILABLE_STATUSES and lot.remaining_bf > 0
    ]
    if not enforce_fifo:
        return available

    available.sort(key=_fifo_key)
    required = parse_number(required_bf)
    if not required:
        return available

    selected = []
    accumulated = 0.0
    for lot in available:
        selected.append(lot)
        accumulated += lot.remaining_bf
        if accumulated >= required:
            break
    return selected


def available_bf(tallies: Iterable[TallyLot]) -> float:
    total = sum(lot.remaining_bf for lot in find_available_tallies(tallies, enforce_fifo=False))
    return round_to(total, BF_PRECISION)


def allocate_fifo(tallies: Iterable[TallyLot], required_bf,
                  enforce_fifo: bool = True) -> AllocationResult:
    """
    Allocate required_bf across available tallies, taking
    min(remaining, still needed) from each in turn.
    success is False when the tallies fall short; shortfall says by how much.
    """
    required = parse_number(required_bf, 0.0)
    available = find_available_tallies(tallies, enforce_fifo=enforce_fifo)

    if not available:
        logger.info("No available tallies for %.4f BF", required)
        return AllocationResult(success=False, error=ERRORS["NO_TALLIES"])

    allocations = []
    still_needed = required
    for lot in available:
        if still_needed <= 0:
            break
        take = min(lot.remaining_bf, still_needed)
        allocations.append(TallyAllocation(tally_id=lot.tally_id, allocated_bf=round_to(take, BF_PRECISION)))
        still_needed -= take

    shortfall = still_needed if still_needed > 0 else 0.0
    if shortfall:
        logger.info("Tally allocation short by %.4f BF of %.4f required", shortfall, required)

    return AllocationResult(
        success=still_needed <= 0,
        allocations=allocations,
        total_allocated=round_to(required - still_needed, BF_PRECISION),
        shortfall=round_to(shortfall, BF_PRECISION),
        error=None if still_needed <= 0 else ERRORS["INSUFFICIENT_TALLY"],
    )


def tally_status(remaining_bf, allocated_bf=0) -> str:
    """Status code for a tally: consumed at zero, allocated while allocations are open."""
    if parse_number(remaining_bf, 0.0) <= 0:
        return TALLY_STATUS["CONSUMED"]
    if parse_number(allocated_bf, 0.0) > 0:
        return TALLY_STATUS["ALLOCATED"]
    return TALLY_STATUS["OPEN"]


def consume_tally(lot: TallyLot, consumed_bf, allocated_bf=0) -> TallyLot:
    """New lot with consumed_bf taken off. Remaining never goes below 0."""
    consumed = parse_number(consumed_bf, 0.0)
    remaining = max(0.0, round_to(lot.remaining_bf - consumed, BF_PRECISION))
    return lot.model_copy(update={
        "remaining_bf": remaining,
        "status": _next_status(lot, remaining, allocated_bf),
    })


def reverse_consumption(lot: TallyLot, reverse_bf, allocated_bf=0) -> TallyLot:
    """Put BF back on a lot (voided transaction), capped at what was received."""
    reversed_bf = parse_number(reverse_bf, 0.0)
    remaining = lot.remaining_bf + reversed_bf
    if lot.received_bf > 0:
        remaining = min(remaining, lot.received_bf)
    remaining = round_to(remaining, BF_PRECISION)
    return lot.model_copy(update={
        "remaining_bf": remaining,
        "status": _next_status(lot, remaining, allocated_bf),
    })


def _next_status(lot: TallyLot, remaining: float, allocated_bf) -> str:
    # Closed lots keep their status
    if lot.status == TALLY_STATUS["CLOSED"]:
        return lot.status
    return tally_status(remaining, allocated_bf)


def tally_label(status: Optional[str]) -> str:
    return TALLY_STATUS_LABELS.get(status, "Unknown")
