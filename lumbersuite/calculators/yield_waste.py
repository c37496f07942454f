"""
Yield and waste math for work orders, completions and repacks.

    yield %   = output BF / consumed BF × 100
    waste BF  = consumed BF − output BF
    raw BF    = finished BF / (yield % / 100)

apply_yield is deliberately permissive: a yield outside (0, 100] means
"no adjustment" and the input comes back unchanged. Hard range checks live in
validation.validate_yield_percentage.
"""

import logging
from collections.abc import Mapping
from typing import Iterable, Optional

from ..constants import PRECISION, YIELD_THRESHOLDS, YIELD_TOLERANCE_PCT
from ..schemas import (
    EngineSettings,
    ProcessWasteBreakdown,
    WasteBreakdown,
    YieldComparison,
    YieldSummary,
)
from .base import parse_number, round_to

logger = logging.getLogger(__name__)

BF_PRECISION = PRECISION["BF"]
PCT_PRECISION = PRECISION["PERCENTAGE"]

UNSPECIFIED_REASON = "Unspecified"


def _in_yield_range(pct: Optional[float]) -> bool:
    return pct is not None and 0 < pct <= 100


def apply_yield(theoretical_bf, yield_pct) -> float:
    """
    Raw BF to consume to get theoretical_bf finished at the given yield.
    1000 BF at 95% → 1052.6316. Out-of-range yield returns the input unchanged.
    """
    bf = parse_number(theoretical_bf, 0.0)
    pct = parse_number(yield_pct)
    if not _in_yield_range(pct):
        return bf
    return round_to(bf / (pct / 100), BF_PRECISION)


def calculate_waste(consumed_bf, output_bf) -> WasteBreakdown:
    consumed = parse_number(consumed_bf, 0.0)
    output = parse_number(output_bf, 0.0)

    waste_bf = consumed - output
    yield_pct = (output / consumed) * 100 if consumed > 0 else 0.0
    waste_pct = (waste_bf / consumed) * 100 if consumed > 0 else 0.0

    return WasteBreakdown(
        consumed_bf=round_to(consumed, BF_PRECISION),
        output_bf=round_to(output, BF_PRECISION),
        waste_bf=round_to(waste_bf, BF_PRECISION),
        yield_pct=round_to(yield_pct, PCT_PRECISION),
        waste_pct=round_to(waste_pct, PCT_PRECISION),
    )


def calculate_theoretical_bf(finished_bf, yield_pct=None,
                             settings: Optional[EngineSettings] = None) -> float:
    """
    Raw BF needed for a finished requirement. Falls back to the configured
    default yield when yield_pct is not given.
    """
    if yield_pct is None:
        yield_pct = (settings or EngineSettings()).default_yield_pct
    return apply_yield(finished_bf, yield_pct)


def calculate_expected_waste(theoretical_bf, yield_pct) -> float:
    bf = parse_number(theoretical_bf)
    pct = parse_number(yield_pct)
    if not bf or not _in_yield_range(pct):
        return 0.0
    finished_bf = bf * (pct / 100)
    return round_to(bf - finished_bf, BF_PRECISION)


def calculate_recovery_pct(output_bf, input_bf) -> float:
    output = parse_number(output_bf, 0.0)
    consumed = parse_number(input_bf, 0.0)
    if consumed <= 0:
        return 0.0
    return round_to((output / consumed) * 100, PCT_PRECISION)


def compare_yield(expected_yield_pct, actual_recovery_pct) -> YieldComparison:
    """Actual vs expected yield. Up to 5 points under expected is still within tolerance."""
    expected = parse_number(expected_yield_pct, 0.0)
    actual = parse_number(actual_recovery_pct, 0.0)

    variance = actual - expected
    variance_pct = (variance / expected) * 100 if expected > 0 else 0.0

    if variance >= 0:
        status = "ABOVE_EXPECTED"
    elif variance >= -YIELD_TOLERANCE_PCT:
        status = "WITHIN_TOLERANCE"
    else:
        status = "BELOW_EXPECTED"

    return YieldComparison(
        expected_yield_pct=round_to(expected, PCT_PRECISION),
        actual_recovery_pct=round_to(actual, PCT_PRECISION),
        variance=round_to(variance, PCT_PRECISION),
        variance_pct=round_to(variance_pct, PCT_PRECISION),
        status=status,
    )


def calculate_process_waste(input_bf, kerf_loss=0, shrinkage=0, defect_rate=0) -> ProcessWasteBreakdown:
    """
    Split expected waste for a process (ripping, surfacing, drying...) into
    kerf, shrinkage and defect losses, each a percentage of input BF.
    """
    bf = parse_number(input_bf, 0.0)
    kerf_bf = bf * (parse_number(kerf_loss, 0.0) / 100)
    shrinkage_bf = bf * (parse_number(shrinkage, 0.0) / 100)
    defect_bf = bf * (parse_number(defect_rate, 0.0) / 100)
    total_waste_bf = kerf_bf + shrinkage_bf + defect_bf
    output_bf = bf - total_waste_bf
    actual_yield = (output_bf / bf) * 100 if bf > 0 else 0.0

    return ProcessWasteBreakdown(
        input_bf=round_to(bf, BF_PRECISION),
        kerf_bf=round_to(kerf_bf, BF_PRECISION),
        shrinkage_bf=round_to(shrinkage_bf, BF_PRECISION),
        defect_bf=round_to(defect_bf, BF_PRECISION),
        total_waste_bf=round_to(total_waste_bf, BF_PRECISION),
        output_bf=round_to(output_bf, BF_PRECISION),
        actual_yield_pct=round_to(actual_yield, PCT_PRECISION),
    )


def classify_yield(yield_pct) -> str:
    """EXCELLENT ≥90, GOOD ≥80, ACCEPTABLE ≥70, POOR ≥60, otherwise CRITICAL."""
    pct = parse_number(yield_pct, 0.0)
    for grade in ("EXCELLENT", "GOOD", "ACCEPTABLE", "POOR"):
        if pct >= YIELD_THRESHOLDS[grade]:
            return grade
    return "CRITICAL"


def _entry_value(entry, name):
    if isinstance(entry, Mapping):
        return entry.get(name)
    return getattr(entry, name, None)


def summarize_yield(entries: Iterable) -> YieldSummary:
    """
    Roll up yield register entries ({input_bf, output_bf, waste_bf?, waste_reason?}).
    waste_bf defaults to input − output when an entry does not carry it.
    """
    count = 0
    total_input = 0.0
    total_output = 0.0
    total_waste = 0.0
    by_reason = {}

    for entry in entries:
        input_bf = parse_number(_entry_value(entry, "input_bf"), 0.0)
        output_bf = parse_number(_entry_value(entry, "output_bf"), 0.0)
        waste_bf = parse_number(_entry_value(entry, "waste_bf"))
        if waste_bf is None:
            waste_bf = input_bf - output_bf
        reason = _entry_value(entry, "waste_reason") or UNSPECIFIED_REASON

        count += 1
        total_input += input_bf
        total_output += output_bf
        total_waste += waste_bf
        by_reason[reason] = by_reason.get(reason, 0.0) + waste_bf

    recovery = calculate_recovery_pct(total_output, total_input)

    logger.info(
        "Yield summary: %d entries, %.2f BF in, %.2f BF out, %.2f%% recovery",
        count, total_input, total_output, recovery,
    )

    return YieldSummary(
        entry_count=count,
        total_input_bf=round_to(total_input, BF_PRECISION),
        total_output_bf=round_to(total_output, BF_PRECISION),
        total_waste_bf=round_to(total_waste, BF_PRECISION),
        recovery_pct=recovery,
        grade=classify_yield(recovery),
        waste_by_reason={k: round_to(v, BF_PRECISION) for k, v in by_reason.items()},
    )
