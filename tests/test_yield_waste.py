"""
Yield and waste tests.

Tests:
1-4.   apply_yield: raw BF for a finished requirement, permissive fallback
5-7.   calculate_waste breakdown
8-11.  Theoretical BF, expected waste, recovery %
12-14. Yield comparison against expected
15-16. Process waste split
17-19. Yield grading and register summaries
"""

import pytest

from lumbersuite.calculators.yield_waste import (
    apply_yield,
    calculate_expected_waste,
    calculate_process_waste,
    calculate_recovery_pct,
    calculate_theoretical_bf,
    calculate_waste,
    classify_yield,
    compare_yield,
    summarize_yield,
)
from lumbersuite.schemas import EngineSettings


# ============================================================
# apply_yield
# ============================================================

def test_apply_yield_ninety_five_percent():
    """1000 BF finished at 95% yield needs 1052.6316 BF raw."""
    assert apply_yield(1000, 95) == 1052.6316


def test_apply_yield_full_yield_is_unchanged():
    assert apply_yield(1000, 100) == 1000.0


@pytest.mark.parametrize("yield_pct", [0, -5, 150, None, "abc"])
def test_apply_yield_out_of_range_returns_input(yield_pct):
    """A yield outside (0, 100] means no adjustment."""
    assert apply_yield(1000, yield_pct) == 1000


def test_apply_yield_bad_bf_is_zero():
    assert apply_yield("abc", 95) == 0.0
    assert apply_yield(None, 95) == 0.0
    assert apply_yield("500", 50) == 1000.0


# ============================================================
# Waste
# ============================================================

def test_calculate_waste_thousand_in_eight_fifty_out():
    waste = calculate_waste(1000, 850)
    assert waste.consumed_bf == 1000
    assert waste.output_bf == 850
    assert waste.waste_bf == 150
    assert waste.yield_pct == 85
    assert waste.waste_pct == 15


def test_calculate_waste_nothing_consumed():
    """No consumption means no percentages and no division error."""
    waste = calculate_waste(0, 0)
    assert waste.yield_pct == 0.0
    assert waste.waste_pct == 0.0
    assert calculate_waste(None, "abc").waste_bf == 0.0


def test_calculate_waste_huge_consumption():
    waste = calculate_waste(1e306, 0)
    assert waste.consumed_bf == 1e306
    assert waste.waste_bf == 1e306
    assert waste.waste_pct == 100.0


# ============================================================
# Theoretical / expected / recovery
# ============================================================

def test_theoretical_bf_uses_default_yield():
    assert calculate_theoretical_bf(1000) == 1052.6316


def test_theoretical_bf_uses_settings_yield():
    assert calculate_theoretical_bf(1000, settings=EngineSettings(default_yield_pct=80)) == 1250.0
    assert calculate_theoretical_bf(1000, 50, EngineSettings(default_yield_pct=80)) == 2000.0


def test_expected_waste():
    assert calculate_expected_waste(1000, 90) == 100.0
    assert calculate_expected_waste(1000, 0) == 0.0
    assert calculate_expected_waste(0, 90) == 0.0


def test_recovery_pct():
    assert calculate_recovery_pct(850, 1000) == 85.0
    assert calculate_recovery_pct(850, 0) == 0.0


# ============================================================
# Comparison
# ============================================================

def test_compare_yield_above_expected():
    assert compare_yield(90, 92).status == "ABOVE_EXPECTED"
    assert compare_yield(90, 90).status == "ABOVE_EXPECTED"


def test_compare_yield_within_tolerance():
    """Up to 5 points under expected is still on target."""
    assert compare_yield(90, 87).status == "WITHIN_TOLERANCE"
    assert compare_yield(90, 85).status == "WITHIN_TOLERANCE"


def test_compare_yield_below_expected():
    comparison = compare_yield(90, 80)
    assert comparison.status == "BELOW_EXPECTED"
    assert comparison.variance == -10.0
    assert comparison.variance_pct == -11.11


# ============================================================
# Process waste
# ============================================================

def test_process_waste_split():
    breakdown = calculate_process_waste(1000, kerf_loss=5, shrinkage=2, defect_rate=3)
    assert breakdown.kerf_bf == 50.0
    assert breakdown.shrinkage_bf == 20.0
    assert breakdown.defect_bf == 30.0
    assert breakdown.total_waste_bf == 100.0
    assert breakdown.output_bf == 900.0
    assert breakdown.actual_yield_pct == 90.0


def test_process_waste_zero_input():
    breakdown = calculate_process_waste(0, 5, 2, 3)
    assert breakdown.output_bf == 0.0
    assert breakdown.actual_yield_pct == 0.0


# ============================================================
# Grading and summaries
# ============================================================

@pytest.mark.parametrize("pct,grade", [
    (95, "EXCELLENT"),
    (90, "EXCELLENT"),
    (85, "GOOD"),
    (70, "ACCEPTABLE"),
    (65, "POOR"),
    (10, "CRITICAL"),
])
def test_classify_yield(pct, grade):
    assert classify_yield(pct) == grade


def test_summarize_yield_register():
    entries = [
        {"input_bf": 1000, "output_bf": 850, "waste_reason": "Kerf"},
        {"input_bf": 500, "output_bf": 450, "waste_reason": "Kerf"},
        {"input_bf": 200, "output_bf": 180},
    ]
    summary = summarize_yield(entries)
    assert summary.entry_count == 3
    assert summary.total_input_bf == 1700.0
    assert summary.total_output_bf == 1480.0
    assert summary.total_waste_bf == 220.0
    assert summary.recovery_pct == 87.06
    assert summary.grade == "GOOD"
    assert summary.waste_by_reason == {"Kerf": 200.0, "Unspecified": 20.0}


def test_summarize_yield_empty():
    summary = summarize_yield([])
    assert summary.entry_count == 0
    assert summary.recovery_pct == 0.0
    assert summary.grade == "CRITICAL"
