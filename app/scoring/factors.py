"""
Capacity-for-Loss — 4 Factor Definitions

Each factor:
  1. Computes one ratio from the client's FinancialMetrics
  2. Maps it to a bin via an ordered threshold table (first match wins)
  3. Returns an integer score 1..4 plus a human-readable explanation

Averaging happens in capacity.py, not here.

Convention: HIGHER score = MORE capacity to absorb losses.

Ratios are plain IEEE arithmetic: a zero denominator yields inf / nan
instead of raising. A nan ratio fails every comparison and drops into
the lowest bin.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from app.services.financial_metrics import FinancialMetrics

MIN_FACTOR_SCORE = 1


@dataclass(frozen=True)
class FactorResult:
    factor: str
    ratio: float
    score: int
    explanation: str


def ratio(numerator: float, denominator: float) -> float:
    """Division that follows IEEE 754 on a zero denominator."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def to_fixed(value: float, digits: int = 1) -> str:
    """
    Fixed-point text for explanations: halves round away from zero on the
    exact binary value, non-finite values print as Infinity / -Infinity / NaN.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if abs(value) >= 1e21:
        return repr(value)
    if value == 0:
        value = 0.0  # no "-0.0"
    quantum = Decimal(1).scaleb(-digits)
    return format(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP), "f")


def score_at_least(value: float, table: tuple[tuple[float, int], ...]) -> int:
    for lower_bound, score in table:
        if value >= lower_bound:
            return score
    return MIN_FACTOR_SCORE


def score_at_most(value: float, table: tuple[tuple[float, int], ...]) -> int:
    for upper_bound, score in table:
        if value <= upper_bound:
            return score
    return MIN_FACTOR_SCORE


# ═══════════════════════════════════════════════════════════════
# 1. EMERGENCY FUND
#    liquid assets / monthly expenses  (months of cover)
# ═══════════════════════════════════════════════════════════════
EMERGENCY_FUND_BINS = ((6.0, 4), (3.0, 3), (1.0, 2))


def score_emergency_fund(metrics: FinancialMetrics) -> FactorResult:
    months = ratio(metrics.liquid_assets, metrics.monthly_expenses)
    return FactorResult(
        "Emergency Fund",
        months,
        score_at_least(months, EMERGENCY_FUND_BINS),
        f"Has {to_fixed(months)} months of expenses covered",
    )


# ═══════════════════════════════════════════════════════════════
# 2. DEBT SERVICE
#    total liabilities / annual income  (lower is better)
# ═══════════════════════════════════════════════════════════════
DEBT_SERVICE_BINS = ((0.20, 4), (0.35, 3), (0.50, 2))


def score_debt_service(metrics: FinancialMetrics) -> FactorResult:
    dsr = ratio(metrics.total_liabilities, metrics.monthly_income * 12)
    return FactorResult(
        "Debt Service",
        dsr,
        score_at_most(dsr, DEBT_SERVICE_BINS),
        f"Debt service ratio is {to_fixed(dsr * 100)}%",
    )


# ═══════════════════════════════════════════════════════════════
# 3. NET WORTH
#    total assets / liabilities, denominator floored at 1
# ═══════════════════════════════════════════════════════════════
NET_WORTH_BINS = ((5.0, 4), (3.0, 3), (1.0, 2))


def score_net_worth(metrics: FinancialMetrics) -> FactorResult:
    cover = ratio(metrics.total_assets, max(metrics.total_liabilities, 1))
    return FactorResult(
        "Net Worth",
        cover,
        score_at_least(cover, NET_WORTH_BINS),
        f"Net worth ratio is {to_fixed(cover)}x liabilities",
    )


# ═══════════════════════════════════════════════════════════════
# 4. INCOME STABILITY
#    monthly surplus / monthly income
# ═══════════════════════════════════════════════════════════════
INCOME_STABILITY_BINS = ((0.30, 4), (0.20, 3), (0.10, 2))


def score_income_stability(metrics: FinancialMetrics) -> FactorResult:
    surplus = ratio(metrics.monthly_income - metrics.monthly_expenses, metrics.monthly_income)
    return FactorResult(
        "Income Stability",
        surplus,
        score_at_least(surplus, INCOME_STABILITY_BINS),
        f"Monthly surplus ratio is {to_fixed(surplus * 100)}%",
    )
