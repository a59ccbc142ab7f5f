"""
Capacity-for-Loss Scorer

Runs the 4 factors in fixed order, averages their integer scores
(range 1.0-4.0) and maps the mean to a category:

    score >= 3.5  → High
    score >= 2.5  → Medium
    score >= 1.5  → Low
    otherwise     → Very Low
"""
from __future__ import annotations

from dataclasses import dataclass

from app.schemas.risk_response import CapacityCategory
from app.scoring import factors
from app.services.financial_metrics import FinancialMetrics

CAPACITY_THRESHOLDS = [
    (3.5, CapacityCategory.HIGH),
    (2.5, CapacityCategory.MEDIUM),
    (1.5, CapacityCategory.LOW),
]


@dataclass(frozen=True)
class CapacityScore:
    score: float
    category: CapacityCategory
    factors: tuple[factors.FactorResult, ...]


def capacity_category(score: float) -> CapacityCategory:
    for threshold, category in CAPACITY_THRESHOLDS:
        if score >= threshold:
            return category
    return CapacityCategory.VERY_LOW


def calculate_capacity_for_loss(metrics: FinancialMetrics) -> CapacityScore:
    results = (
        factors.score_emergency_fund(metrics),
        factors.score_debt_service(metrics),
        factors.score_net_worth(metrics),
        factors.score_income_stability(metrics),
    )
    score = sum(r.score for r in results) / len(results)
    return CapacityScore(score=score, category=capacity_category(score), factors=results)
