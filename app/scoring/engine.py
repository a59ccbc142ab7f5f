"""
Risk Profile Scoring Engine

Orchestrates:
  1. Financial metrics from the client's raw records
  2. Capacity-for-loss (4 ratio factors)
  3. Questionnaire sub-scores (knowledge, attitude, capacity, timeframe)
  4. Weighted overall score
  5. Risk category + recommended asset allocation

Called synchronously by the API endpoint. No I/O.
"""
from __future__ import annotations

import math
import time
import uuid
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Mapping, Optional

import structlog

from app.core.config import get_settings
from app.core.metrics import RISK_ASSESSMENT_DURATION, RISK_ASSESSMENTS_TOTAL
from app.schemas.risk_request import RiskAssessmentRequest
from app.schemas.risk_response import (
    AssetAllocationResult,
    CapacityFactorResult,
    CapacityForLossResult,
    FinancialMetricsResult,
    FinancialSummaryResult,
    RiskAssessmentResponse,
    RiskCategory,
    RiskScoresResult,
)
from app.scoring.capacity import CapacityScore, calculate_capacity_for_loss
from app.scoring.questionnaire import question_ids
from app.services.financial_calculations import (
    calculate_financial_summary,
    calculate_percentage,
    calculate_years_until_retirement,
    format_currency,
)
from app.services.financial_metrics import FinancialMetrics, calculate_financial_metrics

logger = structlog.get_logger()


# ═══════════════════════════════════════════════════════════════
# Component weights — must sum to 1.0
# ═══════════════════════════════════════════════════════════════
SCORE_WEIGHTS: dict[str, float] = {
    "knowledge": 0.20,
    "attitude": 0.25,
    "capacity": 0.20,
    "timeframe": 0.15,
    "capacity_for_loss": 0.20,
}
assert abs(sum(SCORE_WEIGHTS.values()) - 1.0) < 1e-9, "Weights must sum to 1.0"


# ═══════════════════════════════════════════════════════════════
# Category thresholds (inclusive upper bounds, first match wins)
#   score <= 1.5  → Very Conservative
#   score <= 2.0  → Conservative
#   score <= 2.5  → Moderate Conservative
#   score <= 3.0  → Moderate
#   score <= 3.5  → Moderate Aggressive
#   otherwise     → Aggressive   (nan lands here too)
# ═══════════════════════════════════════════════════════════════
CATEGORY_THRESHOLDS = [
    (1.5, RiskCategory.VERY_CONSERVATIVE),
    (2.0, RiskCategory.CONSERVATIVE),
    (2.5, RiskCategory.MODERATE_CONSERVATIVE),
    (3.0, RiskCategory.MODERATE),
    (3.5, RiskCategory.MODERATE_AGGRESSIVE),
]


@dataclass(frozen=True)
class AssetAllocation:
    equities: int
    bonds: int
    cash: int
    other: int


ASSET_ALLOCATIONS: dict[RiskCategory, AssetAllocation] = {
    RiskCategory.VERY_CONSERVATIVE: AssetAllocation(equities=20, bonds=60, cash=20, other=0),
    RiskCategory.CONSERVATIVE: AssetAllocation(equities=35, bonds=50, cash=15, other=0),
    RiskCategory.MODERATE_CONSERVATIVE: AssetAllocation(equities=45, bonds=40, cash=10, other=5),
    RiskCategory.MODERATE: AssetAllocation(equities=60, bonds=30, cash=5, other=5),
    RiskCategory.MODERATE_AGGRESSIVE: AssetAllocation(equities=75, bonds=15, cash=5, other=5),
    RiskCategory.AGGRESSIVE: AssetAllocation(equities=90, bonds=5, cash=0, other=5),
}


@dataclass(frozen=True)
class RiskScores:
    knowledge_score: float
    attitude_score: float
    capacity_score: float
    timeframe_score: float
    overall_score: float
    risk_category: RiskCategory
    capacity_for_loss: CapacityScore
    recommended_asset_allocation: AssetAllocation


def risk_category(score: float) -> RiskCategory:
    for threshold, category in CATEGORY_THRESHOLDS:
        if score <= threshold:
            return category
    return RiskCategory.AGGRESSIVE


def _answer_score(value: Any) -> float:
    # Missing, blank, non-numeric or non-finite answers count as 0 and drag the average down.
    if isinstance(value, str) and "_" in value:
        return 0.0
    try:
        score = float(value)
    except (TypeError, ValueError):
        return 0.0
    return score if math.isfinite(score) else 0.0


def _category_average(responses: Mapping[str, Any], category: str) -> float:
    scores = [_answer_score(responses.get(qid)) for qid in question_ids(category)]
    return sum(scores) / len(scores)


def calculate_risk_scores(responses: Mapping[str, Any], metrics: FinancialMetrics) -> RiskScores:
    """
    Pure function of (responses, metrics).
    """
    knowledge = _category_average(responses, "knowledge")
    attitude = _category_average(responses, "attitude")
    capacity = _category_average(responses, "capacity")
    timeframe = _category_average(responses, "timeframe")

    capacity_for_loss = calculate_capacity_for_loss(metrics)

    overall = (
        knowledge * SCORE_WEIGHTS["knowledge"]
        + attitude * SCORE_WEIGHTS["attitude"]
        + capacity * SCORE_WEIGHTS["capacity"]
        + timeframe * SCORE_WEIGHTS["timeframe"]
        + capacity_for_loss.score * SCORE_WEIGHTS["capacity_for_loss"]
    )
    category = risk_category(overall)

    return RiskScores(
        knowledge_score=knowledge,
        attitude_score=attitude,
        capacity_score=capacity,
        timeframe_score=timeframe,
        overall_score=overall,
        risk_category=category,
        capacity_for_loss=capacity_for_loss,
        recommended_asset_allocation=ASSET_ALLOCATIONS[category],
    )


def evaluate(
    request: RiskAssessmentRequest,
    reference_date: Optional[datetime] = None,
) -> RiskAssessmentResponse:
    """
    Main scoring entry point: raw records + answers → full assessment.
    """
    t0 = time.perf_counter_ns()
    assessment_id = str(uuid.uuid4())
    settings = get_settings()
    ref_date = reference_date.date() if reference_date else None

    metrics = calculate_financial_metrics(
        request.incomes,
        request.expenditures,
        request.assets,
        request.liabilities,
        request.goals,
        date_of_birth=request.date_of_birth,
        reference_date=ref_date,
    )
    scores = calculate_risk_scores(request.responses, metrics)
    summary = _summary_result(request, metrics, settings.currency, settings.target_retirement_age, ref_date)

    elapsed_ns = time.perf_counter_ns() - t0
    elapsed_ms = int(elapsed_ns / 1_000_000)

    RISK_ASSESSMENTS_TOTAL.labels(risk_category=scores.risk_category.value).inc()
    RISK_ASSESSMENT_DURATION.observe(elapsed_ns / 1_000_000_000)

    logger.info(
        "risk_assessment_complete",
        assessment_id=assessment_id,
        client_id=request.client_id,
        overall_score=round(scores.overall_score, 3),
        risk_category=scores.risk_category.value,
        capacity_for_loss=scores.capacity_for_loss.category.value,
        elapsed_ms=elapsed_ms,
    )

    return RiskAssessmentResponse(
        client_id=request.client_id,
        assessment_id=assessment_id,
        model_version=settings.scoring_model_version,
        responses=request.responses,
        financial_metrics=FinancialMetricsResult(
            monthly_income=metrics.monthly_income,
            monthly_expenses=metrics.monthly_expenses,
            total_assets=metrics.total_assets,
            total_liabilities=metrics.total_liabilities,
            liquid_assets=metrics.liquid_assets,
            net_worth=metrics.net_worth,
            annual_debt_service=metrics.annual_debt_service,
            total_income=metrics.total_income,
            age=metrics.age,
            years_to_retirement=metrics.years_to_retirement,
        ),
        financial_summary=summary,
        scores=_scores_result(scores),
        evaluated_at=reference_date or datetime.now(timezone.utc),
        processing_time_ms=elapsed_ms,
    )


def _scores_result(scores: RiskScores) -> RiskScoresResult:
    cfl = scores.capacity_for_loss
    allocation = scores.recommended_asset_allocation
    return RiskScoresResult(
        knowledge_score=scores.knowledge_score,
        attitude_score=scores.attitude_score,
        capacity_score=scores.capacity_score,
        timeframe_score=scores.timeframe_score,
        overall_score=scores.overall_score,
        risk_category=scores.risk_category,
        capacity_for_loss=CapacityForLossResult(
            score=cfl.score,
            category=cfl.category,
            factors=[
                CapacityFactorResult(
                    factor=f.factor,
                    ratio=f.ratio if math.isfinite(f.ratio) else None,
                    score=f.score,
                    explanation=f.explanation,
                )
                for f in cfl.factors
            ],
        ),
        recommended_asset_allocation=AssetAllocationResult(
            equities=allocation.equities,
            bonds=allocation.bonds,
            cash=allocation.cash,
            other=allocation.other,
        ),
    )


def _summary_result(
    request: RiskAssessmentRequest,
    metrics: FinancialMetrics,
    currency: str,
    retirement_age: int,
    reference_date: Optional[date],
) -> FinancialSummaryResult:
    summary = calculate_financial_summary(
        request.incomes, request.expenditures, request.assets, request.liabilities,
    )
    years_left = None
    if metrics.age:
        years_left = calculate_years_until_retirement(request.date_of_birth, retirement_age, reference_date)
    return FinancialSummaryResult(
        monthly_income=summary.monthly_income,
        annual_income=summary.annual_income,
        monthly_expenditure=summary.monthly_expenditure,
        annual_expenditure=summary.annual_expenditure,
        total_assets=summary.total_assets,
        total_liabilities=summary.total_liabilities,
        net_worth=summary.net_worth,
        net_worth_display=format_currency(summary.net_worth, currency),
        expenditure_to_income_pct=calculate_percentage(summary.monthly_expenditure, summary.monthly_income),
        years_until_retirement=years_left,
    )
