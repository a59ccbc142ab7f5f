"""
Response payload returned to the adviser / client dashboards.

The dashboards use: risk_category, overall_score, capacity_for_loss
and the four sub-scores to render the risk profile.
"""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class RiskCategory(str, Enum):
    VERY_CONSERVATIVE = "Very Conservative"
    CONSERVATIVE = "Conservative"
    MODERATE_CONSERVATIVE = "Moderate Conservative"
    MODERATE = "Moderate"
    MODERATE_AGGRESSIVE = "Moderate Aggressive"
    AGGRESSIVE = "Aggressive"


class CapacityCategory(str, Enum):
    VERY_LOW = "Very Low"
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class CapacityFactorResult(BaseModel):
    """One capacity-for-loss factor."""
    factor: str
    ratio: Optional[float] = Field(None, description="Underlying ratio; null when not finite")
    score: int = Field(ge=1, le=4)
    explanation: str


class CapacityForLossResult(BaseModel):
    score: float
    category: CapacityCategory
    factors: list[CapacityFactorResult]


class AssetAllocationResult(BaseModel):
    """Percentages, summing to 100."""
    equities: int
    bonds: int
    cash: int
    other: int


class RiskScoresResult(BaseModel):
    knowledge_score: float
    attitude_score: float
    capacity_score: float
    timeframe_score: float
    overall_score: float
    risk_category: RiskCategory
    capacity_for_loss: CapacityForLossResult
    recommended_asset_allocation: AssetAllocationResult


class FinancialMetricsResult(BaseModel):
    monthly_income: float
    monthly_expenses: float
    total_assets: float
    total_liabilities: float
    liquid_assets: float
    net_worth: float
    annual_debt_service: float
    total_income: float
    age: int = Field(description="0 when date of birth is unknown")
    years_to_retirement: Optional[float] = None


class FinancialSummaryResult(BaseModel):
    """Plain totals for the adviser view, alongside the scoring metrics."""
    monthly_income: float
    annual_income: float
    monthly_expenditure: float
    annual_expenditure: float
    total_assets: float
    total_liabilities: float
    net_worth: float
    net_worth_display: str = Field(description="Net worth in the configured currency, e.g. £1,234.50")
    expenditure_to_income_pct: float = Field(description="Monthly expenditure as % of income; 0 without income")
    years_until_retirement: Optional[int] = Field(None, description="Against the configured retirement age; null when age is unknown")


class RiskAssessmentResponse(BaseModel):
    client_id: str
    assessment_id: str = Field(description="Internal UUID for audit trail")
    model_version: str

    # ── Inputs echoed back ──
    responses: dict[str, int]

    # ── Outputs ──
    financial_metrics: FinancialMetricsResult
    financial_summary: FinancialSummaryResult
    scores: RiskScoresResult

    # ── Metadata ──
    evaluated_at: datetime
    processing_time_ms: int


class AnswerOption(BaseModel):
    text: str
    score: int


class QuestionResponse(BaseModel):
    id: str
    question: str
    category: str
    answers: list[AnswerOption]
