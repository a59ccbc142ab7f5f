"""
Inbound payload for a risk assessment.

The caller sends ALL context data in a single synchronous POST:
questionnaire answers plus the client's raw financial records.
The risk engine never fetches from the client database — everything arrives here.
"""
from __future__ import annotations

from datetime import date
from typing import Optional
from pydantic import BaseModel, Field, field_validator


# ── Financial records (as stored per client) ──

class IncomeRecord(BaseModel):
    type: Optional[str] = Field(None, description="e.g. Salary, Rental Income")
    amount: float = Field(ge=0)
    frequency: str = Field("Monthly", description="Monthly | Annual")


class ExpenditureRecord(BaseModel):
    category: Optional[str] = Field(None, description="e.g. Rent/Mortgage, Utilities")
    amount: float = Field(ge=0)
    frequency: str = Field("Monthly", description="Monthly | Annual")


class AssetRecord(BaseModel):
    type: str = Field(description="e.g. Cash, Savings, Investments, Property")
    description: Optional[str] = None
    value: float = Field(ge=0)


class LiabilityRecord(BaseModel):
    type: str = Field(description="e.g. Mortgage, Loan, Credit Card")
    description: Optional[str] = None
    amount: float = Field(ge=0, description="Outstanding balance")
    interest_rate: Optional[float] = Field(None, ge=0, description="Annual rate in percent")
    term: Optional[int] = Field(None, ge=0, description="Remaining term in years")


class GoalRecord(BaseModel):
    goal: str = Field(description="Free text, e.g. 'Comfortable retirement'")
    target_amount: float = Field(0.0, ge=0)
    time_horizon: float = Field(0.0, ge=0, description="Years to achieve the goal")


# ── Top-level request ──

class RiskAssessmentRequest(BaseModel):
    """
    POST /v1/risk/assess

    Contains ALL data needed — the risk engine is stateless.
    Responses map question id → selected answer score (1-4).
    """
    client_id: str
    responses: dict[str, int]
    incomes: list[IncomeRecord] = []
    expenditures: list[ExpenditureRecord] = []
    assets: list[AssetRecord] = []
    liabilities: list[LiabilityRecord] = []
    goals: list[GoalRecord] = []
    date_of_birth: Optional[date] = None

    @field_validator("responses")
    @classmethod
    def validate_responses(cls, v: dict[str, int]) -> dict[str, int]:
        bad = {k: s for k, s in v.items() if not 1 <= s <= 4}
        if bad:
            raise ValueError(f"answer scores must be between 1 and 4: {bad}")
        return v
