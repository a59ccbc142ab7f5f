"""
Financial Metrics Deriver

Reduces a client's raw records into the snapshot consumed by
capacity-for-loss scoring:

    monthly income / expenses      frequency-normalised sums
    total assets / liabilities     straight sums
    liquid assets                  Cash + Savings + Investments only
    annual debt service            amortised payment for Loan/Mortgage with term + rate,
                                   full outstanding balance for everything else
    net worth                      assets - liabilities (may be negative)
    age                            0 when date of birth is unknown
    years to retirement            first goal mentioning "retirement", else None

No guards: empty inputs reduce to 0, and downstream ratios over a
zero income or expense figure are allowed to go to inf / nan.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

import structlog

from app.schemas.risk_request import (
    AssetRecord, ExpenditureRecord, GoalRecord, IncomeRecord, LiabilityRecord,
)
from app.services.financial_calculations import (
    DateLike,
    calculate_age,
    calculate_monthly_expenditure,
    calculate_monthly_income,
    calculate_total_assets,
    calculate_total_liabilities,
)

logger = structlog.get_logger()

# Fixed allow-list: other asset types never count as liquid, however liquid in practice.
LIQUID_ASSET_TYPES = frozenset({"Cash", "Savings", "Investments"})
AMORTISED_LIABILITY_TYPES = frozenset({"Loan", "Mortgage"})


@dataclass(frozen=True)
class FinancialMetrics:
    monthly_income: float
    monthly_expenses: float
    total_assets: float
    total_liabilities: float
    liquid_assets: float
    net_worth: float
    annual_debt_service: float
    total_income: float  # annual
    age: int  # 0 = unknown
    years_to_retirement: Optional[float]


def annual_payment(amount: float, interest_rate: float, term: int) -> float:
    """Fixed-payment amortisation with an annual rate given in percent."""
    rate = interest_rate / 100
    return (amount * rate) / (1 - (1 + rate) ** -term)


def calculate_annual_debt_service(liabilities: list[LiabilityRecord]) -> float:
    total = 0.0
    for liability in liabilities:
        if liability.type in AMORTISED_LIABILITY_TYPES and liability.term and liability.interest_rate:
            total += annual_payment(liability.amount, liability.interest_rate, liability.term)
        else:
            total += liability.amount
    return total


def calculate_liquid_assets(assets: list[AssetRecord]) -> float:
    return sum((a.value for a in assets if a.type in LIQUID_ASSET_TYPES), 0.0)


def calculate_total_income(incomes: list[IncomeRecord]) -> float:
    # Exact "Annual" only; the monthly figures ignore case.
    return sum(
        (i.amount if i.frequency == "Annual" else i.amount * 12 for i in incomes),
        0.0,
    )


def find_years_to_retirement(goals: list[GoalRecord]) -> Optional[float]:
    # Only the first matching goal counts.
    for goal in goals:
        if "retirement" in goal.goal.lower():
            return goal.time_horizon
    return None


def calculate_financial_metrics(
    incomes: list[IncomeRecord],
    expenditures: list[ExpenditureRecord],
    assets: list[AssetRecord],
    liabilities: list[LiabilityRecord],
    goals: list[GoalRecord],
    date_of_birth: Optional[DateLike] = None,
    reference_date: Optional[date] = None,
) -> FinancialMetrics:
    """
    Main entry point. Pure function of its inputs (and today's date, for age).
    """
    total_assets = calculate_total_assets(assets)
    total_liabilities = calculate_total_liabilities(liabilities)

    metrics = FinancialMetrics(
        monthly_income=calculate_monthly_income(incomes),
        monthly_expenses=calculate_monthly_expenditure(expenditures),
        total_assets=total_assets,
        total_liabilities=total_liabilities,
        liquid_assets=calculate_liquid_assets(assets),
        net_worth=total_assets - total_liabilities,
        annual_debt_service=calculate_annual_debt_service(liabilities),
        total_income=calculate_total_income(incomes),
        age=calculate_age(date_of_birth, reference_date),
        years_to_retirement=find_years_to_retirement(goals),
    )

    logger.debug(
        "financial_metrics_calculated",
        monthly_income=metrics.monthly_income,
        monthly_expenses=metrics.monthly_expenses,
        liquid_assets=metrics.liquid_assets,
        net_worth=metrics.net_worth,
        annual_debt_service=round(metrics.annual_debt_service, 2),
        age=metrics.age,
        years_to_retirement=metrics.years_to_retirement,
    )
    return metrics
