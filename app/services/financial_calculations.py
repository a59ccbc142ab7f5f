"""
Financial calculation helpers

Reductions over a client's raw records, shared by the risk metrics
deriver and anything that needs a plain financial summary.

Frequency labels:
  "Annual"  → amount is per year
  anything else → amount is per month
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional, Union

import structlog

from app.schemas.risk_request import AssetRecord, ExpenditureRecord, IncomeRecord, LiabilityRecord

DateLike = Union[date, str]

logger = structlog.get_logger()

CURRENCY_SYMBOLS = {"GBP": "£", "EUR": "€", "USD": "$"}


@dataclass(frozen=True)
class FinancialSummary:
    monthly_income: float
    annual_income: float
    monthly_expenditure: float
    annual_expenditure: float
    total_assets: float
    total_liabilities: float
    net_worth: float


def to_monthly(amount: float, frequency: str = "monthly") -> float:
    return amount / 12 if frequency.lower() == "annual" else amount


def to_annual(amount: float, frequency: str = "monthly") -> float:
    return amount * 12 if frequency.lower() == "monthly" else amount


def calculate_monthly_income(incomes: Iterable[IncomeRecord]) -> float:
    return sum((to_monthly(i.amount, i.frequency) for i in incomes), 0.0)


def calculate_annual_income(incomes: Iterable[IncomeRecord]) -> float:
    return sum((to_annual(i.amount, i.frequency) for i in incomes), 0.0)


def calculate_monthly_expenditure(expenditures: Iterable[ExpenditureRecord]) -> float:
    return sum((to_monthly(e.amount, e.frequency) for e in expenditures), 0.0)


def calculate_annual_expenditure(expenditures: Iterable[ExpenditureRecord]) -> float:
    return sum((to_annual(e.amount, e.frequency) for e in expenditures), 0.0)


def calculate_total_assets(assets: Iterable[AssetRecord]) -> float:
    return sum((a.value for a in assets), 0.0)


def calculate_total_liabilities(liabilities: Iterable[LiabilityRecord]) -> float:
    return sum((liability.amount for liability in liabilities), 0.0)


def calculate_net_worth(assets: list[AssetRecord], liabilities: list[LiabilityRecord]) -> float:
    return calculate_total_assets(assets) - calculate_total_liabilities(liabilities)


def calculate_financial_summary(
    incomes: list[IncomeRecord],
    expenditures: list[ExpenditureRecord],
    assets: list[AssetRecord],
    liabilities: list[LiabilityRecord],
) -> FinancialSummary:
    return FinancialSummary(
        monthly_income=calculate_monthly_income(incomes),
        annual_income=calculate_annual_income(incomes),
        monthly_expenditure=calculate_monthly_expenditure(expenditures),
        annual_expenditure=calculate_annual_expenditure(expenditures),
        total_assets=calculate_total_assets(assets),
        total_liabilities=calculate_total_liabilities(liabilities),
        net_worth=calculate_net_worth(assets, liabilities),
    )


def calculate_percentage(amount: float, total: float) -> float:
    if total == 0:
        return 0.0
    return round(amount / total * 100, 1)


def format_currency(amount: float, currency: str = "GBP") -> str:
    """en-GB style: £1,234.50, -£12.00"""
    symbol = CURRENCY_SYMBOLS.get(currency, f"{currency} ")
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


# ═══════════════════════════════════════════════════════════════
# Age & retirement
# ═══════════════════════════════════════════════════════════════

def parse_date(value: DateLike) -> date:
    """Accepts a date or an ISO-8601 date / datetime string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.fromisoformat(value.replace("Z", "+00:00")).date()


def calculate_age(birth_date: Optional[DateLike], reference_date: Optional[date] = None) -> int:
    """
    Whole years since birth; 0 when the birth date is unknown or unreadable.
    """
    if not birth_date:
        return 0

    ref = reference_date or date.today()
    try:
        birth = parse_date(birth_date)
    except ValueError:
        logger.warning("unparseable_birth_date", birth_date=str(birth_date))
        return 0

    age = ref.year - birth.year
    if (ref.month, ref.day) < (birth.month, birth.day):
        age -= 1
    return age


def calculate_years_until_retirement(
    birth_date: DateLike,
    target_retirement_age: int,
    reference_date: Optional[date] = None,
) -> int:
    return target_retirement_age - calculate_age(birth_date, reference_date)
