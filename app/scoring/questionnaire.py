"""
Risk Profile Questionnaire — fixed catalog

7 questions across 4 categories:
  knowledge  ×2   investment knowledge & experience
  attitude   ×2   emotional response to loss / volatility
  capacity   ×2   stability of income, emergency savings
  timeframe  ×1   when the money is needed

Every question has exactly 4 answers scored 1..4,
ordered by ascending risk tolerance.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

CATEGORIES: tuple[str, ...] = ("knowledge", "attitude", "capacity", "timeframe")


@dataclass(frozen=True)
class RiskAnswer:
    text: str
    score: int


@dataclass(frozen=True)
class RiskQuestion:
    id: str
    question: str
    category: str
    answers: tuple[RiskAnswer, ...]


RISK_PROFILE_QUESTIONS: tuple[RiskQuestion, ...] = (
    # ── Investment Knowledge & Experience ──
    RiskQuestion(
        id="knowledge_1",
        question="How would you rate your investment knowledge?",
        category="knowledge",
        answers=(
            RiskAnswer("None - I have no knowledge of investments", 1),
            RiskAnswer("Basic - I understand the main asset classes", 2),
            RiskAnswer("Good - I understand different investment strategies", 3),
            RiskAnswer("Extensive - I have detailed investment knowledge", 4),
        ),
    ),
    RiskQuestion(
        id="knowledge_2",
        question="Which investments have you held in the past?",
        category="knowledge",
        answers=(
            RiskAnswer("Only cash savings", 1),
            RiskAnswer("Cash and bonds", 2),
            RiskAnswer("Stocks and shares", 3),
            RiskAnswer("Complex investments (options, alternatives, etc.)", 4),
        ),
    ),
    # ── Risk Attitude ──
    RiskQuestion(
        id="attitude_1",
        question="If your investments fell 20% in one month, what would you do?",
        category="attitude",
        answers=(
            RiskAnswer("Sell everything immediately", 1),
            RiskAnswer("Sell some investments", 2),
            RiskAnswer("Do nothing", 3),
            RiskAnswer("Buy more while prices are low", 4),
        ),
    ),
    RiskQuestion(
        id="attitude_2",
        question="Which statement best describes your investment approach?",
        category="attitude",
        answers=(
            RiskAnswer("I want to minimize risk of any losses", 1),
            RiskAnswer("I want to balance risk and returns", 2),
            RiskAnswer("I am comfortable with some volatility to achieve better returns", 3),
            RiskAnswer("I aim to maximize returns and can accept significant volatility", 4),
        ),
    ),
    # ── Risk Capacity ──
    RiskQuestion(
        id="capacity_1",
        question="How stable is your employment income?",
        category="capacity",
        answers=(
            RiskAnswer("Very unstable/temporary", 1),
            RiskAnswer("Somewhat unstable", 2),
            RiskAnswer("Stable", 3),
            RiskAnswer("Very stable/permanent", 4),
        ),
    ),
    RiskQuestion(
        id="capacity_2",
        question="How many months of expenses could you cover from emergency savings?",
        category="capacity",
        answers=(
            RiskAnswer("Less than 3 months", 1),
            RiskAnswer("3-6 months", 2),
            RiskAnswer("6-12 months", 3),
            RiskAnswer("More than 12 months", 4),
        ),
    ),
    # ── Investment Timeframe ──
    RiskQuestion(
        id="timeframe_1",
        question="When do you expect to need to access most of your investments?",
        category="timeframe",
        answers=(
            RiskAnswer("Within 3 years", 1),
            RiskAnswer("3-5 years", 2),
            RiskAnswer("5-10 years", 3),
            RiskAnswer("More than 10 years", 4),
        ),
    ),
)

_QUESTIONS_BY_ID: dict[str, RiskQuestion] = {q.id: q for q in RISK_PROFILE_QUESTIONS}


def get_question(question_id: str) -> Optional[RiskQuestion]:
    return _QUESTIONS_BY_ID.get(question_id)


def question_ids(category: str) -> list[str]:
    """Question ids for a category, in catalog order."""
    return [q.id for q in RISK_PROFILE_QUESTIONS if q.category == category]
