"""
Integration tests for the full scoring engine.
Tests end-to-end scoring with realistic client scenarios.
"""
import math
from datetime import date, datetime, timezone

import pytest

from app.schemas.risk_request import (
    AssetRecord, ExpenditureRecord, GoalRecord, IncomeRecord, LiabilityRecord,
    RiskAssessmentRequest,
)
from app.schemas.risk_response import CapacityCategory, RiskCategory
from app.scoring.engine import (
    ASSET_ALLOCATIONS, SCORE_WEIGHTS, calculate_risk_scores, evaluate, risk_category,
)
from app.services.financial_metrics import FinancialMetrics

QUESTION_IDS = [
    "knowledge_1", "knowledge_2", "attitude_1", "attitude_2",
    "capacity_1", "capacity_2", "timeframe_1",
]


def _answers(score: int) -> dict[str, int]:
    return {qid: score for qid in QUESTION_IDS}


def _make_metrics(**overrides) -> FinancialMetrics:
    """Defaults give a capacity-for-loss score of 4.0."""
    kwargs = {
        "monthly_income": 5_000.0,
        "monthly_expenses": 3_000.0,
        "total_assets": 18_000.0,
        "total_liabilities": 0.0,
        "liquid_assets": 18_000.0,
        "net_worth": 18_000.0,
        "annual_debt_service": 0.0,
        "total_income": 60_000.0,
        "age": 0,
        "years_to_retirement": None,
    }
    kwargs.update(overrides)
    return FinancialMetrics(**kwargs)


def _weak_metrics() -> FinancialMetrics:
    """Capacity-for-loss score of 1.0."""
    return _make_metrics(
        monthly_income=1_000.0,
        monthly_expenses=1_000.0,
        liquid_assets=0.0,
        total_assets=0.0,
        total_liabilities=50_000.0,
    )


def _make_request(**overrides) -> RiskAssessmentRequest:
    """Baseline client from the worked example, all answers = 3."""
    kwargs = {
        "client_id": "CLIENT-001",
        "responses": _answers(3),
        "incomes": [IncomeRecord(type="Salary", amount=5_000.0, frequency="Monthly")],
        "expenditures": [ExpenditureRecord(category="Living", amount=3_000.0, frequency="Monthly")],
        "assets": [AssetRecord(type="Savings", value=18_000.0)],
        "liabilities": [],
        "goals": [],
    }
    kwargs.update(overrides)
    return RiskAssessmentRequest(**kwargs)


class TestRiskCategory:
    @pytest.mark.parametrize("score,expected", [
        (1.0, RiskCategory.VERY_CONSERVATIVE),
        (1.5, RiskCategory.VERY_CONSERVATIVE),
        (1.5000001, RiskCategory.CONSERVATIVE),
        (2.0, RiskCategory.CONSERVATIVE),
        (2.5, RiskCategory.MODERATE_CONSERVATIVE),
        (2.5000001, RiskCategory.MODERATE),
        (3.0, RiskCategory.MODERATE),
        (3.5, RiskCategory.MODERATE_AGGRESSIVE),
        (3.5000001, RiskCategory.AGGRESSIVE),
        (4.0, RiskCategory.AGGRESSIVE),
    ])
    def test_boundaries(self, score, expected):
        assert risk_category(score) == expected

    def test_nan_falls_through_to_aggressive(self):
        assert risk_category(math.nan) == RiskCategory.AGGRESSIVE


class TestWeights:
    def test_weights_sum_to_one(self):
        assert sum(SCORE_WEIGHTS.values()) == pytest.approx(1.0)

    def test_allocations_cover_every_category(self):
        assert set(ASSET_ALLOCATIONS) == set(RiskCategory)
        for allocation in ASSET_ALLOCATIONS.values():
            assert allocation.equities + allocation.bonds + allocation.cash + allocation.other == 100

    def test_very_conservative_allocation(self):
        allocation = ASSET_ALLOCATIONS[RiskCategory.VERY_CONSERVATIVE]
        assert (allocation.equities, allocation.bonds, allocation.cash, allocation.other) == (20, 60, 20, 0)


class TestCalculateRiskScores:
    def test_all_maximum_is_aggressive(self):
        scores = calculate_risk_scores(_answers(4), _make_metrics())

        assert scores.knowledge_score == 4.0
        assert scores.attitude_score == 4.0
        assert scores.capacity_score == 4.0
        assert scores.timeframe_score == 4.0
        assert scores.capacity_for_loss.score == 4.0
        assert scores.overall_score == pytest.approx(4.0)
        assert scores.risk_category == RiskCategory.AGGRESSIVE
        assert scores.recommended_asset_allocation == ASSET_ALLOCATIONS[RiskCategory.AGGRESSIVE]

    def test_all_minimum_is_very_conservative(self):
        scores = calculate_risk_scores(_answers(1), _weak_metrics())

        assert scores.capacity_for_loss.score == 1.0
        assert scores.overall_score == pytest.approx(1.0)
        assert scores.risk_category == RiskCategory.VERY_CONSERVATIVE

    def test_weighted_mix_is_moderate(self):
        responses = {
            "knowledge_1": 2, "knowledge_2": 3,  # 2.5
            "attitude_1": 3, "attitude_2": 3,    # 3.0
            "capacity_1": 2, "capacity_2": 2,    # 2.0
            "timeframe_1": 3,                    # 3.0
        }
        metrics = _make_metrics(
            monthly_expenses=4_000.0, liquid_assets=12_000.0,
            total_liabilities=25_000.0, total_assets=50_000.0,
        )  # capacity for loss 2.5
        scores = calculate_risk_scores(responses, metrics)

        assert scores.knowledge_score == 2.5
        assert scores.timeframe_score == 3.0
        # 0.5 + 0.75 + 0.4 + 0.45 + 0.5
        assert scores.overall_score == pytest.approx(2.6)
        assert scores.risk_category == RiskCategory.MODERATE

    def test_missing_answers_count_as_zero(self):
        scores = calculate_risk_scores({"knowledge_1": 4}, _make_metrics())

        assert scores.knowledge_score == 2.0
        assert scores.attitude_score == 0.0
        assert scores.timeframe_score == 0.0
        # 2.0*0.20 + 4.0*0.20
        assert scores.overall_score == pytest.approx(1.2)
        assert scores.risk_category == RiskCategory.VERY_CONSERVATIVE

    def test_string_answers_accepted(self):
        scores = calculate_risk_scores({"knowledge_1": "3", "knowledge_2": "4"}, _make_metrics())
        assert scores.knowledge_score == 3.5

    def test_non_numeric_answers_count_as_zero(self):
        scores = calculate_risk_scores({"attitude_1": "abc", "attitude_2": None}, _make_metrics())
        assert scores.attitude_score == 0.0

    @pytest.mark.parametrize("raw", ["inf", "-Infinity", "nan", "1_0", float("inf")])
    def test_non_finite_or_underscored_answers_count_as_zero(self, raw):
        scores = calculate_risk_scores({**_answers(4), "knowledge_1": raw}, _make_metrics())
        assert scores.knowledge_score == 2.0
        assert math.isfinite(scores.overall_score)

    def test_unknown_question_ids_ignored(self):
        answers = _answers(2)
        answers["bonus_question"] = 4
        assert calculate_risk_scores(answers, _make_metrics()) == calculate_risk_scores(_answers(2), _make_metrics())

    def test_sub_scores_within_bounds(self):
        for responses in (_answers(1), _answers(2), _answers(4), {**_answers(1), "attitude_2": 4}):
            scores = calculate_risk_scores(responses, _make_metrics())
            for value in (
                scores.knowledge_score, scores.attitude_score, scores.capacity_score,
                scores.timeframe_score, scores.overall_score,
            ):
                assert 1.0 <= value <= 4.0


class TestEngineEndToEnd:
    def test_worked_example(self):
        """5k income, 3k spend, 18k savings, no debt → capacity High, all-3 answers → Moderate Aggressive."""
        resp = evaluate(_make_request())

        metrics = resp.financial_metrics
        assert metrics.monthly_income == 5_000.0
        assert metrics.monthly_expenses == 3_000.0
        assert metrics.liquid_assets == 18_000.0

        cfl = resp.scores.capacity_for_loss
        assert cfl.score == 4.0
        assert cfl.category == CapacityCategory.HIGH
        assert [f.score for f in cfl.factors] == [4, 4, 4, 4]

        # 3 * 0.80 + 4 * 0.20
        assert resp.scores.overall_score == pytest.approx(3.2)
        assert resp.scores.risk_category == RiskCategory.MODERATE_AGGRESSIVE

    def test_client_id_and_responses_echoed(self):
        resp = evaluate(_make_request())
        assert resp.client_id == "CLIENT-001"
        assert resp.responses == _answers(3)
        assert resp.assessment_id

    def test_reference_date_drives_age(self):
        evaluated_at = datetime(2026, 10, 17, tzinfo=timezone.utc)
        resp = evaluate(_make_request(date_of_birth=date(1980, 5, 15)), reference_date=evaluated_at)

        assert resp.financial_metrics.age == 46
        assert resp.evaluated_at == evaluated_at

    def test_financial_summary(self):
        resp = evaluate(_make_request())

        summary = resp.financial_summary
        assert summary.annual_income == 60_000.0
        assert summary.annual_expenditure == 36_000.0
        assert summary.net_worth == 18_000.0
        assert summary.net_worth_display == "£18,000.00"
        assert summary.expenditure_to_income_pct == 60.0
        assert summary.years_until_retirement is None

    def test_years_until_retirement_with_known_age(self):
        evaluated_at = datetime(2026, 10, 17, tzinfo=timezone.utc)
        resp = evaluate(_make_request(date_of_birth=date(1980, 5, 15)), reference_date=evaluated_at)
        assert resp.financial_summary.years_until_retirement == 21

    def test_summary_without_income(self):
        resp = evaluate(_make_request(incomes=[]))
        assert resp.financial_summary.expenditure_to_income_pct == 0.0

    def test_retirement_goal_reported(self):
        resp = evaluate(_make_request(goals=[GoalRecord(goal="Retirement", target_amount=500_000, time_horizon=25)]))
        assert resp.financial_metrics.years_to_retirement == 25

    def test_empty_records_never_raise(self):
        resp = evaluate(_make_request(incomes=[], expenditures=[], assets=[]))

        cfl = resp.scores.capacity_for_loss
        assert cfl.score == 1.0
        assert cfl.category == CapacityCategory.VERY_LOW
        # Non-finite ratios are reported as null
        assert [f.ratio for f in cfl.factors] == [None, None, 0.0, None]

    def test_mortgage_feeds_debt_service_metric(self):
        resp = evaluate(_make_request(liabilities=[
            LiabilityRecord(type="Mortgage", amount=200_000, interest_rate=4, term=25),
        ]))
        assert resp.financial_metrics.annual_debt_service == pytest.approx(12_802.39, abs=0.5)
        assert resp.financial_metrics.net_worth == -182_000.0

    def test_processing_time_reasonable(self):
        """Scoring should complete in under 50ms (no I/O)."""
        assert evaluate(_make_request()).processing_time_ms < 50
