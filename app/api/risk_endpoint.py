"""
POST /v1/risk/assess

Called by the client questionnaire form on submit.
Synchronous request → metrics → score → response.
Replaces the client's stored assessment (unless persistence is disabled).
"""
from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException

from app.core.config import Settings, get_settings
from app.schemas.risk_request import RiskAssessmentRequest
from app.schemas.risk_response import AnswerOption, QuestionResponse, RiskAssessmentResponse
from app.scoring.engine import evaluate
from app.scoring.questionnaire import RISK_PROFILE_QUESTIONS
from app.services.assessment_store import AssessmentStore, get_assessment_store

logger = structlog.get_logger()
router = APIRouter(prefix="/v1/risk", tags=["risk"])


@router.post(
    "/assess",
    response_model=RiskAssessmentResponse,
    summary="Score a client's risk profile",
    description="Receives questionnaire answers plus raw financial records, returns risk category + breakdown.",
)
async def assess_risk(
    request: RiskAssessmentRequest,
    settings: Settings = Depends(get_settings),
    store: AssessmentStore = Depends(get_assessment_store),
) -> RiskAssessmentResponse:

    logger.info(
        "risk_assessment_started",
        client_id=request.client_id,
        answered=len(request.responses),
        incomes=len(request.incomes),
        expenditures=len(request.expenditures),
        assets=len(request.assets),
        liabilities=len(request.liabilities),
        goals=len(request.goals),
    )

    # ── Score ──
    try:
        response = evaluate(request)
    except Exception as e:
        logger.error("scoring_failed", client_id=request.client_id, error=str(e))
        raise HTTPException(status_code=500, detail=f"Scoring engine error: {e}")

    # ── Persist ──
    if settings.persist_assessments:
        await store.replace(response)

    return response


@router.get(
    "/assessments/{client_id}",
    response_model=RiskAssessmentResponse,
    summary="Latest stored assessment for a client",
)
async def latest_assessment(
    client_id: str,
    store: AssessmentStore = Depends(get_assessment_store),
) -> RiskAssessmentResponse:
    assessment = await store.latest(client_id)
    if assessment is None:
        raise HTTPException(status_code=404, detail=f"No risk assessment found for client {client_id}")
    return assessment


@router.get("/questionnaire", response_model=list[QuestionResponse])
async def questionnaire() -> list[QuestionResponse]:
    return [
        QuestionResponse(
            id=q.id,
            question=q.question,
            category=q.category,
            answers=[AnswerOption(text=a.text, score=a.score) for a in q.answers],
        )
        for q in RISK_PROFILE_QUESTIONS
    ]


@router.get("/health", tags=["health"])
async def health(settings: Settings = Depends(get_settings)):
    return {"status": "ok", "service": settings.app_name, "model_version": settings.scoring_model_version}
