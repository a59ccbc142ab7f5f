"""
Assessment persistence.

One live assessment per client: submitting a new questionnaire removes
the client's previous rows before inserting the new one.
"""
from __future__ import annotations

from typing import Optional

import structlog
from fastapi import Depends
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.database import get_db
from app.models.risk_assessment import RiskAssessment
from app.schemas.risk_response import RiskAssessmentResponse

logger = structlog.get_logger()


def to_row(response: RiskAssessmentResponse) -> RiskAssessment:
    return RiskAssessment(
        assessment_id=response.assessment_id,
        client_id=response.client_id,
        responses=response.responses,
        model_version=response.model_version,
        overall_score=response.scores.overall_score,
        risk_category=response.scores.risk_category.value,
        capacity_category=response.scores.capacity_for_loss.category.value,
        financial_metrics=response.financial_metrics.model_dump(mode="json"),
        financial_summary=response.financial_summary.model_dump(mode="json"),
        calculated_scores=response.scores.model_dump(mode="json"),
        processing_time_ms=response.processing_time_ms,
        evaluated_at=response.evaluated_at,
    )


def from_row(row: RiskAssessment) -> RiskAssessmentResponse:
    return RiskAssessmentResponse(
        client_id=row.client_id,
        assessment_id=row.assessment_id,
        model_version=row.model_version,
        responses=row.responses,
        financial_metrics=row.financial_metrics,
        financial_summary=row.financial_summary,
        scores=row.calculated_scores,
        evaluated_at=row.evaluated_at,
        processing_time_ms=row.processing_time_ms,
    )


class AssessmentStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def replace(self, response: RiskAssessmentResponse) -> None:
        try:
            await self.db.execute(
                delete(RiskAssessment).where(RiskAssessment.client_id == response.client_id)
            )
            self.db.add(to_row(response))
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error("persist_failed", assessment_id=response.assessment_id, error=str(e))
            raise

        logger.info(
            "risk_assessment_persisted",
            assessment_id=response.assessment_id,
            client_id=response.client_id,
        )

    async def latest(self, client_id: str) -> Optional[RiskAssessmentResponse]:
        stmt = (
            select(RiskAssessment)
            .where(RiskAssessment.client_id == client_id)
            .order_by(RiskAssessment.created_at.desc())
            .limit(1)
        )
        result = await self.db.execute(stmt)
        row = result.scalar_one_or_none()
        return from_row(row) if row else None


async def get_assessment_store(db: AsyncSession = Depends(get_db)) -> AssessmentStore:
    return AssessmentStore(db)
