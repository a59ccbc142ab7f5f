"""
Persistent assessment table — the latest risk assessment per client.
Schema: advice_risk.risk_assessments
"""
from datetime import datetime, timezone
from sqlalchemy import Column, String, Float, Integer, DateTime, JSON
from sqlalchemy.orm import DeclarativeBase

SCHEMA = "advice_risk"


class Base(DeclarativeBase):
    pass


class RiskAssessment(Base):
    __tablename__ = "risk_assessments"
    __table_args__ = {"schema": SCHEMA}

    assessment_id = Column(String(36), primary_key=True)
    client_id = Column(String(100), nullable=False, index=True)

    # ── Questionnaire answers (source of truth for this assessment) ──
    responses = Column(JSON, nullable=False)

    # ── Derived ──
    model_version = Column(String(10), nullable=False)
    overall_score = Column(Float, nullable=False)
    risk_category = Column(String(30), nullable=False, index=True)
    capacity_category = Column(String(20), nullable=False)
    financial_metrics = Column(JSON, nullable=False)
    financial_summary = Column(JSON, nullable=False)
    calculated_scores = Column(JSON, nullable=False)

    # ── Metadata ──
    processing_time_ms = Column(Integer, nullable=False)
    evaluated_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)

    def __repr__(self):
        return f"<RiskAssessment {self.assessment_id} client={self.client_id} category={self.risk_category}>"
