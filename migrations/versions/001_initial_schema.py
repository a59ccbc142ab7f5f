"""
001 — Initial schema: risk_assessments table

Revision ID: 001
Create Date: 2026-10-17
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSON

revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.execute("CREATE SCHEMA IF NOT EXISTS advice_risk")

    op.create_table(
        "risk_assessments",
        sa.Column("assessment_id", sa.String(36), primary_key=True),
        sa.Column("client_id", sa.String(100), nullable=False),

        sa.Column("responses", JSON, nullable=False),

        sa.Column("model_version", sa.String(10), nullable=False),
        sa.Column("overall_score", sa.Float, nullable=False),
        sa.Column("risk_category", sa.String(30), nullable=False),
        sa.Column("capacity_category", sa.String(20), nullable=False),
        sa.Column("financial_metrics", JSON, nullable=False),
        sa.Column("financial_summary", JSON, nullable=False),
        sa.Column("calculated_scores", JSON, nullable=False),

        sa.Column("processing_time_ms", sa.Integer, nullable=False),
        sa.Column("evaluated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),

        schema="advice_risk",
    )

    op.create_index("ix_risk_assessments_client_id", "risk_assessments", ["client_id"], schema="advice_risk")
    op.create_index("ix_risk_assessments_risk_category", "risk_assessments", ["risk_category"], schema="advice_risk")


def downgrade() -> None:
    op.drop_table("risk_assessments", schema="advice_risk")
