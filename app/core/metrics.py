"""
Prometheus collectors — exposed through the /metrics ASGI app mounted in main.py.
"""
from prometheus_client import Counter, Histogram

RISK_ASSESSMENTS_TOTAL = Counter(
    "risk_assessments_total",
    "Completed risk assessments by resulting risk category",
    ["risk_category"],
)

RISK_ASSESSMENT_DURATION = Histogram(
    "risk_assessment_duration_seconds",
    "Time spent deriving metrics and scoring one assessment",
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1),
)
