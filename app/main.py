"""
Advice Risk Engine — FastAPI Application Entry Point

POST /v1/risk/assess                 → synchronous risk profile scoring
GET  /v1/risk/assessments/{client}   → latest stored assessment
GET  /v1/risk/questionnaire          → fixed question catalog
GET  /v1/risk/health                 → health check
GET  /docs                           → OpenAPI / Swagger UI
"""
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from app.api.risk_endpoint import router as risk_router
from app.core.config import get_settings

structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.ConsoleRenderer() if get_settings().app_env == "development"
        else structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(get_settings().log_level),
)
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("risk_engine_starting", model_version=get_settings().scoring_model_version)
    yield
    logger.info("risk_engine_shutting_down")


app = FastAPI(
    title="Advice Risk Engine",
    description="Risk profile and capacity-for-loss scoring for financial advice clients",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS (adviser + client dashboards) ──
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_methods=["POST", "GET"],
    allow_headers=["*"],
)

# ── Prometheus metrics ──
metrics_app = make_asgi_app()
app.mount("/metrics", metrics_app)

# ── Routes ──
app.include_router(risk_router)


@app.get("/", include_in_schema=False)
async def root():
    return {
        "service": get_settings().app_name,
        "version": "1.0.0",
        "docs": "/docs",
        "assess": "POST /v1/risk/assess",
    }
