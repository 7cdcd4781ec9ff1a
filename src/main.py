"""FastAPI application entry point for the charge gateway."""

import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from src.api.middleware.error_handler import global_exception_handler, validation_exception_handler
from src.api.middleware.logging import StructuredLoggingMiddleware
from src.api.routes.health import router as health_router
from src.api.routes.payments import get_payment_pipeline
from src.api.routes.payments import router as payments_router
from src.config import settings
from src.domains.payments.errors import PaymentsError
from src.shared.logging import setup_logging

logger = structlog.get_logger()

# Track app start time for uptime calculation
APP_START_TIME: float = 0.0


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: startup and shutdown logic."""
    global APP_START_TIME
    APP_START_TIME = time.time()
    setup_logging(settings.log_level, json_logs=not settings.debug)

    logger.info(
        "gateway_starting",
        app_name=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        explanation_model=settings.explanation_model,
        generative_explanations=bool(settings.gemini_api_key),
    )

    # Build the pipeline eagerly so configuration errors surface at startup
    get_payment_pipeline()

    yield

    logger.info("gateway_shutting_down")


app = FastAPI(
    title="Charge Gateway",
    description="Payment intake with rule-based risk scoring, provider routing and explanations",
    version=settings.app_version,
    lifespan=lifespan,
)

# CORS for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.debug else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Structured logging middleware
app.add_middleware(StructuredLoggingMiddleware)

# Exception handlers
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(PaymentsError, global_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# Register routers
app.include_router(health_router)
app.include_router(payments_router)


def get_uptime() -> int:
    """Get application uptime in seconds."""
    if APP_START_TIME == 0.0:
        return 0
    return int(time.time() - APP_START_TIME)


def run() -> None:
    import uvicorn

    uvicorn.run("src.main:app", host=settings.host, port=settings.port, log_config=None)
