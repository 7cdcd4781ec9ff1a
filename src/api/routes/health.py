"""Health and readiness endpoints."""

from fastapi import APIRouter, Depends

from src.config import settings
from src.domains.payments.pipeline import PaymentPipeline

from .payments import get_payment_pipeline

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    from src.main import get_uptime

    return {
        "status": "healthy",
        "version": settings.app_version,
        "uptime_seconds": get_uptime(),
    }


@router.get("/ready")
async def ready(
    pipeline: PaymentPipeline = Depends(get_payment_pipeline),  # noqa: B008
) -> dict:
    return {
        "status": "ready",
        "transactions": pipeline.ledger.count(),
        "explanation_backend": "generative" if pipeline.explainer.has_client else "templated",
        "cached_explanations": len(pipeline.explainer.cache),
    }
