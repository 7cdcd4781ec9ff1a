"""Charge intake and transaction lookup endpoints."""

import structlog
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from src.config import settings
from src.domains.payments.config import PaymentsConfig
from src.domains.payments.errors import TransactionNotFoundError
from src.domains.payments.models import (
    ChargeRequest,
    ChargeResponse,
    Transaction,
    TransactionList,
    TransactionMetadata,
    TransactionStatus,
)
from src.domains.payments.pipeline import PaymentPipeline, build_pipeline

logger = structlog.get_logger()
router = APIRouter(tags=["payments"])

_STATUS_CODES = {
    TransactionStatus.SUCCESS: 200,
    TransactionStatus.BLOCKED: 403,
    TransactionStatus.ERROR: 500,
}

_pipeline: PaymentPipeline | None = None


def get_payment_pipeline() -> PaymentPipeline:
    """Get or create the process-wide payment pipeline."""
    global _pipeline
    if _pipeline is None:
        _pipeline = build_pipeline(
            api_key=settings.gemini_api_key,
            model=settings.explanation_model,
            fallback_enabled=settings.explanation_fallback_enabled,
            timeout_seconds=settings.explanation_timeout_seconds,
            base_url=settings.gemini_base_url,
            config=PaymentsConfig.from_env(),
        )
    return _pipeline


@router.post(
    "/charge",
    response_model=ChargeResponse,
    responses={403: {"model": ChargeResponse}, 500: {"model": ChargeResponse}},
)
async def charge(
    charge_request: ChargeRequest,
    request: Request,
    pipeline: PaymentPipeline = Depends(get_payment_pipeline),  # noqa: B008
) -> JSONResponse:
    metadata = TransactionMetadata(
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    response = await pipeline.process(charge_request, metadata)
    return JSONResponse(
        status_code=_STATUS_CODES[response.status],
        content=response.model_dump(mode="json"),
    )


@router.get("/transactions", response_model=TransactionList)
async def list_transactions(
    status: TransactionStatus | None = Query(None, description="Filter by transaction status"),
    pipeline: PaymentPipeline = Depends(get_payment_pipeline),  # noqa: B008
) -> TransactionList:
    ledger = pipeline.ledger
    transactions = ledger.get_all() if status is None else ledger.get_by_status(status)
    return TransactionList(count=len(transactions), transactions=transactions)


@router.get("/transaction/{transaction_id}", response_model=Transaction)
async def get_transaction(
    transaction_id: str,
    pipeline: PaymentPipeline = Depends(get_payment_pipeline),  # noqa: B008
) -> Transaction:
    transaction = pipeline.ledger.get_by_id(transaction_id)
    if transaction is None:
        logger.info("transaction_lookup_miss", transaction_id=transaction_id)
        raise TransactionNotFoundError(transaction_id)
    return transaction
