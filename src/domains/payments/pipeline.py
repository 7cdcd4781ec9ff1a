"""Charge pipeline: risk -> route -> simulate -> explain -> record."""

from collections.abc import Callable

import structlog

from .config import PaymentsConfig, default_config
from .explanations import DEFAULT_MODEL, ExplanationCache, ExplanationGenerator
from .formatting import generate_transaction_id
from .ledger import TransactionLedger
from .llm import DEFAULT_GEMINI_BASE_URL, GeminiClient
from .models import (
    ChargeRequest,
    ChargeResponse,
    Transaction,
    TransactionMetadata,
    TransactionStatus,
)
from .risk import RiskAssessmentEngine
from .router import ProviderRouter

logger = structlog.get_logger()


class PaymentPipeline:
    """Orchestrates the full decision pipeline for a charge request.

    The explanation call is the only suspension point. The ledger write
    happens after it resolves, so concurrent charges never wait on each
    other's explanation.
    """

    def __init__(
        self,
        risk_engine: RiskAssessmentEngine,
        router: ProviderRouter,
        explainer: ExplanationGenerator,
        ledger: TransactionLedger,
        id_factory: Callable[[], str] = generate_transaction_id,
    ) -> None:
        self._risk_engine = risk_engine
        self._router = router
        self._explainer = explainer
        self._ledger = ledger
        self._id_factory = id_factory

    @property
    def ledger(self) -> TransactionLedger:
        return self._ledger

    @property
    def explainer(self) -> ExplanationGenerator:
        return self._explainer

    async def process(
        self,
        request: ChargeRequest,
        metadata: TransactionMetadata | None = None,
    ) -> ChargeResponse:
        """Run the pipeline for ``request`` and record the resulting transaction."""
        # 1. Score
        assessment = self._risk_engine.calculate_risk(request)
        transaction_id = self._id_factory()

        # 2. Route and simulate the provider outcome
        provider = self._router.route(assessment.score)
        status = TransactionStatus.BLOCKED
        if provider is not None:
            succeeded = self._router.simulate_outcome(provider)
            status = TransactionStatus.SUCCESS if succeeded else TransactionStatus.ERROR

        # 3. Explain
        explanation = await self._explainer.explain(
            request, assessment.score, provider, status, assessment.triggered_rules
        )

        response = ChargeResponse(
            transaction_id=transaction_id,
            provider=provider,
            status=status,
            risk_score=assessment.score,
            explanation=explanation,
        )

        # 4. Record
        self._ledger.store(
            Transaction(
                id=transaction_id,
                request=request,
                response=response,
                metadata=metadata or TransactionMetadata(),
            )
        )

        logger.info(
            "transaction_processed",
            transaction_id=transaction_id,
            status=status.value,
            risk_score=assessment.score,
            provider=provider.value if provider else None,
            amount=request.amount,
            triggered_rules=assessment.triggered_rules,
        )

        return response


def build_pipeline(
    api_key: str | None = None,
    model: str = DEFAULT_MODEL,
    fallback_enabled: bool = True,
    timeout_seconds: float = 10.0,
    base_url: str = DEFAULT_GEMINI_BASE_URL,
    config: PaymentsConfig | None = None,
    ledger: TransactionLedger | None = None,
) -> PaymentPipeline:
    """Wire the default pipeline components.

    Without an API key the explanation generator runs template-only.
    """
    cfg = config or default_config
    client = (
        GeminiClient(api_key, base_url=base_url, timeout_seconds=timeout_seconds)
        if api_key
        else None
    )
    router = ProviderRouter(config=cfg)
    explainer = ExplanationGenerator(
        client=client,
        cache=ExplanationCache(),
        model=model,
        fallback_enabled=fallback_enabled,
        timeout_seconds=timeout_seconds,
        display_name=router.display_name,
    )
    return PaymentPipeline(
        risk_engine=RiskAssessmentEngine(config=cfg),
        router=router,
        explainer=explainer,
        ledger=ledger or TransactionLedger(),
    )
