"""Natural-language explanations for charge decisions.

Explanations are produced by a generative-text backend when one is
configured, and by deterministic templates otherwise. Successful backend
responses are cached by a fingerprint of the decision inputs for the life of
the process.
"""

import asyncio
import hashlib
import json
import threading
from collections.abc import Callable, Sequence

import structlog

from .errors import ExplanationUnavailableError
from .formatting import format_amount
from .llm import GenerativeTextClient
from .models import ChargeRequest, PaymentProvider, TransactionStatus
from .router import ProviderRouter

logger = structlog.get_logger()

DEFAULT_MODEL = "gemini-2.0-flash"
RULE_DELIMITER = ", "


class ExplanationCache:
    """Process-lifetime explanation store keyed by fingerprint.

    The first value stored under a key wins; there is no eviction.
    """

    def __init__(self) -> None:
        self._entries: dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._entries.get(key)

    def put(self, key: str, value: str) -> str:
        """Store ``value`` unless ``key`` is present. Returns the stored value."""
        with self._lock:
            return self._entries.setdefault(key, value)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries


def fingerprint(
    request: ChargeRequest,
    score: float,
    provider: PaymentProvider | None,
    status: TransactionStatus,
    triggered_rules: Sequence[str],
) -> str:
    """Deterministic cache key for an explanation's inputs."""
    canonical = json.dumps(
        {
            "amount": request.amount,
            "currency": request.currency,
            "source": request.source,
            "email": request.email,
            "score": score,
            "provider": provider.value if provider else None,
            "status": status.value,
            "rules": sorted(triggered_rules),
        },
        sort_keys=True,
        separators=(",", ":"),
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


class ExplanationGenerator:
    """Explains a charge decision, preferring the generative backend.

    Provider labels come from ``display_name``, normally the bound
    ``ProviderRouter.display_name`` of the router that made the decision.
    """

    def __init__(
        self,
        client: GenerativeTextClient | None,
        cache: ExplanationCache,
        model: str = DEFAULT_MODEL,
        fallback_enabled: bool = True,
        timeout_seconds: float | None = 10.0,
        display_name: Callable[[PaymentProvider], str] | None = None,
    ) -> None:
        self._client = client
        self._cache = cache
        self._model = model
        self._fallback_enabled = fallback_enabled
        self._timeout = timeout_seconds
        self._display_name = display_name or ProviderRouter().display_name
        if client is None:
            logger.warning("explanation_client_not_configured", fallback="templated")
        else:
            logger.info("explanation_generator_initialized", model=model)

    @property
    def has_client(self) -> bool:
        return self._client is not None

    @property
    def cache(self) -> ExplanationCache:
        return self._cache

    async def explain(
        self,
        request: ChargeRequest,
        score: float,
        provider: PaymentProvider | None,
        status: TransactionStatus,
        triggered_rules: Sequence[str],
    ) -> str:
        key = fingerprint(request, score, provider, status, triggered_rules)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("explanation_cache_hit", fingerprint=key[:12])
            return cached

        if self._client is None:
            return self.templated(request, score, provider, status, triggered_rules)

        prompt = self.build_prompt(request, score, provider, status, triggered_rules)
        try:
            text = await asyncio.wait_for(
                self._client.generate(prompt, self._model), timeout=self._timeout
            )
        except Exception as exc:
            logger.error(
                "explanation_generation_failed",
                model=self._model,
                error=str(exc) or type(exc).__name__,
                fallback_enabled=self._fallback_enabled,
            )
            if not self._fallback_enabled:
                raise ExplanationUnavailableError(
                    "Explanation service unavailable and fallback disabled"
                ) from exc
            return self.templated(request, score, provider, status, triggered_rules)

        text = (text or "").strip()
        if not text:
            logger.info("explanation_empty_response", model=self._model, fallback="templated")
            return self.templated(request, score, provider, status, triggered_rules)

        logger.info(
            "explanation_generated",
            model=self._model,
            amount=request.amount,
            risk_score=score,
            status=status.value,
            response_length=len(text),
        )
        return self._cache.put(key, text)

    def _provider_label(self, provider: PaymentProvider | None) -> str:
        if provider is None:
            return "no provider"
        return self._display_name(provider)

    def build_prompt(
        self,
        request: ChargeRequest,
        score: float,
        provider: PaymentProvider | None,
        status: TransactionStatus,
        triggered_rules: Sequence[str],
    ) -> str:
        amount = format_amount(request.amount, request.currency)

        if status == TransactionStatus.BLOCKED:
            context = "blocked due to high risk"
        elif status == TransactionStatus.SUCCESS:
            context = f"approved and routed to {self._provider_label(provider)}"
        else:
            context = "failed processing"

        factors = RULE_DELIMITER.join(triggered_rules) if triggered_rules else "none detected"

        return (
            f"Explain payment decision: {amount} transaction {context}. "
            f"Risk score: {score}/1.0. Risk factors: {factors}. "
            "Provide professional merchant explanation in 2-3 sentences."
        )

    def templated(
        self,
        request: ChargeRequest,
        score: float,
        provider: PaymentProvider | None,
        status: TransactionStatus,
        triggered_rules: Sequence[str],
    ) -> str:
        """Deterministic explanation used when the generative path is unavailable."""
        amount = format_amount(request.amount, request.currency)
        rules = RULE_DELIMITER.join(triggered_rules)

        if status == TransactionStatus.BLOCKED:
            parts = [f"Transaction blocked due to elevated risk score of {score}."]
            if triggered_rules:
                parts.append(f"Risk factors detected: {rules}.")
            parts.append(
                f"The {amount} payment exceeded our risk tolerance thresholds. "
                "Please verify transaction details and consider alternative payment methods."
            )
            return " ".join(parts)

        if status == TransactionStatus.SUCCESS:
            if score <= 0.2:
                risk_level = "low"
            elif score <= 0.3:
                risk_level = "minimal"
            else:
                risk_level = "moderate"
            name = self._provider_label(provider)
            parts = [
                f"Payment of {amount} successfully processed through {name} "
                f"with {risk_level} risk assessment ({score})."
            ]
            if triggered_rules:
                parts.append(
                    f"Some risk indicators were present ({rules}) "
                    "but remained within acceptable parameters."
                )
            parts.append(f"Transaction routed to {name} based on our risk-optimized processing rules.")
            return " ".join(parts)

        return (
            f"Payment processing encountered an issue for the {amount} transaction. "
            f"Risk assessment: {score}. Our technical team has been notified. "
            "Please retry or contact support."
        )
