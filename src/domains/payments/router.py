"""Risk-band provider routing and simulated provider outcomes.

Each provider owns a maximum acceptable risk score. A charge goes to the
lowest-tier provider whose maximum strictly exceeds the score; when none
qualifies the charge is blocked. A score equal to a band's maximum falls
through to the next band.
"""

import math
import random
from collections.abc import Sequence

import structlog

from .config import PaymentsConfig, ProviderBand, default_config
from .models import PaymentProvider

logger = structlog.get_logger()


class ProviderRouter:
    """Maps risk scores to payment providers and simulates their outcome."""

    def __init__(
        self,
        bands: Sequence[ProviderBand] | None = None,
        success_rate: float | None = None,
        rng: random.Random | None = None,
        config: PaymentsConfig | None = None,
    ) -> None:
        cfg = config or default_config
        self._bands = tuple(bands if bands is not None else cfg.routing.bands)
        self._success_rate = cfg.routing.success_rate if success_rate is None else success_rate
        self._rng = rng or random.Random()

        previous = -math.inf
        for band in self._bands:
            if not band.max_risk_score > previous:
                raise ValueError(
                    f"Provider bands must be strictly ascending, got {band.max_risk_score} "
                    f"after {previous}"
                )
            previous = band.max_risk_score

    @property
    def bands(self) -> tuple[ProviderBand, ...]:
        return self._bands

    def route(self, score: float) -> PaymentProvider | None:
        """Return the provider for ``score``, or None to block.

        Non-finite scores never qualify for any band.
        """
        if math.isfinite(score):
            for band in self._bands:
                if score < band.max_risk_score:
                    return band.provider

        logger.info("charge_blocked_by_router", score=score)
        return None

    def simulate_outcome(
        self,
        provider: PaymentProvider,
        success_probability: float | None = None,
    ) -> bool:
        """Simulate the provider accepting or declining the charge.

        ``success_probability`` is clamped to [0, 1]; one uniform draw decides.
        """
        p = self._success_rate if success_probability is None else success_probability
        p = max(0.0, min(1.0, p))
        succeeded = self._rng.random() < p
        logger.debug(
            "provider_outcome_simulated",
            provider=provider.value,
            success_probability=p,
            succeeded=succeeded,
        )
        return succeeded

    def display_name(self, provider: PaymentProvider) -> str:
        for band in self._bands:
            if band.provider == provider and band.display_name:
                return band.display_name
        return provider.value.upper()
