"""Payment intake configuration with sensible defaults."""

import os
from dataclasses import dataclass, field, fields

from .models import PaymentProvider


@dataclass
class AmountThresholds:
    large_amount_min: int = 50_000
    very_large_amount_min: int = 100_000


@dataclass
class IdentityThresholds:
    suspicious_domains: tuple[str, ...] = (
        ".ru",
        ".tk",
        ".ml",
        "test.com",
        "10minutemail",
        "mailinator",
    )
    test_token_marker: str = "test"


@dataclass
class RuleWeights:
    large_amount: float = 0.3
    very_large_amount: float = 0.4
    suspicious_domain: float = 0.4
    invalid_email_format: float = 0.2
    test_token: float = 0.1


@dataclass
class ProviderBand:
    """A provider accepts scores strictly below ``max_risk_score``."""

    provider: PaymentProvider
    max_risk_score: float
    display_name: str = ""


def _default_bands() -> list[ProviderBand]:
    return [
        ProviderBand(PaymentProvider.STRIPE, 0.4, "Stripe"),
        ProviderBand(PaymentProvider.PAYPAL, 0.5, "PayPal"),
    ]


@dataclass
class RoutingSettings:
    bands: list[ProviderBand] = field(default_factory=_default_bands)
    success_rate: float = 0.9


@dataclass
class PaymentsConfig:
    amount: AmountThresholds = field(default_factory=AmountThresholds)
    identity: IdentityThresholds = field(default_factory=IdentityThresholds)
    weights: RuleWeights = field(default_factory=RuleWeights)
    routing: RoutingSettings = field(default_factory=RoutingSettings)

    @classmethod
    def from_env(cls) -> "PaymentsConfig":
        """Load config with env var overrides. Env vars use PAYMENTS_ prefix."""
        config = cls()

        # Amount overrides
        if v := os.getenv("PAYMENTS_LARGE_AMOUNT_MIN"):
            config.amount.large_amount_min = int(v)
        if v := os.getenv("PAYMENTS_VERY_LARGE_AMOUNT_MIN"):
            config.amount.very_large_amount_min = int(v)

        # Identity overrides (comma separated)
        if v := os.getenv("PAYMENTS_SUSPICIOUS_DOMAINS"):
            config.identity.suspicious_domains = tuple(
                d.strip().lower() for d in v.split(",") if d.strip()
            )

        # Rule weight overrides, e.g. PAYMENTS_TEST_TOKEN_WEIGHT
        for f in fields(config.weights):
            if v := os.getenv(f"PAYMENTS_{f.name.upper()}_WEIGHT"):
                setattr(config.weights, f.name, float(v))

        # Routing overrides
        for band in config.routing.bands:
            if v := os.getenv(f"PAYMENTS_{band.provider.value.upper()}_MAX_RISK_SCORE"):
                band.max_risk_score = float(v)
        if v := os.getenv("PAYMENTS_SUCCESS_RATE"):
            config.routing.success_rate = float(v)

        return config


# Module-level default instance
default_config = PaymentsConfig()
