"""Shared test fixtures for charge gateway tests."""

import os
import random
from unittest.mock import AsyncMock, MagicMock

import pytest

# Keep tests off the network regardless of the developer environment
os.environ["GEMINI_API_KEY"] = ""

from src.domains.payments.explanations import ExplanationCache, ExplanationGenerator  # noqa: E402
from src.domains.payments.ledger import TransactionLedger  # noqa: E402
from src.domains.payments.models import ChargeRequest  # noqa: E402
from src.domains.payments.pipeline import PaymentPipeline  # noqa: E402
from src.domains.payments.risk import RiskAssessmentEngine  # noqa: E402
from src.domains.payments.router import ProviderRouter  # noqa: E402


def make_charge_request(**kwargs) -> ChargeRequest:
    defaults = {
        "amount": 1000,
        "currency": "USD",
        "source": "card_123",
        "email": "user@example.com",
    }
    defaults.update(kwargs)
    return ChargeRequest(**defaults)


def fixed_rng(value: float) -> MagicMock:
    """A random.Random stand-in whose draws always return ``value``."""
    rng = MagicMock(spec=random.Random)
    rng.random.return_value = value
    return rng


def sequential_ids(prefix: str = "txn_test"):
    counter = 0

    def _next() -> str:
        nonlocal counter
        counter += 1
        return f"{prefix}{counter:05d}"

    return _next


@pytest.fixture
def charge_request() -> ChargeRequest:
    return make_charge_request()


@pytest.fixture
def mock_text_client():
    client = AsyncMock()
    client.generate = AsyncMock(return_value="Generated explanation.")
    return client


@pytest.fixture
def ledger() -> TransactionLedger:
    return TransactionLedger()


@pytest.fixture
def approving_pipeline(ledger) -> PaymentPipeline:
    """Pipeline whose provider always succeeds and explains with templates."""
    return PaymentPipeline(
        risk_engine=RiskAssessmentEngine(),
        router=ProviderRouter(rng=fixed_rng(0.0)),
        explainer=ExplanationGenerator(client=None, cache=ExplanationCache()),
        ledger=ledger,
        id_factory=sequential_ids(),
    )


@pytest.fixture
def failing_pipeline(ledger) -> PaymentPipeline:
    """Pipeline whose provider always declines."""
    return PaymentPipeline(
        risk_engine=RiskAssessmentEngine(),
        router=ProviderRouter(rng=fixed_rng(0.99)),
        explainer=ExplanationGenerator(client=None, cache=ExplanationCache()),
        ledger=ledger,
        id_factory=sequential_ids(),
    )
