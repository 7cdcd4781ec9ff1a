"""Payment intake domain."""

from .config import PaymentsConfig, ProviderBand, default_config
from .errors import (
    ExplanationUnavailableError,
    GenerativeTextError,
    InvalidCurrencyError,
    PaymentsError,
    TransactionNotFoundError,
)
from .explanations import ExplanationCache, ExplanationGenerator, fingerprint
from .formatting import format_amount, generate_transaction_id
from .ledger import TransactionLedger
from .llm import GeminiClient, GenerativeTextClient
from .models import (
    ChargeRequest,
    ChargeResponse,
    PaymentProvider,
    RiskAssessmentResult,
    Transaction,
    TransactionList,
    TransactionMetadata,
    TransactionStatus,
)
from .pipeline import PaymentPipeline, build_pipeline
from .risk import RiskAssessmentEngine
from .router import ProviderRouter
from .rules import ALL_RULES, FraudRule

__all__ = [
    "ALL_RULES",
    "ChargeRequest",
    "ChargeResponse",
    "ExplanationCache",
    "ExplanationGenerator",
    "ExplanationUnavailableError",
    "FraudRule",
    "GeminiClient",
    "GenerativeTextClient",
    "GenerativeTextError",
    "InvalidCurrencyError",
    "PaymentPipeline",
    "PaymentProvider",
    "PaymentsConfig",
    "PaymentsError",
    "ProviderBand",
    "ProviderRouter",
    "RiskAssessmentEngine",
    "RiskAssessmentResult",
    "Transaction",
    "TransactionLedger",
    "TransactionList",
    "TransactionMetadata",
    "TransactionNotFoundError",
    "TransactionStatus",
    "build_pipeline",
    "default_config",
    "fingerprint",
    "format_amount",
    "generate_transaction_id",
]
