"""Pydantic models for the payments domain."""

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

MAX_CHARGE_AMOUNT = 1_000_000


class PaymentProvider(StrEnum):
    STRIPE = "stripe"
    PAYPAL = "paypal"


class TransactionStatus(StrEnum):
    SUCCESS = "success"
    BLOCKED = "blocked"
    ERROR = "error"


class ChargeRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    amount: int = Field(ge=1, le=MAX_CHARGE_AMOUNT)
    currency: str = Field(min_length=3, max_length=3)
    source: str = Field(min_length=1, max_length=100)
    email: str = Field(max_length=254)

    @field_validator("currency")
    @classmethod
    def _currency_code(cls, v: str) -> str:
        if not (v.isascii() and v.isalpha()):
            raise ValueError("currency must be a 3-letter code")
        return v.upper()


class RiskAssessmentResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: float = Field(ge=0.0, le=1.0)
    triggered_rules: list[str] = []


class ChargeResponse(BaseModel):
    transaction_id: str
    provider: PaymentProvider | None
    status: TransactionStatus
    risk_score: float
    explanation: str

    @model_validator(mode="after")
    def _status_matches_provider(self) -> "ChargeResponse":
        blocked = self.status == TransactionStatus.BLOCKED
        if blocked != (self.provider is None):
            raise ValueError("blocked transactions must have no provider and vice versa")
        return self


class TransactionMetadata(BaseModel):
    ip_address: str | None = None
    user_agent: str | None = None


class Transaction(BaseModel):
    id: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    request: ChargeRequest
    response: ChargeResponse
    metadata: TransactionMetadata = Field(default_factory=TransactionMetadata)

    @property
    def status(self) -> TransactionStatus:
        return self.response.status


class TransactionList(BaseModel):
    count: int
    transactions: list[Transaction]
