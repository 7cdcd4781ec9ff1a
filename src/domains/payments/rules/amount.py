"""Amount-based fraud detection rules."""

from ..models import ChargeRequest
from .base import FraudRule


class LargeAmountRule(FraudRule):
    """Triggers for charges above the large-amount threshold."""

    rule_name = "Large Amount"

    @property
    def weight(self) -> float:
        return self._config.weights.large_amount

    def evaluate(self, request: ChargeRequest) -> bool:
        return request.amount > self._config.amount.large_amount_min


class VeryLargeAmountRule(FraudRule):
    """Triggers for charges above the very-large-amount threshold.

    Independent of LargeAmountRule: both fire for amounts above the higher
    threshold.
    """

    rule_name = "Very Large Amount"

    @property
    def weight(self) -> float:
        return self._config.weights.very_large_amount

    def evaluate(self, request: ChargeRequest) -> bool:
        return request.amount > self._config.amount.very_large_amount_min
