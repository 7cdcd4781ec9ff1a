"""Payer identity rules: email and payment source checks."""

import re

from ..models import ChargeRequest
from .base import FraudRule

# local@domain.tld with no whitespace and a single "@"
EMAIL_SHAPE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


class SuspiciousDomainRule(FraudRule):
    """Triggers when the email contains a disposable or high-risk domain."""

    rule_name = "Suspicious Domain"

    @property
    def weight(self) -> float:
        return self._config.weights.suspicious_domain

    def evaluate(self, request: ChargeRequest) -> bool:
        email = request.email.lower()
        return any(domain in email for domain in self._config.identity.suspicious_domains)


class InvalidEmailFormatRule(FraudRule):
    rule_name = "Invalid Email Format"

    @property
    def weight(self) -> float:
        return self._config.weights.invalid_email_format

    def evaluate(self, request: ChargeRequest) -> bool:
        return EMAIL_SHAPE.fullmatch(request.email) is None


class TestTokenRule(FraudRule):
    """Triggers for payment sources carrying a test marker (case-sensitive)."""

    __test__ = False  # not a pytest class

    rule_name = "Test Token"

    @property
    def weight(self) -> float:
        return self._config.weights.test_token

    def evaluate(self, request: ChargeRequest) -> bool:
        return self._config.identity.test_token_marker in request.source
