"""Fraud detection rules package.

Exports ALL_RULES (the rule catalog in evaluation order) and individual rule
classes for direct use.
"""

from ..config import PaymentsConfig
from .amount import LargeAmountRule, VeryLargeAmountRule
from .base import FraudRule
from .identity import EMAIL_SHAPE, InvalidEmailFormatRule, SuspiciousDomainRule, TestTokenRule

RULE_CLASSES: tuple[type[FraudRule], ...] = (
    LargeAmountRule,
    VeryLargeAmountRule,
    SuspiciousDomainRule,
    InvalidEmailFormatRule,
    TestTokenRule,
)


def build_catalog(config: PaymentsConfig | None = None) -> list[FraudRule]:
    """Instantiate every rule, in catalog order, bound to ``config``."""
    return [rule_cls(config) for rule_cls in RULE_CLASSES]


# All rule instances in evaluation order
ALL_RULES: list[FraudRule] = build_catalog()

__all__ = [
    "ALL_RULES",
    "EMAIL_SHAPE",
    "FraudRule",
    "RULE_CLASSES",
    "build_catalog",
    "LargeAmountRule",
    "VeryLargeAmountRule",
    "SuspiciousDomainRule",
    "InvalidEmailFormatRule",
    "TestTokenRule",
]
