"""Rule-based risk assessment engine."""

from collections.abc import Sequence

import structlog

from .config import PaymentsConfig
from .models import ChargeRequest, RiskAssessmentResult
from .rules import ALL_RULES, FraudRule, build_catalog

logger = structlog.get_logger()

MAX_RISK_SCORE = 1.0


class RiskAssessmentEngine:
    """Evaluates charge requests against the fraud rule catalog.

    Scoring is additive:
    1. Run every rule in catalog order
    2. Sum the weights of triggered rules
    3. Cap the total at 1.0 (weights may sum above it)

    Triggered rule names keep catalog order, not weight order.
    """

    def __init__(
        self,
        rules: Sequence[FraudRule] | None = None,
        config: PaymentsConfig | None = None,
    ) -> None:
        if rules is None:
            rules = build_catalog(config) if config is not None else ALL_RULES
        self._rules = tuple(rules)
        self._validate_catalog()
        logger.info("risk_engine_initialized", rule_count=len(self._rules))

    @property
    def rules(self) -> tuple[FraudRule, ...]:
        return self._rules

    def _validate_catalog(self) -> None:
        seen: set[str] = set()
        for rule in self._rules:
            if rule.rule_name in seen:
                raise ValueError(f"Duplicate rule name: {rule.rule_name}")
            if not 0.0 < rule.weight <= 1.0:
                raise ValueError(f"Rule {rule.rule_name!r} weight must be in (0, 1], got {rule.weight}")
            seen.add(rule.rule_name)

    def calculate_risk(self, request: ChargeRequest) -> RiskAssessmentResult:
        total = 0.0
        triggered: list[str] = []

        for rule in self._rules:
            if rule.evaluate(request):
                total += rule.weight
                triggered.append(rule.rule_name)

        score = round(min(total, MAX_RISK_SCORE), 4)

        logger.debug(
            "risk_assessed",
            amount=request.amount,
            currency=request.currency,
            score=score,
            raw_score=total,
            triggered_rules=triggered,
        )

        return RiskAssessmentResult(score=score, triggered_rules=triggered)
