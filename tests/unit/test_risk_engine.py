"""Unit tests for the risk assessment engine."""

import pytest

from src.domains.payments.models import ChargeRequest
from src.domains.payments.risk import RiskAssessmentEngine
from src.domains.payments.rules import FraudRule
from tests.conftest import make_charge_request


class _AlwaysRule(FraudRule):
    def __init__(self, name: str, weight: float) -> None:
        super().__init__()
        self.rule_name = name
        self._weight = weight

    @property
    def weight(self) -> float:
        return self._weight

    def evaluate(self, request: ChargeRequest) -> bool:
        return True


class TestRiskAssessmentEngine:
    engine = RiskAssessmentEngine()

    def test_clean_request_scores_zero(self):
        result = self.engine.calculate_risk(make_charge_request(amount=50_000))
        assert result.score == 0.0
        assert result.triggered_rules == []

    def test_large_amount_only(self):
        result = self.engine.calculate_risk(
            make_charge_request(amount=60_000, source="card_123", email="user@example.com")
        )
        assert result.triggered_rules == ["Large Amount"]
        assert result.score == 0.3

    def test_stacked_rules_keep_catalog_order(self):
        result = self.engine.calculate_risk(
            make_charge_request(amount=150_000, source="tok_test", email="user@mailinator.com")
        )
        assert result.triggered_rules == [
            "Large Amount",
            "Very Large Amount",
            "Suspicious Domain",
            "Test Token",
        ]
        # 0.3 + 0.4 + 0.4 + 0.1 exceeds 1.0
        assert result.score == 1.0

    def test_raw_sum_below_cap(self):
        result = self.engine.calculate_risk(
            make_charge_request(amount=1_000, source="tok_test", email="bad@test.com")
        )
        assert result.triggered_rules == ["Suspicious Domain", "Test Token"]
        assert result.score == 0.5

    def test_trailing_newline_email_is_malformed(self):
        result = self.engine.calculate_risk(make_charge_request(email="user@example.com\n"))
        assert result.triggered_rules == ["Invalid Email Format"]
        assert result.score == 0.2

    def test_email_and_token_sum_is_exact(self):
        # 0.2 + 0.1 accumulates to 0.30000000000000004 before rounding
        result = self.engine.calculate_risk(
            make_charge_request(source="tok_test", email="not-an-email")
        )
        assert result.triggered_rules == ["Invalid Email Format", "Test Token"]
        assert result.score == 0.3

    def test_point_nine_is_exact(self):
        engine = RiskAssessmentEngine(
            rules=[_AlwaysRule("a", 0.4), _AlwaysRule("b", 0.4), _AlwaysRule("c", 0.1)]
        )
        assert engine.calculate_risk(make_charge_request()).score == 0.9

    def test_score_capped_at_one(self):
        engine = RiskAssessmentEngine(rules=[_AlwaysRule(str(i), 1.0) for i in range(5)])
        result = engine.calculate_risk(make_charge_request())
        assert result.score == 1.0
        assert len(result.triggered_rules) == 5

    def test_monotonic_in_triggered_rules(self):
        requests = [
            make_charge_request(),
            make_charge_request(amount=60_000),
            make_charge_request(amount=60_000, source="test"),
            make_charge_request(amount=60_000, source="test", email="x@mail.ru"),
            make_charge_request(amount=160_000, source="test", email="x@mail.ru"),
        ]
        scores = [self.engine.calculate_risk(r).score for r in requests]
        assert scores == sorted(scores)
        assert all(0.0 <= s <= 1.0 for s in scores)

    def test_duplicate_rule_names_rejected(self):
        with pytest.raises(ValueError, match="Duplicate rule name"):
            RiskAssessmentEngine(rules=[_AlwaysRule("x", 0.1), _AlwaysRule("x", 0.2)])

    @pytest.mark.parametrize("weight", [0.0, -0.1, 1.5])
    def test_weight_out_of_range_rejected(self, weight):
        with pytest.raises(ValueError, match="weight"):
            RiskAssessmentEngine(rules=[_AlwaysRule("x", weight)])
