"""Unit tests for the fraud rule catalog."""

import pytest

from src.domains.payments.config import PaymentsConfig
from src.domains.payments.rules import (
    ALL_RULES,
    InvalidEmailFormatRule,
    LargeAmountRule,
    SuspiciousDomainRule,
    TestTokenRule,
    VeryLargeAmountRule,
    build_catalog,
)
from tests.conftest import make_charge_request


class TestCatalog:
    def test_catalog_order_and_weights(self):
        assert [(r.rule_name, r.weight) for r in ALL_RULES] == [
            ("Large Amount", 0.3),
            ("Very Large Amount", 0.4),
            ("Suspicious Domain", 0.4),
            ("Invalid Email Format", 0.2),
            ("Test Token", 0.1),
        ]

    def test_rule_names_unique(self):
        names = [r.rule_name for r in ALL_RULES]
        assert len(names) == len(set(names))

    def test_build_catalog_binds_config(self):
        config = PaymentsConfig()
        config.amount.large_amount_min = 10
        rules = build_catalog(config)
        large = rules[0]
        assert large.evaluate(make_charge_request(amount=11))
        assert not ALL_RULES[0].evaluate(make_charge_request(amount=11))


class TestAmountRules:
    large = LargeAmountRule()
    very_large = VeryLargeAmountRule()

    def test_large_amount_boundary(self):
        assert not self.large.evaluate(make_charge_request(amount=50_000))
        assert self.large.evaluate(make_charge_request(amount=50_001))

    def test_very_large_amount_boundary(self):
        assert not self.very_large.evaluate(make_charge_request(amount=100_000))
        assert self.very_large.evaluate(make_charge_request(amount=100_001))

    def test_exactly_100k_only_triggers_large(self):
        request = make_charge_request(amount=100_000)
        assert self.large.evaluate(request)
        assert not self.very_large.evaluate(request)

    def test_above_100k_triggers_both(self):
        request = make_charge_request(amount=150_000)
        assert self.large.evaluate(request)
        assert self.very_large.evaluate(request)


class TestSuspiciousDomainRule:
    rule = SuspiciousDomainRule()

    @pytest.mark.parametrize(
        "email",
        [
            "user@mail.ru",
            "user@site.tk",
            "user@domain.ml",
            "user@test.com",
            "user@10minutemail.com",
            "someone@mailinator.com",
            "USER@MAILINATOR.COM",
        ],
    )
    def test_suspicious(self, email):
        assert self.rule.evaluate(make_charge_request(email=email))

    def test_clean_domain(self):
        assert not self.rule.evaluate(make_charge_request(email="user@example.com"))


class TestInvalidEmailFormatRule:
    rule = InvalidEmailFormatRule()

    @pytest.mark.parametrize(
        "email",
        [
            "not-an-email",
            "user@domain",
            "user @example.com",
            "a@b@example.com",
            "@example.com",
            "",
            "user@example.com\n",
            "\nuser@example.com",
        ],
    )
    def test_invalid(self, email):
        assert self.rule.evaluate(make_charge_request(email=email))

    @pytest.mark.parametrize("email", ["user@example.com", "first.last@sub.example.co.uk"])
    def test_valid(self, email):
        assert not self.rule.evaluate(make_charge_request(email=email))


class TestTestTokenRule:
    rule = TestTokenRule()

    def test_contains_test(self):
        assert self.rule.evaluate(make_charge_request(source="tok_test_123"))

    def test_case_sensitive(self):
        assert not self.rule.evaluate(make_charge_request(source="tok_TEST_123"))

    def test_clean_source(self):
        assert not self.rule.evaluate(make_charge_request(source="card_123"))
