"""Exceptions raised by the payments domain."""


class PaymentsError(Exception):
    """Base class for payment pipeline errors."""


class GenerativeTextError(PaymentsError):
    """The generative-text backend failed or returned an unusable response."""


class ExplanationUnavailableError(PaymentsError):
    """Primary explanation path failed and the templated fallback is disabled."""


class TransactionNotFoundError(PaymentsError, LookupError):
    def __init__(self, transaction_id: str) -> None:
        super().__init__(f"No transaction found with ID: {transaction_id}")
        self.transaction_id = transaction_id


class InvalidCurrencyError(PaymentsError, ValueError):
    def __init__(self, currency: str) -> None:
        super().__init__(f"Invalid currency code: {currency!r}")
        self.currency = currency
