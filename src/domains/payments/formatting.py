"""Transaction id generation and currency formatting."""

import re
import secrets
import string
from decimal import ROUND_HALF_UP, Decimal

from .errors import InvalidCurrencyError

TRANSACTION_ID_PREFIX = "txn_"
TRANSACTION_ID_LENGTH = 9
_ID_ALPHABET = string.ascii_lowercase + string.digits

_CURRENCY_CODE = re.compile(r"^[A-Z]{3}$")

# symbol, fraction digits
CURRENCY_SYMBOLS: dict[str, tuple[str, int]] = {
    "USD": ("$", 2),
    "EUR": ("€", 2),
    "GBP": ("£", 2),
    "JPY": ("¥", 0),
    "CAD": ("CA$", 2),
    "AUD": ("A$", 2),
    "NZD": ("NZ$", 2),
    "MXN": ("MX$", 2),
    "BRL": ("R$", 2),
    "INR": ("₹", 2),
    "CNY": ("CN¥", 2),
    "KRW": ("₩", 0),
    "ILS": ("₪", 2),
    "VND": ("₫", 0),
}


def generate_transaction_id() -> str:
    """Return a new id of the form ``txn_`` + 9 lowercase alphanumerics."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(TRANSACTION_ID_LENGTH))
    return f"{TRANSACTION_ID_PREFIX}{suffix}"


def format_amount(amount: int | float, currency: str) -> str:
    """Format ``amount`` in ``currency`` as a display string, e.g. ``$1,000.00``.

    Known currencies use their symbol; any other well-formed ISO code is
    rendered as a ``CODE 1,000.00`` prefix. Malformed codes raise
    InvalidCurrencyError.
    """
    code = (currency or "").upper()
    if not _CURRENCY_CODE.match(code):
        raise InvalidCurrencyError(currency)

    symbol, digits = CURRENCY_SYMBOLS.get(code, (f"{code} ", 2))
    quantum = Decimal(1).scaleb(-digits)
    value = Decimal(str(amount)).quantize(quantum, rounding=ROUND_HALF_UP)

    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.{digits}f}"
