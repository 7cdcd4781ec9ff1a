"""In-memory transaction ledger."""

import threading

import structlog

from .models import Transaction, TransactionStatus

logger = structlog.get_logger()


class TransactionLedger:
    """Thread-safe store of processed transactions, keyed by id.

    Enumeration follows first-insertion order. Storing an existing id replaces
    the record in place (last write wins) without moving it or changing the
    count. Unknown or empty ids are "not found", never errors.
    """

    def __init__(self) -> None:
        self._transactions: dict[str, Transaction] = {}
        self._lock = threading.RLock()

    def store(self, transaction: Transaction) -> Transaction:
        with self._lock:
            replaced = transaction.id in self._transactions
            self._transactions[transaction.id] = transaction
        if replaced:
            logger.info("transaction_overwritten", transaction_id=transaction.id)
        return transaction

    def get_by_id(self, transaction_id: str | None) -> Transaction | None:
        if not transaction_id:
            return None
        with self._lock:
            return self._transactions.get(transaction_id)

    def get_all(self) -> list[Transaction]:
        with self._lock:
            return list(self._transactions.values())

    def get_by_status(self, status: TransactionStatus | str) -> list[Transaction]:
        return [t for t in self.get_all() if t.response.status == status]

    def has(self, transaction_id: str | None) -> bool:
        if not transaction_id:
            return False
        with self._lock:
            return transaction_id in self._transactions

    def delete(self, transaction_id: str | None) -> bool:
        if not transaction_id:
            return False
        with self._lock:
            return self._transactions.pop(transaction_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._transactions.clear()

    def count(self) -> int:
        with self._lock:
            return len(self._transactions)

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, transaction_id: object) -> bool:
        return isinstance(transaction_id, str) and self.has(transaction_id)
