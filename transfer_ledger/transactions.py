"""
Transaction Records Module

Transactions are records of fund movement between two accounts. They are
created only as the result of an accepted transfer, never deleted, and only
their status changes after storage.
"""

from decimal import Decimal
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional
from enum import Enum
import threading

from .currency import Currency, to_decimal
from .errors import DuplicateTransaction, TransactionNotFound


class TransactionStatus(Enum):
    """States of a transaction"""
    PROCESSING = "PROCESSING"  # Candidate, not yet committed
    SUCCESSFUL = "SUCCESSFUL"  # Balances moved and record committed
    FAILED = "FAILED"          # Never assigned: rejected candidates are discarded


@dataclass
class Transaction:
    """
    Transfer of amount from one account to another

    id stays None on a candidate until the ledger assigns one at commit time,
    unless the caller supplied an explicit id.
    """
    from_account: int
    to_account: int
    amount: Optional[Decimal]
    currency: Currency
    description: str = ""
    id: Optional[int] = None
    status: TransactionStatus = TransactionStatus.PROCESSING

    def __post_init__(self):
        if self.amount is not None:
            self.amount = to_decimal(self.amount)
        if not isinstance(self.currency, Currency):
            self.currency = Currency.from_code(self.currency)
        if self.description is None:
            self.description = ""

    @property
    def is_successful(self) -> bool:
        return self.status == TransactionStatus.SUCCESSFUL

    def touches(self, account_id: int) -> bool:
        """Check if the account is the source or the destination"""
        return self.from_account == account_id or self.to_account == account_id


class TransactionStore:
    """Keyed, insertion-ordered collection of committed transactions"""

    def __init__(self):
        self._transactions: Dict[int, Transaction] = {}
        self._lock = threading.RLock()

    def create(self, transaction: Transaction) -> Transaction:
        """
        Insert a transaction; check and insert happen atomically

        Raises:
            DuplicateTransaction: If the id is already stored
            ValueError: If the transaction has no id yet
        """
        if transaction.id is None:
            raise ValueError("Transaction must have an id before it is stored")
        with self._lock:
            if transaction.id in self._transactions:
                raise DuplicateTransaction(transaction.id)
            self._transactions[transaction.id] = transaction
            return transaction

    def get(self, transaction_id: int) -> Transaction:
        """
        Get transaction by id

        Raises:
            TransactionNotFound: If no transaction has this id
        """
        with self._lock:
            transaction = self._transactions.get(transaction_id)
        if transaction is None:
            raise TransactionNotFound(transaction_id)
        return transaction

    def exists(self, transaction_id: Optional[int]) -> bool:
        if transaction_id is None:
            return False
        with self._lock:
            return transaction_id in self._transactions

    def list(self) -> List[Transaction]:
        """All transactions in insertion order"""
        with self._lock:
            return list(self._transactions.values())

    def find_by_account(self, account_id: int) -> Iterator[Transaction]:
        """
        Lazily yield transactions where the account is source or destination

        Each call starts a fresh scan over a snapshot of the store, so the
        result can be re-requested and reflects commits made since.
        """
        for transaction in self.list():
            if transaction.touches(account_id):
                yield transaction

    def __contains__(self, transaction_id: int) -> bool:
        return self.exists(transaction_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._transactions)
