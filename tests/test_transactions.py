"""
Test suite for transaction records and the TransactionStore
"""

import pytest
from decimal import Decimal

from transfer_ledger.currency import Currency
from transfer_ledger.errors import DuplicateTransaction, DuplicateEntity, TransactionNotFound
from transfer_ledger.transactions import Transaction, TransactionStatus, TransactionStore


def make_transaction(txn_id, from_account=2222, to_account=1111, amount="12"):
    return Transaction(
        id=txn_id,
        from_account=from_account,
        to_account=to_account,
        amount=Decimal(amount),
        currency=Currency.EUR
    )


class TestTransaction:
    """Test Transaction record"""

    def test_defaults(self):
        """Test a new candidate starts PROCESSING with empty description"""
        txn = Transaction(from_account=1, to_account=2, amount=Decimal("5"), currency=Currency.USD)

        assert txn.id is None
        assert txn.status == TransactionStatus.PROCESSING
        assert txn.description == ""
        assert not txn.is_successful

    def test_amount_may_be_absent(self):
        """Test candidates can be built without an amount (rejected later)"""
        txn = Transaction(from_account=1, to_account=2, amount=None, currency=Currency.USD)
        assert txn.amount is None

    def test_coercions(self):
        """Test amount and currency coercion"""
        txn = Transaction(from_account=1, to_account=2, amount=12, currency="gbp", description=None)

        assert txn.amount == Decimal("12")
        assert txn.currency == Currency.GBP
        assert txn.description == ""

    def test_touches(self):
        """Test source/destination matching"""
        txn = make_transaction(0, from_account=1, to_account=2)

        assert txn.touches(1)
        assert txn.touches(2)
        assert not txn.touches(3)

    def test_failed_status_exists(self):
        """Test the status enum has all three states"""
        assert {s.value for s in TransactionStatus} == {"PROCESSING", "SUCCESSFUL", "FAILED"}


class TestTransactionStore:
    """Test TransactionStore keyed collection"""

    def setup_method(self):
        self.store = TransactionStore()

    def test_create_and_get(self):
        """Test storing and reading back a transaction"""
        txn = make_transaction(0)
        assert self.store.create(txn) is txn
        assert self.store.get(0) is txn
        assert 0 in self.store
        assert len(self.store) == 1

    def test_create_duplicate(self):
        """Test duplicate ids are rejected and the original kept"""
        original = make_transaction(7)
        self.store.create(original)

        with pytest.raises(DuplicateTransaction) as exc_info:
            self.store.create(make_transaction(7, amount="99"))

        assert isinstance(exc_info.value, DuplicateEntity)
        assert self.store.get(7) is original

    def test_create_without_id(self):
        """Test a candidate without an id cannot be stored"""
        with pytest.raises(ValueError, match="must have an id"):
            self.store.create(make_transaction(None))

    def test_get_missing(self):
        """Test unknown transaction id"""
        with pytest.raises(TransactionNotFound):
            self.store.get(99)

    def test_exists(self):
        """Test exists handles None ids"""
        self.store.create(make_transaction(1))
        assert self.store.exists(1)
        assert not self.store.exists(2)
        assert not self.store.exists(None)

    def test_list_insertion_order(self):
        """Test listing order follows insertion"""
        for txn_id in (5, 1, 3):
            self.store.create(make_transaction(txn_id))
        assert [t.id for t in self.store.list()] == [5, 1, 3]

    def test_find_by_account(self):
        """Test filtering by source or destination"""
        self.store.create(make_transaction(0, from_account=2222, to_account=1111))
        self.store.create(make_transaction(1, from_account=3333, to_account=1111))
        self.store.create(make_transaction(2, from_account=3333, to_account=2222))

        assert [t.id for t in self.store.find_by_account(1111)] == [0, 1]
        assert [t.id for t in self.store.find_by_account(2222)] == [0, 2]
        assert [t.id for t in self.store.find_by_account(3333)] == [1, 2]
        assert list(self.store.find_by_account(4444)) == []

    def test_find_by_account_is_lazy_and_restartable(self):
        """Test each call recomputes and sees later commits"""
        self.store.create(make_transaction(0))

        result = self.store.find_by_account(1111)
        assert not isinstance(result, list)
        assert [t.id for t in result] == [0]
        # Exhausted generator stays exhausted
        assert list(result) == []

        self.store.create(make_transaction(1))
        assert [t.id for t in self.store.find_by_account(1111)] == [0, 1]
