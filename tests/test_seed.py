"""
Tests for sample data bootstrap
"""

from decimal import Decimal

from transfer_ledger.api.dependencies import LedgerSystem
from transfer_ledger.currency import Currency
from transfer_ledger.transactions import TransactionStatus


class TestSampleData:
    """Test insert_sample_data through LedgerSystem"""

    def test_unseeded_system_is_empty(self):
        """Test seeding is opt-in"""
        system = LedgerSystem()
        assert len(system.accounts) == 0
        assert len(system.transactions) == 0
        assert system.allocator.peek() == 0

    def test_sample_accounts(self):
        """Test the three sample accounts and their opening balances"""
        system = LedgerSystem(seed_sample_data=True)

        accounts = [(a.id, a.name, a.balance, a.currency) for a in system.engine.list_accounts()]
        assert accounts == [
            (1111, "account 1", Decimal("100"), Currency.EUR),
            (2222, "account 2", Decimal("200"), Currency.USD),
            (3333, "account 3", Decimal("300"), Currency.GBP),
        ]

    def test_sample_transactions(self):
        """Test historical transfers are recorded without moving balances"""
        system = LedgerSystem(seed_sample_data=True)

        transactions = system.engine.list_transactions()
        assert [t.id for t in transactions] == [0, 1]
        assert all(t.status == TransactionStatus.SUCCESSFUL for t in transactions)
        assert [(t.from_account, t.to_account, t.amount, t.currency) for t in transactions] == [
            (2222, 1111, Decimal("12"), Currency.EUR),
            (3333, 1111, Decimal("34"), Currency.USD),
        ]
        assert system.accounts.get(1111).balance == Decimal("100")
        assert system.allocator.peek() == 2

    def test_systems_are_independent(self):
        """Test each system owns its own stores"""
        first = LedgerSystem(seed_sample_data=True)
        second = LedgerSystem(seed_sample_data=True)

        first.engine.deposit(1111, 50)

        assert first.accounts.get(1111).balance == Decimal("150")
        assert second.accounts.get(1111).balance == Decimal("100")
