"""
Ledger system wiring and request dependencies
"""

from fastapi import Request

from ..accounts import AccountStore
from ..identifiers import IdentifierAllocator
from ..ledger import LedgerEngine
from ..locks import KeyedLockManager
from ..seed import insert_sample_data
from ..transactions import TransactionStore


class LedgerSystem:
    """Stores, allocator, locks and the engine that drives them"""

    def __init__(self, seed_sample_data: bool = False):
        self.accounts = AccountStore()
        self.transactions = TransactionStore()
        self.allocator = IdentifierAllocator()
        self.locks = KeyedLockManager()
        self.engine = LedgerEngine(
            self.accounts, self.transactions, self.allocator, self.locks
        )

        if seed_sample_data:
            insert_sample_data(self.engine)


def get_ledger_system(request: Request) -> LedgerSystem:
    return request.app.state.ledger_system
