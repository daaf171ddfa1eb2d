"""
Sample data for a freshly started ledger

Three accounts in different currencies and two historical transfers into
account 1111. The historical transfers are recorded as already SUCCESSFUL
without moving any balances: they describe activity that predates the
opening balances.
"""

from decimal import Decimal

from .accounts import Account
from .currency import Currency
from .ledger import LedgerEngine
from .logging_config import get_logger
from .transactions import Transaction, TransactionStatus


SAMPLE_ACCOUNTS = [
    (1111, "account 1", Decimal("100"), Currency.EUR),
    (2222, "account 2", Decimal("200"), Currency.USD),
    (3333, "account 3", Decimal("300"), Currency.GBP),
]

SAMPLE_TRANSACTIONS = [
    (2222, 1111, Decimal("12"), Currency.EUR, "test transaction 1"),
    (3333, 1111, Decimal("34"), Currency.USD, "test transaction 2"),
]

logger = get_logger("transfer_ledger.seed")


def insert_sample_data(engine: LedgerEngine) -> None:
    """Populate the engine's stores with the sample accounts and transactions"""
    for account_id, name, balance, currency in SAMPLE_ACCOUNTS:
        engine.create_account(Account(id=account_id, name=name, balance=balance, currency=currency))

    for from_account, to_account, amount, currency, description in SAMPLE_TRANSACTIONS:
        engine.transactions.create(Transaction(
            id=engine.allocator.next(),
            from_account=from_account,
            to_account=to_account,
            amount=amount,
            currency=currency,
            description=description,
            status=TransactionStatus.SUCCESSFUL
        ))

    logger.info(
        "Sample data inserted: %d accounts, %d transactions",
        len(SAMPLE_ACCOUNTS), len(SAMPLE_TRANSACTIONS)
    )
