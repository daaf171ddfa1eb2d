"""
Ledger Engine

Orchestrates transfers between accounts: validates a candidate transaction
against the account and transaction stores, moves the funds and records the
outcome. A transfer either takes full effect (withdrawal, deposit, stored
record) or none at all.
"""

from decimal import Decimal
from dataclasses import replace
import threading
from typing import List, Optional, Tuple, Type, Union

from .accounts import Account, AccountStore
from .currency import to_decimal, is_positive, format_amount
from .errors import (
    LedgerError, NotFound, DuplicateTransaction, SourceAccountNotFound,
    DestinationAccountNotFound, InvalidAmount, InsufficientFunds
)
from .identifiers import IdentifierAllocator
from .locks import KeyedLockManager
from .logging_config import get_logger, log_action
from .transactions import Transaction, TransactionStatus, TransactionStore


class LedgerEngine:
    """
    Validation chain and balance mutation for the ledger

    The engine keeps no ledger state itself; it works on the stores,
    allocator and lock manager it is given. Every operation that reads a
    balance and then changes it does so while holding the lock of each
    account involved.

    Balance changes and transaction commits additionally happen under one
    short commit lock that readers share, so a reader never observes a
    stored transaction without its balance effects or the reverse. Account
    reads return snapshots taken under that lock.
    """

    def __init__(
        self,
        accounts: Optional[AccountStore] = None,
        transactions: Optional[TransactionStore] = None,
        allocator: Optional[IdentifierAllocator] = None,
        locks: Optional[KeyedLockManager] = None
    ):
        self.accounts = accounts if accounts is not None else AccountStore()
        self.transactions = transactions if transactions is not None else TransactionStore()
        self.allocator = allocator if allocator is not None else IdentifierAllocator()
        self.locks = locks if locks is not None else KeyedLockManager()
        self.logger = get_logger("transfer_ledger.ledger")
        self._commit_lock = threading.RLock()

    # Transfers

    def transfer(self, candidate: Transaction) -> Transaction:
        """
        Validate and execute a transfer

        Checks run in this order and the first failure is raised:
        duplicate id, source exists, destination exists, amount positive,
        source balance covers amount.

        Args:
            candidate: Proposed transaction; it is not modified

        Returns:
            The committed Transaction with status SUCCESSFUL and an id

        Raises:
            DuplicateTransaction: candidate.id is already stored
            SourceAccountNotFound: from_account does not exist
            DestinationAccountNotFound: to_account does not exist
            InvalidAmount: amount missing, zero or negative
            InsufficientFunds: source balance below amount
        """
        with self.locks.acquire(candidate.from_account, candidate.to_account):
            try:
                source, destination = self._validate_transfer(candidate)
                committed = self._commit_transfer(candidate, source, destination)
            except LedgerError as e:
                self._log_rejection("transfer", e, extra={
                    "transaction_id": candidate.id,
                    "from_account": candidate.from_account,
                    "to_account": candidate.to_account,
                    "amount": str(candidate.amount) if candidate.amount is not None else None
                })
                raise

        log_action(
            self.logger, "info", "Transfer committed",
            action="transfer", resource=f"transaction:{committed.id}",
            extra={
                "transaction_id": committed.id,
                "from_account": committed.from_account,
                "to_account": committed.to_account,
                "amount": format_amount(committed.amount, committed.currency),
                "status": committed.status.value
            }
        )
        return committed

    def _validate_transfer(self, candidate: Transaction) -> Tuple[Account, Account]:
        """Run the ordered checks, raising on the first one that fails"""
        if self.transactions.exists(candidate.id):
            raise DuplicateTransaction(candidate.id)

        source = self._resolve(candidate.from_account, SourceAccountNotFound)
        destination = self._resolve(candidate.to_account, DestinationAccountNotFound)

        amount = candidate.amount
        if amount is None or not is_positive(amount):
            raise InvalidAmount("Incorrect transaction amount!", candidate.id)

        if not source.covers(amount):
            raise InsufficientFunds(
                "Insufficient funds! Unable to process the transfer!", source.id
            )

        return source, destination

    def _resolve(self, account_id: int, error: Type[NotFound]) -> Account:
        try:
            return self.accounts.get(account_id)
        except NotFound:
            raise error(account_id) from None

    def _commit_transfer(
        self,
        candidate: Transaction,
        source: Account,
        destination: Account
    ) -> Transaction:
        """
        Store the record, then move the funds

        Storing is the only step that can still fail (another commit claimed
        the same id), so it goes first; the two balance updates after it are
        plain arithmetic under the locks held by transfer(). All three happen
        under the commit lock and become visible together.
        """
        record = replace(candidate, status=TransactionStatus.SUCCESSFUL)

        with self._commit_lock:
            if record.id is None:
                self._store_with_allocated_id(record)
            else:
                self.transactions.create(record)
                self.allocator.advance_past(record.id)

            self.accounts.withdraw(source.id, record.amount)
            self.accounts.deposit(destination.id, record.amount)
        return record

    def _store_with_allocated_id(self, record: Transaction) -> Transaction:
        while True:
            record.id = self.allocator.next()
            try:
                return self.transactions.create(record)
            except DuplicateTransaction:
                # id already taken by an explicitly numbered transaction
                continue

    # Single-account operations

    def create_account(self, account: Account) -> Account:
        """
        Open a new account

        Raises:
            DuplicateAccount: An account with this id exists
        """
        with self.locks.acquire(account.id):
            try:
                created = self.accounts.create(account)
            except LedgerError as e:
                self._log_rejection("create_account", e, extra={"account_id": account.id})
                raise

        log_action(
            self.logger, "info", "Account created",
            action="create_account", resource=f"account:{created.id}",
            extra={
                "account_id": created.id,
                "name": created.name,
                "balance": format_amount(created.balance, created.currency)
            }
        )
        return created

    def get_account(self, account_id: int) -> Account:
        """Get a snapshot of the account (raises AccountNotFound)"""
        with self._commit_lock:
            return replace(self.accounts.get(account_id))

    def list_accounts(self) -> List[Account]:
        """Snapshots of all accounts, consistent with each other"""
        with self._commit_lock:
            return [replace(account) for account in self.accounts.list()]

    def delete_account(self, account_id: int) -> None:
        """
        Delete an account; its transactions stay in the store

        Raises:
            AccountNotFound: No account has this id
        """
        with self.locks.acquire(account_id):
            self.accounts.delete(account_id)

        log_action(
            self.logger, "info", "Account deleted",
            action="delete_account", resource=f"account:{account_id}"
        )

    def deposit(self, account_id: int, amount: Union[Decimal, int, str]) -> Account:
        """
        Add funds to an account

        Raises:
            AccountNotFound: No account has this id
            InvalidAmount: amount is negative
        """
        amount = to_decimal(amount)
        with self.locks.acquire(account_id):
            try:
                self.accounts.get(account_id)
                if amount < 0:
                    raise InvalidAmount(f"Deposit amount must not be negative: {amount}", account_id)
                with self._commit_lock:
                    account = replace(self.accounts.deposit(account_id, amount))
            except LedgerError as e:
                self._log_rejection("deposit", e, extra={"account_id": account_id, "amount": str(amount)})
                raise
            balance = account.balance

        log_action(
            self.logger, "info", "Deposit applied",
            action="deposit", resource=f"account:{account_id}",
            extra={"amount": str(amount), "balance": str(balance)}
        )
        return account

    def withdraw(self, account_id: int, amount: Union[Decimal, int, str]) -> Account:
        """
        Take funds out of an account if the balance covers them

        Raises:
            AccountNotFound: No account has this id
            InvalidAmount: amount is negative
            InsufficientFunds: balance is below amount
        """
        amount = to_decimal(amount)
        with self.locks.acquire(account_id):
            try:
                account = self.accounts.get(account_id)
                if amount < 0:
                    raise InvalidAmount(f"Withdrawal amount must not be negative: {amount}", account_id)
                if not account.covers(amount):
                    raise InsufficientFunds(f"Account balance < amount: {amount}", account_id)
                with self._commit_lock:
                    account = replace(self.accounts.withdraw(account_id, amount))
            except LedgerError as e:
                self._log_rejection("withdraw", e, extra={"account_id": account_id, "amount": str(amount)})
                raise
            balance = account.balance

        log_action(
            self.logger, "info", "Withdrawal applied",
            action="withdraw", resource=f"account:{account_id}",
            extra={"amount": str(amount), "balance": str(balance)}
        )
        return account

    # Queries

    def get_transaction(self, transaction_id: int) -> Transaction:
        """Get transaction by id (raises TransactionNotFound)"""
        with self._commit_lock:
            return self.transactions.get(transaction_id)

    def list_transactions(self) -> List[Transaction]:
        with self._commit_lock:
            return self.transactions.list()

    def transactions_for_account(self, account_id: int) -> List[Transaction]:
        """
        Transactions where the account is source or destination

        Raises:
            SourceAccountNotFound: The account does not exist (any more)
        """
        with self._commit_lock:
            if not self.accounts.exists(account_id):
                raise SourceAccountNotFound(account_id)
            return list(self.transactions.find_by_account(account_id))

    def _log_rejection(self, action: str, error: LedgerError, extra: dict) -> None:
        log_action(
            self.logger, "warning", f"{action} rejected: {error.message}",
            action=action,
            extra={"kind": error.kind, **extra}
        )
