"""
Account Management Module

Holds the account records of the ledger. The store only does keyed
bookkeeping and raw balance arithmetic: sufficiency checks and locking
discipline belong to the LedgerEngine that drives it.
"""

from decimal import Decimal
from dataclasses import dataclass
from typing import Dict, List
import threading

from .currency import Currency, to_decimal, format_amount, add_exact, subtract_exact
from .errors import AccountNotFound, DuplicateAccount


@dataclass
class Account:
    """
    Named balance holder with a currency

    deposit() and withdraw() are unconditional arithmetic; the caller is
    responsible for checking that a withdrawal is covered.
    """
    id: int
    name: str
    balance: Decimal
    currency: Currency

    def __post_init__(self):
        if isinstance(self.id, bool) or not isinstance(self.id, int):
            raise ValueError(f"Account id must be an integer, got {self.id!r}")
        self.balance = to_decimal(self.balance)
        if not isinstance(self.currency, Currency):
            self.currency = Currency.from_code(self.currency)

    def deposit(self, amount: Decimal) -> None:
        """balance = balance + amount"""
        self.balance = add_exact(self.balance, amount)

    def withdraw(self, amount: Decimal) -> None:
        """balance = balance - amount"""
        self.balance = subtract_exact(self.balance, amount)

    def covers(self, amount: Decimal) -> bool:
        """Check if the balance is at least amount"""
        return self.balance >= amount

    def to_string(self) -> str:
        return f"{self.id} ({self.name}): {format_amount(self.balance, self.currency)}"


class AccountStore:
    """
    Keyed, insertion-ordered collection of accounts

    Records are mutated in place: get() returns the stored Account itself,
    so every reader observes the single authoritative balance.
    """

    def __init__(self):
        self._accounts: Dict[int, Account] = {}
        self._lock = threading.RLock()

    def create(self, account: Account) -> Account:
        """
        Insert a new account

        Raises:
            DuplicateAccount: If an account with the same id exists
        """
        with self._lock:
            if account.id in self._accounts:
                raise DuplicateAccount(account.id)
            self._accounts[account.id] = account
            return account

    def get(self, account_id: int) -> Account:
        """
        Get account by id

        Raises:
            AccountNotFound: If no account has this id
        """
        with self._lock:
            account = self._accounts.get(account_id)
        if account is None:
            raise AccountNotFound(account_id)
        return account

    def exists(self, account_id: int) -> bool:
        with self._lock:
            return account_id in self._accounts

    def list(self) -> List[Account]:
        """All accounts in insertion order"""
        with self._lock:
            return list(self._accounts.values())

    def delete(self, account_id: int) -> None:
        """
        Remove an account; transactions referencing it are left alone

        Raises:
            AccountNotFound: If no account has this id
        """
        with self._lock:
            if account_id not in self._accounts:
                raise AccountNotFound(account_id)
            del self._accounts[account_id]

    def deposit(self, account_id: int, amount: Decimal) -> Account:
        """Add amount to the balance unconditionally"""
        account = self.get(account_id)
        account.deposit(amount)
        return account

    def withdraw(self, account_id: int, amount: Decimal) -> Account:
        """Subtract amount from the balance unconditionally (no floor)"""
        account = self.get(account_id)
        account.withdraw(amount)
        return account

    def __contains__(self, account_id: int) -> bool:
        return self.exists(account_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._accounts)
