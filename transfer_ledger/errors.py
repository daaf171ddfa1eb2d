"""
Ledger Error Types

Typed rejections raised by the ledger core. Every error rejects a single
request and is raised before any balance or store mutation happens.
All derive from ValueError so callers that only care about "business rule
violated" can keep catching ValueError.
"""

from typing import Optional


class LedgerError(ValueError):
    """Base class for all ledger rejections"""

    kind = "LedgerError"

    def __init__(self, message: str, entity_id: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.entity_id = entity_id


class InvalidIdentifier(LedgerError):
    """An identifier (or path amount) could not be parsed as an integer"""

    kind = "InvalidIdentifier"


class NotFound(LedgerError):
    """An account or transaction id is absent from its store"""

    kind = "NotFound"


class AccountNotFound(NotFound):

    def __init__(self, account_id: int):
        super().__init__(f"Account Number not found in the DB: {account_id}", account_id)


class TransactionNotFound(NotFound):

    def __init__(self, transaction_id: int):
        super().__init__(f"Transaction not found in the DB: {transaction_id}", transaction_id)


class SourceAccountNotFound(NotFound):

    def __init__(self, account_id: int):
        super().__init__("Source Account does not exist!", account_id)


class DestinationAccountNotFound(NotFound):

    def __init__(self, account_id: int):
        super().__init__("Destination Account does not exist!", account_id)


class DuplicateEntity(LedgerError):
    """Create with an id that is already present"""

    kind = "DuplicateEntity"


class DuplicateAccount(DuplicateEntity):

    def __init__(self, account_id: int):
        super().__init__("Account number already exists in the DB!", account_id)


class DuplicateTransaction(DuplicateEntity):

    def __init__(self, transaction_id: int):
        super().__init__("Transaction already exists in the DB!", transaction_id)


class InvalidAmount(LedgerError):
    """Amount missing, zero or negative"""

    kind = "InvalidAmount"


class InsufficientFunds(LedgerError):
    """Withdrawal or transfer amount exceeds the current balance"""

    kind = "InsufficientFunds"


class MalformedInput(LedgerError):
    """Request body does not parse into the expected entity shape"""

    kind = "MalformedInput"
