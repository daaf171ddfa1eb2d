"""
Pydantic schemas for API requests and responses
"""

from decimal import Decimal
from typing import Any, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from ..accounts import Account
from ..currency import Currency, to_decimal
from ..transactions import Transaction, TransactionStatus


def decimal_to_json(value: Decimal) -> Union[int, float]:
    """Render a Decimal as a JSON number; integral values stay integers"""
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def _parse_currency(value: Any) -> Any:
    if isinstance(value, str):
        return Currency.from_code(value)
    return value


def _parse_amount(value: Any) -> Any:
    if value is None or isinstance(value, Decimal):
        return value
    if isinstance(value, (int, float, str)) and not isinstance(value, bool):
        return to_decimal(value)
    return value


# Account schemas
class AccountModel(BaseModel):
    id: int
    name: str
    balance: Decimal
    currency: Currency

    @field_validator("currency", mode="before")
    @classmethod
    def validate_currency(cls, value):
        return _parse_currency(value)

    @field_validator("balance", mode="before")
    @classmethod
    def validate_balance(cls, value):
        return _parse_amount(value)

    @field_serializer("balance", when_used="json")
    def serialize_balance(self, value: Decimal):
        return decimal_to_json(value)

    @field_serializer("currency", when_used="json")
    def serialize_currency(self, value: Currency):
        return value.code

    def to_account(self) -> Account:
        return Account(id=self.id, name=self.name, balance=self.balance, currency=self.currency)

    @classmethod
    def from_account(cls, account: Account) -> 'AccountModel':
        return cls(id=account.id, name=account.name, balance=account.balance, currency=account.currency)


# Transaction schemas
class CreateTransactionRequest(BaseModel):
    """Transfer request; status is accepted for symmetry with responses but ignored"""
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = None
    from_account: int = Field(..., alias="fromAccount")
    to_account: int = Field(..., alias="toAccount")
    amount: Optional[Decimal] = None
    currency: Currency
    description: Optional[str] = ""
    status: Optional[str] = None

    @field_validator("currency", mode="before")
    @classmethod
    def validate_currency(cls, value):
        return _parse_currency(value)

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, value):
        return _parse_amount(value)

    def to_candidate(self) -> Transaction:
        return Transaction(
            id=self.id,
            from_account=self.from_account,
            to_account=self.to_account,
            amount=self.amount,
            currency=self.currency,
            description=self.description or ""
        )


class TransactionModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    from_account: int = Field(..., alias="fromAccount")
    to_account: int = Field(..., alias="toAccount")
    amount: Decimal
    currency: Currency
    description: str
    status: TransactionStatus

    @field_validator("currency", mode="before")
    @classmethod
    def validate_currency(cls, value):
        return _parse_currency(value)

    @field_serializer("amount", when_used="json")
    def serialize_amount(self, value: Decimal):
        return decimal_to_json(value)

    @field_serializer("currency", when_used="json")
    def serialize_currency(self, value: Currency):
        return value.code

    @classmethod
    def from_transaction(cls, transaction: Transaction) -> 'TransactionModel':
        return cls(
            id=transaction.id,
            from_account=transaction.from_account,
            to_account=transaction.to_account,
            amount=transaction.amount,
            currency=transaction.currency,
            description=transaction.description,
            status=transaction.status
        )
