"""
Account management endpoints
"""

from typing import List
from fastapi import APIRouter, Depends, Response, status

from .dependencies import LedgerSystem, get_ledger_system
from .errors import LedgerHTTPError, WITHDRAW_STATUS_CODES, status_for
from .schemas import AccountModel
from ..errors import LedgerError


router = APIRouter()


@router.get("", response_model=List[AccountModel])
async def list_accounts(system: LedgerSystem = Depends(get_ledger_system)):
    """Get all accounts"""
    return [AccountModel.from_account(account) for account in system.engine.list_accounts()]


@router.post("", response_model=AccountModel, status_code=status.HTTP_201_CREATED)
async def create_account(
    request: AccountModel,
    system: LedgerSystem = Depends(get_ledger_system)
):
    """Create a new account"""
    account = system.engine.create_account(request.to_account())
    return AccountModel.from_account(account)


@router.get("/{account_id}", response_model=AccountModel)
async def get_account(
    account_id: int,
    system: LedgerSystem = Depends(get_ledger_system)
):
    """Get account details"""
    return AccountModel.from_account(system.engine.get_account(account_id))


@router.delete("/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_account(
    account_id: int,
    system: LedgerSystem = Depends(get_ledger_system)
):
    """Delete an account"""
    system.engine.delete_account(account_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{account_id}/deposit/{amount}", response_model=AccountModel)
async def deposit(
    account_id: int,
    amount: int,
    system: LedgerSystem = Depends(get_ledger_system)
):
    """Deposit an amount into the account"""
    return AccountModel.from_account(system.engine.deposit(account_id, amount))


@router.put("/{account_id}/withdraw/{amount}", response_model=AccountModel)
async def withdraw(
    account_id: int,
    amount: int,
    system: LedgerSystem = Depends(get_ledger_system)
):
    """Withdraw an amount from the account"""
    try:
        account = system.engine.withdraw(account_id, amount)
    except LedgerError as e:
        raise LedgerHTTPError(e, status_for(e, WITHDRAW_STATUS_CODES)) from e
    return AccountModel.from_account(account)
