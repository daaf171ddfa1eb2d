"""
Transaction endpoints
"""

from typing import List
from fastapi import APIRouter, Depends, status

from .dependencies import LedgerSystem, get_ledger_system
from .schemas import CreateTransactionRequest, TransactionModel


router = APIRouter()


@router.get("", response_model=List[TransactionModel])
async def list_transactions(system: LedgerSystem = Depends(get_ledger_system)):
    """Get all transactions"""
    return [TransactionModel.from_transaction(txn) for txn in system.engine.list_transactions()]


@router.post("", response_model=TransactionModel, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    request: CreateTransactionRequest,
    system: LedgerSystem = Depends(get_ledger_system)
):
    """Make a transfer between two accounts"""
    transaction = system.engine.transfer(request.to_candidate())
    return TransactionModel.from_transaction(transaction)


@router.get("/account/{account_id}", response_model=List[TransactionModel])
async def get_account_transactions(
    account_id: int,
    system: LedgerSystem = Depends(get_ledger_system)
):
    """Get the transactions an account sent or received"""
    transactions = system.engine.transactions_for_account(account_id)
    return [TransactionModel.from_transaction(txn) for txn in transactions]


@router.get("/{transaction_id}", response_model=TransactionModel)
async def get_transaction(
    transaction_id: int,
    system: LedgerSystem = Depends(get_ledger_system)
):
    """Get transaction details"""
    return TransactionModel.from_transaction(system.engine.get_transaction(transaction_id))
