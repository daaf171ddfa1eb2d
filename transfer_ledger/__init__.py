"""
Transfer Ledger

An in-memory ledger of accounts and the transfers between them, with
Decimal balances, per-account locking and an ordered validation chain
that never leaves a transfer half applied.
"""

__version__ = "1.0.0"
