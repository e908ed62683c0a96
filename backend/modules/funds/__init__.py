"""
Funds module.

Deposit and cash-out requests. An admin approves or rejects each one;
approval moves the user's balance.

Public API:
- IFundsService / IFundsStore: interfaces
- Deposit, CashOut, TransferStatus: models
- Funds exceptions: TransferNotFoundError, TransferAlreadyDecidedError,
  InsufficientFundsError, DuplicateTransactionError
"""

from .interfaces import IFundsService, IFundsStore
from .models import CashOut, Deposit, TransferStatus
from .exceptions import (
    DuplicateTransactionError,
    InsufficientFundsError,
    InvalidTransferStatusError,
    TransferAlreadyDecidedError,
    TransferNotFoundError,
)

__all__ = [
    # Interfaces
    "IFundsService",
    "IFundsStore",
    # Models
    "Deposit",
    "CashOut",
    "TransferStatus",
    # Exceptions
    "DuplicateTransactionError",
    "InsufficientFundsError",
    "InvalidTransferStatusError",
    "TransferAlreadyDecidedError",
    "TransferNotFoundError",
]
