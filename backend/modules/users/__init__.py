"""
Users module.

Owns the user record: credentials, verification state, balance, plan
assignment and the append-only earning and purchase history.

Public API:
- IUserStore: Interface for user record persistence
- UserRecord, UserProfile, LedgerEntry, UserRole: models
- User exceptions: UserNotFoundError, ConcurrentUpdateError
"""

from .interfaces import IUserStore
from .models import UserRecord, UserProfile, LedgerEntry, UserRole, NewUser
from .exceptions import UserNotFoundError, ConcurrentUpdateError, DuplicateAccountError

__all__ = [
    # Interface
    "IUserStore",
    # Models
    "UserRecord",
    "UserProfile",
    "LedgerEntry",
    "UserRole",
    "NewUser",
    # Exceptions
    "UserNotFoundError",
    "ConcurrentUpdateError",
    "DuplicateAccountError",
]
