"""
Earnings module.

Credits users for ad clicks under their active plan, at most once per ad
per cooldown window.

Public API:
- ICooldownService: Interface for earning and cooldown queries
- IWorkCatalog / IWorkStore / IClickGrantStore: collaborator interfaces
- Work, ClickGrant, CooldownStatus, EarnResult: models
- Earnings exceptions: WorkNotFoundError, AlreadyClaimedError
"""

from .interfaces import ICooldownService, IWorkCatalog, IWorkStore, IClickGrantStore
from .models import (
    Work,
    ClickGrant,
    NewClickGrant,
    CooldownState,
    CooldownStatus,
    EarnRequest,
    EarnResult,
)
from .exceptions import WorkNotFoundError, AlreadyClaimedError

__all__ = [
    # Interfaces
    "ICooldownService",
    "IWorkCatalog",
    "IWorkStore",
    "IClickGrantStore",
    # Models
    "Work",
    "ClickGrant",
    "NewClickGrant",
    "CooldownState",
    "CooldownStatus",
    "EarnRequest",
    "EarnResult",
    # Exceptions
    "WorkNotFoundError",
    "AlreadyClaimedError",
]
