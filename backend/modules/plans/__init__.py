"""
Plans module.

Handles plan purchase and the time-limited entitlement it grants.

Public API:
- IPlanCatalog: Interface for plan lookup
- IPlanStore: plan lookup plus admin create/update/delete
- IEntitlementService: Interface for purchase and entitlement checks
- Plan, PurchaseResult: models
- Plan exceptions: PlanNotFoundError, InsufficientBalanceError, etc.
"""

from .interfaces import IPlanCatalog, IPlanStore, IEntitlementService
from .models import Plan, PurchaseRequest, PurchaseResult
from .exceptions import (
    PlanError,
    PlanNotFoundError,
    PlanAlreadyOwnedError,
    InsufficientBalanceError,
    NoActivePlanError,
    PlanMisconfiguredError,
)

__all__ = [
    # Interfaces
    "IPlanCatalog",
    "IPlanStore",
    "IEntitlementService",
    # Models
    "Plan",
    "PurchaseRequest",
    "PurchaseResult",
    # Exceptions
    "PlanError",
    "PlanNotFoundError",
    "PlanAlreadyOwnedError",
    "InsufficientBalanceError",
    "NoActivePlanError",
    "PlanMisconfiguredError",
]
