"""
Plans module exceptions.

These exceptions are raised by the plans module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from decimal import Decimal
from typing import Optional

from shared.exceptions import (
    AppError,
    AuthorizationError,
    ConfigurationError,
    ConflictError,
    NotFoundError,
)


class PlanError(AppError):
    """Base exception for plan-related errors."""

    pass


class PlanNotFoundError(NotFoundError):
    """Raised when a plan does not exist."""

    def __init__(self, plan_id: str):
        super().__init__(
            "Plan is not available",
            code="PLAN_NOT_FOUND",
            details={"plan_id": plan_id},
        )


class PlanAlreadyOwnedError(ConflictError):
    """Raised when buying a plan while another one is still active."""

    def __init__(self, plan_id: str):
        super().__init__(
            "You have already purchased a plan",
            code="PLAN_ALREADY_OWNED",
            details={"plan_id": plan_id},
        )


class InsufficientBalanceError(PlanError):
    """
    Raised when the balance does not exceed the plan price.

    Buying requires balance > price; an exact match is not enough.
    """

    def __init__(
        self,
        price: Decimal,
        balance: Decimal,
        user_id: Optional[str] = None,
    ):
        super().__init__(
            f"Insufficient balance. Price: {price}, balance: {balance}",
            code="INSUFFICIENT_BALANCE",
            details={"price": str(price), "balance": str(balance)},
        )
        if user_id:
            self.details["user_id"] = user_id


class NoActivePlanError(AuthorizationError):
    """Raised when earning without an active plan."""

    def __init__(self, user_id: Optional[str] = None):
        super().__init__(
            "You have no active plan",
            code="NO_ACTIVE_PLAN",
            details={"user_id": user_id} if user_id else {},
        )


class PlanMisconfiguredError(ConfigurationError):
    """Raised when an active plan has no positive per-click reward."""

    def __init__(self, plan_id: str):
        super().__init__(
            "Plan is missing its per-click reward",
            code="PLAN_MISCONFIGURED",
            details={"plan_id": plan_id},
        )
