"""
Earnings module exceptions.
"""

from datetime import datetime
from typing import Optional

from shared.exceptions import ConflictError, NotFoundError


class WorkNotFoundError(NotFoundError):
    """Raised when the referenced ad/work item does not exist."""

    def __init__(self, ad_id: str):
        super().__init__(
            f"Work not found: {ad_id}",
            code="WORK_NOT_FOUND",
            details={"ad_id": ad_id},
        )


class AlreadyClaimedError(ConflictError):
    """Raised when the user already earned from this ad in the current window."""

    def __init__(self, ad_id: str, available_at: Optional[datetime] = None):
        super().__init__(
            "You have already earned from this ad, try again later",
            code="ALREADY_CLAIMED",
            details={"ad_id": ad_id},
        )
        if available_at is not None:
            self.details["available_at"] = available_at.isoformat()
