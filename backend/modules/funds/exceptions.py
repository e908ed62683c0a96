"""
Funds module exceptions.
"""

from decimal import Decimal

from shared.exceptions import ConflictError, NotFoundError, ValidationError


class TransferNotFoundError(NotFoundError):
    """Raised when a deposit or cash-out does not exist."""

    def __init__(self, kind: str, transfer_id: str):
        super().__init__(
            f"{kind.capitalize()} not found",
            code=f"{kind.upper().replace('-', '_')}_NOT_FOUND",
            details={"id": transfer_id},
        )


class TransferAlreadyDecidedError(ConflictError):
    """Raised when approving or rejecting a request that is no longer pending."""

    def __init__(self, kind: str, transfer_id: str, status: str):
        super().__init__(
            f"{kind.capitalize()} is already {status}",
            code="TRANSFER_ALREADY_DECIDED",
            details={"id": transfer_id, "status": status},
        )


class InvalidTransferStatusError(ValidationError):
    """Raised when a decision is not success or rejected."""

    def __init__(self, status: str):
        super().__init__(
            "Status must be success or rejected",
            code="INVALID_TRANSFER_STATUS",
            details={"status": status},
        )


class DuplicateTransactionError(ConflictError):
    """Raised when a deposit reuses a payment transaction ID."""

    def __init__(self, transaction_id: str):
        super().__init__(
            "This transaction has already been submitted",
            code="DUPLICATE_TRANSACTION",
            details={"transaction_id": transaction_id},
        )


class InsufficientFundsError(ValidationError):
    """Raised when a cash-out exceeds the balance."""

    def __init__(self, amount: Decimal, balance: Decimal):
        super().__init__(
            f"Insufficient balance. Requested: {amount}, balance: {balance}",
            code="INSUFFICIENT_FUNDS",
            details={"amount": str(amount), "balance": str(balance)},
        )
