"""
Notifications module interface.
"""

from typing import Protocol, runtime_checkable

from .models import EmailMessage


@runtime_checkable
class IMailer(Protocol):
    """Interface for transactional mail delivery."""

    async def deliver(self, message: EmailMessage) -> bool:
        """
        Deliver a message.

        Delivery failures are logged, never raised: mail is sent after the
        response has been produced and nothing is waiting on the outcome.

        Returns:
            True if the provider accepted the message, False otherwise
        """
        ...
