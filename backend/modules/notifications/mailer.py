"""
Resend-backed mailer.

The Resend SDK is synchronous, so each attempt runs in a worker thread.
Without an API key the mailer logs and skips delivery, which keeps local
development and tests free of outbound calls.
"""

import asyncio
import logging

import resend

from .interfaces import IMailer
from .models import EmailMessage

logger = logging.getLogger(__name__)


class ResendMailer(IMailer):
    """Deliver mail through Resend with bounded, linearly backed-off retries."""

    def __init__(
        self,
        api_key: str,
        from_email: str,
        max_attempts: int = 3,
        backoff_seconds: float = 2.0,
    ):
        self._api_key = api_key
        self._from_email = from_email
        self._max_attempts = max(1, max_attempts)
        self._backoff_seconds = backoff_seconds

    async def deliver(self, message: EmailMessage) -> bool:
        if not self._api_key:
            logger.warning("Mail not sent to %s: RESEND_API_KEY is not set", message.to)
            return False

        resend.api_key = self._api_key
        params = {
            "from": self._from_email,
            "to": [message.to],
            "subject": message.subject,
            "html": message.html,
        }

        for attempt in range(1, self._max_attempts + 1):
            try:
                await asyncio.to_thread(resend.Emails.send, params)
                logger.info("Mail '%s' sent to %s", message.subject, message.to)
                return True
            except Exception as e:
                # Any provider or transport failure counts as a failed attempt
                logger.warning(
                    "Mail attempt %d/%d to %s failed: %s",
                    attempt, self._max_attempts, message.to, e,
                )
                if attempt < self._max_attempts:
                    await asyncio.sleep(self._backoff_seconds * attempt)

        logger.error("Giving up on mail '%s' to %s", message.subject, message.to)
        return False
