"""
Notifications module.

Delivers transactional email (account activation, password reset).

Public API:
- IMailer: Interface for mail delivery
- EmailMessage: outgoing message
- ResendMailer: Resend-backed implementation with bounded retries
- activation_email / reset_password_email: message builders
"""

from .interfaces import IMailer
from .models import EmailMessage
from .mailer import ResendMailer
from .templates import activation_email, reset_password_email

__all__ = [
    "IMailer",
    "EmailMessage",
    "ResendMailer",
    "activation_email",
    "reset_password_email",
]
