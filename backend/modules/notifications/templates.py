"""
Message builders for account mail.
"""

from html import escape
from typing import Optional

from .models import EmailMessage


def activation_email(
    to: str,
    name: str,
    link: str,
    code: Optional[str] = None,
    app_name: str = "Adearn",
) -> EmailMessage:
    """Build the account activation message."""
    html = f"<p>Hi {escape(name)},</p><p>Welcome to {escape(app_name)}.</p>"
    if code:
        html += f"<p>Your activation code is <strong>{escape(code)}</strong>.</p>"
    html += f'<p>Or activate your account with this link: <a href="{escape(link)}">{escape(link)}</a></p>'
    return EmailMessage(to=to, subject=f"Activate your {app_name} account", html=html)


def reset_password_email(
    to: str,
    name: str,
    link: str,
    app_name: str = "Adearn",
) -> EmailMessage:
    """Build the password reset message."""
    html = (
        f"<p>Hi {escape(name)},</p>"
        f'<p>Reset your password here: <a href="{escape(link)}">{escape(link)}</a></p>'
        "<p>If you did not ask for this, you can ignore this email.</p>"
    )
    return EmailMessage(to=to, subject=f"Reset your {app_name} password", html=html)
