"""
Notifications module data models.
"""

from pydantic import BaseModel, EmailStr, Field


class EmailMessage(BaseModel):
    """A single outgoing HTML email."""

    to: EmailStr = Field(..., description="Recipient address")
    subject: str = Field(..., description="Subject line")
    html: str = Field(..., description="HTML body")

    model_config = {"frozen": True}
