"""
Adearn API package.

Provides the FastAPI application for the Adearn ad-earning service.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
