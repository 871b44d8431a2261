"""
Noteshare API package.

Provides the FastAPI application for the Noteshare notes service.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
