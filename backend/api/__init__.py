"""
Shipmates API package.

Provides the FastAPI application for the Shipmates backend.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
