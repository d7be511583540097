"""
Celestia API package.

Provides the FastAPI application for Celestia profiles, credits and personas.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
