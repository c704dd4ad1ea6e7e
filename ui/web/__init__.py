"""
Web UI Module - FastAPI-based web interface
===========================================

This module provides a browser chat page backed by a small JSON API:
- Chat page
- Message endpoint
- Rule table listing
- Status endpoint
"""

from .app import create_app, run_app
from .routes import router

__all__ = [
    "create_app",
    "run_app",
    "router",
]
