"""
API Middleware Package
======================
Middleware components for FastAPI application.
"""

from .session_auth import SessionAuthMiddleware, extract_bearer_token

__all__ = ["SessionAuthMiddleware", "extract_bearer_token"]
