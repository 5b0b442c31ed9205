"""
Bearer token extraction middleware.

Reads ``Authorization: Bearer <token>`` and stores the raw token on
``request.state.bearer_token`` (None when absent or malformed). The token is
resolved to a user id by the ``get_current_user_id`` dependency, inside the
request's database session.

Responsibility: Request credential extraction
"""

import logging
from typing import Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


def extract_bearer_token(header_value: Optional[str]) -> Optional[str]:
    """Raw token from an Authorization header value."""
    if not header_value or not header_value.lower().startswith(BEARER_PREFIX):
        return None
    token = header_value[len(BEARER_PREFIX):].strip()
    return token or None


class SessionAuthMiddleware(BaseHTTPMiddleware):
    """Middleware attaching the caller's bearer token to the request state."""

    async def dispatch(self, request: Request, call_next):
        """
        Process request and record its bearer token.

        Args:
            request: HTTP request
            call_next: Next middleware handler

        Returns:
            Response
        """
        header_value = request.headers.get("Authorization")
        request.state.bearer_token = extract_bearer_token(header_value)
        if header_value and request.state.bearer_token is None:
            logger.debug(f"Ignoring non-bearer Authorization header on {request.url.path}")
        return await call_next(request)
