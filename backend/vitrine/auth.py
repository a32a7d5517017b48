"""
Vitrine Backend: Authorization Gate
=====================================

What:  FastAPI dependency guarding the admin routes.
How:   Reads `Authorization: <scheme> <token>`, verifies the token with the
       process-wide TokenService, stores the user id on `request.state`.
Who:   Attached to protected routes with `Depends(require_admin)`.
When:  Before the handler (and before the request body is used).

Outcomes:
    header missing                  → 401 authentication_required
    fewer than two parts            → 401 invalid_token
    bad signature / expired / junk  → 401 invalid_token
    valid                           → handler runs; returns the user id

The gate keeps no state between requests.
"""

import logging

from fastapi import Request

from vitrine.exceptions import AuthenticationError
from vitrine.services.security import token_service

logger = logging.getLogger(__name__)


def extract_token(header_value: str) -> str:
    """
    Second whitespace-separated part of the header value.

    The scheme itself is not checked ("Bearer", "JWT" and "Token" are all
    accepted); only the token matters.
    """
    parts = header_value.split()
    if len(parts) < 2:
        raise AuthenticationError(
            message="Malformed Authorization header. Use: Bearer <token>",
            error_code="invalid_token",
        )
    return parts[1]


async def require_admin(request: Request) -> str:
    header_value = request.headers.get("Authorization")
    if not header_value:
        raise AuthenticationError(
            message="No token provided",
            error_code="authentication_required",
        )

    token = extract_token(header_value)
    user_id = token_service.verify(token)

    request.state.user_id = user_id
    logger.debug("Authorized user %s for %s %s", user_id, request.method, request.url.path)
    return user_id
