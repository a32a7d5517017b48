"""
Vitrine Backend: Custom Exception Hierarchy
=============================================

What:  Defines application-specific exceptions for different error scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services and the authorization gate; caught by global handlers.
When:  During request processing when recoverable errors occur.

Exception Hierarchy:
    VitrineError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── AlreadyExistsError       → 400 Bad Request (one-shot seed / duplicate user)
    ├── AuthenticationError      → 401 Unauthorized (missing or invalid token)
    ├── InvalidCredentialsError  → 401 Unauthorized (wrong password)
    ├── NotFoundError            → 404 Not Found
    ├── RateLimitExceededError   → 429 Too Many Requests
    ├── FileStorageError         → 500 Internal Server Error
    └── DatabaseError            → 500 Internal Server Error

The `message` of every exception is safe to return to the client; the
`context` dict is logged server-side only.
"""

from typing import Any, Dict, Optional


class VitrineError(Exception):
    """
    Base exception for all Vitrine application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(VitrineError):
    """
    Raised when client input fails validation.

    When:    Missing upload, disallowed file type, size exceeded, malformed body.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Image is required",
            "details": {"field": "image"}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class AlreadyExistsError(VitrineError):
    """
    Raised when a create operation would duplicate existing data.

    When:    Registering a taken username, re-running a one-shot seed route.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AuthenticationError(VitrineError):
    """
    Raised by the authorization gate when a protected route is called
    without a usable bearer token.

    Both "no header" and "bad token" map to 401; `error_code` tells them apart
    in the response body.
    """

    def __init__(
        self,
        message: str = "Failed to authenticate token",
        error_code: str = "invalid_token",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.error_code = error_code


class InvalidCredentialsError(VitrineError):
    """Raised on login when the password does not match the stored hash. HTTP 401."""

    def __init__(
        self,
        message: str = "Invalid password",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(VitrineError):
    """
    Raised when a requested resource does not exist.

    When:    Login with an unknown username, updating an unknown package.
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing records; services convert that None
    into this exception. Deletes skip the existence check.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"The requested {resource} was not found"
            if resource_id:
                message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class FileStorageError(VitrineError):
    """
    Raised when file system operations fail.

    When:    Disk full, permission denied, directory not writable, I/O error.
    HTTP:    500 Internal Server Error (path details are logged, not returned)
    """

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(VitrineError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the SQL error is
    logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RateLimitExceededError(VitrineError):
    """
    Raised when a client exceeds the per-IP request rate limit.

    HTTP:    429 Too Many Requests, with a Retry-After header.
    """

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Rate limit exceeded. Please wait {retry_after} seconds before making more requests."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after
