"""
Movie API Backend — Custom Exception Hierarchy
=================================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly messages.
How:   Each exception class carries a message, an optional context dict, the
       HTTP status it maps to and a machine-readable error code.
       Global exception handlers (registered in main.py) turn them into
       structured JSON error responses.
Who:   Raised by services, security helpers and middleware; caught by global handlers.

Exception Hierarchy:
    MovieApiError (base, operational)
    ├── ValidationError          → 400 Bad Request (client can fix)
    │   ├── InvalidIdentifierError → 400 (malformed ObjectId)
    │   └── DuplicateFieldError    → 400 (unique constraint)
    ├── AuthenticationError      → 401 Unauthorized
    ├── NotFoundError            → 404 Not Found
    ├── RateLimitExceededError   → 429 Too Many Requests
    └── DatabaseError            → 500 Internal Server Error

    LinkResolutionError (RuntimeError, NOT a MovieApiError)
        A storage-layer contract violation. It is deliberately outside the
        operational hierarchy so the catch-all handler logs it with a stack
        trace and returns a generic 500.
"""

from typing import Any, Dict, Optional


class MovieApiError(Exception):
    """
    Base exception for all expected (operational) application errors.

    Attributes:
        message:      User-facing error description (safe to return in API response)
        context:      Additional debug info
        status_code:  HTTP status the global handler responds with
        error_code:   Machine-readable error identifier
    """

    status_code: int = 500
    error_code: str = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    @property
    def status(self) -> str:
        """'fail' for client errors, 'error' for server errors."""
        return "fail" if 400 <= self.status_code < 500 else "error"


class ValidationError(MovieApiError):
    """
    Raised when client input fails validation.

    When:    Missing required fields, out-of-range rating value, conflicting
             projection tokens, body schema violations.
    HTTP:    400 Bad Request
    """

    status_code = 400
    error_code = "validation_error"

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


class InvalidIdentifierError(ValidationError):
    """
    Raised when a path or body identifier is not a valid ObjectId.

    Example message: "Invalid _id: not-an-id."
    """

    error_code = "invalid_identifier"

    def __init__(self, field: str, value: Any):
        super().__init__(
            message=f"Invalid {field}: {value}.",
            field=field,
            context={"value": str(value)},
        )


class DuplicateFieldError(ValidationError):
    """
    Raised when an insert/update violates a unique index.

    HTTP:    400 Bad Request (the client chose a value that is already taken)
    """

    error_code = "duplicate_field"

    def __init__(self, value: Any, field: Optional[str] = None):
        super().__init__(
            message=f"Duplicate field value: {value}. Please use another value!",
            field=field,
        )


class AuthenticationError(MovieApiError):
    """
    Raised when a request lacks valid credentials.

    When:    Missing bearer token, malformed/expired JWT, wrong password,
             token whose user no longer exists.
    HTTP:    401 Unauthorized
    """

    status_code = 401
    error_code = "authentication_error"

    def __init__(
        self,
        message: str = "You are not logged in! Please log in to get access.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(MovieApiError):
    """
    Raised when a requested resource does not exist.

    When:    GET /api/v1/movies/{id} with an id that matches no document.
    HTTP:    404 Not Found
    """

    status_code = 404
    error_code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"No {resource} found with that ID"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class RateLimitExceededError(MovieApiError):
    """
    Raised when a client exceeds the per-IP request rate limit.

    HTTP:    429 Too Many Requests (with Retry-After header)
    """

    status_code = 429
    error_code = "rate_limit_exceeded"

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Too many requests from this IP. Please wait {retry_after} seconds before retrying."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after


class DatabaseError(MovieApiError):
    """
    Raised when MongoDB operations fail unexpectedly.

    Security Note:
        The message returned to the client is always generic. Driver details
        (server addresses, command documents) are logged server-side only.
    """

    status_code = 500
    error_code = "server_error"

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class LinkResolutionError(RuntimeError):
    """
    Raised when a record cannot be decorated with hypermedia links.

    A record without an identifier, or an unknown resource type tag, means
    the storage layer or a handler broke its contract. This is a programming
    error, not a client error.
    """
