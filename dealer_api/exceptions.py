"""
Dealerships API — Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the failure modes of the API.
Why:   Each exception maps to one HTTP status code, so routes never build
       error responses by hand.
How:   Each exception carries a user-facing message and an optional context
       dict. Global handlers (registered in main.py) turn them into
       `{"error": <message>}` JSON responses.
Who:   Raised by repositories, routes and the startup lifespan.

Exception Hierarchy:
    DealerApiError (base)
    ├── ValidationError           → 400 Bad Request
    ├── NotFoundError             → 404 Not Found
    ├── DatabaseError             → 500 Internal Server Error
    ├── DatabaseConnectionError   → fatal at startup (process exits)
    └── SeedDataError             → logged during startup, never reaches HTTP
"""

from typing import Any, Dict, Optional


class DealerApiError(Exception):
    """
    Base exception for all application errors.

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


class ValidationError(DealerApiError):
    """
    Raised when client input is missing or malformed.

    When:    POST /insert_review without a body, non-numeric path ids,
             bodies that do not match the review schema.
    HTTP:    400 Bad Request
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


class NotFoundError(DealerApiError):
    """
    Raised when a single requested document does not exist.

    When:    GET /fetchDealer/{id} with an id absent from the collection.
    HTTP:    404 Not Found

    The store returns None for a missing document; repositories convert that
    None into this exception so that it stays distinct from a store failure.
    """

    def __init__(
        self,
        message: str = "The requested resource was not found",
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(DealerApiError):
    """
    Raised when a store operation fails.

    HTTP:    500 Internal Server Error

    The message is fixed per operation ("Error fetching reviews", ...).
    The underlying driver error is kept in `context` and logged server-side.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseConnectionError(DealerApiError):
    """
    Raised when the store cannot be reached at startup.

    Never handled: it propagates out of the lifespan so uvicorn aborts
    startup and the process exits non-zero.
    """

    def __init__(
        self,
        message: str = "Could not connect to the document store",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class SeedDataError(DealerApiError):
    """Raised when a seed file cannot be read or has the wrong shape."""

    def __init__(
        self,
        message: str = "Seed data could not be loaded",
        path: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(message=message, context=ctx)
        self.path = path
