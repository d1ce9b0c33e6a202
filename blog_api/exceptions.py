"""
Blog API — Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions for the few error scenarios the service has.
Why:   Handlers map each type to one HTTP status code and a consistent JSON body,
       without try/except blocks in every route.
How:   Each exception carries a user-facing message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and return
       structured JSON error responses.
Who:   Raised by the store adapter and route handlers; caught by global handlers.

Exception Hierarchy:
    BlogAPIError (base)
    ├── BadRequestError  → 400 Bad Request (path/body id mismatch)
    ├── NotFoundError    → 404 Not Found (read of an absent post)
    └── StoreError       → 500 Internal Server Error (MongoDB failure)

Absence on update and delete is not an error: those operations succeed
silently when the id matches nothing.
"""

from typing import Any, Dict, Optional


class BlogAPIError(Exception):
    """
    Base exception for all Blog API application errors.

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


class BadRequestError(BlogAPIError):
    """
    Raised when the client sent a request that contradicts itself.

    When:    PUT /posts/{id} with a body `id` that differs from the path id.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Bad request",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(BlogAPIError):
    """
    Raised when a requested resource does not exist.

    When:    GET /posts/{id} with an id that matches no document.
    HTTP:    404 Not Found

    The store adapter returns None for missing documents; the route layer
    converts that None into this exception.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StoreError(BlogAPIError):
    """
    Raised when a document store operation fails.

    When:    MongoDB unreachable, connection dropped mid-operation, server error.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. Driver error
    details are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
