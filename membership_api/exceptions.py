"""
Membership API - Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching status code.
Who:   Raised by repositories and routes; caught by global handlers.

Exception Hierarchy:
    MembershipAPIError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error
"""

from typing import Any, Dict, List, Optional


class MembershipAPIError(Exception):
    """
    Base exception for all Membership API errors.

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


class ValidationError(MembershipAPIError):
    """
    Raised when a member or course payload fails type validation.

    HTTP: 400 Bad Request. `errors` holds one entry per offending field
    ({"loc", "msg", "type"}) and is returned to the client as `details`.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        errors: Optional[List[Dict[str, Any]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.errors = errors or []

    @classmethod
    def from_pydantic(cls, exc, resource: str) -> "ValidationError":
        """Builds a ValidationError from a pydantic.ValidationError."""
        errors = [
            {
                "loc": list(err.get("loc", ())),
                "msg": err.get("msg", ""),
                "type": err.get("type", ""),
            }
            for err in exc.errors()
        ]
        return cls(
            message=f"Invalid {resource} data",
            errors=errors,
            context={"resource": resource},
        )


class NotFoundError(MembershipAPIError):
    """
    Raised when a requested member or course does not exist.

    HTTP: 404 Not Found. Repositories return None for missing records on
    get/delete; routes convert that None into this exception.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource.capitalize()} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class DatabaseError(MembershipAPIError):
    """
    Raised when a store operation fails (connection lost, query error, etc.).

    HTTP: 500 Internal Server Error. The response message is always generic;
    the driver error is kept in `context` and logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
