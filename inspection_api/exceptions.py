"""
Inspection Data API — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception carries a client-safe message and an optional context
       dict. Global handlers (registered in main.py) translate them into
       structured JSON error responses with the matching HTTP status.
Who:   Raised by the authorization dependency and the route handlers.

Exception Hierarchy:
    InspectionApiError (base)
    ├── NotFoundError                → 404 Not Found
    ├── AuthenticationError          → 401 Unauthorized
    ├── AuthorizationError           → 403 Forbidden
    └── InspectionDataServiceError   → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class InspectionApiError(Exception):
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


class NotFoundError(InspectionApiError):
    """
    Raised when a requested inspection data record (or its image link) does not exist.

    HTTP:    404 Not Found

    The service layer signals absence with None; route handlers convert that
    into this exception with a message naming the identifier that was asked for.
    """

    def __init__(
        self,
        message: str = "The requested resource was not found",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id


class AuthenticationError(InspectionApiError):
    """
    Raised when the request carries no bearer token, or one that fails verification.

    HTTP:    401 Unauthorized (with `WWW-Authenticate: Bearer`)
    """

    def __init__(
        self,
        message: str = "Not authenticated",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AuthorizationError(InspectionApiError):
    """
    Raised when an authenticated caller holds none of the roles an endpoint accepts.

    HTTP:    403 Forbidden
    """

    def __init__(
        self,
        message: str = "You do not have a role that permits this operation",
        required_roles: Optional[tuple] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if required_roles:
            ctx["required_roles"] = list(required_roles)
        super().__init__(message=message, context=ctx)


class InspectionDataServiceError(InspectionApiError):
    """
    Raised when a call to the inspection data service fails unexpectedly.

    What:    Query, lookup or connection failure inside the data service.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. The original
    exception is chained (`raise ... from e`) and logged server-side.
    """

    def __init__(
        self,
        message: str = "An internal error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
