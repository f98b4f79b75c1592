"""
WordTally Backend — Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for the failure modes of the API.
Why:   Each exception maps to one HTTP status code in the global handlers
       (registered in main.py), so services raise and never format responses.
How:   Every exception carries a user-safe message and an optional context
       dict. Context is logged server-side and never returned to the client.

Exception Hierarchy:
    WordTallyError (base)
    ├── ValidationError   → 400 Bad Request
    ├── AuthError         → 401 Unauthorized
    ├── ConflictError     → 400 Bad Request (URL already counted)
    ├── NotFoundError     → 404 Not Found
    ├── UpstreamError     → 500 Internal Server Error (page fetch failed)
    └── DatabaseError     → 500 Internal Server Error

Anything else is answered with 500 and UNEXPECTED_ERROR_MESSAGE.
"""

from typing import Any, Dict, Optional

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again or contact support."


class WordTallyError(Exception):
    """
    Base exception for all WordTally application errors.

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


class ValidationError(WordTallyError):
    """
    Raised when client input fails a business validation rule.

    Schema violations are caught earlier by FastAPI and mapped to the same
    400 response; this exception covers checks that need code, such as a URL
    without a host.
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


class AuthError(WordTallyError):
    """
    Raised when a request cannot be tied to a live account.

    When:    Missing or malformed Authorization header, bad signature, expired
             token, a token whose user no longer exists, wrong password,
             signup with an email that is already registered.
    HTTP:    401 Unauthorized
    """

    def __init__(
        self,
        message: str = "Unauthorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConflictError(WordTallyError):
    """
    Raised when a user adds a URL they have already counted.

    HTTP:    400 Bad Request (the public API reports duplicates as 400)
    """

    def __init__(
        self,
        message: str = "URL already counted",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(WordTallyError):
    """
    Raised when a requested resource does not exist for the requesting user.

    Records owned by another user are reported the same way as missing ones,
    so ids cannot be probed across accounts.
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


class UpstreamError(WordTallyError):
    """
    Raised when the page behind a submitted URL cannot be fetched.

    When:    DNS failure, connection refused, timeout, or an HTTP error status
             from the remote server.
    HTTP:    500 Internal Server Error
    No retry is attempted; the client may submit the URL again.
    """

    def __init__(
        self,
        message: str = "Could not fetch the requested page",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(WordTallyError):
    """
    Raised when database operations fail unexpectedly.

    Security Note:
        The message returned to the client is always generic.
        Driver errors, SQL and constraint names are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
