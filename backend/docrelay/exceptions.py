"""
DocRelay Backend — Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for storage failures.
Why:   Lets services raise one typed error and leaves the HTTP rendering to
       the global handlers registered in main.py.
How:   Each exception carries a message and optional context dict.

Exception Hierarchy:
    DocRelayError (base)
    ├── StorageConnectionError  → surfaced through StorageOperationError
    └── StorageOperationError   → 500, text/plain "<action> failed: <message>"
"""

from typing import Any, Dict, Optional


class DocRelayError(Exception):
    """
    Base exception for all DocRelay application errors.

    Attributes:
        message:  Human-readable error description
        context:  Additional debug info (logged, not returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class StorageConnectionError(DocRelayError):
    """
    Raised when the MongoDB client cannot be created or the server cannot
    be reached.

    When:    Invalid URI, unreachable host, rejected credentials.
    """

    def __init__(
        self,
        message: str = "Could not connect to MongoDB",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StorageOperationError(DocRelayError):
    """
    Raised when a route's storage operation fails.

    What:    Wraps driver and connection errors for one operation.
    HTTP:    500 Internal Server Error, plain-text body
             "<action> failed: <message>".

    The driver message is returned to the client verbatim; there is no
    structured error body.

    Example:
        StorageOperationError("Read", "connection refused")
        → 500 "Read failed: connection refused"
    """

    def __init__(
        self,
        action: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["action"] = action
        super().__init__(message=message, context=ctx)
        self.action = action

    @property
    def response_text(self) -> str:
        return f"{self.action} failed: {self.message}"
