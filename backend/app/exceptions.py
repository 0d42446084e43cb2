"""
Trainer API Backend: Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the error scenarios of the service.
Why:   Each exception maps to one HTTP status in the global handlers, so route
       handlers never build error responses themselves.
How:   Each exception carries a message and an optional context dict.
       Handlers registered in main.py turn them into `{code, message}` envelopes.
Who:   Raised by the repository, the config loader and the database connector.

Exception Hierarchy:
    TrainerAPIError (base)                → 500
    ├── ValidationError                   → 400 Bad Request
    ├── NotFoundError                     → 400 Bad Request (public contract)
    ├── DatabaseError                     → 502 Bad Gateway
    ├── ConfigurationError                → fatal at startup
    └── DatabaseConnectionError           → fatal at startup
"""

from typing import Any, Dict, Optional

# Prefix of every message that originates from the document store
MONGO_ERROR_PREFIX = "[MongoBD] "


class TrainerAPIError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  Error description returned in the envelope
        context:  Additional debug info (logged, never returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(TrainerAPIError):
    """
    Raised when client input cannot be bound.

    HTTP: 400 Bad Request. The message is deliberately generic: binding
    failures do not report field-level detail.
    """

    def __init__(
        self,
        message: str = "binding json error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(TrainerAPIError):
    """
    Raised when a lookup matches no document.

    HTTP: 400 Bad Request. Clients of the trainer API have always received
    400 for a missing trainer, so the status is kept even though the
    exception is distinct from DatabaseError.
    """

    def __init__(
        self,
        resource: str = "trainer",
        key: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if key is not None:
            ctx["key"] = key
        super().__init__(
            message=MONGO_ERROR_PREFIX + "no documents in result",
            context=ctx,
        )
        self.resource = resource
        self.key = key


class DatabaseError(TrainerAPIError):
    """
    Raised when a query, insert or delete fails in the driver.

    HTTP: 502 Bad Gateway. The database is an upstream dependency, so its
    failures are reported apart from client mistakes.

    The driver message is kept in the envelope behind the `[MongoBD] ` prefix;
    the operation name and exception type go to the log only.
    """

    def __init__(
        self,
        driver_message: str,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if operation:
            ctx["operation"] = operation
        super().__init__(message=MONGO_ERROR_PREFIX + driver_message, context=ctx)
        self.operation = operation


class ConfigurationError(TrainerAPIError):
    """
    Raised when startup configuration is unusable.

    When: Credential file missing, unreadable or malformed.
    Effect: The lifespan propagates it and the server refuses to start.
    """

    def __init__(
        self,
        message: str = "Configuration is invalid",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseConnectionError(TrainerAPIError):
    """
    Raised when the initial connection or ping to MongoDB fails.

    No retry and no backoff: startup fails and the process exits.
    """

    def __init__(
        self,
        message: str = "Could not connect to MongoDB",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
