"""Domain error classes.

Protocol-agnostic errors that represent business and synchronization failures.
These errors are translated to appropriate formats (HTTP, UI notifications) by adapters.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain errors.

    Contains business error information that can be translated to HTTP
    responses or user notifications.
    """

    # Default error code (can be used as i18n key)
    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, **context: Any) -> None:
        """Create a domain error.

        Args:
            message: Human-readable error message (default locale)
            **context: Additional context for error (e.g., field names, values)
        """
        self.message = message
        self.context = context
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured format for protocol translation."""
        return {
            "message": self.message,
            "code": self.error_code,
            **self.context,
        }


class ValidationError(DomainError):
    """Client-side constraint violation.

    Raised before any network call is made, never surfaced as a network failure.

    Examples:
        - year outside 1900..next year
        - negative mileage
        - VIN that is not exactly 17 characters

    Protocol mappings:
        - REST: 422 Unprocessable Entity
    """

    error_code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, str]] | None = None,
        **context: Any,
    ) -> None:
        """Create a validation error.

        Args:
            message: Overall validation error message (optional if errors provided)
            errors: List of field-specific errors, each with 'field' and 'message'
                   Example: [{"field": "vin", "message": "Must be exactly 17 characters"}]
            **context: Additional context
        """
        self.errors: list[dict[str, str]] | None
        if errors:
            self.errors = errors
            msg = message or "Validation failed"
        else:
            self.errors = None
            msg = message or "Validation error"

        super().__init__(msg, **context)

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured format."""
        if self.errors:
            return {
                "message": self.message,
                "code": self.error_code,
                "errors": self.errors,
                **self.context,
            }
        return super().to_dict()


class NotFoundError(DomainError):
    """Operation referenced an id absent from the canonical collection or store.

    Protocol mappings:
        - REST: 404 Not Found
    """

    error_code: str = "NOT_FOUND"

    def __init__(self, resource: str, identifier: str | None = None, **context: Any) -> None:
        """Create a not found error.

        Args:
            resource: Type of resource (e.g., "Vehicle")
            identifier: Resource identifier
            **context: Additional context
        """
        if identifier:
            message = f"{resource} with identifier '{identifier}' not found"
        else:
            message = f"{resource} not found"

        super().__init__(message, resource=resource, identifier=identifier, **context)


class ConflictError(DomainError):
    """Store constraint violation.

    Examples:
        - Duplicate VIN
        - Check constraint rejected by the persistence service

    Protocol mappings:
        - REST: 409 Conflict
    """

    error_code: str = "CONFLICT"


class BusyError(DomainError):
    """Mutation rejected because another mutation is still in flight.

    Protocol mappings:
        - REST: 409 Conflict
    """

    error_code: str = "BUSY"

    def __init__(self, message: str = "Another vehicle operation is in progress", **context: Any) -> None:
        super().__init__(message, **context)


class RepositoryConnectionError(DomainError):
    """Remote store call failed or the store was unreachable.

    Raised by repository adapters only.

    Protocol mappings:
        - REST: 503 Service Unavailable
    """

    error_code: str = "CONNECTION_ERROR"


class SyncError(DomainError):
    """The local collection could not be synchronized with the remote store.

    Raised by the collection manager; the underlying
    RepositoryConnectionError is chained as ``__cause__``.

    Protocol mappings:
        - REST: 503 Service Unavailable
    """

    error_code: str = "SYNC_ERROR"


class InternalError(DomainError):
    """Internal domain error (unexpected conditions).

    Should be logged for investigation.

    Protocol mappings:
        - REST: 500 Internal Server Error
    """

    error_code: str = "INTERNAL_ERROR"
