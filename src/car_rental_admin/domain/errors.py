"""Domain error classes.

Protocol-agnostic errors that represent business failures of the rental engine.
These errors are translated to HTTP responses by the delivery layer.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain errors.

    Protocol-agnostic. Contains business error information that
    can be translated to an HTTP (or any other) error format.
    """

    # Default error code (can be used as i18n key)
    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, **context: Any) -> None:
        """Create a domain error.

        Args:
            message: Human-readable error message (default locale)
            **context: Additional context for error (e.g., ids, timestamps)
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
    """Business rule validation error.

    Used for domain invariant violations and cross-field validation.

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
                   Example: [{"field": "planned_end_at", "message": "Must be after start_at"}]
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


class InvalidWindow(ValidationError):
    """Malformed or non-positive time range.

    Examples:
        - planned_end_at not after start_at
        - extension that does not move the planned end forward
        - return recorded before the rental started

    Protocol mappings:
        - REST: 422 Unprocessable Entity
    """

    error_code: str = "INVALID_WINDOW"


class InvalidRateType(DomainError):
    """Requested rate type cannot be priced.

    Protocol mappings:
        - REST: 400 Bad Request
    """

    error_code: str = "INVALID_RATE_TYPE"


class NoStrategyForRateType(InvalidRateType):
    """No pricing strategy is registered for the requested rate type."""

    def __init__(self, rate_type: Any) -> None:
        super().__init__(f"No pricing strategy for: {rate_type}", rate_type=str(rate_type))


class NotFoundError(DomainError):
    """Resource not found.

    Examples:
        - Car with ID not found
        - Rental not found
        - Customer doesn't exist

    Protocol mappings:
        - REST: 404 Not Found
    """

    error_code: str = "NOT_FOUND"

    def __init__(self, resource: str, identifier: Any = None, **context: Any) -> None:
        """Create a not found error.

        Args:
            resource: Type of resource (e.g., "Car", "Rental")
            identifier: Resource identifier
            **context: Additional context
        """
        if identifier is not None:
            identifier = str(identifier)
            message = f"{resource} with identifier '{identifier}' not found"
        else:
            message = f"{resource} not found"

        super().__init__(message, resource=resource, identifier=identifier, **context)


class ConflictError(DomainError):
    """Business constraint conflict.

    Examples:
        - Booking collides with another reservation
        - State transition not allowed

    Protocol mappings:
        - REST: 409 Conflict
    """

    error_code: str = "CONFLICT"


class CarUnavailable(ConflictError):
    """The car cannot be reserved for the requested window."""

    error_code: str = "CAR_UNAVAILABLE"


class InvalidState(ConflictError):
    """Lifecycle operation attempted from a terminal or wrong state."""

    error_code: str = "INVALID_STATE"
