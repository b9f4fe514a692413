"""
Custom exception classes for the application.

Three failure classes exist in the planning engine:
    - invalid input: rejected before any computation (ValidationError, 422)
    - upstream unavailable: the inventory fetcher failed (ExternalServiceError, 503)
    - per-item degradation: never raised, resolved to safe defaults
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "INVALID_PLANNING_PARAMETERS")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class ExternalServiceError(AppError):
    """External service failure (503)."""

    def __init__(
        self,
        service: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code=f"{service.upper()}_ERROR",
            message=message,
            status_code=503,
            details={"service": service, **(details or {})}
        )


class DatabaseError(AppError):
    """Database operation failed (500)."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="DATABASE_ERROR",
            message=f"Database {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )


# ===================
# PLANNING INPUT ERRORS
# ===================

class InvalidPlanningParametersError(ValidationError):
    """Planning parameters outside their allowed ranges."""

    def __init__(self, errors: list[dict]):
        fields = sorted({str(e.get("field")) for e in errors})
        super().__init__(
            code="INVALID_PLANNING_PARAMETERS",
            message=f"Invalid planning parameters: {', '.join(fields)}",
            details={"errors": errors}
        )


class InvalidSKUListError(ValidationError):
    """SKU list contains blank entries."""

    def __init__(self, operation: str, invalid: list):
        super().__init__(
            code="INVALID_SKU_LIST",
            message=f"{operation} received blank SKU entries",
            details={"operation": operation, "invalid": invalid}
        )


class InvalidDayRangeError(ValidationError):
    """Sales history window must cover at least one day."""

    def __init__(self, day_range: int):
        super().__init__(
            code="INVALID_DAY_RANGE",
            message="Day range must be a positive number of days",
            details={"provided": day_range}
        )


# ===================
# UPSTREAM ERRORS
# ===================

class UpstreamUnavailableError(ExternalServiceError):
    """Inventory data fetcher failed; the batch cannot be processed."""

    def __init__(self, operation: str, message: str):
        super().__init__(
            service="inventory_data",
            message=f"Failed to {operation}: {message}",
            details={"operation": operation}
        )
        self.operation = operation
