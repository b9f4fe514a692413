"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    ValidationError,
    ExternalServiceError,
    DatabaseError,

    # Planning input
    InvalidPlanningParametersError,
    InvalidSKUListError,
    InvalidDayRangeError,

    # Upstream
    UpstreamUnavailableError,
)

__all__ = [
    # Base
    "AppError",
    "ValidationError",
    "ExternalServiceError",
    "DatabaseError",

    # Planning input
    "InvalidPlanningParametersError",
    "InvalidSKUListError",
    "InvalidDayRangeError",

    # Upstream
    "UpstreamUnavailableError",
]
