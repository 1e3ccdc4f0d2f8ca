"""
Custom exceptions for the city explore backend.
"""

from typing import Optional, Dict, Any, List
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for the application."""

    # Request errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Upstream geodata errors
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"
    SEARCH_TIMEOUT = "SEARCH_TIMEOUT"

    # Generic errors
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class ExploreException(Exception):
    """Base exception for the city explore backend."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code


class ValidationError(ExploreException):
    """Raised when coordinates, radii or tags are malformed. No network call is made."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.VALIDATION_ERROR,
            details=details,
            status_code=400
        )


class UpstreamUnavailableError(ExploreException):
    """Raised when every Overpass mirror failed or timed out for one radius."""

    def __init__(self, radius_m: float, failures: Optional[List[str]] = None):
        self.radius_m = radius_m
        self.failures = failures or []
        super().__init__(
            message="All geodata mirrors failed",
            error_code=ErrorCode.UPSTREAM_UNAVAILABLE,
            details={"radius_m": radius_m, "failures": self.failures},
            status_code=502
        )


class SearchTimeoutError(ExploreException):
    """Raised when the whole radius escalation exceeds its overall deadline."""

    def __init__(self, timeout_seconds: float, attempts: Optional[List[float]] = None):
        super().__init__(
            message=f"Place search timed out after {timeout_seconds:g} seconds",
            error_code=ErrorCode.SEARCH_TIMEOUT,
            details={"timeout_seconds": timeout_seconds, "attempts": attempts or []},
            status_code=504
        )
