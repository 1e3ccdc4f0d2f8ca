"""
Core utilities for the city explore backend.
Provides exceptions, validation, geodesic math, logging and error handling.
"""

from .exceptions import (
    ErrorCode,
    ExploreException,
    ValidationError,
    UpstreamUnavailableError,
    SearchTimeoutError,
)

__all__ = [
    "ErrorCode",
    "ExploreException",
    "ValidationError",
    "UpstreamUnavailableError",
    "SearchTimeoutError",
]
