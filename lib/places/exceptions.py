"""
Places API Exceptions

This module contains custom exception classes for decoding failures
and API error responses of the places endpoints.
"""

import logging
from typing import Any, Dict, Optional

from .constants import (
    ERROR_CODE_COULD_NOT_AUTHENTICATE,
    ERROR_CODE_INTERNAL_ERROR,
    ERROR_CODE_INVALID_TOKEN,
    ERROR_CODE_NOT_FOUND,
    ERROR_CODE_OVER_CAPACITY,
    ERROR_CODE_RATE_LIMIT_EXCEEDED,
)

logger = logging.getLogger(__name__)


class PlacesError(Exception):
    """Base exception class for all places client errors, dood!

    Attributes:
        message: Human-readable error message
        code: Platform error code (if available)
        response: Raw API response data (if available)
    """

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        response: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.response = response
        logger.debug(f"{type(self).__name__}: {message} (code: {code})")

    def __str__(self) -> str:
        if self.code is not None:
            return f"{self.message} (code: {self.code})"
        return self.message


class DecodeError(PlacesError):
    """Raised when response JSON doesn't match expected structure.

    Covers missing envelope fields, malformed bounding boxes, unknown
    place type tags and bodies that are not JSON at all.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)


class NetworkError(PlacesError):
    """Raised when the request didn't reach the platform or got no answer.

    Wraps ``httpx`` timeouts and connection errors, original exception
    is available as ``__cause__``.
    """

    def __init__(
        self,
        message: str = "Network error occurred.",
        code: Optional[int] = None,
        response: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code, response)


class ApiError(PlacesError):
    """Raised when the API returns a non-success response.

    General-purpose class for errors that don't fit into more
    specific categories below.

    Attributes:
        statusCode: HTTP status code of the response
    """

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        response: Optional[Dict[str, Any]] = None,
        statusCode: Optional[int] = None,
    ) -> None:
        super().__init__(message, code, response)
        self.statusCode = statusCode


class AuthenticationError(ApiError):
    """Raised when the token is invalid, expired or lacks permissions."""


class NotFoundError(ApiError):
    """Raised when requested place (or endpoint) doesn't exist."""


class RateLimitError(ApiError):
    """Raised when the platform rate limit for the endpoint is exceeded.

    This module never retries, callers should wait for the reset time
    reported in rate limit headers.
    """


class ServiceUnavailableError(ApiError):
    """Raised when the platform is over capacity or failed internally."""


class ValidationError(ApiError):
    """Raised when the request was rejected as invalid (4xx)."""


def parseApiError(statusCode: int, responseData: Dict[str, Any]) -> ApiError:
    """Parse API error response and return appropriate exception.

    The platform reports errors as ``{"errors": [{"code": 34, "message": "..."}]}``,
    first error of the list is used. When platform code is unknown, HTTP status
    code decides the exception type.

    Args:
        statusCode: HTTP status code
        responseData: Parsed JSON response from API

    Returns:
        Appropriate exception instance based on error code and status
    """
    errorCode: Optional[int] = None
    errorMessage = "Unknown API error"

    errors = responseData.get("errors") if isinstance(responseData, dict) else None
    if isinstance(errors, list) and errors and isinstance(errors[0], dict):
        errorCode = errors[0].get("code")
        errorMessage = errors[0].get("message", errorMessage)
    elif isinstance(responseData, dict):
        errorMessage = responseData.get("error", responseData.get("message", errorMessage))

    kwargs = {"code": errorCode, "response": responseData, "statusCode": statusCode}

    # Map platform error codes to exception types
    if errorCode in (ERROR_CODE_COULD_NOT_AUTHENTICATE, ERROR_CODE_INVALID_TOKEN):
        return AuthenticationError(errorMessage, **kwargs)
    elif errorCode == ERROR_CODE_RATE_LIMIT_EXCEEDED:
        return RateLimitError(errorMessage, **kwargs)
    elif errorCode == ERROR_CODE_NOT_FOUND:
        return NotFoundError(errorMessage, **kwargs)
    elif errorCode in (ERROR_CODE_OVER_CAPACITY, ERROR_CODE_INTERNAL_ERROR):
        return ServiceUnavailableError(errorMessage, **kwargs)

    # Fallback to status code mapping
    if statusCode == 401:
        return AuthenticationError(errorMessage, **kwargs)
    elif statusCode == 429:
        return RateLimitError(errorMessage, **kwargs)
    elif statusCode == 404:
        return NotFoundError(errorMessage, **kwargs)
    elif 400 <= statusCode < 500:
        return ValidationError(errorMessage, **kwargs)
    elif 500 <= statusCode < 600:
        return ServiceUnavailableError(errorMessage, **kwargs)

    # Default to generic API error
    return ApiError(errorMessage, **kwargs)
