"""
Places API HTTP transport

Authenticated GET helpers used by the builders: request construction,
URL formatting and JSON response decoding with error mapping.
A new HTTP session is created for each request to support proper
concurrent operations.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Mapping, Optional, TypeVar

import httpx

from .auth import Token
from .constants import (
    CONTENT_TYPE_JSON,
    DEFAULT_TIMEOUT,
    HEADER_RATE_LIMIT,
    HEADER_RATE_LIMIT_REMAINING,
    HEADER_RATE_LIMIT_RESET,
    HTTP_GET,
    USER_AGENT,
)
from .exceptions import DecodeError, NetworkError, parseApiError

logger = logging.getLogger(__name__)

T = TypeVar("T")

ParamList = Dict[str, str]


@dataclass(frozen=True, slots=True)
class RateLimitStatus:
    """Rate limit information reported by the platform for the called endpoint."""

    limit: int
    """Number of calls allowed in the current window"""
    remaining: int
    """Number of calls left in the current window"""
    reset: int
    """Unix timestamp when the window resets"""

    @classmethod
    def fromHeaders(cls, headers: Mapping[str, str]) -> Optional["RateLimitStatus"]:
        """Read rate limit headers, returns None if any of them is absent or not a number."""
        try:
            return cls(
                limit=int(headers[HEADER_RATE_LIMIT]),
                remaining=int(headers[HEADER_RATE_LIMIT_REMAINING]),
                reset=int(headers[HEADER_RATE_LIMIT_RESET]),
            )
        except (KeyError, ValueError):
            return None


@dataclass(frozen=True, slots=True)
class Response(Generic[T]):
    """Decoded API response together with rate limit information."""

    response: T
    """Decoded response body"""
    rateLimitStatus: Optional[RateLimitStatus] = None
    """Rate limit status of the endpoint, if reported"""


def buildUrl(url: str, params: Optional[ParamList] = None) -> str:
    """Append form-urlencoded query parameters to the endpoint URL.

    Args:
        url: Endpoint URL
        params: Query parameters in emission order

    Returns:
        Full request URL
    """
    if not params:
        return str(httpx.URL(url))
    return str(httpx.URL(url).copy_merge_params(params))


def get(url: str, token: Token, params: Optional[ParamList] = None) -> httpx.Request:
    """Construct authenticated GET request, dood!

    Args:
        url: Endpoint URL (may already contain a query string)
        token: Credentials to authenticate with
        params: Query parameters

    Returns:
        Request ready to be sent
    """
    headers = {
        "Accept": CONTENT_TYPE_JSON,
        "User-Agent": USER_AGENT,
    }
    headers.update(token.authHeaders())
    return httpx.Request(HTTP_GET, buildUrl(url, params), headers=headers)


async def requestWithJsonResponse(
    request: httpx.Request,
    decoder: Callable[[Any], T],
    *,
    timeout: float = DEFAULT_TIMEOUT,
) -> Response[T]:
    """Send request and decode JSON body, dood!

    Args:
        request: Request built with ``get``
        decoder: Function converting parsed JSON into resulting value
        timeout: HTTP request timeout in seconds

    Returns:
        Decoded response with rate limit status

    Raises:
        NetworkError: On timeout or connection problems
        ApiError: (or its subclass) on non-success HTTP status
        DecodeError: If body isn't valid JSON or doesn't match expected structure
    """
    logger.debug(f"Making {request.method} request to {request.url}")

    try:
        async with httpx.AsyncClient(timeout=timeout) as session:
            response = await session.send(request)
    except httpx.TimeoutException as e:
        logger.error(f"Request timeout: {e}")
        raise NetworkError(f"Request timeout: {type(e).__name__}#{e}") from e
    except httpx.RequestError as e:
        logger.error(f"Network error: {e}")
        raise NetworkError(f"Network error: {type(e).__name__}#{e}") from e

    if response.status_code != 200:
        try:
            errorData = response.json()
        except ValueError:
            errorData = {"message": response.text or "Unknown error"}

        logger.warning(f"API error: {response.status_code} {errorData}")
        raise parseApiError(response.status_code, errorData)

    try:
        data = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.error(f"Failed to parse JSON response: {e}")
        raise DecodeError(f"Invalid JSON response: {e}") from e

    logger.debug(f"API request successful: {response.status_code}")
    return Response(
        response=decoder(data),
        rateLimitStatus=RateLimitStatus.fromHeaders(response.headers),
    )
