"""
Places API Constants

This module contains endpoint URLs, wire parameter names and limits
for the places (geo) family of endpoints.
"""

from typing import Final

VERSION: Final[str] = "0.1.0"

# API Configuration
API_BASE_URL: Final[str] = "https://api.twitter.com/1.1"
DEFAULT_TIMEOUT: Final[int] = 30

# API Endpoints
REVERSE_GEOCODE: Final[str] = f"{API_BASE_URL}/geo/reverse_geocode.json"
SEARCH: Final[str] = f"{API_BASE_URL}/geo/search.json"
SHOW_STEM: Final[str] = f"{API_BASE_URL}/geo/id/"

# HTTP
HTTP_GET: Final[str] = "GET"
CONTENT_TYPE_JSON: Final[str] = "application/json"
AUTH_HEADER: Final[str] = "Authorization"
USER_AGENT: Final[str] = f"places-client/{VERSION}"

# Rate limit headers
HEADER_RATE_LIMIT: Final[str] = "x-rate-limit-limit"
HEADER_RATE_LIMIT_REMAINING: Final[str] = "x-rate-limit-remaining"
HEADER_RATE_LIMIT_RESET: Final[str] = "x-rate-limit-reset"

# Query parameters
PARAM_LATITUDE: Final[str] = "lat"
PARAM_LONGITUDE: Final[str] = "long"
PARAM_QUERY: Final[str] = "query"
PARAM_IP: Final[str] = "ip"
PARAM_ACCURACY: Final[str] = "accuracy"
PARAM_GRANULARITY: Final[str] = "granularity"
PARAM_MAX_RESULTS: Final[str] = "max_results"
PARAM_CONTAINED_WITHIN: Final[str] = "contained_within"
PARAM_ATTRIBUTE_PREFIX: Final[str] = "attribute:"

# Limits
GEOCODE_MAX_RESULTS: Final[int] = 20

# Platform error codes
ERROR_CODE_COULD_NOT_AUTHENTICATE: Final[int] = 32
ERROR_CODE_NOT_FOUND: Final[int] = 34
ERROR_CODE_RATE_LIMIT_EXCEEDED: Final[int] = 88
ERROR_CODE_INVALID_TOKEN: Final[int] = 89
ERROR_CODE_OVER_CAPACITY: Final[int] = 130
ERROR_CODE_INTERNAL_ERROR: Final[int] = 131
