"""
Places API Client Library

This module provides a Python async client for the places (geo) endpoints of
the Twitter API v1.1 with type-safe results: reverse geocoding of a coordinate
and location search by coordinate, free-text query or IP address.

Example usage:
    from lib.places import Accuracy, PlaceType, Token, reverseGeocode, searchQuery

    token = Token(bearer="your_bearer_token")

    # Reverse geocoding
    result = await reverseGeocode(37.78, -122.40).accuracy(Accuracy.feet(50)).call(token)
    for place in result.response.results:
        print(place.full_name, place.place_type)

    # Location search
    builder = searchQuery("Seattle").granularity(PlaceType.CITY).maxResults(5)
    print(builder.url())  # request URL, nothing is sent
    result = await builder.call(token)
"""

from lib.places.api import (
    replayReverseGeocode,
    replaySearch,
    reverseGeocode,
    reverseGeocodeUrl,
    searchIp,
    searchPoint,
    searchQuery,
    searchUrl,
    show,
)
from lib.places.auth import Token
from lib.places.builders import GeocodeBuilder, SearchBuilder
from lib.places.exceptions import (
    ApiError,
    AuthenticationError,
    DecodeError,
    NetworkError,
    NotFoundError,
    PlacesError,
    RateLimitError,
    ServiceUnavailableError,
    ValidationError,
)
from lib.places.models import Accuracy, AccuracyUnit, Place, PlaceType, SearchResult
from lib.places.transport import RateLimitStatus, Response

__all__ = [
    "reverseGeocode",
    "searchPoint",
    "searchQuery",
    "searchIp",
    "reverseGeocodeUrl",
    "searchUrl",
    "replayReverseGeocode",
    "replaySearch",
    "show",
    "GeocodeBuilder",
    "SearchBuilder",
    "Token",
    "Place",
    "PlaceType",
    "Accuracy",
    "AccuracyUnit",
    "SearchResult",
    "Response",
    "RateLimitStatus",
    "PlacesError",
    "DecodeError",
    "NetworkError",
    "ApiError",
    "AuthenticationError",
    "NotFoundError",
    "RateLimitError",
    "ServiceUnavailableError",
    "ValidationError",
]
