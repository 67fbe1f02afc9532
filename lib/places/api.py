"""
Places API entry points

Location search works in one of two ways. The most direct one is to take a
latitude/longitude coordinate and call ``reverseGeocode``: it shows which
places are in that point or area. If you intend to let a user select from a
list of locations, use the ``search*`` functions instead: they accept the same
parameters, but results may be re-ordered for the authenticated user and may
include nearby places.

Along with the list of places, the platform returns the full search URL,
``replayReverseGeocode`` and ``replaySearch`` repeat the same search from it.
"""

import json
import logging
from urllib.parse import quote

from . import transport
from .auth import Token
from .builders import GeocodeBuilder, PlaceQuery, SearchBuilder
from .constants import DEFAULT_TIMEOUT, SHOW_STEM
from .exceptions import DecodeError
from .models import Place, SearchResult
from .transport import Response

logger = logging.getLogger(__name__)


def reverseGeocode(latitude: float, longitude: float) -> GeocodeBuilder:
    """Begin building a reverse geocode search with the given coordinate."""
    return GeocodeBuilder(latitude, longitude)


def searchPoint(latitude: float, longitude: float) -> SearchBuilder:
    """Begin building a location search via latitude/longitude."""
    return SearchBuilder(PlaceQuery.latLon(latitude, longitude))


def searchQuery(text: str) -> SearchBuilder:
    """Begin building a location search via free-text query."""
    return SearchBuilder(PlaceQuery.query(text))


def searchIp(address: str) -> SearchBuilder:
    """Begin building a location search via IP address."""
    return SearchBuilder(PlaceQuery.ipAddress(address))


def reverseGeocodeUrl(builder: GeocodeBuilder) -> str:
    """Format request URL of the configured reverse geocode search without sending it."""
    return builder.url()


def searchUrl(builder: SearchBuilder) -> str:
    """Format request URL of the configured location search without sending it."""
    return builder.url()


def _unquoteUrl(url: str) -> str:
    # SearchResult.url holds JSON string form of the URL, quote marks included
    url = url.strip()
    if len(url) >= 2 and url.startswith('"') and url.endswith('"'):
        try:
            url = json.loads(url)
        except ValueError as e:
            raise DecodeError(f"Malformed search URL {url!r}: {e}") from e
    return url


async def replayReverseGeocode(url: str, token: Token, *, timeout: float = DEFAULT_TIMEOUT) -> Response[SearchResult]:
    """Perform the same reverse geocode search again using ``SearchResult.url`` of a previous call."""
    request = transport.get(_unquoteUrl(url), token)
    return await transport.requestWithJsonResponse(request, SearchResult.from_dict, timeout=timeout)


async def replaySearch(url: str, token: Token, *, timeout: float = DEFAULT_TIMEOUT) -> Response[SearchResult]:
    """Perform the same location search again using ``SearchResult.url`` of a previous call."""
    request = transport.get(_unquoteUrl(url), token)
    return await transport.requestWithJsonResponse(request, SearchResult.from_dict, timeout=timeout)


async def show(placeId: str, token: Token, *, timeout: float = DEFAULT_TIMEOUT) -> Response[Place]:
    """Load the place with the given ID, dood!

    Args:
        placeId: Alphanumeric place ID (e.g. from ``Place.id``)
        token: Credentials to authenticate with
        timeout: HTTP request timeout in seconds

    Returns:
        Response with the decoded place
    """
    logger.debug(f"Loading place {placeId}")
    # ID goes into the path, so "/", "?" and "#" must not leak out of it
    request = transport.get(f"{SHOW_STEM}{quote(placeId, safe='')}.json", token)
    return await transport.requestWithJsonResponse(request, Place.from_dict, timeout=timeout)
