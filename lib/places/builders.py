"""
Places search builders

Both query methods have several optional parameters, so each one is assembled
as a builder. Every setter returns a new builder, the original one stays
untouched, so partial configurations can be shared safely. When ready, hand
your token to ``call`` to perform the search, or use ``url`` to get the
request URL without sending anything.
"""

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Dict, Optional, Tuple

from lib import utils

from . import transport
from .auth import Token
from .constants import (
    DEFAULT_TIMEOUT,
    GEOCODE_MAX_RESULTS,
    PARAM_ACCURACY,
    PARAM_ATTRIBUTE_PREFIX,
    PARAM_CONTAINED_WITHIN,
    PARAM_GRANULARITY,
    PARAM_IP,
    PARAM_LATITUDE,
    PARAM_LONGITUDE,
    PARAM_MAX_RESULTS,
    PARAM_QUERY,
    REVERSE_GEOCODE,
    SEARCH,
)
from .models import Accuracy, PlaceType, SearchResult
from .transport import ParamList, Response

logger = logging.getLogger(__name__)


class PlaceQueryKind(StrEnum):
    """Kind of location search query"""

    LAT_LON = "lat_lon"
    QUERY = "query"
    IP_ADDRESS = "ip_address"


@dataclass(frozen=True, slots=True)
class PlaceQuery:
    """
    Tagged location search query: coordinate, free text or IP address.

    Only fields relevant to ``kind`` are set.
    """

    kind: PlaceQueryKind
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    text: Optional[str] = None

    @classmethod
    def latLon(cls, latitude: float, longitude: float) -> "PlaceQuery":
        return cls(kind=PlaceQueryKind.LAT_LON, latitude=latitude, longitude=longitude)

    @classmethod
    def query(cls, text: str) -> "PlaceQuery":
        return cls(kind=PlaceQueryKind.QUERY, text=text)

    @classmethod
    def ipAddress(cls, address: str) -> "PlaceQuery":
        return cls(kind=PlaceQueryKind.IP_ADDRESS, text=address)

    def toParams(self) -> ParamList:
        """Get query-specific parameters."""
        match self.kind:
            case PlaceQueryKind.LAT_LON:
                return {
                    PARAM_LATITUDE: utils.formatDecimal(self.latitude),  # pyright: ignore[reportArgumentType]
                    PARAM_LONGITUDE: utils.formatDecimal(self.longitude),  # pyright: ignore[reportArgumentType]
                }
            case PlaceQueryKind.QUERY:
                return {PARAM_QUERY: str(self.text)}
            case PlaceQueryKind.IP_ADDRESS:
                return {PARAM_IP: str(self.text)}
            case _:
                raise ValueError(f"Unknown place query kind: {self.kind}")


class GeocodeBuilder:
    """Reverse geocode query before it is sent, dood!

    Reverse geocoding provides "raw data access": it shows which places
    are in the given point or area.

    Example:
        >>> result = await reverseGeocode(37.78, -122.40).granularity(PlaceType.CITY).call(token)
        >>> for place in result.response.results:
        ...     print(place.full_name)
    """

    __slots__ = ("coordinate", "_accuracy", "_granularity", "_maxResults")

    def __init__(
        self,
        latitude: float,
        longitude: float,
        *,
        accuracy: Optional[Accuracy] = None,
        granularity: Optional[PlaceType] = None,
        maxResults: Optional[int] = None,
    ) -> None:
        self.coordinate: Tuple[float, float] = (latitude, longitude)
        self._accuracy = accuracy
        self._granularity = granularity
        self._maxResults = int(maxResults) if maxResults is not None else None

    def _copyWith(self, **changes: Any) -> "GeocodeBuilder":
        kwargs: Dict[str, Any] = {
            "accuracy": self._accuracy,
            "granularity": self._granularity,
            "maxResults": self._maxResults,
        }
        kwargs.update(changes)
        return GeocodeBuilder(self.coordinate[0], self.coordinate[1], **kwargs)

    def accuracy(self, accuracy: Accuracy) -> "GeocodeBuilder":
        """Expand the area to search to the given radius. By default, this is zero.

        If coming from a device, this is whatever accuracy the device has
        measuring its location (GPS, WiFi triangulation, etc.).
        """
        return self._copyWith(accuracy=accuracy)

    def granularity(self, granularity: PlaceType) -> "GeocodeBuilder":
        """Set the minimal specificity of results. For example, ``PlaceType.CITY``
        excludes neighborhoods and points from the result."""
        return self._copyWith(granularity=granularity)

    def maxResults(self, maxResults: int) -> "GeocodeBuilder":
        """Hint how many "nearby" results to return.

        Default and maximum is 20: zero or a number greater than 20 is
        replaced with 20 before sending. Value is truncated to an integer.
        """
        return self._copyWith(maxResults=maxResults)

    def toParams(self) -> ParamList:
        """Assemble query parameters in emission order."""
        params: ParamList = {
            PARAM_LATITUDE: utils.formatDecimal(self.coordinate[0]),
            PARAM_LONGITUDE: utils.formatDecimal(self.coordinate[1]),
        }
        if self._accuracy is not None:
            params[PARAM_ACCURACY] = str(self._accuracy)
        if self._granularity is not None:
            params[PARAM_GRANULARITY] = str(self._granularity)
        if self._maxResults is not None:
            count = self._maxResults
            if count <= 0 or count > GEOCODE_MAX_RESULTS:
                count = GEOCODE_MAX_RESULTS
            params[PARAM_MAX_RESULTS] = str(count)
        return params

    def url(self) -> str:
        """Get request URL for this query without sending it."""
        return transport.buildUrl(REVERSE_GEOCODE, self.toParams())

    async def call(self, token: Token, *, timeout: float = DEFAULT_TIMEOUT) -> Response[SearchResult]:
        """Finalize the search parameters and return the results collection."""
        request = transport.get(REVERSE_GEOCODE, token, self.toParams())
        return await transport.requestWithJsonResponse(request, SearchResult.from_dict, timeout=timeout)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.toParams()!r})"


class SearchBuilder:
    """Location search query before it is sent, dood!

    Unlike reverse geocoding, search results may be re-ordered with regards
    to the authenticated user and may include "nearby" places, so it fits
    better for letting a user pick a location from the list.

    Example:
        >>> builder = searchQuery("Seattle").attribute("street_address", "123 Main")
        >>> result = await builder.granularity(PlaceType.CITY).call(token)
    """

    __slots__ = ("query", "_accuracy", "_granularity", "_maxResults", "_containedWithin", "_attributes")

    def __init__(
        self,
        query: PlaceQuery,
        *,
        accuracy: Optional[Accuracy] = None,
        granularity: Optional[PlaceType] = None,
        maxResults: Optional[int] = None,
        containedWithin: Optional[str] = None,
        attributes: Optional[Dict[str, str]] = None,
    ) -> None:
        self.query = query
        self._accuracy = accuracy
        self._granularity = granularity
        self._maxResults = int(maxResults) if maxResults is not None else None
        self._containedWithin = containedWithin
        self._attributes: Dict[str, str] = dict(attributes) if attributes else {}

    def _copyWith(self, **changes: Any) -> "SearchBuilder":
        kwargs: Dict[str, Any] = {
            "accuracy": self._accuracy,
            "granularity": self._granularity,
            "maxResults": self._maxResults,
            "containedWithin": self._containedWithin,
            "attributes": self._attributes,
        }
        kwargs.update(changes)
        return SearchBuilder(self.query, **kwargs)

    def accuracy(self, accuracy: Accuracy) -> "SearchBuilder":
        """Expand the area to search to the given radius. By default, this is zero."""
        return self._copyWith(accuracy=accuracy)

    def granularity(self, granularity: PlaceType) -> "SearchBuilder":
        """Set the minimal specificity of results."""
        return self._copyWith(granularity=granularity)

    def maxResults(self, maxResults: int) -> "SearchBuilder":
        """Hint how many "nearby" results to return.

        Endpoint default is 20 and maximum is 100, value is truncated to an
        integer and sent without clamping.
        """
        return self._copyWith(maxResults=maxResults)

    def containedWithin(self, placeId: str) -> "SearchBuilder":
        """Restrict results to those contained within the given place ID."""
        return self._copyWith(containedWithin=placeId)

    def attribute(self, key: str, value: str) -> "SearchBuilder":
        """Restrict results to those with the given attribute.

        May be called multiple times to combine attributes, later value
        for the same key wins. For example, ``.attribute("street_address", "123 Main St")``.
        """
        attributes = dict(self._attributes)
        attributes[key] = value
        return self._copyWith(attributes=attributes)

    def toParams(self) -> ParamList:
        """Assemble query parameters in emission order."""
        params = self.query.toParams()
        if self._accuracy is not None:
            params[PARAM_ACCURACY] = str(self._accuracy)
        if self._granularity is not None:
            params[PARAM_GRANULARITY] = str(self._granularity)
        if self._maxResults is not None:
            params[PARAM_MAX_RESULTS] = str(self._maxResults)
        if self._containedWithin is not None:
            params[PARAM_CONTAINED_WITHIN] = self._containedWithin
        for key, value in self._attributes.items():
            params[f"{PARAM_ATTRIBUTE_PREFIX}{key}"] = value
        return params

    def url(self) -> str:
        """Get request URL for this query without sending it."""
        return transport.buildUrl(SEARCH, self.toParams())

    async def call(self, token: Token, *, timeout: float = DEFAULT_TIMEOUT) -> Response[SearchResult]:
        """Finalize the search parameters and return the results collection."""
        request = transport.get(SEARCH, token, self.toParams())
        return await transport.requestWithJsonResponse(request, SearchResult.from_dict, timeout=timeout)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.toParams()!r})"
