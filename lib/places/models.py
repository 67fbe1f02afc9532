"""
Places API Data Models

This module defines immutable value types for the places endpoints:
Place, PlaceType, Accuracy and SearchResult together with their
conversions from/to the platform's JSON representation.
"""

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from lib import utils

from .codec import BoundingBox, decodeBoundingBox, encodeBoundingBox
from .exceptions import DecodeError

logger = logging.getLogger(__name__)


class PlaceType(StrEnum):
    """
    Type of region represented by a place.

    Member value is the wire tag, it is used for JSON and for query parameters.
    """

    POINT_OF_INTEREST = "poi"
    """A coordinate with no area."""
    NEIGHBORHOOD = "neighborhood"
    """A region within a city."""
    CITY = "city"
    """An entire city."""
    ADMIN = "admin"
    """An administrative area, e.g. state or province."""
    COUNTRY = "country"
    """An entire country."""

    @classmethod
    def fromWire(cls, value: Any) -> "PlaceType":
        """Decode wire tag into PlaceType.

        Raises:
            DecodeError: If value isn't one of known tags
        """
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
        raise DecodeError(f"Unknown place type: {value!r}, expected one of {[str(v) for v in cls]}")


class AccuracyUnit(StrEnum):
    """Unit of Accuracy distance, value is the parameter suffix."""

    METERS = ""
    FEET = "ft"


@dataclass(frozen=True, slots=True)
class Accuracy:
    """
    Accuracy of a GPS measurement given to a location search.

    Use ``Accuracy.meters(x)`` or ``Accuracy.feet(x)`` to construct.
    ``str()`` gives the parameter form: bare decimal for meters, decimal
    suffixed with ``ft`` for feet.
    """

    unit: AccuracyUnit
    """Unit of the distance"""
    distance: float
    """Distance in given units"""

    @classmethod
    def meters(cls, distance: float) -> "Accuracy":
        return cls(unit=AccuracyUnit.METERS, distance=float(distance))

    @classmethod
    def feet(cls, distance: float) -> "Accuracy":
        return cls(unit=AccuracyUnit.FEET, distance=float(distance))

    @classmethod
    def fromString(cls, value: str) -> "Accuracy":
        """Parse parameter form (``"10"``, ``"10.5ft"``) back into Accuracy.

        Raises:
            ValueError: If value isn't a number optionally suffixed with ``ft``
        """
        value = value.strip()
        if value.endswith(AccuracyUnit.FEET.value):
            return cls.feet(float(value[: -len(AccuracyUnit.FEET.value)]))
        return cls.meters(float(value))

    def __str__(self) -> str:
        return f"{utils.formatDecimal(self.distance)}{self.unit.value}"


def _requireStr(data: Dict[str, Any], key: str) -> str:
    if key not in data:
        raise DecodeError(f"Missing field '{key}' in place")
    value = data[key]
    if not isinstance(value, str):
        raise DecodeError(f"Field '{key}' of place must be a string, got {value!r}")
    return value


@dataclass(frozen=True, slots=True)
class Place:
    """
    Named geographic region.

    See https://developer.twitter.com/en/docs/tweets/data-dictionary/overview/geo-objects#place
    """

    id: str
    """Alphanumeric ID of the location"""
    attributes: Mapping[str, str] = field(hash=False)
    """Miscellaneous information about this place (street_address, phone, ...), read-only"""
    bounding_box: BoundingBox
    """Coordinates enclosing this place: empty - unknown, single pair - point, otherwise polygon"""
    country: str
    """Name of the country containing this place"""
    country_code: str
    """Shortened country code"""
    full_name: str
    """Full human-readable name"""
    name: str
    """Short human-readable name"""
    place_type: PlaceType
    """Type of location represented by this place"""
    contained_within: Optional[Tuple["Place", ...]] = None
    """If present, the country or administrative region that contains this place"""

    def __post_init__(self) -> None:
        # Frozen dataclass, so fields are replaced through object.__setattr__
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))
        if self.contained_within is not None:
            object.__setattr__(self, "contained_within", tuple(self.contained_within))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Place":
        """Create Place instance from API response dictionary.

        Raises:
            DecodeError: If some field is missing or has unexpected type
        """
        if not isinstance(data, dict):
            raise DecodeError(f"Place must be an object, got {type(data).__name__}")

        attributes = data.get("attributes")
        if not isinstance(attributes, dict) or not all(isinstance(v, str) for v in attributes.values()):
            raise DecodeError(f"Field 'attributes' of place must be a string map, got {attributes!r}")

        if "bounding_box" not in data:
            raise DecodeError("Missing field 'bounding_box' in place")

        containedWithin: Optional[Tuple[Place, ...]] = None
        rawContainedWithin = data.get("contained_within")
        if rawContainedWithin is not None:
            if not isinstance(rawContainedWithin, list):
                raise DecodeError(f"Field 'contained_within' of place must be a list, got {rawContainedWithin!r}")
            containedWithin = tuple(cls.from_dict(item) for item in rawContainedWithin)

        return cls(
            id=_requireStr(data, "id"),
            attributes=dict(attributes),
            bounding_box=decodeBoundingBox(data["bounding_box"]),
            country=_requireStr(data, "country"),
            country_code=_requireStr(data, "country_code"),
            full_name=_requireStr(data, "full_name"),
            name=_requireStr(data, "name"),
            place_type=PlaceType.fromWire(data.get("place_type")),
            contained_within=containedWithin,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert place into its wire dictionary representation."""
        return {
            "id": self.id,
            "attributes": dict(self.attributes),
            "bounding_box": encodeBoundingBox(self.bounding_box),
            "country": self.country,
            "country_code": self.country_code,
            "full_name": self.full_name,
            "name": self.name,
            "place_type": str(self.place_type),
            "contained_within": (
                [place.to_dict() for place in self.contained_within] if self.contained_within is not None else None
            ),
        }


@dataclass(frozen=True, slots=True)
class SearchResult:
    """
    Result of a location search, either via reverse geocode or search.
    """

    url: str
    """Full URL used to pull the result list, as JSON string (quote marks included).
    Can be fed to replay functions to repeat the same search."""
    results: Tuple[Place, ...]
    """Places found"""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SearchResult":
        """Create SearchResult from ``{"query": {"url": ...}, "result": {"places": [...]}}``.

        Raises:
            DecodeError: "Malformed search result" if any of the paths is missing or invalid
        """
        query = data.get("query") if isinstance(data, dict) else None
        if not isinstance(query, dict) or "url" not in query:
            raise DecodeError("Malformed search result")
        # Raw JSON form of the value is kept on purpose, existing callers expect the quotes
        url = utils.jsonDumps(query["url"])

        result = data.get("result")
        places = result.get("places") if isinstance(result, dict) else None
        if not isinstance(places, list):
            raise DecodeError("Malformed search result")

        try:
            results = tuple(Place.from_dict(place) for place in places)
        except DecodeError as e:
            logger.debug(f"Failed to decode place in search result: {e}")
            raise DecodeError("Malformed search result") from e

        return cls(url=url, results=results)
