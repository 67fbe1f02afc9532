"""
Places JSON codec helpers

The platform sends bounding boxes as GeoJSON-like objects:

    {"type": "Polygon", "coordinates": [[[lon, lat], [lon, lat], ...]]}

``coordinates`` is a list of rings and only the first ring is read. When encoding,
the ring nesting is NOT emitted back, this matches the shape the platform
expects for outbound data:

    {"coordinates": [[a, b], ...], "type": "Polygon"}

Pair order is kept verbatim in both directions.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .exceptions import DecodeError

logger = logging.getLogger(__name__)

Coordinate = Tuple[float, float]
BoundingBox = Tuple[Coordinate, ...]

BOX_TYPE_POINT = "Point"
BOX_TYPE_POLYGON = "Polygon"


def _isNumber(value: Any) -> bool:
    # bool is subclass of int, but it isn't a coordinate
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def decodeCoordinate(value: Any) -> Coordinate:
    """Decode a single ``[a, b]`` pair into tuple of floats."""
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise DecodeError(f"Malformed 'bounding_box' attribute: expected pair of numbers, got {value!r}")
    first, second = value
    if not _isNumber(first) or not _isNumber(second):
        raise DecodeError(f"Malformed 'bounding_box' attribute: expected pair of numbers, got {value!r}")
    return (float(first), float(second))


def decodeBoundingBox(value: Any) -> BoundingBox:
    """Decode ``bounding_box`` field value, dood!

    Args:
        value: Raw JSON value of the field

    Returns:
        Tuple of coordinate pairs from the first ring, empty for null

    Raises:
        DecodeError: If ``coordinates`` or its first ring is missing or malformed
    """
    if value is None:
        return ()

    coordinates = value.get("coordinates") if isinstance(value, dict) else None
    if not isinstance(coordinates, list) or not coordinates:
        raise DecodeError("Malformed 'bounding_box' attribute")

    ring = coordinates[0]
    if not isinstance(ring, list):
        raise DecodeError(f"Malformed 'bounding_box' attribute: expected list of pairs, got {ring!r}")

    return tuple(decodeCoordinate(pair) for pair in ring)


def encodeBoundingBox(box: Sequence[Coordinate]) -> Optional[Dict[str, Any]]:
    """Encode bounding box back into wire form.

    Returns:
        None for empty box, otherwise dict with ``coordinates`` and ``type``
    """
    if not box:
        return None

    coordinates: List[List[float]] = [[first, second] for first, second in box]
    return {
        "coordinates": coordinates,
        "type": BOX_TYPE_POINT if len(coordinates) == 1 else BOX_TYPE_POLYGON,
    }
