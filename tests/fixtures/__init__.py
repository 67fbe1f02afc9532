"""
Test fixtures package for places client tests.

- places_payloads: JSON payloads of the places endpoints
"""

from tests.fixtures.places_payloads import (
    REVERSE_GEOCODE_URL,
    SEARCH_URL,
    placePayload,
    searchPayload,
)

__all__ = [
    "REVERSE_GEOCODE_URL",
    "SEARCH_URL",
    "placePayload",
    "searchPayload",
]
