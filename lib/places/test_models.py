"""
Unit tests for Places API Models

Tests PlaceType wire tags, Accuracy formatting and parsing, Place and
SearchResult decoding from the platform JSON and their error paths.
"""

import dataclasses

import pytest

from lib.places.exceptions import DecodeError
from lib.places.models import Accuracy, AccuracyUnit, Place, PlaceType, SearchResult
from tests.fixtures import SEARCH_URL, placePayload, searchPayload


class TestPlaceType:
    """Test suite for PlaceType enum."""

    @pytest.mark.parametrize(
        "placeType, tag",
        [
            (PlaceType.POINT_OF_INTEREST, "poi"),
            (PlaceType.NEIGHBORHOOD, "neighborhood"),
            (PlaceType.CITY, "city"),
            (PlaceType.ADMIN, "admin"),
            (PlaceType.COUNTRY, "country"),
        ],
    )
    def test_wire_tag(self, placeType, tag):
        """Test str() of place type is its wire tag, dood!"""
        assert str(placeType) == tag
        assert f"{placeType}" == tag
        assert PlaceType.fromWire(tag) is placeType

    def test_unknown_tag(self):
        """Test unknown tag gives decode error naming the value."""
        with pytest.raises(DecodeError, match="'town'"):
            PlaceType.fromWire("town")

    def test_tag_is_case_sensitive(self):
        with pytest.raises(DecodeError):
            PlaceType.fromWire("City")

    def test_non_string_tag(self):
        with pytest.raises(DecodeError):
            PlaceType.fromWire(None)
        with pytest.raises(DecodeError):
            PlaceType.fromWire(1)


class TestAccuracy:
    """Test suite for Accuracy value type."""

    def test_meters(self):
        """Test meters are formatted without suffix, dood!"""
        accuracy = Accuracy.meters(10)
        assert accuracy.unit == AccuracyUnit.METERS
        assert accuracy.distance == 10.0
        assert str(accuracy) == "10"

    def test_feet(self):
        assert str(Accuracy.feet(50)) == "50ft"
        assert str(Accuracy.feet(12.5)) == "12.5ft"

    def test_fractional_meters(self):
        assert str(Accuracy.meters(0.25)) == "0.25"

    @pytest.mark.parametrize("text", ["10", "10.5", "0", "50ft", "12.5ft"])
    def test_format_matches_parameter_grammar(self, text):
        """Test parsed value is formatted back to the same text."""
        assert str(Accuracy.fromString(text)) == text

    def test_from_string(self):
        assert Accuracy.fromString("20ft") == Accuracy.feet(20)
        assert Accuracy.fromString(" 7 ") == Accuracy.meters(7)

    @pytest.mark.parametrize("text", ["", "ft", "ten", "10m", "10 feet"])
    def test_from_string_invalid(self, text):
        with pytest.raises(ValueError):
            Accuracy.fromString(text)

    def test_equality_and_immutability(self):
        assert Accuracy.meters(5) == Accuracy.meters(5.0)
        assert Accuracy.meters(5) != Accuracy.feet(5)
        with pytest.raises(dataclasses.FrozenInstanceError):
            Accuracy.meters(5).distance = 6  # type: ignore[misc]


class TestPlace:
    """Test suite for Place decoding and encoding."""

    def test_from_dict(self):
        """Test full place decoding with nested contained_within, dood!"""
        place = Place.from_dict(placePayload("city"))

        assert place.id == "5a110d312052166f"
        assert place.name == "San Francisco"
        assert place.full_name == "San Francisco, CA"
        assert place.country == "United States"
        assert place.country_code == "US"
        assert place.place_type == PlaceType.CITY
        assert place.attributes == {"162772:place_id": "1"}
        assert len(place.bounding_box) == 4
        assert place.bounding_box[0] == (-122.514926, 37.708075)

        assert place.contained_within is not None
        assert len(place.contained_within) == 1
        country = place.contained_within[0]
        assert country.place_type == PlaceType.COUNTRY
        assert country.contained_within == ()

    def test_point_of_interest(self):
        place = Place.from_dict(placePayload("poi"))

        assert place.place_type == PlaceType.POINT_OF_INTEREST
        assert place.bounding_box == ((-122.401, 37.782),)
        assert place.contained_within is None
        assert place.attributes["street_address"] == "66 Mint St"

    def test_missing_contained_within(self):
        data = placePayload("neighborhood")
        del data["contained_within"]

        place = Place.from_dict(data)

        assert place.contained_within is None

    def test_null_bounding_box(self):
        data = placePayload("country")
        data["bounding_box"] = None

        place = Place.from_dict(data)

        assert place.bounding_box == ()

    def test_unknown_fields_are_ignored(self):
        data = placePayload("country")
        data["centroid"] = [1.0, 2.0]

        assert Place.from_dict(data).id == "96683cc9126741d1"

    @pytest.mark.parametrize(
        "field",
        ["id", "attributes", "bounding_box", "country", "country_code", "full_name", "name", "place_type"],
    )
    def test_missing_required_field(self, field):
        """Test every required field is checked, dood!"""
        data = placePayload("country")
        del data[field]

        with pytest.raises(DecodeError):
            Place.from_dict(data)

    def test_wrong_field_type(self):
        data = placePayload("country")
        data["name"] = 42

        with pytest.raises(DecodeError, match="name"):
            Place.from_dict(data)

    def test_non_string_attribute_value(self):
        data = placePayload("country")
        data["attributes"] = {"phone": 123}

        with pytest.raises(DecodeError, match="attributes"):
            Place.from_dict(data)

    def test_unknown_place_type(self):
        data = placePayload("country")
        data["place_type"] = "continent"

        with pytest.raises(DecodeError, match="continent"):
            Place.from_dict(data)

    def test_invalid_nested_place(self):
        data = placePayload("city")
        del data["contained_within"][0]["name"]

        with pytest.raises(DecodeError):
            Place.from_dict(data)

    def test_not_an_object(self):
        with pytest.raises(DecodeError):
            Place.from_dict(["not", "a", "place"])  # type: ignore[arg-type]

    def test_to_dict(self):
        place = Place.from_dict(placePayload("poi"))

        data = place.to_dict()

        assert data["id"] == "07d9db48bc083000"
        assert data["place_type"] == "poi"
        assert data["bounding_box"] == {"coordinates": [[-122.401, 37.782]], "type": "Point"}
        assert data["contained_within"] is None
        assert data["attributes"] == {"street_address": "66 Mint St", "phone": "+1 510 653 3394"}

    def test_to_dict_nested(self):
        data = Place.from_dict(placePayload("neighborhood")).to_dict()

        parent = data["contained_within"][0]
        assert parent["name"] == "San Francisco"
        assert parent["bounding_box"]["type"] == "Polygon"
        assert parent["contained_within"][0]["place_type"] == "country"

    def test_to_dict_empty_box(self):
        data = placePayload("country")
        data["bounding_box"] = None

        assert Place.from_dict(data).to_dict()["bounding_box"] is None

    def test_attributes_are_read_only(self):
        """Test decoded attributes can't be changed in place, dood!"""
        place = Place.from_dict(placePayload("poi"))

        with pytest.raises(TypeError):
            place.attributes["street_address"] = "changed"  # type: ignore[index]

        assert place.attributes["street_address"] == "66 Mint St"

    def test_attributes_copied_on_construction(self):
        attributes = {"phone": "1"}
        place = dataclasses.replace(Place.from_dict(placePayload("country")), attributes=attributes)
        attributes["phone"] = "2"

        assert place.attributes == {"phone": "1"}

    def test_hashable(self):
        first = Place.from_dict(placePayload("city"))
        second = Place.from_dict(placePayload("city"))

        assert first == second
        assert hash(first) == hash(second)
        assert len({first, second}) == 1

    def test_attributes_take_part_in_equality(self):
        data = placePayload("country")
        data["attributes"] = {"phone": "1"}

        assert Place.from_dict(data) != Place.from_dict(placePayload("country"))


class TestSearchResult:
    """Test suite for SearchResult envelope decoding."""

    def test_from_dict(self):
        """Test url keeps JSON quote marks and places are decoded in order, dood!"""
        result = SearchResult.from_dict(searchPayload())

        assert result.url == f'"{SEARCH_URL}"'
        assert [place.name for place in result.results] == ["SoMa", "San Francisco"]
        assert result.results[0].place_type == PlaceType.NEIGHBORHOOD

    def test_empty_places(self):
        data = {"query": {"url": "https://api.twitter.com/1.1/geo/search.json?query=x"}, "result": {"places": []}}

        result = SearchResult.from_dict(data)

        assert result.url == '"https://api.twitter.com/1.1/geo/search.json?query=x"'
        assert result.results == ()

    def test_url_escaping(self):
        data = searchPayload(url='https://example.com/?q="quoted"', places=[])

        result = SearchResult.from_dict(data)

        assert result.url == '"https://example.com/?q=\\"quoted\\""'

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"result": {"places": []}},
            {"query": {}, "result": {"places": []}},
            {"query": "url", "result": {"places": []}},
            {"query": {"url": "x"}},
            {"query": {"url": "x"}, "result": {}},
            {"query": {"url": "x"}, "result": {"places": {}}},
            {"query": {"url": "x"}, "result": []},
            [],
        ],
    )
    def test_malformed_envelope(self, data):
        with pytest.raises(DecodeError, match="Malformed search result"):
            SearchResult.from_dict(data)

    def test_malformed_place(self):
        """Test place decoding failure is reported as malformed result with cause."""
        broken = placePayload("poi")
        broken["place_type"] = "galaxy"
        data = searchPayload(places=[placePayload("country"), broken])

        with pytest.raises(DecodeError, match="Malformed search result") as excInfo:
            SearchResult.from_dict(data)

        assert isinstance(excInfo.value.__cause__, DecodeError)
        assert "galaxy" in str(excInfo.value.__cause__)

    def test_hashable(self):
        result = SearchResult.from_dict(searchPayload())

        assert hash(result) == hash(SearchResult.from_dict(searchPayload()))
