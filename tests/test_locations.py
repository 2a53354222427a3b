import pytest
from pydantic import ValidationError

from navlink.domain.location import (
    TRAVEL_MODES,
    Address,
    Coordinate,
    coerce_location,
    is_known_travel_mode,
)


def test_coerce_location_recognises_coordinates():
    location = coerce_location(
        {"name": "Depot", "latitude": 34.05, "longitude": -118.25}
    )

    assert isinstance(location, Coordinate)
    assert location.name == "Depot"
    assert location.latitude == 34.05
    assert location.longitude == -118.25


def test_coerce_location_recognises_addresses():
    location = coerce_location({"address": "380 New York St, Redlands, CA"})

    assert isinstance(location, Address)
    assert location.name is None


def test_coerce_location_passes_models_through():
    stop = Address(name="Home", address="1 Main St")

    assert coerce_location(stop) is stop


def test_empty_name_is_treated_as_missing():
    assert Address(name="", address="1 Main St").name is None


@pytest.mark.parametrize(
    "value",
    [
        {"name": "Nowhere"},
        {"latitude": 34.05},
        {"address": "1 Main St", "latitude": 34.05, "longitude": -118.25},
        "1 Main St",
    ],
)
def test_coerce_location_rejects_malformed_stops(value):
    with pytest.raises(ValidationError):
        coerce_location(value)


def test_travel_modes_are_enumerated():
    assert len(TRAVEL_MODES) == 8
    assert is_known_travel_mode("Rural Driving Distance")
    assert not is_known_travel_mode("Flying Time")


def test_unrelated_keys_are_ignored():
    location = coerce_location({"name": "Home", "address": "1 Main St", "score": 0.9})

    assert location == Address(name="Home", address="1 Main St")


def test_null_coordinates_do_not_conflict_with_address():
    location = coerce_location({"address": "1 Main St", "latitude": None})

    assert isinstance(location, Address)
