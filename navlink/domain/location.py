from __future__ import annotations

from typing import Any, Literal, Union, get_args

from pydantic import (
    BaseModel,
    ConfigDict,
    TypeAdapter,
    field_validator,
    model_validator,
)


TravelMode = Literal[
    "Driving Time",
    "Driving Distance",
    "Trucking Time",
    "Trucking Distance",
    "Walking Time",
    "Walking Distance",
    "Rural Driving Time",
    "Rural Driving Distance",
]

TRAVEL_MODES: tuple[str, ...] = get_args(TravelMode)


class _LocationBase(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str | None = None

    @field_validator("name", mode="before")
    def _empty_name_is_unset(cls, value: Any) -> Any:
        if value == "":
            return None
        return value


def _has_any(data: Any, keys: tuple[str, ...]) -> bool:
    return isinstance(data, dict) and any(data.get(key) is not None for key in keys)


class Coordinate(_LocationBase):
    """WGS84 position in decimal degrees."""

    latitude: float
    longitude: float

    @model_validator(mode="before")
    def _reject_address(cls, data: Any) -> Any:
        if _has_any(data, ("address",)):
            raise ValueError("A stop cannot carry both an address and coordinates")
        return data


class Address(_LocationBase):
    """Free-text address geocoded by the receiving app."""

    address: str

    @model_validator(mode="before")
    def _reject_coordinates(cls, data: Any) -> Any:
        if _has_any(data, ("latitude", "longitude")):
            raise ValueError("A stop cannot carry both an address and coordinates")
        return data


Location = Union[Coordinate, Address]

_LOCATION_ADAPTER: TypeAdapter[Location] = TypeAdapter(Location)


def coerce_location(value: Location | dict[str, Any]) -> Location:
    """Return ``value`` as a ``Coordinate`` or ``Address``.

    Mappings are matched by shape: ``latitude``/``longitude`` make a
    coordinate, ``address`` makes an address, and unrelated keys are ignored.
    Anything else, including a mapping carrying both shapes, raises
    ``pydantic.ValidationError``.
    """

    if isinstance(value, (Coordinate, Address)):
        return value
    return _LOCATION_ADAPTER.validate_python(value)


def is_known_travel_mode(value: str) -> bool:
    return value in TRAVEL_MODES
