from __future__ import annotations

import json
from decimal import Decimal
from typing import Any, Protocol
from urllib.parse import parse_qs, quote, urlsplit

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from navlink.core.config import Settings, get_settings
from navlink.core.logging import get_logger
from navlink.domain.location import Address, Location, coerce_location
from navlink.domain.route import RouteRequest
from navlink.schemas.payload import CallbackPayload, RoutePayload


_logger = get_logger(__name__)

# RFC 2396 unreserved marks; everything else outside alphanumerics is escaped
_URI_COMPONENT_SAFE = "-_.!~*'()"


class EncodingError(ValueError):
    """Raised when a route request cannot be turned into a link body."""


class RouteEncoder(Protocol):
    name: str

    def encode(self, request: RouteRequest) -> str:
        """Return the link body that follows the scheme separator."""
        ...


def percent_encode(value: str) -> str:
    return quote(str(value), safe=_URI_COMPONENT_SAFE)


def format_number(value: float) -> str:
    """Render a number in plain decimal form, ``34.0`` as ``34``, never exponent."""

    if isinstance(value, bool):
        raise EncodingError(f"Expected a number, got {value!r}")
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return format(Decimal(repr(number)), "f")


def _format_flag(key: str, value: Any) -> str:
    if not isinstance(value, bool):
        raise EncodingError(f"Option {key} must be a boolean, got {value!r}")
    return "true" if value else "false"


def _location(value: Any) -> Location:
    try:
        return coerce_location(value)
    except ValidationError as exc:
        raise EncodingError(f"Malformed location: {value!r}") from exc


class QueryStringEncoder:
    """Flat ``key=value`` parameters, one pair per field."""

    name = "query"

    def encode(self, request: RouteRequest) -> str:
        params = ""
        for stop in request.stops:
            params += self._location_param("stop", stop)

        if request.start is not None:
            params += self._location_param("start", request.start)

        if request.travel_mode is not None:
            params += "&travelmode=" + percent_encode(request.travel_mode)
        if request.optimize is not None:
            params += "&optimize=" + _format_flag("optimize", request.optimize)
        if request.navigate is not None:
            params += "&navigate=" + _format_flag("navigate", request.navigate)

        if request.callback.url is not None:
            params += "&callback=" + percent_encode(request.callback.url)
        if request.callback.prompt is not None:
            params += "&callbackprompt=" + percent_encode(request.callback.prompt)

        return params.replace("&", "?", 1)

    def _location_param(self, tag: str, value: Any) -> str:
        location = _location(value)
        if isinstance(location, Address):
            param = f"&{tag}={percent_encode(location.address)}"
        else:
            latitude = format_number(location.latitude)
            longitude = format_number(location.longitude)
            param = f"&{tag}={latitude},{longitude}"
        if location.name:
            param += f"&{tag}name={percent_encode(location.name)}"
        return param


class JSONPayloadEncoder:
    """Whole request as one JSON document in a ``payload`` parameter."""

    name = "json"

    def __init__(self, version: str | None = None) -> None:
        self.version = version or get_settings().payload_version

    def encode(self, request: RouteRequest) -> str:
        stops = [_location(stop) for stop in request.stops]
        start = _location(request.start) if request.start is not None else None

        try:
            payload = RoutePayload(
                version=self.version,
                stops=stops,
                callback=CallbackPayload(
                    url=request.callback.url,
                    prompt=request.callback.prompt,
                ),
                travelmode=request.travel_mode,
                optimize=request.optimize,
                navigate=request.navigate,
                start=start,
            )
            document = payload.model_dump_json(exclude_none=True)
        except (ValidationError, PydanticSerializationError) as exc:
            raise EncodingError(str(exc)) from exc

        return "?payload=" + percent_encode(document)


def decode_payload(url: str) -> dict[str, Any]:
    """Return the JSON document carried by a payload-style link."""

    query = parse_qs(urlsplit(url).query, keep_blank_values=True)
    values = query.get("payload")
    if not values:
        raise ValueError("Link has no payload parameter")
    return json.loads(values[0])


_ENCODERS = {
    QueryStringEncoder.name: QueryStringEncoder,
    JSONPayloadEncoder.name: JSONPayloadEncoder,
}


def get_encoder(name: str, settings: Settings | None = None) -> RouteEncoder:
    key = name.strip().lower()
    if key not in _ENCODERS:
        raise ValueError(
            f"Unknown encoding {name!r}; expected one of {sorted(_ENCODERS)}"
        )
    _logger.debug("Encoder selected", encoding=key)
    if key == JSONPayloadEncoder.name:
        settings = settings or get_settings()
        return JSONPayloadEncoder(version=settings.payload_version)
    return QueryStringEncoder()
