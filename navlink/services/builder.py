from __future__ import annotations

from typing import Any, Literal, Mapping

from navlink.core.config import Settings, get_settings
from navlink.core.logging import get_logger
from navlink.domain.location import Location, is_known_travel_mode
from navlink.domain.route import CallbackInfo, RouteRequest
from navlink.services.encoding import EncodingError, RouteEncoder, get_encoder


_logger = get_logger(__name__)

BuildStatus = Literal["", "OK", "No stops defined", "Unable to build payload"]

STATUS_OK: BuildStatus = "OK"
STATUS_NO_STOPS: BuildStatus = "No stops defined"
STATUS_PAYLOAD_FAILED: BuildStatus = "Unable to build payload"

_SEPARATOR = "://"

_OPTION_KEYS = {
    "travel_mode": "travel_mode",
    "travelmode": "travel_mode",
    "travelMode": "travel_mode",
    "optimize": "optimize",
    "navigate": "navigate",
}


class RouteLinkBuilder:
    """Accumulates a route and renders it as a navigator deep link.

    Failures never raise out of :meth:`build`; it returns ``None`` and the
    reason is available from :attr:`last_status`.
    """

    def __init__(
        self,
        *,
        callback_url: str | None = None,
        callback_prompt: str | None = None,
        encoder: RouteEncoder | str | None = None,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or get_settings()
        self.product = settings.product

        if encoder is None:
            encoder = settings.encoding
        if isinstance(encoder, str):
            encoder = get_encoder(encoder, settings)
        self.encoder = encoder

        self._request = RouteRequest(
            callback=CallbackInfo(
                url=callback_url if callback_url is not None else settings.callback_url
            )
        )
        self._last_status: BuildStatus = ""

        if callback_prompt:
            self.set_callback_prompt(callback_prompt)

    @property
    def request(self) -> RouteRequest:
        return self._request

    @property
    def last_status(self) -> BuildStatus:
        return self._last_status

    def get_last_status(self) -> BuildStatus:
        return self._last_status

    def set_callback_prompt(self, prompt: str | None) -> None:
        self._request.callback.prompt = prompt

    def set_callback_url(self, url: str | None) -> None:
        self._request.callback.url = url

    def set_start(self, location: Location | Mapping[str, Any] | None) -> None:
        """Set the route start; ``None`` starts from the device position."""

        self._request.start = location

    def add_stop(self, location: Location | Mapping[str, Any]) -> None:
        self._request.stops.append(location)

    def clear_stops(self) -> None:
        self._request.stops = []

    def set_options(
        self, options: Mapping[str, Any] | None = None, **overrides: Any
    ) -> None:
        """Merge routing options into the request.

        Only keys that are present are applied, so a later call never undoes
        an earlier one by omission. A key given as ``None`` restores the app
        default for that option. Accepted keys are ``travel_mode`` (also
        ``travelmode`` and ``travelMode``), ``optimize`` and ``navigate``.
        """

        merged = {**(options or {}), **overrides}
        for key, value in merged.items():
            attribute = _OPTION_KEYS.get(key)
            if attribute is None:
                _logger.debug("Route option ignored", option=key)
                continue
            if (
                attribute == "travel_mode"
                and isinstance(value, str)
                and not is_known_travel_mode(value)
            ):
                _logger.warning("Unknown travel mode", travel_mode=value)
            setattr(self._request, attribute, value)

    def build(self) -> str | None:
        """Return the deep link for the current route, or ``None``."""

        self._last_status = ""

        if not self._request.stops:
            self._last_status = STATUS_NO_STOPS
            return None

        try:
            body = self.encoder.encode(self._request)
        except (EncodingError, TypeError, ValueError) as exc:
            _logger.warning(
                "Route payload construction failed",
                encoding=self.encoder.name,
                error=str(exc),
            )
            self._last_status = STATUS_PAYLOAD_FAILED
            return None

        self._last_status = STATUS_OK
        _logger.debug(
            "Route link built",
            encoding=self.encoder.name,
            stops=len(self._request.stops),
        )
        return self.product + _SEPARATOR + body
