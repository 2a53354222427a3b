from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from navlink.domain.location import Location


class CallbackPayload(BaseModel):
    url: str | None = None
    prompt: str | None = None


class RoutePayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    version: str
    stops: list[Location] = Field(..., min_length=1)
    callback: CallbackPayload = Field(default_factory=CallbackPayload)
    travelmode: str | None = None
    optimize: bool | None = Field(default=None, strict=True)
    navigate: bool | None = Field(default=None, strict=True)
    start: Location | None = None
