from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class CallbackInfo:
    url: str | None = None
    prompt: str | None = None


@dataclass
class RouteRequest:
    """Mutable route state accumulated by a link builder.

    ``stops`` keeps whatever callers added, in visiting order; entries are
    only checked for a valid location shape when the request is encoded.
    ``None`` in any optional field means the receiving app picks its default.
    """

    stops: list[Any] = field(default_factory=list)
    start: Any | None = None
    travel_mode: str | None = None
    optimize: bool | None = None
    navigate: bool | None = None
    callback: CallbackInfo = field(default_factory=CallbackInfo)
