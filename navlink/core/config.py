from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library configuration loaded from environment variables."""

    debug: bool = Field(False, alias="NAVLINK_DEBUG")

    product: str = Field("arcgis-navigator", alias="NAVLINK_PRODUCT")
    payload_version: str = Field("1.0", alias="NAVLINK_PAYLOAD_VERSION")
    encoding: Literal["query", "json"] = Field("query", alias="NAVLINK_ENCODING")

    # Stands in for the host page location used as the return link
    callback_url: str | None = Field(None, alias="NAVLINK_CALLBACK_URL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @field_validator("encoding", mode="before")
    def _normalize_encoding(cls, value: str) -> str:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("callback_url", mode="before")
    def _blank_callback_is_unset(cls, value: str | None) -> str | None:
        if isinstance(value, str) and not value.strip():
            return None
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached library settings."""

    return Settings()  # type: ignore[call-arg]
