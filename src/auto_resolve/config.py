"""Settings for the resolver.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

Every setting has a usable default, so `ResolverSettings()` works without any
environment at all.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_CALLBACK_NAMES: tuple[str, ...] = ("callback", "cb")


class ResolverSettings(BaseSettings):
    """Settings for `resolve()`.

    Environment variables:
    - LOG_LEVEL                    (optional)
    - AUTO_RESOLVE_CALLBACK_NAMES  (optional, comma-separated)
    - AUTO_RESOLVE_LOG_WAVES       (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `ResolverSettings(_env_file=path_to_env)`.
    """

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level used by `configure_logging`",
    )

    callback_names: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_CALLBACK_NAMES),
        validation_alias="AUTO_RESOLVE_CALLBACK_NAMES",
        description=(
            "Parameter names that mark a completion callback on inferred tasks. "
            "The last parameter of an injected callable, or the first parameter of a "
            "classic declaration's callable, is compared against these names."
        ),
    )

    log_waves: bool = Field(
        default=False,
        validation_alias="AUTO_RESOLVE_LOG_WAVES",
        description="Log per-wave progress at INFO instead of DEBUG",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("callback_names", mode="before")
    @classmethod
    def _split_callback_names(cls, value: object) -> object:
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value

    @field_validator("callback_names")
    @classmethod
    def _require_identifiers(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("callback_names must not be empty")
        bad = [name for name in value if not name.isidentifier()]
        if bad:
            raise ValueError(f"callback_names must be identifiers: {', '.join(bad)}")
        return value
