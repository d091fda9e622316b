from pathlib import Path
from typing import Any, Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from lexicard.domain.constants import DEFAULT_SESSION_SIZE, DEFAULT_TIMEZONE


class AppConfig(BaseSettings):
    """
    Configuration model for lexicard.
    Supports loading from:
    1. Manual overrides (host application)
    2. Environment variables (LEXICARD_*)
    3. Config file (~/.config/lexicard/config.toml or ~/.lexicard.toml)
    """

    model_config = SettingsConfigDict(
        env_prefix="LEXICARD_",
        extra="ignore",
    )

    # Storage
    backend: Literal["json", "memory"] = "json"
    data_file: Path = Field(
        default_factory=lambda: Path.home() / ".local/share/lexicard/state.json"
    )

    # Scheduling
    session_size: int = Field(default=DEFAULT_SESSION_SIZE, ge=1)
    timezone: str = DEFAULT_TIMEZONE

    # Logging
    verbose: int = 1

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        toml_files = [
            Path.home() / ".config/lexicard/config.toml",
            Path.home() / ".lexicard.toml",
        ]
        toml_file = next((f for f in toml_files if f.exists()), None)

        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (init_settings, env_settings)

    @field_validator("data_file", mode="before")
    @classmethod
    def resolve_data_file(cls, v: Any) -> Path:
        return Path(v).expanduser().resolve()

    @field_validator("timezone")
    @classmethod
    def check_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown time zone: {v}") from e
        return v


def resolve_config(overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/lexicard/config.toml (if exists)
    3. Environment variables (LEXICARD_*)
    4. overrides passed by the host; None values are ignored
    """
    clean = {k: v for k, v in (overrides or {}).items() if v is not None}
    return AppConfig(**clean)
