"""Runtime configuration loaded from environment variables and .env files."""

from __future__ import annotations

from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENV_FILE = Path(__file__).resolve().parent.parent / ".env"

DEFAULT_TIMEZONE = "Asia/Shanghai"


class RuntimeSettings(BaseSettings):
    """Runtime configuration resolved from the process environment."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        extra="ignore",
        populate_by_name=True,
    )

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    timezone: str = Field(default=DEFAULT_TIMEZONE, alias="LINGGUI_TIMEZONE")
    tick_seconds: float = Field(default=1.0, gt=0.0, alias="LINGGUI_TICK_SECONDS")
    api_host: str = Field(default="127.0.0.1", alias="LINGGUI_API_HOST")
    api_port: int = Field(default=8000, ge=1, le=65535, alias="LINGGUI_API_PORT")

    @field_validator("timezone", mode="before")
    @classmethod
    def _validate_timezone(cls, value: str | None) -> str:
        if value is None or str(value).strip() == "":
            return DEFAULT_TIMEZONE
        name = str(value).strip()
        try:
            ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown IANA timezone: {name!r}") from exc
        return name

    @property
    def tzinfo(self) -> ZoneInfo:
        """Return the configured wall-clock timezone."""

        return ZoneInfo(self.timezone)


runtime_settings = RuntimeSettings()

__all__ = [
    "DEFAULT_TIMEZONE",
    "RuntimeSettings",
    "runtime_settings",
]
