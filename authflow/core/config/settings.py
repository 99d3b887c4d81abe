"""Application settings.

Loaded from environment variables prefixed with ``AUTHFLOW_`` (and an optional
``.env`` file), e.g. ``AUTHFLOW_REDIRECT_URI=https://app.example.com/auth``.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from authflow.core.config.enums import LogLevel


class Settings(BaseSettings):
    """Runtime settings for the authorization-flow engine."""

    model_config = SettingsConfigDict(
        env_prefix="AUTHFLOW_",
        env_file=".env",
        extra="ignore",
    )

    REDIRECT_URI: Optional[str] = Field(
        default=None,
        description="Base callback URI; providers append '/<name>/' to it",
    )
    HTTP_TIMEOUT_SECONDS: float = Field(default=30.0, gt=0)
    VERIFY_TLS: bool = True
    LOG_LEVEL: LogLevel = LogLevel.INFO
    PROVIDERS_FILE: Optional[Path] = Field(
        default=None,
        description="JSON document with a list of provider configurations",
    )

    @field_validator("REDIRECT_URI")
    @classmethod
    def strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        """Store the redirect base without a trailing slash."""
        if v is None:
            return v
        return v.rstrip("/")
