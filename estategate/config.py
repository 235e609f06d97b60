"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./estategate.db",
        description="Database connection URL used by SQLAlchemy",
        min_length=1,
    )
    secret_key: str = Field(
        default="change-me",
        description="Secret key for signing JWT tokens",
        min_length=1,
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending transactional emails via the REST API",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of transactional messages",
        min_length=3,
    )
    app_timezone: str = Field(
        default="Africa/Lagos",
        description="IANA timezone (or UTC offset) used for stored timestamps",
    )
    invitation_validity_hours: int = Field(
        default=24,
        description="Hours an invitation code stays redeemable after creation",
        gt=0,
    )
    otp_length: int = Field(
        default=6, description="Number of characters in an invitation code", ge=4, le=12
    )
    otp_alphabet: str = Field(
        default="0123456789",
        description="Characters invitation codes are drawn from",
        min_length=2,
    )
    auto_approve_invitations: bool = Field(
        default=True,
        description="Approve new invitations immediately instead of waiting for an admin",
    )
    notification_poll_interval_seconds: float = Field(
        default=30.0,
        description="Interval between notification refreshes pushed over websockets",
        gt=0,
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"],
        description="Origins allowed to call the API from a browser",
    )
    log_level: str = Field(default="INFO", description="Root logging level")

    @field_validator("otp_alphabet")
    @classmethod
    def _normalize_otp_alphabet(cls, value: str) -> str:
        # Submitted codes are upper-cased and stripped of separators before lookup.
        if any(char.isspace() or char == "-" for char in value):
            raise ValueError("OTP_ALPHABET must not contain whitespace or dashes")
        value = value.upper()
        if len(set(value)) < 2:
            raise ValueError("OTP_ALPHABET needs at least two distinct characters")
        return value

    @model_validator(mode="after")
    def _validate_sendgrid_pair(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
