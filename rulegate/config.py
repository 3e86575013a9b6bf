"""
Configuration using Pydantic Settings.
"""

from typing import Literal
from functools import lru_cache
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def check_denial_template(template: str) -> str:
    """Reject denial message templates that need anything but {rule}."""
    try:
        template.format(rule="rule")
    except (KeyError, IndexError, AttributeError, ValueError) as e:
        raise ValueError(f"Invalid denial message template {template!r}: {e!r}") from e
    return template


class AuthorizationSettings(BaseSettings):
    """Authorization manager configuration."""

    model_config = SettingsConfigDict(env_prefix="AUTHZ_")

    evaluation_mode: Literal["sequential", "concurrent"] = Field(
        default="sequential",
        description="sequential: await rules one by one, concurrent: gather them",
    )
    default_denial_message: str = Field(
        default="Authorization rule '{rule}' failed.",
        description="Reason used when a failing rule gives no message. {rule} is the rule name.",
    )

    @field_validator("default_denial_message")
    @classmethod
    def validate_default_denial_message(cls, v: str) -> str:
        return check_denial_template(v)


class PasswordSettings(BaseSettings):
    """Password generator configuration."""

    model_config = SettingsConfigDict(env_prefix="PASSWORD_")

    default_length: int = Field(default=12, ge=1)
    min_length: int = Field(default=6, ge=1)
    max_length: int = Field(default=99, ge=1)

    @model_validator(mode="after")
    def validate_bounds(self) -> "PasswordSettings":
        if self.min_length > self.max_length:
            raise ValueError("min_length must not exceed max_length")
        if not self.min_length <= self.default_length <= self.max_length:
            raise ValueError("default_length must be between min_length and max_length")
        return self


class Settings(BaseSettings):
    """Main settings."""

    model_config = SettingsConfigDict(
        env_prefix="RULEGATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = Field(default="development")

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json", description="json or text")

    # Nested settings
    authorization: AuthorizationSettings = Field(default_factory=AuthorizationSettings)
    passwords: PasswordSettings = Field(default_factory=PasswordSettings)

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        allowed = {"development", "staging", "production", "testing"}
        if v not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
